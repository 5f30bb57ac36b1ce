import aniso8601
from werkzeug.utils import cached_property

from osf_client.exceptions import DeserializationError
from osf_client.reference import ResourceReference, ResourceBound
from osf_client.schema import Schema, _RELATIONSHIP

#: Relationship resolution strategies
REFERENCE = 'reference'
OBJECT = 'object'

#: Relationship cardinalities
ONE = 'one'
MANY = 'many'


class Raw(Schema):
    """
    Base class of all fields. A field validates one member of a resource object against its JSON-schema and converts
    it into a Python value.

    >>> fields.Raw({"type": "integer"}, nullable=True).response
    {'type': ['integer', 'null']}

    :param schema: JSON-schema of the member, or a callable returning it
    :param bool nullable: whether ``null`` is a valid value
    """

    def __init__(self, schema, nullable=False):
        self._schema = schema
        self.nullable = nullable

    def _finalize_schema(self, schema):
        schema = dict(schema)

        if "null" in schema.get("type", []):
            self.nullable = True
        elif self.nullable:
            # enum is checked independently of type
            if "enum" in schema and None not in schema["enum"]:
                schema["enum"] = list(schema["enum"]) + [None]

            if "type" in schema:
                type_ = schema["type"]
                schema["type"] = [type_, "null"] if isinstance(type_, str) else list(type_) + ["null"]
            elif "anyOf" in schema:
                if not any("null" in choice.get("type", []) for choice in schema["anyOf"]):
                    schema["anyOf"] = list(schema["anyOf"]) + [{"type": "null"}]
        return schema

    def schema(self):
        schema = self._schema
        if callable(schema):
            schema = schema()
        if isinstance(schema, Schema):
            schema = schema.response
        return self._finalize_schema(schema)

    def format(self, value):
        """
        Renders a converted value as JSON; ``None`` stays ``None``.
        """
        if value is None:
            return None
        return self.formatter(value)

    def convert(self, instance, validate=True):
        """
        :param instance: the deserialized JSON value
        :param bool validate: whether to validate ``instance`` against :attr:`response` first
        :raises DeserializationError: if validation fails
        """
        if validate:
            instance = super(Raw, self).convert(instance)

        if instance is None:
            return None
        return self.converter(instance)

    def formatter(self, value):
        return value

    def converter(self, value):
        return value

    def __repr__(self):
        return '{}(nullable={!r})'.format(self.__class__.__name__, self.nullable)


def _field_from_object(parent, cls_or_instance):
    field = cls_or_instance() if isinstance(cls_or_instance, type) else cls_or_instance
    if not isinstance(field, Raw):
        raise RuntimeError('{} expected a field, but got {}'.format(parent, field.__class__.__name__))
    return field


class Array(Raw):
    """
    A list of values of one field type, such as the ``tags`` of a node. An absent array stays ``None``; only an
    explicit ``[]`` converts to an empty list.

    :param field: field class or instance of the items
    """

    def __init__(self, field, **kwargs):
        self.container = container = _field_from_object(self, field)
        super(Array, self).__init__(lambda: {"type": "array", "items": container.response}, **kwargs)

    def formatter(self, value):
        return [self.container.format(v) for v in value]

    def converter(self, value):
        return [self.container.convert(v, validate=False) for v in value]


class Object(Raw):
    """
    A free-form JSON object, such as the ``registered_meta`` of a registration or the ``extra`` member of a file.
    Converted values are plain dictionaries.
    """

    def __init__(self, **kwargs):
        super(Object, self).__init__({"type": "object"}, **kwargs)


class String(Raw):
    """
    :param enum: the permitted values
    """

    def __init__(self, enum=None, **kwargs):
        schema = {"type": "string"}
        if enum is not None:
            schema['enum'] = list(enum)
        super(String, self).__init__(schema, **kwargs)


class DateTimeString(Raw):
    """
    An ISO 8601 date-time. The OSF API omits the timezone, so converted values are naive
    :class:`datetime.datetime` objects.
    """

    def __init__(self, **kwargs):
        super(DateTimeString, self).__init__({"type": "string"}, **kwargs)

    def formatter(self, value):
        return value.isoformat()

    def converter(self, value):
        try:
            return aniso8601.parse_datetime(value)
        except ValueError as e:
            raise DeserializationError(message='Invalid date-time "{}": {}'.format(value, e))


class Boolean(Raw):
    def __init__(self, **kwargs):
        super(Boolean, self).__init__({"type": "boolean"}, **kwargs)


class Integer(Raw):
    """
    :param int minimum: smallest permitted value
    """

    def __init__(self, minimum=None, **kwargs):
        schema = {"type": "integer"}
        if minimum is not None:
            schema['minimum'] = minimum
        super(Integer, self).__init__(schema, **kwargs)


class Relationship(Raw, ResourceBound):
    """
    Base class of the fields describing the relationships of a resource. Relationship fields are collected into
    ``Resource.meta.relationships``, the table the resolution engine consults to resolve each relationship of a
    resource object.

    The related resource can be referenced by:

    - a :class:`Resource` class
    - the JSON-API type of a registered resource, e.g. ``"nodes"``
    - a ``module.ClassName`` path
    - ``"self"``, the resource declaring the field

    :param resource: reference to the related resource; optional for :class:`Reference` fields
    :param bool many: whether the relationship is to a collection
    :param str relation: key of the relationship in the resource object; defaults to the field name
    """
    strategy = None

    def __init__(self, resource=None, many=False, relation=None, **kwargs):
        self.target_reference = ResourceReference(resource)
        self.many = many
        self.relation = relation
        self.name = None
        super(Relationship, self).__init__(_RELATIONSHIP, **kwargs)

    @property
    def cardinality(self):
        return MANY if self.many else ONE

    @cached_property
    def target(self):
        return self.target_reference.resolve(self.resource)

    def empty(self):
        """
        The value of a relationship that is present in the document but resolved to nothing.
        """
        if self.many:
            return []
        return None

    def __repr__(self):
        return '{}({!r}, relation={!r})'.format(self.__class__.__name__, self.target_reference.value, self.relation)


class Reference(Relationship):
    """
    Resolves to the URL of the related resource(s), which is never retrieved.
    """
    strategy = REFERENCE


class ToOne(Relationship):
    """
    Resolves to the related resource, retrieved and resolved in turn.
    """
    strategy = OBJECT

    def __init__(self, resource, **kwargs):
        super(ToOne, self).__init__(resource, many=False, **kwargs)

    def formatter(self, item):
        return item.as_dict()


class ToMany(Relationship):
    """
    Like :class:`ToOne`, but resolves to a list of related resources in document order.
    """
    strategy = OBJECT

    def __init__(self, resource, **kwargs):
        super(ToMany, self).__init__(resource, many=True, **kwargs)

    def formatter(self, items):
        return [item.as_dict() for item in items]
