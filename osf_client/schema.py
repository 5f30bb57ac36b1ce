from collections import OrderedDict

from jsonschema import Draft4Validator, FormatChecker
from werkzeug.utils import cached_property

from osf_client.reference import ResourceBound
from osf_client.exceptions import DeserializationError


class Schema(object):
    """
    The base class for all types with a schema. Any class inheriting from schema needs to implement :meth:`schema`.

    ..  attribute:: response

        JSON-schema that data returned by the service is validated against.

    """

    def schema(self):
        """
        Abstract method returning the JSON schema used to validate response data.
        """
        raise NotImplementedError()

    @cached_property
    def response(self):
        return self.schema()

    @cached_property
    def _validator(self):
        Draft4Validator.check_schema(self.response)
        return Draft4Validator(self.response, format_checker=FormatChecker())

    def validate(self, instance, root=None):
        """
        :raises DeserializationError: if validation failed
        """
        errors = sorted(self._validator.iter_errors(instance), key=lambda e: list(e.absolute_path))
        if errors:
            raise DeserializationError(errors, root=root)
        return instance

    def convert(self, instance):
        """
        Validates a deserialized JSON value against :attr:`response` and converts it into a python object.
        """
        return self.validate(instance)


class SchemaImpl(Schema):
    def __init__(self, schema):
        self._schema = schema

    def schema(self):
        return self._schema


_LINK = {
    "anyOf": [
        {"type": "string", "format": "uri"},
        {
            "type": "object",
            "properties": {
                "href": {"type": "string", "format": "uri"},
                "meta": {"type": "object"}
            }
        },
        {"type": "null"}
    ]
}

_LINKS = {
    "type": "object",
    "additionalProperties": _LINK
}

_RESOURCE_IDENTIFIER = {
    "type": "object",
    "properties": {
        "type": {"type": "string"},
        "id": {"type": "string"}
    },
    "required": ["type", "id"]
}

_RELATIONSHIP = {
    "type": "object",
    "properties": {
        "links": {"type": "object"},
        "data": {
            "anyOf": [
                {"type": "null"},
                _RESOURCE_IDENTIFIER,
                {"type": "array", "items": _RESOURCE_IDENTIFIER}
            ]
        },
        "meta": {"type": "object"}
    }
}

_RESOURCE_OBJECT = {
    "type": "object",
    "properties": {
        "type": {"type": "string", "minLength": 1},
        "id": {"type": "string", "minLength": 1},
        "attributes": {"type": "object"},
        "relationships": {
            "type": "object",
            "additionalProperties": _RELATIONSHIP
        },
        "links": _LINKS,
        "meta": {"type": "object"}
    },
    "required": ["type", "id"]
}

#: JSON-schema for a top-level JSON-API document as returned by the OSF API.
DOCUMENT = {
    "type": "object",
    "properties": {
        "data": {
            "anyOf": [
                {"type": "null"},
                _RESOURCE_OBJECT,
                {"type": "array", "items": _RESOURCE_OBJECT}
            ]
        },
        "included": {"type": "array", "items": _RESOURCE_OBJECT},
        "links": _LINKS,
        "meta": {"type": "object"}
    },
    "required": ["data"]
}

DocumentSchema = SchemaImpl(DOCUMENT)


class FieldSet(Schema, ResourceBound):
    """
    A schema representation of a dictionary of :class:`fields.Raw` objects, used for the ``attributes`` member
    of a resource object.

    Keys missing from the converted object are returned as ``None``, never as the field's empty value. Unknown keys
    are ignored.

    :param dict fields: a dictionary of :class:`fields.Raw` objects
    """

    def __init__(self, fields):
        self.fields = fields

    def bind(self, resource):
        if self.resource is None:
            self.resource = resource
            self.fields = OrderedDict(
                (key, field.bind(resource) if isinstance(field, ResourceBound) else field)
                for key, field in self.fields.items()
            )
        elif self.resource != resource:
            return self.rebind(resource)
        return self

    def rebind(self, resource):
        return FieldSet(OrderedDict(self.fields)).bind(resource)

    def schema(self):
        return {
            "type": "object",
            "properties": OrderedDict((key, field.response) for key, field in self.fields.items())
        }

    def format(self, item):
        return OrderedDict((key, field.format(getattr(item, key))) for key, field in self.fields.items())

    def convert(self, instance, root='attributes'):
        """
        :param instance: JSON-object
        :return: a dictionary keyed by member name
        """
        object_ = self.validate(instance or {}, root=root)
        result = {}

        for key, field in self.fields.items():
            try:
                value = field.convert(object_[key], validate=False)
            except KeyError:
                value = None
            result[key] = value
        return result
