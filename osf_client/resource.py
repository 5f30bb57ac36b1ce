from collections import OrderedDict
import copy
import inspect

from .fields import Relationship
from .schema import FieldSet
from .utils import AttributeDict


def _schema_members(schema_class):
    members = OrderedDict()
    for class_ in reversed(inspect.getmro(schema_class)):
        for key, value in class_.__dict__.items():
            if not key.startswith('__'):
                members[key] = value
    return members


class ResourceMeta(type):

    def __new__(mcs, name, bases, members):
        class_ = super(ResourceMeta, mcs).__new__(mcs, name, bases, members)
        class_.meta = meta = AttributeDict(getattr(class_, 'meta', {}) or {})

        for base in bases:
            if hasattr(base, 'Meta'):
                meta.update({k: v for k, v in base.Meta.__dict__.items() if not k.startswith('__')})

        changes = members['Meta'].__dict__ if 'Meta' in members else {}
        for k, v in changes.items():
            if not k.startswith('__'):
                meta[k] = v

        if not changes.get('type', None):
            meta['type'] = name.lower()
        if not changes.get('route', None):
            meta['route'] = meta['type']

        schema = OrderedDict()
        for base in bases:
            if hasattr(base, 'Schema'):
                schema.update(_schema_members(base.Schema))

        if 'Schema' in members:
            schema.update(_schema_members(members['Schema']))

        # every resource owns its fields, so that shared declarations can bind to each resource
        schema = OrderedDict((key, copy.copy(field)) for key, field in schema.items())

        attributes = OrderedDict()
        meta['relationships'] = relationships = OrderedDict()

        for key, field in schema.items():
            if isinstance(field, Relationship):
                field.name = key
                if field.relation is None:
                    field.relation = key
                relationships[key] = field.bind(class_)
            else:
                attributes[key] = field

        class_.schema = FieldSet(attributes).bind(class_)

        return class_


class Resource(object, metaclass=ResourceMeta):
    """
    A resource object of the OSF API, materialized from a JSON-API document.

    A resource is configured using the `Schema` and `Meta` attributes. Fields in `Schema` that are
    :class:`fields.Relationship` instances are collected into ``meta.relationships``, the table the resolution engine
    consults to decide how each relationship is resolved; all other fields are read from the ``attributes`` member.

    :class:`Meta` class attributes:

    =====================  ==============================  ==============================================================
    Attribute name         Default                         Description
    =====================  ==============================  ==============================================================
    type                   lower-case class name           JSON-API type of the resource, e.g. ``"nodes"``
    route                  ``type``                        Path segment of the resource's endpoint, relative to the API
    =====================  ==============================  ==============================================================

    Instances are frozen once resolution completes; assigning to an attribute afterwards raises
    :class:`AttributeError`.

    .. attribute:: id

    .. attribute:: links

        A dictionary of the links of the resource object as returned by the service, or ``None``.

    """
    meta = None
    schema = None

    def __init__(self, id=None, links=None, **properties):
        self.id = id
        self.links = links
        for key in self.schema.fields:
            setattr(self, key, properties.pop(key, None))
        for key in self.meta.relationships:
            setattr(self, key, properties.pop(key, None))
        if properties:
            raise TypeError('Unexpected properties for {}: {}'.format(self.__class__.__name__,
                                                                      ', '.join(sorted(properties))))

    @property
    def type(self):
        return self.meta.type

    def __setattr__(self, key, value):
        if self.__dict__.get('_frozen', False):
            raise AttributeError('{!r} is read-only'.format(self))
        super(Resource, self).__setattr__(key, value)

    def _freeze(self):
        self.__dict__['_frozen'] = True

    def as_dict(self):
        dct = OrderedDict()
        dct['type'] = self.meta.type
        dct['id'] = self.id
        dct['links'] = self.links
        dct.update(self.schema.format(self))
        for key, field in self.meta.relationships.items():
            dct[key] = field.format(getattr(self, key))
        return dct

    def __eq__(self, other):
        if not isinstance(other, Resource) or other.meta.type != self.meta.type:
            return NotImplemented
        return self.as_dict() == other.as_dict()

    def __ne__(self, other):
        result = self.__eq__(other)
        if result is NotImplemented:
            return result
        return not result

    __hash__ = None

    def __repr__(self):
        return '<{} {}>'.format(self.__class__.__name__, self.id)
