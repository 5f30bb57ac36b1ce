from importlib import import_module
import inspect


class ResourceReference(object):
    """
    A reference to a resource class that is resolved lazily, so that resources can refer to each other (or to
    themselves) before all of them are defined.

    :param value: a :class:`Resource` class, a registered JSON-API type such as ``"nodes"``, a ``module.ClassName``
        path, ``"self"`` or ``None``
    """

    def __init__(self, value):
        self.value = value

    def resolve(self, binding=None):
        """
        :param binding: the resource ``"self"`` refers to
        :return: the referenced :class:`Resource` class, or ``None`` for an empty reference
        :raises RuntimeError: if no such resource exists
        """
        value = self.value

        if value is None:
            return None
        if value == 'self':
            return binding

        from .resource import Resource
        if inspect.isclass(value) and issubclass(value, Resource):
            return value

        from .models import RESOURCE_TYPES
        if value in RESOURCE_TYPES:
            return RESOURCE_TYPES[value]

        if isinstance(value, str) and '.' in value:
            module_name, class_name = value.rsplit('.', 1)
            resource = getattr(import_module(module_name), class_name, None)
            if resource is not None:
                return resource

        raise RuntimeError('Resource type "{}" is not registered.'.format(value))

    def __repr__(self):
        return "<ResourceReference {!r}>".format(self.value)


class ResourceBound(object):
    """
    Mixin for objects bound to the resource class that declares them.
    """
    resource = None

    def bind(self, resource):
        if self.resource is None:
            self.resource = resource
        elif self.resource != resource:
            return self.rebind(resource)
        return self

    def rebind(self, resource):
        raise NotImplementedError('{!r} is already bound to {} and cannot be bound to {}'.format(
            self, self.resource, resource))
