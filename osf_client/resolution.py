"""
Materializes JSON-API documents into graphs of :class:`osf_client.resource.Resource` objects.

A :class:`ResolutionEngine` walks the relationship descriptors of every resource it builds. Relationships with the
``REFERENCE`` strategy keep the related URL; relationships with the ``OBJECT`` strategy are resolved from
side-loaded resources or retrieved through the service and resolved recursively, depth-first and in document order.

A relationship that cannot be retrieved degrades to its empty value (``[]`` or ``None``) instead of failing the
whole call. A relationship that is absent from the document stays ``None``.
"""
import logging

from osf_client.exceptions import DeserializationError, ResolutionFailure, TransportError
from osf_client.fields import REFERENCE, OBJECT
from osf_client.instances import ResourceList
from osf_client.reference import ResourceReference
from osf_client.resolvers import ReferenceResolver, ObjectResolver
from osf_client.schema import DocumentSchema
from osf_client.signals import relationship_resolved, relationship_failed

log = logging.getLogger(__name__)


class ResolutionEngine(object):
    """
    Resolves the documents of one retrieval call. Engines keep track of the resources and URLs being resolved and
    must not be shared between calls.

    :param service: an object with ``fetch(url)`` and ``url_for(resource, id)`` methods, typically
        :class:`osf_client.manager.OsfService`
    :param bool follow_pages: whether to retrieve every page of a related collection
    """

    resolvers = {
        REFERENCE: ReferenceResolver(),
        OBJECT: ObjectResolver(),
    }

    def __init__(self, service, follow_pages=True):
        self.service = service
        self.follow_pages = follow_pages
        self._resources = []
        self._urls = []

    def resolve(self, document, target=None):
        """
        :param dict document: a parsed JSON-API document
        :param target: expected resource type; a resource class or JSON-API type name. When omitted, the type of each
            resource object is looked up in :data:`osf_client.models.RESOURCE_TYPES`.
        :return: a resource, a :class:`ResourceList` if the primary data is an array, or ``None`` for null data
        :raises DeserializationError: if the document is malformed or a resource object has an unexpected type
        """
        DocumentSchema.validate(document)
        target = ResourceReference(target).resolve()

        included = {(obj['type'], obj['id']): obj for obj in document.get('included', ())}
        data = document['data']

        if isinstance(data, list):
            return ResourceList(self.build_many(data, target, included),
                                links=document.get('links'),
                                meta=document.get('meta'))
        if data is None:
            return None
        return self.build(data, target, included)

    def _resource_class(self, obj, target):
        type_ = obj['type']
        if target is None:
            from osf_client.models import RESOURCE_TYPES
            try:
                return RESOURCE_TYPES[type_]
            except KeyError:
                raise DeserializationError(message='Unknown resource type "{}"'.format(type_))
        if type_ != target.meta.type:
            raise DeserializationError(message='Expected a resource of type "{}", got "{}" ({})'.format(
                target.meta.type, type_, obj['id']))
        return target

    def build(self, obj, target, included):
        """
        Builds a resource from a resource object and resolves its relationships.
        """
        resource = self._resource_class(obj, target)
        identity = (obj['type'], obj['id'])

        if identity in self._resources:
            raise ResolutionFailure('/'.join(identity), cause='cycle through {}/{}'.format(*identity))

        self._resources.append(identity)
        try:
            properties = resource.schema.convert(obj.get('attributes'))
            item = resource(id=obj['id'], links=obj.get('links'), **properties)

            relationships = obj.get('relationships') or {}
            for name, field in resource.meta.relationships.items():
                relationship = relationships.get(field.relation)
                if relationship is None:
                    continue
                setattr(item, name, self._resolve_relationship(item, field, relationship, included))
        finally:
            self._resources.pop()

        item._freeze()
        return item

    def build_many(self, objs, target, included):
        """
        Builds the resources of a list in document order. A resource that is already being built further up, and
        would close a cycle, is left out; its siblings are kept.
        """
        items = []
        for obj in objs:
            try:
                items.append(self.build(obj, target, included))
            except ResolutionFailure as failure:
                log.warning('Skipping %s/%s: %s', obj['type'], obj['id'], failure)
        return items

    def _resolve_relationship(self, item, field, relationship, included):
        resolver = self.resolvers[field.strategy]
        try:
            value = resolver.resolve(self, field, relationship, included)
        except ResolutionFailure as failure:
            log.warning('Resolving "%s" of %r failed, using %r: %s', field.name, item, field.empty(), failure)
            relationship_failed.send(item.__class__, item=item, name=field.name, failure=failure)
            return field.empty()

        log.debug('Resolved "%s" of %r (%s)', field.name, item, field.strategy)
        relationship_resolved.send(item.__class__, item=item, name=field.name, value=value)
        return value

    def _fetch(self, url, target, relation):
        if url in self._urls:
            raise ResolutionFailure(relation, url, cause='cycle through {}'.format(url))

        try:
            document = self.service.fetch(url)
        except TransportError as e:
            raise ResolutionFailure(relation, url, cause=e)

        if document is None:
            raise ResolutionFailure(relation, url, cause='empty response')

        self._urls.append(url)
        try:
            return self.resolve(document, target)
        finally:
            self._urls.pop()

    def fetch_related(self, field, url):
        """
        Retrieves and resolves the resources a relationship URL points to. For collections, every page is
        retrieved unless ``follow_pages`` is off.
        """
        value = self._fetch(url, field.target, field.relation)

        if not isinstance(value, ResourceList):
            if field.many:
                return [value] if value is not None else []
            return value

        items = list(value)
        seen = {url}
        while field.many and self.follow_pages and value.next and value.next not in seen:
            next_url = value.next
            seen.add(next_url)
            try:
                value = self._fetch(next_url, field.target, field.relation)
            except ResolutionFailure as failure:
                log.warning('Stopped following pages of "%s" at %s, keeping %d resources: %s',
                            field.name, next_url, len(items), failure)
                break
            if not isinstance(value, ResourceList):
                break
            items.extend(value)

        if field.many:
            return items
        return items[0] if items else None

    def read_related(self, field, type_, id):
        """
        Retrieves a single related resource by its identifier.
        """
        if type_ != field.target.meta.type:
            raise DeserializationError(message='Expected a resource of type "{}", got "{}" ({})'.format(
                field.target.meta.type, type_, id))
        return self._fetch(self.service.url_for(field.target, id), field.target, field.relation)
