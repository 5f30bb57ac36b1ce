from osf_client.fields import REFERENCE, OBJECT
from osf_client.utils import relationship_url


def _identity(identifier):
    return identifier['type'], identifier['id']


class Resolver(object):
    """
    Resolves the value of one relationship of a resource object. There is one resolver per relationship strategy.
    """
    strategy = None

    def resolve(self, engine, field, relationship, included):
        """
        :param ResolutionEngine engine: the engine resolving the current document
        :param fields.Relationship field: the relationship descriptor
        :param dict relationship: the relationship object from the document
        :param dict included: side-loaded resource objects of the current document, keyed by ``(type, id)``
        :raises ResolutionFailure: if the related resources cannot be retrieved
        """
        raise NotImplementedError()


class ReferenceResolver(Resolver):
    """
    Resolves a relationship to the URL of the related resource(s); never issues a request. A to-one relationship
    with linkage data but no links resolves to the canonical URL of the identified resource.
    """
    strategy = REFERENCE

    def resolve(self, engine, field, relationship, included):
        url = relationship_url(relationship)
        linkage = relationship.get('data')

        if url is None and isinstance(linkage, dict):
            from osf_client.models import RESOURCE_TYPES
            resource = RESOURCE_TYPES.get(linkage['type'])
            if resource is not None:
                url = engine.service.url_for(resource, linkage['id'])
        return url


class ObjectResolver(Resolver):
    """
    Resolves a relationship to the related resource(s).

    Resource objects are taken from ``included`` when the relationship carries linkage data and every identifier
    is side-loaded; otherwise the related URL is retrieved. Identifiers without any URL are read one by one.
    """
    strategy = OBJECT

    def resolve(self, engine, field, relationship, included):
        linkage = relationship.get('data')

        if isinstance(linkage, list):
            identifiers = linkage
        elif linkage is not None:
            identifiers = [linkage]
        else:
            identifiers = []

        if 'data' in relationship and not identifiers:
            return field.empty()

        if identifiers and all(_identity(i) in included for i in identifiers):
            objs = [included[_identity(i)] for i in identifiers]
            if field.many:
                return engine.build_many(objs, field.target, included)
            items = [engine.build(obj, field.target, included) for obj in objs]
        else:
            url = relationship_url(relationship)
            if url is not None:
                return engine.fetch_related(field, url)
            items = [engine.read_related(field, i['type'], i['id']) for i in identifiers]

        if field.many:
            return items
        return items[0] if items else None
