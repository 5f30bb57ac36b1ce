import logging

from osf_client.exceptions import DeserializationError, ItemNotFound, TransportError
from osf_client.instances import ResourceList
from osf_client.reference import ResourceReference
from osf_client.resolution import ResolutionEngine
from osf_client.transports import Request
from osf_client.utils import join_uri

log = logging.getLogger(__name__)


class OsfService(object):
    """
    Retrieval endpoints of the OSF API. Every call resolves its response with a fresh
    :class:`osf_client.resolution.ResolutionEngine`, so calls share no state.

    :param osf_client.Client client: client supplying the transport and configuration
    """

    def __init__(self, client):
        self.client = client

    @property
    def transport(self):
        return self.client.transport

    @property
    def config(self):
        return self.client.config

    def url_for(self, resource, id=None):
        """
        :param resource: resource class or JSON-API type name
        :param id: optional resource id
        :return: the URL of the resource's list endpoint, or of the item with ``id``
        """
        resource = ResourceReference(resource).resolve()
        return join_uri(self.config['API_BASE_URI'], resource.meta.route, id)

    def _request(self, url):
        return Request(url, headers={'Accept': self.config['MEDIA_TYPE']})

    @staticmethod
    def _raise_for_status(response):
        if response.status_code == 404:
            raise ItemNotFound(response.url)
        if not response.ok:
            raise TransportError(response.url, status_code=response.status_code)

    def engine(self):
        return ResolutionEngine(self, follow_pages=self.config['FOLLOW_RELATIONSHIP_PAGES'])

    def fetch(self, url):
        """
        Retrieves the document at ``url``.

        :return: the parsed document, or ``None`` if the response body is empty
        :raises TransportError: on connection failures and error responses
        :raises DeserializationError: if the body is not JSON
        """
        response = self.transport.send(self._request(url))
        self._raise_for_status(response)
        try:
            return response.json()
        except ValueError as e:
            raise DeserializationError(message='Response from {} is not valid JSON: {}'.format(url, e))

    def read(self, resource, id):
        """
        :param resource: resource class or JSON-API type name
        :param str id: resource id
        :return: the resource with all relationships resolved
        :raises ItemNotFound: if there is no such resource
        """
        resource = ResourceReference(resource).resolve()
        url = self.url_for(resource, id)

        try:
            document = self.fetch(url)
        except ItemNotFound:
            raise ItemNotFound(url, resource=resource, id=id)

        if document is None:
            raise ItemNotFound(url, resource=resource, id=id)

        item = self.engine().resolve(document, resource)

        if item is None:
            raise ItemNotFound(url, resource=resource, id=id)
        if isinstance(item, ResourceList):
            raise DeserializationError(message='Expected a single resource from {}'.format(url))
        return item

    def instances(self, resource, url=None):
        """
        Retrieves one page of a list endpoint.

        :param resource: resource class or JSON-API type name
        :param str url: URL of the page, e.g. the ``next`` link of a previous page; defaults to the first page of the
            resource's list endpoint
        :rtype: ResourceList
        """
        resource = ResourceReference(resource).resolve()
        url = url or self.url_for(resource)
        document = self.fetch(url)

        if document is None:
            raise ItemNotFound(url, resource=resource)

        page = self.engine().resolve(document, resource)

        if not isinstance(page, ResourceList):
            raise DeserializationError(message='Expected a list of resources from {}'.format(url))
        return page

    def iter_pages(self, resource, url=None):
        """
        Yields every page of a list endpoint, following ``next`` links until a page has none.
        """
        page = self.instances(resource, url)
        yield page

        while page.next:
            log.debug('Following next page %s', page.next)
            page = self.instances(resource, page.next)
            yield page

    def all_instances(self, resource, url=None):
        return [item for page in self.iter_pages(resource, url) for item in page]

    def stream(self, url):
        """
        :return: a readable binary file object with the content at ``url``
        """
        response = self.transport.stream(self._request(url).copy(headers={'Accept': '*/*'}))
        if not response.ok and response.raw is not None:
            response.raw.close()
        self._raise_for_status(response)
        return response.raw
