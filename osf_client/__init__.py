import os

from flask import Config

from .manager import OsfService
from .models import Node, Registration, File, Contributor, User
from .transports import RequestsTransport

__all__ = (
    'Client',
    'Node',
    'Registration',
    'File',
    'Contributor',
    'User',
    'exceptions',
    'fields',
    'instances',
    'manager',
    'models',
    'resolution',
    'schema',
    'signals',
    'transports',
)


class Client(object):
    """
    Read-only client for the OSF API.

    Configuration is kept in :attr:`config`, a :class:`flask.Config`:

    =============================  ================================  ==========================================
    Key                            Default                           Description
    =============================  ================================  ==========================================
    ``API_BASE_URI``               ``https://api.osf.io/v2/``        Base URI of the API
    ``AUTH_TOKEN``                 ``None``                          Personal access token
    ``TIMEOUT``                    ``30``                            Request timeout in seconds
    ``MEDIA_TYPE``                 ``application/vnd.api+json``      ``Accept`` header of API requests
    ``FOLLOW_RELATIONSHIP_PAGES``  ``True``                          Retrieve every page of related collections
    =============================  ================================  ==========================================

    :param str base_uri: optional base URI, overrides ``API_BASE_URI``
    :param transport: an optional :class:`transports.Transport`; defaults to a :class:`transports.RequestsTransport`
    :param dict config: optional configuration values
    """

    def __init__(self, base_uri=None, transport=None, config=None):
        self.config = Config(os.getcwd())
        self.config.update(config or {})

        if base_uri is not None:
            self.config['API_BASE_URI'] = base_uri

        self.config.setdefault('API_BASE_URI', 'https://api.osf.io/v2/')
        self.config.setdefault('AUTH_TOKEN', None)
        self.config.setdefault('TIMEOUT', 30)
        self.config.setdefault('MEDIA_TYPE', 'application/vnd.api+json')
        self.config.setdefault('FOLLOW_RELATIONSHIP_PAGES', True)

        if transport is None:
            transport = RequestsTransport(timeout=self.config['TIMEOUT'], auth_token=self.config['AUTH_TOKEN'])

        self.transport = transport
        self.service = OsfService(self)

    @classmethod
    def from_env(cls, transport=None):
        """
        Creates a client configured from the settings file named by ``OSF_CLIENT_SETTINGS``, if set, and from
        ``OSF_CLIENT_``-prefixed environment variables, e.g. ``OSF_CLIENT_AUTH_TOKEN``.
        """
        config = Config(os.getcwd())
        config.from_envvar('OSF_CLIENT_SETTINGS', silent=True)
        config.from_prefixed_env('OSF_CLIENT')
        return cls(transport=transport, config=config)

    def node(self, id):
        return self.service.read(Node, id)

    def registration(self, id):
        return self.service.read(Registration, id)

    def file(self, id):
        return self.service.read(File, id)

    def user(self, id):
        return self.service.read(User, id)

    def nodes(self, url=None):
        """
        :param str url: optional page URL, e.g. the ``next`` link of a previous page
        :rtype: instances.ResourceList
        """
        return self.service.instances(Node, url)

    def registrations(self, url=None):
        return self.service.instances(Registration, url)

    def stream(self, url):
        return self.service.stream(url)

    def resolve(self, document, target=None):
        """
        Resolves a JSON-API document that was retrieved elsewhere; related resources are retrieved through this
        client.
        """
        return self.service.engine().resolve(document, target)
