import os
from pprint import pformat

from flask import json
from flask_testing import TestCase

from osf_client import Client
from osf_client.exceptions import ItemNotFound
from osf_client.signals import request_started
from osf_client.testing import create_fixture_app
from osf_client.transports import FlaskTransport
from osf_client.utils import join_uri

FIXTURES = os.path.join(os.path.dirname(__file__), 'fixtures')

BASE_URI = 'http://localhost:8000/v2/'


class BaseTestCase(TestCase):
    """
    Serves the fixtures under :attr:`fixture_root` from a Flask app and points an OSF client, ``self.osf``, at it.
    """
    fixture_root = os.path.join(FIXTURES, 'osf')
    router = None

    def setUp(self):
        self.transport = self.create_transport()
        self.osf = Client(BASE_URI, transport=self.transport)

    def create_app(self):
        app = create_fixture_app(self.fixture_root, router=self.router)
        app.debug = True
        return app

    def create_transport(self):
        return FlaskTransport(self.app)

    def assertJSONEqual(self, first, second, msg=None):
        self.assertEqual(json.loads(json.dumps(first)), json.loads(json.dumps(second)), msg)

    def pp(self, obj):
        print(json.dumps(obj, sort_keys=True, indent=4, separators=(',', ': ')))


class RequestCounter:
    """
    Use as a context manager to count the requests sent by any transport.
    Usage:
        with RequestCounter() as ctr:
            client.node('v8x57')
        ctr.assert_count(4)
    """

    def __init__(self):
        self.requests = []

    def __enter__(self):
        request_started.connect(self._callback)
        return self

    def __exit__(self, *_):
        request_started.disconnect(self._callback)

    def _callback(self, sender, request):
        self.requests.append(request)

    def get_count(self):
        return len(self.requests)

    def display_all(self):
        return 'Counted: {count}\n{urls}'.format(count=self.get_count(),
                                                 urls=pformat([r.url for r in self.requests]))

    def assert_count(self, expected):
        count = self.get_count()
        assert count == expected, self.display_all()


class StubService(object):
    """
    Stands in for :class:`osf_client.manager.OsfService` in engine tests. Documents are looked up by URL; a URL
    that maps to an exception raises it, an unknown URL raises
    :class:`osf_client.exceptions.ItemNotFound`.
    """

    def __init__(self, documents=None, base_uri=BASE_URI):
        self.documents = dict(documents or {})
        self.base_uri = base_uri
        self.fetched = []

    def fetch(self, url):
        self.fetched.append(url)
        try:
            document = self.documents[url]
        except KeyError:
            raise ItemNotFound(url)
        if isinstance(document, Exception):
            raise document
        return document

    def url_for(self, resource, id=None):
        return join_uri(self.base_uri, resource.meta.route, id)
