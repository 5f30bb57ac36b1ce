"""
Replays canned OSF API responses from fixture files.

:func:`create_fixture_app` builds a Flask application that answers every request with the content of a fixture file.
Use it with :class:`osf_client.transports.FlaskTransport`::

    app = create_fixture_app('tests/fixtures/osf')
    client = Client('http://localhost:8000/v2/', transport=FlaskTransport(app))

The fixture is chosen by the ``X-Response-Resource`` request header, when present, or by a router: a callable that
receives the request URL and returns a fixture path relative to the fixture root.
"""
import os
import re
from urllib.parse import urlsplit

from flask import Flask, jsonify, request, send_file
from werkzeug.security import safe_join

X_RESPONSE_RESOURCE = 'X-Response-Resource'

JSON_API = 'application/vnd.api+json'


class PathRouter(object):
    """
    Maps request URLs onto the fixture tree by path; host and port are ignored.

    ::

        http://localhost:8000/v2/nodes/v8x57/         -> v2/nodes/v8x57/index.json
        http://localhost:8000/v2/nodes/?page=2        -> v2/nodes/index-page-2.json
        http://localhost:7777/v1/resources/pd24n/a1b  -> v1/resources/pd24n/a1b

    :param str prefix: optional directory prepended to every path
    """

    def __init__(self, prefix=None):
        self.prefix = prefix

    def __call__(self, url):
        parts = urlsplit(url)
        path = parts.path.strip('/')

        if parts.path.endswith('/') or not path:
            name = 'index.json'
            if parts.query:
                name = 'index-{}.json'.format(re.sub(r'[^0-9A-Za-z]+', '-', parts.query).strip('-'))
            path = '/'.join(p for p in (path, name) if p)

        if self.prefix:
            return '/'.join((self.prefix.strip('/'), path))
        return path


def response_resource(name):
    """
    Returns an interceptor that asks the fixture application for the fixture ``name``, whatever the request URL.
    """
    def interceptor(req):
        return req.copy(headers={X_RESPONSE_RESOURCE: name})
    return interceptor


def create_fixture_app(fixture_root, router=None):
    """
    :param str fixture_root: directory containing the fixture files
    :param router: callable mapping a request URL to a fixture path; defaults to :class:`PathRouter`
    :rtype: flask.Flask
    """
    app = Flask(__name__)
    app.config['FIXTURE_ROOT'] = os.path.abspath(fixture_root)
    router = router or PathRouter()

    @app.route('/', defaults={'path': ''}, methods=['GET', 'HEAD'])
    @app.route('/<path:path>', methods=['GET', 'HEAD'])
    def fixture(path):
        name = request.headers.get(X_RESPONSE_RESOURCE) or router(request.url)
        filename = safe_join(app.config['FIXTURE_ROOT'], name) if name else None

        if filename is None or not os.path.isfile(filename):
            app.logger.debug('No fixture for %s (%s)', request.url, name)
            response = jsonify(errors=[{'status': '404', 'detail': 'No fixture for {}'.format(request.url)}])
            response.status_code = 404
            return response

        app.logger.debug('Serving %s for %s', name, request.url)
        if filename.endswith('.json'):
            return send_file(filename, mimetype=JSON_API)
        return send_file(filename, mimetype='application/octet-stream')

    return app
