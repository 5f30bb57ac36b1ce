"""
Transports send requests on behalf of :class:`osf_client.manager.OsfService`.

Every transport runs its interceptors on a request before sending it. An interceptor is a callable that receives a
:class:`Request` and returns the request to send, e.g. a copy with an additional header.

:class:`RequestsTransport` talks to the service over HTTP. :class:`FlaskTransport` dispatches requests to a Flask
application instead; together with :func:`osf_client.testing.create_fixture_app` it replays canned responses.
"""
import io
import json
import logging

import requests

from osf_client.exceptions import TransportError
from osf_client.signals import request_started, request_finished

log = logging.getLogger(__name__)


class Request(object):

    def __init__(self, url, method='GET', headers=None):
        self.url = url
        self.method = method
        self.headers = dict(headers or {})

    def copy(self, url=None, method=None, headers=None):
        """
        :param dict headers: headers to add to or replace in the copy
        """
        request = Request(url or self.url, method or self.method, self.headers)
        request.headers.update(headers or {})
        return request

    def __repr__(self):
        return '<Request {} {}>'.format(self.method, self.url)


class Response(object):
    """
    :param bytes content: the body; ``None`` for streamed responses
    :param raw: a readable binary file object for streamed responses
    """

    def __init__(self, url, status_code, headers=None, content=None, raw=None):
        self.url = url
        self.status_code = status_code
        self.headers = headers or {}
        self.content = content
        self.raw = raw

    @property
    def ok(self):
        return self.status_code < 400

    def json(self):
        """
        :return: the parsed body, or ``None`` if the body is empty
        :raises ValueError: if the body is not valid JSON
        """
        if self.content is None or not self.content.strip():
            return None
        return json.loads(self.content.decode('utf-8'))

    def __repr__(self):
        return '<Response {} {}>'.format(self.status_code, self.url)


class Transport(object):
    """
    :param list interceptors: callables receiving and returning a :class:`Request`
    :param dict headers: headers added to every request
    """

    def __init__(self, interceptors=None, headers=None):
        self.interceptors = list(interceptors or ())
        self.headers = dict(headers or {})

    def _prepare(self, request):
        request = request.copy(headers=dict(self.headers, **request.headers))
        for interceptor in self.interceptors:
            request = interceptor(request) or request
        return request

    def send(self, request):
        """
        :rtype: Response
        :raises TransportError: if the request could not be completed
        """
        request = self._prepare(request)
        request_started.send(self, request=request)
        log.debug('%s %s', request.method, request.url)
        response = self._send(request, stream=False)
        request_finished.send(self, request=request, response=response)
        return response

    def stream(self, request):
        """
        Like :meth:`send`, but returns a response whose body is available as the file object ``response.raw``.
        """
        request = self._prepare(request)
        request_started.send(self, request=request)
        log.debug('%s %s (stream)', request.method, request.url)
        response = self._send(request, stream=True)
        request_finished.send(self, request=request, response=response)
        return response

    def _send(self, request, stream=False):
        raise NotImplementedError()


class RequestsTransport(Transport):
    """
    Sends requests over HTTP with a :class:`requests.Session`.

    :param requests.Session session: optional session
    :param timeout: timeout in seconds passed to every request
    :param str auth_token: optional personal access token, sent as a bearer token
    """

    def __init__(self, session=None, timeout=None, auth_token=None, **kwargs):
        super(RequestsTransport, self).__init__(**kwargs)
        self.session = session or requests.Session()
        self.timeout = timeout
        if auth_token:
            self.headers['Authorization'] = 'Bearer {}'.format(auth_token)

    def _send(self, request, stream=False):
        try:
            response = self.session.request(request.method,
                                            request.url,
                                            headers=request.headers,
                                            timeout=self.timeout,
                                            stream=stream)
        except requests.RequestException as e:
            raise TransportError(request.url, cause=e)

        if stream:
            response.raw.decode_content = True
            return Response(request.url, response.status_code, response.headers, raw=response.raw)
        return Response(request.url, response.status_code, response.headers, content=response.content)


class FlaskTransport(Transport):
    """
    Dispatches requests to a Flask application through its test client; absolute URLs keep their host and port.

    :param flask.Flask app: the application answering requests
    """

    def __init__(self, app, **kwargs):
        super(FlaskTransport, self).__init__(**kwargs)
        self.app = app
        self.client = app.test_client()

    def _send(self, request, stream=False):
        response = self.client.open(request.url, method=request.method, headers=request.headers)
        content = response.get_data()
        if stream:
            return Response(request.url, response.status_code, dict(response.headers), raw=io.BytesIO(content))
        return Response(request.url, response.status_code, dict(response.headers), content=content)
