from werkzeug.http import HTTP_STATUS_CODES


class OsfClientException(Exception):
    status_code = 500

    def as_dict(self):
        return {
            'status': self.status_code,
            'message': HTTP_STATUS_CODES.get(self.status_code, '')
        }


class DeserializationError(OsfClientException):
    """
    Raised when a response document is malformed or does not match the expected resource type.

    :param errors: an iterable of :class:`jsonschema.ValidationError` objects, may be empty
    :param str message: optional description of a non-schema failure (e.g. a type mismatch)
    :param root: optional path prefix for reported errors
    """
    status_code = 422

    def __init__(self, errors=(), message=None, root=None):
        self.errors = list(errors)
        self.message = message
        self.root = root
        super(DeserializationError, self).__init__(message or self._summary())

    def _summary(self):
        if not self.errors:
            return 'Invalid document'
        return '; '.join(error.message for error in self.errors)

    def _complete_path(self, error):
        path = tuple(error.absolute_path)
        if self.root is not None:
            return (self.root,) + path
        return path

    def _format_errors(self):
        for error in self.errors:
            yield {
                'validationOf': {error.validator: error.validator_value},
                'path': self._complete_path(error),
                'message': error.message
            }

    def as_dict(self):
        dct = super(DeserializationError, self).as_dict()
        dct['errors'] = list(self._format_errors())
        if self.message:
            dct['detail'] = self.message
        return dct


class TransportError(OsfClientException):
    """
    Raised when a request cannot be completed, either because the connection failed or because the
    service answered with an error status.
    """

    def __init__(self, url, status_code=None, cause=None):
        self.url = url
        self.cause = cause
        if status_code is not None:
            self.status_code = status_code
        super(TransportError, self).__init__('{} {}'.format(self.status_code, url))

    def as_dict(self):
        dct = super(TransportError, self).as_dict()
        dct['url'] = self.url
        return dct


class ItemNotFound(TransportError):
    status_code = 404

    def __init__(self, url, resource=None, id=None):
        super(ItemNotFound, self).__init__(url, status_code=404)
        self.resource = resource
        self.id = id

    def as_dict(self):
        dct = super(ItemNotFound, self).as_dict()
        if self.resource is not None:
            dct['item'] = {
                "$type": self.resource.meta.type,
                "$id": self.id
            }
        return dct


class ResolutionFailure(OsfClientException):
    """
    A single relationship could not be resolved. The engine catches this and degrades the
    relationship to an empty value.
    """
    status_code = 502

    def __init__(self, relation, url=None, cause=None):
        self.relation = relation
        self.url = url
        self.cause = cause
        super(ResolutionFailure, self).__init__('Unable to resolve "{}" from {}: {}'.format(relation, url, cause))

    def as_dict(self):
        dct = super(ResolutionFailure, self).as_dict()
        dct['relation'] = self.relation
        dct['url'] = self.url
        return dct
