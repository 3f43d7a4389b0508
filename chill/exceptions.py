# encoding: utf-8
"""
chill.exceptions

Everything that can go wrong...
"""

import enum

from .atoms import ErrorResponse


class Error(Exception):
    """Base class for all errors raised by chill."""


class PathParseErrorKind(enum.Enum):
    NO_LEADING_SLASH = 'the path does not begin with a slash'
    EMPTY_SEGMENT = 'the path contains an empty segment'
    TOO_FEW_SEGMENTS = 'the path has too few segments'
    TOO_MANY_SEGMENTS = 'the path has too many segments'
    TRAILING_SLASH = 'the path ends with a slash'
    BAD_SEGMENT = 'the path contains an unexpected segment'


class PathParseError(Error, ValueError):
    """Raised when a string cannot be parsed as a database, document, design
    document, view, or attachment path.

    Attributes:
        kind (PathParseErrorKind): what was wrong with the path
        expected (str): for BAD_SEGMENT, the literal segment that was required
    """
    def __init__(self, kind, expected=None):
        self.kind = kind
        self.expected = expected
        if expected is None:
            message = kind.value
        else:
            message = '%s (expected %r)' % (kind.value, expected)
        super(PathParseError, self).__init__(message)


class RevisionParseErrorKind(enum.Enum):
    TOO_FEW_PARTS = 'the revision has too few parts'
    NUMBER_PARSE = 'the revision sequence number is not a number'
    ZERO_SEQUENCE_NUMBER = 'the revision sequence number is zero'
    DIGEST_PARSE = 'the revision digest is invalid'
    DIGEST_NOT_ALL_HEX = 'the revision digest contains non-hex characters'


class RevisionParseError(Error, ValueError):
    """Raised when a string is not a valid `{sequence}-{digest}` revision.

    Attributes:
        kind (RevisionParseErrorKind): what was wrong with the revision
        cause (Exception): the underlying parse failure, if any
    """
    def __init__(self, kind, cause=None):
        self.kind = kind
        self.cause = cause
        if cause is None:
            message = kind.value
        else:
            message = '%s: %s' % (kind.value, cause)
        super(RevisionParseError, self).__init__(message)


class ContentNotAnObject(Error, TypeError):
    """Document content did not encode as a JSON object."""
    def __init__(self, content=None):
        self.content = content
        super(ContentNotAnObject, self).__init__(
            'document content must be a JSON object, got %s' % type(content).__name__)


class JsonEncodeError(Error):
    """An error occurred while encoding JSON."""
    def __init__(self, cause):
        self.cause = cause
        super(JsonEncodeError, self).__init__('An error occurred while encoding JSON: %s' % cause)


class JsonDecodeError(Error):
    """An error occurred while decoding JSON."""
    def __init__(self, cause):
        self.cause = cause
        super(JsonDecodeError, self).__init__('An error occurred while decoding JSON: %s' % cause)


class UnexpectedResponse(Error):
    """The server's response violated the shape the client relies on."""


class TransportError(Error):
    """The HTTP transport failed before a response was received."""
    def __init__(self, cause):
        self.cause = cause
        super(TransportError, self).__init__('An HTTP transport error occurred: %s' % cause)


class HTTPError(Error):
    """Base class for errors based on HTTP status codes >= 400.

    Attributes:
        status_code (int): the HTTP status of the response
        response (ErrorResponse): the decoded error body, or None
    """
    description = 'The CouchDB server responded with an error'

    def __init__(self, status_code, response=None):
        self.status_code = status_code
        self.response = response
        if response is None:
            message = '%s (%i)' % (self.description, status_code)
        else:
            message = '%s (%i): %s' % (self.description, status_code, response)
        super(HTTPError, self).__init__(message)

    @property
    def error(self):
        return self.response.error if self.response is not None else None

    @property
    def reason(self):
        return self.response.reason if self.response is not None else None

    @classmethod
    def from_response(cls, response):
        """Build the error from a transport response, decoding its
        ErrorResponse body.

        Raises:
            JsonDecodeError (when the body is not an ErrorResponse)
        """
        body = response.decode_json_body()
        try:
            error_response = ErrorResponse.from_json(body)
        except ValueError as e:
            raise JsonDecodeError(e)
        return cls(response.status_code, error_response)


class DatabaseExists(HTTPError):
    """Raised when a 412 HTTP error is received in response to a database
    creation request.
    """
    description = 'The database already exists'


class DocumentConflict(HTTPError):
    """Raised when a 409 HTTP error is received in response to a write."""
    description = 'The document revision is out of date'


class NotFound(HTTPError):
    """Raised when a 404 HTTP error is received in response to a request."""
    description = 'The resource does not exist'


class Unauthorized(HTTPError):
    """Raised when the server requires authentication credentials but either
    none are provided, or they are incorrect.
    """
    description = 'The CouchDB client has insufficient privilege'


class ServerResponseError(HTTPError):
    """Raised when an unexpected HTTP status is received in response to a
    request.
    """
    description = 'The CouchDB server responded with an unexpected status code'

    @classmethod
    def from_response(cls, response):
        """Build the error from a transport response. The ErrorResponse body
        is attached when it decodes, and left out otherwise."""
        try:
            error_response = ErrorResponse.from_json(response.decode_json_body())
        except (JsonDecodeError, ValueError):
            error_response = None
        return cls(response.status_code, error_response)
