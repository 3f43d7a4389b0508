# encoding: utf-8
"""
chill.actions

One class per CouchDB operation.

An action knows how to describe its HTTP exchange (`make_request`) and how to
interpret the server's answer (`take_response`); the transport in between is
somebody else's problem. `run()` and `run_async()` glue the three together:

    >>> action = CreateDocument('/baseball', {'name': 'Babe Ruth'})
    >>> request, state = action.make_request()
    >>> request.method, request.segments
    ('POST', ['baseball'])

`take_response` is a classmethod: everything it needs besides the response is
carried in the `state` returned alongside the request.
"""

from tornado import gen

from .atoms import WriteResponse
from .document import Document, as_content
from .exceptions import (Error, JsonDecodeError, DatabaseExists, DocumentConflict,
                         NotFound, Unauthorized, ServerResponseError)
from .io import Request, RequestOptions, get_transport
from .path import (DatabasePath, DocumentPath, DocumentId, ViewPath, DatabaseViewPath,
                   _database_name)
from .revision import Revision
from .view import decode_view_response

__all__ = ['Action', 'CreateDatabase', 'CreateDocument', 'ReadDocument', 'UpdateDocument',
           'DeleteDocument', 'ExecuteView', 'ReadAllDocuments']

# marks a view key that was never given (null is a perfectly good key)
NOTSET = object()

def _decode(decoder, *args):
    """Run a wire-shape decoder, reporting shape mismatches as JsonDecodeError.
    chill's own errors (a malformed revision, say) pass through unchanged."""
    try:
        return decoder(*args)
    except Error:
        raise
    except (TypeError, ValueError, KeyError) as e:
        raise JsonDecodeError(e)

def _revision(value):
    return value if isinstance(value, Revision) else Revision.parse(value)


class Action(object):
    """Base class for the operations.

    Subclasses set `success_status` (the one status that means it worked) and
    `error_statuses` (status → HTTPError subclass); any other status raises
    ServerResponseError.

    Attributes:
        transport: what run() and run_async() send the request through; the
        default is chill.io.get_transport() against the default server
    """
    success_status = 200
    error_statuses = {}

    def __init__(self, transport=None):
        self.transport = transport

    def make_request(self):
        """Describe the HTTP exchange.

        Returns:
            tuple. (Request, state), where state is whatever take_response()
            needs to make sense of the answer
        """
        raise NotImplementedError

    @classmethod
    def take_response(cls, response, state):
        """Turn the server's answer into a result, or raise the matching error.

        Raises:
            HTTPError (subclass chosen by status code)

            JsonDecodeError (when the body does not have the expected shape)
        """
        if response.status_code != cls.success_status:
            error = cls.error_statuses.get(response.status_code, ServerResponseError)
            raise error.from_response(response)
        return cls.decode_response(response, state)

    @classmethod
    def decode_response(cls, response, state):
        raise NotImplementedError

    def _transport(self):
        if self.transport is None:
            self.transport = get_transport()
        return self.transport

    def run(self):
        """Execute the action, blocking until the result is ready."""
        request, state = self.make_request()
        response = self._transport().execute(request)
        return self.take_response(response, state)

    @gen.coroutine
    def run_async(self):
        """Execute the action as a tornado coroutine:

            result = yield db.create_document({'name': 'Babe Ruth'}).run_async()
        """
        request, state = self.make_request()
        transport = self._transport()
        if not hasattr(transport, 'execute_async'):
            raise TypeError('%s cannot run asynchronously' % type(transport).__name__)
        response = yield transport.execute_async(request)
        return self.take_response(response, state)


class CreateDatabase(Action):
    """``PUT /{db}``

    Returns None on success.

    Raises:
        DatabaseExists (412), Unauthorized (401)
    """
    success_status = 201
    error_statuses = {412: DatabaseExists, 401: Unauthorized}

    def __init__(self, db_path, transport=None):
        super(CreateDatabase, self).__init__(transport)
        self.db_path = DatabasePath.coerce(db_path)

    def make_request(self):
        options = RequestOptions().with_accept_json()
        return Request('PUT', self.db_path.segments(), options), None

    @classmethod
    def decode_response(cls, response, state):
        return None


class CreateDocument(Action):
    """``POST /{db}``

    The content must be a JSON object (a mapping, or anything with a
    `to_json()` method that returns one, such as a Design). When a document id
    is given it is sent as the body's `_id`; otherwise the server picks one.

    Returns:
        tuple. (DocumentId, Revision) of the new document

    Raises:
        ContentNotAnObject, JsonEncodeError (building the request)

        DocumentConflict (409), Unauthorized (401)
    """
    success_status = 201
    error_statuses = {409: DocumentConflict, 401: Unauthorized}

    def __init__(self, db_path, content, doc_id=None, transport=None):
        super(CreateDocument, self).__init__(transport)
        self.db_path = DatabasePath.coerce(db_path)
        self.content = content
        self.doc_id = None
        if doc_id is not None:
            self.with_document_id(doc_id)

    def with_document_id(self, doc_id):
        self.doc_id = DocumentId(doc_id)
        return self

    def make_request(self):
        body = as_content(self.content)
        if self.doc_id is not None:
            body['_id'] = str(self.doc_id)
        options = RequestOptions().with_accept_json().with_json_body(body)
        return Request('POST', self.db_path.segments(), options), None

    @classmethod
    def decode_response(cls, response, state):
        written = _decode(WriteResponse.from_json, response.decode_json_body())
        return written.doc_id, written.revision


class ReadDocument(Action):
    """``GET /{db}/{doc}``

    Kwargs:
        revision (Revision): read that revision instead of the latest

        attachments (bool): ask for attachment bodies instead of stubs

    Returns:
        Document

    Raises:
        NotFound (404), Unauthorized (401)
    """
    error_statuses = {404: NotFound, 401: Unauthorized}

    def __init__(self, doc_path, revision=None, attachments=None, transport=None):
        super(ReadDocument, self).__init__(transport)
        self.doc_path = DocumentPath.coerce(doc_path)
        self.revision = None
        self.attachments = attachments
        if revision is not None:
            self.with_revision(revision)

    def with_revision(self, revision):
        self.revision = _revision(revision)
        return self

    def with_attachment_content(self, yes_or_no=True):
        self.attachments = yes_or_no
        return self

    def make_request(self):
        options = RequestOptions().with_accept_json()
        if self.revision is not None:
            options.with_query('rev', str(self.revision))
        if self.attachments is not None:
            options.with_query('attachments', bool(self.attachments))
        return Request('GET', self.doc_path.segments(), options), self.doc_path.database_name

    @classmethod
    def decode_response(cls, response, db_name):
        return _decode(Document.from_json, db_name, response.decode_json_body())


class UpdateDocument(Action):
    """``PUT /{db}/{doc}?rev={revision}`` with the document's full content.

    Unsaved attachments are uploaded; saved ones are sent as stubs, so the
    server keeps them; removed ones are deleted. The Document itself is left
    untouched: re-read it to pick up the new revision.

    Returns:
        Revision. the document's new revision

    Raises:
        DocumentConflict (409), NotFound (404), Unauthorized (401)
    """
    success_status = 201
    error_statuses = {409: DocumentConflict, 404: NotFound, 401: Unauthorized}

    def __init__(self, doc, transport=None):
        super(UpdateDocument, self).__init__(transport)
        self.doc = doc

    def make_request(self):
        options = RequestOptions().with_accept_json()
        options.with_query('rev', str(self.doc.revision))
        options.with_json_body(self.doc.to_json())
        return Request('PUT', self.doc.path.segments(), options), None

    @classmethod
    def decode_response(cls, response, state):
        return _decode(WriteResponse.from_json, response.decode_json_body()).revision


class DeleteDocument(Action):
    """``DELETE /{db}/{doc}?rev={revision}``

    Returns:
        Revision. the revision of the deletion tombstone

    Raises:
        DocumentConflict (409), NotFound (404), Unauthorized (401)
    """
    error_statuses = {409: DocumentConflict, 404: NotFound, 401: Unauthorized}

    def __init__(self, doc_path, revision, transport=None):
        super(DeleteDocument, self).__init__(transport)
        self.doc_path = DocumentPath.coerce(doc_path)
        self.revision = _revision(revision)

    def make_request(self):
        options = RequestOptions().with_accept_json().with_query('rev', str(self.revision))
        return Request('DELETE', self.doc_path.segments(), options), None

    @classmethod
    def decode_response(cls, response, state):
        return _decode(WriteResponse.from_json, response.decode_json_body()).revision


class ExecuteView(Action):
    """``GET /{db}/_design/{ddoc}/_view/{view}``

    Every option can be passed to the constructor or set afterwards with the
    matching `with_*` method:

        view = ExecuteView('/baseball/_design/stat/_view/home_run', descending=True) \\
                   .with_end_key_inclusive(700)

    Kwargs:
        reduce (bool): reduce the view (the server's default is to reduce
        whenever the view has a reduce function)

        start_key: only rows whose key is >= this one

        end_key: only rows whose key is <= this one (or < it, with
        inclusive_end=False)

        inclusive_end (bool): whether the end key itself is included

        limit (int): at most this many rows

        descending (bool): rows in reverse key order

        include_docs (bool): attach each row's Document

    Returns:
        ReducedView or UnreducedView

    Raises:
        JsonEncodeError (a key cannot be encoded)

        NotFound (404), Unauthorized (401)

        UnexpectedResponse (the body fits neither kind of view result)
    """
    error_statuses = {404: NotFound, 401: Unauthorized}

    def __init__(self, view_path, reduce=None, start_key=NOTSET, end_key=NOTSET,
                 inclusive_end=True, limit=None, descending=None, include_docs=None,
                 transport=None):
        super(ExecuteView, self).__init__(transport)
        if isinstance(view_path, DatabaseViewPath):
            self.view_path = view_path
        else:
            self.view_path = ViewPath.coerce(view_path)
        self.reduce = reduce
        self.start_key = NOTSET
        self.end_key = NOTSET
        self.inclusive_end = True
        self.limit = limit
        self.descending = descending
        self.include_docs = include_docs
        if start_key is not NOTSET:
            self.with_start_key(start_key)
        if end_key is not NOTSET:
            if inclusive_end:
                self.with_end_key_inclusive(end_key)
            else:
                self.with_end_key_exclusive(end_key)

    def _key(self, key):
        return key

    def with_reduce(self, yes_or_no):
        self.reduce = yes_or_no
        return self

    def with_start_key(self, key):
        self.start_key = self._key(key)
        return self

    def with_end_key_inclusive(self, key):
        self.end_key, self.inclusive_end = self._key(key), True
        return self

    def with_end_key_exclusive(self, key):
        self.end_key, self.inclusive_end = self._key(key), False
        return self

    def with_limit(self, limit):
        self.limit = limit
        return self

    def with_descending(self, yes_or_no):
        self.descending = yes_or_no
        return self

    def with_documents(self, yes_or_no=True):
        self.include_docs = yes_or_no
        return self

    def make_request(self):
        options = RequestOptions().with_accept_json()
        if self.reduce is not None:
            options.with_query('reduce', bool(self.reduce))
        if self.start_key is not NOTSET:
            options.with_json_query('startkey', self.start_key)
        if self.end_key is not NOTSET:
            options.with_json_query('endkey', self.end_key)
            if not self.inclusive_end:
                options.with_query('inclusive_end', False)
        if self.limit is not None:
            options.with_query('limit', int(self.limit))
        if self.descending is not None:
            options.with_query('descending', bool(self.descending))
        if self.include_docs is not None:
            options.with_query('include_docs', bool(self.include_docs))
        return Request('GET', self.view_path.segments(), options), self.view_path.database_name

    @classmethod
    def decode_response(cls, response, db_name):
        return decode_view_response(db_name, response.decode_json_body())


class ReadAllDocuments(ExecuteView):
    """``GET /{db}/_all_docs``, the view of every document keyed by id.

    Keys are document ids; DocumentId values are sent in their string form.
    Each row's value is ``{"rev": …}``.
    """
    def __init__(self, db_path, **options):
        db_name = _database_name(db_path)
        super(ReadAllDocuments, self).__init__(DatabaseViewPath(db_name, '_all_docs'),
                                               **options)

    def _key(self, key):
        return str(key) if isinstance(key, DocumentId) else key
