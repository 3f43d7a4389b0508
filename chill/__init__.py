# encoding: utf-8
"""
Chill | a typed client for CouchDB

Paths, revisions, documents, and views as real Python values, and one
action class per CouchDB operation, run through tornado or requests.

BSD Licensed
"""

__title__ = 'chill'
__version__ = '0.3.0'
__license__ = 'BSD'

__all__ = ['Couch', 'Database', 'defaults',
           'DatabaseName', 'NormalDocumentName', 'DesignDocumentName', 'LocalDocumentName',
           'AttachmentName', 'ViewName', 'DocumentId', 'DatabasePath', 'DocumentPath',
           'DesignDocumentPath', 'ViewPath', 'DatabaseViewPath', 'AttachmentPath',
           'Revision', 'Document', 'Attachment', 'SavedAttachment', 'UnsavedAttachment',
           'ViewFunction', 'Design', 'ViewRow', 'ViewResponse', 'ReducedView', 'UnreducedView',
           'ErrorResponse', 'WriteResponse',
           'CreateDatabase', 'CreateDocument', 'ReadDocument', 'UpdateDocument',
           'DeleteDocument', 'ExecuteView', 'ReadAllDocuments',
           'Error', 'PathParseError', 'PathParseErrorKind', 'RevisionParseError',
           'RevisionParseErrorKind', 'ContentNotAnObject', 'JsonEncodeError',
           'JsonDecodeError', 'UnexpectedResponse', 'TransportError', 'HTTPError',
           'DatabaseExists', 'DocumentConflict', 'NotFound', 'Unauthorized',
           'ServerResponseError']

from .config import defaults
from .atoms import ErrorResponse, WriteResponse
from .exceptions import Error, PathParseError, PathParseErrorKind, RevisionParseError, \
                        RevisionParseErrorKind, ContentNotAnObject, JsonEncodeError, \
                        JsonDecodeError, UnexpectedResponse, TransportError, HTTPError, \
                        DatabaseExists, DocumentConflict, NotFound, Unauthorized, \
                        ServerResponseError
from .path import DatabaseName, NormalDocumentName, DesignDocumentName, LocalDocumentName, \
                  AttachmentName, ViewName, DocumentId, DatabasePath, DocumentPath, \
                  DesignDocumentPath, ViewPath, DatabaseViewPath, AttachmentPath
from .revision import Revision
from .document import Document, Attachment, SavedAttachment, UnsavedAttachment, \
                      ViewFunction, Design
from .view import ViewRow, ViewResponse, ReducedView, UnreducedView
from .actions import CreateDatabase, CreateDocument, ReadDocument, UpdateDocument, \
                     DeleteDocument, ExecuteView, ReadAllDocuments
from .couchdb import Couch, Database
