# encoding: utf-8
"""
chill.path

Names, ids, and paths for everything that lives on a couch.

A *name* is a single URL path segment (``foo`` is the database name in
``/foo/_design/bar/_view/qux``). A *document id* pairs a document kind (normal,
design, or local) with a document name, e.g. ``_design/bar``. A *path* is the
full location of a resource, built from names:

    >>> DocumentPath.parse('/foo/_design/bar').document_id
    DocumentId('_design/bar')
    >>> str(DocumentPath('foo', 'bar/qux'))
    '/foo/bar%2Fqux'
    >>> DocumentPath('foo', 'bar/qux').segments()
    ['foo', 'bar/qux']

Path strings are percent-encoded one segment at a time. Application code should
never see a percent-encoded character: build paths from their parts and let
``str()`` do the escaping. Names are not validated against CouchDB's own naming
rules; the server is the source of truth for those.
"""

import enum
from functools import total_ordering
from urllib.parse import quote as _quote, unquote

from .exceptions import PathParseError, PathParseErrorKind

__all__ = ['DatabaseName', 'NormalDocumentName', 'DesignDocumentName',
           'LocalDocumentName', 'AttachmentName', 'ViewName', 'DocumentKind',
           'DocumentId', 'DatabasePath', 'DocumentPath', 'DesignDocumentPath',
           'ViewPath', 'DatabaseViewPath', 'AttachmentPath', 'quote']

DESIGN_PREFIX = '_design'
LOCAL_PREFIX = '_local'
VIEW_SEGMENT = '_view'


def quote(segment):
    """Percent-encode a single path segment, slashes included.

    >>> quote('foo/bar baz%')
    'foo%2Fbar%20baz%25'
    """
    return _quote(segment, safe='')


def join_segments(segments):
    return '/' + '/'.join(quote(s) for s in segments)


#
# names
#

class _Name(str):
    """A single, unescaped path segment."""
    __slots__ = ()

    def __repr__(self):
        return '%s(%s)' % (type(self).__name__, str.__repr__(self))

class DatabaseName(_Name):
    """The name of a database, e.g. ``baseball``."""
    __slots__ = ()

class NormalDocumentName(_Name):
    """The name of a normal document (its id is the name itself)."""
    __slots__ = ()

class DesignDocumentName(_Name):
    """The name of a design document, without the ``_design/`` prefix."""
    __slots__ = ()

class LocalDocumentName(_Name):
    """The name of a local document, without the ``_local/`` prefix."""
    __slots__ = ()

class AttachmentName(_Name):
    __slots__ = ()

class ViewName(_Name):
    __slots__ = ()


#
# document ids
#

class DocumentKind(enum.Enum):
    NORMAL = None
    DESIGN = DESIGN_PREFIX
    LOCAL = LOCAL_PREFIX

    @property
    def prefix(self):
        return self.value

_KIND_ORDER = {DocumentKind.NORMAL: 0, DocumentKind.DESIGN: 1, DocumentKind.LOCAL: 2}
_NAME_TYPES = {
    DocumentKind.NORMAL: NormalDocumentName,
    DocumentKind.DESIGN: DesignDocumentName,
    DocumentKind.LOCAL: LocalDocumentName,
}

@total_ordering
class DocumentId(object):
    """A document kind plus a document name.

    Constructing from a plain string classifies it by prefix::

        >>> DocumentId('_design/x').kind
        <DocumentKind.DESIGN: '_design'>
        >>> DocumentId('_designfoo').kind
        <DocumentKind.NORMAL: None>

    Constructing from a typed name keeps that name's kind, so
    ``DocumentId(NormalDocumentName('_design/x'))`` stays a normal document.
    """
    __slots__ = ('kind', 'name')

    def __init__(self, value):
        if isinstance(value, DocumentId):
            kind, name = value.kind, value.name
        elif isinstance(value, DesignDocumentName):
            kind, name = DocumentKind.DESIGN, value
        elif isinstance(value, LocalDocumentName):
            kind, name = DocumentKind.LOCAL, value
        elif isinstance(value, NormalDocumentName):
            kind, name = DocumentKind.NORMAL, value
        elif isinstance(value, str):
            kind, name = _classify(value)
        else:
            raise TypeError('expected str or a document name, got %s' % type(value).__name__)
        object.__setattr__(self, 'kind', kind)
        object.__setattr__(self, 'name', _NAME_TYPES[kind](name))

    def __setattr__(self, attr, value):
        raise AttributeError('%s is immutable' % type(self).__name__)

    @classmethod
    def normal(cls, name):
        return cls(NormalDocumentName(name))

    @classmethod
    def design(cls, name):
        return cls(DesignDocumentName(name))

    @classmethod
    def local(cls, name):
        return cls(LocalDocumentName(name))

    @property
    def prefix(self):
        return self.kind.prefix

    @property
    def is_design(self):
        return self.kind is DocumentKind.DESIGN

    @property
    def is_local(self):
        return self.kind is DocumentKind.LOCAL

    def segments(self):
        if self.prefix is None:
            return [str(self.name)]
        return [self.prefix, str(self.name)]

    def __str__(self):
        return '/'.join(self.segments())

    def __repr__(self):
        return 'DocumentId(%r)' % str(self)

    def _key(self):
        return (_KIND_ORDER[self.kind], str(self.name))

    def __eq__(self, other):
        if not isinstance(other, DocumentId):
            return NotImplemented
        return self._key() == other._key()

    def __lt__(self, other):
        if not isinstance(other, DocumentId):
            return NotImplemented
        return self._key() < other._key()

    def __hash__(self):
        return hash(self._key())

def _classify(doc_id):
    for kind in (DocumentKind.DESIGN, DocumentKind.LOCAL):
        head = kind.prefix + '/'
        if doc_id.startswith(head):
            return kind, doc_id[len(head):]
    return DocumentKind.NORMAL, doc_id


#
# path parsing
#

class PathExtractor(object):
    """Pulls segments off the front of a slash-delimited path string.

    Each segment is percent-decoded once it has been split off, so an encoded
    slash (``%2F``) stays inside its segment.
    """
    def __init__(self, path):
        if not isinstance(path, str) or not path.startswith('/'):
            raise PathParseError(PathParseErrorKind.NO_LEADING_SLASH)
        self._segments = path[1:].split('/')
        self._index = 0

    def _more_follow(self):
        return self._index < len(self._segments)

    def extract_nonfinal(self):
        """Take the next segment, which must exist and be non-empty."""
        if not self._more_follow():
            raise PathParseError(PathParseErrorKind.TOO_FEW_SEGMENTS)
        segment = self._segments[self._index]
        if not segment:
            # a slash at the very end, where another segment is still required
            if self._index > 0 and self._index == len(self._segments) - 1:
                raise PathParseError(PathParseErrorKind.TOO_FEW_SEGMENTS)
            raise PathParseError(PathParseErrorKind.EMPTY_SEGMENT)
        self._index += 1
        return unquote(segment)

    def extract_literal(self, literal):
        segment = self.extract_nonfinal()
        if segment != literal:
            raise PathParseError(PathParseErrorKind.BAD_SEGMENT, expected=literal)
        return segment

    def extract_document_id(self):
        """Take one segment, or two when the first is a ``_design`` or
        ``_local`` prefix that has a name after it."""
        segment = self.extract_nonfinal()
        for kind in (DocumentKind.DESIGN, DocumentKind.LOCAL):
            if segment == kind.prefix and self._more_follow():
                return DocumentId(_NAME_TYPES[kind](self.extract_nonfinal()))
        return DocumentId(NormalDocumentName(segment))

    def finish(self):
        """Fail unless every segment has been consumed."""
        remaining = self._segments[self._index:]
        if not remaining:
            return
        if remaining == ['']:
            raise PathParseError(PathParseErrorKind.TRAILING_SLASH)
        raise PathParseError(PathParseErrorKind.TOO_MANY_SEGMENTS)

    def extract_final(self):
        segment = self.extract_nonfinal()
        self.finish()
        return segment


#
# paths
#

@total_ordering
class _Path(object):
    __slots__ = ()

    def segments(self):
        """The raw (unescaped) URL path segments, in order."""
        raise NotImplementedError

    def __iter__(self):
        return iter(self.segments())

    def __str__(self):
        return join_segments(self.segments())

    def __repr__(self):
        return '%s(%r)' % (type(self).__name__, str(self))

    def _key(self):
        return tuple(getattr(self, attr) for attr in self.__slots__)

    def __eq__(self, other):
        if type(other) is not type(self):
            return NotImplemented
        return self._key() == other._key()

    def __lt__(self, other):
        if type(other) is not type(self):
            return NotImplemented
        return self._key() < other._key()

    def __hash__(self):
        return hash((type(self).__name__,) + self._key())

    def __setattr__(self, attr, value):
        raise AttributeError('%s is immutable' % type(self).__name__)

    def _set(self, **fields):
        for attr, value in fields.items():
            object.__setattr__(self, attr, value)

    @classmethod
    def parse(cls, path):
        raise NotImplementedError

    @classmethod
    def coerce(cls, value):
        """Turn a path, a path string, or a tuple of parts into this path
        type. Strings are parsed (and may raise PathParseError)."""
        if isinstance(value, cls):
            return value
        if isinstance(value, tuple):
            return cls._from_parts(*value)
        if isinstance(value, str):
            return cls.parse(value)
        raise TypeError('cannot make a %s from %s' % (cls.__name__, type(value).__name__))

    @classmethod
    def _from_parts(cls, *parts):
        return cls(*parts)


def _database_name(value):
    """The database name of a DatabaseName, a database-scoped path, or a
    database path string."""
    if isinstance(value, DatabaseName):
        return value
    if isinstance(value, _Path):
        return value.database_name
    return DatabasePath.coerce(value).database_name


class DatabasePath(_Path):
    """``/{db}``"""
    __slots__ = ('database_name',)

    def __init__(self, db_name):
        self._set(database_name=DatabaseName(db_name))

    @classmethod
    def parse(cls, path):
        return cls(PathExtractor(path).extract_final())

    @classmethod
    def coerce(cls, value):
        if isinstance(value, DatabaseName):
            return cls(value)
        return super(DatabasePath, cls).coerce(value)

    def segments(self):
        return [str(self.database_name)]

    def document_path(self, doc_id):
        return DocumentPath(self.database_name, doc_id)


class DocumentPath(_Path):
    """``/{db}/{doc}``, ``/{db}/_design/{ddoc}``, or ``/{db}/_local/{doc}``"""
    __slots__ = ('database_name', 'document_id')

    def __init__(self, db_name, doc_id):
        self._set(database_name=DatabaseName(db_name), document_id=DocumentId(doc_id))

    @classmethod
    def parse(cls, path):
        extractor = PathExtractor(path)
        db_name = extractor.extract_nonfinal()
        doc_id = extractor.extract_document_id()
        extractor.finish()
        return cls(db_name, doc_id)

    @classmethod
    def _from_parts(cls, db, doc_id):
        return cls(_database_name(db), doc_id)

    def segments(self):
        return [str(self.database_name)] + self.document_id.segments()

    def database_path(self):
        return DatabasePath(self.database_name)

    def attachment_path(self, att_name):
        return AttachmentPath(self.database_name, self.document_id, att_name)


class DesignDocumentPath(_Path):
    """``/{db}/_design/{ddoc}``"""
    __slots__ = ('database_name', 'design_document_name')

    def __init__(self, db_name, ddoc_name):
        self._set(database_name=DatabaseName(db_name),
                  design_document_name=DesignDocumentName(ddoc_name))

    @classmethod
    def parse(cls, path):
        extractor = PathExtractor(path)
        db_name = extractor.extract_nonfinal()
        extractor.extract_literal(DESIGN_PREFIX)
        return cls(db_name, extractor.extract_final())

    @classmethod
    def _from_parts(cls, db, ddoc_name):
        return cls(_database_name(db), ddoc_name)

    def segments(self):
        return [str(self.database_name), DESIGN_PREFIX, str(self.design_document_name)]

    def document_path(self):
        return DocumentPath(self.database_name, DocumentId(self.design_document_name))

    def view_path(self, view_name):
        return ViewPath(self.database_name, self.design_document_name, view_name)


class ViewPath(_Path):
    """``/{db}/_design/{ddoc}/_view/{view}``"""
    __slots__ = ('database_name', 'design_document_name', 'view_name')

    def __init__(self, db_name, ddoc_name, view_name):
        self._set(database_name=DatabaseName(db_name),
                  design_document_name=DesignDocumentName(ddoc_name),
                  view_name=ViewName(view_name))

    @classmethod
    def parse(cls, path):
        extractor = PathExtractor(path)
        db_name = extractor.extract_nonfinal()
        extractor.extract_literal(DESIGN_PREFIX)
        ddoc_name = extractor.extract_nonfinal()
        extractor.extract_literal(VIEW_SEGMENT)
        return cls(db_name, ddoc_name, extractor.extract_final())

    @classmethod
    def _from_parts(cls, *parts):
        if len(parts) == 2:
            ddoc_path = DesignDocumentPath.coerce(parts[0])
            return cls(ddoc_path.database_name, ddoc_path.design_document_name, parts[1])
        db, ddoc_name, view_name = parts
        return cls(_database_name(db), ddoc_name, view_name)

    def segments(self):
        return [str(self.database_name), DESIGN_PREFIX, str(self.design_document_name),
                VIEW_SEGMENT, str(self.view_name)]

    def design_document_path(self):
        return DesignDocumentPath(self.database_name, self.design_document_name)


class DatabaseViewPath(_Path):
    """``/{db}/{view}``, for the views every database has built in (such as
    ``_all_docs``)."""
    __slots__ = ('database_name', 'view_name')

    def __init__(self, db_name, view_name):
        self._set(database_name=DatabaseName(db_name), view_name=ViewName(view_name))

    @classmethod
    def parse(cls, path):
        extractor = PathExtractor(path)
        db_name = extractor.extract_nonfinal()
        return cls(db_name, extractor.extract_final())

    @classmethod
    def _from_parts(cls, db, view_name):
        return cls(_database_name(db), view_name)

    def segments(self):
        return [str(self.database_name), str(self.view_name)]


class AttachmentPath(_Path):
    """``/{db}/{doc}/{attachment}``, where the document part may itself be
    two segments for design and local documents.

    A normal document named ``_design`` or ``_local`` does not survive a trip
    through str() and parse(): ``/db/_design/x`` reads as design document
    ``x`` with no attachment name. Build such paths from their parts.
    """
    __slots__ = ('database_name', 'document_id', 'attachment_name')

    def __init__(self, db_name, doc_id, att_name):
        self._set(database_name=DatabaseName(db_name), document_id=DocumentId(doc_id),
                  attachment_name=AttachmentName(att_name))

    @classmethod
    def parse(cls, path):
        extractor = PathExtractor(path)
        db_name = extractor.extract_nonfinal()
        doc_id = extractor.extract_document_id()
        return cls(db_name, doc_id, extractor.extract_final())

    @classmethod
    def _from_parts(cls, *parts):
        if len(parts) == 2:
            doc_path = DocumentPath.coerce(parts[0])
            return cls(doc_path.database_name, doc_path.document_id, parts[1])
        db, doc_id, att_name = parts
        return cls(_database_name(db), doc_id, att_name)

    def segments(self):
        return ([str(self.database_name)] + self.document_id.segments() +
                [str(self.attachment_name)])

    def document_path(self):
        return DocumentPath(self.database_name, self.document_id)
