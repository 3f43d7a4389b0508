# encoding: utf-8
"""
chill.document

Client-side copies of documents, their attachments, and design documents.
"""

import copy
import mimetypes
from base64 import b64encode, b64decode
from collections.abc import Mapping

from .atoms import _require_fields
from .exceptions import ContentNotAnObject
from .path import AttachmentName, DocumentPath, DocumentId, ViewName
from .revision import Revision

__all__ = ['Attachment', 'SavedAttachment', 'UnsavedAttachment', 'Document',
           'ViewFunction', 'Design', 'guess_mime']

def guess_mime(filename):
    return ';'.join(filter(None, mimetypes.guess_type(filename))) or 'application/octet-stream'

def as_content(content):
    """Return `content` as a plain dict suitable for a document body.

    Raises:
        ContentNotAnObject (when the content is not a mapping)
    """
    if hasattr(content, 'to_json') and not isinstance(content, Mapping):
        content = content.to_json()
    if not isinstance(content, Mapping):
        raise ContentNotAnObject(content)
    return dict(content)


#
# attachments
#

class Attachment(object):
    """A blob stored alongside a document.

    A *saved* attachment was decoded from the server and may be a stub
    (length only) or carry its bytes; an *unsaved* attachment was created by
    the application and is uploaded with the next write of its document.
    """
    __slots__ = ('content_type',)

    saved = False

    @property
    def content_length(self):
        raise NotImplementedError

    @property
    def content(self):
        """The attachment's bytes, or None for a stub."""
        raise NotImplementedError

    def to_json(self):
        raise NotImplementedError

    @classmethod
    def from_json(cls, obj):
        return SavedAttachment.from_json(obj)


class SavedAttachment(Attachment):
    """An attachment as the server describes it.

    Exactly one of `length` (a stub) and `data` (the full bytes) is given.
    `encoding` and `encoded_length` describe server-side compression and come
    as a pair.
    """
    __slots__ = ('digest', 'sequence_number', '_length', '_data', 'encoding', 'encoded_length')

    saved = True

    _FIELDS = ('content_type', 'data', 'digest', 'encoded_length', 'encoding', 'length',
               'revpos', 'stub')

    def __init__(self, content_type, digest, sequence_number, length=None, data=None,
                 encoding=None, encoded_length=None):
        if (length is None) == (data is None):
            raise ValueError('a saved attachment needs exactly one of length and data')
        if (encoding is None) != (encoded_length is None):
            raise ValueError('encoding and encoded_length must be given together')
        self.content_type = content_type
        self.digest = digest
        self.sequence_number = sequence_number
        self._length = length
        self._data = data
        self.encoding = encoding
        self.encoded_length = encoded_length

    @property
    def content_length(self):
        if self._data is not None:
            return len(self._data)
        return self._length

    @property
    def content(self):
        return self._data

    @property
    def is_stub(self):
        return self._data is None

    def to_json(self):
        # stubs tell the server to keep what it already has
        return {'stub': True}

    @classmethod
    def from_json(cls, obj):
        """Decode a saved attachment from a document's `_attachments` map.

        Raises:
            ValueError (when a required field is missing, unknown fields are
            present, or both/neither of `length` and `data` are given)
        """
        _require_fields('attachment', obj, ('content_type', 'digest', 'revpos'), cls._FIELDS)

        data = obj.get('data')
        length = obj.get('length')
        if data is None and length is None:
            raise ValueError('attachment: missing field %r' % 'length')
        if data is not None and length is not None:
            raise ValueError('attachment: unexpected field %r alongside %r' % ('data', 'length'))
        if data is not None:
            if not isinstance(data, str):
                raise ValueError('attachment: data must be a base64 string')
            data = b64decode(data, validate=True)
        elif not isinstance(length, int) or isinstance(length, bool) or length < 0:
            raise ValueError('attachment: length must be a non-negative integer')

        encoding = obj.get('encoding')
        encoded_length = obj.get('encoded_length')
        if encoding is None and encoded_length is not None:
            raise ValueError('attachment: missing field %r' % 'encoding')
        if encoding is not None and encoded_length is None:
            raise ValueError('attachment: missing field %r' % 'encoded_length')

        return cls(obj['content_type'], obj['digest'], obj['revpos'], length=length,
                   data=data, encoding=encoding, encoded_length=encoded_length)

    def __eq__(self, other):
        if not isinstance(other, SavedAttachment):
            return NotImplemented
        return all(getattr(self, a) == getattr(other, a)
                   for a in ('content_type',) + self.__slots__)

    def __ne__(self, other):
        result = self.__eq__(other)
        return result if result is NotImplemented else not result

    __hash__ = None

    def __repr__(self):
        kind = 'stub' if self.is_stub else 'data'
        return '<SavedAttachment %s %s, %i bytes (%s), revpos %s>' % (
            self.content_type, self.digest, self.content_length, kind, self.sequence_number)


class UnsavedAttachment(Attachment):
    """An attachment created locally, waiting to be uploaded."""
    __slots__ = ('_content',)

    def __init__(self, content_type, content):
        if not isinstance(content, (bytes, bytearray)):
            raise TypeError('attachment content must be bytes, got %s' % type(content).__name__)
        self.content_type = content_type
        self._content = bytes(content)

    @property
    def content_length(self):
        return len(self._content)

    @property
    def content(self):
        return self._content

    def to_json(self):
        return {'content_type': self.content_type,
                'data': b64encode(self._content).decode('ascii')}

    def __eq__(self, other):
        if not isinstance(other, UnsavedAttachment):
            return NotImplemented
        return (self.content_type, self._content) == (other.content_type, other._content)

    def __ne__(self, other):
        result = self.__eq__(other)
        return result if result is NotImplemented else not result

    __hash__ = None

    def __repr__(self):
        return '<UnsavedAttachment %s, %i bytes>' % (self.content_type, len(self._content))


#
# documents
#

class Document(object):
    """A document as last read from (or about to be written to) the server.

    The library never changes a Document after a write; re-read it to see the
    server-assigned revision.

    Attributes:
        path (DocumentPath): where the document lives

        revision (Revision): the revision this copy is based on

        deleted (bool): whether this copy is a deletion tombstone

        attachments (dict): AttachmentName → Attachment
    """
    def __init__(self, path, revision, content=None, attachments=None, deleted=False):
        self.path = DocumentPath.coerce(path)
        if not isinstance(revision, Revision):
            revision = Revision.parse(revision)
        self.revision = revision
        self.deleted = deleted
        self.attachments = {}
        for name, attachment in (attachments or {}).items():
            self.attachments[AttachmentName(name)] = attachment
        self._content = as_content({} if content is None else content)

    @property
    def database_name(self):
        return self.path.database_name

    @property
    def document_id(self):
        return self.path.document_id

    def get_content(self):
        """A copy of the document's JSON content (system fields excluded)."""
        return copy.deepcopy(self._content)

    def set_content(self, content):
        """Replace the document's content.

        Raises:
            ContentNotAnObject (when `content` is not a JSON object)
        """
        self._content = as_content(content)

    def get_attachment(self, name):
        return self.attachments.get(AttachmentName(name))

    def insert_attachment(self, name, content, content_type=None):
        """Add or replace an attachment; it is uploaded with the next update."""
        if content_type is None:
            content_type = guess_mime(name)
        self.attachments[AttachmentName(name)] = UnsavedAttachment(content_type, content)

    def remove_attachment(self, name):
        """Drop an attachment; the next update deletes it on the server.

        Returns:
            bool. whether an attachment by that name existed
        """
        return self.attachments.pop(AttachmentName(name), None) is not None

    def to_json(self):
        """The body to PUT when updating this document."""
        body = copy.deepcopy(self._content)
        if self.attachments:
            body['_attachments'] = dict((str(name), att.to_json())
                                        for name, att in sorted(self.attachments.items()))
        return body

    @classmethod
    def from_json(cls, db_name, obj):
        """Decode a document body as returned by a GET.

        Raises:
            ValueError (when the body lacks `_id` or `_rev` or has malformed
            system fields)

            RevisionParseError (when `_rev` is not a valid revision)
        """
        _require_fields('document', obj, ('_id', '_rev'), None)
        content = dict(obj)
        doc_id = content.pop('_id')
        rev = content.pop('_rev')
        deleted = content.pop('_deleted', False)
        raw_attachments = content.pop('_attachments', None) or {}
        if not isinstance(doc_id, str) or not isinstance(rev, str):
            raise ValueError('document: _id and _rev must be strings')
        if not isinstance(deleted, bool):
            raise ValueError('document: _deleted must be a boolean')
        if not isinstance(raw_attachments, Mapping):
            raise ValueError('document: _attachments must be an object')

        attachments = dict((name, Attachment.from_json(att))
                           for name, att in raw_attachments.items())
        return cls(DocumentPath(db_name, DocumentId(doc_id)), Revision.parse(rev),
                   content=content, attachments=attachments, deleted=deleted)

    def __eq__(self, other):
        if not isinstance(other, Document):
            return NotImplemented
        return (self.path == other.path and self.revision == other.revision and
                self.deleted == other.deleted and self.attachments == other.attachments and
                self._content == other._content)

    def __ne__(self, other):
        result = self.__eq__(other)
        return result if result is NotImplemented else not result

    __hash__ = None

    def __repr__(self):
        return '<%s %s@%s%s>' % (type(self).__name__, self.path, self.revision,
                                 ' (deleted)' if self.deleted else '')


#
# design documents
#

class ViewFunction(object):
    """The map (and optional reduce) source of a single view."""
    def __init__(self, map, reduce=None):
        self.map = map
        self.reduce = reduce

    def to_json(self):
        body = {'map': self.map}
        if self.reduce is not None:
            body['reduce'] = self.reduce
        return body

    @classmethod
    def from_json(cls, obj):
        _require_fields('view function', obj, ('map',), ('reduce',))
        return cls(obj['map'], obj.get('reduce'))

    def __eq__(self, other):
        if not isinstance(other, ViewFunction):
            return NotImplemented
        return (self.map, self.reduce) == (other.map, other.reduce)

    def __ne__(self, other):
        result = self.__eq__(other)
        return result if result is NotImplemented else not result

    __hash__ = None

    def __repr__(self):
        return '<ViewFunction%s>' % (' +reduce' if self.reduce else '')


class Design(object):
    """The content of a design document: a set of named views.

        >>> design = Design().insert_view('by_name', ViewFunction('function(doc) { emit(doc.name, null); }'))
        >>> sorted(design.to_json()['views'])
        ['by_name']
    """
    def __init__(self, views=None):
        self.views = {}
        for name, view_function in (views or {}).items():
            self.insert_view(name, view_function)

    def insert_view(self, view_name, view_function):
        self.views[ViewName(view_name)] = view_function
        return self

    def to_json(self):
        return {'views': dict((str(name), vf.to_json()) for name, vf in self.views.items())}

    @classmethod
    def from_json(cls, obj):
        """Decode design content; fields other than `views` are ignored."""
        if not isinstance(obj, Mapping):
            raise ValueError('design: expected a JSON object')
        views = obj.get('views') or {}
        return cls(dict((name, ViewFunction.from_json(vf)) for name, vf in views.items()))

    def __eq__(self, other):
        if not isinstance(other, Design):
            return NotImplemented
        return self.views == other.views

    def __ne__(self, other):
        result = self.__eq__(other)
        return result if result is NotImplemented else not result

    __hash__ = None
