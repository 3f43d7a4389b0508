# encoding: utf-8
"""
chill.view

Decoded results of view queries.

A view response is either *reduced* (a single aggregate value) or
*unreduced* (the matching rows, with paging info). CouchDB does not say which
one it sent, so the two are told apart by their shape:

    - exactly one row and neither `total_rows` nor `offset` → reduced
    - otherwise both `total_rows` and `offset` must be present → unreduced
"""

from collections.abc import Mapping

from .document import Document
from .exceptions import Error, JsonDecodeError, UnexpectedResponse
from .path import DocumentId, DocumentPath

__all__ = ['ViewRow', 'ViewResponse', 'ReducedView', 'UnreducedView', 'decode_view_response']


class ViewRow(object):
    """A single row of an unreduced view.

    Attributes:
        key: the emitted key (any JSON value, never null)

        value: the emitted value (any JSON value, possibly null)

        document_path (DocumentPath): the document that emitted the row

        document (Document): the full document, when the query asked for it
    """
    __slots__ = ('key', 'value', 'document_path', 'document')

    def __init__(self, key, value, document_path, document=None):
        self.key = key
        self.value = value
        self.document_path = document_path
        self.document = document

    def __eq__(self, other):
        if not isinstance(other, ViewRow):
            return NotImplemented
        return all(getattr(self, a) == getattr(other, a) for a in self.__slots__)

    def __ne__(self, other):
        result = self.__eq__(other)
        return result if result is NotImplemented else not result

    __hash__ = None

    def __repr__(self):
        return '<ViewRow %s: %r → %r>' % (self.document_path, self.key, self.value)


class ViewResponse(object):
    """Common base for the two kinds of view result."""
    is_reduced = False

    def __eq__(self, other):
        if type(other) is not type(self):
            return NotImplemented
        return self.__dict__ == other.__dict__

    def __ne__(self, other):
        result = self.__eq__(other)
        return result if result is NotImplemented else not result

    __hash__ = None


class ReducedView(ViewResponse):
    """A view result collapsed to a single aggregate value."""
    is_reduced = True

    def __init__(self, value, update_seq=None):
        self.value = value
        self.update_seq = update_seq

    def __repr__(self):
        return '<ReducedView %r>' % (self.value,)


class UnreducedView(ViewResponse):
    """A view result made of individual rows.

    Iterating, indexing, and len() all act on the rows.

    Attributes:
        total_rows (int): rows in the whole view, not just this slice

        offset (int): index of the first returned row within the view

        update_seq: the database sequence the view reflects, when requested

        rows (list): ViewRow objects in view order
    """
    def __init__(self, total_rows, offset, rows, update_seq=None):
        self.total_rows = total_rows
        self.offset = offset
        self.rows = list(rows)
        self.update_seq = update_seq

    def __iter__(self):
        return iter(self.rows)

    def __len__(self):
        return len(self.rows)

    def __getitem__(self, index):
        return self.rows[index]

    def __repr__(self):
        return '<UnreducedView %i of %i rows (offset %i)>' % (
            len(self.rows), self.total_rows, self.offset)


def _count(body, field):
    value = body.get(field)
    if not isinstance(value, int) or isinstance(value, bool) or value < 0:
        raise JsonDecodeError(ValueError('view response: %s must be a non-negative integer'
                                         % field))
    return value

def _update_seq(body):
    # an integer before CouchDB 2.0, an opaque string since
    value = body.get('update_seq')
    if value is not None and not isinstance(value, (int, str)):
        raise JsonDecodeError(ValueError('view response: bad update_seq %r' % (value,)))
    return value

def _decode_row(db_name, row):
    if not isinstance(row, Mapping):
        raise JsonDecodeError(ValueError('view row: expected a JSON object'))
    if 'value' not in row:
        raise JsonDecodeError(ValueError('view row: missing field %r' % 'value'))

    doc_id = row.get('id')
    if not isinstance(doc_id, str):
        raise UnexpectedResponse('view row is missing its document id')
    key = row.get('key')
    if key is None:
        raise UnexpectedResponse('view row has a null key')

    doc = row.get('doc')
    if doc is not None:
        try:
            doc = Document.from_json(db_name, doc)
        except Error:
            raise
        except ValueError as e:
            raise JsonDecodeError(e)

    return ViewRow(key, row['value'], DocumentPath(db_name, DocumentId(doc_id)), doc)

def decode_view_response(db_name, body):
    """Turn a decoded view body into a ReducedView or an UnreducedView.

    Args:
        db_name (DatabaseName): the database the view belongs to, used to build
        the rows' document paths

        body (dict): the decoded JSON response

    Raises:
        JsonDecodeError (when fields are missing or have the wrong type)

        UnexpectedResponse (when the body fits neither kind of view result, or
        a row lacks a document id or has a null key)
    """
    if not isinstance(body, Mapping):
        raise JsonDecodeError(ValueError('view response: expected a JSON object'))
    if 'rows' not in body:
        raise JsonDecodeError(ValueError('view response: missing field %r' % 'rows'))
    rows = body['rows']
    if not isinstance(rows, list):
        raise JsonDecodeError(ValueError('view response: rows must be an array'))

    has_total, has_offset = 'total_rows' in body, 'offset' in body
    if len(rows) == 1 and not has_total and not has_offset:
        row = rows[0]
        if not isinstance(row, Mapping) or 'value' not in row:
            raise JsonDecodeError(ValueError('view row: missing field %r' % 'value'))
        return ReducedView(row['value'], _update_seq(body))

    if not (has_total and has_offset):
        raise UnexpectedResponse('view response has %i rows but lacks total_rows or offset'
                                 % len(rows))

    return UnreducedView(_count(body, 'total_rows'), _count(body, 'offset'),
                         [_decode_row(db_name, row) for row in rows], _update_seq(body))
