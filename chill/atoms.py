# encoding: utf-8
"""
chill.atoms

Small value types shared by the other modules.
"""

class adict(dict):
    """A dict whose keys can also be read and written as attributes."""
    def __getattr__(self, attr):
        try:
            return self[attr]
        except KeyError:
            raise AttributeError(attr)

    def __setattr__(self, attr, value):
        self[attr] = value

    def __delattr__(self, attr):
        try:
            del self[attr]
        except KeyError:
            raise AttributeError(attr)

    def __repr__(self):
        return '<adict %s>' % dict.__repr__(self)


def _require_fields(shape, obj, required, optional=()):
    """Check a decoded JSON object against a wire shape.

    Returns the object unchanged; raises ValueError naming the first missing
    or unexpected field.
    """
    if not isinstance(obj, dict):
        raise ValueError('%s: expected a JSON object, got %s' % (shape, type(obj).__name__))
    for name in required:
        if name not in obj:
            raise ValueError('%s: missing field %r' % (shape, name))
    if optional is not None:
        allowed = set(required) | set(optional)
        for name in obj:
            if name not in allowed:
                raise ValueError('%s: unknown field %r' % (shape, name))
    return obj


class ErrorResponse(object):
    """The `{"error": …, "reason": …}` body CouchDB sends with a failed request.

    Attributes:
        error (str): machine-readable category, e.g. ``conflict``
        reason (str): human-readable detail
    """
    __slots__ = ('error', 'reason')

    def __init__(self, error, reason):
        self.error = error
        self.reason = reason

    @classmethod
    def from_json(cls, obj):
        _require_fields('error response', obj, ('error', 'reason'))
        return cls(obj['error'], obj['reason'])

    def __eq__(self, other):
        if not isinstance(other, ErrorResponse):
            return NotImplemented
        return (self.error, self.reason) == (other.error, other.reason)

    def __ne__(self, other):
        result = self.__eq__(other)
        return result if result is NotImplemented else not result

    def __hash__(self):
        return hash((self.error, self.reason))

    def __str__(self):
        return '%s: %s' % (self.error, self.reason)

    def __repr__(self):
        return '<%s %s>' % (type(self).__name__, self)


class WriteResponse(object):
    """The `{"ok": …, "id": …, "rev": …}` body of a successful document write."""
    __slots__ = ('ok', 'doc_id', 'revision')

    def __init__(self, doc_id, revision, ok=True):
        self.ok = ok
        self.doc_id = doc_id
        self.revision = revision

    @classmethod
    def from_json(cls, obj):
        from .path import DocumentId
        from .revision import Revision
        _require_fields('write response', obj, ('id', 'rev'), ('ok',))
        return cls(DocumentId(obj['id']), Revision.parse(obj['rev']), ok=obj.get('ok', True))

    def __repr__(self):
        return '<%s %s %s>' % (type(self).__name__, self.doc_id, self.revision)
