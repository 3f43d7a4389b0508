# encoding: utf-8
"""
chill.revision

Document revisions: the `{sequence}-{digest}` tokens CouchDB uses for
optimistic concurrency.
"""

import re
import uuid

from .exceptions import RevisionParseError, RevisionParseErrorKind

__all__ = ['Revision']

_DIGITS = re.compile(r'^[0-9]+$')
_HEX = re.compile(r'^[0-9a-fA-F]*$')
_MAX_SEQUENCE_NUMBER = 2 ** 64 - 1


class Revision(object):
    """A specific version of a document.

    Revisions compare equal when their sequence numbers and digests match; the
    digest comparison ignores case.

    >>> rev = Revision.parse('42-1234567890ABCDEFFEDCBA0987654321')
    >>> rev.sequence_number
    42
    >>> str(rev)
    '42-1234567890abcdeffedcba0987654321'
    """
    __slots__ = ('sequence_number', 'digest')

    def __init__(self, sequence_number, digest):
        _check_sequence_number(sequence_number)
        if not isinstance(digest, uuid.UUID):
            digest = _parse_digest(digest)
        object.__setattr__(self, 'sequence_number', sequence_number)
        object.__setattr__(self, 'digest', digest)

    def __setattr__(self, attr, value):
        raise AttributeError('Revision is immutable')

    @classmethod
    def parse(cls, string):
        """Parse a revision string such as ``1-967a00dff5e02add41819138abb3284d``.

        Raises:
            RevisionParseError
        """
        number_part, sep, digest_part = string.partition('-')

        if not _DIGITS.match(number_part):
            raise RevisionParseError(RevisionParseErrorKind.NUMBER_PARSE,
                                     ValueError('invalid digit found in %r' % number_part))
        sequence_number = int(number_part)
        _check_sequence_number(sequence_number)

        if not sep:
            raise RevisionParseError(RevisionParseErrorKind.TOO_FEW_PARTS)

        return cls(sequence_number, _parse_digest(digest_part))

    def __str__(self):
        return '%i-%s' % (self.sequence_number, self.digest.hex)

    def __repr__(self):
        return 'Revision(%r)' % str(self)

    def __eq__(self, other):
        if not isinstance(other, Revision):
            return NotImplemented
        return (self.sequence_number, self.digest) == (other.sequence_number, other.digest)

    def __ne__(self, other):
        result = self.__eq__(other)
        return result if result is NotImplemented else not result

    def __hash__(self):
        return hash((self.sequence_number, self.digest))


def _check_sequence_number(number):
    if not isinstance(number, int) or isinstance(number, bool):
        raise RevisionParseError(RevisionParseErrorKind.NUMBER_PARSE,
                                 TypeError('sequence number must be an int, got %s'
                                           % type(number).__name__))
    if number == 0:
        raise RevisionParseError(RevisionParseErrorKind.ZERO_SEQUENCE_NUMBER)
    if not 0 < number <= _MAX_SEQUENCE_NUMBER:
        raise RevisionParseError(RevisionParseErrorKind.NUMBER_PARSE,
                                 ValueError('number out of range: %s' % number))

def _parse_digest(digest):
    try:
        parsed = uuid.UUID(digest)
    except (TypeError, ValueError, AttributeError) as e:
        raise RevisionParseError(RevisionParseErrorKind.DIGEST_PARSE, e)
    # uuid.UUID also takes hyphens, braces and urn: prefixes
    if not _HEX.match(digest):
        raise RevisionParseError(RevisionParseErrorKind.DIGEST_NOT_ALL_HEX)
    return parsed
