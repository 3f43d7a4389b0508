# encoding: utf-8
"""
chill.config

Process-wide settings and the JSON codec every other module goes through.
"""

from .atoms import adict

defaults = adict({
            # the server used when a Couch or Database is given no url
            "host":"http://127.0.0.1",
            "port":5984,
            "types":adict({
                # mapping type that decoded JSON objects are built from
                "dict":dict
            }),
            "http":adict({
                # "tornado" or "requests"
                "client":"tornado",
                "max_clients":10,
                "max_redirects":6,
                "timeout":60*60,
            })
         })

try:
    import simplejson as _json
except ImportError:
    import json as _json

class json(object):
    """Thin wrapper over simplejson (or the stdlib json module when that isn't
    installed) that applies chill's encoding and decoding settings."""

    @classmethod
    def decode(cls, string, **opts):
        """Decode a JSON document.

        Args:
            string (str or bytes): the JSON text; bytes are read as UTF-8

        Returns:
            the corresponding Python value, with objects built as
            `defaults.types.dict`

        Raises:
            ValueError (on malformed input)
        """
        if isinstance(string, bytes):
            string = string.decode('utf-8')
        return _json.loads(string, object_hook=defaults.types.dict, **opts)

    @classmethod
    def encode(cls, obj, **opts):
        """Encode `obj` as JSON text. NaN and the infinities are refused.

        Raises:
            TypeError, ValueError
        """
        return _json.dumps(obj, allow_nan=False, ensure_ascii=False, **opts)

    @classmethod
    def encode_compact(cls, obj):
        """Encode without any insignificant whitespace (used for view keys)."""
        return cls.encode(obj, separators=(',', ':'))
