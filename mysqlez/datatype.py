"""A module for housing the parameter type codes.

(C) Copyright 2025 The mysqlez Developers.  All Rights Reserved.

This software is licensed under a BSD 3-Clause License.
See the LICENSE file provided with this software.

Exported Classes:
Binary -- Class for a Binary object

Exported Functions:
convert_param -- Converts one value to the type named by its type code.
bind_params -- Converts a parameter list according to a type code string.

Type codes:
INTEGER ('i'), DOUBLE ('d'), STRING ('s'), BLOB ('b')
"""

__all__ = ['Binary', 'INTEGER', 'DOUBLE', 'STRING', 'BLOB', 'TYPE_CODES',
           'convert_param', 'bind_params', 'default_types']

import decimal
from typing import Any, Optional, Sequence, Tuple, Union  # pylint: disable=unused-import

INTEGER = 'i'
DOUBLE = 'd'
STRING = 's'
BLOB = 'b'

TYPE_CODES = (INTEGER, DOUBLE, STRING, BLOB)


class Binary(bytes):
    """A binary string.

    If passed a string we assume it's encoded as LATIN-1, which ensures that
    the characters 0-255 are considered single-character sequences.
    """

    def __new__(cls, data):
        # type: (Union[str, bytes, bytearray]) -> Binary
        if isinstance(data, str):
            return bytes.__new__(cls, data.encode('latin-1'))  # type: ignore
        return bytes.__new__(cls, data)  # type: ignore

    def __repr__(self):
        # type: () -> str
        return 'Binary(%s)' % bytes.__repr__(self)


def default_types(count):
    # type: (int) -> str
    """Every parameter without a declared type is bound as a string."""
    return STRING * count


def convert_param(code, value):
    # type: (str, Any) -> Any
    """Convert VALUE to the Python type bound for type CODE.

    None is passed through so that it is sent as SQL NULL.

    :raises ValueError: If the code is unknown or the value cannot be
                        converted.
    """
    if value is None:
        return None
    if code == INTEGER:
        if isinstance(value, bool):
            return int(value)
        if isinstance(value, float) and not value.is_integer():
            raise ValueError("%r is not an integer" % (value,))
        if isinstance(value, decimal.Decimal) and (
                not value.is_finite() or value != value.to_integral_value()):
            raise ValueError("%r is not an integer" % (value,))
        return int(value)
    if code == DOUBLE:
        return float(value)
    if code == STRING:
        if isinstance(value, (bytes, bytearray)):
            return bytes(value).decode('utf-8')
        return str(value)
    if code == BLOB:
        if isinstance(value, Binary):
            return value
        if not isinstance(value, (str, bytes, bytearray, memoryview)):
            raise ValueError("%r is not binary data" % (value,))
        return Binary(bytes(value) if isinstance(value, memoryview) else value)
    raise ValueError("Unknown type code '%s'" % (code,))


def bind_params(params, types=None):
    # type: (Sequence[Any], Optional[str]) -> Tuple[Any, ...]
    """Return a fresh tuple of PARAMS converted according to TYPES.

    :raises ValueError: If TYPES does not have one code per parameter or a
                        value cannot be converted.
    """
    if types is None:
        types = default_types(len(params))
    if not isinstance(types, str):
        raise ValueError("Type codes must be a string, got %r" % (types,))
    if len(types) != len(params):
        raise ValueError("%d type codes given for %d parameters"
                         % (len(types), len(params)))
    return tuple(convert_param(code, value) for code, value in zip(types, params))
