"""mysqlez statement results

(C) Copyright 2025 The mysqlez Developers.  All Rights Reserved.

This software is licensed under a BSD 3-Clause License.
See the LICENSE file provided with this software.
"""

__all__ = ['Row', 'Result']

from collections import OrderedDict
from typing import Any, Iterable, List, Optional, Sequence  # pylint: disable=unused-import

from .exception import QueryError  # pylint: disable=unused-import


class Row(OrderedDict):
    """One fetched record: column name to value, in statement column order."""

    @classmethod
    def from_values(cls, columns, values):
        # type: (Sequence[str], Iterable[Any]) -> Row
        return cls(zip(columns, values))

    @property
    def columns(self):
        # type: () -> List[str]
        return list(self.keys())

    def __repr__(self):
        return 'Row(%s)' % ', '.join('%s=%r' % kv for kv in self.items())


class Result(object):
    """Outcome of a statement: either a value or a QueryError.

    The value is a list of Row for SELECT-class statements, a generated id
    (or list of ids, or True) for INSERT statements, and an affected-row
    count for everything else.  A failed Result is falsy; a successful one
    is truthy even when its value is 0 or an empty list.
    """

    def __init__(self, value=None, error=None):
        # type: (Any, Optional[QueryError]) -> None
        self.value = value
        self.error = error

    @classmethod
    def failure(cls, error):
        # type: (QueryError) -> Result
        return cls(error=error)

    @property
    def ok(self):
        # type: () -> bool
        return self.error is None

    def __bool__(self):
        return self.ok

    def unwrap(self):
        # type: () -> Any
        """Return the value or raise the exception matching the error.

        :raises DatabaseError: If the statement failed.
        """
        if self.error is not None:
            raise self.error.exception()
        return self.value

    def value_or(self, default):
        # type: (Any) -> Any
        return default if self.error is not None else self.value

    def __eq__(self, other):
        # type: (Any) -> bool
        if not isinstance(other, Result):
            return NotImplemented
        return self.value == other.value and self.error == other.error

    def __repr__(self):
        if self.error is not None:
            return 'Result(error=%r)' % (self.error,)
        return 'Result(%r)' % (self.value,)
