"""Classes containing the exceptions for reporting errors.

(C) Copyright 2025 The mysqlez Developers.  All Rights Reserved.

This software is licensed under a BSD 3-Clause License.
See the LICENSE file provided with this software.

Configuration errors are raised as soon as they are detected.  Errors
reported by the server are turned into QueryError records and handed back
inside a Result; Result.unwrap() raises the matching exception class.
"""

from typing import Any, Optional, Type  # pylint: disable=unused-import

import pymysql

__all__ = ['Warning', 'Error', 'InterfaceError', 'ConfigurationError',
           'DatabaseError', 'DataError', 'OperationalError',
           'IntegrityError', 'InternalError', 'ProgrammingError',
           'NotSupportedError', 'QueryError', 'error_from_driver']


class Warning(Exception):  # pylint: disable=redefined-builtin
    def __init__(self, value):
        super(Warning, self).__init__(value)
        self.__value = value

    def __str__(self):
        return str(self.__value)


class Error(Exception):
    def __init__(self, value):
        super(Error, self).__init__(value)
        self.__value = value

    def __str__(self):
        return str(self.__value)


class InterfaceError(Error):
    def __init__(self, value):
        Error.__init__(self, value)


class ConfigurationError(Error):
    """Bad builder input or missing connection settings."""

    def __init__(self, value):
        Error.__init__(self, value)


class DatabaseError(Error):
    code = None  # type: Optional[int]
    operation = None  # type: Optional[str]

    def __init__(self, value, code=None, operation=None):
        Error.__init__(self, value)
        self.code = code
        self.operation = operation


class DataError(DatabaseError):
    pass


class OperationalError(DatabaseError):
    pass


class IntegrityError(DatabaseError):
    pass


class InternalError(DatabaseError):
    pass


class ProgrammingError(DatabaseError):
    pass


class NotSupportedError(DatabaseError):
    pass


# Most specific first: pymysql's error classes share a common base.
_DRIVER_ERRORS = [
    (pymysql.err.DataError, DataError),
    (pymysql.err.IntegrityError, IntegrityError),
    (pymysql.err.InternalError, InternalError),
    (pymysql.err.ProgrammingError, ProgrammingError),
    (pymysql.err.NotSupportedError, NotSupportedError),
    (pymysql.err.OperationalError, OperationalError),
    (pymysql.err.InterfaceError, OperationalError),
]

_KINDS = dict((cls.__name__, cls) for _, cls in _DRIVER_ERRORS)
_KINDS[DatabaseError.__name__] = DatabaseError


class QueryError(object):
    """A structured record of an operational failure.

    :param operation: What was being attempted (connect, bind, execute...).
    :param kind: Name of the exception class that describes the failure.
    :param code: Server error number, or None for client-side failures.
    :param message: Human readable description.
    """

    def __init__(self, operation, kind, code, message):
        # type: (str, str, Optional[int], str) -> None
        self.operation = operation
        self.kind = kind
        self.code = code
        self.message = message

    def exception(self):
        # type: () -> DatabaseError
        """Return an exception instance matching this record."""
        cls = _KINDS.get(self.kind, DatabaseError)  # type: Type[DatabaseError]
        if self.code is None:
            text = '%s: %s' % (self.operation, self.message)
        else:
            text = '%s: (%d) %s' % (self.operation, self.code, self.message)
        return cls(text, code=self.code, operation=self.operation)

    def as_dict(self):
        return {'operation': self.operation, 'kind': self.kind,
                'code': self.code, 'message': self.message}

    def __eq__(self, other):
        # type: (Any) -> bool
        if not isinstance(other, QueryError):
            return NotImplemented
        return self.as_dict() == other.as_dict()

    def __repr__(self):
        return 'QueryError(%r, %r, %r, %r)' % (self.operation, self.kind,
                                               self.code, self.message)


def error_from_driver(operation, exc):
    # type: (str, Exception) -> QueryError
    """Translate an exception raised by pymysql into a QueryError.

    pymysql stores (errno, message) in args for server errors; client-side
    errors may carry only a message.
    """
    kind = DatabaseError.__name__
    for driver_cls, our_cls in _DRIVER_ERRORS:
        if isinstance(exc, driver_cls):
            kind = our_cls.__name__
            break

    code = None
    message = str(exc)
    args = getattr(exc, 'args', ())
    if len(args) >= 2 and isinstance(args[0], int):
        code = args[0]
        message = str(args[1])
    elif len(args) == 1:
        message = str(args[0])
    return QueryError(operation, kind, code, message)
