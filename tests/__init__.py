"""
(C) Copyright 2025 The mysqlez Developers.  All Rights Reserved.

This software is licensed under a BSD 3-Clause License.
See the LICENSE file provided with this software.

Stand-ins for pymysql connections and cursors.  A FakeConnection answers
statements from a queue of Outcome objects, in order; transaction control
statements do not consume the queue.
"""

import logging

from typing import Any, List, Optional, Sequence, Tuple  # pylint: disable=unused-import

import pymysql
from pymysql.converters import escape_bytes_prefixed, escape_string

_log = logging.getLogger("mysqleztest")

CONTROL_STATEMENTS = ('START TRANSACTION', 'COMMIT', 'ROLLBACK')


class Outcome(object):
    """What the fake server does for one statement."""

    def __init__(self, columns=None,  # type: Optional[Sequence[str]]
                 rows=(),              # type: Sequence[Tuple[Any, ...]]
                 rowcount=None,        # type: Optional[int]
                 lastrowid=0,          # type: int
                 error=None            # type: Optional[Exception]
                 ):
        # type: (...) -> None
        self.columns = columns
        self.rows = list(rows)
        self.rowcount = len(self.rows) if rowcount is None else rowcount
        self.lastrowid = lastrowid
        self.error = error


def rows(columns, *records):
    return Outcome(columns=columns, rows=records)


def inserted(lastrowid, rowcount=1):
    return Outcome(rowcount=rowcount, lastrowid=lastrowid)


def affected(count):
    return Outcome(rowcount=count)


def failure(code, message, cls=pymysql.err.ProgrammingError):
    return Outcome(error=cls(code, message))


class FakeCursor(object):
    def __init__(self, conn):
        self.conn = conn
        self.description = None  # type: Optional[List[Tuple[Any, ...]]]
        self.rowcount = -1
        self.lastrowid = 0
        self._rows = []  # type: List[Tuple[Any, ...]]

    def execute(self, query, args=None):
        if not self.conn.open:
            raise pymysql.err.InterfaceError(0, '')
        self.conn.executed.append((query, args))
        _log.debug("fake execute: %s %r", query, args)
        if query.upper() in CONTROL_STATEMENTS:
            outcome = Outcome(rowcount=0)
            if query.upper() == 'COMMIT':
                self.conn.commits += 1
        elif self.conn.outcomes:
            outcome = self.conn.outcomes.pop(0)
        else:
            outcome = Outcome(rowcount=0)
        if outcome.error is not None:
            raise outcome.error

        if outcome.columns is None:
            self.description = None
        else:
            self.description = [(name, 253, None, None, None, None, True)
                                for name in outcome.columns]
        self._rows = list(outcome.rows)
        self.rowcount = outcome.rowcount
        self.lastrowid = outcome.lastrowid
        return self.rowcount

    def fetchall(self):
        records, self._rows = self._rows, []
        return records

    def close(self):
        pass

    def __enter__(self):
        return self

    def __exit__(self, *exc_info):
        self.close()


class FakeConnection(object):
    def __init__(self, **kwargs):
        self.kwargs = kwargs
        self.open = True
        self.executed = []   # type: List[Tuple[str, Any]]
        self.outcomes = []   # type: List[Outcome]
        self.commits = 0
        self.rollbacks = 0
        self.charset = kwargs.get('charset')
        self.charset_error = None  # type: Optional[Exception]

    def queue(self, *outcomes):
        self.outcomes.extend(outcomes)
        return self

    def set_character_set(self, charset, collation=None):
        if self.charset_error is not None:
            raise self.charset_error
        self.charset = charset

    def escape_string(self, s):
        return escape_string(s)

    def escape(self, obj):
        if isinstance(obj, (bytes, bytearray)):
            return escape_bytes_prefixed(bytes(obj))
        return "'%s'" % escape_string(str(obj))

    def thread_id(self):
        return 42

    def cursor(self):
        return FakeCursor(self)

    def rollback(self):
        self.rollbacks += 1

    def close(self):
        if not self.open:
            raise pymysql.err.Error("Already closed")
        self.open = False

    @property
    def statements(self):
        # type: () -> List[str]
        return [q for q, _ in self.executed]


class FakeDriver(object):
    """Replacement for pymysql.connect: hands out FakeConnections."""

    def __init__(self):
        self.connections = []  # type: List[FakeConnection]
        self.connect_error = None  # type: Optional[Exception]
        self.charset_error = None  # type: Optional[Exception]

    def __call__(self, **kwargs):
        if self.connect_error is not None:
            raise self.connect_error
        conn = FakeConnection(**kwargs)
        conn.charset_error = self.charset_error
        self.connections.append(conn)
        return conn

    @property
    def conn(self):
        # type: () -> FakeConnection
        return self.connections[0]
