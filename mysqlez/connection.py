"""A module for connecting to a MySQL database.

(C) Copyright 2025 The mysqlez Developers.  All Rights Reserved.

This software is licensed under a BSD 3-Clause License.
See the LICENSE file provided with this software.

Exported Classes:
DatabaseClient -- Connection with prepare/bind/execute/fetch helpers.

Exported Functions:
connect -- Creates a DatabaseClient object.
normalize_rows -- Shapes batch parameters into one row per execution.
"""

__all__ = ['apilevel', 'threadsafety', 'paramstyle', 'connect',
           'normalize_rows', 'DatabaseClient']

import logging

from typing import Any, Callable, Dict, List, Optional, Sequence, Tuple  # pylint: disable=unused-import

import pymysql

from .config import DatabaseConfig
from .datatype import bind_params
from .exception import ConfigurationError, InterfaceError, QueryError
from .exception import error_from_driver
from .result import Result, Row
from . import sql as sqltext

apilevel = "2.0"
threadsafety = 1
paramstyle = "qmark"

_log = logging.getLogger("mysqlez")

ErrorSink = Callable[[QueryError], Any]


def connect(*args, **kwargs):
    # type: (*Any, **Any) -> DatabaseClient
    """Return a new DatabaseClient.

    Takes the same arguments as DatabaseClient: four positional values
    (host, user, password, database name), a single configuration mapping
    with keys host, user, pass and name, or a DatabaseConfig.
    """
    return DatabaseClient(*args, **kwargs)


def normalize_rows(rows, num):
    # type: (Any, int) -> List[Sequence[Any]]
    """Return ROWS as a list with one parameter sequence per execution.

    A scalar is a single row with one value.  A flat list is one row per
    value when NUM is 1, otherwise one row holding all of the values.

    :raises ValueError: If there are no rows.
    """
    if rows is None:
        raise ValueError("No parameter rows given for %d type codes" % num)
    if not isinstance(rows, (list, tuple)):
        return [[rows]]
    if not rows:
        raise ValueError("No parameter rows given for %d type codes" % num)
    if isinstance(rows[0], (list, tuple)):
        for row in rows:
            if not isinstance(row, (list, tuple)):
                raise ValueError("Mixed rows and scalars in %r" % (rows,))
        return list(rows)
    if num == 1:
        return [[val] for val in rows]
    return [rows]


class DatabaseClient(object):
    """An established connection with a MySQL database.

    Statement methods never raise for errors reported by the server:
    they return a Result, which is falsy on failure and carries a
    QueryError.  Bad arguments raise ConfigurationError and use of a
    client that failed to connect, or was closed, raises InterfaceError.

    A client is not safe for concurrent use from several threads, except
    for cancel().

    Public Functions:
    execute -- Run one statement with '?' parameters.
    run_batch -- Run one statement for many parameter rows in a transaction.
    bulk_insert -- Insert many rows with one statement, values inlined.
    build_insert -- Create an INSERT statement from a description.
    compile_columns -- Create a quoted column list.
    table_fields -- List the column names of a table.
    cancel -- Kill the statement currently running on this connection.
    close -- Closes the connection with the host.
    """

    # PEP 249 recommends that all exceptions be exposed as attributes in the
    # Connection object.
    from .exception import Warning, Error, InterfaceError, DatabaseError
    from .exception import OperationalError, IntegrityError, InternalError
    from .exception import ProgrammingError, NotSupportedError, DataError
    from .exception import ConfigurationError

    __conn = None    # type: Optional[pymysql.connections.Connection]
    __config = None  # type: DatabaseConfig

    def __init__(self, *args, **kwargs):
        # type: (*Any, **Any) -> None
        """Construct a DatabaseClient and connect.

        If the connection fails the error is kept in the error attribute and
        the client cannot be used.

        :param args: (host, user, password, name), a mapping or a
                     DatabaseConfig.
        :param error_sink: Optional callable receiving every QueryError.
        :param kwargs: Otherwise, keyword arguments for DatabaseConfig.
        """
        self.error_sink = kwargs.pop('error_sink', None)  # type: Optional[ErrorSink]
        self.error = None     # type: Optional[QueryError]
        self.warnings = []    # type: List[QueryError]

        self.__config = self._make_config(args, kwargs)

        try:
            self.__conn = pymysql.connect(**self.__config.connect_kwargs())
        except pymysql.err.Error as exc:
            self.error = self._record(error_from_driver('connect', exc))
            return

        _log.debug("Connected to %s:%d/%s", self.__config.host,
                   self.__config.port, self.__config.database)
        self._force_charset()

    @staticmethod
    def _make_config(args, kwargs):
        # type: (Tuple[Any, ...], Dict[str, Any]) -> DatabaseConfig
        if len(args) == 1 and not kwargs:
            if isinstance(args[0], DatabaseConfig):
                return args[0]
            return DatabaseConfig.from_mapping(args[0])
        if len(args) == 4:
            host, user, password, name = args
            return DatabaseConfig(host, user, password, name, **kwargs)
        if not args and kwargs:
            return DatabaseConfig(**kwargs)
        raise ConfigurationError(
            "Expecting (host, user, password, name) or one configuration mapping")

    def _force_charset(self):
        # type: () -> None
        charset = self.__config.charset
        try:
            self.__conn.set_character_set(charset)
        except pymysql.err.Error as exc:
            record = error_from_driver('set_character_set', exc)
            record.message = "Error loading character set %s: %s" % (charset, record.message)
            _log.warning("%s", record.message)
            self.warnings.append(record)
            if self.error_sink is not None:
                self.error_sink(record)

    def _record(self, error):
        # type: (QueryError) -> QueryError
        _log.warning("%s failed: %s", error.operation, error.message)
        if self.error_sink is not None:
            self.error_sink(error)
        return error

    def _fail(self, error):
        # type: (QueryError) -> Result
        return Result.failure(self._record(error))

    @property
    def connected(self):
        # type: () -> bool
        return self.__conn is not None and self.__conn.open

    def _check_open(self):
        # type: () -> pymysql.connections.Connection
        """Return the connection if it is available.

        :raises InterfaceError: If the connection failed or is closed.
        """
        if self.__conn is None:
            if self.error is not None:
                raise InterfaceError("connection failed: %s" % self.error.message)
            raise InterfaceError("connection is closed")
        return self.__conn

    def connection_config(self):
        # type: () -> Dict[str, Any]
        """Returns a copy of the connection configuration.

        Configuration:
          host            :str:   Address of the server
          port            :int:   Port of the server
          user            :str:   name of the connected user
          database        :str:   name of the connected database
          charset         :str:   connection character set
          connect_timeout :float: seconds to wait for the connection
          read_timeout    :float: seconds to wait for a response
          write_timeout   :float: seconds to wait while sending
          options         :dict:  extra driver options
          connected       :bool:  True if the connection is active

        The password is never included.
        """
        config = self.__config.as_dict()
        config['connected'] = self.connected
        return config

    @staticmethod
    def _bind(sql, params, types):
        # type: (str, Sequence[Any], Optional[str]) -> Tuple[str, Optional[Tuple[Any, ...]]]
        """Return the statement and arguments to hand to pymysql.

        :raises ValueError: If the parameters do not match the placeholders
                            or the type codes.
        """
        count = sqltext.count_placeholders(sql)
        if count != len(params):
            raise ValueError("Statement has %d placeholders but %d parameters were given"
                             % (count, len(params)))
        args = bind_params(params, types)
        if not args:
            return sql, None
        return sqltext.to_format_style(sql), args

    @staticmethod
    def _fetch_rows(cursor):
        # type: (pymysql.cursors.Cursor) -> List[Row]
        if cursor.description is None:
            return []
        columns = [desc[0] for desc in cursor.description]
        return [Row.from_values(columns, record) for record in cursor.fetchall()]

    def execute(self, sql, params=None, types=None):
        # type: (str, Any, Optional[str]) -> Result
        """Prepare and execute one statement.

        :param sql: The SQL statement, with '?' placeholders.
        :param params: The values for the placeholders; a scalar is a single
                       parameter.
        :param types: One type code per parameter ('i' integer, 'd' double,
                      's' string, 'b' blob); default all strings.
        :returns: Result holding a list of Row for SELECT, DESCRIBE, DESC,
                  SHOW and EXPLAIN; the generated id (or True) for INSERT;
                  the number of affected rows otherwise.
        """
        if not isinstance(sql, str):
            raise ConfigurationError("Expecting first parameter to be an SQL string.")
        conn = self._check_open()

        sql = sql.strip()
        verb = sqltext.statement_verb(sql)
        if params is None:
            params = []
        elif not isinstance(params, (list, tuple)):
            params = [params]
        if not params:
            # Nothing to bind: type codes are ignored
            types = None

        try:
            query, args = self._bind(sql, params, types)
        except ValueError as exc:
            return self._fail(QueryError('bind', 'OperationalError', None, str(exc)))

        _log.debug("execute %s with %d parameter(s)", verb or sql[:20], len(params))
        try:
            with conn.cursor() as cursor:
                cursor.execute(query, args)

                if verb in sqltext.ROW_VERBS:
                    return Result(self._fetch_rows(cursor))

                if verb == 'INSERT':
                    if cursor.lastrowid:
                        return Result(cursor.lastrowid)
                    if cursor.rowcount > 0:
                        return Result(True)
                    return self._fail(QueryError('execute', 'OperationalError', None,
                                                 "INSERT affected no rows"))

                return Result(cursor.rowcount)
        except pymysql.err.Error as exc:
            return self._fail(error_from_driver('execute', exc))

    def run_batch(self, sql, types=None, rows=None):
        # type: (str, Optional[str], Any) -> Result
        """Execute one statement for each row of parameters.

        All executions run inside one transaction, which is rolled back if
        any of them fails.  Without type codes the statement runs once with
        no parameters.

        :param sql: The SQL statement, with '?' placeholders.
        :param types: Type codes, one per placeholder.
        :param rows: The parameter rows; see normalize_rows().
        :returns: Result holding the generated id if there was exactly one,
                  the list of ids if there were several, otherwise the rows
                  of the last execution for statements returning rows or the
                  total number of affected rows.
        """
        if not isinstance(sql, str):
            raise ConfigurationError("Expecting first parameter to be an SQL string.")
        if types is not None and not isinstance(types, str):
            raise ConfigurationError("Type codes must be a string, got %r" % (types,))
        conn = self._check_open()

        sql = sql.strip()
        num = len(types) if types else 0

        try:
            if num:
                batches = [self._bind(sql, row, types)[1]
                           for row in normalize_rows(rows, num)]
                query = sqltext.to_format_style(sql)
            else:
                query, _ = self._bind(sql, [], None)
                batches = [None]
        except ValueError as exc:
            return self._fail(QueryError('prepare', 'OperationalError', None, str(exc)))

        _log.debug("run %s for %d row(s)", sqltext.statement_verb(sql) or sql[:20],
                   len(batches))
        ids = []       # type: List[int]
        affected = 0
        try:
            with conn.cursor() as cursor:
                if num:
                    cursor.execute("START TRANSACTION")
                for args in batches:
                    cursor.execute(query, args)
                    if cursor.lastrowid:
                        ids.append(cursor.lastrowid)
                    if cursor.description is None and cursor.rowcount > 0:
                        affected += cursor.rowcount
                # Rows of the last execution, read before COMMIT replaces them
                rowset = None  # type: Optional[List[Row]]
                if cursor.description is not None:
                    rowset = self._fetch_rows(cursor)
                if num:
                    cursor.execute("COMMIT")
        except pymysql.err.Error as exc:
            if num:
                self._rollback(conn)
            return self._fail(error_from_driver('execute', exc))

        if len(ids) == 1:
            return Result(ids[0])
        if len(ids) > 1:
            return Result(ids)
        if rowset is not None:
            return Result(rowset)
        return Result(affected)

    def _rollback(self, conn):
        # type: (pymysql.connections.Connection) -> None
        try:
            conn.rollback()
        except pymysql.err.Error as exc:
            _log.warning("rollback failed: %s", exc)

    def bulk_insert(self, table, columns, rows, update_on_duplicate=False):
        # type: (str, Any, Sequence[Sequence[Any]], bool) -> Result
        """Insert ROWS into TABLE with a single multi-row INSERT.

        Values are escaped and quoted inline rather than bound, except None
        (NULL) and the expressions in sql.SAFE_EXPRESSIONS.  Table and column
        names are interpolated as given: never pass untrusted text for them.

        :returns: Result holding the number of affected rows.
        :raises ConfigurationError: If the table, columns or rows are invalid.
        """
        conn = self._check_open()
        query = sqltext.build_bulk_insert(table, columns, rows, update_on_duplicate,
                                          escape=conn.escape_string,
                                          quote_bytes=conn.escape)
        _log.debug("bulk insert of %d row(s) into %s", len(rows), table)
        try:
            with conn.cursor() as cursor:
                cursor.execute(query)
                return Result(cursor.rowcount)
        except pymysql.err.Error as exc:
            return self._fail(error_from_driver('execute', exc))

    @staticmethod
    def build_insert(spec=None, **kwargs):
        # type: (Any, **Any) -> str
        """See sql.build_insert()."""
        return sqltext.build_insert(spec, **kwargs)

    @staticmethod
    def compile_columns(columns, as_update=False):
        # type: (Sequence[str], bool) -> str
        """See sql.compile_columns()."""
        return sqltext.compile_columns(columns, as_update)

    def table_fields(self, table):
        # type: (str) -> Result
        """Return a Result holding the column names of TABLE, in order."""
        result = self.execute("DESCRIBE %s" % sqltext.quote_qualified(table))
        if not result:
            return result
        return Result([row['Field'] for row in result.value])

    def cancel(self):
        # type: () -> Result
        """Kill the statement currently running on this connection.

        A second, short-lived connection issues KILL QUERY for this
        connection's server thread, so this may be called from another
        thread while a statement blocks.
        """
        conn = self._check_open()
        thread_id = conn.thread_id()
        try:
            killer = pymysql.connect(**self.__config.connect_kwargs())
        except pymysql.err.Error as exc:
            return self._fail(error_from_driver('cancel', exc))
        try:
            with killer.cursor() as cursor:
                cursor.execute("KILL QUERY %d" % thread_id)
            _log.debug("Cancelled statement on thread %d", thread_id)
            return Result(True)
        except pymysql.err.Error as exc:
            return self._fail(error_from_driver('cancel', exc))
        finally:
            killer.close()

    def close(self):
        # type: () -> None
        """Close this connection to the database."""
        conn = self._check_open()
        self.__conn = None
        try:
            conn.close()
        except pymysql.err.Error as exc:
            # Already closed by the server: the handle is released anyway.
            _log.debug("close: %s", exc)

    def __enter__(self):
        # Return self to allow use within the 'with' block
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        if self.__conn is not None:
            self.close()
