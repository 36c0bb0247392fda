"""SQL text helpers: placeholders, statement verbs and fragment builders.

(C) Copyright 2025 The mysqlez Developers.  All Rights Reserved.

This software is licensed under a BSD 3-Clause License.
See the LICENSE file provided with this software.

Statements use '?' positional placeholders.  pymysql interpolates
parameters with the '%s' format style, so the placeholders are rewritten
before execution and any literal '%' in the statement is doubled.

The builders in this module interpolate table and column names directly
into the SQL text.  Never pass untrusted input as a table or column name.
"""

__all__ = ['ROW_VERBS', 'SAFE_EXPRESSIONS', 'statement_verb',
           'split_placeholders', 'count_placeholders', 'to_format_style',
           'quote_identifier', 'quote_qualified', 'split_columns', 'compile_columns',
           'build_insert', 'render_literal', 'build_bulk_insert']

import re
from collections import abc
from typing import Any, Callable, List, Mapping, Optional, Sequence, Union  # pylint: disable=unused-import

from pymysql.converters import escape_bytes_prefixed, escape_string

from .exception import ConfigurationError

# Statements whose result is a set of rows.
ROW_VERBS = frozenset(['SELECT', 'DESCRIBE', 'DESC', 'SHOW', 'EXPLAIN'])

# Expressions emitted verbatim by build_bulk_insert instead of being quoted.
SAFE_EXPRESSIONS = frozenset(['NOW()', 'CURRENT_TIMESTAMP', 'CURRENT_TIMESTAMP()',
                              'UTC_TIMESTAMP()', 'CURDATE()', 'CURTIME()',
                              'UUID()'])

_VERB_RE = re.compile(r'^\s*(\w+)')

ColumnSpec = Union[str, Sequence[str]]


def statement_verb(sql):
    # type: (str) -> str
    """Return the upper-cased first word of SQL, or '' if there is none."""
    m = _VERB_RE.match(sql)
    return m.group(1).upper() if m else ''


def split_placeholders(sql):
    # type: (str) -> List[str]
    """Split SQL around its '?' placeholders.

    Question marks inside quoted strings, quoted identifiers and comments
    are not placeholders.  The result always has one more element than
    there are placeholders.
    """
    parts = []  # type: List[str]
    start = 0
    i = 0
    n = len(sql)
    while i < n:
        c = sql[i]
        if c in ("'", '"', '`'):
            # Skip to the matching close quote; doubled quotes and
            # backslash escapes stay inside the literal.
            i += 1
            while i < n:
                if sql[i] == '\\' and c != '`':
                    i += 2
                    continue
                if sql[i] == c:
                    if i + 1 < n and sql[i + 1] == c:
                        i += 2
                        continue
                    break
                i += 1
        elif c == '#' or (c == '-' and sql.startswith('-- ', i)):
            end = sql.find('\n', i)
            i = n if end < 0 else end
        elif c == '/' and sql.startswith('/*', i):
            end = sql.find('*/', i + 2)
            i = n if end < 0 else end + 1
        elif c == '?':
            parts.append(sql[start:i])
            start = i + 1
        i += 1
    parts.append(sql[start:])
    return parts


def count_placeholders(sql):
    # type: (str) -> int
    return len(split_placeholders(sql)) - 1


def to_format_style(sql):
    # type: (str) -> str
    """Rewrite '?' placeholders as '%s' for pymysql, escaping literal '%'."""
    return '%s'.join(part.replace('%', '%%') for part in split_placeholders(sql))


def quote_identifier(name):
    # type: (str) -> str
    return '`%s`' % name.replace('`', '``')


def quote_qualified(name):
    # type: (str) -> str
    """Quote a possibly schema-qualified name, e.g. shop.item."""
    return '.'.join(quote_identifier(part) for part in name.split('.'))


def split_columns(columns):
    # type: (Optional[ColumnSpec]) -> Any
    """Turn a comma separated column string into a list.

    Anything that is not a string is returned unchanged.
    """
    if isinstance(columns, str):
        return [c.strip() for c in columns.split(',')]
    return columns


def compile_columns(columns, as_update=False):
    # type: (Sequence[str], bool) -> str
    """Create an SQL-compatible list of columns.

    :param columns: The column names.
    :param as_update: When true, render "`col`=VALUES(`col`)" for each
                      column, for use in ON DUPLICATE KEY UPDATE.
    :raises ConfigurationError: If the list is the lone wildcard '*'.
    """
    columns = list(columns)
    if len(columns) == 1 and columns[0] == '*':
        raise ConfigurationError("Cannot compile '*' as column list.")
    if as_update:
        return ','.join('%s=VALUES(%s)' % (quote_identifier(c), quote_identifier(c))
                        for c in columns)
    return ','.join(quote_identifier(c) for c in columns)


def build_insert(spec=None, **kwargs):
    # type: (Optional[Mapping[str, Any]], **Any) -> str
    """Create an SQL statement from a description of it.

    The description is a mapping, keyword arguments, or both (keywords
    win).  Recognised keys:

      op                  :str:  operation, default 'SELECT'
      table               :str:  table name (required)
      columns             :str|list: comma separated string or list
      ignore_duplicates   :bool: use INSERT IGNORE
      update_on_duplicate :bool: append ON DUPLICATE KEY UPDATE

    Only INSERT is implemented: any other operation returns ''.

    :raises ConfigurationError: On a missing table, a non-string op or a
                                missing column list for INSERT.
    """
    params = dict(spec or {})
    params.update(kwargs)

    op = params.get('op', 'SELECT')
    table = params.get('table')
    columns = split_columns(params.get('columns'))
    ignore = params.get('ignore_duplicates', False)
    update = params.get('update_on_duplicate', False)

    if not isinstance(op, str):
        raise ConfigurationError("'op' must be a string.")
    op = op.upper()

    if not table:
        raise ConfigurationError("You must provide a 'table' name.")

    sql = []  # type: List[str]
    if op == 'INSERT':
        if not isinstance(columns, (list, tuple)) or not columns:
            raise ConfigurationError("Expecting list of 'columns' for INSERT operation.")
        if ignore:
            sql.append("INSERT IGNORE INTO %s" % quote_identifier(table))
        else:
            sql.append("INSERT INTO %s" % quote_identifier(table))
        sql.append("(%s)" % compile_columns(columns))
        sql.append("VALUES (%s)" % ','.join('?' * len(columns)))
        if update:
            sql.append("ON DUPLICATE KEY UPDATE %s" % compile_columns(columns, True))

    return ' '.join(sql)


def render_literal(value, escape=escape_string, quote_bytes=escape_bytes_prefixed):
    # type: (Any, Callable[[str], str], Callable[[bytes], str]) -> str
    """Render one value for inline use in a VALUES list.

    None becomes NULL and the SAFE_EXPRESSIONS are passed through.  Binary
    values are quoted whole by QUOTE_BYTES; every other value is escaped
    with ESCAPE and single-quoted.
    """
    if value is None:
        return 'NULL'
    if isinstance(value, bool):
        return "'%d'" % value
    if isinstance(value, str) and value.strip().upper() in SAFE_EXPRESSIONS:
        return value.strip()
    if isinstance(value, (bytes, bytearray, memoryview)):
        return quote_bytes(bytes(value))
    return "'%s'" % escape(str(value))


def build_bulk_insert(table, columns, rows, update_on_duplicate=False,
                      escape=escape_string, quote_bytes=escape_bytes_prefixed):
    # type: (str, ColumnSpec, Sequence[Sequence[Any]], bool, Callable[[str], str], Callable[[bytes], str]) -> str
    """Create one multi-row INSERT with the values inlined.

    A column specification of '*' omits the column list, so each row must
    then supply a value for every column of the table.

    :raises ConfigurationError: If the table, columns or rows are invalid.
    """
    if not isinstance(table, str) or not table.strip():
        raise ConfigurationError("You must provide a 'table' name.")
    if not columns or not isinstance(columns, (str, list, tuple)):
        raise ConfigurationError("You must provide 'columns' as a string or list.")
    if (isinstance(rows, (str, bytes)) or not isinstance(rows, abc.Sequence)
            or not rows):
        raise ConfigurationError("Expecting a non-empty list of 'rows'.")

    names = split_columns(columns)
    wildcard = list(names) == ['*']
    if not all(names):
        raise ConfigurationError("Empty column name in %r" % (columns,))

    values = []  # type: List[str]
    for row in rows:
        if isinstance(row, (str, bytes)) or not isinstance(row, abc.Sequence):
            raise ConfigurationError("Each row must be a list of values, got %r" % (row,))
        if not wildcard and len(row) != len(names):
            raise ConfigurationError("Row has %d values for %d columns"
                                     % (len(row), len(names)))
        values.append('(%s)' % ','.join(render_literal(v, escape, quote_bytes) for v in row))

    sql = ["INSERT INTO %s" % quote_identifier(table.strip())]
    if not wildcard:
        sql.append("(%s)" % compile_columns(names))
    sql.append("VALUES %s" % ','.join(values))
    if update_on_duplicate:
        if wildcard:
            raise ConfigurationError("ON DUPLICATE KEY UPDATE needs named columns, not '*'.")
        sql.append("ON DUPLICATE KEY UPDATE %s" % compile_columns(names, True))
    return ' '.join(sql)
