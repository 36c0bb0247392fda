"""Connection settings for a MySQL database.

(C) Copyright 2025 The mysqlez Developers.  All Rights Reserved.

This software is licensed under a BSD 3-Clause License.
See the LICENSE file provided with this software.

Exported Classes:
DatabaseConfig -- Host, credentials, database name and driver options.

Exported Functions:
parse_address -- Split a "host[:port]" string into host and port.
"""

__all__ = ['MYSQL_PORT', 'DEFAULT_CHARSET', 'DatabaseConfig', 'parse_address']

import copy
import os
from ipaddress import ip_address
from urllib.parse import urlparse

from typing import Any, Dict, Mapping, Optional, Tuple  # pylint: disable=unused-import

from .exception import ConfigurationError

MYSQL_PORT = 3306
DEFAULT_CHARSET = 'utf8mb4'

# Keys of the configuration mapping accepted by DatabaseConfig.from_mapping
REQUIRED_KEYS = ('host', 'user', 'pass', 'name')
TIMEOUT_KEYS = ('connect_timeout', 'read_timeout', 'write_timeout')


def _to_ipaddr(addr):
    # type: (str) -> str
    return str(ip_address(addr))


def parse_address(addr):
    # type: (str) -> Tuple[str, Optional[int]]
    """Split ADDR into (host, port); port is None if not given.

    Accepts bare v4/v6 addresses, hostnames, "host:port", "v4:port" and
    "[v6]:port".

    :raises ConfigurationError: If the address cannot be parsed.
    """
    if not addr:
        raise ConfigurationError("No host provided.")
    port = None
    try:
        # v4/v6 addr w/o port e.g. 192.168.1.1, 2001:3200:3200::10
        host = _to_ipaddr(addr)
    except ValueError:
        # v4/v6 addr w/port e.g. 192.168.1.1:3306, [2001::10]:3306
        try:
            parsed = urlparse('//{}'.format(addr))
            hostname = parsed.hostname
        except ValueError:
            hostname = None
        if hostname is None:
            raise ConfigurationError("Invalid Host/IP Address format: %s" % (addr))
        try:
            host = _to_ipaddr(hostname)
            port = parsed.port
        except ValueError:
            parts = addr.split(":")
            if len(parts) == 1:
                # hostname w/o port e.g. db0
                host = addr
            elif len(parts) == 2:
                # hostname with port e.g. db0:3306
                host = parts[0]
                try:
                    port = int(parts[1])
                except ValueError:
                    raise ConfigurationError("Invalid Host/IP Address format: %s" % addr)
            else:
                raise ConfigurationError("Invalid Host/IP Address format: %s" % addr)
    return host, port


class DatabaseConfig(object):
    """Everything needed to open a connection.

    :param host: Host name or address, optionally with ":port".
    :param user: Username to connect with.
    :param password: Password to connect with.
    :param database: Name of the database to use.
    :param port: Port; overrides a port given in HOST.
    :param charset: Connection character set, forced after connecting.
    :param connect_timeout: Seconds to wait for the connection.
    :param read_timeout: Seconds to wait for a server response.
    :param write_timeout: Seconds to wait while sending a statement.
    :param options: Extra keyword arguments for pymysql.connect().
    """

    def __init__(self, host,                # type: str
                 user,                      # type: str
                 password,                  # type: Optional[str]
                 database,                  # type: str
                 port=None,                 # type: Optional[int]
                 charset=DEFAULT_CHARSET,   # type: str
                 connect_timeout=None,      # type: Optional[float]
                 read_timeout=None,         # type: Optional[float]
                 write_timeout=None,        # type: Optional[float]
                 options=None               # type: Optional[Mapping[str, Any]]
                 ):
        # type: (...) -> None
        if user is None:
            raise ConfigurationError("No user provided.")
        if database is None:
            raise ConfigurationError("No database provided.")

        self.host, _port = parse_address(host)
        if port is not None:
            self.port = int(port)
        elif _port is not None:
            self.port = _port
        else:
            self.port = MYSQL_PORT

        self.user = user
        self.password = password or ''
        self.database = database
        self.charset = charset or DEFAULT_CHARSET
        self.connect_timeout = connect_timeout
        self.read_timeout = read_timeout
        self.write_timeout = write_timeout
        self.options = dict(options or {})

    @classmethod
    def from_mapping(cls, config):
        # type: (Mapping[str, Any]) -> DatabaseConfig
        """Build a config from a mapping with keys host, user, pass, name.

        Optional keys: port, charset, connect_timeout, read_timeout,
        write_timeout and options.
        """
        if not isinstance(config, Mapping):
            raise ConfigurationError("Expecting a configuration mapping, got %r"
                                     % (type(config).__name__,))
        missing = [k for k in REQUIRED_KEYS if k not in config]
        if missing:
            raise ConfigurationError("Missing configuration keys: %s"
                                     % ', '.join(missing))
        kwargs = dict((k, config[k]) for k in TIMEOUT_KEYS if config.get(k) is not None)
        return cls(config['host'], config['user'], config['pass'], config['name'],
                   port=config.get('port'),
                   charset=config.get('charset', DEFAULT_CHARSET),
                   options=config.get('options'), **kwargs)

    @classmethod
    def from_env(cls, prefix='MYSQLEZ_', environ=None):
        # type: (str, Optional[Mapping[str, str]]) -> DatabaseConfig
        """Build a config from PREFIX + HOST, USER, PASS, NAME (and PORT,
        CHARSET, CONNECT_TIMEOUT, READ_TIMEOUT, WRITE_TIMEOUT)."""
        if environ is None:
            environ = os.environ
        config = {}  # type: Dict[str, Any]
        for key in REQUIRED_KEYS + ('port', 'charset'):
            val = environ.get(prefix + key.upper())
            if val is not None:
                config[key] = val
        for key in TIMEOUT_KEYS:
            val = environ.get(prefix + key.upper())
            if val is not None:
                try:
                    config[key] = float(val)
                except ValueError:
                    raise ConfigurationError("%s%s must be a number: %r"
                                             % (prefix, key.upper(), val))
        return cls.from_mapping(config)

    def connect_kwargs(self):
        # type: () -> Dict[str, Any]
        """Return the keyword arguments for pymysql.connect()."""
        kwargs = dict(self.options)
        kwargs.update({'host': self.host,
                       'port': self.port,
                       'user': self.user,
                       'password': self.password,
                       'database': self.database,
                       'charset': self.charset,
                       'autocommit': True,
                       # escape() marks bytes as _binary'...' literals
                       'binary_prefix': True})
        for key in TIMEOUT_KEYS:
            val = getattr(self, key)
            if val is not None:
                kwargs[key] = val
        return kwargs

    def as_dict(self):
        # type: () -> Dict[str, Any]
        """Return a copy of the settings, without the password."""
        return {'host': self.host,
                'port': self.port,
                'user': self.user,
                'database': self.database,
                'charset': self.charset,
                'connect_timeout': self.connect_timeout,
                'read_timeout': self.read_timeout,
                'write_timeout': self.write_timeout,
                'options': copy.deepcopy(self.options)}
