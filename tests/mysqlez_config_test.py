"""
(C) Copyright 2025 The mysqlez Developers.  All Rights Reserved.

This software is licensed under a BSD 3-Clause License.
See the LICENSE file provided with this software.
"""

import pytest

from mysqlez.config import DatabaseConfig, parse_address, MYSQL_PORT
from mysqlez.exception import ConfigurationError


class TestParseAddress(object):

    ADDRS = {'localhost': ('localhost', None),
             'db0:3307': ('db0', 3307),
             '192.168.1.1': ('192.168.1.1', None),
             '192.168.1.1:3307': ('192.168.1.1', 3307),
             '2001:3200:3200::10': ('2001:3200:3200::10', None),
             '[2001::10]:3307': ('2001::10', 3307)}

    def test_addresses(self):
        for addr, expected in self.ADDRS.items():
            assert parse_address(addr) == expected, addr

    @pytest.mark.parametrize('addr', ['', 'db0:port', 'a:b:c'])
    def test_invalid(self, addr):
        with pytest.raises(ConfigurationError):
            parse_address(addr)


class TestDatabaseConfig(object):

    def test_from_mapping(self):
        cfg = DatabaseConfig.from_mapping({'host': 'db:3310', 'user': 'u',
                                           'pass': 'p', 'name': 'n',
                                           'read_timeout': 5})
        assert (cfg.host, cfg.port, cfg.user, cfg.password, cfg.database) == \
            ('db', 3310, 'u', 'p', 'n')
        assert cfg.charset == 'utf8mb4'
        assert cfg.read_timeout == 5
        assert cfg.connect_timeout is None

    def test_port_overrides_host(self):
        cfg = DatabaseConfig('db:3310', 'u', 'p', 'n', port=3311)
        assert cfg.port == 3311

    def test_default_port(self):
        assert DatabaseConfig('db', 'u', None, 'n').port == MYSQL_PORT

    def test_missing_keys(self):
        with pytest.raises(ConfigurationError) as ex:
            DatabaseConfig.from_mapping({'host': 'h', 'user': 'u'})
        assert str(ex.value) == "Missing configuration keys: pass, name"

    def test_not_a_mapping(self):
        with pytest.raises(ConfigurationError):
            DatabaseConfig.from_mapping(['h', 'u', 'p', 'n'])

    def test_from_env(self):
        env = {'APP_HOST': 'h', 'APP_USER': 'u', 'APP_PASS': 'p', 'APP_NAME': 'n',
               'APP_PORT': '3309', 'APP_CONNECT_TIMEOUT': '2.5'}
        cfg = DatabaseConfig.from_env('APP_', environ=env)
        assert (cfg.host, cfg.port, cfg.connect_timeout) == ('h', 3309, 2.5)

    def test_from_env_bad_timeout(self):
        env = {'APP_HOST': 'h', 'APP_USER': 'u', 'APP_PASS': 'p', 'APP_NAME': 'n',
               'APP_READ_TIMEOUT': 'soon'}
        with pytest.raises(ConfigurationError):
            DatabaseConfig.from_env('APP_', environ=env)

    def test_connect_kwargs(self):
        cfg = DatabaseConfig('h', 'u', 'p', 'n', write_timeout=3,
                             options={'ssl_disabled': True})
        kwargs = cfg.connect_kwargs()
        assert kwargs['autocommit'] is True
        assert kwargs['binary_prefix'] is True
        assert kwargs['write_timeout'] == 3
        assert kwargs['ssl_disabled'] is True
        assert 'read_timeout' not in kwargs

    def test_as_dict_hides_password(self):
        assert 'password' not in DatabaseConfig('h', 'u', 'p', 'n').as_dict()
