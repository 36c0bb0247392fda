"""
(C) Copyright 2025 The mysqlez Developers.  All Rights Reserved.

This software is licensed under a BSD 3-Clause License.
See the LICENSE file provided with this software.
"""

import os
import logging
import random
import string

import pytest

from typing import Any, Dict, Generator  # pylint: disable=unused-import

import pymysql

from . import FakeDriver

_log = logging.getLogger("mysqleztest")

ENV_PREFIX = 'MYSQLEZ_TEST_'

_CHARS = string.ascii_lowercase + string.digits


@pytest.fixture
def driver(monkeypatch):
    # type: (Any) -> FakeDriver
    """Replace pymysql.connect so no server is needed."""
    fake = FakeDriver()
    monkeypatch.setattr(pymysql, 'connect', fake)
    return fake


@pytest.fixture(scope="session")
def database():
    # type: () -> Dict[str, Any]
    """Connection settings for a live server, taken from the environment.

    Tests using this fixture are skipped unless MYSQLEZ_TEST_HOST is set.
    """
    if not os.environ.get(ENV_PREFIX + 'HOST'):
        pytest.skip("Set %sHOST to run tests against a MySQL server" % ENV_PREFIX)

    config = {'host': os.environ[ENV_PREFIX + 'HOST'],
              'user': os.environ.get(ENV_PREFIX + 'USER', 'root'),
              'pass': os.environ.get(ENV_PREFIX + 'PASS', ''),
              'name': os.environ.get(ENV_PREFIX + 'NAME', 'mysqlez_test')}
    if os.environ.get(ENV_PREFIX + 'PORT'):
        config['port'] = int(os.environ[ENV_PREFIX + 'PORT'])
    _log.info("Using database %s on %s", config['name'], config['host'])
    return config


@pytest.fixture
def table_name():
    # type: () -> str
    """A table name unlikely to collide with concurrent test runs."""
    return 'ez_%s' % ''.join(random.choice(_CHARS) for _ in range(10))
