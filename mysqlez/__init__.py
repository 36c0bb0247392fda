"""A convenience layer over PyMySQL: parameterized execution with '?'
placeholders, row fetching and INSERT statement builders.

(C) Copyright 2025 The mysqlez Developers.  All Rights Reserved.

This software is licensed under a BSD 3-Clause License.
See the LICENSE file provided with this software.
"""

__version__ = '1.0.0'

from .connection import *  # pylint: disable=wildcard-import
from .config import *      # pylint: disable=wildcard-import
from .datatype import *    # pylint: disable=wildcard-import
from .exception import *   # pylint: disable=wildcard-import, redefined-builtin
from .result import *      # pylint: disable=wildcard-import
from .sql import build_insert, compile_columns  # noqa: F401
