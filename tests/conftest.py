"""
(C) Copyright 2013-2025 Dassault Systemes SE.  All Rights Reserved.

This software is licensed under a BSD 3-Clause License.
See the LICENSE file provided with this software.
"""

import os
import logging

import pytest

from typing import Any, Mapping  # pylint: disable=unused-import

from . import create_items

_log = logging.getLogger("pydataconntest")

DATABASE_NAME = 'pydataconn_test.db'


@pytest.fixture
def database(tmp_path):
    # type: (Any) -> Mapping[str, Any]
    """Create a fresh SQLite database holding the item table."""
    path = os.path.join(str(tmp_path), DATABASE_NAME)
    create_items(path)
    _log.info("Database %s is available", path)

    return {'connect_args': {'database': path}}
