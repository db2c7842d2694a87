"""
(C) Copyright 2013-2025 Dassault Systemes SE.  All Rights Reserved.

This software is licensed under a BSD 3-Clause License.
See the LICENSE file provided with this software.
"""

import copy
import sqlite3

import pytest

from typing import Any  # pylint: disable=unused-import

import pydataconn


class DataConnBase(object):
    longMessage = True

    # Set the driver module for the imported test suites
    driver = sqlite3  # type: Any

    connect_args = {}  # type: Any

    @pytest.fixture(autouse=True)
    def _setup(self, database):
        # Preserve the arguments we'll need to create a connection to the DB
        self.connect_args = database['connect_args']

    def _connect(self, **kwargs):
        connect_args = copy.deepcopy(self.connect_args)
        connect_args.update(kwargs)
        return pydataconn.connect(self.driver, **connect_args)
