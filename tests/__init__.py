"""
(C) Copyright 2013-2025 Dassault Systemes SE.  All Rights Reserved.

This software is licensed under a BSD 3-Clause License.
See the LICENSE file provided with this software.
"""

import logging
import sqlite3

from typing import Any, List, Tuple  # pylint: disable=unused-import

_log = logging.getLogger("pydataconntest")

ITEMS = [(1, 'markus'), (2, 'tobias')]  # type: List[Tuple[int, str]]


def create_items(path):
    # type: (str) -> None
    """Create the item table in the SQLite database at PATH.

    This deliberately uses sqlite3 directly so that fixture setup does not
    depend on the code under test.
    """
    _log.info("Creating item table in %s", path)
    conn = sqlite3.connect(path)
    try:
        conn.execute("CREATE TABLE item ("
                     " itemid INTEGER NOT NULL PRIMARY KEY,"
                     " name TEXT NOT NULL UNIQUE)")
        conn.executemany("INSERT INTO item (itemid, name) VALUES (?, ?)", ITEMS)
        conn.commit()
    finally:
        conn.close()
