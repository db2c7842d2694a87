"""pydataconn materialized result set

(C) Copyright 2013-2025 Dassault Systemes SE.  All Rights Reserved.

This software is licensed under a BSD 3-Clause License.
See the LICENSE file provided with this software.
"""

__all__ = ['ResultColumn', 'ResultRow', 'SelectResult']

import collections

from typing import Any, Dict, Iterator, Optional, Tuple, Union  # pylint: disable=unused-import

from .exception import ColumnNotFound, DriverError, InterfaceError
from . import datatype


class ResultColumn(collections.namedtuple('ResultColumn',
                                          ['index', 'name', 'data_type'])):
    """Information about a result column.

    index -- Position of the column in the result, starting at 0.
    name -- Name of the column as reported by the driver.
    data_type -- The driver's type code for the column (may be None).
    """

    __slots__ = ()


class ResultRow(object):
    """The data in one result row.

    Values are addressed by column index or by (case insensitive) column
    name.  A row never changes after it has been read.
    """

    def __init__(self, select_result, values, null_marker=None):
        # type: (SelectResult, Any, Any) -> None
        """Create a row from the values a driver returned.

        :param select_result: The SelectResult this row is part of.
        :param values: Column values, in column order.
        :param null_marker: Object the driver uses for a database null.
        """
        self._select_result = select_result
        if null_marker is None:
            self._values = tuple(values)
        else:
            self._values = tuple(None if v is null_marker else v
                                 for v in values)

    @property
    def values(self):
        # type: () -> Tuple[Any, ...]
        return self._values

    def _index(self, key):
        # type: (Union[int, str]) -> int
        if isinstance(key, str):
            return self._select_result.column(key).index
        if isinstance(key, bool) or not isinstance(key, int):
            raise ColumnNotFound('column key must be a name or an index, not %s'
                                 % (type(key).__name__), column=key)
        if not -len(self._values) <= key < len(self._values):
            raise ColumnNotFound('%s has no column with index %d'
                                 % (type(self._select_result).__name__, key),
                                 column=key)
        return key

    def __getitem__(self, key):
        # type: (Union[int, str]) -> Any
        return self._values[self._index(key)]

    def __len__(self):
        # type: () -> int
        return len(self._values)

    def __iter__(self):
        # type: () -> Iterator[Any]
        return iter(self._values)

    def __eq__(self, other):
        if isinstance(other, ResultRow):
            return self._values == other._values
        return NotImplemented

    __hash__ = None  # type: ignore

    def __repr__(self):
        return 'ResultRow%r' % (self._values,)

    def value(self, key, type_=None, format_spec=None):
        # type: (Union[int, str], Optional[type], Optional[str]) -> Any
        """Return the value of a column converted to TYPE_.

        If FORMAT_SPEC is given the converted value is returned formatted
        as a string; a null value is returned as None either way.

        :raises ColumnNotFound: If the column does not exist.
        :raises CastError: If the value cannot be converted to TYPE_.
        :raises FormatError: If FORMAT_SPEC is not valid for the value.
        """
        value = datatype.convert(self[key], type_)
        if format_spec is None or value is None:
            return value
        return datatype.format_value(value, format_spec)

    def as_dict(self):
        # type: () -> Dict[str, Any]
        """Return the row as a dictionary of column name to value."""
        return dict(zip(self._select_result.column_names, self._values))


class SelectResult(object):
    """All the rows returned by a query, read into memory.

    A SelectResult is created empty and filled exactly once from a driver
    cursor by read().  From then on it holds no reference to the cursor or
    the connection and can be iterated any number of times.

    Reading everything up front trades memory for simplicity: a query that
    returns millions of rows holds them all.
    """

    def __init__(self):
        self._columns = ()         # type: Tuple[ResultColumn, ...]
        self._column_names = ()    # type: Tuple[str, ...]
        self._by_name = {}         # type: Dict[str, ResultColumn]
        self._rows = ()            # type: Tuple[ResultRow, ...]
        self._read = False

    def read(self, cursor, null_marker=None):
        # type: (Any, Any) -> SelectResult
        """Read the column information and every row from CURSOR.

        :param cursor: A PEP 249 cursor on which a statement was executed.
        :param null_marker: Object the driver uses for a database null.
        :returns: self
        :raises InterfaceError: If the result has already been read.
        """
        if self._read:
            raise InterfaceError("result has already been read")
        self._read = True

        description = cursor.description
        if description is None:
            # The statement did not produce a result set.
            return self

        columns = []
        by_name = {}   # type: Dict[str, ResultColumn]
        for i, desc in enumerate(description):
            col = ResultColumn(i, desc[0], desc[1])
            columns.append(col)
            # With duplicate names the first column wins.
            by_name.setdefault(col.name.lower(), col)

        self._columns = tuple(columns)
        self._column_names = tuple(c.name for c in columns)
        self._by_name = by_name

        ncols = len(columns)
        rows = []
        for values in cursor.fetchall():
            row = ResultRow(self, values, null_marker)
            if len(row) != ncols:
                raise DriverError('row has %d values but the result has %d columns'
                                  % (len(row), ncols))
            rows.append(row)
        self._rows = tuple(rows)
        return self

    @property
    def columns(self):
        # type: () -> Tuple[ResultColumn, ...]
        return self._columns

    @property
    def column_names(self):
        # type: () -> Tuple[str, ...]
        return self._column_names

    @property
    def rows(self):
        # type: () -> Tuple[ResultRow, ...]
        return self._rows

    def column(self, name):
        # type: (str) -> ResultColumn
        """Get the ResultColumn for a column name, ignoring case.

        :raises ColumnNotFound: If the result does not contain the column.
        """
        col = None
        if isinstance(name, str):
            col = self._by_name.get(name.lower())
        if col is None:
            raise ColumnNotFound("%s does not contain column '%s'"
                                 % (type(self).__name__, name), column=name)
        return col

    def __iter__(self):
        # type: () -> Iterator[ResultRow]
        return iter(self._rows)

    def __len__(self):
        # type: () -> int
        return len(self._rows)

    def __getitem__(self, index):
        # type: (int) -> ResultRow
        return self._rows[index]

    def __repr__(self):
        return '<%s columns=%r rows=%d>' % (type(self).__name__,
                                            self._column_names, len(self._rows))
