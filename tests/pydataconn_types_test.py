"""
(C) Copyright 2013-2025 Dassault Systemes SE.  All Rights Reserved.

This software is licensed under a BSD 3-Clause License.
See the LICENSE file provided with this software.
"""

import decimal
import datetime

import pytest

from pydataconn import datatype
from pydataconn.exception import CastError, FormatError

from . import pydataconn_base

UTC = datetime.timezone.utc


class TestDataConnTypes(pydataconn_base.DataConnBase):

    def test_column_types(self):
        with self._connect() as dc:
            dc.execute_non_query("CREATE TABLE typed ("
                                 " i INTEGER, r REAL, t TEXT, b BLOB, n NUMERIC)")
            dc.execute_non_query("INSERT INTO typed VALUES (@i, @r, @t, @b, @n)",
                                 [("i", 9223372036854775807), ("r", 5.5),
                                  ("t", 'simple'), ("b", b'\x00\x01'), ("n", None)])
            result = dc.select("SELECT * FROM typed")

        row = result[0]
        assert row.value("i", int) == 9223372036854775807
        assert row.value("r", float) == 5.5
        assert row.value("r", decimal.Decimal) == decimal.Decimal('5.5')
        assert row.value("t", str) == 'simple'
        assert row.value("b", bytes) == b'\x00\x01'
        assert row["n"] is None

    def test_timestamps_from_text_and_ticks(self):
        with self._connect() as dc:
            result = dc.select("SELECT '2024-02-29 13:45:00' AS ts, 0 AS ticks,"
                               " '2024-02-29' AS d, '13:45:00' AS t")

        row = result[0]
        assert row.value("ts", datetime.datetime) == datetime.datetime(2024, 2, 29, 13, 45)
        assert row.value("ts", datetime.date) == datetime.date(2024, 2, 29)
        assert row.value("d", datetime.date) == datetime.date(2024, 2, 29)
        assert row.value("t", datetime.time) == datetime.time(13, 45)
        assert row.value("ticks", datetime.datetime) == datetime.datetime(1970, 1, 1, tzinfo=UTC)
        assert row.value("ts", datetime.datetime, "%Y/%m/%d") == '2024/02/29'

        with pytest.raises(CastError):
            row.value("t", datetime.datetime)


def test_convert_none():
    for type_ in (int, str, float, bool, datetime.datetime, list):
        assert datatype.convert(None, type_) is None


def test_convert_no_type():
    value = object()
    assert datatype.convert(value, None) is value


def test_convert_int():
    assert datatype.convert(2, int) == 2
    assert datatype.convert(2.0, int) == 2
    assert datatype.convert(decimal.Decimal('10.000'), int) == 10

    for bad in (True, 2.5, decimal.Decimal('1.1'), decimal.Decimal('NaN'),
                float('inf'), '2', b'2'):
        with pytest.raises(CastError):
            datatype.convert(bad, int)


def test_convert_bool():
    assert datatype.convert(True, bool) is True
    assert datatype.convert(0, bool) is False
    assert datatype.convert(1, bool) is True

    for bad in (2, -1, 'true', 1.0):
        with pytest.raises(CastError):
            datatype.convert(bad, bool)


def test_convert_numbers():
    assert datatype.convert(1, float) == 1.0
    assert isinstance(datatype.convert(1, float), float)
    assert datatype.convert(decimal.Decimal('1.5'), float) == 1.5
    assert datatype.convert(0.1, decimal.Decimal) == decimal.Decimal('0.1')
    assert datatype.convert(3, decimal.Decimal) == decimal.Decimal(3)

    with pytest.raises(CastError):
        datatype.convert(True, float)
    with pytest.raises(CastError):
        datatype.convert('1.5', decimal.Decimal)


def test_convert_str_and_bytes():
    assert datatype.convert('abc', str) == 'abc'
    assert datatype.convert(bytearray(b'ab'), bytes) == b'ab'
    assert datatype.convert(memoryview(b'ab'), bytes) == b'ab'

    with pytest.raises(CastError):
        datatype.convert(1, str)
    with pytest.raises(CastError):
        datatype.convert('ab', bytes)


def test_convert_other_types():
    assert datatype.convert([1], list) == [1]

    with pytest.raises(CastError) as ex:
        datatype.convert((1,), list)
    assert ex.value.source == (1,)
    assert ex.value.target is list
    # A CastError is also a TypeError
    assert isinstance(ex.value, TypeError)


def test_convert_dates():
    dt = datetime.datetime(2020, 5, 17, 8, 30, 15)
    assert datatype.convert(dt, datetime.datetime) is dt
    assert datatype.convert(dt, datetime.date) == datetime.date(2020, 5, 17)
    assert datatype.convert('2020-05-17T08:30:15', datetime.datetime) == dt
    ticks = 86400 * 2 + 5
    assert datatype.convert(ticks, datetime.date) == \
        datatype.convert(ticks, datetime.datetime).date()

    for bad in ('yesterday', b'2020-05-17', 1.5j):
        with pytest.raises(CastError):
            datatype.convert(bad, datetime.datetime)
    with pytest.raises(CastError):
        datatype.convert('25:00', datetime.time)

    for bad in (1e20, float('inf'), float('nan'), decimal.Decimal('NaN'), 10 ** 400):
        for type_ in (datetime.date, datetime.datetime, datetime.time):
            with pytest.raises(CastError) as ex:
                datatype.convert(bad, type_)
            assert ex.value.target is type_


def test_convert_time_from_timestamp_text():
    assert datatype.convert('2024-02-29 13:45:00', datetime.time) == datetime.time(13, 45)
    assert datatype.convert('13:45:00.500000', datetime.time) == datetime.time(13, 45, 0, 500000)
    assert datatype.convert(' 13:45 ', datetime.time) == datetime.time(13, 45)


def test_ticks():
    ts = datatype.TimestampFromTicks(1700000000)
    assert ts.tzinfo is not None
    assert ts == datetime.datetime(2023, 11, 14, 22, 13, 20, tzinfo=UTC)

    ts = datatype.TimestampFromTicks(1700000000, UTC)
    assert ts.hour == 22
    assert datatype.TimeFromTicks(1700000000, UTC) == datetime.time(22, 13, 20)
    assert datatype.DateFromTicks(1700000000, UTC) == datetime.date(2023, 11, 14)
    assert datatype.DateFromTicks(-1, UTC) == datetime.date(1969, 12, 31)

    # The day depends on the zone, as it does for timestamps
    plus10 = datetime.timezone(datetime.timedelta(hours=10))
    minus5 = datetime.timezone(datetime.timedelta(hours=-5))
    assert datatype.DateFromTicks(1700000000, plus10) == datetime.date(2023, 11, 15)
    assert datatype.DateFromTicks(0, minus5) == datetime.date(1969, 12, 31)
    assert datatype.DateFromTicks(0, minus5) == datatype.TimestampFromTicks(0, minus5).date()
    assert datatype.TimeFromTicks(0, minus5) == datetime.time(19, 0)

    with pytest.raises(CastError):
        datatype.TimestampFromTicks(1e20)


def test_format_value():
    assert datatype.format_value(3.14159, '.2f') == '3.14'
    assert datatype.format_value(42, '') == '42'
    assert datatype.format_value(datetime.date(2020, 1, 2), '%d.%m.%Y') == '02.01.2020'

    with pytest.raises(FormatError):
        datatype.format_value(42, None)
    with pytest.raises(FormatError):
        datatype.format_value(42, 'q')
    with pytest.raises(FormatError) as ex:
        datatype.format_value('abc', 'd')
    # A FormatError is also a ValueError
    assert isinstance(ex.value, ValueError)
