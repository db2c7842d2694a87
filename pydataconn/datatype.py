"""A module for converting and formatting values read from a database.

(C) Copyright 2013-2025 Dassault Systemes SE.  All Rights Reserved.

This software is licensed under a BSD 3-Clause License.
See the LICENSE file provided with this software.

Drivers hand back whatever Python objects they like for a column: SQLite
stores booleans as integers and may keep timestamps as epoch seconds or ISO
text, other drivers return Decimal for every NUMERIC.  The functions here
turn such a raw value into the type a caller asks for, or fail loudly.

Exported Functions:
convert -- Convert a raw value to a requested type.
format_value -- Format a value using the format() mini-language.
DateFromTicks -- Converts ticks to a Date object.
TimeFromTicks -- Converts ticks to a Time object.
TimestampFromTicks -- Converts ticks to a Timestamp object.
"""

__all__ = ['Date', 'Time', 'Timestamp', 'DateFromTicks', 'TimeFromTicks',
           'TimestampFromTicks', 'convert', 'format_value', 'LOCALZONE']

import decimal
from datetime import datetime as Timestamp, date as Date, time as Time
from datetime import tzinfo  # pylint: disable=unused-import

from typing import Any, Callable, Dict, Optional  # pylint: disable=unused-import

import tzlocal
from .exception import CastError, FormatError

LOCALZONE = tzlocal.get_localzone()


def DateFromTicks(ticks, zoneinfo=LOCALZONE):
    # type: (float, tzinfo) -> Date
    """Convert ticks to a Date object.

    The date is the day the ticks fall on in ZONEINFO.
    """
    return _from_ticks(ticks, zoneinfo, Date).date()


def TimeFromTicks(ticks, zoneinfo=LOCALZONE):
    # type: (float, tzinfo) -> Time
    """Convert ticks to a Time object.

    Returns the naive time of day in ZONEINFO.
    """
    return _from_ticks(ticks, zoneinfo, Time).time()


def TimestampFromTicks(ticks, zoneinfo=LOCALZONE):
    # type: (float, tzinfo) -> Timestamp
    """Convert ticks to a timezone-aware Timestamp object in ZONEINFO."""
    return _from_ticks(ticks, zoneinfo, Timestamp)


def _from_ticks(ticks, zoneinfo, target):
    # type: (float, tzinfo, type) -> Timestamp
    try:
        return Timestamp.fromtimestamp(float(ticks), tz=zoneinfo)
    except (OverflowError, OSError, ValueError) as ex:
        raise CastError('ticks %r are out of range: %s' % (ticks, ex),
                        source=ticks, target=target)


def _is_number(value):
    # type: (Any) -> bool
    return (isinstance(value, (int, float, decimal.Decimal))
            and not isinstance(value, bool))


def _to_bool(value):
    if isinstance(value, bool):
        return value
    if isinstance(value, int) and value in (0, 1):
        return value == 1
    return _fail(value, bool)


def _to_int(value):
    if isinstance(value, int) and not isinstance(value, bool):
        return value
    # Refuse to truncate: 1.5 is not an int.
    if isinstance(value, float) and value.is_integer():
        return int(value)
    if isinstance(value, decimal.Decimal) and value.is_finite() \
            and value == value.to_integral_value():
        return int(value)
    return _fail(value, int)


def _to_float(value):
    if _is_number(value):
        return float(value)
    return _fail(value, float)


def _to_decimal(value):
    if isinstance(value, decimal.Decimal):
        return value
    if isinstance(value, int) and not isinstance(value, bool):
        return decimal.Decimal(value)
    if isinstance(value, float):
        return decimal.Decimal(str(value))
    return _fail(value, decimal.Decimal)


def _to_bytes(value):
    if isinstance(value, bytes):
        return value
    if isinstance(value, (bytearray, memoryview)):
        return bytes(value)
    return _fail(value, bytes)


def _to_timestamp(value):
    if isinstance(value, Timestamp):
        return value
    if isinstance(value, str):
        return _parse_iso(Timestamp, value)
    if _is_number(value):
        return TimestampFromTicks(value)
    return _fail(value, Timestamp)


def _to_date(value):
    if isinstance(value, Timestamp):
        return value.date()
    if isinstance(value, Date):
        return value
    if isinstance(value, str):
        # Date text may carry a time of day, as SQLite timestamps do.
        return _parse_iso(Timestamp, value, Date).date()
    if _is_number(value):
        return DateFromTicks(value)
    return _fail(value, Date)


def _to_time(value):
    if isinstance(value, Time):
        return value
    if isinstance(value, Timestamp):
        return value.time()
    if isinstance(value, str):
        try:
            return Time.fromisoformat(value.strip())
        except ValueError:
            # Timestamp text gives its time of day.
            return _parse_iso(Timestamp, value, Time).time()
    if _is_number(value):
        return TimeFromTicks(value)
    return _fail(value, Time)


def _parse_iso(cls, text, target=None):
    try:
        return cls.fromisoformat(text.strip())
    except ValueError:
        return _fail(text, target or cls)


def _fail(value, target):
    raise CastError('cannot convert %s %r to %s'
                    % (type(value).__name__, value, target.__name__),
                    source=value, target=target)


CONVERTERS = {bool: _to_bool,
              int: _to_int,
              float: _to_float,
              decimal.Decimal: _to_decimal,
              bytes: _to_bytes,
              Timestamp: _to_timestamp,
              Date: _to_date,
              Time: _to_time,
              }  # type: Dict[type, Callable[[Any], Any]]


def convert(value, type_):
    # type: (Any, Optional[type]) -> Any
    """Convert VALUE to TYPE_.

    None (a database null) converts to None whatever the type.  A type of
    None returns the value unchanged.

    :raises CastError: If the value cannot be represented as TYPE_.
    """
    if value is None or type_ is None:
        return value
    converter = CONVERTERS.get(type_)
    if converter is not None:
        return converter(value)
    if isinstance(value, type_):
        return value
    return _fail(value, type_)


def format_value(value, format_spec):
    # type: (Any, str) -> str
    """Format VALUE with the format() mini-language.

    :raises FormatError: If FORMAT_SPEC is None or not valid for the value.
    """
    if format_spec is None:
        raise FormatError('format specifier cannot be None')
    try:
        return format(value, format_spec)
    except (ValueError, TypeError) as ex:
        raise FormatError('invalid format specifier %r for %s: %s'
                          % (format_spec, type(value).__name__, ex))
