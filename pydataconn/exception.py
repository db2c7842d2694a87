"""Classes containing the exceptions for reporting errors.

(C) Copyright 2013-2025 Dassault Systemes SE.  All Rights Reserved.

This software is licensed under a BSD 3-Clause License.
See the LICENSE file provided with this software.

The hierarchy follows the shape of PEP 249 so callers used to DB-API drivers
can catch the same families of errors, with the specific kinds raised by
this layer underneath.
"""

__all__ = ['Error', 'InterfaceError', 'InvalidParameter', 'ColumnNotFound',
           'DatabaseError', 'DataError', 'CastError', 'FormatError',
           'OperationalError', 'ConnectionFailure', 'CommandTimeout',
           'NotSupportedError', 'DriverError', 'driver_error_handler']


class Error(Exception):
    def __init__(self, value, cause=None):
        super(Error, self).__init__(value)
        self.__value = value
        self.cause = cause

    def __str__(self):
        return str(self.__value)


class InterfaceError(Error):
    pass


class InvalidParameter(InterfaceError):
    """A command parameter (or the command mode) is malformed.

    :ivar names: The offending parameter names, in the order they were given.
    """

    names = ()

    def __init__(self, value, names=()):
        InterfaceError.__init__(self, value)
        self.names = tuple(names)


class ColumnNotFound(InterfaceError, LookupError):
    """A result does not contain the requested column."""

    def __init__(self, value, column=None):
        InterfaceError.__init__(self, value)
        self.column = column


class DatabaseError(Error):
    pass


class DataError(DatabaseError):
    pass


class CastError(DataError, TypeError):
    """A value cannot be converted to the requested type."""

    def __init__(self, value, source=None, target=None):
        DataError.__init__(self, value)
        self.source = source
        self.target = target


class FormatError(DataError, ValueError):
    pass


class OperationalError(DatabaseError):
    pass


class ConnectionFailure(OperationalError):
    pass


class CommandTimeout(OperationalError):
    def __init__(self, value, timeout=None, cause=None):
        OperationalError.__init__(self, value, cause)
        self.timeout = timeout


class NotSupportedError(DatabaseError):
    pass


class DriverError(DatabaseError):
    """Anything the underlying driver reported that has no better kind.

    The original driver exception is kept in ``cause``.
    """

    pass


def driver_error_handler(error):
    # type: (BaseException) -> Error
    """Return the error to raise for an exception from the driver.

    Errors already raised by this layer are returned unchanged; everything
    else is wrapped in a DriverError naming the driver's exception class.
    """
    if isinstance(error, Error):
        return error
    return DriverError('%s: %s' % (type(error).__name__, error), cause=error)
