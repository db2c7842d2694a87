"""pydataconn SQL commands.

(C) Copyright 2013-2025 Dassault Systemes SE.  All Rights Reserved.

This software is licensed under a BSD 3-Clause License.
See the LICENSE file provided with this software.

Exported Classes:
DataCommand -- A statement with named parameters, executed for its effect.
SelectCommand -- A DataCommand that reads results.

Exported Functions:
bind_parameters -- Validate a set of (name, value) parameters.

A command owns one driver cursor from construction until close().  Use it
as a context manager so the cursor is released on every exit path:

    with SelectCommand("select * from item where itemid > @minid", conn,
                       parameters=[("minid", 1)]) as cmd:
        result = cmd.result()
"""

__all__ = ['TEXT', 'STORED_PROCEDURE', 'COMMAND_TYPES', 'bind_parameters',
           'DataCommand', 'SelectCommand']

import collections.abc
import logging
import numbers
import threading

from typing import Any, Callable, Iterable, List, Mapping  # pylint: disable=unused-import
from typing import Optional, Tuple, TypeVar, Union  # pylint: disable=unused-import

from .exception import Error, InterfaceError, InvalidParameter
from .exception import ConnectionFailure, CommandTimeout, NotSupportedError
from .exception import driver_error_handler
from .result_set import SelectResult
from . import datatype

_log = logging.getLogger('pydataconn')

# Command modes
TEXT = 'text'
STORED_PROCEDURE = 'stored_procedure'
COMMAND_TYPES = (TEXT, STORED_PROCEDURE)

# Placeholder prefixes callers may leave on a parameter name.
_SIGILS = '@:$'

T = TypeVar('T')
Parameters = Union[Mapping[str, Any], Iterable[Tuple[str, Any]], None]


def bind_parameters(parameters):
    # type: (Parameters) -> List[Tuple[str, Any]]
    """Return the validated (name, value) pairs from PARAMETERS.

    PARAMETERS is a mapping or an ordered sequence of (name, value) pairs.
    One leading '@', ':' or '$' is removed from each name.

    :raises InvalidParameter: If any name is missing, empty, not a string
                              or given more than once.
    """
    if parameters is None:
        return []
    if isinstance(parameters, collections.abc.Mapping):
        pairs = list(parameters.items())  # type: List[Any]
    else:
        pairs = list(parameters)

    bound = []   # type: List[Tuple[str, Any]]
    bad = []     # type: List[Any]
    seen = set()
    for pair in pairs:
        if isinstance(pair, (str, bytes)):
            bad.append(pair)
            continue
        try:
            name, value = pair
        except (TypeError, ValueError):
            bad.append(pair)
            continue
        if not isinstance(name, str):
            bad.append(name)
            continue
        key = name[1:] if name and name[0] in _SIGILS else name
        if not key or key in seen:
            bad.append(name)
            continue
        seen.add(key)
        bound.append((key, value))

    if bad:
        raise InvalidParameter('invalid parameter names: %s'
                               % (', '.join(repr(b) for b in bad)), names=bad)
    return bound


def _canceller(connection):
    # type: (Any) -> Optional[Callable[[], Any]]
    """Return the driver's hook for cancelling a running statement."""
    for name in ('interrupt', 'cancel'):
        func = getattr(connection, name, None)
        if callable(func):
            return func
    return None


class DataCommand(object):
    """A SQL statement with named parameters bound to an open connection.

    Public Functions:
    add_parameters -- Bind more (name, value) parameters.
    execute_non_query -- Execute the command, return the affected row count.
    close -- Release the driver cursor.
    """

    def __init__(self, command_text,      # type: str
                 connection,              # type: Any
                 command_type=TEXT,       # type: str
                 timeout=None,            # type: Optional[float]
                 parameters=None,         # type: Parameters
                 null_marker=None         # type: Any
                 ):
        # type: (...) -> None
        """Create a command.

        :param command_text: SQL text, or the procedure name for
                             STORED_PROCEDURE commands.
        :param connection: An open PEP 249 connection.
        :param command_type: TEXT or STORED_PROCEDURE.
        :param timeout: Seconds the command may run; None or 0 for no limit.
        :param parameters: Mapping or sequence of (name, value) pairs.
        :param null_marker: Object the driver uses for a database null.
        :raises InvalidParameter: If the parameters or mode are invalid.
        :raises ConnectionFailure: If the driver cannot create a cursor.
        """
        if connection is None:
            raise InterfaceError("No connection provided.")
        if command_type not in COMMAND_TYPES:
            raise InvalidParameter('invalid command type %r' % (command_type,))
        if timeout is not None and (isinstance(timeout, bool)
                                    or not isinstance(timeout, numbers.Real)
                                    or timeout < 0):
            raise InvalidParameter('invalid timeout %r' % (timeout,))

        self._parameters = bind_parameters(parameters)
        self._connection = connection
        self._command_text = command_text
        self._command_type = command_type
        self._timeout = timeout or None
        self._null_marker = null_marker

        try:
            self._cursor = connection.cursor()
        except Exception as ex:
            raise ConnectionFailure('cannot create a command: %s' % (ex), cause=ex)

    @property
    def command_text(self):
        # type: () -> str
        return self._command_text

    @property
    def command_type(self):
        # type: () -> str
        return self._command_type

    @property
    def timeout(self):
        # type: () -> Optional[float]
        return self._timeout

    @property
    def parameters(self):
        # type: () -> Tuple[Tuple[str, Any], ...]
        return tuple(self._parameters)

    @property
    def closed(self):
        # type: () -> bool
        return self._cursor is None

    def _check_closed(self):
        # type: () -> None
        if self._cursor is None:
            raise InterfaceError("command is closed")

    def add_parameters(self, parameters):
        # type: (Parameters) -> None
        """Bind PARAMETERS in addition to those already bound.

        :raises InvalidParameter: If a name is invalid or already bound.
        :raises InterfaceError: If the command is closed.
        """
        self._check_closed()
        added = bind_parameters(parameters)
        bound = set(name for name, _ in self._parameters)
        clash = [name for name, _ in added if name in bound]
        if clash:
            raise InvalidParameter('parameters already bound: %s'
                                   % (', '.join(repr(c) for c in clash)), names=clash)
        self._parameters.extend(added)

    def _execute(self):
        # type: () -> None
        """Run the statement on the cursor."""
        if self._command_type == STORED_PROCEDURE:
            callproc = getattr(self._cursor, 'callproc', None)
            if callproc is None:
                raise NotSupportedError('driver does not support stored procedures')
            callproc(self._command_text, [v for _, v in self._parameters])
        elif self._parameters:
            self._cursor.execute(self._command_text, dict(self._parameters))
        else:
            self._cursor.execute(self._command_text)

    def _run(self, operation):
        # type: (Callable[[], T]) -> T
        """Call OPERATION under the command timeout.

        Driver exceptions are translated; if the timeout expired while
        OPERATION ran the failure is reported as CommandTimeout.
        """
        self._check_closed()
        _log.debug("execute %s: %s", self._command_type, self._command_text)

        timer = None
        expired = threading.Event()
        if self._timeout:
            cancel = _canceller(self._connection)
            if cancel is None:
                _log.warning("driver cannot cancel statements: timeout of %s"
                             " seconds is not enforced", self._timeout)
            else:
                def expire():
                    expired.set()
                    _log.debug("timeout of %s seconds expired", self._timeout)
                    try:
                        cancel()
                    except Exception as ex:  # pylint: disable=broad-except
                        _log.warning("failed to cancel statement: %s", ex)

                timer = threading.Timer(self._timeout, expire)
                timer.daemon = True
                timer.start()

        try:
            return operation()
        except Exception as ex:
            if expired.is_set() and not isinstance(ex, Error):
                raise CommandTimeout('command exceeded its timeout of %s seconds'
                                     % (self._timeout), timeout=self._timeout,
                                     cause=ex)
            raise driver_error_handler(ex)
        finally:
            if timer is not None:
                timer.cancel()

    def execute_non_query(self):
        # type: () -> int
        """Execute the command and return the number of rows affected.

        The count is the driver's rowcount, -1 if it cannot tell.
        """
        def operation():
            self._execute()
            return self._cursor.rowcount

        return self._run(operation)

    def close(self):
        # type: () -> None
        """Release the driver cursor.  Closing twice does nothing."""
        cursor, self._cursor = self._cursor, None
        if cursor is None:
            return
        try:
            cursor.close()
        except Exception as ex:
            raise driver_error_handler(ex)

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        if exc_type is None:
            self.close()
            return
        try:
            self.close()
        except Error as ex:
            _log.warning("failed to close command: %s", ex)


class SelectCommand(DataCommand):
    """A DataCommand for queries.

    Public Functions:
    result -- Execute the query and read all rows into a SelectResult.
    execute_scalar -- Execute the query and return the first value.
    """

    def result(self):
        # type: () -> SelectResult
        """Read all rows returned by this command.

        The cursor is read to the end before this returns; the SelectResult
        stays valid after the command is closed.
        """
        def operation():
            self._execute()
            return SelectResult().read(self._cursor, self._null_marker)

        return self._run(operation)

    def execute_scalar(self, type_=None):
        # type: (Optional[type]) -> Any
        """Execute the query and return the first column of the first row.

        :param type_: Type to convert the value to, or None for the raw value.
        :returns: The value, or None if the query returned no rows.
        :raises CastError: If the value cannot be converted to TYPE_.
        """
        def operation():
            self._execute()
            if self._cursor.description is None:
                return None
            row = self._cursor.fetchone()
            if not row:
                return None
            return row[0]

        value = self._run(operation)
        if self._null_marker is not None and value is self._null_marker:
            value = None
        return datatype.convert(value, type_)
