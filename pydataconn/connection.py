"""A module for running commands on a database connection.

(C) Copyright 2013-2025 Dassault Systemes SE.  All Rights Reserved.

This software is licensed under a BSD 3-Clause License.
See the LICENSE file provided with this software.

Exported Classes:
Connector -- A connection that has not been opened yet.
DataConnection -- Owns an open connection and runs commands on it.

Exported Functions:
connect -- Open a DataConnection through a PEP 249 driver.
"""

__all__ = ['connect', 'Connector', 'DataConnection']

import copy
import logging

from typing import Any, Callable, Dict, Optional  # pylint: disable=unused-import

from .exception import ConnectionFailure, InterfaceError
from .statement import TEXT, Parameters  # pylint: disable=unused-import
from .statement import DataCommand, SelectCommand
from .result_set import SelectResult  # pylint: disable=unused-import

_log = logging.getLogger('pydataconn')

# Keyword arguments of connect() that configure the DataConnection rather
# than the driver, with the DataConnection argument each one sets.
_FACADE_ARGS = {'command_timeout': 'timeout', 'null_marker': 'null_marker'}


def connect(driver, *args, **kwargs):
    # type: (Any, *Any, **Any) -> DataConnection
    """Return a new, open DataConnection.

    :param driver: A PEP 249 driver module, or its connect() callable.
    :param args: Positional arguments for the driver's connect().
    :param kwargs: Keyword arguments for the driver's connect(), plus the
                   DataConnection options 'command_timeout' and
                   'null_marker'.
    :returns: A new DataConnection.
    :raises ConnectionFailure: If the driver fails to connect.
    """
    facade = {}
    for name, arg in _FACADE_ARGS.items():
        if name in kwargs:
            facade[arg] = kwargs.pop(name)
    return DataConnection(Connector(driver, *args, **kwargs), **facade)


class Connector(object):
    """A database connection that is not open yet.

    Holds the driver's connect callable and its arguments; open() makes
    the call.
    """

    def __init__(self, driver, *args, **kwargs):
        # type: (Any, *Any, **Any) -> None
        connect_func = getattr(driver, 'connect', driver)
        if not callable(connect_func):
            raise InterfaceError("No driver connect function provided.")
        self.__connect = connect_func
        self.__args = args
        self.__kwargs = kwargs
        self.driver = driver
        self.connection = None  # type: Any

    @property
    def is_open(self):
        # type: () -> bool
        return self.connection is not None

    def open(self):
        # type: () -> Any
        """Connect and return the driver connection.

        Opening an open connector returns the existing connection.

        :raises ConnectionFailure: If the driver fails to connect.
        """
        if self.connection is None:
            try:
                self.connection = self.__connect(*self.__args, **self.__kwargs)
            except Exception as ex:
                raise ConnectionFailure('failed to connect: %s' % (ex), cause=ex)
            _log.debug("opened connection %r", self.connection)
        return self.connection

    def close(self):
        # type: () -> None
        """Close the driver connection if one was opened."""
        conn, self.connection = self.connection, None
        if conn is None:
            return
        try:
            conn.close()
        except Exception as ex:
            raise ConnectionFailure('failed to close connection: %s' % (ex), cause=ex)
        _log.debug("closed connection %r", conn)


class DataConnection(object):
    """Owns an open database connection and runs commands on it.

    Public Functions:
    create_select_command -- Return a new SelectCommand on this connection.
    create_data_command -- Return a new DataCommand on this connection.
    select -- Execute a query and return its SelectResult.
    execute_scalar -- Execute a query and return its first value.
    execute_non_query -- Execute a statement and return the affected rows.
    connection_config -- Return a copy of the configuration.
    close -- Close the connection.

    The connection is not safe for concurrent use: run one command at a
    time, or give each thread its own DataConnection.

    Usage:

        with pydataconn.connect(sqlite3, 'test.db') as dc:
            result = dc.select("select * from item where itemid > @minitemid",
                               [("minitemid", 1)])
            for row in result:
                print(row["itemid"], row["name"])
    """

    from .exception import Error, InterfaceError, DatabaseError
    from .exception import OperationalError, ConnectionFailure
    from .exception import CommandTimeout, DriverError

    __connector = None        # type: Optional[Connector]
    __connection = None       # type: Any
    __config = None           # type: Dict[str, Any]

    def __init__(self, connection,         # type: Any
                 open=True,                # type: bool
                 timeout=None,             # type: Optional[float]
                 null_marker=None          # type: Any
                 ):
        # type: (...) -> None
        """Construct a DataConnection.

        :param connection: An open PEP 249 connection, or a Connector.
        :param open: If true open a Connector, else it must be open already.
                     A PEP 249 connection is open once it exists, so this
                     is ignored for one.
        :param timeout: Default command timeout in seconds.
        :param null_marker: Object the driver uses for a database null.
        :raises ConnectionFailure: If the connection cannot be opened.
        """
        if connection is None:
            raise InterfaceError("No connection provided.")

        if isinstance(connection, Connector):
            self.__connector = connection
            if open:
                self.__connection = connection.open()
            elif not connection.is_open:
                raise ConnectionFailure("connection is not open")
            else:
                self.__connection = connection.connection
            driver = connection.driver
        else:
            self.__connection = connection
            driver = None

        self.__config = {'driver': getattr(driver, '__name__', None),
                         'paramstyle': getattr(driver, 'paramstyle', None),
                         'timeout': timeout,
                         'null_marker': null_marker}

    @property
    def connection(self):
        # type: () -> Any
        """The underlying driver connection."""
        self._check_closed()
        return self.__connection

    @property
    def closed(self):
        # type: () -> bool
        return self.__connection is None

    def connection_config(self):
        # type: () -> Dict[str, Any]
        """Returns a copy of the connection configuration.

        Configuration:
          connected   :bool:  True if the connection is open
          driver      :str:   Name of the driver module, if known
          null_marker :any:   Object the driver uses for a database null
          paramstyle  :str:   PEP 249 paramstyle of the driver, if known
          timeout     :float: Default command timeout in seconds, or None

        :returns: Copy of the connection config names and values.
                  Modifying these values has no effect on the connection.
        """
        config = copy.copy(self.__config)
        config['connected'] = not self.closed
        return config

    def _check_closed(self):
        # type: () -> None
        """Check if the connection is available.

        :raises ConnectionFailure: If the connection is closed.
        """
        if self.__connection is None:
            raise ConnectionFailure("connection is closed")

    def _timeout(self, timeout):
        # type: (Optional[float]) -> Optional[float]
        return self.__config['timeout'] if timeout is None else timeout

    def create_select_command(self, command_text,     # type: str
                              parameters=None,        # type: Parameters
                              command_type=TEXT,      # type: str
                              timeout=None            # type: Optional[float]
                              ):
        # type: (...) -> SelectCommand
        """Return a new SelectCommand using the connection."""
        self._check_closed()
        return SelectCommand(command_text, self.__connection, command_type,
                             self._timeout(timeout), parameters,
                             self.__config['null_marker'])

    def create_data_command(self, command_text,     # type: str
                            parameters=None,        # type: Parameters
                            command_type=TEXT,      # type: str
                            timeout=None            # type: Optional[float]
                            ):
        # type: (...) -> DataCommand
        """Return a new DataCommand using the connection."""
        self._check_closed()
        return DataCommand(command_text, self.__connection, command_type,
                           self._timeout(timeout), parameters,
                           self.__config['null_marker'])

    def select(self, command_text,     # type: str
               parameters=None,        # type: Parameters
               command_type=TEXT,      # type: str
               timeout=None            # type: Optional[float]
               ):
        # type: (...) -> SelectResult
        """Execute a query and return all of its rows."""
        with self.create_select_command(command_text, parameters,
                                        command_type, timeout) as cmd:
            return cmd.result()

    def execute_scalar(self, command_text,     # type: str
                       parameters=None,        # type: Parameters
                       type_=None,             # type: Optional[type]
                       command_type=TEXT,      # type: str
                       timeout=None            # type: Optional[float]
                       ):
        # type: (...) -> Any
        """Execute a query and return the first column of the first row.

        :returns: The value converted to TYPE_, or None if there is no row.
        :raises CastError: If the value cannot be converted to TYPE_.
        """
        with self.create_select_command(command_text, parameters,
                                        command_type, timeout) as cmd:
            return cmd.execute_scalar(type_)

    def execute_non_query(self, command_text,     # type: str
                          parameters=None,        # type: Parameters
                          command_type=TEXT,      # type: str
                          timeout=None            # type: Optional[float]
                          ):
        # type: (...) -> int
        """Execute a statement and return the number of rows affected."""
        with self.create_data_command(command_text, parameters,
                                      command_type, timeout) as cmd:
            return cmd.execute_non_query()

    def close(self):
        # type: () -> None
        """Close the underlying connection.  Closing twice does nothing."""
        conn, self.__connection = self.__connection, None
        if conn is None:
            return
        if self.__connector is not None:
            self.__connector.close()
            return
        try:
            conn.close()
        except Exception as ex:
            raise ConnectionFailure('failed to close connection: %s' % (ex), cause=ex)
        _log.debug("closed connection %r", conn)

    def __enter__(self):
        # Return self to allow use within the 'with' block
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        # Always close the connection!
        self.close()
