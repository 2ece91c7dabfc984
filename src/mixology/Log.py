#
# Copyright (c) 2025, Brian Frank and Andy Frank
# Licensed under the Academic Free License version 3.0
#

import datetime
import logging

from .Obj import Obj


class LogLevel(Obj):
    """
    LogLevel represents the severity of a log message.
    """

    _levels = {}

    def __init__(self, name, ordinal, py_level):
        super().__init__()
        self._name = name
        self._ordinal = ordinal
        self._py_level = py_level

    @staticmethod
    def from_str(name, checked=True):
        """Parse LogLevel from string"""
        level = LogLevel._levels.get(name.strip().lower())
        if level is not None:
            return level
        if checked:
            from .Err import ArgErr
            raise ArgErr(f"Unknown log level: {name}")
        return None

    @staticmethod
    def vals():
        return [LogLevel.debug, LogLevel.info, LogLevel.warn, LogLevel.err, LogLevel.silent]

    def name(self):
        return self._name

    def ordinal(self):
        return self._ordinal

    def py_level(self):
        """Matching stdlib logging level"""
        return self._py_level

    def to_str(self):
        return self._name

    def equals(self, other):
        return isinstance(other, LogLevel) and self._ordinal == other._ordinal

    def hash(self):
        return hash(self._ordinal)


LogLevel.debug = LogLevel("debug", 0, logging.DEBUG)
LogLevel.info = LogLevel("info", 1, logging.INFO)
LogLevel.warn = LogLevel("warn", 2, logging.WARNING)
LogLevel.err = LogLevel("err", 3, logging.ERROR)
LogLevel.silent = LogLevel("silent", 4, logging.CRITICAL + 10)

for _level in LogLevel.vals():
    LogLevel._levels[_level.name()] = _level


class LogRec(Obj):
    """
    LogRec represents a single log record.
    """

    def __init__(self, time, level, log_name, msg, err=None):
        super().__init__()
        self._time = time
        self._level = level
        self._log_name = log_name
        self._msg = msg
        self._err = err

    def time(self):
        return self._time

    def level(self):
        return self._level

    def log_name(self):
        return self._log_name

    def msg(self):
        return self._msg

    def err(self):
        return self._err

    def to_str(self):
        return f"[{self._level.name()}] {self._log_name}: {self._msg}"


class Log(Obj):
    """
    Log provides named logging on top of the stdlib logging package.
    """

    _logs = {}
    _handlers = []  # Global handlers (static)

    def __init__(self, name, register=True):
        """Create a new log. If register=True, adds to global registry."""
        super().__init__()
        if not Log._is_valid_name(name):
            from .Err import ArgErr
            raise ArgErr(f"Invalid log name: {name}")

        if register and name in Log._logs:
            from .Err import ArgErr
            raise ArgErr(f"Log already registered: {name}")

        self._name = name
        self._level = LogLevel.info
        self._py_logger = logging.getLogger(name)

        if register:
            Log._logs[name] = self

    @staticmethod
    def _is_valid_name(name):
        """Log names are dotted identifiers"""
        if not name:
            return False
        for c in name:
            if not (c.isalnum() or c == '.' or c == '_'):
                return False
        return True

    @staticmethod
    def get(name):
        """Get or create a log by name"""
        if name in Log._logs:
            return Log._logs[name]
        return Log(name, True)

    def name(self):
        return self._name

    def level(self, value=None):
        """Get or set log level - called as log.level() or log.level(new_level)"""
        if value is None:
            return self._level
        self._level = value
        return None

    def is_enabled(self, level):
        return level._ordinal >= self._level._ordinal

    def debug(self, msg, err=None):
        if self.is_enabled(LogLevel.debug):
            self._log(LogLevel.debug, msg, err)

    def _log(self, level, msg, err):
        rec = LogRec(datetime.datetime.now(), level, self._name, msg, err)
        self.log(rec)

    def log(self, rec):
        """Log a record - can be overridden by subclasses"""
        for handler in list(Log._handlers):
            handler(rec)

        self._py_logger.log(rec.level().py_level(), rec.msg(), exc_info=rec.err())

    def to_str(self):
        return self._name

    @staticmethod
    def add_handler(handler):
        """Add a global log handler"""
        if not callable(handler):
            from .Err import ArgErr
            raise ArgErr("Log handler must be callable")
        Log._handlers.append(handler)

    @staticmethod
    def remove_handler(handler):
        if handler in Log._handlers:
            Log._handlers.remove(handler)
