#
# Copyright (c) 2025, Brian Frank and Andy Frank
# Licensed under the Academic Free License version 3.0
#

import sys
import traceback

from .Obj import Obj


class Err(Exception, Obj):
    """Base error class"""

    def __init__(self, msg=None, cause=None):
        Exception.__init__(self, msg)
        Obj.__init__(self)
        self._msg = msg
        self._cause = cause

    @classmethod
    def make(cls, msg=None, cause=None):
        """Factory method - creates instance of the calling class"""
        return cls(msg, cause)

    def msg(self):
        # Empty string when no message provided, not None
        return self._msg if self._msg is not None else ""

    def cause(self):
        return self._cause

    def to_str(self):
        if self._msg:
            return f"{type(self).__name__}: {self._msg}"
        return type(self).__name__

    def trace(self, out=None):
        """Print stack trace to out (default: stderr)"""
        out = out if out is not None else sys.stderr
        out.write(self.trace_to_str() + "\n")
        return self

    def trace_to_str(self):
        """Return stack trace as string"""
        s = self.to_str()

        tb = getattr(self, '__traceback__', None)
        if tb:
            s += "\n" + "".join(traceback.format_tb(tb))

        if self._cause:
            if hasattr(self._cause, 'trace_to_str'):
                s += "\n  Caused by: " + self._cause.trace_to_str()
            else:
                s += f"\n  Caused by: {self._cause!r}"

        return s

    def inspect(self):
        return self.to_str()

    def __str__(self):
        return self.msg()


class ArgErr(Err):
    """Argument error"""
    pass


class UndefinedMethodErr(Err):
    """Raised by the default method_missing handler.

    Carries the attempted message name and the receiver it was sent to.
    """

    def __init__(self, name, receiver, cause=None):
        desc = UndefinedMethodErr._describe(receiver)
        Err.__init__(self, f"undefined method `{name}' for {desc}", cause)
        self._name = name
        self._receiver = receiver

    def name(self):
        return self._name

    def receiver(self):
        return self._receiver

    @staticmethod
    def _describe(receiver):
        inspect = getattr(receiver, 'inspect', None)
        if callable(inspect):
            return inspect()
        return repr(receiver)


class NoSuperMethodErr(Err):
    """Raised when call_next runs past the end of a super-call chain"""

    def __init__(self, name, receiver, cause=None):
        desc = UndefinedMethodErr._describe(receiver)
        Err.__init__(self, f"No superclass method `{name}' on {desc}", cause)
        self._name = name
        self._receiver = receiver

    def name(self):
        return self._name

    def receiver(self):
        return self._receiver


class DuplicateDefinitionErr(Err):
    """Raised when a name is defined twice where redefinition is disallowed"""

    @staticmethod
    def make_for(owner, name):
        return DuplicateDefinitionErr(f"Cannot define `{name}' more than once on {owner.inspect()}")
