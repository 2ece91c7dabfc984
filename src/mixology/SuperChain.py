#
# Copyright (c) 2025, Brian Frank and Andy Frank
# Licensed under the Academic Free License version 3.0
#

import inspect
import weakref

from .Obj import Obj


class SuperChain(Obj):
    """Cursor over the implementations of one method for one invocation.

    A method asks for the next more general implementation by declaring a
    parameter named ``call_super``; the chain passes its own call_next as
    that keyword. Every invocation owns a fresh chain, so recursive and
    nested calls on the same receiver never share a cursor.
    """

    PARAM = "call_super"

    # fn -> bool, computed once per function
    _calls_super_cache = weakref.WeakKeyDictionary()

    def __init__(self, receiver, name, callees, args=(), kwargs=None):
        super().__init__()
        self._receiver = receiver
        self._name = name
        self._callees = list(callees)
        self._params = list(args)
        self._kwargs = dict(kwargs or {})
        self._index = len(self._callees) - 1

    @staticmethod
    def calls_super(fn):
        """Return True if fn declares the call_super parameter."""
        if not callable(fn):
            return False
        try:
            return SuperChain._calls_super_cache[fn]
        except (KeyError, TypeError):
            pass
        try:
            result = SuperChain.PARAM in inspect.signature(fn).parameters
        except (TypeError, ValueError):
            # Builtins without an introspectable signature never chain
            result = False
        try:
            SuperChain._calls_super_cache[fn] = result
        except TypeError:
            pass
        return result

    def receiver(self):
        return self._receiver

    def name(self):
        return self._name

    def callees(self):
        return list(self._callees)

    def index(self):
        return self._index

    def call(self):
        """Invoke the most specific implementation."""
        if self._index < 0:
            return self._no_more_super()
        return self._invoke(self._callees[self._index])

    def call_next(self, *args, **kwargs):
        """Invoke the next more general implementation.

        Positional args replace the leading arguments of the original call,
        keyword args are merged; the cursor is restored on return.
        """
        for i, arg in enumerate(args):
            if i < len(self._params):
                self._params[i] = arg
            else:
                self._params.append(arg)
        self._kwargs.update(kwargs)

        self._index -= 1
        try:
            if self._index < 0:
                return self._no_more_super()
            return self._invoke(self._callees[self._index])
        finally:
            self._index += 1

    def _invoke(self, fn):
        if SuperChain.calls_super(fn):
            kwargs = dict(self._kwargs)
            kwargs[SuperChain.PARAM] = self.call_next
            return fn(self._receiver, *self._params, **kwargs)
        return fn(self._receiver, *self._params, **self._kwargs)

    def _no_more_super(self):
        from .Err import NoSuperMethodErr
        from .Kernel import Kernel
        receiver = self._receiver
        handler = getattr(receiver, 'method_missing', None)
        default = Kernel.instance_method('method_missing')
        if handler is None or getattr(handler, '__func__', handler) is default:
            raise NoSuperMethodErr(self._name, receiver)
        return handler(self._name, list(self._params))

    def to_str(self):
        return f"SuperChain({self._name} @ {self._index})"
