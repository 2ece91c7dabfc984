#
# Copyright (c) 2025, Brian Frank and Andy Frank
# Licensed under the Academic Free License version 3.0
#

import inspect

from .Module import Module


class DispatchGate(Module):
    """Registry of watched method names.

    Every watched name gets a stub that routes to the receiver's
    method_missing handler. Kernel includes the gate ahead of its own
    methods, so any real definition of a name shadows the stub on every
    resolution target. Names are never removed once registered.
    """

    def __init__(self, name="MethodMissing", reserved=()):
        super().__init__(name)
        self._reserved = frozenset(reserved)
        self._host_names = None

    @staticmethod
    def is_missing(fn):
        fn = getattr(fn, '__func__', fn)
        return getattr(fn, 'is_missing', False) is True

    def watched(self):
        return self._fns.names()

    def is_watched(self, name):
        return name in self._fns

    def is_reserved(self, name):
        """Names owned by the host objects themselves are never gated"""
        if not isinstance(name, str) or not name.isidentifier():
            return True
        if name.startswith("_"):
            return True
        if name in self._reserved:
            return True
        return name in self._host()

    def _host(self):
        if self._host_names is None:
            from .Class import Class
            self._host_names = frozenset(dir(Class))
        return self._host_names

    def add_method(self, name):
        """Watch name; returns True if it was newly registered"""
        if not self._watch(name):
            return False
        self.resolve()
        return True

    def add_methods(self, source):
        """Watch a list of names, the keys of a dict, or the attributes of a class"""
        if isinstance(source, (list, tuple, set, frozenset)):
            names = [n for n in source if isinstance(n, str)]
        elif isinstance(source, dict):
            names = list(source)
        elif inspect.isclass(source):
            names = [n for klass in source.__mro__[:-1] for n in vars(klass)]
        else:
            names = list(vars(source))
        added = [n for n in names if self._watch(n)]
        if added:
            self.resolve()
        return added

    def _watch(self, name):
        if name in self._fns or self.is_reserved(name):
            return False
        self._fns.set(name, DispatchGate._stub(name))
        Module._generation += 1
        Module._log.debug(f"watch {name}")
        return True

    @staticmethod
    def _stub(name):
        def missing(self, *args, **kwargs):
            return self.method_missing(name, list(args))
        missing.__name__ = name
        missing.is_missing = True
        return missing
