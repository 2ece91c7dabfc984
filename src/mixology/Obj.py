#
# Copyright (c) 2025, Brian Frank and Andy Frank
# Licensed under the Academic Free License version 3.0
#

import types


class Obj:
    """Base class for all composable objects.

    Carries the Kernel protocol natively so that Modules and Classes are
    receivers too. Instances of a Class receive the same functions through
    resolution of the Kernel module.
    """

    _hash_counter = 0

    # Class of instances created through Class.new; set on generated types
    klass = None

    # Names published through the Kernel module
    _KERNEL = ("initialize", "eigen", "extend", "is_a", "inspect",
               "method_missing", "respond_to", "method", "tap")

    def __init__(self):
        Obj._hash_counter += 1
        self._hash = Obj._hash_counter

    def equals(self, that):
        return self is that

    def hash(self):
        # Lazily initialize _hash if not set (subclasses may not call super().__init__())
        if not hasattr(self, '_hash'):
            Obj._hash_counter += 1
            self._hash = Obj._hash_counter
        return self._hash

    def to_str(self):
        return f"{type(self).__name__}@{self.hash()}"

    #########################################################################
    # Kernel
    #########################################################################

    def initialize(self, *args, **kwargs):
        pass

    def eigen(self):
        """Return the singleton module of this object, creating it lazily.

        The eigenclass resolves onto this object itself and starts out
        including the object's class-level module.
        """
        meta = self.__dict__.get('_meta')
        if meta is not None:
            return meta
        from .Module import Module
        meta = Module(resolve=self)
        self._meta = meta
        meta.include(self._class_module(), resolve=False)
        return meta

    def extend(self, source, resolve=True):
        """Attach the methods of source to this object only."""
        self.eigen().include(source, extended=self, resolve=resolve)
        return self

    def is_a(self, module):
        # Without singleton methods the eigenclass would only add the class module
        meta = self.__dict__.get('_meta')
        if meta is None:
            return self._class_module().includes(module)
        return meta.includes(module)

    def inspect(self):
        return self.to_str()

    def method_missing(self, name, args):
        from .Err import UndefinedMethodErr
        raise UndefinedMethodErr(name, self)

    def respond_to(self, name):
        attr = getattr(self, name, None)
        if attr is None:
            from .Kernel import MethodMissing
            MethodMissing.add_method(name)
            return False
        from .DispatchGate import DispatchGate
        return callable(attr) and not DispatchGate.is_missing(attr)

    def method(self, name):
        """Return name as a callable bound to this object."""
        attr = getattr(self, name, None)
        from .DispatchGate import DispatchGate
        if attr is None or not callable(attr) or DispatchGate.is_missing(attr):
            from .Err import UndefinedMethodErr
            raise UndefinedMethodErr(name, self)
        return attr

    def tap(self, block):
        block(self)
        return self

    def _class_module(self):
        klass = getattr(type(self), 'klass', None)
        if klass is not None:
            return klass
        from .Kernel import Kernel
        return Kernel

    @classmethod
    def kernel_methods(cls):
        return {name: cls.__dict__[name] for name in cls._KERNEL}

    def __getattr__(self, name):
        # Only reached when normal lookup misses: watched names go to method_missing
        if not name.startswith("_"):
            from .Kernel import MethodMissing
            if MethodMissing.is_watched(name):
                return types.MethodType(MethodMissing.methods().get(name), self)
        raise AttributeError(f"'{type(self).__name__}' object has no attribute '{name}'")

    def __str__(self):
        return self.inspect()

    def __eq__(self, other):
        return self.equals(other)

    def __hash__(self):
        return self.hash()

    def __repr__(self):
        return self.inspect()
