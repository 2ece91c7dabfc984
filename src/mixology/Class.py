#
# Copyright (c) 2025, Brian Frank and Andy Frank
# Licensed under the Academic Free License version 3.0
#

from .Obj import Obj
from .Module import Module
from .Kernel import Kernel


class Class(Module):
    """A Module that can be instantiated.

    Each class generates a Python type that serves as its resolution
    target: resolution writes the linearized, chain-wrapped method set
    onto that type, so instances see every change to the graph without
    being recreated. Class-level methods live on the class's own
    eigenclass, which inherits the parent's eigenclass.
    """

    def __init__(self, name=None, parent=None, methods=None):
        # Positional forms: Class(parent, methods) and Class(methods)
        if name is not None and not isinstance(name, str):
            if isinstance(name, Class):
                name, parent, methods = None, name, parent if methods is None else methods
            else:
                name, methods = None, name
        if parent is not None and not isinstance(parent, Class):
            if methods is not None:
                from .Err import ArgErr
                raise ArgErr(f"Superclass must be a Class, not {parent!r}")
            parent, methods = None, parent

        type_name = name if name else "Anonymous"
        target = type(type_name, (Obj,), {"klass": self, "__module__": __name__})
        super().__init__(name, resolve=target)
        self._parent = parent

        self.include(parent if parent is not None else Kernel, resolve=False)
        if parent is not None:
            self.extend(parent.eigen())
        if methods is not None:
            self.include(methods, resolve=False)
        self.resolve()
        if parent is not None:
            parent.inherited(self)

    def superclass(self):
        return self._parent

    def instance_type(self):
        """Python type whose instances this class creates"""
        return self._res

    def inherited(self, subclass):
        """Called after subclass is created with this class as parent"""
        pass

    def new(self, *args, **kwargs):
        obj = self._res()
        obj.initialize(*args, **kwargs)
        return obj

    def __call__(self, *args, **kwargs):
        return self.new(*args, **kwargs)

    def to_str(self):
        if self._name:
            return self._name
        return f"Class@{self.hash()}"
