#
# Copyright (c) 2025, Brian Frank and Andy Frank
# Licensed under the Academic Free License version 3.0
#

from .Obj import Obj


class MethodTable(Obj):
    """Own method implementations of exactly one Module, keyed by name."""

    def __init__(self, owner):
        super().__init__()
        self._owner = owner
        self._fns = {}

    def owner(self):
        return self._owner

    def get(self, name, default=None):
        return self._fns.get(name, default)

    def set(self, name, fn):
        self._fns[name] = fn

    def add(self, name, fn):
        """Set name, refusing to replace an existing entry."""
        if name in self._fns:
            from .Err import DuplicateDefinitionErr
            raise DuplicateDefinitionErr.make_for(self._owner, name)
        self._fns[name] = fn

    def names(self):
        return list(self._fns)

    def items(self):
        return list(self._fns.items())

    def size(self):
        return len(self._fns)

    def __contains__(self, name):
        return name in self._fns

    def __iter__(self):
        return iter(list(self._fns))

    def __len__(self):
        return len(self._fns)

    def to_str(self):
        return f"{self._owner.to_str()} methods"
