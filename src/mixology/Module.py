#
# Copyright (c) 2025, Brian Frank and Andy Frank
# Licensed under the Academic Free License version 3.0
#

import functools
import inspect
import types
import weakref

from .Obj import Obj
from .MethodTable import MethodTable
from .SuperChain import SuperChain
from .Log import Log


class Module(Obj):
    """Module - a named, composable unit of method implementations.

    A module owns a MethodTable, an ordered list of included modules and a
    weak set of dependents (the modules that included it). A module with a
    resolution target keeps that target in sync with its linearized method
    set: a Python type for classes, a single receiver for eigenclasses.
    """

    _log = Log.get("mixology")

    # Bumped on every graph mutation; guards the lookup caches
    _generation = 0

    # Method-added observers: (block, context)
    _observers = []

    # Record keys with a structural meaning for include() unless bound to a method
    _STRUCTURE = frozenset(["include", "extend"])

    def __init__(self, name=None, methods=None, resolve=None):
        super().__init__()
        if methods is None and name is not None and not isinstance(name, str):
            name, methods = None, name
        self._name = name
        self._fns = MethodTable(self)
        self._inc = []
        self._dep = weakref.WeakSet()
        self._res = resolve
        self._made = {}
        self._lookup_cache = {}
        self._lookup_generation = -1
        if methods is not None:
            self.include(methods, resolve=False)
            # A record extend key gave this module singleton methods to write
            if '_meta' in self.__dict__:
                self.resolve()

    #########################################################################
    # Identity
    #########################################################################

    def name(self):
        return self._name

    def methods(self):
        """Own MethodTable of this module"""
        return self._fns

    def included_modules(self):
        return list(self._inc)

    def dependents(self):
        return list(self._dep)

    def resolution_target(self):
        return self._res

    def to_str(self):
        if self._name:
            return self._name
        return f"{type(self).__name__}@{self.hash()}"

    #########################################################################
    # Hooks
    #########################################################################

    def included(self, base):
        """Called after this module is included into base"""
        pass

    def extended(self, receiver):
        """Called after this module extends receiver"""
        pass

    @staticmethod
    def method_added(block, context=None):
        """Register block(name, owner) to run whenever a method is defined"""
        Module._observers.append((block, context))

    @staticmethod
    def remove_method_added(block):
        Module._observers = [o for o in Module._observers if o[0] is not block]

    @staticmethod
    def _notify(name, owner):
        for block, context in reversed(list(Module._observers)):
            if context is None:
                block(name, owner)
            else:
                block(context, name, owner)

    #########################################################################
    # Mutation
    #########################################################################

    def define(self, name, fn, notify_as=None, resolve=True, redefine=True):
        """Set methods[name] = fn and resolve everything that depends on it.

        Redefinition silently overwrites unless redefine is False, in which
        case DuplicateDefinitionErr is raised.
        """
        if redefine:
            self._fns.set(name, fn)
        else:
            self._fns.add(name, fn)
        Module._generation += 1
        Module._log.debug(f"define {self.to_str()}.{name}")
        if callable(fn):
            Module._notify(name, notify_as if notify_as is not None else self)
        if resolve:
            self.resolve()

    def include(self, module, extended=None, notify_as=None, resolve=True):
        """Compose module into this one.

        A real Module becomes a graph edge. Anything else is treated as a
        record whose own keys are defined here directly; its ``include``
        and ``extend`` keys name modules to include and extend first.
        """
        if module is None:
            if resolve:
                self.resolve()
            return self

        if isinstance(module, Module):
            self._inc.append(module)
            module._dep.add(self)
            Module._generation += 1
            Module._log.debug(f"include {module.to_str()} into {self.to_str()}")
            if extended is not None:
                module.extended(extended)
            else:
                module.included(notify_as if notify_as is not None else self)
        else:
            record = Module._record(module)
            structure = {key: record.pop(key) for key in Module._STRUCTURE
                         if key in record and Module._is_structure(record[key])}
            for nested in Module._listify(structure.get("include")):
                self.include(nested, extended=extended, resolve=False)
            for nested in Module._listify(structure.get("extend")):
                self.extend(nested, resolve=False)
            owner = notify_as if notify_as is not None else (extended if extended is not None else self)
            for name, fn in record.items():
                self.define(name, fn, notify_as=owner, resolve=False)

        if resolve:
            self.resolve()
        return self

    @staticmethod
    def _record(source):
        """Own keys of a plain record: a dict, a plain class or an object"""
        if isinstance(source, dict):
            return dict(source)
        if inspect.isclass(source):
            record = {}
            for klass in reversed(source.__mro__[:-1]):
                for name, value in vars(klass).items():
                    if name.startswith("__") and name.endswith("__"):
                        continue
                    if isinstance(value, (staticmethod, classmethod)):
                        continue
                    record[name] = value
            return record
        return {name: value for name, value in vars(source).items()
                if not name.startswith("_")}

    @staticmethod
    def _is_structure(value):
        """Modules, records and lists of them; a plain callable is a method"""
        if isinstance(value, (Module, list, tuple, dict)) or inspect.isclass(value):
            return True
        return not callable(value)

    @staticmethod
    def _listify(value):
        if value is None:
            return []
        if isinstance(value, (list, tuple)):
            return list(value)
        return [value]

    #########################################################################
    # Ancestry
    #########################################################################

    def includes(self, module):
        """True if module is self or reachable through included modules"""
        if module is Obj:
            return True
        return self._reaches(module, set())

    def _reaches(self, module, seen):
        if self is module:
            return True
        seen.add(id(self))
        for inc in self._inc:
            if id(inc) not in seen and inc._reaches(module, seen):
                return True
        return False

    def ancestors(self):
        """Linearization: depth-first post-order, self last, first seen wins.

        The dispatch gate is never part of an ancestry.
        """
        from .Kernel import MethodMissing
        return [m for m in self._linearize() if m is not MethodMissing]

    def _linearize(self):
        results = []
        self._visit(results, set(), set())
        return results

    def _visit(self, results, placed, visiting):
        visiting.add(id(self))
        for inc in self._inc:
            if id(inc) not in visiting and id(inc) not in placed:
                inc._visit(results, placed, visiting)
        visiting.discard(id(self))
        if id(self) not in placed:
            placed.add(id(self))
            results.append(self)

    def lookup(self, name):
        """Every implementation of name defined by an ancestor, in ancestry order"""
        if self._lookup_generation != Module._generation:
            self._lookup_cache = {}
            self._lookup_generation = Module._generation
        cached = self._lookup_cache.get(name)
        if cached is None:
            cached = [m._fns.get(name) for m in self.ancestors() if m._fns.get(name) is not None]
            self._lookup_cache[name] = cached
        return list(cached)

    def instance_method(self, name):
        found = self.lookup(name)
        if found and callable(found[-1]):
            return found[-1]
        return None

    def instance_methods(self, include_super=True):
        """Distinct callable names visible through this module"""
        modules = self.ancestors() if include_super else [self]
        names = []
        seen = set()
        for module in reversed(modules):
            for name, fn in module._fns.items():
                if name not in seen and callable(fn):
                    seen.add(name)
                    names.append(name)
        return names

    #########################################################################
    # Resolution
    #########################################################################

    def resolve(self, target=None):
        """Bring resolution targets in line with the current graph.

        With no target, every module reachable through dependents
        (self included) is rewritten once. With a target module, only
        that module's resolution target is rewritten.
        """
        if target is not None:
            target._materialize()
            return
        sweep = self._dependents_closure()
        Module._log.debug(f"resolve {self.to_str()}: {len(sweep)} module(s)")
        for module in sweep:
            module._materialize()

    def _dependents_closure(self):
        order = [self]
        seen = {id(self)}
        i = 0
        while i < len(order):
            module = order[i]
            # A module's own singleton methods resolve with it
            meta = module.__dict__.get('_meta')
            deps = list(module._dep) + ([meta] if meta is not None else [])
            for dep in deps:
                if id(dep) not in seen:
                    seen.add(id(dep))
                    order.append(dep)
            i += 1
        return order

    def _slot_table(self):
        """Flattened name -> implementation, gate stubs first, last wins"""
        table = {}
        for module in self._linearize():
            for name, fn in module._fns.items():
                table[name] = fn
        return table

    def _materialize(self):
        target = self._res
        if target is None:
            return
        for name, fn in self._slot_table().items():
            made = self.make(name, fn)
            Module._write_slot(target, name, made)

    @staticmethod
    def _write_slot(target, name, made):
        slots = target.__dict__
        if isinstance(target, type):
            if name not in slots or slots[name] is not made:
                setattr(target, name, made)
        elif inspect.isfunction(made):
            if getattr(slots.get(name), '__func__', None) is not made:
                setattr(target, name, types.MethodType(made, target))
        elif name not in slots or slots[name] is not made:
            setattr(target, name, made)

    def make(self, name, fn):
        """Return fn, or a chain wrapper when fn asks for call_super"""
        if not SuperChain.calls_super(fn):
            return fn
        cached = self._made.get(name)
        if cached is not None and cached.__wrapped__ is fn:
            return cached
        module = self

        @functools.wraps(fn)
        def chained(receiver, *args, **kwargs):
            return module.chain(receiver, name, args, kwargs)

        self._made[name] = chained
        return chained

    def chain(self, receiver, name, args, kwargs=None):
        return SuperChain(receiver, name, self.lookup(name), args, kwargs).call()
