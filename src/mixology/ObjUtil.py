#
# Copyright (c) 2025, Brian Frank and Andy Frank
# Licensed under the Academic Free License version 3.0
#

from .Obj import Obj
from .Module import Module
from .SuperChain import SuperChain


class ObjUtil:
    """Functional form of the composition API.

    Consumers that treat objects generically (runners, proxies) use these
    helpers instead of calling methods on the objects themselves.
    """

    @staticmethod
    def define_method(owner, name, fn):
        owner.define(name, fn)

    @staticmethod
    def include(owner, source, notify_as=None):
        return owner.include(source, notify_as=notify_as)

    @staticmethod
    def extend(receiver, source):
        return receiver.extend(source)

    @staticmethod
    def is_a(receiver, module):
        if isinstance(receiver, Obj):
            return receiver.is_a(module)
        if isinstance(module, type):
            return isinstance(receiver, module)
        return module is Obj

    @staticmethod
    def lookup(owner, name):
        return owner.lookup(name)

    @staticmethod
    def resolving_module(receiver):
        """Module whose linearization drives dispatch on receiver"""
        meta = receiver.__dict__.get('_meta') if isinstance(receiver, Obj) else None
        if meta is not None:
            return meta
        if isinstance(receiver, Module):
            return receiver.eigen()
        return receiver._class_module()

    @staticmethod
    def call_next(receiver, name, args=None, kwargs=None):
        """Invoke the implementation of name just below the receiver's own.

        Raises NoSuperMethodErr when nothing lies below and the receiver
        keeps the default method_missing.
        """
        module = ObjUtil.resolving_module(receiver)
        chain = SuperChain(receiver, name, module.lookup(name), args or (), kwargs)
        return chain.call_next()

    @staticmethod
    def respond_to(obj, name):
        if isinstance(obj, Obj):
            return obj.respond_to(name)
        return callable(getattr(obj, name, None))

    @staticmethod
    def inspect(obj):
        if obj is None:
            return "null"
        if isinstance(obj, Obj):
            return obj.inspect()
        return repr(obj)
