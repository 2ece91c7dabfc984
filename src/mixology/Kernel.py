#
# Copyright (c) 2025, Brian Frank and Andy Frank
# Licensed under the Academic Free License version 3.0
#

# Root modules of every composition graph

from .Obj import Obj
from .Module import Module
from .DispatchGate import DispatchGate
from .Env import Env
from .Log import LogLevel

MethodMissing = DispatchGate("MethodMissing", Env.cur().reserved_names())

Kernel = Module("Kernel", Obj.kernel_methods())

# The gate sits ahead of every Kernel method so real definitions win
Kernel.include(MethodMissing, resolve=False)

Module.method_added(lambda name, owner: MethodMissing.add_method(name))

Module._log.level(LogLevel.from_str(Env.cur().log_level()))

MethodMissing.add_methods(Env.cur().watched_names())
