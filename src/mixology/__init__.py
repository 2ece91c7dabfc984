#
# Copyright (c) 2025, Brian Frank and Andy Frank
# Licensed under the Academic Free License version 3.0
#

# mixology - runtime module/class composition

# Base types
from .Obj import Obj

# Errors
from .Err import Err, ArgErr, UndefinedMethodErr, NoSuperMethodErr, DuplicateDefinitionErr

# Logging and configuration
from .Log import Log, LogLevel, LogRec
from .Env import Env

# Composition
from .MethodTable import MethodTable
from .SuperChain import SuperChain
from .Module import Module
from .DispatchGate import DispatchGate
from .Kernel import Kernel, MethodMissing
from .Class import Class

# Functional API
from .ObjUtil import ObjUtil
