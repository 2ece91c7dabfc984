#
# Copyright (c) 2025, Brian Frank and Andy Frank
# Licensed under the Academic Free License version 3.0
#

import os

from .Obj import Obj


class Env(Obj):
    """Process configuration read from environment variables.

    MIXOLOGY_LOG_LEVEL: initial level of the engine log (default info)
    MIXOLOGY_WATCH: comma separated names pre-registered with the dispatch gate
    MIXOLOGY_RESERVED: comma separated names the dispatch gate never watches
    """

    _instance = None

    def __init__(self, environ=None):
        super().__init__()
        self._environ = dict(os.environ if environ is None else environ)

    @staticmethod
    def cur():
        if Env._instance is None:
            Env._instance = Env()
        return Env._instance

    def vars(self):
        """Get a copy of the environment this Env was built from."""
        return dict(self._environ)

    def log_level(self):
        return self._environ.get("MIXOLOGY_LOG_LEVEL", "info")

    def watched_names(self):
        return Env._split(self._environ.get("MIXOLOGY_WATCH"))

    def reserved_names(self):
        return frozenset(Env._split(self._environ.get("MIXOLOGY_RESERVED")))

    @staticmethod
    def _split(value):
        if not value:
            return []
        return [name.strip() for name in value.split(",") if name.strip()]

    def to_str(self):
        return "Env"
