## basicfl — Copyright © 2025, Alex J. Champandard.  Licensed under AGPLv3; see LICENSE! ⚘

from .objects import Object, NumberObject, StringObject, ErrorObject, is_error
from .environment import Environment, StreamEnvironment, interpreter_state
from .registry import Builtins, Signature
from .errors import *
from .runtime import Runtime

_RUNTIME = Runtime()

def __getattr__(name):
    return getattr(_RUNTIME, name)
