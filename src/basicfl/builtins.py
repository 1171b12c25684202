## basicfl — Copyright © 2025, Alex J. Champandard.  Licensed under AGPLv3; see LICENSE! ⚘

from . import functions
from .loader import get_basic_name
from .library import register_function
from .registry import Builtins


def load_builtins(builtins: Builtins | None = None) -> Builtins:
    """Register the standard BASIC functions (SIN, LEFT$, PRINT, ...) into a registry."""
    builtins = Builtins() if builtins is None else builtins

    for k in dir(functions):
        if not k.startswith('fn_'): continue
        register_function(builtins, get_basic_name(k), getattr(functions, k))

    return builtins
