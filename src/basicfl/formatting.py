## basicfl — Copyright © 2025, Alex J. Champandard.  Licensed under AGPLv3; see LICENSE! ⚘

import re
import math

from .objects import Object, NumberObject, StringObject, ErrorObject


def format_number(value: float) -> str:
    # Integral values print without a fraction, everything else with six decimals.
    if math.isfinite(value) and value == int(value):
        return str(int(value))
    return f"{value:f}"


def format_object(obj: Object, quote: bool = False) -> str:
    if isinstance(obj, NumberObject):
        return format_number(obj.value)
    if isinstance(obj, StringObject):
        return '"' + obj.value.replace('"', '\\"') + '"' if quote else obj.value
    if isinstance(obj, ErrorObject):
        return f"ERROR: {obj.value}"
    return str(obj)


def write_without_ansi(write_fn):
    """Wrapper function that strips ANSI codes before calling the original writer."""
    ansi_re = re.compile(r'\033\[[0-9;]*m')
    return lambda text: write_fn(ansi_re.sub('', text))
