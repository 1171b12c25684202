## basicfl — Copyright © 2025, Alex J. Champandard.  Licensed under AGPLv3; see LICENSE! ⚘

import math
import random

from .objects import Object
from .environment import Environment
from .errors import BasicValueError
from .formatting import format_number, format_object


## TRIGONOMETRY
def fn_sin(x: float) -> float: return math.sin(x)
def fn_cos(x: float) -> float: return math.cos(x)
def fn_tan(x: float) -> float: return math.tan(x)
def fn_asn(x: float) -> float: return math.asin(x)
def fn_acs(x: float) -> float: return math.acos(x)
def fn_atn(x: float) -> float: return math.atan(x)
def fn_pi() -> float: return math.pi
## ARITHMETIC
def fn_abs(x: float) -> float: return abs(x)
def fn_sgn(x: float) -> float: return (x > 0) - (x < 0)
def fn_int(x: float) -> float: return float(int(x))
def fn_sqr(x: float) -> float: return math.sqrt(x)
def fn_exp(x: float) -> float: return math.exp(x)
def fn_ln(x: float) -> float: return math.log(x)
def fn_rnd(n: int) -> int:
    if n < 1: raise BasicValueError(f"RND needs a positive limit, got {n}.")
    return random.randrange(n)
def fn_bin(x: float) -> int:
    # The decimal digits of the number are read back as base 2, e.g. BIN(101) is 5.
    return int(str(int(x)), 2)
## STRINGS
def fn_len(s: str) -> int: return len(s)
def fn_left_s(s: str, n: int) -> str: return s[:max(n, 0)]
def fn_right_s(s: str, n: int) -> str: return s[-n:] if n > 0 else ""
def fn_mid_s(s: str, offset: int, length: int) -> str:
    if offset < 1: raise BasicValueError(f"MID$ offset must be at least 1, got {offset}.")
    return s[offset - 1:offset - 1 + max(length, 0)]
def fn_tl_s(s: str) -> str: return s[1:]
def fn_code(s: str) -> int:
    if not s: raise BasicValueError("CODE of an empty string.")
    return ord(s[0])
def fn_chr_s(n: int) -> str: return chr(n)
def fn_str_s(x: float) -> str: return format_number(x)
def fn_val(s: str) -> float: return float(s.strip())
## INPUT/OUTPUT
def fn_print(env: Environment, *args: Object) -> None:
    out = env.stdout()
    for arg in args:
        out.write(format_object(arg))
    out.write(env.line_ending())
    out.flush()
