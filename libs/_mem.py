## Copyright © 2025, Alex J. Champandard.  Licensed under AGPLv3; see LICENSE! ⚘

import logging

from basicfl.environment import Environment, interpreter_state
from basicfl.errors import BasicValueError
from basicfl.runtime import Runtime


logger = logging.getLogger(__name__)


def _memory(env: Environment) -> dict:
    return interpreter_state(env, Runtime).memory


def fn_peek(env: Environment, address: int) -> float:
    if address < 0: raise BasicValueError(f"PEEK of negative address {address}.")
    return _memory(env).get(address, 0.0)

def fn_poke(env: Environment, address: int, value: float) -> float:
    if address < 0: raise BasicValueError(f"POKE of negative address {address}.")
    _memory(env)[address] = value
    return value


__functions__ = [ fn_peek, fn_poke ]

logger.debug('LOADED libs/_mem.py')
