## basicfl — Copyright © 2025, Alex J. Champandard.  Licensed under AGPLv3; see LICENSE! ⚘

import logging

from .objects import Object, is_error
from .parser import Literal, Call
from .registry import Builtins
from .environment import Environment
from .errors import BasicNameError, BasicArityError, BasicRuntimeError


logger = logging.getLogger(__name__)


def check_arity(name: str, arity: int, supplied: int, meta: dict | None = None) -> None:
    # Negative arity marks a variadic builtin, any count is accepted.
    if arity >= 0 and supplied != arity:
        raise BasicArityError(f"`{name}` expects {arity} argument(s), but {supplied} supplied.",
                              basic_token=name, basic_meta=meta, expected=arity, supplied=supplied)


def call_builtin(builtins: Builtins, env: Environment, name: str, args: list[Object], meta: dict | None = None) -> Object:
    """Resolve `name`, validate the argument count, invoke it, and raise if it returned an error object."""
    arity, fn = builtins.get(name)
    if fn is None:
        raise BasicNameError(f"Builtin `{name}` is not registered.", basic_token=name, basic_meta=meta)
    check_arity(name, arity, len(args), meta)

    result = fn(env, list(args))
    if is_error(result):
        raise BasicRuntimeError(result.value, basic_token=name, basic_meta=meta)
    logger.debug("%s(%d args) -> %r", name, len(args), result)
    return result


def evaluate(node: Literal | Call, builtins: Builtins, env: Environment) -> Object:
    if isinstance(node, Literal):
        return node.value
    # Arguments are evaluated left to right before the call itself.
    args = [evaluate(a, builtins, env) for a in node.args]
    return call_builtin(builtins, env, node.name, args, meta=node.meta)


def interpret(program: list[Literal | Call], builtins: Builtins, env: Environment, stats: dict | None = None) -> Object | None:
    """Evaluate each expression in turn, returning the value of the last one."""
    out = None
    for node in program:
        out = evaluate(node, builtins, env)
    if stats is not None:
        stats['expressions'] = stats.get('expressions', 0) + len(program)
    return out
