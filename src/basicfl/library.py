## basicfl — Copyright © 2025, Alex J. Champandard.  Licensed under AGPLv3; see LICENSE! ⚘

from typing import Any, Callable

from .objects import Object, NumberObject, StringObject, ErrorObject, to_object
from .errors import BasicError, BasicValueError
from .loader import get_call_effects, iter_module_functions
from .registry import Builtins, Signature


# Exceptions a builtin may raise that are converted into an error object.
_FAILURES = (BasicError, TypeError, ValueError, ArithmeticError, IndexError, OSError)


def _unwrap(value: Object, expected, name: str, position: int):
    if expected is Object or expected is Any:
        return value
    if expected in (float, int):
        if not isinstance(value, NumberObject):
            raise BasicValueError(f"`{name}` expects a number at position {position}, got {_kind(value)}.", basic_token=name)
        return value.value if expected is float else int(value.value)
    if expected is str:
        if not isinstance(value, StringObject):
            raise BasicValueError(f"`{name}` expects a string at position {position}, got {_kind(value)}.", basic_token=name)
        return value.value
    if not isinstance(value, expected):
        raise BasicValueError(f"`{name}` expects {expected.__name__} at position {position}, got {_kind(value)}.", basic_token=name)
    return value

def _kind(value) -> str:
    return value.type() if isinstance(value, Object) else type(value).__name__


def _wrap(result, output) -> Object:
    if output in (float, int):
        return NumberObject(float(result))
    if output is str:
        return StringObject(str(result))
    return to_object(result)


def _describe(name: str, exc: Exception) -> str:
    return f"{name}: {exc}" if str(exc) else f"{name}: {type(exc).__name__}"


def make_signature(fn: Callable[..., Any], name: str) -> tuple[Signature, dict]:
    """Adapt an annotated Python function into a builtin `(env, args) -> Object`."""
    meta = get_call_effects(fn=fn, name=name)
    inputs, output, arity = meta['inputs'], meta['output'], meta['arity']

    match arity:
        case -1: # variadic, same annotation for every argument
            def unwrap(args: list[Object]) -> list:
                return [_unwrap(a, inputs[0], name, i+1) for i, a in enumerate(args)]
        case 0:
            def unwrap(args: list[Object]) -> list:
                if args: raise BasicValueError(f"`{name}` takes no arguments, got {len(args)}.", basic_token=name)
                return []
        case _:
            def unwrap(args: list[Object]) -> list:
                if len(args) != arity:
                    raise BasicValueError(f"`{name}` takes {arity} argument(s), got {len(args)}.", basic_token=name)
                return [_unwrap(a, t, name, i+1) for i, (a, t) in enumerate(zip(args, inputs))]

    def signature(env, args: list[Object]) -> Object:
        try:
            values = unwrap(args)
            result = fn(env, *values) if meta['uses_env'] else fn(*values)
            return _wrap(result, output)
        except _FAILURES as exc:
            return ErrorObject(_describe(name, exc))

    signature.__name__ = getattr(fn, '__name__', name)
    signature.__doc__ = fn.__doc__
    signature.__basic_meta__ = meta
    return signature, meta


def register_function(builtins: Builtins, name: str, fn: Callable[..., Any]) -> dict:
    signature, meta = make_signature(fn, name)
    builtins.register(name, meta['arity'], signature)
    return meta


def register_module(builtins: Builtins, ns: str, *, meta: dict | None = None) -> list[str]:
    """Register every builtin exported by the extension module `ns`, returning their names."""
    names = []
    for basic_name, py_fn in iter_module_functions(ns, meta=meta):
        register_function(builtins, basic_name, py_fn)
        names.append(basic_name)
    return names
