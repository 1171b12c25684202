## basicfl — Copyright © 2025, Alex J. Champandard.  Licensed under AGPLv3; see LICENSE! ⚘

import os
import inspect
import logging
from pathlib import Path
from typing import Any, Callable

from .objects import Object
from .environment import Environment
from .errors import BasicModuleError, BasicTypeMissing, BasicTypeError


logger = logging.getLogger(__name__)

_LIB_MODULES: dict[str, object] = {}

# Annotations understood on builtin parameters and return values.
_ARGUMENT_TYPES = (float, int, str, Object, Any)
_RETURN_TYPES = (float, int, str, Object, Any, None)


def _resolve_basic_paths() -> list[Path]:
    parts = [p for p in os.environ.get("BASIC_PATH", "").split(os.pathsep) if p]
    return [Path(os.path.expanduser(os.path.expandvars(p))) for p in parts]

def get_python_name(basic_name: str) -> str:
    """Map a BASIC builtin name to its Python function name."""
    return 'fn_' + basic_name.lower().replace('$', '_s')


def get_basic_name(py_name: str) -> str:
    """Inverse of `get_python_name` for well-formed function names."""
    if not py_name.startswith("fn_"):
        raise BasicModuleError(f"Builtin function `{py_name}` requires prefix `fn_` by convention.", basic_token=py_name)
    name = py_name[3:]
    if name.endswith('_s'):
        name = name[:-2] + '$'
    return name.upper()


def _is_environment_annotation(annotation: Any) -> bool:
    return annotation is Environment or (isinstance(annotation, type) and issubclass(annotation, Environment))


def _normalize_annotation(tp, allowed: tuple, op_name: str, where: str):
    if tp is type(None): tp = None
    if tp in allowed: return tp
    if isinstance(tp, type) and issubclass(tp, Object): return tp
    if isinstance(tp, str):
        raise BasicTypeError(f"Builtin `{op_name}` uses a string annotation for {where}; forward references are not supported.")
    raise BasicTypeError(f"Builtin `{op_name}` has unsupported annotation {tp!r} for {where}.")


def get_call_effects(*, fn: Callable, name: str = None) -> dict:
    """Parse the type annotations of a Python function to determine how it is called.

    Arity conventions:
        -1: variadic, from a `*args` parameter
        >=0: number of positional parameters, not counting a leading Environment

    Inputs are the annotations used to unwrap each argument: `float` and `int`
    take a number, `str` a string, `Object` or `Any` the object as-is.  The
    output annotation selects how the return value is wrapped.
    """
    assert fn is not None, "Must specify the function to inspect."

    sig = inspect.signature(fn, eval_str=True)
    params = list(sig.parameters.values())
    op_name = name or getattr(fn, '__name__', '<unnamed>')

    positional = [p for p in params if p.kind in (inspect.Parameter.POSITIONAL_ONLY, inspect.Parameter.POSITIONAL_OR_KEYWORD)]
    vararg_param = next((p for p in params if p.kind == inspect.Parameter.VAR_POSITIONAL), None)

    ret_ann = sig.return_annotation
    if ret_ann is inspect.Signature.empty:
        raise BasicTypeMissing(f"Builtin `{op_name}` must declare a return annotation.")

    uses_env = bool(positional) and _is_environment_annotation(positional[0].annotation)
    if uses_env:
        positional = positional[1:]

    missing = [p.name for p in positional if p.annotation is inspect.Parameter.empty]
    if vararg_param is not None and vararg_param.annotation is inspect.Parameter.empty:
        missing.append('*' + vararg_param.name)
    if missing:
        raise BasicTypeMissing(f"Builtin `{op_name}` must annotate parameters: {', '.join(missing)}.")

    inputs = [_normalize_annotation(p.annotation, _ARGUMENT_TYPES, op_name, f"`{p.name}`") for p in positional]
    variadic = None
    if vararg_param is not None:
        if positional:
            raise BasicTypeError(f"Builtin `{op_name}` cannot mix fixed parameters with `*{vararg_param.name}`.")
        variadic = _normalize_annotation(vararg_param.annotation, _ARGUMENT_TYPES, op_name, f"`*{vararg_param.name}`")

    return {
        'arity': -1 if variadic is not None else len(inputs),
        'inputs': inputs if variadic is None else [variadic],
        'output': _normalize_annotation(ret_ann, _RETURN_TYPES, op_name, "its return value"),
        'uses_env': uses_env,
    }


def iter_library_candidates(ns: str):
    """Resolution order: packaged `libs/_{ns}.py` first, then `{ns}.py` in each BASIC_PATH entry."""
    base = Path(__file__).resolve().parent
    for d in (base, *base.parents[:2]):
        yield d / 'libs' / f'_{ns}.py', f"basicfl.libs._{ns}"
    for root in _resolve_basic_paths():
        yield root / f'{ns}.py', f"basicfl.ext.{ns}"


def load_library_module(ns: str, meta: dict | None = None):
    if ns in _LIB_MODULES: return _LIB_MODULES[ns]

    import importlib.util as importer
    for mod_path, mod_name in iter_library_candidates(ns):
        if not mod_path.is_file(): continue
        spec, module = importer.spec_from_file_location(mod_name, str(mod_path)), None
        if spec and spec.loader:
            module = importer.module_from_spec(spec)
            try:
                spec.loader.exec_module(module)
            except Exception as e:
                raise BasicModuleError(str(e), filename=str(mod_path), basic_token=ns, basic_meta=meta) from e
        logger.info("Loaded extension module `%s` from %s.", ns, mod_path)
        _LIB_MODULES[ns] = module
        return module
    raise BasicModuleError(f"Module `{ns}` not found.", basic_token=ns, basic_meta=meta)


def iter_module_functions(ns: str, *, meta: dict | None = None):
    """Yield `(basic_name, py_function)` pairs for all builtins exported by an extension module."""
    py_module = load_library_module(ns, meta=meta)
    # Extensions must list their builtins explicitly.
    if not isinstance(getattr(py_module, '__functions__', None), list):
        raise BasicModuleError(f"Module `{ns}` is missing function registry `__functions__`.", basic_token=ns, basic_meta=meta)
    for w in py_module.__functions__:
        if not (py_name := getattr(w, '__name__', '')): continue
        yield get_basic_name(py_name), w
