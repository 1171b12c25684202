## basicfl — Copyright © 2025, Alex J. Champandard.  Licensed under AGPLv3; see LICENSE! ⚘

import sys
from typing import IO, Any, Callable

from .objects import Object, to_object
from .parser import parse, Call
from .registry import Builtins, Signature
from .builtins import load_builtins
from .library import register_function, register_module
from .interpreter import interpret, call_builtin


class Runtime:
    """Minimal runtime facade focused on embedding and extension.

    Each instance owns its registry, so independent runtimes can coexist in one
    process.  The runtime is also the Environment handed to every builtin: its
    `data()` is the runtime itself.
    """

    def __init__(self, builtins: Builtins | None = None, *, stdin: IO[str] | None = None,
                 stdout: IO[str] | None = None, stderr: IO[str] | None = None, line_ending: str = "\n"):
        self.builtins = builtins if builtins is not None else load_builtins()
        self._stdin, self._stdout, self._stderr = stdin, stdout, stderr
        self._line_ending = line_ending
        self.memory: dict[int, float] = {}
        self.extensions: set[str] = set()

    # Environment ─────────────────────────────────────────────────────────────────────────────
    # Streams default to the current sys streams, looked up on every call.
    def stdin(self) -> IO[str]: return self._stdin if self._stdin is not None else sys.stdin
    def stdout(self) -> IO[str]: return self._stdout if self._stdout is not None else sys.stdout
    def stderr(self) -> IO[str]: return self._stderr if self._stderr is not None else sys.stderr
    def line_ending(self) -> str: return self._line_ending
    def data(self) -> "Runtime": return self

    # Registration ────────────────────────────────────────────────────────────────────────────
    def register(self, name: str, arity: int, fn: Signature) -> None:
        self.builtins.register(name, arity, fn)

    def register_function(self, name: str, fn: Callable[..., Any]) -> dict:
        return register_function(self.builtins, name, fn)

    def get(self, name: str) -> tuple[int, Signature | None]:
        return self.builtins.get(name)

    # Loading ─────────────────────────────────────────────────────────────────────────────────
    def load_extension(self, ns: str) -> list[str]:
        names = register_module(self.builtins, ns)
        self.extensions.add(ns)
        return names

    # Execution ───────────────────────────────────────────────────────────────────────────────
    def call(self, name: str, *args: Any) -> Object:
        return call_builtin(self.builtins, self, name, [to_object(a) for a in args])

    def run(self, source: str, filename: str | None = None, stats: dict | None = None) -> Object | None:
        return interpret(parse(source, filename=filename), self.builtins, self, stats=stats)

    def run_for_display(self, source: str, filename: str | None = None, stats: dict | None = None) -> Object | None:
        """Like `run`, but gives None when the last expression calls a builtin that returns nothing."""
        program = parse(source, filename=filename)
        result = interpret(program, self.builtins, self, stats=stats)
        if program and isinstance(program[-1], Call) and not self.returns_value(program[-1].name):
            return None
        return result

    # Introspection ───────────────────────────────────────────────────────────────────────────
    def get_signature(self, name: str) -> dict | None:
        arity, fn = self.builtins.get(name)
        if fn is None: return None
        return getattr(fn, '__basic_meta__', None) or {'arity': arity}

    def list_builtins(self) -> dict[str, int]:
        return {n: self.builtins.get(n)[0] for n in self.builtins.names()}

    def returns_value(self, name: str) -> bool:
        meta = self.get_signature(name) or {}
        return meta.get('output', Object) is not None
