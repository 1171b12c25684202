## basicfl — Copyright © 2025, Alex J. Champandard.  Licensed under AGPLv3; see LICENSE! ⚘

import sys
from typing import IO, Any, Protocol, TypeVar, runtime_checkable
from dataclasses import dataclass, field

from .errors import BasicTypeError


@runtime_checkable
class Environment(Protocol):
    """Capabilities handed to every builtin, implemented by the interpreter.

    Builtins read and write only through these streams, so the same function
    works from a terminal, a test harness or an embedding host.  The streams are
    borrowed: an Environment never closes them.
    """

    def stdin(self) -> IO[str]:
        """Readable input source."""
        ...

    def stdout(self) -> IO[str]:
        """Writable sink for program output."""
        ...

    def stderr(self) -> IO[str]:
        """Writable sink for diagnostics, kept apart from program output."""
        ...

    def line_ending(self) -> str:
        """Characters appended by output builtins such as PRINT, e.g. '\\n'."""
        ...

    def data(self) -> Any:
        """Opaque reference back to the interpreter; use `interpreter_state()` to access."""
        ...


@dataclass
class StreamEnvironment:
    """Environment over arbitrary text streams, without any interpreter behind it."""
    input: IO[str] = field(default_factory=lambda: sys.stdin)
    output: IO[str] = field(default_factory=lambda: sys.stdout)
    error: IO[str] = field(default_factory=lambda: sys.stderr)
    ending: str = "\n"
    state: Any = None

    def stdin(self) -> IO[str]: return self.input
    def stdout(self) -> IO[str]: return self.output
    def stderr(self) -> IO[str]: return self.error
    def line_ending(self) -> str: return self.ending
    def data(self) -> Any: return self.state


T = TypeVar('T')

def interpreter_state(env: Environment, expected: type[T] | None = None) -> T:
    """The only sanctioned way for a builtin to reach through `env.data()`.

    With `expected` given, the state is checked before being handed out so a
    builtin registered on a foreign host fails loudly instead of poking at the
    wrong object.
    """
    state = env.data()
    if state is None:
        raise BasicTypeError("Environment does not expose any interpreter state.")
    if expected is not None and not isinstance(state, expected):
        raise BasicTypeError(f"Interpreter state is {type(state).__name__}, expected {expected.__name__}.")
    return state
