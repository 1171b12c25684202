## basicfl — Copyright © 2025, Alex J. Champandard.  Licensed under AGPLv3; see LICENSE! ⚘
#
# basicfl — Builtin-function registry for a small BASIC runtime, with a Python extension boundary.
#

import logging
import threading
from typing import Callable, NamedTuple

from .objects import Object
from .environment import Environment


logger = logging.getLogger(__name__)


# Every builtin receives the environment plus already-evaluated arguments, and
# returns one object back to the caller.  Failures come back as an ErrorObject.
Signature = Callable[[Environment, list[Object]], Object]


class BuiltinEntry(NamedTuple):
    arity: int
    fn: Signature


class Builtins:
    """Name to (arity, implementation) table, owned by one interpreter instance.

    Both `register` and `get` take the same exclusive lock.  Each name maps to a
    single immutable entry, so a reader never sees the arity of one registration
    paired with the function of another.
    """

    def __init__(self):
        self._lock = threading.Lock()
        self._entries: dict[str, BuiltinEntry] = {}

    def register(self, name: str, arity: int, fn: Signature) -> None:
        """Record a builtin, replacing any previous registration under the same name.

        `arity` is the number of arguments the builtin expects.  Negative values
        are left for the caller to interpret; the standard library uses -1 for
        variadic builtins like PRINT.
        """
        entry = BuiltinEntry(arity, fn)
        with self._lock:
            previous = self._entries.get(name)
            self._entries[name] = entry
        if previous is not None:
            logger.debug("Replaced builtin `%s` (arity %d -> %d).", name, previous.arity, arity)

    def get(self, name: str) -> tuple[int, Signature | None]:
        """Return `(arity, fn)`, or `(0, None)` for an unknown name.

        A genuine 0-argument builtin also reports arity 0, so test `fn is None`.
        """
        with self._lock:
            entry = self._entries.get(name)
        if entry is None:
            return 0, None
        return entry.arity, entry.fn

    # Introspection ───────────────────────────────────────────────────────────────────────────
    def names(self) -> list[str]:
        with self._lock:
            return sorted(self._entries)

    def __contains__(self, name: str) -> bool:
        with self._lock:
            return name in self._entries

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)
