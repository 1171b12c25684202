## basicfl — Copyright © 2025, Alex J. Champandard.  Licensed under AGPLv3; see LICENSE! ⚘

from typing import Any
from dataclasses import dataclass


class Object:
    """Runtime value handed to and returned from every builtin."""
    NUMBER = "number"
    STRING = "string"
    ERROR = "error"

    __slots__ = ()

    def type(self) -> str:
        raise NotImplementedError

    def is_error(self) -> bool:
        return False


@dataclass(frozen=True, slots=True)
class NumberObject(Object):
    value: float

    def type(self) -> str:
        return Object.NUMBER


@dataclass(frozen=True, slots=True)
class StringObject(Object):
    value: str

    def type(self) -> str:
        return Object.STRING


@dataclass(frozen=True, slots=True)
class ErrorObject(Object):
    """The reserved variant: a builtin that fails returns one of these rather than raising."""
    value: str

    def type(self) -> str:
        return Object.ERROR

    def is_error(self) -> bool:
        return True


def is_error(obj: Object | None) -> bool:
    return isinstance(obj, Object) and obj.is_error()


def to_object(value: Any) -> Object:
    """Wrap a plain Python value as a runtime Object; objects pass through unchanged."""
    if isinstance(value, Object):
        return value
    if value is None:
        return NumberObject(0.0)
    if isinstance(value, bool):
        return NumberObject(1.0 if value else 0.0)
    if isinstance(value, (int, float)):
        return NumberObject(float(value))
    if isinstance(value, str):
        return StringObject(value)
    raise TypeError(f"Cannot represent {type(value).__name__} as a runtime object.")
