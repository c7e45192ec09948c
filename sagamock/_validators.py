"""Runtime validators for arguments handed to the mock."""

from __future__ import annotations

from collections.abc import Callable, Generator
from typing import Any

from .errors import InvalidInputKind, MissingReplacementFunction


def _type_name(value: object) -> str:
    return type(value).__name__


def ensure_callable(value: object, *, name: str) -> None:
    if not callable(value):
        raise TypeError(f"{name} must be callable, got {_type_name(value)}")


def ensure_replacement(value: object) -> None:
    if not callable(value):
        raise MissingReplacementFunction(value)


def ensure_routine(value: object) -> None:
    if not isinstance(value, Generator):
        raise InvalidInputKind(value)


def ensure_sequence(value: object) -> None:
    if not isinstance(value, (list, tuple)):
        raise InvalidInputKind(value)


def ensure_args(value: Any, *, name: str) -> tuple[Any, ...]:
    if isinstance(value, (str, bytes)) or not isinstance(value, (list, tuple)):
        raise TypeError(f"{name} must be a list or tuple, got {_type_name(value)}")
    return tuple(value)


IsFactory = Callable[[Any], bool]


__all__ = [
    "IsFactory",
    "ensure_args",
    "ensure_callable",
    "ensure_replacement",
    "ensure_routine",
    "ensure_sequence",
]
