"""Effect descriptors yielded by saga routines.

These are plain immutable descriptions; interpreting them is the job of the
executor that drives the routine.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from typing import Any, Union

from frozendict import frozendict

from ._validators import ensure_callable


@dataclass(frozen=True)
class PutEffect:
    """Dispatch ``action`` to the store."""

    action: Any


@dataclass(frozen=True)
class TakeEffect:
    """Wait for an action matching ``pattern``."""

    pattern: Any


@dataclass(frozen=True)
class CallEffect:
    """Invoke ``fn(*args)`` and resume with its result."""

    fn: Callable[..., Any]
    args: tuple[Any, ...] = ()

    def __post_init__(self) -> None:
        ensure_callable(self.fn, name="fn")


@dataclass(frozen=True)
class ForkEffect:
    """Start ``fn(*args)`` without waiting for it to finish."""

    fn: Callable[..., Any]
    args: tuple[Any, ...] = ()

    def __post_init__(self) -> None:
        ensure_callable(self.fn, name="fn")


@dataclass(frozen=True)
class RaceEffect:
    """Run labelled effects concurrently; the first to settle wins."""

    effects: Mapping[str, Any] = field(default_factory=frozendict)

    def __post_init__(self) -> None:
        if not isinstance(self.effects, frozendict):
            object.__setattr__(self, "effects", frozendict(self.effects))


LeafEffect = Union[PutEffect, TakeEffect, CallEffect, ForkEffect]
Effect = Any


def put(action: Any) -> PutEffect:
    return PutEffect(action=action)


def take(pattern: Any) -> TakeEffect:
    return TakeEffect(pattern=pattern)


def call(fn: Callable[..., Any], *args: Any) -> CallEffect:
    return CallEffect(fn=fn, args=tuple(args))


def fork(fn: Callable[..., Any], *args: Any) -> ForkEffect:
    return ForkEffect(fn=fn, args=tuple(args))


def race(effects: Mapping[str, Any] | None = None, **labelled: Any) -> RaceEffect:
    merged = dict(effects or {})
    merged.update(labelled)
    return RaceEffect(effects=frozendict(merged))


def all_(*effects: Any) -> list[Any]:
    """Parallel group: a plain list of effects."""
    return list(effects)


__all__ = [
    "CallEffect",
    "Effect",
    "ForkEffect",
    "LeafEffect",
    "PutEffect",
    "RaceEffect",
    "TakeEffect",
    "all_",
    "call",
    "fork",
    "put",
    "race",
    "take",
]
