"""Effect matchers.

A matcher is a predicate over a single effect. The leaf matchers below never
look inside parallel or race groups; wrap them with :func:`recursive` to search
a whole effect tree.

Matchers are frozen dataclasses, so two matchers built from the same arguments
compare equal. Stub registration relies on that to replace an earlier stub for
the same target instead of stacking a duplicate.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from typing import Any

from .classification import EffectKind, classify
from .effects import CallEffect, PutEffect, TakeEffect

Predicate = Callable[[Any], bool]


def action_type(action: Any) -> Any:
    if isinstance(action, Mapping):
        return action.get("type")
    return getattr(action, "type", None)


def action_matches(action: Any, pattern: Any) -> bool:
    """A string pattern matches the action's type tag, anything else by equality."""
    if isinstance(pattern, str):
        return action_type(action) == pattern
    return action == pattern


def is_match(value: Any, pattern: Any) -> bool:
    """Partial deep comparison.

    Mappings in ``pattern`` must be a subset of the corresponding mapping in
    ``value``; sequences must be a positional prefix; anything else compares
    with ``==``.
    """
    if isinstance(pattern, Mapping):
        if not isinstance(value, Mapping):
            return False
        return all(key in value and is_match(value[key], item) for key, item in pattern.items())
    if isinstance(pattern, (list, tuple)):
        if not isinstance(value, (list, tuple)) or len(value) < len(pattern):
            return False
        return all(is_match(value[i], item) for i, item in enumerate(pattern))
    return value == pattern


class Matcher(ABC):
    @abstractmethod
    def __call__(self, effect: Any) -> bool: ...


@dataclass(frozen=True)
class EffectMatcher(Matcher):
    effect: Any

    def __call__(self, effect: Any) -> bool:
        return effect == self.effect


@dataclass(frozen=True)
class PutActionMatcher(Matcher):
    action: Any

    def __call__(self, effect: Any) -> bool:
        return isinstance(effect, PutEffect) and action_matches(effect.action, self.action)


@dataclass(frozen=True)
class TakeActionMatcher(Matcher):
    pattern: Any

    def __call__(self, effect: Any) -> bool:
        return isinstance(effect, TakeEffect) and effect.pattern == self.pattern


@dataclass(frozen=True)
class CallMatcher(Matcher):
    fn: Callable[..., Any]

    def __call__(self, effect: Any) -> bool:
        return isinstance(effect, CallEffect) and effect.fn == self.fn


@dataclass(frozen=True)
class CallWithArgsMatcher(Matcher):
    fn: Callable[..., Any]
    args: tuple[Any, ...]

    def __call__(self, effect: Any) -> bool:
        return (
            isinstance(effect, CallEffect)
            and effect.fn == self.fn
            and is_match(tuple(effect.args), tuple(self.args))
        )


@dataclass(frozen=True)
class CallWithExactArgsMatcher(Matcher):
    fn: Callable[..., Any]
    args: tuple[Any, ...]

    def __call__(self, effect: Any) -> bool:
        return (
            isinstance(effect, CallEffect)
            and effect.fn == self.fn
            and tuple(effect.args) == tuple(self.args)
        )


@dataclass(frozen=True)
class RoutineTargetMatcher(Matcher):
    """Call or fork effects whose target builds a new routine."""

    effect_type: type
    is_factory: Callable[[Any], bool]

    def __call__(self, effect: Any) -> bool:
        return isinstance(effect, self.effect_type) and bool(self.is_factory(effect.fn))


def recursive(matcher: Predicate) -> Predicate:
    """Extend ``matcher`` to every member of parallel and race groups."""

    def rmatcher(effect: Any) -> bool:
        if matcher(effect):
            return True
        match classify(effect):
            case EffectKind.RACE:
                return any(rmatcher(member) for member in effect.effects.values())
            case EffectKind.PARALLEL:
                return any(rmatcher(member) for member in effect)
            case _:
                return False

    return rmatcher


def effect(target: Any) -> EffectMatcher:
    return EffectMatcher(target)


def put_action(action: Any) -> PutActionMatcher:
    return PutActionMatcher(action)


def take_action(pattern: Any) -> TakeActionMatcher:
    return TakeActionMatcher(pattern)


def call(fn: Callable[..., Any]) -> CallMatcher:
    return CallMatcher(fn)


def call_with_args(fn: Callable[..., Any], args: Any = ()) -> CallWithArgsMatcher:
    return CallWithArgsMatcher(fn, tuple(args))


def call_with_exact_args(fn: Callable[..., Any], args: Any = ()) -> CallWithExactArgsMatcher:
    return CallWithExactArgsMatcher(fn, tuple(args))


__all__ = [
    "CallMatcher",
    "CallWithArgsMatcher",
    "CallWithExactArgsMatcher",
    "EffectMatcher",
    "Matcher",
    "Predicate",
    "PutActionMatcher",
    "RoutineTargetMatcher",
    "TakeActionMatcher",
    "action_matches",
    "action_type",
    "call",
    "call_with_args",
    "call_with_exact_args",
    "effect",
    "is_match",
    "put_action",
    "recursive",
    "take_action",
]
