"""Stub entries and their application to effect trees."""

from __future__ import annotations

from collections.abc import Callable, Iterable
from dataclasses import dataclass, replace
from functools import reduce
from typing import Any

from .matchers import Predicate
from .rewrite import rreplace


@dataclass(frozen=True)
class Stub:
    matcher: Predicate
    make_replacement: Callable[[Any], Any]


def apply_stubs(stubs: Iterable[Stub], effect: Any) -> Any:
    """Fold ``stubs`` over ``effect``; later stubs see earlier rewrites."""
    return reduce(
        lambda current, stub: rreplace(stub.matcher, current, stub.make_replacement),
        stubs,
        effect,
    )


def retarget(fn: Callable[..., Any]) -> Callable[[Any], Any]:
    """Replacement that keeps a call or fork effect but swaps its target for ``fn``."""

    def make_replacement(effect: Any) -> Any:
        return replace(effect, fn=fn)

    return make_replacement


def returning(value: Any) -> Callable[..., Any]:
    """Stub target that ignores its arguments and returns ``value``."""

    def stubbed(*_args: Any, **_kwargs: Any) -> Any:
        return value

    return stubbed


def raising(error: BaseException | type[BaseException]) -> Callable[..., Any]:
    """Stub target that raises ``error``."""

    def stubbed(*_args: Any, **_kwargs: Any) -> Any:
        raise error

    return stubbed


__all__ = ["Stub", "apply_stubs", "raising", "retarget", "returning"]
