"""Rewriting of effect trees."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import replace
from typing import Any

from frozendict import frozendict

from .classification import EffectKind, classify
from .matchers import Predicate


def rreplace(matcher: Predicate, effect: Any, make_replacement: Callable[[Any], Any]) -> Any:
    """Replace every leaf of ``effect`` matched by ``matcher``.

    ``make_replacement`` receives the matched leaf itself. Race and parallel
    groups are rebuilt with the same labels, order and container kind; the
    input tree is left untouched.
    """
    if matcher(effect):
        return make_replacement(effect)
    match classify(effect):
        case EffectKind.RACE:
            return replace(
                effect,
                effects=frozendict(
                    (label, rreplace(matcher, member, make_replacement))
                    for label, member in effect.effects.items()
                ),
            )
        case EffectKind.PARALLEL:
            members = [rreplace(matcher, member, make_replacement) for member in effect]
            return tuple(members) if isinstance(effect, tuple) else members
        case _:
            return effect


__all__ = ["rreplace"]
