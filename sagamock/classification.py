"""Effect classification functions."""

from __future__ import annotations

from enum import Enum
from typing import Any

from .effects import CallEffect, ForkEffect, PutEffect, RaceEffect, TakeEffect


class EffectKind(Enum):
    PUT = "put"
    TAKE = "take"
    CALL = "call"
    FORK = "fork"
    RACE = "race"
    PARALLEL = "parallel"
    OPAQUE = "opaque"


def classify(value: Any) -> EffectKind:
    """Tag ``value`` with the kind of effect it describes.

    Lists and tuples are parallel groups; anything that is not one of the
    known descriptors is opaque and can only be matched by equality.
    """
    match value:
        case PutEffect():
            return EffectKind.PUT
        case TakeEffect():
            return EffectKind.TAKE
        case CallEffect():
            return EffectKind.CALL
        case ForkEffect():
            return EffectKind.FORK
        case RaceEffect():
            return EffectKind.RACE
        case list() | tuple():
            return EffectKind.PARALLEL
        case _:
            return EffectKind.OPAQUE


def is_put(value: Any) -> bool:
    return classify(value) is EffectKind.PUT


def is_take(value: Any) -> bool:
    return classify(value) is EffectKind.TAKE


def is_call(value: Any) -> bool:
    return classify(value) is EffectKind.CALL


def is_fork(value: Any) -> bool:
    return classify(value) is EffectKind.FORK


def is_race(value: Any) -> bool:
    return classify(value) is EffectKind.RACE


def is_parallel(value: Any) -> bool:
    return classify(value) is EffectKind.PARALLEL


def is_composite(value: Any) -> bool:
    return classify(value) in (EffectKind.RACE, EffectKind.PARALLEL)


__all__ = [
    "EffectKind",
    "classify",
    "is_call",
    "is_composite",
    "is_fork",
    "is_parallel",
    "is_put",
    "is_race",
    "is_take",
]
