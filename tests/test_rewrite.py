from __future__ import annotations

from typing import Any

import pytest

from sagamock import matchers
from sagamock.effects import call, race, take
from sagamock.rewrite import rreplace

MATCH = {"test": "matching-effect"}
OTHER = {"test": "not-matching-effect"}
REPLACED = {"test": "replaced-effect"}


@pytest.mark.parametrize(
    ("effect", "expected"),
    [
        (MATCH, REPLACED),
        (OTHER, OTHER),
        ([MATCH], [REPLACED]),
        ([OTHER, MATCH, OTHER], [OTHER, REPLACED, OTHER]),
        ([MATCH, OTHER, MATCH, OTHER, MATCH], [REPLACED, OTHER, REPLACED, OTHER, REPLACED]),
        ([OTHER, OTHER], [OTHER, OTHER]),
        ((OTHER, MATCH), (OTHER, REPLACED)),
        (race(a=OTHER, b=MATCH, c=OTHER), race(a=OTHER, b=REPLACED, c=OTHER)),
        (
            race(a=MATCH, b=OTHER, c=MATCH, d=OTHER),
            race(a=REPLACED, b=OTHER, c=REPLACED, d=OTHER),
        ),
        (race(a=OTHER, b=OTHER, c=OTHER), race(a=OTHER, b=OTHER, c=OTHER)),
        (
            [OTHER, race(a=OTHER, b=MATCH, c=OTHER), OTHER],
            [OTHER, race(a=OTHER, b=REPLACED, c=OTHER), OTHER],
        ),
    ],
)
def test_rreplace(effect: Any, expected: Any) -> None:
    actual = rreplace(matchers.effect(MATCH), effect, lambda _effect: REPLACED)
    assert actual == expected
    assert type(actual) is type(expected)


def test_rreplace_passes_the_matched_leaf() -> None:
    seen: list[Any] = []
    leaf = take("A")

    def make_replacement(effect: Any) -> Any:
        seen.append(effect)
        return take("B")

    rreplace(matchers.take_action("A"), [race(x=leaf), "other"], make_replacement)
    assert seen == [leaf]
    assert seen[0] is leaf


def test_rreplace_does_not_mutate_input() -> None:
    members = [OTHER, MATCH]
    group = race(a=members, b=MATCH)
    result = rreplace(matchers.effect(MATCH), group, lambda _effect: REPLACED)

    assert members == [OTHER, MATCH]
    assert group.effects["b"] == MATCH
    assert result.effects["a"] == [OTHER, REPLACED]
    assert result.effects["a"] is not members


def test_rreplace_keeps_unmatched_leaves_by_identity() -> None:
    leaf = call(print, "x")
    result = rreplace(matchers.take_action("A"), [leaf], lambda _effect: "replaced")
    assert result[0] is leaf


def test_rreplace_preserves_race_label_order() -> None:
    group = race(z=MATCH, a=OTHER, m=MATCH)
    result = rreplace(matchers.effect(MATCH), group, lambda _effect: REPLACED)
    assert list(result.effects) == ["z", "a", "m"]
