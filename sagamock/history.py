"""Ordered log of the effects yielded by intercepted routines."""

from __future__ import annotations

import threading
from collections.abc import Iterator, Sequence
from typing import Any

from .matchers import Predicate


def find_all_indexes(
    effects: Sequence[Any],
    matcher: Predicate,
    from_pos: int = 0,
    to_pos: int | None = None,
) -> list[int]:
    """Positions in the closed range ``[from_pos, to_pos]`` whose effect matches."""
    last = len(effects) - 1 if to_pos is None else min(to_pos, len(effects) - 1)
    return [i for i in range(max(from_pos, 0), last + 1) if matcher(effects[i])]


class EffectHistory:
    """Append-only effect log shared by every routine of a session.

    One entry is stored per suspension point. A parallel or race group is a
    single entry; its members are only reachable through recursive matchers.
    """

    def __init__(self) -> None:
        self._effects: list[Any] = []
        self._lock = threading.Lock()

    def append(self, effect: Any) -> int:
        with self._lock:
            self._effects.append(effect)
            return len(self._effects) - 1

    def snapshot(self) -> list[Any]:
        with self._lock:
            return list(self._effects)

    def reset(self) -> None:
        with self._lock:
            self._effects.clear()

    def find_all(
        self,
        matcher: Predicate,
        from_pos: int = 0,
        to_pos: int | None = None,
    ) -> list[int]:
        return find_all_indexes(self.snapshot(), matcher, from_pos, to_pos)

    def __len__(self) -> int:
        return len(self._effects)

    def __iter__(self) -> Iterator[Any]:
        return iter(self.snapshot())

    def __getitem__(self, index: int) -> Any:
        return self._effects[index]

    def __repr__(self) -> str:
        return f"EffectHistory({self.snapshot()!r})"


__all__ = ["EffectHistory", "find_all_indexes"]
