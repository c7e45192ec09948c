"""Queries over recorded effect history.

Every query runs against the live history exposed by ``source``, so calling a
query again after the routine made progress sees the new effects.

Example:
    >>> saga.query().put_action("A").followed_by.put_action("B").is_present
    True
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from typing import Any

from . import matchers
from .history import find_all_indexes
from .matchers import Predicate, recursive

EffectSource = Callable[[], Sequence[Any]]


class EffectQueries:
    """Query entry points over the window ``[from_pos, to_pos]`` of the history.

    ``to_pos=None`` extends the window to the last recorded effect at the time
    the query runs.
    """

    def __init__(self, source: EffectSource, from_pos: int = 0, to_pos: int | None = None) -> None:
        self._source = source
        self._from_pos = from_pos
        self._to_pos = to_pos

    def matching(self, matcher: Predicate) -> QueryResult:
        effects = self._source()
        indexes = find_all_indexes(effects, recursive(matcher), self._from_pos, self._to_pos)
        return QueryResult(self._source, indexes, self._from_pos, self._to_pos)

    def all(self) -> QueryResult:
        return self.matching(lambda _effect: True)

    def effect(self, effect: Any) -> QueryResult:
        return self.matching(matchers.effect(effect))

    def put_action(self, action: Any) -> QueryResult:
        return self.matching(matchers.put_action(action))

    def take_action(self, pattern: Any) -> QueryResult:
        return self.matching(matchers.take_action(pattern))

    def call(self, fn: Callable[..., Any]) -> QueryResult:
        return self.matching(matchers.call(fn))

    def call_with_args(self, fn: Callable[..., Any], *args: Any) -> QueryResult:
        return self.matching(matchers.call_with_args(fn, args))

    def call_with_exact_args(self, fn: Callable[..., Any], *args: Any) -> QueryResult:
        return self.matching(matchers.call_with_exact_args(fn, args))


class QueryResult(EffectQueries):
    """Matched positions of a query, plus narrowing and ordering relations.

    Query methods inherited from :class:`EffectQueries` search the same window
    this result was drawn from.
    """

    def __init__(
        self,
        source: EffectSource,
        indexes: Sequence[int],
        from_pos: int = 0,
        to_pos: int | None = None,
    ) -> None:
        super().__init__(source, from_pos, to_pos)
        effects = source()
        self.indexes: tuple[int, ...] = tuple(i for i in indexes if 0 <= i < len(effects))
        self.effects: tuple[Any, ...] = tuple(effects[i] for i in self.indexes)

    @property
    def count(self) -> int:
        return len(self.indexes)

    @property
    def is_present(self) -> bool:
        return self.count > 0

    @property
    def not_present(self) -> bool:
        return not self.is_present

    def __bool__(self) -> bool:
        return self.is_present

    def __len__(self) -> int:
        return self.count

    def _narrow(self, indexes: Sequence[int]) -> QueryResult:
        return QueryResult(self._source, indexes, self._from_pos, self._to_pos)

    def first(self) -> QueryResult:
        return self._narrow(self.indexes[:1])

    def last(self) -> QueryResult:
        return self._narrow(self.indexes[-1:])

    def number(self, k: int) -> QueryResult:
        """The ``k``-th match, counting from 0; empty when ``k`` is out of range."""
        if 0 <= k < self.count:
            return self._narrow([self.indexes[k]])
        return self._narrow([])

    @property
    def followed_by(self) -> EffectQueries:
        """Queries restricted to effects after the first match."""
        if self.not_present:
            return EffectQueries(self._source, 0, -1)
        return EffectQueries(self._source, self.indexes[0] + 1)

    @property
    def preceded_by(self) -> EffectQueries:
        """Queries restricted to effects before the last match."""
        if self.not_present:
            return EffectQueries(self._source, 0, -1)
        return EffectQueries(self._source, 0, self.indexes[-1] - 1)

    def __repr__(self) -> str:
        return f"QueryResult(indexes={list(self.indexes)!r}, effects={list(self.effects)!r})"


def query_all(source: EffectSource) -> QueryResult:
    return EffectQueries(source).all()


__all__ = ["EffectQueries", "EffectSource", "QueryResult", "query_all"]
