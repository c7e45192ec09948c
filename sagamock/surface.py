"""Configuration and query methods shared by every mock handle.

Handles provide ``_each_session()`` (the sessions configuration fans out to)
and ``_stored_effects()`` (the history queries read). Configuration methods
return the handle so calls can be chained.
"""

from __future__ import annotations

from collections.abc import Callable, Iterator, Sequence
from typing import TYPE_CHECKING, Any

from . import matchers
from ._validators import ensure_args, ensure_replacement
from .matchers import Predicate
from .query import EffectQueries, QueryResult
from .stubs import retarget

if TYPE_CHECKING:
    from typing import Self

    from .session import InterceptionSession, ListenerMoment


class SagaMockConfig:
    def _each_session(self) -> Iterator[InterceptionSession]:
        raise NotImplementedError

    def _listen(self, matcher: Predicate, callback: Callable[..., Any], moment: ListenerMoment) -> Self:
        for session in self._each_session():
            session.add_listener(matcher, callback, moment)
        return self

    def _stub(self, matcher: Predicate, stub: Callable[..., Any]) -> Self:
        ensure_replacement(stub)
        for session in self._each_session():
            session.add_stub(matcher, retarget(stub))
        return self

    def on_effect(self, effect: Any, callback: Callable[[Any], Any]) -> Self:
        return self._listen(matchers.effect(effect), callback, "before")

    def on_take_action(self, pattern: Any, callback: Callable[[Any], Any]) -> Self:
        return self._listen(matchers.take_action(pattern), callback, "before")

    def on_put_action(self, action: Any, callback: Callable[[Any], Any]) -> Self:
        return self._listen(matchers.put_action(action), callback, "before")

    def on_call(self, fn: Callable[..., Any], callback: Callable[[Any], Any]) -> Self:
        return self._listen(matchers.call(fn), callback, "before")

    def on_call_with_args(
        self, fn: Callable[..., Any], args: Sequence[Any], callback: Callable[[Any], Any]
    ) -> Self:
        args = ensure_args(args, name="args")
        return self._listen(matchers.call_with_args(fn, args), callback, "before")

    def on_call_with_exact_args(
        self, fn: Callable[..., Any], args: Sequence[Any], callback: Callable[[Any], Any]
    ) -> Self:
        args = ensure_args(args, name="args")
        return self._listen(matchers.call_with_exact_args(fn, args), callback, "before")

    def after_effect(self, effect: Any, callback: Callable[[Any, Any], Any]) -> Self:
        return self._listen(matchers.effect(effect), callback, "after")

    def after_take_action(self, pattern: Any, callback: Callable[[Any, Any], Any]) -> Self:
        return self._listen(matchers.take_action(pattern), callback, "after")

    def after_put_action(self, action: Any, callback: Callable[[Any, Any], Any]) -> Self:
        return self._listen(matchers.put_action(action), callback, "after")

    def after_call(self, fn: Callable[..., Any], callback: Callable[[Any, Any], Any]) -> Self:
        return self._listen(matchers.call(fn), callback, "after")

    def after_call_with_args(
        self, fn: Callable[..., Any], args: Sequence[Any], callback: Callable[[Any, Any], Any]
    ) -> Self:
        args = ensure_args(args, name="args")
        return self._listen(matchers.call_with_args(fn, args), callback, "after")

    def after_call_with_exact_args(
        self, fn: Callable[..., Any], args: Sequence[Any], callback: Callable[[Any, Any], Any]
    ) -> Self:
        args = ensure_args(args, name="args")
        return self._listen(matchers.call_with_exact_args(fn, args), callback, "after")

    def stub_call(self, fn: Callable[..., Any], stub: Callable[..., Any]) -> Self:
        """Run ``stub`` with the call's arguments instead of ``fn``."""
        return self._stub(matchers.call(fn), stub)

    def stub_call_with_args(
        self, fn: Callable[..., Any], args: Sequence[Any], stub: Callable[..., Any]
    ) -> Self:
        args = ensure_args(args, name="args")
        return self._stub(matchers.call_with_args(fn, args), stub)

    def stub_call_with_exact_args(
        self, fn: Callable[..., Any], args: Sequence[Any], stub: Callable[..., Any]
    ) -> Self:
        args = ensure_args(args, name="args")
        return self._stub(matchers.call_with_exact_args(fn, args), stub)

    def reset_stubs(self) -> Self:
        for session in self._each_session():
            session.reset_stubs()
        return self

    def clear_stored_effects(self) -> Self:
        for session in self._each_session():
            session.clear()
        return self


class SagaMockQueries:
    def _stored_effects(self) -> list[Any]:
        raise NotImplementedError

    def _queries(self) -> EffectQueries:
        return EffectQueries(self._stored_effects)

    def query(self) -> QueryResult:
        """Every recorded effect; refine with the query methods of the result."""
        return self._queries().all()

    def all_effects(self) -> QueryResult:
        return self.query()

    def generated_effect(self, effect: Any) -> QueryResult:
        return self._queries().effect(effect)

    def put_action(self, action: Any) -> QueryResult:
        return self._queries().put_action(action)

    def take_action(self, pattern: Any) -> QueryResult:
        return self._queries().take_action(pattern)

    def called(self, fn: Callable[..., Any]) -> QueryResult:
        return self._queries().call(fn)

    def called_with_args(self, fn: Callable[..., Any], *args: Any) -> QueryResult:
        return self._queries().call_with_args(fn, *args)

    def called_with_exact_args(self, fn: Callable[..., Any], *args: Any) -> QueryResult:
        return self._queries().call_with_exact_args(fn, *args)


__all__ = ["SagaMockConfig", "SagaMockQueries"]
