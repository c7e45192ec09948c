"""Middleware that reports actions flowing through a store's dispatch."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from ._validators import ensure_callable
from .matchers import action_matches

Dispatch = Callable[[Any], Any]


@dataclass(frozen=True)
class ActionListener:
    pattern: Any
    callback: Callable[..., Any]


class DispatchSpy:
    """Calls back before and after matching actions are dispatched.

    A string pattern matches the action's ``type``; anything else matches by
    equality. Before-callbacks receive the action, after-callbacks the action
    and the value returned by the wrapped dispatch.
    """

    def __init__(self) -> None:
        self._before: list[ActionListener] = []
        self._after: list[ActionListener] = []

    def on_action(self, action: Any, callback: Callable[[Any], Any]) -> DispatchSpy:
        ensure_callable(callback, name="callback")
        self._before.append(ActionListener(action, callback))
        return self

    def after_action(self, action: Any, callback: Callable[[Any, Any], Any]) -> DispatchSpy:
        ensure_callable(callback, name="callback")
        self._after.append(ActionListener(action, callback))
        return self

    def wrap(self, next_dispatch: Dispatch) -> Dispatch:
        def dispatch(action: Any) -> Any:
            for listener in list(self._before):
                if action_matches(action, listener.pattern):
                    listener.callback(action)
            result = next_dispatch(action)
            for listener in list(self._after):
                if action_matches(action, listener.pattern):
                    listener.callback(action, result)
            return result

        return dispatch

    def middleware(self, _store: Any = None) -> Callable[[Dispatch], Dispatch]:
        """Redux-style middleware: ``store -> next_dispatch -> dispatch``."""
        return self.wrap


__all__ = ["ActionListener", "Dispatch", "DispatchSpy"]
