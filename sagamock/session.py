"""Interception session: the state shared by a mocked routine and its children."""

from __future__ import annotations

import functools
import inspect
import logging
import threading
from collections import deque
from collections.abc import Callable, Generator
from dataclasses import dataclass
from typing import Any, Literal

from ._validators import IsFactory, ensure_replacement
from .effects import CallEffect, ForkEffect
from .history import EffectHistory
from .matchers import Predicate, RoutineTargetMatcher, recursive
from .routine import InterceptedRoutine
from .stubs import Stub, apply_stubs, retarget
from .utils import DEBUG_EFFECTS, call_soon, describe

logger = logging.getLogger(__name__)

ListenerMoment = Literal["before", "after"]


@dataclass(frozen=True)
class Listener:
    matcher: Predicate
    callback: Callable[..., Any]

    def matches(self, effect: Any) -> bool:
        return recursive(self.matcher)(effect)


def _run_listener(callback: functools.partial[Any]) -> None:
    try:
        callback()
    except Exception as e:
        logger.warning("Listener %s failed: %s", describe(callback.func), e)


class InterceptedFactory:
    """Routine factory whose routines are intercepted by ``session``.

    Compares equal to the factory it wraps, so call matchers registered for
    the original target still match after the structural rewrite.
    """

    def __init__(self, factory: Callable[..., Any], session: InterceptionSession) -> None:
        functools.update_wrapper(self, factory)
        self.factory = factory
        self.session = session

    def __call__(self, *args: Any, **kwargs: Any) -> InterceptedRoutine:
        logger.debug("intercepting nested routine %s", describe(self.factory))
        return self.session.wrap(self.factory(*args, **kwargs))

    def __eq__(self, other: object) -> bool:
        if isinstance(other, InterceptedFactory):
            return self.factory == other.factory
        return self.factory == other

    def __hash__(self) -> int:
        return hash(self.factory)

    def __repr__(self) -> str:
        return f"InterceptedFactory({describe(self.factory)})"


class InterceptionSession:
    """History, listeners and stubs of one interception tree.

    Every routine wrapped through the session, including routines discovered
    while the tree runs, records into the same history and sees the same
    listeners and stubs.

    Args:
        is_factory: Decides whether a call or fork target creates a routine
            that must be intercepted as well.
        schedule: Receives each listener invocation as a zero-argument
            callable once the transition that triggered it has finished.
            Defaults to :func:`sagamock.utils.call_soon`.

    Listener failures are logged and never reach the routine.
    """

    def __init__(
        self,
        *,
        is_factory: IsFactory = inspect.isgeneratorfunction,
        schedule: Callable[[Callable[[], Any]], Any] = call_soon,
    ) -> None:
        self.is_factory = is_factory
        self.schedule = schedule
        self.history = EffectHistory()
        self.before_listeners: list[Listener] = []
        self.after_listeners: list[Listener] = []
        self._lock = threading.Lock()
        self._deferred: deque[functools.partial[Any]] = deque()
        self._structural_stubs = (
            Stub(RoutineTargetMatcher(ForkEffect, is_factory), self._intercept_target),
            Stub(RoutineTargetMatcher(CallEffect, is_factory), self._intercept_target),
        )
        self._stubs: list[Stub] = list(self._structural_stubs)

    @property
    def stubs(self) -> tuple[Stub, ...]:
        with self._lock:
            return tuple(self._stubs)

    def wrap(self, routine: Generator[Any, Any, Any]) -> InterceptedRoutine:
        return InterceptedRoutine(routine, self)

    def _intercept_target(self, effect: Any) -> Any:
        if isinstance(effect.fn, InterceptedFactory):
            return effect
        return retarget(InterceptedFactory(effect.fn, self))(effect)

    def add_listener(
        self,
        matcher: Predicate,
        callback: Callable[..., Any],
        moment: ListenerMoment = "before",
    ) -> None:
        listener = Listener(matcher, callback)
        with self._lock:
            if moment == "before":
                self.before_listeners.append(listener)
            elif moment == "after":
                self.after_listeners.append(listener)
            else:
                raise ValueError(f"moment must be 'before' or 'after', got {moment!r}")

    def add_stub(self, matcher: Predicate, make_replacement: Callable[[Any], Any]) -> None:
        ensure_replacement(make_replacement)
        stub = Stub(matcher, make_replacement)
        with self._lock:
            for pos in range(len(self._structural_stubs), len(self._stubs)):
                if self._stubs[pos].matcher == matcher:
                    self._stubs[pos] = stub
                    return
            self._stubs.append(stub)

    def reset_stubs(self) -> None:
        with self._lock:
            del self._stubs[len(self._structural_stubs):]
        logger.debug("stubs reset")

    def clear(self) -> None:
        self.history.reset()
        logger.debug("stored effects cleared")

    def record(self, effect: Any) -> None:
        self.history.append(effect)

    def apply_stubs(self, effect: Any) -> Any:
        # The trailing structural pass intercepts routines a user stub retargeted to.
        stubbed = apply_stubs((*self.stubs, *self._structural_stubs), effect)
        if DEBUG_EFFECTS and stubbed != effect:
            logger.debug("stubbed: %r -> %r", effect, stubbed)
        return stubbed

    def notify_before(self, effect: Any) -> None:
        with self._lock:
            listeners = list(self.before_listeners)
        for listener in listeners:
            if listener.matches(effect):
                self._deferred.append(functools.partial(listener.callback, effect))

    def notify_after(self, effect: Any, value: Any) -> None:
        with self._lock:
            listeners = list(self.after_listeners)
        for listener in listeners:
            if listener.matches(effect):
                self._deferred.append(functools.partial(listener.callback, effect, value))

    def flush(self) -> None:
        """Hand the listener calls queued so far to ``schedule``, in order."""
        while self._deferred:
            try:
                callback = self._deferred.popleft()
            except IndexError:
                return
            self.schedule(functools.partial(_run_listener, callback))


__all__ = ["InterceptionSession", "Listener", "ListenerMoment"]
