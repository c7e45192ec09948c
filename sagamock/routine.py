"""Intercepted routines.

An :class:`InterceptedRoutine` stands in for a generator the executor would
otherwise drive directly. Each effect the wrapped generator yields is recorded,
reported to listeners and rewritten by stubs before it reaches the executor;
the executor's answer is passed back unchanged.
"""

from __future__ import annotations

import logging
from collections.abc import Generator
from enum import Enum
from typing import TYPE_CHECKING, Any

from ._validators import ensure_routine
from .classification import classify
from .result import Done, Failed, StepResult, Suspended
from .surface import SagaMockConfig, SagaMockQueries

if TYPE_CHECKING:
    from collections.abc import Iterator

    from .session import InterceptionSession

logger = logging.getLogger(__name__)


class RoutineState(Enum):
    READY = "ready"
    RUNNING = "running"
    SUSPENDED = "suspended"
    DONE = "done"
    FAILED = "failed"


class InterceptedRoutine(SagaMockConfig, SagaMockQueries, Generator):
    def __init__(self, routine: Generator[Any, Any, Any], session: InterceptionSession) -> None:
        ensure_routine(routine)
        self._routine = routine
        self._session = session
        self._pending: Any = None
        self.state = RoutineState.READY
        self.result: Any = None
        self.error: BaseException | None = None

    @property
    def session(self) -> InterceptionSession:
        return self._session

    def _each_session(self) -> Iterator[InterceptionSession]:
        yield self._session

    def _stored_effects(self) -> list[Any]:
        return self._session.history.snapshot()

    def step(self, value: Any = None, error: BaseException | None = None) -> StepResult:
        """Resume the routine with ``value``, or raise ``error`` inside it.

        Returns the next suspension, or the terminal outcome. Listener calls
        triggered by the transition are scheduled only after it has finished.
        """
        try:
            return self._advance(value, error)
        finally:
            self._session.flush()

    def _advance(self, value: Any, error: BaseException | None) -> StepResult:
        if self.state in (RoutineState.DONE, RoutineState.FAILED):
            return Failed(error) if error is not None else Done(None)
        if self.state is RoutineState.RUNNING:
            raise ValueError("routine already executing")
        if self.state is RoutineState.READY and error is None and value is not None:
            raise TypeError("can't send non-None value to a just-started routine")

        if self.state is RoutineState.SUSPENDED and error is None:
            self._session.notify_after(self._pending, value)
        self._pending = None
        self.state = RoutineState.RUNNING
        try:
            if error is not None:
                effect = self._routine.throw(error)
            else:
                effect = self._routine.send(value)
        except StopIteration as stop:
            self.state = RoutineState.DONE
            self.result = stop.value
            return Done(stop.value)
        except Exception as exc:
            self.state = RoutineState.FAILED
            self.error = exc
            return Failed(exc)
        except BaseException:
            self.state = RoutineState.FAILED
            raise
        return self._suspend(effect)

    def _suspend(self, effect: Any) -> Suspended:
        logger.debug("effect (%s): %r", classify(effect).value, effect)
        self._session.record(effect)
        self._pending = effect
        self.state = RoutineState.SUSPENDED
        self._session.notify_before(effect)
        stubbed = self._session.apply_stubs(effect)
        return Suspended(effect=stubbed, original=effect)

    def _unwrap(self, outcome: StepResult) -> Any:
        match outcome:
            case Suspended(effect=effect):
                return effect
            case Done(value=value):
                raise StopIteration(value)
            case Failed(exception=exc):
                raise exc

    def send(self, value: Any) -> Any:
        return self._unwrap(self.step(value))

    def throw(self, typ: Any, val: Any = None, tb: Any = None) -> Any:
        if val is None:
            error = typ() if isinstance(typ, type) else typ
        elif isinstance(val, BaseException):
            error = val
        else:
            error = typ(val)
        if tb is not None:
            error = error.with_traceback(tb)
        return self._unwrap(self.step(error=error))

    def close(self) -> None:
        if self.state in (RoutineState.DONE, RoutineState.FAILED):
            return
        if self.state is RoutineState.RUNNING:
            raise ValueError("routine already executing")
        try:
            self._routine.close()
        except Exception as exc:
            self.state = RoutineState.FAILED
            self.error = exc
            raise
        self.state = RoutineState.DONE

    def __repr__(self) -> str:
        return f"InterceptedRoutine({self._routine!r}, state={self.state.value})"


__all__ = ["InterceptedRoutine", "RoutineState"]
