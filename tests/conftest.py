"""
Pytest configuration for sagamock tests.

Provides a minimal saga executor and action store. They play the part of the
host runtime: the mock must work with them exactly like the unmocked saga does.
"""

from collections.abc import Callable, Generator
from typing import Any

import pytest

from sagamock.effects import CallEffect, ForkEffect, PutEffect, RaceEffect, TakeEffect

Settle = Callable[..., None]


def _pattern_matches(pattern: Any, action: Any) -> bool:
    if pattern == "*":
        return True
    if isinstance(pattern, str):
        return isinstance(action, dict) and action.get("type") == pattern
    if callable(pattern):
        return bool(pattern(action))
    return pattern == action


class Store:
    """Records dispatched actions and wakes up routines waiting on a take."""

    def __init__(self) -> None:
        self.actions: list[Any] = []
        self._takers: list[tuple[Any, Settle]] = []

    def dispatch(self, action: Any) -> Any:
        self.actions.append(action)
        woken = [taker for taker in self._takers if _pattern_matches(taker[0], action)]
        self._takers = [taker for taker in self._takers if taker not in woken]
        for _pattern, settle in woken:
            settle(action)
        return action

    def take(self, pattern: Any, settle: Settle) -> None:
        self._takers.append((pattern, settle))


class Task:
    """A routine driven by :class:`SagaRunner`."""

    def __init__(self, routine: Generator[Any, Any, Any]) -> None:
        self.routine = routine
        self.done = False
        self.result: Any = None
        self.error: BaseException | None = None
        self._joiners: list[Settle] = []

    def add_done_callback(self, settle: Settle) -> None:
        if self.done:
            self._notify(settle)
        else:
            self._joiners.append(settle)

    def finish(self, result: Any = None, error: BaseException | None = None) -> None:
        self.done = True
        self.result = result
        self.error = error
        for settle in self._joiners:
            self._notify(settle)

    def _notify(self, settle: Settle) -> None:
        if self.error is not None:
            settle(error=self.error)
        else:
            settle(self.result)


class SagaRunner:
    """Callback-driven executor for the effects in :mod:`sagamock.effects`.

    Calls and forks of generator-producing functions run as child routines;
    races settle with ``{label: value}`` of the first member to finish;
    parallel groups settle with the list of member results. Anything else
    resolves to itself.
    """

    def __init__(self, store: Store) -> None:
        self.store = store

    def run(self, saga: Any, *args: Any) -> Task:
        routine = saga if isinstance(saga, Generator) else saga(*args)
        task = Task(routine)
        self._next(task)
        return task

    def _next(self, task: Task, value: Any = None, error: BaseException | None = None) -> None:
        try:
            if error is not None:
                effect = task.routine.throw(error)
            else:
                effect = task.routine.send(value)
        except StopIteration as stop:
            task.finish(result=stop.value)
            return
        except Exception as exc:
            task.finish(error=exc)
            return

        def resume(result: Any = None, error: BaseException | None = None) -> None:
            self._next(task, result, error)

        self._run_effect(effect, resume)

    def _run_effect(self, effect: Any, settle: Settle) -> None:
        match effect:
            case PutEffect(action=action):
                settle(self.store.dispatch(action))
            case TakeEffect(pattern=pattern):
                self.store.take(pattern, settle)
            case CallEffect(fn=fn, args=args):
                try:
                    result = fn(*args)
                except Exception as exc:
                    settle(error=exc)
                    return
                if isinstance(result, Generator):
                    child = Task(result)
                    child.add_done_callback(settle)
                    self._next(child)
                else:
                    settle(result)
            case ForkEffect(fn=fn, args=args):
                try:
                    result = fn(*args)
                except Exception as exc:
                    settle(error=exc)
                    return
                if isinstance(result, Generator):
                    child = Task(result)
                    self._next(child)
                    settle(child)
                else:
                    settle(result)
            case RaceEffect(effects=effects):
                self._run_race(effects, settle)
            case list() | tuple():
                self._run_parallel(effect, settle)
            case _:
                settle(effect)

    def _run_race(self, effects: Any, settle: Settle) -> None:
        settled = False

        def member_settle(label: str) -> Settle:
            def _settle(value: Any = None, error: BaseException | None = None) -> None:
                nonlocal settled
                if settled:
                    return
                settled = True
                if error is not None:
                    settle(error=error)
                else:
                    settle({label: value})

            return _settle

        for label, member in effects.items():
            if settled:
                break
            self._run_effect(member, member_settle(label))

    def _run_parallel(self, effects: Any, settle: Settle) -> None:
        results: list[Any] = [None] * len(effects)
        remaining = len(effects)
        failed = False
        if remaining == 0:
            settle(type(effects)())
            return

        def member_settle(index: int) -> Settle:
            def _settle(value: Any = None, error: BaseException | None = None) -> None:
                nonlocal remaining, failed
                if failed:
                    return
                if error is not None:
                    failed = True
                    settle(error=error)
                    return
                results[index] = value
                remaining -= 1
                if remaining == 0:
                    settle(type(effects)(results))

            return _settle

        for index, member in enumerate(effects):
            self._run_effect(member, member_settle(index))


@pytest.fixture
def store() -> Store:
    return Store()


@pytest.fixture
def runner(store: Store) -> SagaRunner:
    return SagaRunner(store)
