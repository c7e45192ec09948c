"""Entry points for mocking sagas.

Example:
    >>> def saga():
    ...     yield put({"type": "A"})
    ...     yield put({"type": "B"})
    >>> mocked = mock_saga(saga)
    >>> run(mocked)  # any executor that accepts the original saga
    >>> mocked.put_action("A").followed_by.put_action("B").is_present
    True
"""

from __future__ import annotations

import functools
from collections.abc import Callable, Generator, Iterator, Sequence
from typing import Any

from ._validators import IsFactory, ensure_sequence
from .errors import InvalidInputKind
from .routine import InterceptedRoutine
from .session import InterceptionSession
from .surface import SagaMockConfig, SagaMockQueries
from .utils import call_soon

Schedule = Callable[[Callable[[], Any]], Any]


class MockedSaga(SagaMockConfig, SagaMockQueries):
    """Mocked routine factory.

    Calling it starts the original factory and returns the intercepted
    routine. Every routine it creates shares one session, so configuration
    and queries cover all of them.
    """

    def __init__(self, factory: Callable[..., Any], session: InterceptionSession) -> None:
        functools.update_wrapper(self, factory)
        self._factory = factory
        self._session = session

    @property
    def session(self) -> InterceptionSession:
        return self._session

    def __call__(self, *args: Any, **kwargs: Any) -> InterceptedRoutine:
        return self._session.wrap(self._factory(*args, **kwargs))

    def _each_session(self) -> Iterator[InterceptionSession]:
        yield self._session

    def _stored_effects(self) -> list[Any]:
        return self._session.history.snapshot()

    def __repr__(self) -> str:
        return f"MockedSaga({self._factory!r})"


class MockedSagaList(SagaMockConfig, SagaMockQueries, list):
    """Independently mocked sagas configured and queried as one.

    Nested empty sequences stay in place as members but take no part in
    configuration or queries.
    """

    def _handles(self) -> Iterator[SagaMockConfig]:
        for member in self:
            if isinstance(member, SagaMockConfig):
                yield member

    def _each_session(self) -> Iterator[InterceptionSession]:
        seen: set[int] = set()
        for member in self._handles():
            for session in member._each_session():
                if id(session) not in seen:
                    seen.add(id(session))
                    yield session

    def _stored_effects(self) -> list[Any]:
        effects: list[Any] = []
        for session in self._each_session():
            effects.extend(session.history.snapshot())
        return effects


def _new_session(is_factory: IsFactory | None, schedule: Schedule) -> InterceptionSession:
    if is_factory is None:
        return InterceptionSession(schedule=schedule)
    return InterceptionSession(is_factory=is_factory, schedule=schedule)


def mock_saga(
    saga: Any,
    *,
    is_factory: IsFactory | None = None,
    session: InterceptionSession | None = None,
    schedule: Schedule = call_soon,
) -> Any:
    """Wrap ``saga`` so its effects are recorded and can be stubbed.

    ``saga`` may be a routine factory, a started routine, or a list or tuple
    of either. The result is accepted wherever ``saga`` was.

    Args:
        is_factory: Tells routine factories apart from other callables.
            Defaults to ``inspect.isgeneratorfunction``, or to the check of
            ``session`` when one is given.
        session: Existing session to record into. Handles built on the same
            session share history, listeners and stubs. ``schedule`` is
            ignored when it is given.
        schedule: Receives listener calls; see :class:`InterceptionSession`.
    """
    if isinstance(saga, (list, tuple)):
        return mock_array(saga, is_factory=is_factory, session=session, schedule=schedule)
    if session is None:
        session = _new_session(is_factory, schedule)
    check = is_factory if is_factory is not None else session.is_factory
    if check(saga):
        return MockedSaga(saga, session)
    if isinstance(saga, Generator):
        return session.wrap(saga)
    raise InvalidInputKind(saga)


def mock_array(
    sagas: Sequence[Any],
    *,
    is_factory: IsFactory | None = None,
    session: InterceptionSession | None = None,
    schedule: Schedule = call_soon,
) -> Any:
    ensure_sequence(sagas)
    if len(sagas) == 0:
        return sagas
    return MockedSagaList(
        mock_saga(saga, is_factory=is_factory, session=session, schedule=schedule) for saga in sagas
    )


__all__ = ["MockedSaga", "MockedSagaList", "mock_array", "mock_saga"]
