"""
sagamock - Record, query and stub the effects of saga routines.

A saga is a generator that yields effect descriptions instead of performing
side effects. ``mock_saga`` wraps it so every yielded effect, including the
effects of sagas it calls or forks, is recorded and can be stubbed, while the
executor keeps driving it exactly like the original.

Example:
    >>> from sagamock import call, mock_saga, put, returning
    >>>
    >>> def saga():
    ...     user = yield call(fetch_user, 1)
    ...     yield put({"type": "USER_LOADED", "user": user})
    >>>
    >>> mocked = mock_saga(saga).stub_call(fetch_user, returning({"id": 1}))
    >>> run(mocked)
    >>> mocked.called(fetch_user).followed_by.put_action("USER_LOADED").is_present
    True
"""

from sagamock.classification import EffectKind, classify, is_composite
from sagamock.effects import (
    CallEffect,
    ForkEffect,
    PutEffect,
    RaceEffect,
    TakeEffect,
    all_,
    call,
    fork,
    put,
    race,
    take,
)
from sagamock.errors import InvalidInputKind, MissingReplacementFunction
from sagamock.history import EffectHistory, find_all_indexes
from sagamock.matchers import recursive
from sagamock.mock import MockedSaga, MockedSagaList, mock_array, mock_saga
from sagamock.query import EffectQueries, QueryResult
from sagamock.result import Done, Failed, Suspended
from sagamock.rewrite import rreplace
from sagamock.routine import InterceptedRoutine, RoutineState
from sagamock.session import InterceptionSession
from sagamock.store_spy import DispatchSpy
from sagamock.stubs import raising, returning
from sagamock.utils import call_now, call_soon

__version__ = "0.1.0"

__all__ = [
    "CallEffect",
    "DispatchSpy",
    "Done",
    "EffectHistory",
    "EffectKind",
    "EffectQueries",
    "Failed",
    "ForkEffect",
    "InterceptedRoutine",
    "InterceptionSession",
    "InvalidInputKind",
    "MissingReplacementFunction",
    "MockedSaga",
    "MockedSagaList",
    "PutEffect",
    "QueryResult",
    "RaceEffect",
    "RoutineState",
    "Suspended",
    "TakeEffect",
    "all_",
    "call",
    "call_now",
    "call_soon",
    "classify",
    "find_all_indexes",
    "fork",
    "is_composite",
    "mock_array",
    "mock_saga",
    "put",
    "race",
    "raising",
    "recursive",
    "returning",
    "rreplace",
    "take",
]
