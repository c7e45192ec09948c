"""Step results of an intercepted routine."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, TypeAlias


@dataclass(frozen=True)
class Suspended:
    """The routine yielded and waits for the executor.

    ``effect`` is what the executor must evaluate (stubs applied);
    ``original`` is what the routine actually yielded and what was recorded.
    """

    effect: Any
    original: Any


@dataclass(frozen=True)
class Done:
    """Terminal: the routine returned ``value``."""

    value: Any


@dataclass(frozen=True)
class Failed:
    """Terminal: the routine raised past its own error handling."""

    exception: BaseException


Terminal: TypeAlias = Done | Failed
StepResult: TypeAlias = Suspended | Terminal


__all__ = ["Done", "Failed", "StepResult", "Suspended", "Terminal"]
