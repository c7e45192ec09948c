from __future__ import annotations

from typing import Any


class InvalidInputKind(TypeError):
    """Raised when mock_saga receives something that is not a saga."""

    def __init__(self, value: Any) -> None:
        self.value = value
        super().__init__(
            "saga must be a generator function, a generator or a list of them, "
            f"got {type(value).__name__}\n"
            "Hint: pass the function itself (`mock_saga(my_saga)`) or a started "
            "generator (`mock_saga(my_saga())`)"
        )


class MissingReplacementFunction(TypeError):
    """Raised when a stub is registered without a callable replacement."""

    def __init__(self, value: Any) -> None:
        self.value = value
        super().__init__(
            f"stub function required, got {type(value).__name__}\n"
            "Hint: wrap constant results with `returning(value)` and errors with "
            "`raising(exc)`"
        )


__all__ = ["InvalidInputKind", "MissingReplacementFunction"]
