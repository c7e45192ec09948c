"""
Utility functions for the sagamock library.
"""

import asyncio
import os
from collections.abc import Callable
from typing import Any

# Environment variable to control debug mode
DEBUG_EFFECTS = os.environ.get("SAGAMOCK_DEBUG", "").lower() in ("1", "true", "yes")


def call_soon(callback: Callable[[], Any]) -> None:
    """Run ``callback`` on the next turn of the running event loop.

    Without a running loop in this thread the callback runs immediately.
    """
    try:
        loop = asyncio.get_running_loop()
    except RuntimeError:
        callback()
        return
    loop.call_soon(callback)


def call_now(callback: Callable[[], Any]) -> None:
    callback()


def describe(value: Any) -> str:
    name = getattr(value, "__qualname__", None) or getattr(value, "__name__", None)
    return name if name is not None else repr(value)


__all__ = [
    "DEBUG_EFFECTS",
    "call_now",
    "call_soon",
    "describe",
]
