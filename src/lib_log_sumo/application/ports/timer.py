"""Port for the repeating timer that drives flush cycles."""

from __future__ import annotations

from collections.abc import Callable
from typing import Protocol, runtime_checkable


@runtime_checkable
class TimerHandle(Protocol):
    """Handle returned by :meth:`TimerPort.every`."""

    def cancel(self) -> None:
        """Stop further invocations of the scheduled callback."""


@runtime_checkable
class TimerPort(Protocol):
    """Schedule a callback at a fixed interval."""

    def every(self, interval_ms: int, callback: Callable[[], None]) -> TimerHandle:
        """Invoke ``callback`` every ``interval_ms`` milliseconds until cancelled."""


__all__ = ["TimerHandle", "TimerPort"]
