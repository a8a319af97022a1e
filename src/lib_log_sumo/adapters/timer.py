"""Thread-based implementation of the timer port.

Purpose
-------
Run the flush cycle on a background daemon thread at a fixed cadence so host
code never waits on delivery.

Contents
--------
* :class:`ThreadTimer` - :class:`TimerPort` factory.
* :class:`_RepeatingThread` - the handle returned by :meth:`ThreadTimer.every`.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable

from lib_log_sumo.application.ports.timer import TimerHandle, TimerPort

LOGGER = logging.getLogger(__name__)


class _RepeatingThread(TimerHandle):
    """Invoke a callback every ``interval`` seconds until cancelled."""

    def __init__(self, interval: float, callback: Callable[[], None], *, name: str) -> None:
        self._interval = interval
        self._callback = callback
        self._stop_event = threading.Event()
        self._thread = threading.Thread(target=self._run, name=name, daemon=True)

    def start(self) -> None:
        self._thread.start()

    def cancel(self) -> None:
        """Stop ticking; safe to call from the callback itself."""
        self._stop_event.set()
        if self._thread.is_alive() and threading.current_thread() is not self._thread:
            self._thread.join(timeout=self._interval + 1.0)

    def _run(self) -> None:
        """Internal loop; ``Event.wait`` doubles as the interval sleep."""
        while not self._stop_event.wait(self._interval):
            try:
                self._callback()
            except Exception as exc:  # noqa: BLE001
                LOGGER.error("Timer callback raised an exception; continuing", exc_info=exc)


class ThreadTimer(TimerPort):
    """Schedule repeating callbacks on dedicated daemon threads.

    Examples
    --------
    >>> import threading
    >>> fired = threading.Event()
    >>> handle = ThreadTimer().every(10, fired.set)
    >>> fired.wait(2.0)
    True
    >>> handle.cancel()
    """

    def __init__(self, *, thread_name: str = "lib_log_sumo-flush") -> None:
        self._thread_name = thread_name

    def every(self, interval_ms: int, callback: Callable[[], None]) -> TimerHandle:
        if interval_ms <= 0:
            raise ValueError("interval_ms must be positive")
        handle = _RepeatingThread(interval_ms / 1000.0, callback, name=self._thread_name)
        handle.start()
        return handle


__all__ = ["ThreadTimer"]
