"""Shutdown orchestration for a log stream.

Purpose
-------
Provide a unified shutdown routine that waits for the buffer to drain, stops
the flush timer, and releases the transport.
"""

from __future__ import annotations

import asyncio
from typing import Awaitable, Callable

from lib_log_sumo.application.ports.timer import TimerHandle
from lib_log_sumo.application.ports.transport import TransportPort

from .flush import FlushCycle

ShutdownCallable = Callable[[float | None], Awaitable[None]]


def create_shutdown(
    *,
    flush: FlushCycle,
    timer: TimerHandle | None,
    transport: TransportPort | None,
) -> ShutdownCallable:
    """Return an async callable performing the shutdown sequence."""

    async def shutdown(timeout: float | None = None) -> None:
        """Drain the buffer, then stop the timer and close the transport.

        Raises the delivery failure that ended the drain, or
        :class:`TimeoutError` when ``timeout`` seconds pass first. A pending
        ``end`` callback shares the outcome; when the wait ends early it
        receives the same exception. The timer and transport are released in
        every case.
        """
        loop = asyncio.get_running_loop()
        outcome: asyncio.Future[BaseException | None] = loop.create_future()

        def _settle(failure: BaseException | None) -> None:
            if not outcome.done():
                outcome.set_result(failure)

        def _on_drained(failure: BaseException | None) -> None:
            if loop.is_closed():
                return
            loop.call_soon_threadsafe(_settle, failure)

        try:
            flush.drain(_on_drained, exclusive=False)
            failure = await asyncio.wait_for(outcome, timeout)
        except BaseException as exc:
            flush.abandon(exc)
            raise
        finally:
            if timer is not None:
                timer.cancel()
            if transport is not None:
                transport.close()
        if failure is not None:
            raise failure

    return shutdown


__all__ = ["ShutdownCallable", "create_shutdown"]
