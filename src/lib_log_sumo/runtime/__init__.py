"""Runtime façade: the :class:`SumoLogger` stream.

Purpose
-------
Expose the object host applications hold on to: ``write`` records, ``end`` to
learn when everything buffered has been delivered, and ``close`` to drain and
stop deterministically.

Contents
--------
* :class:`SumoLogger` - per-instance composition of buffer, flush cycle,
  timer, and transport.
* Settings helpers re-exported from :mod:`._settings`.

System Role
-----------
Outer shell of the package. Every logger owns its own runtime; there is no
module-level singleton, so several collectors can be fed from one process.
"""

from __future__ import annotations

import asyncio
import logging
from types import TracebackType
from typing import Any

from lib_log_sumo.application.ports import TimerPort, TransportPort
from lib_log_sumo.application.use_cases import DrainCallback

from ._composition import build_runtime
from ._settings import (
    DEFAULT_ENDPOINT,
    DEFAULT_SYNC_INTERVAL_MS,
    DiagnosticHook,
    StreamSettings,
    build_stream_settings,
)
from ._state import StreamRuntime

LOGGER = logging.getLogger(__name__)


def _ignore_outcome(_failure: BaseException | None) -> None:
    return None


class SumoLogger:
    """Buffer structured records and ship them to a SumoLogic HTTP source.

    Parameters
    ----------
    collector:
        Collector key appended to ``endpoint``. Falls back to
        ``LOG_SUMO_COLLECTOR``; construction raises :class:`ValueError` when
        neither is set.
    endpoint:
        Base URL of the collector (``LOG_SUMO_ENDPOINT``).
    sync_interval_ms:
        Flush tick period in milliseconds (``LOG_SUMO_SYNC_INTERVAL_MS``).
    max_lines:
        Upper bound of lines per request (``LOG_SUMO_MAX_LINES``).
    rewrite_levels:
        Replace numeric Bunyan levels with their names before encoding
        (``LOG_SUMO_REWRITE_LEVELS``).
    request_timeout:
        Seconds before the default transport abandons a request
        (``LOG_SUMO_REQUEST_TIMEOUT``).
    transport, timer:
        Replacements for the default :class:`RequestsTransport` and
        :class:`ThreadTimer` adapters.
    diagnostic_hook:
        Optional ``hook(name, payload)`` receiving ``flush_dispatched``,
        ``flush_succeeded`` and ``flush_failed`` events.

    Examples
    --------
    >>> from lib_log_sumo.application.ports import CollectorResponse
    >>> sent = []
    >>> class Recorder:
    ...     def send(self, request, on_complete):
    ...         sent.append(request.body)
    ...         on_complete(None, CollectorResponse(status=200))
    ...     def close(self):
    ...         pass
    >>> class ManualTimer:
    ...     def every(self, interval_ms, callback):
    ...         self.tick = callback
    ...         return self
    ...     def cancel(self):
    ...         pass
    >>> timer = ManualTimer()
    >>> logger = SumoLogger("KEY", rewrite_levels=True, transport=Recorder(), timer=timer)
    >>> logger.write({"level": 30, "msg": "hi"})
    >>> timer.tick()
    >>> sent
    ['{"level":"INFO","msg":"hi"}']
    """

    def __init__(
        self,
        collector: str | None = None,
        *,
        endpoint: str | None = None,
        sync_interval_ms: int | None = None,
        max_lines: int | None = None,
        rewrite_levels: bool | None = None,
        request_timeout: float | None = None,
        transport: TransportPort | None = None,
        timer: TimerPort | None = None,
        diagnostic_hook: DiagnosticHook = None,
    ) -> None:
        settings = build_stream_settings(
            collector=collector,
            endpoint=endpoint,
            sync_interval_ms=sync_interval_ms,
            max_lines=max_lines,
            rewrite_levels=rewrite_levels,
            request_timeout=request_timeout,
            diagnostic_hook=diagnostic_hook,
        )
        self._runtime: StreamRuntime = build_runtime(settings, transport=transport, timer=timer)

    @property
    def settings(self) -> StreamSettings:
        return self._runtime.settings

    @property
    def url(self) -> str:
        """Collector URL batches are posted to."""

        return self._runtime.settings.url

    @property
    def pending_lines(self) -> int:
        """Number of buffered lines not yet confirmed by the collector."""

        return len(self._runtime.buffer)

    @property
    def in_flight(self) -> int:
        """Lines in the outstanding request, ``0`` when no request is active."""

        return self._runtime.flush.in_flight

    @property
    def closed(self) -> bool:
        return self._runtime.closed

    def write(self, record: Any) -> None:
        """Serialize ``record`` and queue it for delivery. Never raises.

        Records written after :meth:`close` has started are dropped.
        """

        runtime = self._runtime
        if runtime.closed:
            LOGGER.debug("Dropping record written after close")
            return
        runtime.write(record)

    def end(self, callback: DrainCallback | None = None) -> None:
        """Request a drain notification.

        ``callback(None)`` runs immediately when nothing is buffered; otherwise
        it runs after the flush that empties the buffer, or with the error of
        the first failed flush. A second request while one is pending raises
        :class:`RuntimeError`.
        """

        self._runtime.flush.drain(callback if callback is not None else _ignore_outcome)

    def close(self, timeout: float | None = None) -> None:
        """Drain the buffer, then stop the timer and transport synchronously.

        Raises
        ------
        RuntimeError
            When called inside a running event loop (use :meth:`close_async`).
        TimeoutError
            When ``timeout`` seconds pass before the drain completes.
        BaseException
            The delivery failure that ended the drain.
        """

        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            loop = None
        if loop is not None and loop.is_running():
            raise RuntimeError(
                "SumoLogger.close() cannot run inside an active event loop; await SumoLogger.close_async() instead",
            )
        asyncio.run(self.close_async(timeout))

    async def close_async(self, timeout: float | None = None) -> None:
        """Asynchronous variant of :meth:`close`; repeated calls are no-ops."""

        runtime = self._runtime
        if runtime.closed:
            return
        runtime.closed = True
        await runtime.shutdown_async(timeout)

    def __enter__(self) -> "SumoLogger":
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()

    def __repr__(self) -> str:
        return f"SumoLogger(url={self.url!r}, pending_lines={self.pending_lines}, in_flight={self.in_flight})"


__all__ = [
    "DEFAULT_ENDPOINT",
    "DEFAULT_SYNC_INTERVAL_MS",
    "StreamSettings",
    "SumoLogger",
    "build_stream_settings",
]
