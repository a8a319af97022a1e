"""Flush cycle moving buffered lines to the collector.

Purpose
-------
Implement the single-flight delivery loop: each timer tick ships at most one
batch, a batch leaves the buffer only after the collector accepted it, and a
failed batch is retried whole on the next tick ahead of newer lines.

Contents
--------
* :class:`FlushCycle` - the tick callable plus the drain protocol.
* :data:`DrainCallback` - signature of drain completion callbacks.
* :func:`delivery_failure` - classify a transport outcome.

System Role
-----------
Composed by :mod:`lib_log_sumo.runtime` with a :class:`LineBuffer`, a
:class:`TransportPort` and a :class:`TimerPort`. The cycle never logs or
raises delivery failures; they reach callers only through a pending drain
callback or the optional diagnostic hook.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable
from functools import partial
from typing import Any, Optional

from lib_log_sumo.application.ports.transport import CollectorRequest, CollectorResponse, TransportPort
from lib_log_sumo.domain import LineBuffer
from lib_log_sumo.errors import DeliveryError

LOGGER = logging.getLogger(__name__)

DrainCallback = Callable[[Optional[BaseException]], None]
DiagnosticHook = Optional[Callable[[str, dict[str, Any]], None]]

DEFAULT_MAX_LINES = 100


def delivery_failure(
    error: BaseException | None,
    response: CollectorResponse | None,
    *,
    url: str | None = None,
) -> BaseException | None:
    """Return the failure represented by a transport outcome, or ``None``.

    Examples
    --------
    >>> delivery_failure(None, CollectorResponse(status=204)) is None
    True
    >>> delivery_failure(None, CollectorResponse(status=400))
    DeliveryError('collector rejected batch with HTTP status 400')
    """
    if error is not None:
        return error
    if response is None:
        return DeliveryError(None, url)
    if 200 <= response.status < 400:
        return None
    return DeliveryError(response.status, url)


class FlushCycle:
    """Deliver the head of ``buffer`` to ``url`` one batch at a time.

    Calling the instance performs one tick. The in-flight count doubles as the
    mutual exclusion gate: while it is non-zero every tick is a no-op.
    """

    def __init__(
        self,
        *,
        buffer: LineBuffer,
        transport: TransportPort,
        url: str,
        max_lines: int = DEFAULT_MAX_LINES,
        diagnostic: DiagnosticHook = None,
    ) -> None:
        if max_lines <= 0:
            raise ValueError("max_lines must be positive")
        self._buffer = buffer
        self._transport = transport
        self._url = url
        self._max_lines = max_lines
        self._diagnostic = diagnostic
        self._lock = threading.RLock()
        self._in_flight = 0
        self._dispatch_id = 0
        self._waiters: list[DrainCallback] = []
        self._exclusive_pending = False

    @property
    def url(self) -> str:
        return self._url

    @property
    def in_flight(self) -> int:
        """Number of lines in the outstanding request, ``0`` when idle."""

        with self._lock:
            return self._in_flight

    @property
    def drain_pending(self) -> bool:
        """Return ``True`` while a drain callback waits for an outcome."""

        with self._lock:
            return bool(self._waiters)

    def __call__(self) -> None:
        """Run one tick of the flush cycle."""

        with self._lock:
            if self._in_flight > 0:
                return
            lines = self._buffer.head(self._max_lines)
            if not lines:
                return
            self._in_flight = len(lines)
            self._dispatch_id += 1
            dispatch_id = self._dispatch_id

        request = CollectorRequest(method="POST", url=self._url, body="\n".join(lines))
        self._emit_diagnostic("flush_dispatched", {"lines": len(lines), "bytes": len(request.body)})
        on_complete = partial(self._complete, dispatch_id)
        try:
            self._transport.send(request, on_complete)
        except Exception as exc:  # noqa: BLE001 - a raising transport is a failed delivery
            on_complete(exc, None)

    def drain(self, callback: DrainCallback, *, exclusive: bool = True) -> None:
        """Invoke ``callback`` once everything buffered has been delivered.

        Fires immediately with ``None`` when the buffer is empty. Otherwise the
        callback is parked until a flush either empties the buffer (``None``)
        or fails (the failure). Only one exclusive drain may wait at a time;
        ``exclusive=False`` joins whatever is already waiting.
        """

        with self._lock:
            if len(self._buffer) > 0:
                if exclusive:
                    if self._exclusive_pending:
                        raise RuntimeError("a drain request is already pending")
                    self._exclusive_pending = True
                self._waiters.append(callback)
                return
        callback(None)

    def abandon(self, failure: BaseException) -> None:
        """Fire every parked drain callback with ``failure`` and forget them.

        Used when the cycle stops before the buffer drained, so no waiter is
        left without an outcome.
        """

        with self._lock:
            waiters = self._take_waiters()
        for callback in waiters:
            self._notify(callback, failure)

    def _complete(
        self,
        dispatch_id: int,
        error: BaseException | None,
        response: CollectorResponse | None,
    ) -> None:
        """Apply the outcome of dispatch ``dispatch_id`` exactly once."""

        failure = delivery_failure(error, response, url=self._url)
        with self._lock:
            if dispatch_id != self._dispatch_id or self._in_flight == 0:
                return
            sent = self._in_flight
            if failure is None:
                self._buffer.remove_head(sent)
            self._in_flight = 0
            waiters: list[DrainCallback] = []
            if failure is not None or len(self._buffer) == 0:
                waiters = self._take_waiters()

        if failure is None:
            self._emit_diagnostic("flush_succeeded", {"lines": sent, "status": getattr(response, "status", None)})
        else:
            self._emit_diagnostic("flush_failed", {"lines": sent, "error": repr(failure)})
        for callback in waiters:
            self._notify(callback, failure)

    def _take_waiters(self) -> list[DrainCallback]:
        """Detach parked callbacks; the caller holds the lock."""
        waiters, self._waiters = self._waiters, []
        self._exclusive_pending = False
        return waiters

    def _notify(self, callback: DrainCallback, failure: BaseException | None) -> None:
        try:
            callback(failure)
        except Exception as exc:  # noqa: BLE001
            LOGGER.error("Drain callback raised an exception; continuing", exc_info=exc)

    def _emit_diagnostic(self, name: str, payload: dict[str, Any]) -> None:
        """Invoke the diagnostic hook while guarding against callback failures."""

        if self._diagnostic is None:
            return
        try:
            self._diagnostic(name, payload)
        except Exception as diagnostic_exc:  # noqa: BLE001
            LOGGER.error("Flush diagnostic hook raised while reporting %s", name, exc_info=diagnostic_exc)


__all__ = ["DEFAULT_MAX_LINES", "DiagnosticHook", "DrainCallback", "FlushCycle", "delivery_failure"]
