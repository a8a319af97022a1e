"""HTTP transport posting batches with :mod:`requests`.

Purpose
-------
Deliver collector requests off the timer thread and report each outcome
through the completion handler expected by :class:`TransportPort`.

Contents
--------
* :class:`RequestsTransport` - single-worker executor wrapping a
  :class:`requests.Session`.

System Role
-----------
Default transport composed by :mod:`lib_log_sumo.runtime`. The request timeout
bounds how long the flush cycle can stay gated on one request.
"""

from __future__ import annotations

import logging
from concurrent.futures import Future, ThreadPoolExecutor

import requests

from lib_log_sumo.application.ports.transport import (
    CollectorRequest,
    CollectorResponse,
    CompletionHandler,
    TransportPort,
)

LOGGER = logging.getLogger(__name__)

DEFAULT_REQUEST_TIMEOUT = 30.0


class RequestsTransport(TransportPort):
    """Send collector requests on a background worker.

    Parameters
    ----------
    session:
        Optional pre-configured :class:`requests.Session` (proxies, adapters,
        custom CA bundles). A private session is created when omitted and
        closed again by :meth:`close`.
    timeout:
        Seconds passed to ``requests`` as the connect/read timeout. ``None``
        waits indefinitely, which can stall the flush cycle for good.
    """

    def __init__(
        self,
        *,
        session: requests.Session | None = None,
        timeout: float | None = DEFAULT_REQUEST_TIMEOUT,
    ) -> None:
        self._owns_session = session is None
        self._session = session if session is not None else requests.Session()
        self._timeout = timeout
        self._executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix="lib_log_sumo-http")
        self._closed = False

    def send(self, request: CollectorRequest, on_complete: CompletionHandler) -> None:
        """Queue ``request`` on the worker; ``on_complete`` runs on that worker."""
        if self._closed:
            raise RuntimeError("transport is closed")
        future = self._executor.submit(self._deliver, request, on_complete)
        future.add_done_callback(_report_unexpected)

    def close(self) -> None:
        """Stop accepting requests and release pooled connections."""
        if self._closed:
            return
        self._closed = True
        self._executor.shutdown(wait=False)
        if self._owns_session:
            self._session.close()

    def _deliver(self, request: CollectorRequest, on_complete: CompletionHandler) -> None:
        try:
            response = self._session.request(
                request.method,
                request.url,
                data=request.body.encode("utf-8"),
                timeout=self._timeout,
            )
        except Exception as exc:  # noqa: BLE001 - any failure must still complete the dispatch
            LOGGER.debug("Collector request to %s failed: %s", request.url, exc)
            on_complete(exc, None)
            return
        LOGGER.debug("Collector answered %s with status %s", request.url, response.status_code)
        on_complete(None, CollectorResponse(status=response.status_code))


def _report_unexpected(future: Future[None]) -> None:
    """Log exceptions escaping the worker instead of losing them in the future."""

    if future.cancelled():
        return
    exc = future.exception()
    if exc is not None:
        LOGGER.error("Transport worker raised an exception; continuing", exc_info=exc)


__all__ = ["DEFAULT_REQUEST_TIMEOUT", "RequestsTransport"]
