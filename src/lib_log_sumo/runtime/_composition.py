"""Runtime composition wiring domain, use cases, and adapters.

Purpose
-------
Translate :class:`StreamSettings` into a live :class:`StreamRuntime`: one
buffer, one ingest callable, one flush cycle scheduled on a timer, and the
shutdown hook that tears them down again.
"""

from __future__ import annotations

from lib_log_sumo.adapters import RequestsTransport, ThreadTimer
from lib_log_sumo.application.ports import TimerPort, TransportPort
from lib_log_sumo.application.use_cases import FlushCycle, create_ingest, create_shutdown
from lib_log_sumo.domain import LineBuffer

from ._settings import StreamSettings
from ._state import StreamRuntime


def build_runtime(
    settings: StreamSettings,
    *,
    transport: TransportPort | None = None,
    timer: TimerPort | None = None,
) -> StreamRuntime:
    """Assemble and start a stream runtime.

    ``transport`` and ``timer`` default to :class:`RequestsTransport` and
    :class:`ThreadTimer`; tests and hosts with their own event loop inject
    replacements. The timer is started before this function returns.
    """

    buffer = LineBuffer()
    resolved_transport = transport if transport is not None else _create_transport(settings)
    flush = FlushCycle(
        buffer=buffer,
        transport=resolved_transport,
        url=settings.url,
        max_lines=settings.max_lines,
        diagnostic=settings.diagnostic_hook,
    )
    write = create_ingest(buffer=buffer, rewrite_levels=settings.rewrite_levels)
    resolved_timer = timer if timer is not None else ThreadTimer()
    handle = resolved_timer.every(settings.sync_interval_ms, flush)
    shutdown_async = create_shutdown(flush=flush, timer=handle, transport=resolved_transport)

    return StreamRuntime(
        settings=settings,
        buffer=buffer,
        write=write,
        flush=flush,
        transport=resolved_transport,
        timer=handle,
        shutdown_async=shutdown_async,
    )


def _create_transport(settings: StreamSettings) -> TransportPort:
    return RequestsTransport(timeout=settings.request_timeout)


__all__ = ["build_runtime"]
