"""Runtime state container for a single log stream."""

from __future__ import annotations

from dataclasses import dataclass

from lib_log_sumo.application.ports import TimerHandle, TransportPort
from lib_log_sumo.application.use_cases import FlushCycle, IngestCallable, ShutdownCallable
from lib_log_sumo.domain import LineBuffer

from ._settings import StreamSettings


@dataclass(slots=True)
class StreamRuntime:
    """Aggregate of live collaborators assembled by the composition root.

    One instance exists per :class:`lib_log_sumo.SumoLogger`; nothing here is
    shared between loggers.
    """

    settings: StreamSettings
    buffer: LineBuffer
    write: IngestCallable
    flush: FlushCycle
    transport: TransportPort
    timer: TimerHandle
    shutdown_async: ShutdownCallable
    closed: bool = False


__all__ = ["StreamRuntime"]
