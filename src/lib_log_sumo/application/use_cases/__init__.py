"""Use cases composing the log shipping pipeline."""

from __future__ import annotations

from .flush import DEFAULT_MAX_LINES, DiagnosticHook, DrainCallback, FlushCycle, delivery_failure
from .ingest import IngestCallable, create_ingest
from .shutdown import ShutdownCallable, create_shutdown

__all__ = [
    "DEFAULT_MAX_LINES",
    "DiagnosticHook",
    "DrainCallback",
    "FlushCycle",
    "IngestCallable",
    "ShutdownCallable",
    "create_ingest",
    "create_shutdown",
    "delivery_failure",
]
