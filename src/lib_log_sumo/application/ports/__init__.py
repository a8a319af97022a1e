"""Ports the shipping core depends on."""

from __future__ import annotations

from .timer import TimerHandle, TimerPort
from .transport import CollectorRequest, CollectorResponse, CompletionHandler, TransportPort

__all__ = [
    "CollectorRequest",
    "CollectorResponse",
    "CompletionHandler",
    "TimerHandle",
    "TimerPort",
    "TransportPort",
]
