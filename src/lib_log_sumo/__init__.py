"""Buffered log shipping to SumoLogic HTTP sources.

``SumoLogger`` accepts structured records through ``write``, encodes them as
JSON lines immediately, and posts them in batches from a background flush
cycle. ``SumoLogHandler`` plugs the same stream into :mod:`logging`.
"""

from __future__ import annotations

from .adapters.handler import SumoLogHandler
from .domain.levels import BunyanLevel
from .errors import DeliveryError
from .runtime import StreamSettings, SumoLogger, build_stream_settings

__all__ = [
    "BunyanLevel",
    "DeliveryError",
    "StreamSettings",
    "SumoLogHandler",
    "SumoLogger",
    "build_stream_settings",
]
