"""Concrete adapters for the transport and timer ports plus the logging bridge."""

from __future__ import annotations

from .handler import SumoLogHandler, build_bunyan_record
from .http import DEFAULT_REQUEST_TIMEOUT, RequestsTransport
from .timer import ThreadTimer

__all__ = [
    "DEFAULT_REQUEST_TIMEOUT",
    "RequestsTransport",
    "SumoLogHandler",
    "ThreadTimer",
    "build_bunyan_record",
]
