"""Port describing the HTTP transport used to deliver batches.

Purpose
-------
Keep the flush cycle independent from any particular HTTP client. The cycle
only needs to hand over a request and be told, once, how it ended.

Contents
--------
* :class:`CollectorRequest` / :class:`CollectorResponse` value objects.
* :data:`CompletionHandler` - callback signature for request outcomes.
* :class:`TransportPort` - runtime-checkable protocol.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Optional, Protocol, runtime_checkable


@dataclass(frozen=True, slots=True)
class CollectorRequest:
    """A single batch delivery request."""

    method: str
    url: str
    body: str


@dataclass(frozen=True, slots=True)
class CollectorResponse:
    """The part of an HTTP response the flush cycle inspects."""

    status: int


CompletionHandler = Callable[[Optional[BaseException], Optional[CollectorResponse]], None]


@runtime_checkable
class TransportPort(Protocol):
    """Issue collector requests and report their outcome asynchronously."""

    def send(self, request: CollectorRequest, on_complete: CompletionHandler) -> None:
        """Dispatch ``request`` and invoke ``on_complete(error, response)`` when done."""

    def close(self) -> None:
        """Release connections and worker threads."""


__all__ = ["CollectorRequest", "CollectorResponse", "CompletionHandler", "TransportPort"]
