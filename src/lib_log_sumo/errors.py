"""Exceptions surfaced through drain callbacks and shutdown."""

from __future__ import annotations


class DeliveryError(RuntimeError):
    """The collector answered, but not with a 2xx or 3xx status."""

    def __init__(self, status: int | None, url: str | None = None) -> None:
        self.status = status
        self.url = url
        if status is None:
            message = "collector request completed without a response"
        else:
            message = f"collector rejected batch with HTTP status {status}"
        super().__init__(message)


__all__ = ["DeliveryError"]
