"""Use case turning producer records into buffered JSON lines."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

from lib_log_sumo.domain import LineBuffer, rewrite_level, to_json_line

IngestCallable = Callable[[Any], None]


def create_ingest(*, buffer: LineBuffer, rewrite_levels: bool) -> IngestCallable:
    """Return the ``write`` callable bound to ``buffer``.

    The returned callable never raises: level rewriting and serialization both
    carry their own fallbacks, and appending to the buffer cannot fail.

    Examples
    --------
    >>> buffer = LineBuffer()
    >>> write = create_ingest(buffer=buffer, rewrite_levels=True)
    >>> write({"level": 50, "msg": "boom"})
    >>> buffer.head(1)
    ['{"level":"ERROR","msg":"boom"}']
    """

    def write(record: Any) -> None:
        if rewrite_levels:
            rewrite_level(record)
        buffer.append(to_json_line(record))

    return write


__all__ = ["IngestCallable", "create_ingest"]
