"""Ordered buffer holding serialized log lines awaiting delivery.

Purpose
-------
Keep every line producers submit, in submission order, until the flush cycle
confirms the collector accepted it.

Contents
--------
* :class:`LineBuffer` with prefix read and prefix removal helpers.

System Role
-----------
Shared between the ingestion path (tail appends) and the flush cycle (head
reads and removals). Removal always names an explicit prefix length so lines
appended while a request is in flight are never discarded.
"""

from __future__ import annotations

import threading
from collections import deque
from itertools import islice
from typing import Deque


class LineBuffer:
    """Unbounded FIFO of serialized log lines.

    Every operation holds an internal lock, so producers may append from any
    thread while the flush cycle reads or trims the head.

    Examples
    --------
    >>> buffer = LineBuffer()
    >>> for line in ['"a"', '"b"', '"c"']:
    ...     buffer.append(line)
    >>> buffer.head(2)
    ['"a"', '"b"']
    >>> buffer.remove_head(2)
    2
    >>> buffer.head(10)
    ['"c"']
    """

    def __init__(self) -> None:
        self._lines: Deque[str] = deque()
        self._lock = threading.Lock()

    def append(self, line: str) -> None:
        """Append ``line`` to the tail of the buffer."""

        with self._lock:
            self._lines.append(line)

    def head(self, limit: int) -> list[str]:
        """Return up to ``limit`` of the oldest lines without removing them."""

        if limit <= 0:
            return []
        with self._lock:
            return list(islice(self._lines, limit))

    def remove_head(self, count: int) -> int:
        """Drop the ``count`` oldest lines and return how many were removed."""

        removed = 0
        with self._lock:
            while removed < count and self._lines:
                self._lines.popleft()
                removed += 1
        return removed

    def __len__(self) -> int:
        with self._lock:
            return len(self._lines)


__all__ = ["LineBuffer"]
