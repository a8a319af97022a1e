"""Bunyan severity codes and their human-readable names.

Purpose
-------
Translate the numeric levels carried by Bunyan-style records into the names
SumoLogic dashboards search for.

Contents
--------
* :class:`BunyanLevel` enum with numeric and stdlib conversion helpers.

System Role
-----------
Consulted by the level rewriting step of ingestion and by the stdlib logging
bridge when it builds records from :class:`logging.LogRecord` objects.
"""

from __future__ import annotations

import logging
from enum import Enum


class BunyanLevel(Enum):
    """Enumerated Bunyan severities."""

    TRACE = 10
    DEBUG = 20
    INFO = 30
    WARN = 40
    ERROR = 50
    FATAL = 60

    @classmethod
    def from_numeric(cls, level: int) -> "BunyanLevel":
        """Return the :class:`BunyanLevel` corresponding to ``level``.

        >>> BunyanLevel.from_numeric(30).name
        'INFO'
        """
        try:
            return cls(level)
        except ValueError as exc:
            raise ValueError(f"Unsupported log level numeric: {level}") from exc

    @classmethod
    def from_python_level(cls, level: int) -> "BunyanLevel":
        """Translate a stdlib logging level integer into :class:`BunyanLevel`.

        Values between the stdlib constants round down to the nearest known
        level; anything below ``DEBUG`` becomes ``TRACE``.

        >>> BunyanLevel.from_python_level(logging.WARNING).name
        'WARN'
        >>> BunyanLevel.from_python_level(5).name
        'TRACE'
        """
        for threshold, mapped in _PYTHON_LEVEL_TABLE:
            if level >= threshold:
                return mapped
        return cls.TRACE


_PYTHON_LEVEL_TABLE = (
    (logging.CRITICAL, BunyanLevel.FATAL),
    (logging.ERROR, BunyanLevel.ERROR),
    (logging.WARNING, BunyanLevel.WARN),
    (logging.INFO, BunyanLevel.INFO),
    (logging.DEBUG, BunyanLevel.DEBUG),
)
# Ordered from most to least severe so the first match wins.


__all__ = ["BunyanLevel"]
