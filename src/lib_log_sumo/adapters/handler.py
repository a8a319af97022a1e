"""Bridge from the stdlib :mod:`logging` module into a log stream.

Purpose
-------
Let applications that log through :mod:`logging` ship to SumoLogic without
building records by hand. Each :class:`logging.LogRecord` becomes a
Bunyan-shaped mapping, so collector-side searches work the same for both
producers.

Contents
--------
* :class:`LineWriter` - protocol for anything exposing ``write(record)``.
* :func:`build_bunyan_record` - field mapping from ``LogRecord``.
* :class:`SumoLogHandler` - :class:`logging.Handler` implementation.
"""

from __future__ import annotations

import logging
import socket
from datetime import datetime, timezone
from typing import Any, Protocol

from lib_log_sumo.domain.levels import BunyanLevel

_OWN_LOGGER_PREFIX = "lib_log_sumo"

_STANDARD_ATTRS = frozenset(vars(logging.LogRecord("", 0, "", 0, "", None, None))) | {"message", "asctime"}
# Attributes every LogRecord carries; anything else arrived through ``extra=``.


class LineWriter(Protocol):
    def write(self, record: Any) -> None: ...


def _isoformat(created: float) -> str:
    stamp = datetime.fromtimestamp(created, tz=timezone.utc)
    return stamp.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def build_bunyan_record(
    record: logging.LogRecord,
    *,
    hostname: str,
    formatter: logging.Formatter | None = None,
) -> dict[str, Any]:
    """Return the Bunyan field mapping for ``record``.

    Fields passed via ``extra=`` are copied unless they would shadow a core
    Bunyan field.
    """
    payload: dict[str, Any] = {
        "v": 0,
        "name": record.name,
        "hostname": hostname,
        "pid": record.process,
        "level": BunyanLevel.from_python_level(record.levelno).value,
        "msg": record.getMessage(),
        "time": _isoformat(record.created),
    }
    if record.exc_info and record.exc_info[1] is not None:
        exc = record.exc_info[1]
        render = formatter or logging.Formatter()
        payload["err"] = {
            "name": type(exc).__name__,
            "message": str(exc),
            "stack": render.formatException(record.exc_info),
        }
    for key, value in vars(record).items():
        if key in _STANDARD_ATTRS or key in payload:
            continue
        payload[key] = value
    return payload


class SumoLogHandler(logging.Handler):
    """Forward stdlib log records to a :class:`lib_log_sumo.SumoLogger`.

    Records from the ``lib_log_sumo`` logger hierarchy are never forwarded,
    so transport diagnostics cannot re-enter the buffer being drained.
    """

    def __init__(self, stream: LineWriter, level: int = logging.NOTSET, *, hostname: str | None = None) -> None:
        super().__init__(level)
        self._stream = stream
        self._hostname = hostname or socket.gethostname()

    def emit(self, record: logging.LogRecord) -> None:
        if record.name == _OWN_LOGGER_PREFIX or record.name.startswith(_OWN_LOGGER_PREFIX + "."):
            return
        try:
            payload = build_bunyan_record(record, hostname=self._hostname, formatter=self.formatter)
            self._stream.write(payload)
        except Exception:  # noqa: BLE001 - logging handlers report through handleError
            self.handleError(record)


__all__ = ["LineWriter", "SumoLogHandler", "build_bunyan_record"]
