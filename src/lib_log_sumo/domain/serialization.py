"""Turn arbitrary log records into single JSON lines.

Purpose
-------
Encode records eagerly at write time so later mutations by the producer cannot
change what gets shipped, and so that no input can make ingestion raise.

Contents
--------
* :func:`rewrite_level` - replace a numeric ``level`` with its Bunyan name.
* :func:`to_json_line` - JSON encoding with a two-step fallback chain.
* :data:`SERIALIZATION_ERROR_LINE` - the line emitted when every step fails.
"""

from __future__ import annotations

import json
from collections.abc import MutableMapping
from typing import Any

from .levels import BunyanLevel

SERIALIZATION_ERROR_LINE = json.dumps("error serializing log line")

_SEPARATORS = (",", ":")


def _encode(value: Any) -> str:
    line = json.dumps(value, separators=_SEPARATORS, ensure_ascii=False, allow_nan=False)
    try:
        line.encode("utf-8")
    except UnicodeEncodeError:
        # Lone surrogates have no UTF-8 form; escape everything to ASCII.
        return json.dumps(value, separators=_SEPARATORS, allow_nan=False)
    return line


def to_json_line(record: Any) -> str:
    """Return ``record`` as compact JSON, falling back to its string form.

    Examples
    --------
    >>> to_json_line({"level": 30, "msg": "log message"})
    '{"level":30,"msg":"log message"}'
    >>> cyclic = {}
    >>> cyclic["self"] = cyclic
    >>> to_json_line(cyclic)
    '"{\\'self\\': {...}}"'
    """
    try:
        return _encode(record)
    except Exception:  # noqa: BLE001 - cycles, unsupported types, raising hooks
        pass
    try:
        return _encode(str(record))
    except Exception:  # noqa: BLE001 - __str__ itself may raise
        return SERIALIZATION_ERROR_LINE


def _numeric_level(value: Any) -> int | None:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    if int(value) != value:
        return None
    return int(value)


def rewrite_level(record: Any) -> None:
    """Replace a known numeric ``level`` on ``record`` with its name, in place.

    Records without a mapping interface, without a ``level`` field, or with a
    code outside the Bunyan table are left untouched.

    Examples
    --------
    >>> record = {"level": 40, "msg": "careful"}
    >>> rewrite_level(record)
    >>> record["level"]
    'WARN'
    >>> record = {"level": 35}
    >>> rewrite_level(record)
    >>> record["level"]
    35
    """
    if not isinstance(record, MutableMapping):
        return
    try:
        code = _numeric_level(record.get("level"))
        if code is None:
            return
        record["level"] = BunyanLevel.from_numeric(code).name
    except Exception:  # noqa: BLE001 - unknown codes and hostile mappings stay as-is
        return


__all__ = ["SERIALIZATION_ERROR_LINE", "rewrite_level", "to_json_line"]
