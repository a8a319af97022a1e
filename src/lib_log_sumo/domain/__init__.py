"""Domain values used by the log shipping core."""

from __future__ import annotations

from .buffer import LineBuffer
from .levels import BunyanLevel
from .serialization import SERIALIZATION_ERROR_LINE, rewrite_level, to_json_line

__all__ = [
    "BunyanLevel",
    "LineBuffer",
    "SERIALIZATION_ERROR_LINE",
    "rewrite_level",
    "to_json_line",
]
