"""Optional ``.env`` loading for CLI and host applications.

Purpose
-------
Let operators keep ``LOG_SUMO_*`` settings (collector keys in particular) in a
``.env`` file next to the project instead of exporting them in every shell.

Contents
--------
* :data:`DOTENV_ENV_VAR` - environment toggle consulted by the CLI.
* :func:`should_use_dotenv` - precedence between CLI flag and toggle.
* :func:`enable_dotenv` - locate and load the nearest ``.env`` once.
"""

from __future__ import annotations

import threading
from pathlib import Path

from dotenv import find_dotenv, load_dotenv

DOTENV_ENV_VAR = "LOG_USE_DOTENV"

_TRUTHY = {"1", "true", "yes", "on"}

_LOADED_PATH: Path | None = None
_LOAD_LOCK = threading.Lock()


def should_use_dotenv(*, explicit: bool | None, env_value: str | None) -> bool:
    """Decide whether ``.env`` loading applies.

    An explicit CLI choice wins; otherwise the :data:`DOTENV_ENV_VAR` value is
    interpreted as a boolean.

    Examples
    --------
    >>> should_use_dotenv(explicit=None, env_value="on")
    True
    >>> should_use_dotenv(explicit=False, env_value="1")
    False
    >>> should_use_dotenv(explicit=None, env_value=None)
    False
    """
    if explicit is not None:
        return explicit
    if env_value is None:
        return False
    return env_value.strip().lower() in _TRUTHY


def enable_dotenv(search_from: Path | None = None) -> Path | None:
    """Load the nearest ``.env`` walking upwards from ``search_from``.

    Existing environment variables are never overridden. Returns the resolved
    path of the loaded file, or ``None`` when no file was found. Subsequent
    calls return the first result without reloading.
    """

    global _LOADED_PATH
    with _LOAD_LOCK:
        if _LOADED_PATH is not None:
            return _LOADED_PATH
        if search_from is None:
            found = find_dotenv(usecwd=True)
        else:
            found = _find_upwards(search_from)
        if not found:
            return None
        path = Path(found).resolve()
        load_dotenv(path, override=False)
        _LOADED_PATH = path
        return path


def _find_upwards(start: Path) -> str:
    for directory in (start, *start.parents):
        candidate = directory / ".env"
        if candidate.is_file():
            return str(candidate)
    return ""


def _reset_dotenv_state_for_testing() -> None:
    """Forget the cached ``.env`` path so tests can load fresh files."""

    global _LOADED_PATH
    with _LOAD_LOCK:
        _LOADED_PATH = None


__all__ = ["DOTENV_ENV_VAR", "enable_dotenv", "should_use_dotenv"]
