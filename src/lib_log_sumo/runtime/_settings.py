"""Settings resolution for :class:`lib_log_sumo.SumoLogger`.

Explicit constructor arguments win; ``LOG_SUMO_*`` environment variables fill
in what the caller left as ``None``; documented defaults cover the rest.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Any, Callable, Optional

from lib_log_sumo.adapters.http import DEFAULT_REQUEST_TIMEOUT
from lib_log_sumo.application.use_cases.flush import DEFAULT_MAX_LINES

DEFAULT_ENDPOINT = "https://endpoint1.collection.us2.sumologic.com/receiver/v1/http/"
DEFAULT_SYNC_INTERVAL_MS = 1000

ENV_COLLECTOR = "LOG_SUMO_COLLECTOR"
ENV_ENDPOINT = "LOG_SUMO_ENDPOINT"
ENV_SYNC_INTERVAL_MS = "LOG_SUMO_SYNC_INTERVAL_MS"
ENV_MAX_LINES = "LOG_SUMO_MAX_LINES"
ENV_REWRITE_LEVELS = "LOG_SUMO_REWRITE_LEVELS"
ENV_REQUEST_TIMEOUT = "LOG_SUMO_REQUEST_TIMEOUT"

DiagnosticHook = Optional[Callable[[str, dict[str, Any]], None]]


@dataclass(frozen=True, slots=True)
class StreamSettings:
    """Resolved configuration for one log stream."""

    collector: str
    endpoint: str = DEFAULT_ENDPOINT
    sync_interval_ms: int = DEFAULT_SYNC_INTERVAL_MS
    max_lines: int = DEFAULT_MAX_LINES
    rewrite_levels: bool = True
    request_timeout: float | None = DEFAULT_REQUEST_TIMEOUT
    diagnostic_hook: DiagnosticHook = None

    @property
    def url(self) -> str:
        """Collector URL: the endpoint prefix followed by the collector key."""

        return self.endpoint + self.collector


def build_stream_settings(
    *,
    collector: str | None = None,
    endpoint: str | None = None,
    sync_interval_ms: int | None = None,
    max_lines: int | None = None,
    rewrite_levels: bool | None = None,
    request_timeout: float | None = None,
    diagnostic_hook: DiagnosticHook = None,
) -> StreamSettings:
    """Merge arguments, environment overrides, and defaults.

    Raises
    ------
    ValueError
        When no collector key is available, a numeric option is negative, or
        an environment variable cannot be parsed.

    Examples
    --------
    >>> settings = build_stream_settings(collector="KEY", max_lines=5)
    >>> settings.url.endswith("/receiver/v1/http/KEY")
    True
    >>> settings.max_lines
    5
    """

    resolved_collector = collector or os.getenv(ENV_COLLECTOR)
    if not resolved_collector:
        raise ValueError("SumoLogic collector key must be passed")

    return StreamSettings(
        collector=resolved_collector,
        endpoint=endpoint or os.getenv(ENV_ENDPOINT) or DEFAULT_ENDPOINT,
        sync_interval_ms=_resolve_positive(
            sync_interval_ms, ENV_SYNC_INTERVAL_MS, DEFAULT_SYNC_INTERVAL_MS, "sync_interval_ms", int
        ),
        max_lines=_resolve_positive(max_lines, ENV_MAX_LINES, DEFAULT_MAX_LINES, "max_lines", int),
        rewrite_levels=rewrite_levels if rewrite_levels is not None else _env_bool(ENV_REWRITE_LEVELS, True),
        request_timeout=_resolve_positive(
            request_timeout, ENV_REQUEST_TIMEOUT, DEFAULT_REQUEST_TIMEOUT, "request_timeout", float
        ),
        diagnostic_hook=diagnostic_hook,
    )


def _resolve_positive(value: Any, env_name: str, default: Any, label: str, kind: Callable[[str], Any]) -> Any:
    """Return ``value``, else the parsed environment value, else ``default``.

    Zero counts as unset and falls back to the default.
    """
    if value is None:
        raw = os.getenv(env_name)
        if raw is None or not raw.strip():
            return default
        try:
            value = kind(raw.strip())
        except ValueError as exc:
            raise ValueError(f"{env_name} must be a number, got {raw!r}") from exc
    if value < 0:
        raise ValueError(f"{label} must be positive")
    if not value:
        return default
    return value


def _env_bool(name: str, default: bool) -> bool:
    """Return the boolean value of an environment variable with fallback.

    Examples
    --------
    >>> import os
    >>> _ = os.environ.pop('LOG_EXAMPLE_BOOL', None)
    >>> _env_bool('LOG_EXAMPLE_BOOL', default=True)
    True
    >>> os.environ['LOG_EXAMPLE_BOOL'] = '0'
    >>> _env_bool('LOG_EXAMPLE_BOOL', default=True)
    False
    >>> _ = os.environ.pop('LOG_EXAMPLE_BOOL')
    """
    value = os.getenv(name)
    if value is None or not value.strip():
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


__all__ = [
    "DEFAULT_ENDPOINT",
    "DEFAULT_SYNC_INTERVAL_MS",
    "DiagnosticHook",
    "ENV_COLLECTOR",
    "ENV_ENDPOINT",
    "ENV_MAX_LINES",
    "ENV_REQUEST_TIMEOUT",
    "ENV_REWRITE_LEVELS",
    "ENV_SYNC_INTERVAL_MS",
    "StreamSettings",
    "build_stream_settings",
]
