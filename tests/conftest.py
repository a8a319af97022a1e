from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field

import pytest

from lib_log_sumo.application.ports.transport import CollectorRequest, CollectorResponse, CompletionHandler


class ManualTimer:
    """Timer port driven by explicit ``tick`` calls instead of wall-clock time."""

    def __init__(self) -> None:
        self.interval_ms: int | None = None
        self.cancelled = False
        self.elapsed_ms = 0
        self._callback: Callable[[], None] | None = None
        self._next_fire = 0

    def every(self, interval_ms: int, callback: Callable[[], None]) -> "ManualTimer":
        self.interval_ms = interval_ms
        self._callback = callback
        self._next_fire = self.elapsed_ms + interval_ms
        return self

    def cancel(self) -> None:
        self.cancelled = True

    def tick(self, ms: int) -> None:
        """Advance time by ``ms`` and fire the callback at each interval boundary."""
        target = self.elapsed_ms + ms
        while self._callback is not None and not self.cancelled and self._next_fire <= target:
            self.elapsed_ms = self._next_fire
            self._next_fire += self.interval_ms or 0
            self._callback()
        self.elapsed_ms = target


@dataclass
class RecordingTransport:
    """Transport port that keeps requests pending until the test completes them."""

    requests: list[CollectorRequest] = field(default_factory=list)
    handlers: list[CompletionHandler] = field(default_factory=list)
    closed: bool = False

    def send(self, request: CollectorRequest, on_complete: CompletionHandler) -> None:
        self.requests.append(request)
        self.handlers.append(on_complete)

    def close(self) -> None:
        self.closed = True

    @property
    def call_count(self) -> int:
        return len(self.requests)

    @property
    def last_request(self) -> CollectorRequest:
        return self.requests[-1]

    def respond(self, status: int) -> None:
        self.handlers[-1](None, CollectorResponse(status=status))

    def fail(self, error: BaseException) -> None:
        self.handlers[-1](error, None)


@pytest.fixture
def timer() -> ManualTimer:
    return ManualTimer()


@pytest.fixture
def transport() -> RecordingTransport:
    return RecordingTransport()


@pytest.fixture(autouse=True)
def _clean_sumo_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep developer shells from leaking LOG_SUMO_* settings into tests."""

    for name in (
        "LOG_SUMO_COLLECTOR",
        "LOG_SUMO_ENDPOINT",
        "LOG_SUMO_SYNC_INTERVAL_MS",
        "LOG_SUMO_MAX_LINES",
        "LOG_SUMO_REWRITE_LEVELS",
        "LOG_SUMO_REQUEST_TIMEOUT",
        "LOG_USE_DOTENV",
    ):
        monkeypatch.delenv(name, raising=False)
