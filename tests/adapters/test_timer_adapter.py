from __future__ import annotations

import logging
import threading

import pytest

from lib_log_sumo.adapters.timer import ThreadTimer
from lib_log_sumo.application.ports.timer import TimerHandle, TimerPort


def test_thread_timer_satisfies_ports() -> None:
    timer = ThreadTimer()
    handle = timer.every(1000, lambda: None)
    try:
        assert isinstance(timer, TimerPort)
        assert isinstance(handle, TimerHandle)
    finally:
        handle.cancel()


def test_thread_timer_fires_repeatedly_until_cancelled() -> None:
    fired = threading.Semaphore(0)
    handle = ThreadTimer().every(5, fired.release)

    assert all(fired.acquire(timeout=2.0) for _ in range(3))
    handle.cancel()
    while fired.acquire(blocking=False):
        pass

    assert fired.acquire(timeout=0.05) is False


def test_thread_timer_keeps_running_after_callback_error(caplog: pytest.LogCaptureFixture) -> None:
    calls = threading.Semaphore(0)

    def flaky() -> None:
        calls.release()
        raise RuntimeError("tick failed")

    with caplog.at_level(logging.ERROR, logger="lib_log_sumo.adapters.timer"):
        handle = ThreadTimer().every(5, flaky)
        try:
            assert calls.acquire(timeout=2.0)
            assert calls.acquire(timeout=2.0)
        finally:
            handle.cancel()

    assert "Timer callback raised" in caplog.text


def test_cancel_from_inside_callback_does_not_deadlock() -> None:
    done = threading.Event()
    holder: dict = {}

    def once() -> None:
        holder["handle"].cancel()
        done.set()

    holder["handle"] = ThreadTimer().every(5, once)

    assert done.wait(2.0)


def test_interval_must_be_positive() -> None:
    with pytest.raises(ValueError, match="interval_ms"):
        ThreadTimer().every(0, lambda: None)
