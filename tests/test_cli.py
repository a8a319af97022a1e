"""CLI behaviour coverage for the ``info`` and ``ship`` commands."""

from __future__ import annotations

import re
import sys
from typing import Any

import lib_cli_exit_tools
import pytest
from click.testing import CliRunner

from lib_log_sumo import DeliveryError, __init__conf__
from lib_log_sumo import cli as cli_mod

ANSI_RE = re.compile(r"\x1b\[[0-9;]*m")


def strip_ansi(text: str) -> str:
    """Return ``text`` without ANSI colour codes.

    Examples
    --------
    >>> strip_ansi("\x1b[31mred\x1b[0m")
    'red'
    """

    return ANSI_RE.sub("", text)


def run_cli(args: list[str] | None = None, input: str | None = None) -> tuple[int, str, BaseException | None]:
    """Invoke the click group with ``CliRunner`` and capture output."""

    runner = CliRunner()
    original_argv = sys.argv
    sys.argv = [__init__conf__.shell_command]
    try:
        result = runner.invoke(
            cli_mod.cli,
            args or [],
            input=input,
            prog_name=__init__conf__.shell_command,
        )
    finally:
        sys.argv = original_argv
    return result.exit_code, result.output, result.exception


class _FakeSumoLogger:
    """Stand-in that records writes instead of starting threads and sockets."""

    instances: list["_FakeSumoLogger"] = []
    close_error: BaseException | None = None

    def __init__(self, collector: str | None = None, **options: Any) -> None:
        if not collector:
            raise ValueError("SumoLogic collector key must be passed")
        self.collector = collector
        self.options = options
        self.records: list[Any] = []
        self.close_timeout: float | None = None
        self.url = "https://collector.example/" + collector
        self.pending_lines = 0
        type(self).instances.append(self)

    def write(self, record: Any) -> None:
        self.records.append(record)
        self.pending_lines += 1

    def close(self, timeout: float | None = None) -> None:
        self.close_timeout = timeout
        if type(self).close_error is not None:
            raise type(self).close_error
        self.pending_lines = 0


@pytest.fixture
def fake_logger(monkeypatch: pytest.MonkeyPatch) -> type[_FakeSumoLogger]:
    monkeypatch.setattr(_FakeSumoLogger, "instances", [])
    monkeypatch.setattr(_FakeSumoLogger, "close_error", None)
    monkeypatch.setattr(cli_mod, "SumoLogger", _FakeSumoLogger)
    return _FakeSumoLogger


def test_cli_without_subcommand_prints_summary() -> None:
    exit_code, stdout, _ = run_cli()

    assert exit_code == 0
    assert stdout == cli_mod.summary_info()


def test_cli_info_command_matches_summary() -> None:
    runner = CliRunner()
    result = runner.invoke(cli_mod.cli, ["info"])

    assert result.exit_code == 0
    assert result.output == cli_mod.summary_info()
    assert __init__conf__.version in result.output


def test_cli_version_option() -> None:
    exit_code, stdout, _ = run_cli(["--version"])

    assert exit_code == 0
    assert stdout.strip() == f"{__init__conf__.shell_command} version {__init__conf__.version}"


def test_cli_no_traceback_option(monkeypatch: pytest.MonkeyPatch) -> None:
    """`--no-traceback` should disable verbose tracebacks for subsequent commands."""

    monkeypatch.setattr(lib_cli_exit_tools.config, "traceback", True, raising=False)
    monkeypatch.setattr(lib_cli_exit_tools.config, "traceback_force_color", True, raising=False)

    exit_code, _stdout, _exception = run_cli(["--no-traceback", "info"])

    assert exit_code == 0
    assert lib_cli_exit_tools.config.traceback is False
    assert lib_cli_exit_tools.config.traceback_force_color is False


def test_cli_traceback_option(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(lib_cli_exit_tools.config, "traceback", False, raising=False)
    monkeypatch.setattr(lib_cli_exit_tools.config, "traceback_force_color", False, raising=False)

    exit_code, _stdout, _exception = run_cli(["--traceback", "info"])

    assert exit_code == 0
    assert lib_cli_exit_tools.config.traceback is True
    assert lib_cli_exit_tools.config.traceback_force_color is True


def test_ship_writes_parsed_records_from_stdin(fake_logger) -> None:
    stdin = '{"level": 30, "msg": "one"}\n\nplain text\n   \n[1, 2]\n'

    exit_code, output, _ = run_cli(["ship", "--collector", "KEY"], input=stdin)

    assert exit_code == 0
    (logger,) = fake_logger.instances
    assert logger.records == [{"level": 30, "msg": "one"}, "plain text", [1, 2]]
    assert "Shipped 3 record(s)" in strip_ansi(output)
    assert "https://collector.example/KEY" in output


def test_ship_reads_from_file(fake_logger, tmp_path) -> None:
    source = tmp_path / "app.log"
    source.write_text('{"msg": "from file"}\n', encoding="utf-8")

    exit_code, _output, _ = run_cli(["ship", "--collector", "KEY", str(source)])

    assert exit_code == 0
    assert fake_logger.instances[0].records == [{"msg": "from file"}]


def test_ship_forwards_options(fake_logger) -> None:
    args = [
        "ship",
        "--collector",
        "KEY",
        "--endpoint",
        "https://collector.example/http/",
        "--sync-interval-ms",
        "250",
        "--max-lines",
        "5",
        "--no-rewrite-levels",
        "--request-timeout",
        "2.5",
        "--timeout",
        "9",
    ]

    exit_code, _output, _ = run_cli(args, input="")

    assert exit_code == 0
    logger = fake_logger.instances[0]
    assert logger.options == {
        "endpoint": "https://collector.example/http/",
        "sync_interval_ms": 250,
        "max_lines": 5,
        "rewrite_levels": False,
        "request_timeout": 2.5,
    }
    assert logger.close_timeout == 9.0


def test_ship_leaves_unset_options_to_environment(fake_logger) -> None:
    exit_code, _output, _ = run_cli(["ship", "--collector", "KEY"], input="")

    assert exit_code == 0
    options = fake_logger.instances[0].options
    assert options["rewrite_levels"] is None
    assert options["max_lines"] is None
    assert options["endpoint"] is None


def test_ship_without_collector_is_a_usage_error(fake_logger) -> None:
    exit_code, output, _ = run_cli(["ship"], input="{}\n")

    assert exit_code == 2
    assert "collector key must be passed" in output


def test_ship_without_collector_using_real_logger() -> None:
    exit_code, output, _ = run_cli(["ship"], input="{}\n")

    assert exit_code == 2
    assert "collector key must be passed" in output


def test_ship_reports_delivery_failure(fake_logger) -> None:
    fake_logger.close_error = DeliveryError(503)

    exit_code, output, _ = run_cli(["ship", "--collector", "KEY"], input='{"msg": "x"}\n')

    assert exit_code == 1
    assert "Delivery failed" in strip_ansi(output)
    assert "503" in output


def test_ship_reports_timeout(fake_logger) -> None:
    fake_logger.close_error = TimeoutError()

    exit_code, output, _ = run_cli(["ship", "--collector", "KEY", "--timeout", "0.5"], input='{"msg": "x"}\n')

    assert exit_code == 1
    assert "Timed out" in strip_ansi(output)


def test_ship_rejects_non_positive_interval(fake_logger) -> None:
    exit_code, _output, _ = run_cli(["ship", "--collector", "KEY", "--sync-interval-ms", "0"], input="")

    assert exit_code == 2
    assert fake_logger.instances == []
