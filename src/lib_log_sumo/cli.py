"""Command line interface for shipping log files to SumoLogic.

Purpose
-------
Offer a thin operator surface over :class:`lib_log_sumo.SumoLogger`: feed a
file (or stdin) of newline-delimited JSON records to a collector and report
whether everything arrived.

Contents
--------
* :func:`cli` - Click group with global dotenv/traceback switches.
* :func:`cli_info` - metadata banner.
* :func:`cli_ship` - ship records from a file or stdin.
* :func:`main` - entry point routed through :mod:`lib_cli_exit_tools`.
"""

from __future__ import annotations

import json
import os
from typing import IO, Any, Sequence

import click
import lib_cli_exit_tools
from rich.console import Console
from rich.markup import escape

from . import __init__conf__
from . import config as log_config
from .runtime import SumoLogger

CLICK_CONTEXT_SETTINGS = {"help_option_names": ["-h", "--help"]}


def summary_info() -> str:
    """Return the metadata banner used by ``info`` and the bare command."""

    lines: list[str] = []
    __init__conf__.print_info(writer=lines.append)
    return "".join(lines)


def _explicit(ctx: click.Context, name: str, value: Any) -> Any:
    """Return ``value`` only when the user passed the option, else ``None``."""

    if ctx.get_parameter_source(name) is click.core.ParameterSource.DEFAULT:
        return None
    return value


def _parse_line(text: str) -> Any:
    """Decode a JSON record; plain text lines are shipped as JSON strings."""

    try:
        return json.loads(text)
    except ValueError:
        return text


@click.group(invoke_without_command=True, context_settings=CLICK_CONTEXT_SETTINGS)
@click.version_option(
    version=__init__conf__.version,
    prog_name=__init__conf__.shell_command,
    message=f"{__init__conf__.shell_command} version {__init__conf__.version}",
)
@click.option(
    "--traceback/--no-traceback",
    is_flag=True,
    default=False,
    help="Show full Python traceback on errors",
)
@click.option(
    "--use-dotenv/--no-use-dotenv",
    default=False,
    help=f"Load environment variables from the nearest .env (defaults to ${log_config.DOTENV_ENV_VAR}).",
)
@click.pass_context
def cli(ctx: click.Context, traceback: bool, use_dotenv: bool) -> None:
    """Ship newline-delimited JSON logs to a SumoLogic HTTP source."""

    explicit = _explicit(ctx, "use_dotenv", use_dotenv)
    if log_config.should_use_dotenv(explicit=explicit, env_value=os.getenv(log_config.DOTENV_ENV_VAR)):
        log_config.enable_dotenv()

    lib_cli_exit_tools.config.traceback = traceback
    lib_cli_exit_tools.config.traceback_force_color = traceback

    if ctx.invoked_subcommand is None:
        click.echo(summary_info(), nl=False)


@cli.command("info", context_settings=CLICK_CONTEXT_SETTINGS)
def cli_info() -> None:
    """Print resolved metadata so users can inspect installation details."""

    click.echo(summary_info(), nl=False)


@cli.command("ship", context_settings=CLICK_CONTEXT_SETTINGS)
@click.argument("source", type=click.File("r", encoding="utf-8"), default="-")
@click.option("--collector", help="Collector key (defaults to $LOG_SUMO_COLLECTOR).")
@click.option("--endpoint", help="Collector base URL (defaults to $LOG_SUMO_ENDPOINT or the US2 endpoint).")
@click.option("--sync-interval-ms", type=click.IntRange(min=1), help="Flush tick period in milliseconds.")
@click.option("--max-lines", type=click.IntRange(min=1), help="Maximum lines per request.")
@click.option(
    "--rewrite-levels/--no-rewrite-levels",
    default=True,
    help="Replace numeric Bunyan levels with their names.",
)
@click.option("--request-timeout", type=click.FloatRange(min=0, min_open=True), help="Per-request timeout in seconds.")
@click.option(
    "--timeout",
    type=click.FloatRange(min=0, min_open=True),
    default=None,
    help="Give up waiting for delivery after this many seconds.",
)
@click.pass_context
def cli_ship(
    ctx: click.Context,
    source: IO[str],
    collector: str | None,
    endpoint: str | None,
    sync_interval_ms: int | None,
    max_lines: int | None,
    rewrite_levels: bool,
    request_timeout: float | None,
    timeout: float | None,
) -> None:
    """Ship every record in SOURCE (default: stdin), then wait for delivery."""

    console = Console(stderr=True)
    try:
        logger = SumoLogger(
            collector,
            endpoint=endpoint,
            sync_interval_ms=sync_interval_ms,
            max_lines=max_lines,
            rewrite_levels=_explicit(ctx, "rewrite_levels", rewrite_levels),
            request_timeout=request_timeout,
        )
    except ValueError as exc:
        raise click.UsageError(str(exc), ctx=ctx) from exc

    shipped = 0
    for raw in source:
        text = raw.rstrip("\r\n")
        if not text.strip():
            continue
        logger.write(_parse_line(text))
        shipped += 1

    try:
        logger.close(timeout)
    except TimeoutError:
        console.print(f"[bold red]Timed out[/] with {logger.pending_lines} line(s) still buffered")
        ctx.exit(1)
    except Exception as exc:  # noqa: BLE001 - any delivery failure maps to exit code 1
        console.print(f"[bold red]Delivery failed:[/] {escape(str(exc))}")
        ctx.exit(1)
    console.print(f"[green]Shipped {shipped} record(s)[/] to {escape(logger.url)}")


def main(argv: Sequence[str] | None = None) -> int:
    """Run the CLI through :func:`lib_cli_exit_tools.run_cli` and return its exit code."""

    return lib_cli_exit_tools.run_cli(
        cli,
        argv=list(argv) if argv is not None else None,
        prog_name=__init__conf__.shell_command,
    )


__all__ = ["cli", "cli_info", "cli_ship", "main", "summary_info"]
