"""Static package metadata surfaced by the CLI ``info`` command.

Values mirror ``pyproject.toml``; keep both in sync when releasing.
"""

from __future__ import annotations

from typing import Callable

name = "lib_log_sumo"
title = "Buffered newline-delimited JSON log shipping to SumoLogic HTTP sources"
version = "0.1.0"
homepage = "https://github.com/bitranox/lib_log_sumo"
author = "bitranox"
author_email = "bitranox@gmail.com"
shell_command = "lib_log_sumo"


def print_info(writer: Callable[[str], None] | None = None) -> None:
    """Emit the metadata banner line by line.

    ``writer`` receives each line including its trailing newline; defaults to
    printing to stdout.
    """

    fields = [
        ("name", name),
        ("title", title),
        ("version", version),
        ("homepage", homepage),
        ("author", author),
        ("author_email", author_email),
        ("shell_command", shell_command),
    ]
    pad = max(len(label) for label, _ in fields)
    lines = [f"Info for {name}:\n", "\n"]
    lines.extend(f"    {label.ljust(pad)} = {value}\n" for label, value in fields)

    emit = writer if writer is not None else (lambda text: print(text, end=""))
    for line in lines:
        emit(line)


__all__ = ["author", "author_email", "homepage", "name", "print_info", "shell_command", "title", "version"]
