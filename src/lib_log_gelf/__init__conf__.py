"""Static package metadata surfaced by the CLI and ``summary_info``."""

from __future__ import annotations

from typing import Callable

name = "lib_log_gelf"
title = "GELF transport adapter delivering structured logs over TCP, TLS, HTTP and HTTPS"
version = "0.1.0"
author = "lib_log_gelf contributors"
shell_command = "lib_log_gelf"


def print_info(writer: Callable[[str], None] | None = None) -> None:
    """Write the metadata banner to ``writer`` (defaults to stdout).

    Examples
    --------
    >>> lines = []
    >>> print_info(writer=lines.append)
    >>> lines[0].splitlines()[0]
    'Info for lib_log_gelf:'
    """

    fields = [
        ("name", name),
        ("title", title),
        ("version", version),
        ("author", author),
        ("shell_command", shell_command),
    ]
    pad = max(len(label) for label, _ in fields)
    lines = [f"Info for {name}:", ""]
    lines.extend(f"    {label.ljust(pad)} = {value}" for label, value in fields)
    text = "\n".join(lines) + "\n"
    if writer is None:
        print(text, end="")
    else:
        writer(text)
