"""Click command group for inspecting and exercising the GELF transport.

Purpose
-------
Give operators a quick way to preview the JSON a log call produces and to push
a single message through a real channel when validating collector inputs.

Contents
--------
* :func:`cli` - command group with ``info``, ``encode`` and ``send``.
* :func:`main` - entry point running the group through ``lib_cli_exit_tools``.

System Role
-----------
Presentation layer only; all behaviour lives in :class:`GelfTransport` and the
encode use case. Explicit flags win over ``GELF_*`` variables, which win over
the built-in defaults.
"""

from __future__ import annotations

import json
from typing import Any, Sequence

import click
import lib_cli_exit_tools

from . import __init__conf__
from . import config as log_config
from .adapters.observers import RichDeliveryObserver
from .application.use_cases.encode import encode_message
from .domain.levels import LEVEL_NAMES
from .domain.settings import DeliveryProtocol, TransportConfig
from .lib_log_gelf import GelfTransport, summary_info

CLICK_CONTEXT_SETTINGS = {"help_option_names": ["-h", "--help"]}


def _parse_meta(_ctx: click.Context, _param: click.Parameter, values: Sequence[str]) -> dict[str, Any]:
    """Turn repeated ``KEY=VALUE`` options into a metadata mapping.

    Values that parse as JSON keep their type; anything else stays a string.
    """
    meta: dict[str, Any] = {}
    for item in values:
        key, sep, raw = item.partition("=")
        key = key.strip()
        if not sep or not key:
            raise click.BadParameter(f"expected KEY=VALUE, got {item!r}")
        try:
            meta[key] = json.loads(raw)
        except ValueError:
            meta[key] = raw
    return meta


def _build_config(**flags: Any) -> TransportConfig:
    base = log_config.config_from_env()
    overrides = {key: value for key, value in flags.items() if value is not None}
    return base.replace(**overrides) if overrides else base


_level_argument = click.argument("level", type=click.Choice(LEVEL_NAMES, case_sensitive=False))
_message_argument = click.argument("message", required=False)
_meta_option = click.option(
    "--meta",
    "meta",
    multiple=True,
    callback=_parse_meta,
    metavar="KEY=VALUE",
    help="Metadata entry for full_message; repeatable.",
)


@click.group(
    help="GELF transport adapter for Graylog collectors",
    context_settings=CLICK_CONTEXT_SETTINGS,
    invoke_without_command=True,
)
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
    default=None,
    help=f"Load the nearest .env before reading GELF_* variables (env toggle: {log_config.DOTENV_ENV_VAR}).",
)
@click.pass_context
def cli(ctx: click.Context, traceback: bool, use_dotenv: bool | None) -> None:
    """Root command storing global flags and printing the banner by default."""

    ctx.ensure_object(dict)
    ctx.obj["traceback"] = traceback
    lib_cli_exit_tools.config.traceback = traceback
    lib_cli_exit_tools.config.traceback_force_color = traceback
    if log_config.should_use_dotenv(use_dotenv):
        log_config.enable_dotenv()
    if ctx.invoked_subcommand is None:
        click.echo(summary_info(), nl=False)


@cli.command("info", context_settings=CLICK_CONTEXT_SETTINGS)
def cli_info() -> None:
    """Print package metadata."""

    click.echo(summary_info(), nl=False)


@cli.command("encode", context_settings=CLICK_CONTEXT_SETTINGS)
@_level_argument
@_message_argument
@_meta_option
@click.option("--hostname", default=None, help="Value of the GELF host field.")
@click.option("--service", default=None, help="Value of _service.")
@click.option("--environment", default=None, help="Value of _environment.")
@click.option("--release", default=None, help="Value of _release.")
def cli_encode(
    level: str,
    message: str | None,
    meta: dict[str, Any],
    hostname: str | None,
    service: str | None,
    environment: str | None,
    release: str | None,
) -> None:
    """Print the GELF JSON for one log call without sending it."""

    config = _build_config(hostname=hostname, service=service, environment=environment, release=release)
    click.echo(encode_message(config, level.lower(), message, meta or None))


@cli.command("send", context_settings=CLICK_CONTEXT_SETTINGS)
@_level_argument
@_message_argument
@_meta_option
@click.option("--host", default=None, help="Collector address.")
@click.option("--port", type=int, default=None, help="Collector port.")
@click.option(
    "--protocol",
    type=click.Choice([item.value for item in DeliveryProtocol], case_sensitive=False),
    default=None,
    help="Delivery channel.",
)
@click.option("--hostname", default=None, help="Value of the GELF host field.")
@click.option("--service", default=None, help="Value of _service.")
@click.option("--environment", default=None, help="Value of _environment.")
@click.option("--release", default=None, help="Value of _release.")
@click.option(
    "--verify-certificates/--no-verify-certificates",
    default=None,
    help="Validate collector certificates for tls/https.",
)
@click.option("--timeout", type=float, default=None, help="Socket/request timeout in seconds.")
def cli_send(
    level: str,
    message: str | None,
    meta: dict[str, Any],
    host: str | None,
    port: int | None,
    protocol: str | None,
    hostname: str | None,
    service: str | None,
    environment: str | None,
    release: str | None,
    verify_certificates: bool | None,
    timeout: float | None,
) -> None:
    """Send one log call to the collector and report delivery failures."""

    config = _build_config(
        host=host,
        port=port,
        protocol=protocol,
        hostname=hostname,
        service=service,
        environment=environment,
        release=release,
        verify_certificates=verify_certificates,
        timeout=timeout,
    )
    observer = RichDeliveryObserver()
    with GelfTransport(config, observer=observer) as transport:
        transport.log(level.lower(), message, meta or None)
    if observer.failures:
        raise click.ClickException(f"{observer.failures} delivery failure(s) reported for {config.endpoint}")
    click.echo(f"sent {level.lower()} message to {config.endpoint}")


def main(argv: Sequence[str] | None = None, *, restore_traceback: bool = True) -> int:
    """Run the CLI through ``lib_cli_exit_tools`` and return the exit code.

    Traceback preferences changed by ``--traceback`` are restored afterwards
    unless ``restore_traceback`` is ``False``.
    """

    previous_traceback = getattr(lib_cli_exit_tools.config, "traceback", False)
    previous_force_color = getattr(lib_cli_exit_tools.config, "traceback_force_color", False)
    try:
        return lib_cli_exit_tools.run_cli(
            cli,
            argv=list(argv) if argv is not None else None,
            prog_name=__init__conf__.shell_command,
        )
    finally:
        if restore_traceback:
            lib_cli_exit_tools.config.traceback = previous_traceback
            lib_cli_exit_tools.config.traceback_force_color = previous_force_color


__all__ = ["cli", "main"]
