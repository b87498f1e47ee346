"""Environment-driven configuration helpers.

Purpose
-------
Resolve :class:`TransportConfig` from ``GELF_*`` environment variables and
optionally populate the environment from the nearest ``.env`` file.

Contents
--------
* :data:`ENV_VARIABLES` - config field to environment variable mapping.
* :func:`config_from_env` - build a config where the environment wins.
* :func:`enable_dotenv` / :func:`should_use_dotenv` - ``.env`` support via
  :mod:`dotenv`.

System Role
-----------
Used by :meth:`lib_log_gelf.GelfTransport.from_env` and by the CLI. Values
already present in the process environment always take precedence over
``.env`` entries.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Any

from dotenv import find_dotenv, load_dotenv

from .domain.settings import TransportConfig

LOGGER = logging.getLogger(__name__)

DOTENV_ENV_VAR = "LIB_LOG_GELF_USE_DOTENV"

ENV_VARIABLES: dict[str, str] = {
    "hostname": "GELF_HOSTNAME",
    "host": "GELF_HOST",
    "port": "GELF_PORT",
    "protocol": "GELF_PROTOCOL",
    "service": "GELF_SERVICE",
    "environment": "GELF_ENVIRONMENT",
    "release": "GELF_RELEASE",
    "level": "GELF_LEVEL",
    "silent": "GELF_SILENT",
    "verify_certificates": "GELF_VERIFY_CERTIFICATES",
    "timeout": "GELF_TIMEOUT",
    "max_workers": "GELF_MAX_WORKERS",
}

_TRUTHY = {"1", "true", "yes", "on"}

_DOTENV_ATTEMPTED = False
_DOTENV_PATH: Path | None = None


def _env_bool(name: str, default: bool) -> bool:
    """Return the boolean value of an environment variable with fallback.

    Examples
    --------
    >>> _ = os.environ.pop('LIB_LOG_GELF_EXAMPLE_BOOL', None)
    >>> _env_bool('LIB_LOG_GELF_EXAMPLE_BOOL', default=True)
    True
    >>> os.environ['LIB_LOG_GELF_EXAMPLE_BOOL'] = '0'
    >>> _env_bool('LIB_LOG_GELF_EXAMPLE_BOOL', default=True)
    False
    >>> del os.environ['LIB_LOG_GELF_EXAMPLE_BOOL']
    """
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in _TRUTHY


def read_env_options() -> dict[str, str]:
    """Return the non-empty ``GELF_*`` variables keyed by config field."""

    options: dict[str, str] = {}
    for field_name, env_name in ENV_VARIABLES.items():
        raw = os.getenv(env_name)
        if raw is not None and raw.strip():
            options[field_name] = raw.strip()
    return options


def config_from_env(**options: Any) -> TransportConfig:
    """Build a :class:`TransportConfig` from ``options`` and the environment.

    Environment variables override keyword arguments; missing values fall back
    to the config defaults.
    """

    merged = dict(options)
    merged.update(read_env_options())
    return TransportConfig.from_mapping(merged)


def should_use_dotenv(explicit: bool | None = None) -> bool:
    """Decide whether ``.env`` loading is requested.

    An explicit CLI choice wins over :data:`DOTENV_ENV_VAR`.
    """

    if explicit is not None:
        return explicit
    return _env_bool(DOTENV_ENV_VAR, False)


def enable_dotenv() -> Path | None:
    """Load the nearest ``.env`` (searching upward from the working directory).

    Existing environment variables are never overridden. The search runs once
    per process; later calls return the cached result.

    Returns
    -------
    Path | None
        Resolved path of the loaded file, or ``None`` when none was found.
    """

    global _DOTENV_ATTEMPTED, _DOTENV_PATH
    if _DOTENV_ATTEMPTED:
        return _DOTENV_PATH
    _DOTENV_ATTEMPTED = True

    found = find_dotenv(usecwd=True)
    if not found:
        LOGGER.debug("No .env file found from %s", Path.cwd())
        return None
    path = Path(found).resolve()
    load_dotenv(path, override=False)
    _DOTENV_PATH = path
    LOGGER.debug("Loaded environment from %s", path)
    return path


def _reset_dotenv_state_for_testing() -> None:
    global _DOTENV_ATTEMPTED, _DOTENV_PATH
    _DOTENV_ATTEMPTED = False
    _DOTENV_PATH = None


__all__ = [
    "DOTENV_ENV_VAR",
    "ENV_VARIABLES",
    "config_from_env",
    "enable_dotenv",
    "read_env_options",
    "should_use_dotenv",
]
