"""Severity mapping between host log level names and GELF syslog integers.

Purpose
-------
Translate the level names emitted by host applications (``error``, ``warn``,
``info``, ``verbose``, ``debug``, ``silly``) into the numeric syslog severity
GELF collectors expect.

Contents
--------
* :class:`GelfSeverity` - the eight syslog severities as an ``IntEnum``.
* :func:`level_to_severity` - the fixed name-to-integer table.
* :func:`python_level_to_name` / :func:`name_to_python_level` - bridges for
  the stdlib :mod:`logging` module.

System Role
-----------
Leaf of the domain layer; used by the message encoder and by the logging
handler adapter.
"""

from __future__ import annotations

import logging
from enum import IntEnum


class GelfSeverity(IntEnum):
    """Syslog severities reused by GELF."""

    EMERGENCY = 0
    ALERT = 1
    CRITICAL = 2
    ERROR = 3
    WARNING = 4
    NOTICE = 5
    INFORMATIONAL = 6
    DEBUG = 7


_LEVEL_TABLE: dict[str, GelfSeverity] = {
    "error": GelfSeverity.ERROR,
    "warn": GelfSeverity.WARNING,
    "info": GelfSeverity.NOTICE,
    "verbose": GelfSeverity.INFORMATIONAL,
    "debug": GelfSeverity.DEBUG,
    "silly": GelfSeverity.DEBUG,
}
# Unknown names fall through to EMERGENCY (0), matching existing collectors.

LEVEL_NAMES: tuple[str, ...] = tuple(_LEVEL_TABLE)

_PYTHON_LEVELS: dict[str, int] = {
    "error": logging.ERROR,
    "warn": logging.WARNING,
    "info": logging.INFO,
    "verbose": 15,
    "debug": logging.DEBUG,
    "silly": 5,
}


def level_to_severity(name: str) -> int:
    """Return the GELF severity for a host level name.

    Examples
    --------
    >>> level_to_severity("error")
    3
    >>> level_to_severity("silly")
    7
    >>> level_to_severity("fatal")
    0
    """

    return int(_LEVEL_TABLE.get(name, GelfSeverity.EMERGENCY))


def python_level_to_name(levelno: int) -> str:
    """Translate a stdlib logging level number into a host level name.

    Examples
    --------
    >>> python_level_to_name(logging.CRITICAL)
    'error'
    >>> python_level_to_name(logging.WARNING)
    'warn'
    >>> python_level_to_name(5)
    'silly'
    """

    if levelno >= logging.ERROR:
        return "error"
    if levelno >= logging.WARNING:
        return "warn"
    if levelno >= logging.INFO:
        return "info"
    if levelno >= _PYTHON_LEVELS["verbose"]:
        return "verbose"
    if levelno >= logging.DEBUG:
        return "debug"
    return "silly"


def name_to_python_level(name: str) -> int:
    """Return the stdlib threshold for a host level name.

    Unknown names resolve to ``logging.NOTSET`` so nothing is filtered.

    Examples
    --------
    >>> name_to_python_level("warn") == logging.WARNING
    True
    >>> name_to_python_level("unknown")
    0
    """

    return _PYTHON_LEVELS.get(name.strip().lower(), logging.NOTSET)


__all__ = [
    "GelfSeverity",
    "LEVEL_NAMES",
    "level_to_severity",
    "name_to_python_level",
    "python_level_to_name",
]
