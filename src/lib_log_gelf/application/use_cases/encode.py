"""Use case turning one log call into GELF JSON text.

Purpose
-------
Combine the level mapper, the metadata normaliser and the static configuration
tags into a :class:`GelfMessage` and serialise it.

Contents
--------
* :func:`resolve_short_message` - message / ``meta.message`` / fallback chain.
* :func:`build_message` - structured message construction.
* :func:`encode_message` - JSON text ready for a delivery channel.

System Role
-----------
Called by :class:`lib_log_gelf.GelfTransport` for every non-silent log call.
Static service/environment/release tags stay top-level fields and are never
merged into ``full_message``.
"""

from __future__ import annotations

import math
import time
from collections.abc import Mapping
from typing import Any

from lib_log_gelf.application.ports.time import ClockPort
from lib_log_gelf.domain.levels import level_to_severity
from lib_log_gelf.domain.message import NO_MESSAGE, GelfMessage
from lib_log_gelf.domain.metadata import normalize_metadata
from lib_log_gelf.domain.settings import TransportConfig


def resolve_short_message(message: Any, meta: Any) -> str:
    """Pick the GELF ``short_message`` for a log call.

    Examples
    --------
    >>> resolve_short_message("disk full", None)
    'disk full'
    >>> resolve_short_message(None, {"message": "fallback text"})
    'fallback text'
    >>> resolve_short_message("", RuntimeError("boom"))
    'boom'
    >>> resolve_short_message(None, None)
    'No message'
    """

    if message:
        return str(message)
    candidate: Any = None
    if isinstance(meta, BaseException):
        candidate = str(meta)
    elif isinstance(meta, Mapping):
        candidate = meta.get("message")
    if candidate:
        return str(candidate)
    return NO_MESSAGE


def _current_time(clock: ClockPort | None) -> int:
    now = clock.now() if clock is not None else time.time()
    return math.floor(now)


def build_message(
    config: TransportConfig,
    level: str,
    message: Any = None,
    meta: Any = None,
    *,
    clock: ClockPort | None = None,
) -> GelfMessage:
    """Assemble the :class:`GelfMessage` for one log call."""

    return GelfMessage(
        timestamp=_current_time(clock),
        level=level_to_severity(level),
        host=config.hostname,
        short_message=resolve_short_message(message, meta),
        full_message=normalize_metadata(meta, {}),
        service=config.service,
        environment=config.environment,
        release=config.release,
    )


def encode_message(
    config: TransportConfig,
    level: str,
    message: Any = None,
    meta: Any = None,
    *,
    clock: ClockPort | None = None,
) -> str:
    """Return the JSON text of the GELF message for one log call.

    Raises
    ------
    GelfEncodingError
        When ``meta`` cannot be serialised (for example a reference cycle).

    Examples
    --------
    >>> import json
    >>> class FixedClock:
    ...     def now(self) -> float:
    ...         return 1700000000.9
    >>> cfg = TransportConfig(hostname="api01", service="api", environment="prod")
    >>> payload = json.loads(encode_message(cfg, "error", "disk full", {"code": "ENOSPC"}, clock=FixedClock()))
    >>> payload["timestamp"], payload["level"], payload["full_message"]
    (1700000000, 3, {'code': 'ENOSPC'})
    """

    return build_message(config, level, message, meta, clock=clock).to_json()


__all__ = ["build_message", "encode_message", "resolve_short_message"]
