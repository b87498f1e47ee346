"""GELF message value object and its JSON serialisation.

Purpose
-------
Represent a single GELF message with its reserved fields plus the
underscore-prefixed custom tags, and render it as the JSON text written to the
wire.

Contents
--------
* :class:`GelfMessage` - frozen dataclass with :meth:`to_dict`/:meth:`to_json`.
* ``_json_default`` - fallback for values the stdlib encoder rejects.

System Role
-----------
Produced by :func:`lib_log_gelf.application.use_cases.encode.build_message`
and consumed by every delivery channel as plain text.
"""

from __future__ import annotations

import json
import math
from dataclasses import dataclass
from datetime import date, datetime
from typing import Any

from .errors import GelfEncodingError

NO_MESSAGE = "No message"


def _json_default(value: Any) -> Any:
    """Convert values :mod:`json` cannot encode natively."""

    if isinstance(value, (datetime, date)):
        return value.isoformat()
    if isinstance(value, (set, frozenset)):
        return list(value)
    if isinstance(value, bytes):
        return value.decode("utf-8", errors="replace")
    return str(value)


def _finite(value: Any) -> Any:
    """Return ``value`` with NaN and infinities replaced by ``None``.

    Examples
    --------
    >>> _finite({"ratio": float("nan"), "sizes": [1.5, float("-inf")]})
    {'ratio': None, 'sizes': [1.5, None]}
    """

    if isinstance(value, float):
        return value if math.isfinite(value) else None
    if isinstance(value, dict):
        return {key: _finite(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [_finite(item) for item in value]
    return value


def _replace_lone_surrogates(text: str) -> str:
    """Swap unpaired surrogates for U+FFFD so the text encodes as UTF-8.

    Examples
    --------
    >>> _replace_lone_surrogates("bad\\udcffname") == "bad\\ufffdname"
    True
    """

    try:
        text.encode("utf-8")
    except UnicodeEncodeError:
        return text.encode("utf-16", "surrogatepass").decode("utf-16", "replace")
    return text


@dataclass(slots=True, frozen=True)
class GelfMessage:
    """Immutable GELF message.

    Attributes
    ----------
    timestamp:
        Unix time in whole seconds.
    level:
        Syslog severity between 0 and 7.
    host:
        Name of the emitting machine.
    short_message:
        Non-empty summary line.
    full_message:
        Normalised metadata.
    service, environment, release:
        Emitted as ``_service``, ``_environment`` and ``_release``;
        ``release=None`` drops the field.
    """

    timestamp: int
    level: int
    host: str
    short_message: str
    full_message: Any
    service: str
    environment: str
    release: str | None = None

    def __post_init__(self) -> None:
        if not self.short_message:
            object.__setattr__(self, "short_message", NO_MESSAGE)

    def to_dict(self) -> dict[str, Any]:
        """Return the GELF object with reserved and custom fields.

        Examples
        --------
        >>> msg = GelfMessage(1700000000, 3, "api01", "disk full", {}, "api", "prod")
        >>> sorted(msg.to_dict())
        ['_environment', '_service', 'full_message', 'host', 'level', 'short_message', 'timestamp']
        """

        data: dict[str, Any] = {
            "timestamp": self.timestamp,
            "level": self.level,
            "host": self.host,
            "short_message": self.short_message,
            "full_message": self.full_message,
            "_service": self.service,
            "_environment": self.environment,
        }
        if self.release is not None:
            data["_release"] = self.release
        return data

    def to_json(self) -> str:
        """Serialize the message to JSON text.

        Raises
        ------
        GelfEncodingError
            When the metadata contains a reference cycle, keys JSON cannot
            represent, or a non-finite number hidden from the sanitiser.

        Non-finite floats become ``null`` and unpaired surrogates become
        U+FFFD, so the result always encodes as UTF-8.

        Examples
        --------
        >>> GelfMessage(1, 5, "h", "hi", {"n": 1}, "svc", "dev").to_json()
        '{"timestamp": 1, "level": 5, "host": "h", "short_message": "hi", "full_message": {"n": 1}, "_service": "svc", "_environment": "dev"}'
        >>> json.loads(GelfMessage(1, 5, "h", "hi", {"n": float("inf")}, "svc", "dev").to_json())["full_message"]
        {'n': None}
        """

        try:
            text = json.dumps(
                _finite(self.to_dict()),
                ensure_ascii=False,
                allow_nan=False,
                default=_json_default,
            )
        except (TypeError, ValueError, RecursionError) as exc:
            raise GelfEncodingError(f"GELF message could not be serialized: {exc}") from exc
        return _replace_lone_surrogates(text)


__all__ = ["GelfMessage", "NO_MESSAGE"]
