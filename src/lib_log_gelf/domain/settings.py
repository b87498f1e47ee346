"""Immutable transport configuration and the closed set of delivery protocols.

Purpose
-------
Resolve every configurable option (collector address, protocol, static tags,
trust policy) exactly once so the transport never consults ambient globals
after construction.

Contents
--------
* :class:`DeliveryProtocol` - enum over ``tcp``, ``tls``, ``http``, ``https``.
* :class:`TransportConfig` - frozen dataclass with the documented defaults.

System Role
-----------
Domain value objects consumed by the encoder, the channel factory, and the
:class:`lib_log_gelf.GelfTransport` façade.
"""

from __future__ import annotations

import socket
from dataclasses import dataclass, field, fields, replace
from enum import Enum
from typing import Any, Mapping

from .errors import UnsupportedProtocolError

DEFAULT_HOST = "127.0.0.1"
DEFAULT_PORT = 12201
DEFAULT_SERVICE = "nodejs"
DEFAULT_ENVIRONMENT = "development"
DEFAULT_LEVEL = "info"
DEFAULT_MAX_WORKERS = 4

_TRUTHY = {"1", "true", "yes", "on"}


class DeliveryProtocol(Enum):
    """Wire channel used to reach the collector."""

    TCP = "tcp"
    TLS = "tls"
    HTTP = "http"
    HTTPS = "https"

    @property
    def uses_tls(self) -> bool:
        """Return ``True`` for the encrypted variants."""

        return self in (DeliveryProtocol.TLS, DeliveryProtocol.HTTPS)

    @property
    def is_stream(self) -> bool:
        """Return ``True`` when messages travel over a persistent socket."""

        return self in (DeliveryProtocol.TCP, DeliveryProtocol.TLS)

    @classmethod
    def from_name(cls, name: str | "DeliveryProtocol") -> "DeliveryProtocol":
        """Resolve ``name`` (case-insensitive) into a protocol.

        Examples
        --------
        >>> DeliveryProtocol.from_name("HTTPS") is DeliveryProtocol.HTTPS
        True
        >>> DeliveryProtocol.from_name("udp")
        Traceback (most recent call last):
        ...
        lib_log_gelf.domain.errors.UnsupportedProtocolError: Unsupported GELF protocol: 'udp'
        """

        if isinstance(name, DeliveryProtocol):
            return name
        try:
            return cls(str(name).strip().lower())
        except ValueError as exc:
            raise UnsupportedProtocolError(name) from exc


def _default_hostname() -> str:
    return socket.gethostname()


def _coerce_bool(value: Any) -> bool:
    if isinstance(value, str):
        return value.strip().lower() in _TRUTHY
    return bool(value)


@dataclass(slots=True, frozen=True)
class TransportConfig:
    """Configuration resolved once when a transport is built.

    Attributes
    ----------
    hostname:
        Value of the GELF ``host`` field; defaults to the local machine name.
    host, port:
        Collector address.
    protocol:
        :class:`DeliveryProtocol` selecting the delivery channel.
    service, environment, release:
        Static tags emitted as ``_service``, ``_environment`` and ``_release``.
        ``release=None`` omits the field.
    level:
        Advisory minimum level name; filtering happens upstream of the core.
    silent:
        When ``True`` nothing is encoded or sent.
    verify_certificates:
        Validate collector certificates on ``tls``/``https``. Disabled by
        default so self-signed collectors keep working; enable it wherever the
        collector presents a trusted chain.
    timeout:
        Optional socket/request timeout in seconds; ``None`` keeps the network
        stack defaults.
    max_workers:
        Dispatch threads available to the HTTP channels.
    """

    hostname: str = field(default_factory=_default_hostname)
    host: str = DEFAULT_HOST
    port: int = DEFAULT_PORT
    protocol: DeliveryProtocol = DeliveryProtocol.TCP
    service: str = DEFAULT_SERVICE
    environment: str = DEFAULT_ENVIRONMENT
    release: str | None = None
    level: str = DEFAULT_LEVEL
    silent: bool = False
    verify_certificates: bool = False
    timeout: float | None = None
    max_workers: int = DEFAULT_MAX_WORKERS

    def __post_init__(self) -> None:
        object.__setattr__(self, "protocol", DeliveryProtocol.from_name(self.protocol))
        port = int(self.port)
        if not 0 < port < 65536:
            raise ValueError(f"port must be between 1 and 65535, got {self.port!r}")
        object.__setattr__(self, "port", port)
        object.__setattr__(self, "silent", _coerce_bool(self.silent))
        object.__setattr__(self, "verify_certificates", _coerce_bool(self.verify_certificates))
        if self.timeout is not None:
            object.__setattr__(self, "timeout", float(self.timeout))
        if int(self.max_workers) < 1:
            raise ValueError("max_workers must be at least 1")
        object.__setattr__(self, "max_workers", int(self.max_workers))

    @classmethod
    def from_mapping(cls, options: Mapping[str, Any] | None = None) -> "TransportConfig":
        """Build a config from loose options, ignoring ``None`` and unknown keys.

        Examples
        --------
        >>> cfg = TransportConfig.from_mapping({"port": "12202", "protocol": "http", "release": None})
        >>> cfg.port, cfg.protocol.value, cfg.release
        (12202, 'http', None)
        """

        known = {item.name for item in fields(cls)}
        values = {key: value for key, value in (options or {}).items() if key in known and value is not None}
        return cls(**values)

    def replace(self, **changes: Any) -> "TransportConfig":
        """Return a copy with ``changes`` applied."""

        return replace(self, **changes)

    @property
    def endpoint(self) -> str:
        return f"{self.protocol.value}://{self.host}:{self.port}"


__all__ = [
    "DEFAULT_ENVIRONMENT",
    "DEFAULT_HOST",
    "DEFAULT_LEVEL",
    "DEFAULT_PORT",
    "DEFAULT_SERVICE",
    "DeliveryProtocol",
    "TransportConfig",
]
