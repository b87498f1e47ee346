"""Exception hierarchy shared by every layer."""

from __future__ import annotations


class GelfError(Exception):
    """Base class for all errors raised by :mod:`lib_log_gelf`."""


class GelfEncodingError(GelfError, ValueError):
    """Raised when metadata cannot be serialized into a GELF message."""


class UnsupportedProtocolError(GelfError, ValueError):
    """Raised when a delivery protocol name is not one of tcp/tls/http/https."""

    def __init__(self, protocol: object) -> None:
        super().__init__(f"Unsupported GELF protocol: {protocol!r}")
        self.protocol = protocol


class DeliveryError(GelfError):
    """Connection or request failure observed by a delivery channel.

    Delivery errors are never raised into the caller of
    :meth:`lib_log_gelf.GelfTransport.log`; channels hand them to the
    configured observer instead.
    """

    def __init__(self, message: str, *, protocol: str, host: str, port: int, cause: BaseException | None = None) -> None:
        super().__init__(message)
        self.protocol = protocol
        self.host = host
        self.port = port
        self.cause = cause

    @property
    def endpoint(self) -> str:
        return f"{self.protocol}://{self.host}:{self.port}"

    def __str__(self) -> str:
        base = super().__str__()
        if self.cause is None:
            return f"{base} ({self.endpoint})"
        return f"{base} ({self.endpoint}): {self.cause}"


__all__ = ["DeliveryError", "GelfEncodingError", "GelfError", "UnsupportedProtocolError"]
