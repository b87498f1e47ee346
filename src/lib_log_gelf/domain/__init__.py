"""Domain value objects and pure functions for GELF encoding."""

from __future__ import annotations

from .errors import DeliveryError, GelfEncodingError, GelfError, UnsupportedProtocolError
from .levels import GelfSeverity, level_to_severity
from .message import GelfMessage
from .metadata import deep_merge, normalize_metadata
from .settings import DeliveryProtocol, TransportConfig

__all__ = [
    "DeliveryError",
    "DeliveryProtocol",
    "GelfEncodingError",
    "GelfError",
    "GelfMessage",
    "GelfSeverity",
    "TransportConfig",
    "UnsupportedProtocolError",
    "deep_merge",
    "level_to_severity",
    "normalize_metadata",
]
