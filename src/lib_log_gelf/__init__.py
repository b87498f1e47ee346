"""Public package surface for the GELF transport adapter.

``GelfTransport`` is the entry point: build it once with the collector
address and static tags, then call ``log(level, message, meta)`` for every
event. ``GelfLoggingHandler`` plugs the transport into the stdlib
:mod:`logging` module.
"""

from __future__ import annotations

from .__init__conf__ import version as __version__
from .adapters import (
    CallbackDeliveryObserver,
    GelfLoggingHandler,
    HttpChannel,
    LoggingDeliveryObserver,
    RichDeliveryObserver,
    TcpChannel,
    create_channel,
)
from .application.use_cases.encode import build_message, encode_message
from .config import config_from_env, enable_dotenv
from .domain import (
    DeliveryError,
    DeliveryProtocol,
    GelfEncodingError,
    GelfError,
    GelfMessage,
    GelfSeverity,
    TransportConfig,
    UnsupportedProtocolError,
    level_to_severity,
    normalize_metadata,
)
from .lib_log_gelf import GelfTransport, summary_info

__all__ = [
    "CallbackDeliveryObserver",
    "DeliveryError",
    "DeliveryProtocol",
    "GelfEncodingError",
    "GelfError",
    "GelfLoggingHandler",
    "GelfMessage",
    "GelfSeverity",
    "GelfTransport",
    "HttpChannel",
    "LoggingDeliveryObserver",
    "RichDeliveryObserver",
    "TcpChannel",
    "TransportConfig",
    "UnsupportedProtocolError",
    "__version__",
    "build_message",
    "config_from_env",
    "create_channel",
    "enable_dotenv",
    "encode_message",
    "level_to_severity",
    "normalize_metadata",
    "summary_info",
]
