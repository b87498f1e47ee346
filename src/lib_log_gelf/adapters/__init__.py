"""Concrete adapters: delivery channels, observers and the logging bridge."""

from __future__ import annotations

from .factory import create_channel
from .http import HttpChannel
from .logging_handler import GelfLoggingHandler
from .observers import CallbackDeliveryObserver, LoggingDeliveryObserver, RichDeliveryObserver
from .tcp import TcpChannel

__all__ = [
    "CallbackDeliveryObserver",
    "GelfLoggingHandler",
    "HttpChannel",
    "LoggingDeliveryObserver",
    "RichDeliveryObserver",
    "TcpChannel",
    "create_channel",
]
