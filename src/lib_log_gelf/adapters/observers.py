"""Concrete delivery observers.

Purpose
-------
Surface asynchronous delivery failures out of band: through the stdlib
:mod:`logging` module (default), a Rich console on stderr (CLI), or a plain
callback supplied by the host application.

Contents
--------
* :class:`LoggingDeliveryObserver`
* :class:`RichDeliveryObserver`
* :class:`CallbackDeliveryObserver`
"""

from __future__ import annotations

import logging
from typing import Callable

from rich.console import Console

from lib_log_gelf.application.ports.observer import DeliveryObserverPort
from lib_log_gelf.domain.errors import DeliveryError

DELIVERY_LOGGER_NAME = "lib_log_gelf.delivery"


class LoggingDeliveryObserver(DeliveryObserverPort):
    """Log delivery failures at ``ERROR`` on ``lib_log_gelf.delivery``."""

    def __init__(self, logger: logging.Logger | None = None) -> None:
        self._logger = logger or logging.getLogger(DELIVERY_LOGGER_NAME)

    def report(self, error: DeliveryError) -> None:
        self._logger.error("Error connecting to Graylog: %s", error)


class RichDeliveryObserver(DeliveryObserverPort):
    """Print delivery failures to stderr using Rich.

    Examples
    --------
    >>> from io import StringIO
    >>> console = Console(file=StringIO(), record=True)
    >>> observer = RichDeliveryObserver(console=console)
    >>> observer.report(DeliveryError("refused", protocol="tcp", host="gray", port=12201))
    >>> observer.failures
    1
    >>> "tcp://gray:12201" in console.export_text()
    True
    """

    def __init__(self, *, console: Console | None = None, style: str = "bold red") -> None:
        self._console = console or Console(stderr=True)
        self._style = style
        self.failures = 0

    def report(self, error: DeliveryError) -> None:
        self.failures += 1
        self._console.print(f"GELF delivery failed: {error}", style=self._style, highlight=False)


class CallbackDeliveryObserver(DeliveryObserverPort):
    """Adapt a ``callback(error)`` function to the observer port."""

    def __init__(self, callback: Callable[[DeliveryError], None]) -> None:
        self._callback = callback

    def report(self, error: DeliveryError) -> None:
        self._callback(error)


__all__ = [
    "CallbackDeliveryObserver",
    "DELIVERY_LOGGER_NAME",
    "LoggingDeliveryObserver",
    "RichDeliveryObserver",
]
