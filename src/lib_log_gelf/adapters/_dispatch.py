"""Shared plumbing for channels that deliver on background threads.

Purpose
-------
Keep the caller's thread free of network I/O: every channel hands its work to a
:class:`~concurrent.futures.ThreadPoolExecutor` and routes failures to a
:class:`DeliveryObserverPort` instead of raising them.

Contents
--------
* :class:`BackgroundChannel` - base class with ``_submit``/``_report`` helpers.
"""

from __future__ import annotations

import logging
import threading
from concurrent.futures import Future, ThreadPoolExecutor
from typing import Any, Callable

from lib_log_gelf.application.ports.observer import DeliveryObserverPort
from lib_log_gelf.domain.errors import DeliveryError

from .observers import LoggingDeliveryObserver

LOGGER = logging.getLogger(__name__)


class BackgroundChannel:
    """Base class running delivery work on an executor."""

    def __init__(
        self,
        *,
        protocol: str,
        host: str,
        port: int,
        observer: DeliveryObserverPort | None = None,
        max_workers: int = 1,
        thread_name_prefix: str = "gelf",
    ) -> None:
        self._protocol = protocol
        self._host = host
        self._port = port
        self._observer: DeliveryObserverPort = observer or LoggingDeliveryObserver()
        self._executor = ThreadPoolExecutor(max_workers=max_workers, thread_name_prefix=thread_name_prefix)
        self._closed = threading.Event()

    @property
    def protocol(self) -> str:
        return self._protocol

    @property
    def closed(self) -> bool:
        return self._closed.is_set()

    def _submit(self, fn: Callable[..., Any], *args: Any) -> Future[Any] | None:
        """Schedule ``fn`` unless the channel is closed."""
        if self._closed.is_set():
            LOGGER.debug("Ignoring work submitted to closed %s channel", self._protocol)
            return None
        try:
            future = self._executor.submit(fn, *args)
        except RuntimeError:
            # Executor shut down between the check and the submit.
            LOGGER.debug("Ignoring work submitted to closed %s channel", self._protocol)
            return None
        future.add_done_callback(self._collect)
        return future

    def _collect(self, future: Future[Any]) -> None:
        """Report failures the delivery task did not handle itself."""
        if future.cancelled():
            return
        exc = future.exception()
        if exc is not None:
            self._report("Unexpected Graylog delivery failure", exc)

    def _report(self, message: str, cause: BaseException | None = None) -> None:
        """Hand a :class:`DeliveryError` to the observer without raising."""
        error = DeliveryError(message, protocol=self._protocol, host=self._host, port=self._port, cause=cause)
        try:
            self._observer.report(error)
        except Exception:
            LOGGER.warning("Delivery observer failed while reporting %s", error, exc_info=True)

    def _shutdown(self, *, wait: bool = True) -> None:
        self._closed.set()
        self._executor.shutdown(wait=wait)


__all__ = ["BackgroundChannel"]
