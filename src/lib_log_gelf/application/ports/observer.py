"""Port receiving asynchronous delivery failures.

Channels report connection and request errors here instead of raising them,
so the logging path stays available while failures remain observable.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from lib_log_gelf.domain.errors import DeliveryError


@runtime_checkable
class DeliveryObserverPort(Protocol):
    """Observe delivery failures reported by channels."""

    def report(self, error: DeliveryError) -> None:
        """Record ``error``; implementations must not raise."""


__all__ = ["DeliveryObserverPort"]
