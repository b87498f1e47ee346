"""Port describing a GELF delivery channel."""

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class DeliveryChannelPort(Protocol):
    """Hand serialized GELF messages to the network.

    Implementations must not block the caller on network I/O and must never
    raise delivery failures from :meth:`send`.
    """

    def send(self, serialized: str) -> None:
        """Schedule ``serialized`` for delivery (fire-and-forget)."""

    def close(self) -> None:
        """Release owned transport resources."""


__all__ = ["DeliveryChannelPort"]
