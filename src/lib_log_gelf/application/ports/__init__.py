"""Protocols the application layer depends on."""

from __future__ import annotations

from .channel import DeliveryChannelPort
from .observer import DeliveryObserverPort
from .time import ClockPort

__all__ = ["ClockPort", "DeliveryChannelPort", "DeliveryObserverPort"]
