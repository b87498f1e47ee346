"""Port for the wall clock used to stamp messages."""

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class ClockPort(Protocol):
    """Provide the current Unix time in seconds."""

    def now(self) -> float: ...


__all__ = ["ClockPort"]
