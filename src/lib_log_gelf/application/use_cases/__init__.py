"""Use cases orchestrating domain objects and ports."""

from __future__ import annotations

from .encode import build_message, encode_message, resolve_short_message

__all__ = ["build_message", "encode_message", "resolve_short_message"]
