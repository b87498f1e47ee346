"""Metadata normalisation for the GELF ``full_message`` payload.

Purpose
-------
Reduce caller-supplied metadata to JSON-friendly data: exceptions become their
formatted traceback text and static fields are deep-merged on top.

Contents
--------
* :func:`format_exception_text` - traceback rendering for exception values.
* :func:`deep_merge` - recursive mapping merge where the override wins.
* :func:`normalize_metadata` - the normalisation pipeline.
"""

from __future__ import annotations

import traceback
from collections.abc import Mapping
from typing import Any


def format_exception_text(exc: BaseException) -> str:
    """Return the traceback of ``exc`` as a single string.

    Exceptions that were never raised have no frames, so only the final
    ``Type: message`` line is produced.

    Examples
    --------
    >>> format_exception_text(ValueError("bad input"))
    'ValueError: bad input'
    """

    lines = traceback.format_exception(type(exc), exc, exc.__traceback__)
    return "".join(lines).rstrip("\n")


def deep_merge(base: Mapping[str, Any], override: Mapping[str, Any]) -> dict[str, Any]:
    """Merge ``override`` into a copy of ``base``.

    Nested mappings merge recursively; any other value from ``override``
    replaces the one in ``base``.

    Examples
    --------
    >>> deep_merge({"a": 1, "nested": {"x": 1, "y": 2}}, {"nested": {"y": 3}, "b": 2})
    {'a': 1, 'nested': {'x': 1, 'y': 3}, 'b': 2}
    """

    merged: dict[str, Any] = dict(base)
    for key, value in override.items():
        current = merged.get(key)
        if isinstance(current, Mapping) and isinstance(value, Mapping):
            merged[key] = deep_merge(current, value)
        elif isinstance(value, Mapping):
            merged[key] = deep_merge({}, value)
        else:
            merged[key] = value
    return merged


def normalize_metadata(meta: Any, static_fields: Mapping[str, Any] | None = None) -> Any:
    """Return ``meta`` in a shape that is safe to embed in a GELF message.

    ``None`` becomes an empty mapping and an exception collapses to
    ``{"error": <traceback>}``. Exception values one level deep inside a
    mapping are replaced with their traceback text. Mappings are then merged
    with ``static_fields`` (static fields win). Any other value is returned as
    is.

    Examples
    --------
    >>> normalize_metadata(None)
    {}
    >>> normalize_metadata({"code": "ENOSPC"}, {"team": "ops"})
    {'code': 'ENOSPC', 'team': 'ops'}
    >>> normalize_metadata({"cause": KeyError("user")})
    {'cause': "KeyError: 'user'"}
    >>> normalize_metadata("plain text")
    'plain text'
    """

    if meta is None:
        meta = {}

    if isinstance(meta, BaseException):
        meta = {"error": format_exception_text(meta)}
    elif isinstance(meta, Mapping):
        meta = {
            key: format_exception_text(value) if isinstance(value, BaseException) else value
            for key, value in meta.items()
        }
    else:
        return meta

    return deep_merge(meta, static_fields or {})


__all__ = ["deep_merge", "format_exception_text", "normalize_metadata"]
