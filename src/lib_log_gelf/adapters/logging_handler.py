"""Bridge from the stdlib :mod:`logging` module to a GELF transport.

Purpose
-------
Let applications keep using ``logging.getLogger(...)`` while records travel to
Graylog through :class:`lib_log_gelf.GelfTransport`.

Contents
--------
* :class:`GelfLoggingHandler` - ``logging.Handler`` forwarding records.

System Role
-----------
Plays the part of the host logging library: it applies the advisory level
threshold upstream of the transport, turns ``LogRecord`` attributes into
metadata, and hands ``(level, message, meta)`` to ``transport.log``.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from lib_log_gelf.domain.levels import name_to_python_level, python_level_to_name

if TYPE_CHECKING:  # pragma: no cover
    from lib_log_gelf.lib_log_gelf import GelfTransport

_PACKAGE_LOGGER = "lib_log_gelf"
_RESERVED_ATTRS = frozenset(vars(logging.makeLogRecord({}))) | {"message", "asctime", "taskName"}


def _is_own_record(record: logging.LogRecord) -> bool:
    return record.name == _PACKAGE_LOGGER or record.name.startswith(_PACKAGE_LOGGER + ".")


class GelfLoggingHandler(logging.Handler):
    """Forward log records to a :class:`GelfTransport`.

    Parameters
    ----------
    transport:
        Transport receiving ``log(level, message, meta)`` calls.
    level:
        Handler threshold; defaults to the transport's advisory ``level``.
    close_transport:
        When ``True`` closing the handler also closes the transport.
    """

    def __init__(self, transport: "GelfTransport", *, level: int | None = None, close_transport: bool = True) -> None:
        threshold = name_to_python_level(transport.config.level) if level is None else level
        super().__init__(level=threshold)
        self._transport = transport
        self._close_transport = close_transport

    @property
    def transport(self) -> "GelfTransport":
        return self._transport

    def emit(self, record: logging.LogRecord) -> None:
        # Delivery diagnostics are logged through this package; forwarding
        # them would loop back into the transport.
        if _is_own_record(record):
            return
        try:
            meta = self.build_metadata(record)
            self._transport.log(python_level_to_name(record.levelno), record.getMessage(), meta)
        except RecursionError:
            raise
        except Exception:
            self.handleError(record)

    @staticmethod
    def build_metadata(record: logging.LogRecord) -> dict[str, Any]:
        """Collect ``extra`` attributes and the exception of ``record``.

        Examples
        --------
        >>> record = logging.makeLogRecord({"name": "app", "msg": "hi", "request_id": "r-1"})
        >>> GelfLoggingHandler.build_metadata(record)
        {'logger': 'app', 'request_id': 'r-1'}
        """

        meta: dict[str, Any] = {"logger": record.name}
        for key, value in vars(record).items():
            if key not in _RESERVED_ATTRS and not key.startswith("_"):
                meta[key] = value
        if record.exc_info and record.exc_info[1] is not None:
            meta["error"] = record.exc_info[1]
        return meta

    def close(self) -> None:
        try:
            if self._close_transport:
                self._transport.close()
        finally:
            super().close()


__all__ = ["GelfLoggingHandler"]
