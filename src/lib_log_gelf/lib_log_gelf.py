"""Transport façade wiring configuration, encoder and delivery channel together.

Purpose
-------
Expose the single call host code needs, ``log(level, message, meta,
callback)``, and hide how messages are encoded and which wire channel carries
them.

Contents
--------
* :class:`GelfTransport` - the transport adapter.
* :func:`summary_info` - metadata banner used by the CLI.

System Role
-----------
Composition point of the package: resolves :class:`TransportConfig`, builds
exactly one channel through :func:`lib_log_gelf.adapters.create_channel`, and
routes every call through the level mapper, metadata normaliser and encoder.
Delivery is fire-and-forget: a successful ``log`` means "handed to the
channel", never "acknowledged by the collector".
"""

from __future__ import annotations

import logging
import time
from types import TracebackType
from typing import Any, Callable, Optional

from .adapters.factory import create_channel
from .application.ports import ClockPort, DeliveryChannelPort, DeliveryObserverPort
from .application.use_cases.encode import encode_message
from .domain.settings import TransportConfig

LOGGER = logging.getLogger(__name__)

LogCallback = Callable[[Optional[BaseException], bool], None]


class _SystemClock(ClockPort):
    """Wall clock returning Unix seconds."""

    def now(self) -> float:
        return time.time()


class GelfTransport:
    """Send log calls to a GELF collector.

    Parameters
    ----------
    config:
        Resolved :class:`TransportConfig`. When omitted, ``options`` are
        passed to :meth:`TransportConfig.from_mapping`; when both are given,
        non-``None`` options override the config.
    observer:
        Receives asynchronous delivery failures; defaults to logging them on
        ``lib_log_gelf.delivery``.
    clock:
        Time source for message timestamps.
    channel:
        Pre-built channel, mainly for tests; skips channel construction.

    Raises
    ------
    UnsupportedProtocolError
        When the configured protocol is not tcp, tls, http or https.

    Examples
    --------
    >>> class Recorder:
    ...     def __init__(self):
    ...         self.sent = []
    ...     def send(self, serialized):
    ...         self.sent.append(serialized)
    ...     def close(self):
    ...         pass
    >>> channel = Recorder()
    >>> transport = GelfTransport(service="api", environment="prod", channel=channel)
    >>> transport.log("error", "disk full", {"code": "ENOSPC"})
    True
    >>> '"short_message": "disk full"' in channel.sent[0]
    True
    """

    def __init__(
        self,
        config: TransportConfig | None = None,
        *,
        observer: DeliveryObserverPort | None = None,
        clock: ClockPort | None = None,
        channel: DeliveryChannelPort | None = None,
        **options: Any,
    ) -> None:
        if config is None:
            config = TransportConfig.from_mapping(options)
        elif options:
            config = config.replace(**{key: value for key, value in options.items() if value is not None})
        self._config = config
        self._clock: ClockPort = clock or _SystemClock()
        self._channel: DeliveryChannelPort = channel if channel is not None else create_channel(config, observer)
        LOGGER.debug("GELF transport ready for %s (silent=%s)", config.endpoint, config.silent)

    @classmethod
    def from_env(
        cls,
        *,
        observer: DeliveryObserverPort | None = None,
        clock: ClockPort | None = None,
        channel: DeliveryChannelPort | None = None,
        **options: Any,
    ) -> "GelfTransport":
        """Build a transport whose ``GELF_*`` environment variables win over ``options``."""

        from .config import config_from_env

        return cls(config_from_env(**options), observer=observer, clock=clock, channel=channel)

    @property
    def config(self) -> TransportConfig:
        return self._config

    @property
    def channel(self) -> DeliveryChannelPort:
        return self._channel

    def log(self, level: str, message: Any = None, meta: Any = None, callback: LogCallback | None = None) -> bool:
        """Encode one log call and hand it to the delivery channel.

        The callback, when given, is invoked with ``(None, True)`` once the
        message was handed off, or immediately when the transport is silent.
        Network failures never surface here.

        Raises
        ------
        GelfEncodingError
            When ``meta`` cannot be serialised; the callback is not invoked.
        """

        if not self._config.silent:
            serialized = encode_message(self._config, level, message, meta, clock=self._clock)
            self._channel.send(serialized)
        if callback is not None:
            callback(None, True)
        return True

    def error(self, message: Any = None, meta: Any = None) -> bool:
        return self.log("error", message, meta)

    def warn(self, message: Any = None, meta: Any = None) -> bool:
        return self.log("warn", message, meta)

    def info(self, message: Any = None, meta: Any = None) -> bool:
        return self.log("info", message, meta)

    def verbose(self, message: Any = None, meta: Any = None) -> bool:
        return self.log("verbose", message, meta)

    def debug(self, message: Any = None, meta: Any = None) -> bool:
        return self.log("debug", message, meta)

    def silly(self, message: Any = None, meta: Any = None) -> bool:
        return self.log("silly", message, meta)

    def close(self) -> None:
        """Close the delivery channel; further sends are ignored."""

        self._channel.close()

    def __enter__(self) -> "GelfTransport":
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()


def summary_info() -> str:
    """Return the metadata banner used by the CLI entry point.

    Examples
    --------
    >>> banner = summary_info()
    >>> "version" in banner
    True
    """
    from . import __init__conf__

    lines: list[str] = []
    __init__conf__.print_info(writer=lines.append)
    return "".join(lines)


__all__ = ["GelfTransport", "LogCallback", "summary_info"]
