"""GELF delivery over a single TCP or TLS connection.

Purpose
-------
Own one stream connection to the collector for the lifetime of the transport
and write every message as a NUL-terminated frame.

Contents
--------
* :class:`TcpChannel` - TCP/TLS implementation of :class:`DeliveryChannelPort`.

System Role
-----------
The connection is opened once, as the first task of a single-worker executor,
so frames leave in call order and the caller never waits for the handshake.
Connect, handshake and write failures go to the observer; the channel keeps
accepting ``send`` calls and drops what it cannot deliver. There is no
reconnect.

Trust Policy
------------
With ``verify_certificates=False`` (the default) the TLS context skips
certificate and hostname validation so self-signed collectors are accepted.
This trades authenticity of the collector for ease of deployment; pass
``verify_certificates=True`` wherever the collector has a trusted certificate.
"""

from __future__ import annotations

import logging
import socket
import ssl

from lib_log_gelf.application.ports.channel import DeliveryChannelPort
from lib_log_gelf.application.ports.observer import DeliveryObserverPort

from ._dispatch import BackgroundChannel

LOGGER = logging.getLogger(__name__)

FRAME_DELIMITER = b"\x00"


def frame_message(serialized: str) -> bytes:
    """Return the wire frame for ``serialized``: UTF-8 text plus one NUL byte.

    Examples
    --------
    >>> frame_message('{"short_message": "hé"}')
    b'{"short_message": "h\\xc3\\xa9"}\\x00'
    """

    return serialized.encode("utf-8", errors="replace") + FRAME_DELIMITER


class TcpChannel(BackgroundChannel, DeliveryChannelPort):
    """Write GELF frames to one TCP (optionally TLS) connection."""

    def __init__(
        self,
        *,
        host: str,
        port: int,
        use_tls: bool = False,
        verify_certificates: bool = False,
        timeout: float | None = None,
        observer: DeliveryObserverPort | None = None,
    ) -> None:
        super().__init__(
            protocol="tls" if use_tls else "tcp",
            host=host,
            port=port,
            observer=observer,
            max_workers=1,
            thread_name_prefix="gelf-tcp",
        )
        self._use_tls = use_tls
        self._verify_certificates = verify_certificates
        self._timeout = timeout
        self._sock: socket.socket | None = None
        self._submit(self._connect)

    @property
    def connected(self) -> bool:
        return self._sock is not None

    def send(self, serialized: str) -> None:
        """Queue one frame for writing; never raises delivery errors."""
        self._submit(self._write, frame_message(serialized))

    def close(self) -> None:
        """End the connection after pending frames have been written."""
        if self.closed:
            return
        self._submit(self._disconnect)
        self._shutdown(wait=True)

    def _build_ssl_context(self) -> ssl.SSLContext:
        context = ssl.create_default_context()
        if not self._verify_certificates:
            context.check_hostname = False
            context.verify_mode = ssl.CERT_NONE
        return context

    def _connect(self) -> None:
        address = (self._host, self._port)
        try:
            sock = socket.create_connection(address, timeout=self._timeout)
        except OSError as exc:
            self._report("Error connecting to Graylog", exc)
            return
        if self._use_tls:
            try:
                sock = self._build_ssl_context().wrap_socket(sock, server_hostname=self._host)
            except OSError as exc:
                sock.close()
                self._report("TLS handshake with Graylog failed", exc)
                return
        self._sock = sock
        LOGGER.debug("Connected to Graylog at %s:%s (%s)", self._host, self._port, self._protocol)

    def _write(self, frame: bytes) -> None:
        sock = self._sock
        if sock is None:
            self._report("Graylog connection unavailable, message dropped")
            return
        try:
            sock.sendall(frame)
        except OSError as exc:
            self._report("Error writing to Graylog", exc)
            self._release(sock)

    def _disconnect(self) -> None:
        sock = self._sock
        if sock is not None:
            self._release(sock)
            LOGGER.debug("Disconnected from Graylog at %s:%s", self._host, self._port)

    def _release(self, sock: socket.socket) -> None:
        self._sock = None
        try:
            sock.close()
        except OSError:
            LOGGER.debug("Ignoring error while closing Graylog socket", exc_info=True)


__all__ = ["FRAME_DELIMITER", "TcpChannel", "frame_message"]
