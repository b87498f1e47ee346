"""GELF delivery through one HTTP(S) POST per message.

Purpose
-------
Post each serialized message to ``/gelf`` on the collector without keeping a
connection open between messages.

Contents
--------
* :class:`HttpChannel` - HTTP/HTTPS implementation of :class:`DeliveryChannelPort`.
* :func:`build_headers` - request headers for a payload.

System Role
-----------
The body is the raw JSON text even though the declared content type is
``application/x-www-form-urlencoded``; existing collector inputs are configured
for exactly that pairing. Responses are not inspected; transport errors are
reported to the observer. With ``verify_certificates=False`` HTTPS requests
skip certificate validation (see :mod:`lib_log_gelf.adapters.tcp` for the trust
trade-off).
"""

from __future__ import annotations

import logging
from typing import Any, Callable

import requests

from lib_log_gelf.application.ports.channel import DeliveryChannelPort
from lib_log_gelf.application.ports.observer import DeliveryObserverPort

from ._dispatch import BackgroundChannel

LOGGER = logging.getLogger(__name__)

GELF_PATH = "/gelf"
CONTENT_TYPE = "application/x-www-form-urlencoded"

Poster = Callable[..., Any]


def build_headers(body: bytes) -> dict[str, str]:
    """Return the request headers for ``body``.

    ``Content-Length`` counts bytes, not characters.

    Examples
    --------
    >>> build_headers("é".encode("utf-8"))["Content-Length"]
    '2'
    """

    return {"Content-Type": CONTENT_TYPE, "Content-Length": str(len(body))}


class HttpChannel(BackgroundChannel, DeliveryChannelPort):
    """POST GELF messages to ``http(s)://host:port/gelf``."""

    def __init__(
        self,
        *,
        host: str,
        port: int,
        use_tls: bool = False,
        verify_certificates: bool = False,
        timeout: float | None = None,
        observer: DeliveryObserverPort | None = None,
        max_workers: int = 4,
        poster: Poster | None = None,
    ) -> None:
        super().__init__(
            protocol="https" if use_tls else "http",
            host=host,
            port=port,
            observer=observer,
            max_workers=max_workers,
            thread_name_prefix="gelf-http",
        )
        self._url = f"{self._protocol}://{host}:{port}{GELF_PATH}"
        self._verify = verify_certificates if use_tls else True
        self._timeout = timeout
        self._poster = poster

    @property
    def url(self) -> str:
        return self._url

    def send(self, serialized: str) -> None:
        """Schedule one POST request; never raises delivery errors."""
        body = serialized.encode("utf-8", errors="replace")
        self._submit(self._post, body, build_headers(body))

    def close(self) -> None:
        """Wait for in-flight requests and release the dispatch threads."""
        if self.closed:
            return
        self._shutdown(wait=True)

    def _post(self, body: bytes, headers: dict[str, str]) -> None:
        poster = self._poster or requests.post
        try:
            response = poster(self._url, data=body, headers=headers, timeout=self._timeout, verify=self._verify)
        except requests.RequestException as exc:
            self._report("Error connecting to Graylog", exc)
            return
        LOGGER.debug("Graylog answered %s for %s", getattr(response, "status_code", "?"), self._url)
        close = getattr(response, "close", None)
        if close is not None:
            close()


__all__ = ["CONTENT_TYPE", "GELF_PATH", "HttpChannel", "build_headers"]
