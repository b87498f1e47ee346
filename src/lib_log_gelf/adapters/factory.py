"""Map a :class:`DeliveryProtocol` onto its delivery channel."""

from __future__ import annotations

from lib_log_gelf.application.ports.channel import DeliveryChannelPort
from lib_log_gelf.application.ports.observer import DeliveryObserverPort
from lib_log_gelf.domain.settings import TransportConfig

from .http import HttpChannel
from .tcp import TcpChannel


def create_channel(config: TransportConfig, observer: DeliveryObserverPort | None = None) -> DeliveryChannelPort:
    """Build the channel matching ``config.protocol``.

    TCP and TLS open their connection in the background as part of this call;
    HTTP and HTTPS own no connection.
    """

    protocol = config.protocol
    if protocol.is_stream:
        return TcpChannel(
            host=config.host,
            port=config.port,
            use_tls=protocol.uses_tls,
            verify_certificates=config.verify_certificates,
            timeout=config.timeout,
            observer=observer,
        )
    return HttpChannel(
        host=config.host,
        port=config.port,
        use_tls=protocol.uses_tls,
        verify_certificates=config.verify_certificates,
        timeout=config.timeout,
        observer=observer,
        max_workers=config.max_workers,
    )


__all__ = ["create_channel"]
