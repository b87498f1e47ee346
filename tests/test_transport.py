from __future__ import annotations

import json
import socket
from typing import Any

import pytest
import requests

from lib_log_gelf import (
    GelfEncodingError,
    GelfTransport,
    HttpChannel,
    TcpChannel,
    TransportConfig,
    UnsupportedProtocolError,
    create_channel,
)


def _payloads(channel) -> list[dict[str, Any]]:
    return [json.loads(item) for item in channel.sent]


def test_error_call_produces_documented_message(recording_channel, fixed_clock) -> None:
    transport = GelfTransport(
        hostname="api01",
        service="api",
        environment="prod",
        channel=recording_channel,
        clock=fixed_clock,
    )

    assert transport.log("error", "disk full", {"code": "ENOSPC"}) is True

    assert _payloads(recording_channel) == [
        {
            "timestamp": 1_700_000_000,
            "level": 3,
            "host": "api01",
            "short_message": "disk full",
            "full_message": {"code": "ENOSPC"},
            "_service": "api",
            "_environment": "prod",
        }
    ]


def test_callback_receives_no_error_and_true(recording_channel, config) -> None:
    calls: list[tuple[Any, bool]] = []
    transport = GelfTransport(config, channel=recording_channel)

    transport.log("info", "hello", None, lambda error, ok: calls.append((error, ok)))

    assert calls == [(None, True)]


def test_silent_transport_sends_nothing_but_still_calls_back(recording_channel, config) -> None:
    calls: list[tuple[Any, bool]] = []
    transport = GelfTransport(config.replace(silent=True), channel=recording_channel)

    assert transport.log("error", "quiet", {"a": 1}, lambda error, ok: calls.append((error, ok))) is True

    assert recording_channel.sent == []
    assert calls == [(None, True)]


def test_cyclic_metadata_raises_before_callback(recording_channel, config) -> None:
    calls: list[Any] = []
    meta: dict[str, Any] = {}
    meta["self"] = meta
    transport = GelfTransport(config, channel=recording_channel)

    with pytest.raises(GelfEncodingError):
        transport.log("error", "loop", meta, lambda *args: calls.append(args))

    assert calls == []
    assert recording_channel.sent == []


def test_unknown_level_still_sends_with_level_zero(recording_channel, config) -> None:
    transport = GelfTransport(config, channel=recording_channel)

    transport.log("critical", "odd level")

    assert _payloads(recording_channel)[0]["level"] == 0


def test_release_is_included_when_configured(recording_channel, config) -> None:
    transport = GelfTransport(config, channel=recording_channel, release="1.4.2")

    transport.info("deployed")

    payload = _payloads(recording_channel)[0]
    assert payload["_release"] == "1.4.2"
    assert transport.config.release == "1.4.2"


def test_release_is_omitted_by_default(recording_channel, config) -> None:
    GelfTransport(config, channel=recording_channel).info("plain")

    assert "_release" not in _payloads(recording_channel)[0]


@pytest.mark.parametrize(
    ("method", "severity"),
    [("error", 3), ("warn", 4), ("info", 5), ("verbose", 6), ("debug", 7), ("silly", 7)],
)
def test_level_helpers(recording_channel, config, method: str, severity: int) -> None:
    transport = GelfTransport(config, channel=recording_channel)

    assert getattr(transport, method)("event", {"k": "v"}) is True

    payload = _payloads(recording_channel)[0]
    assert payload["level"] == severity
    assert payload["full_message"] == {"k": "v"}


def test_context_manager_closes_channel(recording_channel, config) -> None:
    with GelfTransport(config, channel=recording_channel) as transport:
        transport.info("inside")

    assert recording_channel.closed is True


def test_unsupported_protocol_fails_at_construction() -> None:
    with pytest.raises(UnsupportedProtocolError) as excinfo:
        GelfTransport(protocol="udp")

    assert excinfo.value.protocol == "udp"


@pytest.mark.parametrize(("protocol", "url"), [("http", "http://gray:12201/gelf"), ("https", "https://gray:12201/gelf")])
def test_factory_builds_http_channels(protocol: str, url: str) -> None:
    channel = create_channel(TransportConfig(host="gray", protocol=protocol))
    try:
        assert isinstance(channel, HttpChannel)
        assert channel.url == url
    finally:
        channel.close()


@pytest.mark.parametrize("protocol", ["tcp", "tls"])
def test_factory_builds_stream_channels(monkeypatch: pytest.MonkeyPatch, protocol: str, recording_observer) -> None:
    def refuse(address, timeout=None):
        raise ConnectionRefusedError("refused")

    monkeypatch.setattr(socket, "create_connection", refuse)

    channel = create_channel(TransportConfig(host="gray", protocol=protocol), recording_observer)
    channel.close()

    assert isinstance(channel, TcpChannel)
    assert channel.protocol == protocol
    assert recording_observer.errors[0].endpoint == f"{protocol}://gray:12201"


def test_unreachable_tcp_collector_never_breaks_logging(closed_port: int, recording_observer, config) -> None:
    calls: list[tuple[Any, bool]] = []
    transport = GelfTransport(
        config.replace(host="127.0.0.1", port=closed_port, timeout=1.0),
        observer=recording_observer,
    )

    assert transport.log("error", "first", None, lambda error, ok: calls.append((error, ok))) is True
    assert transport.log("error", "second") is True
    transport.close()

    assert calls == [(None, True)]
    assert recording_observer.errors
    assert all(error.endpoint == f"tcp://127.0.0.1:{closed_port}" for error in recording_observer.errors)


def test_tcp_transport_delivers_frames(collector, config, fixed_clock) -> None:
    transport = GelfTransport(config.replace(host="127.0.0.1", port=collector.port), clock=fixed_clock)
    transport.error("disk full", {"code": "ENOSPC"})
    transport.close()

    [frame] = collector.frames()
    payload = json.loads(frame.decode("utf-8"))
    assert payload["short_message"] == "disk full"
    assert payload["full_message"] == {"code": "ENOSPC"}


def test_http_transport_posts_with_requests(monkeypatch: pytest.MonkeyPatch, config) -> None:
    posted: list[dict[str, Any]] = []

    def fake_post(url: str, **kwargs: Any) -> None:
        posted.append({"url": url, **kwargs})

    monkeypatch.setattr(requests, "post", fake_post)

    with GelfTransport(config.replace(protocol="https", host="gray", port=443)) as transport:
        transport.warn("slow response", {"ms": 1200})

    [call] = posted
    assert call["url"] == "https://gray:443/gelf"
    assert call["verify"] is False
    assert json.loads(call["data"].decode("utf-8"))["level"] == 4


def test_options_override_given_config(recording_channel, config) -> None:
    transport = GelfTransport(config, channel=recording_channel, service="billing", release=None)

    assert transport.config.service == "billing"
    assert transport.config.environment == "prod"


def test_from_env_prefers_environment(monkeypatch: pytest.MonkeyPatch, recording_channel) -> None:
    monkeypatch.setenv("GELF_SERVICE", "from-env")
    monkeypatch.setenv("GELF_PORT", "12301")

    transport = GelfTransport.from_env(channel=recording_channel, service="from-code", environment="staging")

    assert transport.config.service == "from-env"
    assert transport.config.port == 12301
    assert transport.config.environment == "staging"


def test_non_finite_metadata_stays_strict_json(recording_channel, config) -> None:
    transport = GelfTransport(config, channel=recording_channel)

    transport.info("x", {"ratio": float("nan"), "cap": float("inf")})

    def reject(token: str) -> None:
        raise ValueError(token)

    payload = json.loads(recording_channel.sent[0], parse_constant=reject)
    assert payload["full_message"] == {"ratio": None, "cap": None}


def test_tuple_keys_raise_encoding_error(recording_channel, config) -> None:
    transport = GelfTransport(config, channel=recording_channel)

    with pytest.raises(GelfEncodingError):
        transport.log("info", "x", {("a", "b"): 1})

    assert recording_channel.sent == []


def test_surrogates_in_metadata_reach_tcp_collector(collector, config) -> None:
    transport = GelfTransport(config.replace(host="127.0.0.1", port=collector.port))

    assert transport.log("info", "path", {"file": "bad\udcffname"}) is True
    transport.close()

    [frame] = collector.frames()
    assert json.loads(frame.decode("utf-8"))["full_message"] == {"file": "bad\ufffdname"}
