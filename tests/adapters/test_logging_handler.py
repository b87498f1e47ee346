from __future__ import annotations

import json
import logging
from typing import Iterator

import pytest

from lib_log_gelf import GelfLoggingHandler, GelfTransport


@pytest.fixture
def app_logger() -> Iterator[logging.Logger]:
    logger = logging.getLogger("tests.gelf.app")
    previous_level = logger.level
    previous_propagate = logger.propagate
    logger.setLevel(1)
    logger.propagate = False
    try:
        yield logger
    finally:
        for handler in list(logger.handlers):
            logger.removeHandler(handler)
        logger.setLevel(previous_level)
        logger.propagate = previous_propagate


def _payloads(channel) -> list[dict]:
    return [json.loads(item) for item in channel.sent]


def test_records_become_gelf_messages(app_logger, recording_channel, config, fixed_clock) -> None:
    transport = GelfTransport(config, channel=recording_channel, clock=fixed_clock)
    app_logger.addHandler(GelfLoggingHandler(transport))

    app_logger.warning("disk at %d%%", 91, extra={"mount": "/var"})

    [payload] = _payloads(recording_channel)
    assert payload["level"] == 4
    assert payload["short_message"] == "disk at 91%"
    assert payload["host"] == "api01"
    assert payload["_service"] == "api"
    assert payload["full_message"] == {"logger": "tests.gelf.app", "mount": "/var"}


def test_exceptions_are_rendered_as_traceback(app_logger, recording_channel, config) -> None:
    transport = GelfTransport(config, channel=recording_channel)
    app_logger.addHandler(GelfLoggingHandler(transport))

    try:
        raise ValueError("bad input")
    except ValueError:
        app_logger.exception("request failed")

    [payload] = _payloads(recording_channel)
    assert payload["level"] == 3
    assert payload["short_message"] == "request failed"
    assert "Traceback" in payload["full_message"]["error"]
    assert "ValueError: bad input" in payload["full_message"]["error"]


def test_threshold_follows_transport_level(app_logger, recording_channel, config) -> None:
    transport = GelfTransport(config.replace(level="warn"), channel=recording_channel)
    handler = GelfLoggingHandler(transport)
    app_logger.addHandler(handler)

    app_logger.info("ignored")
    app_logger.error("kept")

    assert handler.level == logging.WARNING
    assert [payload["short_message"] for payload in _payloads(recording_channel)] == ["kept"]


def test_explicit_level_overrides_transport_level(recording_channel, config) -> None:
    transport = GelfTransport(config.replace(level="error"), channel=recording_channel)

    handler = GelfLoggingHandler(transport, level=logging.DEBUG)

    assert handler.level == logging.DEBUG


@pytest.mark.parametrize(
    ("levelno", "severity"),
    [
        (logging.CRITICAL, 3),
        (logging.ERROR, 3),
        (logging.WARNING, 4),
        (logging.INFO, 5),
        (15, 6),
        (logging.DEBUG, 7),
        (5, 7),
    ],
)
def test_python_levels_map_onto_severities(app_logger, recording_channel, config, levelno: int, severity: int) -> None:
    transport = GelfTransport(config, channel=recording_channel)
    app_logger.addHandler(GelfLoggingHandler(transport, level=logging.NOTSET))

    app_logger.log(levelno, "event")

    assert _payloads(recording_channel)[0]["level"] == severity


def test_package_diagnostics_are_not_forwarded(recording_channel, config) -> None:
    transport = GelfTransport(config, channel=recording_channel)
    handler = GelfLoggingHandler(transport, level=logging.NOTSET)

    handler.handle(logging.makeLogRecord({"name": "lib_log_gelf.delivery", "msg": "Error connecting", "levelno": logging.ERROR}))
    handler.handle(logging.makeLogRecord({"name": "lib_log_gelf_other", "msg": "not ours", "levelno": logging.ERROR}))

    assert [payload["short_message"] for payload in _payloads(recording_channel)] == ["not ours"]


def test_close_closes_the_transport(recording_channel, config) -> None:
    handler = GelfLoggingHandler(GelfTransport(config, channel=recording_channel))

    handler.close()

    assert recording_channel.closed is True


def test_close_can_leave_the_transport_open(recording_channel, config) -> None:
    handler = GelfLoggingHandler(GelfTransport(config, channel=recording_channel), close_transport=False)

    handler.close()

    assert recording_channel.closed is False


def test_encoding_failures_go_to_handle_error(monkeypatch: pytest.MonkeyPatch, recording_channel, config) -> None:
    handler = GelfLoggingHandler(GelfTransport(config, channel=recording_channel), level=logging.NOTSET)
    handled: list[logging.LogRecord] = []
    monkeypatch.setattr(handler, "handleError", handled.append)
    cyclic: dict = {}
    cyclic["self"] = cyclic

    record = logging.makeLogRecord({"name": "app", "msg": "loop", "payload": cyclic})
    handler.handle(record)

    assert handled == [record]
    assert recording_channel.sent == []
