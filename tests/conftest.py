from __future__ import annotations

import socket
import threading
from typing import Iterator

import pytest

from lib_log_gelf.domain.errors import DeliveryError
from lib_log_gelf.domain.settings import TransportConfig


class FixedClock:
    def __init__(self, value: float = 1_700_000_000.75) -> None:
        self.value = value

    def now(self) -> float:
        return self.value


class RecordingChannel:
    def __init__(self) -> None:
        self.sent: list[str] = []
        self.closed = False

    def send(self, serialized: str) -> None:
        self.sent.append(serialized)

    def close(self) -> None:
        self.closed = True


class RecordingObserver:
    def __init__(self) -> None:
        self.errors: list[DeliveryError] = []

    def report(self, error: DeliveryError) -> None:
        self.errors.append(error)


class CollectorServer:
    """Loopback TCP collector recording every byte of one connection."""

    def __init__(self) -> None:
        self._sock = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
        self._sock.bind(("127.0.0.1", 0))
        self._sock.listen(1)
        self.port = self._sock.getsockname()[1]
        self.received = bytearray()
        self.finished = threading.Event()
        self._thread = threading.Thread(target=self._run, daemon=True)

    def start(self) -> None:
        self._thread.start()

    def close(self) -> None:
        try:
            self._sock.close()
        finally:
            self._thread.join(timeout=1)

    def frames(self, timeout: float = 2.0) -> list[bytes]:
        self.finished.wait(timeout)
        return bytes(self.received).split(b"\x00")[:-1]

    def _run(self) -> None:
        try:
            conn, _ = self._sock.accept()
        except OSError:
            return
        with conn:
            while True:
                chunk = conn.recv(4096)
                if not chunk:
                    break
                self.received.extend(chunk)
        self.finished.set()


@pytest.fixture
def fixed_clock() -> FixedClock:
    return FixedClock()


@pytest.fixture
def recording_channel() -> RecordingChannel:
    return RecordingChannel()


@pytest.fixture
def recording_observer() -> RecordingObserver:
    return RecordingObserver()


@pytest.fixture
def config() -> TransportConfig:
    return TransportConfig(hostname="api01", service="api", environment="prod")


@pytest.fixture
def collector() -> Iterator[CollectorServer]:
    server = CollectorServer()
    server.start()
    try:
        yield server
    finally:
        server.close()


@pytest.fixture
def closed_port() -> int:
    """Return a loopback port with nothing listening on it."""
    sock = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
    sock.bind(("127.0.0.1", 0))
    port = sock.getsockname()[1]
    sock.close()
    return port


@pytest.fixture(autouse=True)
def _clear_gelf_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in (
        "GELF_HOSTNAME",
        "GELF_HOST",
        "GELF_PORT",
        "GELF_PROTOCOL",
        "GELF_SERVICE",
        "GELF_ENVIRONMENT",
        "GELF_RELEASE",
        "GELF_LEVEL",
        "GELF_SILENT",
        "GELF_VERIFY_CERTIFICATES",
        "GELF_TIMEOUT",
        "GELF_MAX_WORKERS",
        "LIB_LOG_GELF_USE_DOTENV",
    ):
        monkeypatch.delenv(name, raising=False)
