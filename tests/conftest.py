"""Top-level pytest configuration for lvlog."""

from __future__ import annotations

import os
import shutil
import socket
import tempfile
import threading

import pytest


class RecordingWriter:
    """Destination that records every write it receives, in order."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self.writes: list[bytes] = []

    def write(self, data: bytes) -> int:
        with self._lock:
            self.writes.append(data)
        return len(data)

    @property
    def lines(self) -> list[str]:
        with self._lock:
            return [w.decode("utf-8") for w in self.writes]

    @property
    def text(self) -> str:
        return "".join(self.lines)


class FailingWriter(RecordingWriter):
    """Destination whose first ``failures`` writes raise OSError."""

    def __init__(self, failures: int = 1) -> None:
        super().__init__()
        self.failures = failures

    def write(self, data: bytes) -> int:
        if self.failures > 0:
            self.failures -= 1
            raise OSError("disk full")
        return super().write(data)


class GatedWriter(RecordingWriter):
    """Destination whose writes block until ``gate`` is set."""

    def __init__(self) -> None:
        super().__init__()
        self.gate = threading.Event()
        self.entered = threading.Event()

    def write(self, data: bytes) -> int:
        self.entered.set()
        self.gate.wait()
        return super().write(data)


@pytest.fixture
def writer() -> RecordingWriter:
    return RecordingWriter()


@pytest.fixture
def failing_writer() -> FailingWriter:
    return FailingWriter()


@pytest.fixture
def gated_writer():
    w = GatedWriter()
    yield w
    # Never leave a worker parked on the gate.
    w.gate.set()


@pytest.fixture(autouse=True)
def clear_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for key in list(os.environ):
        if key.startswith("LVLOG_"):
            monkeypatch.delenv(key, raising=False)


@pytest.fixture
def socket_dir():
    if not hasattr(socket, "AF_UNIX"):
        pytest.skip("needs unix domain sockets")
    # Unix socket paths are length limited; keep them short.
    path = tempfile.mkdtemp(prefix="lvlog")
    yield path
    shutil.rmtree(path, ignore_errors=True)


@pytest.fixture
def syslog_server(socket_dir):
    """A datagram socket standing in for /dev/log."""
    address = os.path.join(socket_dir, "log")
    server = socket.socket(socket.AF_UNIX, socket.SOCK_DGRAM)
    server.bind(address)
    server.settimeout(5)
    yield address, server
    server.close()


def pytest_configure(config):
    """Configure pytest to recognize our custom markers."""
    config.addinivalue_line(
        "markers",
        "integration: mark test as integration test (deselect with '-m "
        "not integration')",
    )


def pytest_addoption(parser):
    """Add command line options for pytest."""
    parser.addoption(
        "--run-integration",
        action="store_true",
        default=False,
        help="run integration tests that touch the host system log",
    )


def pytest_collection_modifyitems(config, items):
    """Skip integration tests by default."""
    if not config.getoption("--run-integration"):
        skip_integration = pytest.mark.skip(
            reason="need --run-integration option to run"
        )
        for item in items:
            if "integration" in item.keywords:
                item.add_marker(skip_integration)
