"""
Shared fixtures: a loopback stub printer and an in-memory spooler.
"""
import socket
import threading

import pytest

from rawprint.errors import SubmissionError
from rawprint.spooler.base import SpoolerBackend, SpoolerPrinter


class StubPrinter:
    """Accepts one TCP connection on 127.0.0.1 and records every byte."""

    def __init__(self):
        self.sock = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
        self.sock.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
        self.sock.bind(("127.0.0.1", 0))
        self.sock.listen(1)
        self.sock.settimeout(5)
        self.port = self.sock.getsockname()[1]
        self.received = bytearray()
        self.connections = 0
        self.done = threading.Event()
        self.thread = threading.Thread(target=self._serve, daemon=True)
        self.thread.start()

    def _serve(self):
        try:
            conn, _ = self.sock.accept()
        except OSError:
            self.done.set()
            return
        self.connections += 1
        with conn:
            conn.settimeout(5)
            while True:
                try:
                    data = conn.recv(4096)
                except OSError:
                    break
                if not data:
                    break
                self.received.extend(data)
        self.done.set()

    def wait(self, timeout=5):
        """Block until the client has disconnected."""
        assert self.done.wait(timeout), "client never closed the connection"
        return bytes(self.received)

    def close(self):
        self.sock.close()
        self.thread.join(timeout=5)


class FakeSpooler(SpoolerBackend):
    """Spooler backend that keeps queues and submitted jobs in memory."""

    def __init__(self, names=(), fail_with=None):
        self.printers = [SpoolerPrinter(name=n, uri=f"usb://Fake/{n}") for n in names]
        self.fail_with = fail_with
        self.submissions = []
        self.list_calls = 0

    @property
    def name(self):
        return "fake"

    def list_printers(self):
        self.list_calls += 1
        return list(self.printers)

    def submit_raw(self, printer_name, payload, job_name):
        if self.fail_with is not None:
            raise self.fail_with
        self.submissions.append((printer_name, payload, job_name))
        return str(len(self.submissions))


@pytest.fixture
def stub_printer():
    """A listening stub printer; yields the StubPrinter."""
    printer = StubPrinter()
    yield printer
    printer.close()


@pytest.fixture
def closed_port():
    """A loopback port with nothing listening on it."""
    sock = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
    sock.bind(("127.0.0.1", 0))
    port = sock.getsockname()[1]
    sock.close()
    return port


@pytest.fixture
def fake_spooler():
    return FakeSpooler(["Receipt", "Kitchen"])


@pytest.fixture
def failing_spooler():
    return FakeSpooler(["Receipt"], fail_with=SubmissionError("Receipt", "printer is stopped"))


@pytest.fixture
def device_file(tmp_path):
    """An existing file standing in for a device node."""
    path = tmp_path / "lp0"
    path.write_bytes(b"")
    return path
