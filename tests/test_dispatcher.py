"""
Tests for the Dispatcher and DeviceEnumerator.
"""
import socket
import time

import pytest

from rawprint.config import Settings
from rawprint.dispatcher import Dispatcher
from rawprint.enumerator import DeviceEnumerator
from rawprint.errors import (
    AddressParseError,
    ConnectError,
    DispatchError,
    EnumerationEmptyError,
    EnumerationUnsupportedError,
    InvalidTargetError,
    SubmissionError,
    TargetNotFoundError,
    TransportTimeoutError,
    UnclassifiedError,
)
from rawprint.models import DeviceListing, PrintRequest, PrintResponse, TransportKind
from rawprint.models import TestRequest as CheckRequest
from rawprint.transport import device, network
from rawprint.usb.base import UnsupportedUsbEnumerator, UsbEnumerator

from .conftest import FakeSpooler


class FakeUsb(UsbEnumerator):
    def list_devices(self):
        return [DeviceListing("USB Devices", '{"devices": []}')]


@pytest.fixture
def dispatcher(fake_spooler):
    return Dispatcher(spooler=fake_spooler, usb=FakeUsb())


class TestNetworkDispatch:
    """print / test_connection over TCP."""

    def test_escpos_init_reaches_stub(self, dispatcher, stub_printer):
        request = PrintRequest(b"\x1b@", TransportKind.NETWORK, "127.0.0.1", stub_printer.port)
        response = dispatcher.print(request)

        assert response == PrintResponse(True, f"Successfully printed to 127.0.0.1:{stub_printer.port}")
        assert stub_printer.wait() == b"\x1b@"

    def test_text_payload_is_encoded(self, dispatcher, stub_printer):
        request = PrintRequest("ESC@", TransportKind.NETWORK, "127.0.0.1", stub_printer.port)
        dispatcher.print(request)
        assert stub_printer.wait() == b"ESC@"

    def test_connection_test_sends_no_bytes(self, dispatcher, stub_printer):
        response = dispatcher.test_connection(
            CheckRequest(TransportKind.NETWORK, "127.0.0.1", stub_printer.port))
        assert response.success
        assert response.message == f"Successfully connected to printer at 127.0.0.1:{stub_printer.port}"
        assert stub_printer.wait() == b""

    def test_closed_port_fails_fast(self, dispatcher, closed_port):
        started = time.monotonic()
        with pytest.raises(DispatchError) as exc_info:
            dispatcher.print(PrintRequest(b"\x1b@", TransportKind.NETWORK, "127.0.0.1", closed_port))
        assert time.monotonic() - started < 5.5
        assert isinstance(exc_info.value.error, ConnectError)
        assert isinstance(exc_info.value.__cause__, ConnectError)
        assert f"127.0.0.1:{closed_port}" in str(exc_info.value)

    def test_unreachable_reports_address(self, dispatcher, monkeypatch):
        def never_answers(address, timeout=None):
            raise socket.timeout("timed out")

        monkeypatch.setattr(network.socket, "create_connection", never_answers)
        with pytest.raises(DispatchError) as exc_info:
            dispatcher.test_connection(CheckRequest(TransportKind.NETWORK, "192.0.2.10", 9100))
        assert isinstance(exc_info.value.error, TransportTimeoutError)
        assert "192.0.2.10:9100" in str(exc_info.value)

    def test_invalid_address_fails_before_io(self, dispatcher, monkeypatch):
        def forbidden(*args, **kwargs):
            raise AssertionError("no connection expected")

        monkeypatch.setattr(network.socket, "create_connection", forbidden)
        with pytest.raises(DispatchError) as exc_info:
            dispatcher.print(PrintRequest(b"x", TransportKind.NETWORK, "not an address"))
        assert isinstance(exc_info.value.error, AddressParseError)

    def test_host_name_is_never_resolved(self, dispatcher, monkeypatch):
        def slow_lookup(*args, **kwargs):
            time.sleep(7)
            raise AssertionError("no DNS lookup expected")

        monkeypatch.setattr(network.socket, "getaddrinfo", slow_lookup)
        started = time.monotonic()
        with pytest.raises(DispatchError) as exc_info:
            dispatcher.test_connection(CheckRequest(TransportKind.NETWORK, "printer.example", 9100))
        assert time.monotonic() - started < 1
        assert isinstance(exc_info.value.error, AddressParseError)

    def test_default_port_from_settings(self, fake_spooler, monkeypatch):
        seen = []

        def record(address, timeout=None):
            seen.append((address, timeout))
            raise ConnectionRefusedError(111, "Connection refused")

        monkeypatch.setattr(network.socket, "create_connection", record)
        dispatcher = Dispatcher(Settings(default_port=9101, connect_timeout=2.0), spooler=fake_spooler)
        with pytest.raises(DispatchError):
            dispatcher.test_connection(CheckRequest(TransportKind.NETWORK, "10.0.0.5"))
        assert seen == [(("10.0.0.5", 9101), 2.0)]


class TestDeviceDispatch:
    """print / test_connection on device nodes."""

    def test_prints_to_device(self, dispatcher, device_file):
        response = dispatcher.print(PrintRequest(b"\x1b@", TransportKind.DEVICE, str(device_file)))
        assert response == PrintResponse(True, f"Successfully printed to {device_file}")
        assert device_file.read_bytes() == b"\x1b@"

    def test_test_mode_opens_only(self, dispatcher, device_file):
        response = dispatcher.test_connection(CheckRequest(TransportKind.DEVICE, str(device_file)))
        assert response.message == f"Device {device_file} is available"
        assert device_file.read_bytes() == b""

    def test_empty_path_is_invalid_target(self, dispatcher, monkeypatch):
        def forbidden(*args, **kwargs):
            raise AssertionError("os.open must not be called")

        monkeypatch.setattr(device.os, "open", forbidden)
        with pytest.raises(DispatchError) as exc_info:
            dispatcher.print(PrintRequest(b"\x1b@", TransportKind.DEVICE, ""))
        assert isinstance(exc_info.value.error, InvalidTargetError)


class TestQueueDispatch:
    """print / test_connection through the spooler."""

    def test_prints_to_queue(self, dispatcher, fake_spooler):
        response = dispatcher.print(PrintRequest(b"\x1b@", TransportKind.QUEUE, "Receipt"))
        assert response == PrintResponse(True, "Printed to Receipt")
        assert fake_spooler.submissions == [("Receipt", b"\x1b@", "rawprint")]

    def test_missing_queue_never_submits(self, dispatcher, fake_spooler):
        with pytest.raises(DispatchError) as exc_info:
            dispatcher.print(PrintRequest(b"\x1b@", TransportKind.QUEUE, "Nope"))
        assert isinstance(exc_info.value.error, TargetNotFoundError)
        assert fake_spooler.submissions == []

    def test_queue_test(self, dispatcher, fake_spooler):
        response = dispatcher.test_connection(CheckRequest(TransportKind.QUEUE, "Kitchen"))
        assert response == PrintResponse(True, "Printer Kitchen is available")
        assert fake_spooler.submissions == []

    def test_submission_failure(self, failing_spooler):
        dispatcher = Dispatcher(spooler=failing_spooler, usb=FakeUsb())
        with pytest.raises(DispatchError) as exc_info:
            dispatcher.print(PrintRequest(b"x", TransportKind.QUEUE, "Receipt"))
        assert isinstance(exc_info.value.error, SubmissionError)

    def test_unexpected_os_error_is_unclassified(self):
        class BrokenSpooler(FakeSpooler):
            def list_printers(self):
                raise OSError(5, "Input/output error")

        dispatcher = Dispatcher(spooler=BrokenSpooler(), usb=FakeUsb())
        with pytest.raises(DispatchError) as exc_info:
            dispatcher.test_connection(CheckRequest(TransportKind.QUEUE, "Receipt"))
        assert isinstance(exc_info.value.error, UnclassifiedError)
        assert "Input/output error" in exc_info.value.error.cause

    def test_rejects_wrong_request_type(self, dispatcher):
        with pytest.raises(TypeError):
            dispatcher.print(CheckRequest(TransportKind.QUEUE, "Receipt"))


class TestEnumeration:
    """Listing through the dispatcher and DeviceEnumerator."""

    def test_system_printers(self, dispatcher):
        assert dispatcher.list_system_printers() == [
            DeviceListing("Receipt", "System printer"),
            DeviceListing("Kitchen", "System printer"),
        ]

    def test_duplicates_are_kept(self):
        enumerator = DeviceEnumerator(spooler=FakeSpooler(["A", "A"]), usb=FakeUsb())
        assert [listing.name for listing in enumerator.list_system_printers()] == ["A", "A"]

    def test_zero_printers_is_failure(self):
        dispatcher = Dispatcher(spooler=FakeSpooler([]), usb=FakeUsb())
        with pytest.raises(DispatchError) as exc_info:
            dispatcher.list_system_printers()
        assert isinstance(exc_info.value.error, EnumerationEmptyError)
        assert str(exc_info.value) == "No system printers found"

    def test_cups_printers_carry_uri(self, dispatcher):
        printers = dispatcher.list_cups_printers()
        assert printers[0].to_dict() == {"name": "Receipt", "uri": "usb://Fake/Receipt", "info": ""}

    def test_usb_devices(self, dispatcher):
        assert dispatcher.list_usb_devices() == [DeviceListing("USB Devices", '{"devices": []}')]

    def test_usb_unsupported(self, fake_spooler):
        dispatcher = Dispatcher(spooler=fake_spooler, usb=UnsupportedUsbEnumerator("windows"))
        with pytest.raises(DispatchError) as exc_info:
            dispatcher.list_usb_devices()
        assert isinstance(exc_info.value.error, EnumerationUnsupportedError)
