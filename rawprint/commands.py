#!/usr/bin/env python3
"""
Boundary operations invoked by a host shell or UI.

Each command returns JSON-ready data on success and raises CommandError with
a single display string on failure. Commands are also reachable by name
through COMMANDS / invoke() for RPC-style callers.
"""

import logging
from typing import Callable, Dict, List, Optional

from .config import Settings
from .dispatcher import Dispatcher
from .errors import CommandError, DispatchError
from .models import PrintRequest, TestRequest, TransportKind, as_payload
from .responses import describe_error

logger = logging.getLogger(__name__)


def get_dispatcher() -> Dispatcher:
    """Build a dispatcher for one command, configured from the environment."""
    try:
        settings = Settings.from_env()
    except ValueError as e:
        raise CommandError(str(e)) from e
    return Dispatcher(settings)


def _payload(data) -> bytes:
    try:
        return as_payload(data)
    except TypeError as e:
        raise CommandError(f'Invalid print data: {e}') from e


def _run(operation: Callable[[Dispatcher], object]):
    dispatcher = get_dispatcher()
    try:
        return operation(dispatcher)
    except DispatchError as e:
        raise CommandError(describe_error(e).text) from e


def print_to_network(data, printer_ip: str, printer_port: Optional[int] = None) -> dict:
    request = PrintRequest(_payload(data), TransportKind.NETWORK, printer_ip, printer_port)
    return _run(lambda d: d.print(request)).to_dict()


def test_printer_connection(printer_ip: str, printer_port: Optional[int] = None) -> dict:
    request = TestRequest(TransportKind.NETWORK, printer_ip, printer_port)
    return _run(lambda d: d.test_connection(request)).to_dict()


def list_system_printers() -> List[dict]:
    return [listing.to_dict() for listing in _run(lambda d: d.list_system_printers())]


def list_cups_printers() -> List[dict]:
    return [printer.to_dict() for printer in _run(lambda d: d.list_cups_printers())]


def print_to_system_printer(printer_name: str, data) -> dict:
    request = PrintRequest(_payload(data), TransportKind.QUEUE, printer_name)
    return _run(lambda d: d.print(request)).to_dict()


def test_system_printer(printer_name: str) -> dict:
    request = TestRequest(TransportKind.QUEUE, printer_name)
    return _run(lambda d: d.test_connection(request)).to_dict()


def list_usb_devices() -> List[dict]:
    return [listing.to_dict() for listing in _run(lambda d: d.list_usb_devices())]


def print_to_usb(device_path: str, data) -> dict:
    request = PrintRequest(_payload(data), TransportKind.DEVICE, device_path)
    return _run(lambda d: d.print(request)).to_dict()


def test_usb_connection(device_path: str) -> dict:
    request = TestRequest(TransportKind.DEVICE, device_path)
    return _run(lambda d: d.test_connection(request)).to_dict()


COMMANDS: Dict[str, Callable] = {
    'print_to_network': print_to_network,
    'test_printer_connection': test_printer_connection,
    'list_system_printers': list_system_printers,
    'list_cups_printers': list_cups_printers,
    'print_to_system_printer': print_to_system_printer,
    'test_system_printer': test_system_printer,
    'list_usb_devices': list_usb_devices,
    'print_to_usb': print_to_usb,
    'test_usb_connection': test_usb_connection,
}


def invoke(name: str, **kwargs):
    """
    Call a boundary operation by name.

    Raises:
        CommandError: If the name is unknown, the arguments do not fit, or the
                      operation fails
    """
    command = COMMANDS.get(name)
    if command is None:
        raise CommandError(f'Unknown command: {name}')
    logger.debug('Invoking %s', name)
    try:
        return command(**kwargs)
    except TypeError as e:
        raise CommandError(f'Invalid arguments for {name}: {e}') from e


__all__ = ['COMMANDS', 'invoke', 'get_dispatcher'] + list(COMMANDS)
