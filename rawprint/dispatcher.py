#!/usr/bin/env python3
"""
Print dispatcher: the single entry point that turns a request into one
delivery attempt over the matching transport.
"""

import logging
from typing import List, Optional, Union

from .config import Settings
from .enumerator import DeviceEnumerator
from .errors import DispatchError, EnumerationError, TransportError, UnclassifiedError
from .models import (
    DeviceListing,
    PrintRequest,
    PrintResponse,
    TestRequest,
    TransportKind,
    resolve_target,
)
from .spooler import SpoolerBackend, SpoolerPrinter
from .transport import get_transport
from .usb import UsbEnumerator

logger = logging.getLogger(__name__)

PRINT_MESSAGES = {
    TransportKind.NETWORK: 'Successfully printed to {target}',
    TransportKind.DEVICE: 'Successfully printed to {target}',
    TransportKind.QUEUE: 'Printed to {target}',
}

TEST_MESSAGES = {
    TransportKind.NETWORK: 'Successfully connected to printer at {target}',
    TransportKind.DEVICE: 'Device {target} is available',
    TransportKind.QUEUE: 'Printer {target} is available',
}


class Dispatcher:
    """Facade used by the command layer for printing, testing and listing."""

    def __init__(self,
                 settings: Optional[Settings] = None,
                 spooler: Optional[SpoolerBackend] = None,
                 usb: Optional[UsbEnumerator] = None,
                 enumerator: Optional[DeviceEnumerator] = None):
        self.settings = settings or Settings()
        self.enumerator = enumerator or DeviceEnumerator(spooler, usb, self.settings)

    def print(self, request: PrintRequest) -> PrintResponse:
        """
        Deliver the request payload, exactly once.

        Raises:
            DispatchError: Wrapping whichever step failed
        """
        if not isinstance(request, PrintRequest):
            raise TypeError(f'expected PrintRequest, got {type(request).__name__}')
        return self._run(request, request.payload)

    def test_connection(self, request: TestRequest) -> PrintResponse:
        """
        Reach the target without transmitting any payload.

        Raises:
            DispatchError: Wrapping whichever step failed
        """
        if not isinstance(request, (TestRequest, PrintRequest)):
            raise TypeError(f'expected TestRequest, got {type(request).__name__}')
        return self._run(request, None)

    def list_system_printers(self) -> List[DeviceListing]:
        return self._enumerate(self.enumerator.list_system_printers)

    def list_cups_printers(self) -> List[SpoolerPrinter]:
        return self._enumerate(self.enumerator.list_cups_printers)

    def list_usb_devices(self) -> List[DeviceListing]:
        return self._enumerate(self.enumerator.list_usb_devices)

    def _run(self, request: Union[PrintRequest, TestRequest], payload: Optional[bytes]) -> PrintResponse:
        mode = 'test' if payload is None else 'print'
        try:
            target = resolve_target(request, self.settings.default_port)
            transport = get_transport(target.kind, self.settings, self.enumerator.spooler)
            if payload is None:
                transport.probe(target)
            else:
                transport.deliver(target, payload)
        except (TransportError, EnumerationError) as e:
            logger.warning('%s via %s failed: %s', mode, request.kind.value, e)
            raise DispatchError(e) from e
        except OSError as e:
            logger.warning('%s via %s failed unexpectedly: %s', mode, request.kind.value, e)
            raise DispatchError(UnclassifiedError(e)) from e

        messages = TEST_MESSAGES if payload is None else PRINT_MESSAGES
        message = messages[target.kind].format(target=target.display)
        if payload is None:
            logger.info('%s', message)
        else:
            logger.info('%s (%d bytes)', message, len(payload))
        return PrintResponse(success=True, message=message)

    def _enumerate(self, operation):
        try:
            return operation()
        except EnumerationError as e:
            logger.warning('Enumeration failed: %s', e)
            raise DispatchError(e) from e
        except OSError as e:
            logger.warning('Enumeration failed unexpectedly: %s', e)
            raise DispatchError(UnclassifiedError(e)) from e


__all__ = ['Dispatcher', 'PRINT_MESSAGES', 'TEST_MESSAGES']
