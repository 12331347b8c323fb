#!/usr/bin/env python3
"""
Device enumeration: normalizes spooler and USB backends into DeviceListing.
"""

import logging
from typing import List, Optional

from .config import Settings
from .errors import EnumerationEmptyError
from .models import DeviceListing
from .spooler import SpoolerBackend, SpoolerPrinter, get_spooler_backend
from .usb import UsbEnumerator, get_usb_enumerator

logger = logging.getLogger(__name__)

SYSTEM_PRINTER_INFO = 'System printer'


class DeviceEnumerator:
    """Lists the printing endpoints a request can target."""

    def __init__(self,
                 spooler: Optional[SpoolerBackend] = None,
                 usb: Optional[UsbEnumerator] = None,
                 settings: Optional[Settings] = None):
        self.settings = settings or Settings()
        self.spooler = spooler or get_spooler_backend()
        self.usb = usb or get_usb_enumerator(self.settings)

    def list_system_printers(self) -> List[DeviceListing]:
        """
        List spooler queues, one entry per queue.

        Raises:
            EnumerationEmptyError: If the spooler knows no printers
        """
        listings = [
            DeviceListing(name=printer.name, info=SYSTEM_PRINTER_INFO)
            for printer in self._spooler_printers()
        ]
        logger.debug('Spooler %s reports %d printers', self.spooler.name, len(listings))
        return listings

    def list_cups_printers(self) -> List[SpoolerPrinter]:
        """List spooler queues together with their device URIs."""
        return self._spooler_printers()

    def list_usb_devices(self) -> List[DeviceListing]:
        return self.usb.list_devices()

    def _spooler_printers(self) -> List[SpoolerPrinter]:
        printers = self.spooler.list_printers()
        if not printers:
            raise EnumerationEmptyError('No system printers found')
        return printers


__all__ = ['DeviceEnumerator', 'SYSTEM_PRINTER_INFO']
