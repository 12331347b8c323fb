#!/usr/bin/env python3
"""
Linux USB enumeration using PyUSB.
"""

import json
import logging
from typing import List, Optional

try:
    import usb.core
    import usb.util
    PYUSB_AVAILABLE = True
except ImportError:
    PYUSB_AVAILABLE = False

from ..errors import EnumerationFailedError, EnumerationUnsupportedError
from ..models import DeviceListing
from .base import USB_LISTING_NAME, UsbEnumerator

logger = logging.getLogger(__name__)

PRINTER_CLASS = 7  # USB Printer class


def is_printer_class(device) -> bool:
    """Check if a device, or any of its interfaces, is printer class."""
    if device.bDeviceClass == PRINTER_CLASS:
        return True

    for cfg in device:
        intf = usb.util.find_descriptor(cfg, bInterfaceClass=PRINTER_CLASS)
        if intf is not None:
            return True

    return False


def _read_string(device, index) -> Optional[str]:
    # String descriptors need device access that udev usually withholds.
    if not index:
        return None
    try:
        return usb.util.get_string(device, index)
    except (usb.core.USBError, ValueError, NotImplementedError) as e:
        logger.debug('Cannot read string descriptor %s: %s', index, e)
        return None


def describe_device(device) -> dict:
    """Flatten one PyUSB device into JSON-ready fields."""
    try:
        printer = is_printer_class(device)
    except usb.core.USBError as e:
        logger.debug('Cannot read configuration of %s:%s: %s', device.bus, device.address, e)
        printer = False

    return {
        'bus': device.bus,
        'address': device.address,
        'port_numbers': list(getattr(device, 'port_numbers', None) or []),
        'vendor_id': f'0x{device.idVendor:04x}',
        'product_id': f'0x{device.idProduct:04x}',
        'device_class': device.bDeviceClass,
        'manufacturer': _read_string(device, device.iManufacturer),
        'product': _read_string(device, device.iProduct),
        'serial_number': _read_string(device, device.iSerialNumber),
        'is_printer': printer,
    }


class LinuxUsbEnumerator(UsbEnumerator):
    """Linux USB enumerator using PyUSB."""

    def __init__(self):
        """Initialize the Linux USB enumerator."""
        if not PYUSB_AVAILABLE:
            raise ImportError(
                "PyUSB not available. Install with: pip install pyusb"
            )

    def list_devices(self) -> List[DeviceListing]:
        """
        Walk the USB bus and dump every device as JSON.

        Returns:
            One DeviceListing whose info is the JSON topology dump
        """
        try:
            devices = list(usb.core.find(find_all=True))
        except usb.core.NoBackendError as e:
            raise EnumerationUnsupportedError('linux', 'no libusb backend found') from e
        except usb.core.USBError as e:
            raise EnumerationFailedError(f'USB discovery failed: {e}') from e

        topology = {'devices': [describe_device(device) for device in devices]}
        logger.debug('Found %d USB devices', len(devices))
        return [DeviceListing(name=USB_LISTING_NAME, info=json.dumps(topology, indent=2))]


__all__ = ['LinuxUsbEnumerator', 'describe_device', 'is_printer_class', 'PYUSB_AVAILABLE']
