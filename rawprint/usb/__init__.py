#!/usr/bin/env python3
"""
USB enumerator dispatcher for rawprint.
Automatically selects the appropriate platform-specific implementation.
"""

import logging
from typing import Optional

from ..config import Settings
from ..platform_info import check_usb_available, get_platform
from .base import USB_LISTING_NAME, UnsupportedUsbEnumerator, UsbEnumerator
from .darwin import DarwinUsbEnumerator

logger = logging.getLogger(__name__)


def get_usb_enumerator(settings: Optional[Settings] = None) -> UsbEnumerator:
    """
    Returns the USB enumerator for the current platform.

    Returns:
        UsbEnumerator: Platform-specific enumerator. Platforms without one
                       get an enumerator that reports them as unsupported.
    """
    settings = settings or Settings()
    system = get_platform()

    if system == 'darwin':
        return DarwinUsbEnumerator(settings.usb_query_timeout)
    if system == 'linux':
        if not check_usb_available():
            logger.warning('PyUSB not installed, USB enumeration unavailable')
            return UnsupportedUsbEnumerator(system, 'PyUSB not installed')
        from .linux import LinuxUsbEnumerator
        return LinuxUsbEnumerator()

    return UnsupportedUsbEnumerator(system)


__all__ = ['get_usb_enumerator', 'UsbEnumerator', 'USB_LISTING_NAME']
