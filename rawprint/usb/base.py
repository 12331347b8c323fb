#!/usr/bin/env python3
"""
Abstract base classes for USB enumeration.
Defines the interface that platform-specific implementations must follow.
"""

from abc import ABC, abstractmethod
from typing import List

from ..errors import EnumerationUnsupportedError
from ..models import DeviceListing

# Listing name used for the single topology entry.
USB_LISTING_NAME = 'USB Devices'


class UsbEnumerator(ABC):
    """Abstract base class for platform-specific USB enumerators."""

    @abstractmethod
    def list_devices(self) -> List[DeviceListing]:
        """
        Dump the USB topology visible to the host.

        Returns:
            One DeviceListing whose info carries the raw topology text

        Raises:
            EnumerationUnsupportedError: If this platform cannot enumerate
            EnumerationFailedError: If the topology query fails
        """
        pass


class UnsupportedUsbEnumerator(UsbEnumerator):
    """Stands in on platforms without an enumeration method."""

    def __init__(self, platform: str, reason: str = ''):
        self.platform = platform
        self.reason = reason

    def list_devices(self) -> List[DeviceListing]:
        raise EnumerationUnsupportedError(self.platform, self.reason)


__all__ = ['USB_LISTING_NAME', 'UsbEnumerator', 'UnsupportedUsbEnumerator']
