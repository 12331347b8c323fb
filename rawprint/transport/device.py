#!/usr/bin/env python3
"""
Device-node transport: raw writes to /dev/usb/lp0, /dev/cu.usbmodem*,
/dev/ttyUSB0, COM3 and friends.

There is no write deadline here; a wedged device blocks the caller until the
kernel gives up.
"""

import logging
import os

from ..errors import FlushError, InvalidTargetError, OpenError, WriteError
from ..models import TransportKind, TransportTarget
from .base import Connection, StreamTransport

logger = logging.getLogger(__name__)

# Write only: never create a regular file in place of a missing device, and
# never make a serial port our controlling terminal.
OPEN_FLAGS = os.O_WRONLY | getattr(os, 'O_NOCTTY', 0) | getattr(os, 'O_BINARY', 0)


class DeviceConnection(Connection):
    """Write-only handle on a device node."""

    def __init__(self, path: str):
        """
        Open the device for writing.

        Args:
            path: Device node path

        Raises:
            InvalidTargetError: If the path is empty
            OpenError: If the node cannot be opened for writing
        """
        if not path:
            raise InvalidTargetError('', 'empty device path')

        self.path = path
        self.stream = None
        logger.debug('Opening device %s', path)
        try:
            fd = os.open(path, OPEN_FLAGS)
        except OSError as e:
            raise OpenError(path, e) from e

        try:
            self.stream = os.fdopen(fd, 'wb')
        except OSError as e:
            os.close(fd)
            raise OpenError(path, e) from e

    def write(self, data: bytes) -> int:
        try:
            self.stream.write(data)
        except OSError as e:
            raise WriteError(self.path, e) from e
        return len(data)

    def flush(self) -> None:
        try:
            self.stream.flush()
        except OSError as e:
            raise FlushError(self.path, e) from e

    def close(self) -> None:
        if self.stream is None:
            return
        try:
            self.stream.close()
        except OSError as e:
            logger.debug('Discarding unsent bytes for %s: %s', self.path, e)
        self.stream = None


class DeviceTransport(StreamTransport):
    """Delivers payloads by writing straight to a device node."""

    kind = TransportKind.DEVICE

    def open(self, target: TransportTarget) -> DeviceConnection:
        return DeviceConnection(target.location)


__all__ = ['DeviceConnection', 'DeviceTransport', 'OPEN_FLAGS']
