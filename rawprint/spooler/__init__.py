#!/usr/bin/env python3
"""
Spooler backend dispatcher for rawprint.
Automatically selects the appropriate platform-specific implementation.
"""

import logging

from ..platform_info import check_cups_available, is_windows
from .base import SpoolerBackend, SpoolerPrinter
from .cups import CupsSpoolerBackend
from .windows import WindowsSpoolerBackend

logger = logging.getLogger(__name__)


def get_spooler_backend() -> SpoolerBackend:
    """
    Returns the spooler backend for the current platform.

    Returns:
        SpoolerBackend: winspool on Windows, CUPS everywhere else
    """
    if is_windows():
        return WindowsSpoolerBackend()
    if not check_cups_available():
        logger.debug('Neither pycups nor lpstat found; system printers will be unavailable')
    return CupsSpoolerBackend()


__all__ = [
    'get_spooler_backend',
    'SpoolerBackend',
    'SpoolerPrinter',
    'CupsSpoolerBackend',
    'WindowsSpoolerBackend',
]
