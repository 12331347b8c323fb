#!/usr/bin/env python3
"""
Platform detection and capability checks for rawprint.
Used by the factories that pick spooler and USB backends.
"""

import platform
import shutil


def get_platform():
    """
    Returns the current platform identifier.

    Returns:
        str: 'linux', 'darwin', 'windows', or the lower-cased system name
    """
    system = platform.system().lower()
    if system.startswith(('cygwin', 'msys')):
        return 'windows'
    return system or 'unknown'


def is_windows():
    """
    Detects if running on Windows.

    Returns:
        bool: True if Windows, False otherwise
    """
    return get_platform() == 'windows'


def check_usb_available():
    """
    Checks if USB enumeration support is available.

    Returns:
        bool: True if PyUSB is importable, False otherwise
    """
    try:
        import usb.core  # noqa: F401
        return True
    except ImportError:
        return False


def check_cups_available():
    """
    Checks if a CUPS client is reachable, either pycups or the lp tools.

    Returns:
        bool: True if printers can be listed through CUPS
    """
    try:
        import cups  # noqa: F401
        return True
    except ImportError:
        return shutil.which('lpstat') is not None


__all__ = [
    'get_platform',
    'is_windows',
    'check_usb_available',
    'check_cups_available',
]
