#!/usr/bin/env python3
"""
macOS USB enumeration using system_profiler.

The JSON that system_profiler prints is handed back untouched; callers decide
which fields matter.
"""

import logging
import subprocess
from typing import List

from ..config import DEFAULT_USB_QUERY_TIMEOUT
from ..errors import EnumerationFailedError
from ..models import DeviceListing
from .base import USB_LISTING_NAME, UsbEnumerator

logger = logging.getLogger(__name__)

SYSTEM_PROFILER_CMD = ['system_profiler', 'SPUSBDataType', '-json']


class DarwinUsbEnumerator(UsbEnumerator):
    """macOS USB enumerator backed by system_profiler."""

    def __init__(self, query_timeout: float = DEFAULT_USB_QUERY_TIMEOUT):
        self.query_timeout = query_timeout

    def list_devices(self) -> List[DeviceListing]:
        try:
            result = subprocess.run(
                SYSTEM_PROFILER_CMD,
                capture_output=True,
                text=True,
                timeout=self.query_timeout
            )
        except subprocess.TimeoutExpired as e:
            raise EnumerationFailedError(
                f'system_profiler timed out after {self.query_timeout:g}s'
            ) from e
        except OSError as e:
            raise EnumerationFailedError(f'Failed to run system_profiler: {e}') from e

        if result.returncode != 0:
            raise EnumerationFailedError(
                f'system_profiler failed (rc={result.returncode}): {result.stderr.strip()}'
            )

        logger.debug('system_profiler returned %d bytes of USB topology', len(result.stdout))
        return [DeviceListing(name=USB_LISTING_NAME, info=result.stdout)]


__all__ = ['DarwinUsbEnumerator', 'SYSTEM_PROFILER_CMD']
