#!/usr/bin/env python3
"""
Windows spooler backend using pywin32.
"""

import logging
from typing import List, Optional

from ..errors import EnumerationFailedError, EnumerationUnsupportedError, SubmissionError
from .base import SpoolerBackend, SpoolerPrinter

try:
    import pywintypes  # type: ignore
    import win32print  # type: ignore
except ImportError:  # pragma: no cover - only present on Windows
    pywintypes = None
    win32print = None

logger = logging.getLogger(__name__)


class WindowsSpoolerBackend(SpoolerBackend):
    """Windows print spooler accessed through win32print."""

    @property
    def name(self) -> str:
        return 'winspool'

    def _require_win32print(self):
        if win32print is None:
            raise EnumerationUnsupportedError('windows', 'pywin32 not installed')
        return win32print

    def list_printers(self) -> List[SpoolerPrinter]:
        api = self._require_win32print()
        flags = api.PRINTER_ENUM_LOCAL | api.PRINTER_ENUM_CONNECTIONS
        try:
            # Level 2 yields dicts with the port name alongside the comment.
            entries = api.EnumPrinters(flags, None, 2)
        except pywintypes.error as e:
            raise EnumerationFailedError(f'EnumPrinters failed: {e}') from e

        return [
            SpoolerPrinter(
                name=entry['pPrinterName'],
                uri=entry.get('pPortName') or '',
                info=entry.get('pComment') or '',
            )
            for entry in entries
        ]

    def submit_raw(self, printer_name: str, payload: bytes, job_name: str) -> Optional[str]:
        if win32print is None:
            raise SubmissionError(printer_name, 'pywin32 not installed')

        logger.debug('Sending RAW job %s to printer %s', job_name, printer_name)
        try:
            handle = win32print.OpenPrinter(printer_name)
        except pywintypes.error as e:
            raise SubmissionError(printer_name, e) from e

        try:
            job_id = win32print.StartDocPrinter(handle, 1, (job_name, None, 'RAW'))
            page_started = False
            try:
                win32print.StartPagePrinter(handle)
                page_started = True
                win32print.WritePrinter(handle, payload)
            finally:
                if page_started:
                    win32print.EndPagePrinter(handle)
                win32print.EndDocPrinter(handle)
        except pywintypes.error as e:
            raise SubmissionError(printer_name, e) from e
        finally:
            win32print.ClosePrinter(handle)

        return str(job_id)


__all__ = ['WindowsSpoolerBackend']
