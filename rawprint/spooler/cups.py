#!/usr/bin/env python3
"""
CUPS spooler backend for Linux and macOS.

Talks to cupsd through pycups when it is installed, otherwise drives the
lpstat/lp command-line tools that ship with every CUPS install.
"""

import logging
import os
import re
import shutil
import subprocess
import tempfile
from pathlib import Path
from typing import List, Optional

from ..errors import EnumerationFailedError, EnumerationUnsupportedError, SubmissionError
from ..platform_info import get_platform
from .base import SpoolerBackend, SpoolerPrinter

try:
    import cups  # type: ignore
except ImportError:
    cups = None

logger = logging.getLogger(__name__)

LPSTAT_TIMEOUT = 10
RAW_OPTIONS = {'raw': 'true'}

_JOB_ID = re.compile(r'request id is (\S+)')


def _c_locale_env():
    # lpstat output is localized; pin it so the parser sees English.
    return dict(os.environ, LC_ALL='C', LANG='C')


class CupsSpoolerBackend(SpoolerBackend):
    """CUPS backend with pycups direct path and lpstat/lp fallback."""

    @property
    def name(self) -> str:
        return 'cups'

    def _cups_connection(self):
        if cups is None:
            return None
        try:
            return cups.Connection()
        except RuntimeError as e:
            logger.debug('pycups cannot reach cupsd, using lp tools: %s', e)
            return None

    def list_printers(self) -> List[SpoolerPrinter]:
        conn = self._cups_connection()
        if conn is not None:
            try:
                queues = conn.getPrinters()
            except cups.IPPError as e:
                raise EnumerationFailedError(f'CUPS query failed: {e}') from e
            return [
                SpoolerPrinter(
                    name=name,
                    uri=str(info.get('device-uri', '')),
                    info=str(info.get('printer-info', '')),
                )
                for name, info in queues.items()
            ]

        if shutil.which('lpstat') is None:
            raise EnumerationUnsupportedError(get_platform(), 'no CUPS client available')
        return self._list_via_lpstat()

    def _list_via_lpstat(self) -> List[SpoolerPrinter]:
        try:
            proc = subprocess.run(
                ['lpstat', '-v'],
                capture_output=True,
                text=True,
                timeout=LPSTAT_TIMEOUT,
                env=_c_locale_env(),
            )
        except subprocess.TimeoutExpired as e:
            raise EnumerationFailedError(f'lpstat timed out after {LPSTAT_TIMEOUT}s') from e
        except OSError as e:
            raise EnumerationFailedError(f'lpstat failed: {e}') from e

        if proc.returncode != 0:
            stderr = (proc.stderr or '').strip()
            # Exit status 1 with this text is how lpstat reports zero queues.
            if 'No destinations added' in stderr:
                return []
            raise EnumerationFailedError(f'lpstat failed (rc={proc.returncode}): {stderr}')

        return parse_lpstat_devices(proc.stdout)

    def submit_raw(self, printer_name: str, payload: bytes, job_name: str) -> Optional[str]:
        conn = self._cups_connection()
        if conn is not None:
            return self._submit_via_cups(conn, printer_name, payload, job_name)
        if shutil.which('lp') is None:
            raise SubmissionError(printer_name, 'lp command unavailable')
        return self._submit_via_lp(printer_name, payload, job_name)

    def _submit_via_cups(self, conn, printer_name, payload, job_name):
        with tempfile.NamedTemporaryFile(delete=False, suffix='.prn') as tmp:
            tmp.write(payload)
            temp_path = tmp.name

        try:
            job_id = conn.printFile(printer_name, temp_path, job_name, RAW_OPTIONS)
        except cups.IPPError as e:
            raise SubmissionError(printer_name, e) from e
        finally:
            Path(temp_path).unlink(missing_ok=True)

        logger.debug('CUPS accepted job %s for %s', job_id, printer_name)
        return str(job_id)

    def _submit_via_lp(self, printer_name, payload, job_name):
        cmd = ['lp', '-d', printer_name, '-t', job_name, '-o', 'raw']
        try:
            proc = subprocess.run(cmd, input=payload, capture_output=True, env=_c_locale_env())
        except OSError as e:
            raise SubmissionError(printer_name, e) from e

        out = proc.stdout.decode('utf-8', 'replace')
        if proc.returncode != 0:
            err = proc.stderr.decode('utf-8', 'replace')
            raise SubmissionError(printer_name, f'lp failed (rc={proc.returncode}): {(out + err).strip()}')

        match = _JOB_ID.search(out)
        return match.group(1) if match else None


def parse_lpstat_devices(text: str) -> List[SpoolerPrinter]:
    """
    Parse `lpstat -v` output.

    Args:
        text: Lines such as 'device for Receipt: usb://EPSON/TM-T20II'

    Returns:
        One SpoolerPrinter per queue, in lpstat order
    """
    printers = []
    for line in text.splitlines():
        line = line.strip()
        if not line.startswith('device for '):
            continue
        name, _, uri = line[len('device for '):].partition(':')
        name = name.strip()
        if name:
            printers.append(SpoolerPrinter(name=name, uri=uri.strip()))
    return printers


__all__ = ['CupsSpoolerBackend', 'parse_lpstat_devices']
