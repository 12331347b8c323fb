#!/usr/bin/env python3
"""
Abstract base classes for OS print spoolers.
Defines the interface that platform-specific implementations must follow.
"""

from abc import ABC, abstractmethod
from dataclasses import asdict, dataclass
from typing import List, Optional


@dataclass(frozen=True)
class SpoolerPrinter:
    """Platform-agnostic print queue representation."""
    name: str       # Queue name, the handle used for job submission
    uri: str = ''   # Device URI (CUPS) or port name (Windows)
    info: str = ''  # Free-form description set by the administrator

    def to_dict(self) -> dict:
        return asdict(self)


class SpoolerBackend(ABC):
    """Abstract base class for platform-specific spooler backends."""

    @property
    @abstractmethod
    def name(self) -> str:
        """Backend display name."""

    @abstractmethod
    def list_printers(self) -> List[SpoolerPrinter]:
        """
        Enumerate the print queues known to the spooler.

        Returns:
            List of SpoolerPrinter objects, possibly empty

        Raises:
            EnumerationUnsupportedError: If no spooler client is available
            EnumerationFailedError: If the spooler query fails
        """
        pass

    @abstractmethod
    def submit_raw(self, printer_name: str, payload: bytes, job_name: str) -> Optional[str]:
        """
        Submit the payload as one raw job with default job options.

        Args:
            printer_name: Exact queue name
            payload: Bytes passed through to the printer unfiltered
            job_name: Title shown in the queue

        Returns:
            Spooler job id if the spooler reports one

        Raises:
            SubmissionError: If the spooler rejects the job
        """
        pass


__all__ = ['SpoolerPrinter', 'SpoolerBackend']
