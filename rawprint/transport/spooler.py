#!/usr/bin/env python3
"""
System-queue transport: hands the payload to the OS spooler as a raw job.
"""

import logging

from ..config import DEFAULT_JOB_NAME
from ..errors import SubmissionError, TargetNotFoundError
from ..models import TransportKind, TransportTarget
from ..spooler.base import SpoolerBackend
from .base import Transport

logger = logging.getLogger(__name__)


class SpoolerTransport(Transport):
    """Delivers payloads through a named spooler queue."""

    kind = TransportKind.QUEUE

    def __init__(self, backend: SpoolerBackend, job_name: str = DEFAULT_JOB_NAME):
        self.backend = backend
        self.job_name = job_name

    def _require_queue(self, name: str) -> None:
        names = [printer.name for printer in self.backend.list_printers()]
        if name not in names:
            raise TargetNotFoundError(name)

    def deliver(self, target: TransportTarget, payload: bytes) -> int:
        self._require_queue(target.location)
        try:
            job_id = self.backend.submit_raw(target.location, payload, self.job_name)
        except OSError as e:
            raise SubmissionError(target.location, e) from e
        logger.debug('Queued %d bytes on %s (job %s)', len(payload), target.location, job_id)
        return len(payload)

    def probe(self, target: TransportTarget) -> None:
        self._require_queue(target.location)


__all__ = ['SpoolerTransport']
