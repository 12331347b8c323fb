#!/usr/bin/env python3
"""
Transport dispatcher for rawprint.
Builds the transport matching a request's kind.
"""

from typing import Optional

from ..config import Settings
from ..models import TransportKind
from ..spooler import SpoolerBackend, get_spooler_backend
from .base import Connection, StreamTransport, Transport
from .device import DeviceTransport
from .network import NetworkTransport
from .spooler import SpoolerTransport


def get_transport(kind: TransportKind,
                  settings: Optional[Settings] = None,
                  spooler: Optional[SpoolerBackend] = None) -> Transport:
    """
    Returns a fresh transport for the given kind.

    Args:
        kind: Transport kind from the request
        settings: Timeout and job naming policy
        spooler: Spooler backend for queue delivery (platform default if None)

    Returns:
        Transport instance; nothing is shared between calls
    """
    settings = settings or Settings()
    kind = TransportKind(kind)

    if kind is TransportKind.NETWORK:
        return NetworkTransport(settings.connect_timeout, settings.effective_write_timeout)
    if kind is TransportKind.DEVICE:
        return DeviceTransport()
    return SpoolerTransport(spooler or get_spooler_backend(), settings.job_name)


__all__ = [
    'get_transport',
    'Connection',
    'Transport',
    'StreamTransport',
    'NetworkTransport',
    'DeviceTransport',
    'SpoolerTransport',
]
