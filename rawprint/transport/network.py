#!/usr/bin/env python3
"""
Raw TCP transport (port 9100 "JetDirect" style printing).
"""

import logging
import socket

from ..config import DEFAULT_TIMEOUT
from ..errors import ConnectError, FlushError, TransportTimeoutError, WriteError
from ..models import TransportKind, TransportTarget
from .base import Connection, StreamTransport

logger = logging.getLogger(__name__)

_TIMEOUTS = (socket.timeout, TimeoutError)


class NetworkConnection(Connection):
    """TCP connection to a printer, bounded by connect and write timeouts."""

    def __init__(self, target: TransportTarget,
                 connect_timeout: float = DEFAULT_TIMEOUT,
                 write_timeout: float = DEFAULT_TIMEOUT):
        """
        Connect to the printer.

        Args:
            target: Resolved network target
            connect_timeout: Seconds allowed for the TCP handshake
            write_timeout: Seconds allowed for each blocking send
        """
        self.address = target.display
        self.write_timeout = write_timeout

        logger.debug('Connecting to %s (timeout %ss)', self.address, connect_timeout)
        try:
            self.sock = socket.create_connection(
                (target.location, target.port),
                timeout=connect_timeout
            )
        except _TIMEOUTS as e:
            raise TransportTimeoutError(
                self.address, f'connect timed out after {connect_timeout:g}s'
            ) from e
        except OSError as e:
            raise ConnectError(self.address, e) from e

        try:
            self.sock.settimeout(write_timeout)
        except OSError as e:
            self.sock.close()
            raise ConnectError(self.address, f'failed to set timeout: {e}') from e

    def write(self, data: bytes) -> int:
        """Send the whole payload; each blocking send is bounded by write_timeout."""
        try:
            self.sock.sendall(data)
        except _TIMEOUTS as e:
            raise TransportTimeoutError(
                self.address, f'write timed out after {self.write_timeout:g}s'
            ) from e
        except OSError as e:
            raise WriteError(self.address, e) from e
        return len(data)

    def flush(self) -> None:
        """Half-close the socket so the printer sees the end of the job."""
        try:
            self.sock.shutdown(socket.SHUT_WR)
        except OSError as e:
            raise FlushError(self.address, e) from e

    def close(self) -> None:
        if self.sock is not None:
            self.sock.close()
            self.sock = None


class NetworkTransport(StreamTransport):
    """Delivers payloads over raw TCP."""

    kind = TransportKind.NETWORK

    def __init__(self, connect_timeout: float = DEFAULT_TIMEOUT,
                 write_timeout: float = DEFAULT_TIMEOUT):
        self.connect_timeout = connect_timeout
        self.write_timeout = write_timeout

    def open(self, target: TransportTarget) -> NetworkConnection:
        return NetworkConnection(target, self.connect_timeout, self.write_timeout)


__all__ = ['NetworkConnection', 'NetworkTransport']
