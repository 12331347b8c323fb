#!/usr/bin/env python3
"""
Abstract base classes for printer transports.
Defines the interface that network, device and spooler delivery must follow.
"""

from abc import ABC, abstractmethod

from ..models import TransportKind, TransportTarget


class Connection(ABC):
    """An open byte stream to a printer, closed exactly once."""

    @abstractmethod
    def write(self, data: bytes) -> int:
        """
        Write the whole payload to the printer.

        Args:
            data: Bytes to send

        Returns:
            Number of bytes written

        Raises:
            WriteError: If the write fails
            TransportTimeoutError: If the write deadline expires
        """
        pass

    @abstractmethod
    def flush(self) -> None:
        """
        Push any buffered bytes out to the printer.

        Raises:
            FlushError: If the flush fails
        """
        pass

    @abstractmethod
    def close(self) -> None:
        """Close the connection and release resources."""
        pass

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
        return False


class Transport(ABC):
    """One way of delivering an opaque payload to a printer."""

    kind: TransportKind

    @abstractmethod
    def deliver(self, target: TransportTarget, payload: bytes) -> int:
        """
        Deliver the payload to the target.

        Args:
            target: Resolved target for this transport's kind
            payload: Raw bytes, may be empty

        Returns:
            Number of payload bytes handed to the endpoint

        Raises:
            TransportError: If any step fails
        """
        pass

    @abstractmethod
    def probe(self, target: TransportTarget) -> None:
        """
        Check that the target is reachable without sending any data.

        Raises:
            TransportError: If the target cannot be reached
        """
        pass


class StreamTransport(Transport):
    """Transport whose delivery is open, write, flush, close."""

    @abstractmethod
    def open(self, target: TransportTarget) -> Connection:
        """
        Open a connection to the target.

        Raises:
            TransportError: If the endpoint cannot be opened
        """
        pass

    def deliver(self, target: TransportTarget, payload: bytes) -> int:
        with self.open(target) as conn:
            written = conn.write(payload)
            conn.flush()
        return written

    def probe(self, target: TransportTarget) -> None:
        with self.open(target):
            pass


__all__ = ['Connection', 'Transport', 'StreamTransport']
