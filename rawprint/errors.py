#!/usr/bin/env python3
"""
Exceptions raised by rawprint.

Transports and enumerators convert low-level OSError/subprocess failures into
these types at the point where they happen, chaining the original exception.
The response mapper in rawprint.responses turns them into user-facing text.
"""

from typing import Optional


class PrintingError(Exception):
    """Base error for rawprint."""


class TransportError(PrintingError):
    """
    Delivery to a printing endpoint failed.

    Attributes:
        target: Address, device path or queue name as given by the caller
        cause: Underlying diagnostic text (OS error message), may be empty
    """

    def __init__(self, target: str, cause: Optional[object] = None):
        self.target = target
        self.cause = '' if cause is None else str(cause)
        detail = f'{target}: {self.cause}' if self.cause else target
        super().__init__(detail)


class AddressParseError(TransportError):
    """Network target is not a usable host:port."""


class InvalidTargetError(TransportError):
    """Target is empty or otherwise unusable before any I/O is attempted."""


class ConnectError(TransportError):
    """TCP connection to the printer could not be established."""


class TransportTimeoutError(TransportError):
    """Connect or write did not finish within the configured timeout."""


class WriteError(TransportError):
    """Writing the payload failed."""


class FlushError(TransportError):
    """Flushing buffered payload bytes failed."""


class OpenError(TransportError):
    """Device node could not be opened for writing."""


class TargetNotFoundError(TransportError):
    """Named spooler queue does not exist."""


class SubmissionError(TransportError):
    """Spooler refused or failed the raw job."""


class EnumerationError(PrintingError):
    """Listing printing endpoints failed."""


class EnumerationUnsupportedError(EnumerationError):
    """No enumeration method exists for this platform."""

    def __init__(self, platform: str, reason: str = ''):
        self.platform = platform
        self.reason = reason
        message = f'not implemented for platform {platform}'
        if reason:
            message = f'{message} ({reason})'
        super().__init__(message)


class EnumerationEmptyError(EnumerationError):
    """Enumeration succeeded but found nothing."""


class EnumerationFailedError(EnumerationError):
    """The platform query itself failed."""


class UnclassifiedError(PrintingError):
    """An OS error that none of the specific types describe."""

    def __init__(self, cause: object):
        self.cause = str(cause)
        super().__init__(self.cause)


class DispatchError(PrintingError):
    """
    Raised by the dispatcher for any failed operation.

    Attributes:
        error: The TransportError, EnumerationError or UnclassifiedError
    """

    def __init__(self, error: PrintingError):
        self.error = error
        super().__init__(str(error))


class CommandError(PrintingError):
    """Flattened, display-ready failure returned across the command boundary."""


__all__ = [
    'PrintingError',
    'TransportError',
    'AddressParseError',
    'InvalidTargetError',
    'ConnectError',
    'TransportTimeoutError',
    'WriteError',
    'FlushError',
    'OpenError',
    'TargetNotFoundError',
    'SubmissionError',
    'EnumerationError',
    'EnumerationUnsupportedError',
    'EnumerationEmptyError',
    'EnumerationFailedError',
    'UnclassifiedError',
    'DispatchError',
    'CommandError',
]
