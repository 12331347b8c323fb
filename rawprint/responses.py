#!/usr/bin/env python3
"""
Maps dispatch outcomes to user-facing results.

Every rawprint error type has a message naming the step that failed; the OS
diagnostic text is appended verbatim. Nothing here changes whether an outcome
counts as success or failure.
"""

from dataclasses import dataclass
from enum import Enum
from typing import List, Tuple, Type, Union

from .errors import (
    AddressParseError,
    ConnectError,
    DispatchError,
    EnumerationEmptyError,
    EnumerationError,
    EnumerationFailedError,
    EnumerationUnsupportedError,
    FlushError,
    InvalidTargetError,
    OpenError,
    SubmissionError,
    TargetNotFoundError,
    TransportError,
    TransportTimeoutError,
    UnclassifiedError,
    WriteError,
)
from .models import PrintResponse


class ErrorKind(Enum):
    ADDRESS_PARSE = 'address-parse'
    INVALID_TARGET = 'invalid-target'
    CONNECT = 'connect'
    TIMEOUT = 'timeout'
    WRITE = 'write'
    FLUSH = 'flush'
    OPEN = 'open'
    NOT_FOUND = 'not-found'
    SUBMIT = 'submit'
    ENUMERATE = 'enumerate'
    UNSUPPORTED = 'unsupported'
    EMPTY = 'empty'
    UNCLASSIFIED = 'unclassified'


@dataclass(frozen=True)
class ErrorMessage:
    """Display-ready failure."""
    kind: ErrorKind
    text: str

    def __str__(self):
        return self.text


_TRANSPORT_MESSAGES: List[Tuple[Type[TransportError], ErrorKind, str]] = [
    (AddressParseError, ErrorKind.ADDRESS_PARSE, "Invalid address '{target}'"),
    (InvalidTargetError, ErrorKind.INVALID_TARGET, 'Invalid target'),
    (ConnectError, ErrorKind.CONNECT, 'Failed to connect to printer at {target}'),
    (TransportTimeoutError, ErrorKind.TIMEOUT, 'Timed out talking to printer at {target}'),
    (WriteError, ErrorKind.WRITE, 'Failed to write to printer at {target}'),
    (FlushError, ErrorKind.FLUSH, 'Failed to flush stream to {target}'),
    (OpenError, ErrorKind.OPEN, 'Failed to open device {target}'),
    (TargetNotFoundError, ErrorKind.NOT_FOUND, "Printer '{target}' not found"),
    (SubmissionError, ErrorKind.SUBMIT, 'Failed to print to {target}'),
]


def describe_error(exc: BaseException) -> ErrorMessage:
    """
    Return the categorized, user-facing message for an exception.

    DispatchError is unwrapped first. Exceptions outside the rawprint taxonomy
    come back as ErrorKind.UNCLASSIFIED.
    """
    if isinstance(exc, DispatchError):
        exc = exc.error

    if isinstance(exc, TransportError):
        for exc_type, kind, template in _TRANSPORT_MESSAGES:
            if isinstance(exc, exc_type):
                return ErrorMessage(kind, _with_cause(template.format(target=exc.target), exc.cause))

    if isinstance(exc, EnumerationEmptyError):
        return ErrorMessage(ErrorKind.EMPTY, str(exc) or 'No printers found')
    if isinstance(exc, EnumerationUnsupportedError):
        text = f'Device enumeration is not implemented for platform {exc.platform}'
        return ErrorMessage(ErrorKind.UNSUPPORTED, _with_cause(text, exc.reason))
    if isinstance(exc, (EnumerationFailedError, EnumerationError)):
        return ErrorMessage(ErrorKind.ENUMERATE, _with_cause('Failed to enumerate devices', str(exc)))

    if isinstance(exc, UnclassifiedError):
        cause = exc.cause
    else:
        cause = str(exc) or type(exc).__name__
    return ErrorMessage(ErrorKind.UNCLASSIFIED, _with_cause('Unclassified printer error', cause))


def to_user_result(outcome: Union[PrintResponse, BaseException]) -> Union[PrintResponse, ErrorMessage]:
    """Pass successes through and describe failures."""
    if isinstance(outcome, PrintResponse):
        return outcome
    if isinstance(outcome, BaseException):
        return describe_error(outcome)
    raise TypeError(f'cannot map outcome of type {type(outcome).__name__}')


def _with_cause(text, cause):
    return f'{text}: {cause}' if cause else text


__all__ = ['ErrorKind', 'ErrorMessage', 'describe_error', 'to_user_result']
