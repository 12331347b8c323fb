#!/usr/bin/env python3
"""
rawprint: deliver raw printer payloads over TCP, device nodes or the OS
spooler, with uniform success/failure results.
"""

__version__ = '0.3.0'

from .config import Settings
from .dispatcher import Dispatcher
from .enumerator import DeviceEnumerator
from .errors import CommandError, DispatchError, EnumerationError, PrintingError, TransportError
from .models import (
    DeviceListing,
    PrintRequest,
    PrintResponse,
    TestRequest,
    TransportKind,
    TransportTarget,
)
from .responses import ErrorKind, ErrorMessage, describe_error, to_user_result

__all__ = [
    '__version__',
    'Settings',
    'Dispatcher',
    'DeviceEnumerator',
    'PrintRequest',
    'TestRequest',
    'TransportKind',
    'TransportTarget',
    'PrintResponse',
    'DeviceListing',
    'ErrorKind',
    'ErrorMessage',
    'describe_error',
    'to_user_result',
    'PrintingError',
    'TransportError',
    'EnumerationError',
    'DispatchError',
    'CommandError',
]
