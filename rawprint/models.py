#!/usr/bin/env python3
"""
Request, target and response types shared by the dispatcher and transports.
"""

import ipaddress
from dataclasses import asdict, dataclass
from enum import Enum
from typing import Optional, Tuple, Union

from .config import DEFAULT_PORT
from .errors import AddressParseError, InvalidTargetError, TargetNotFoundError

Payload = Union[bytes, bytearray, memoryview, str]


class TransportKind(Enum):
    """Delivery mechanism selected by a request."""
    NETWORK = 'network'
    DEVICE = 'usb-device'
    QUEUE = 'system-queue'


def as_payload(data: Payload) -> bytes:
    """
    Normalize caller data to the raw bytes sent to the printer.

    Text is encoded as UTF-8, which keeps ESC/POS control characters intact.

    Raises:
        TypeError: If data is not text or a bytes-like object
    """
    if isinstance(data, str):
        return data.encode('utf-8')
    if isinstance(data, (bytes, bytearray, memoryview)):
        return bytes(data)
    raise TypeError(f'payload must be str or bytes, got {type(data).__name__}')


@dataclass(frozen=True)
class PrintRequest:
    """One delivery of an opaque payload to a single target."""
    payload: bytes
    kind: TransportKind
    target: str
    port: Optional[int] = None  # network only

    def __post_init__(self):
        object.__setattr__(self, 'payload', as_payload(self.payload))
        object.__setattr__(self, 'kind', TransportKind(self.kind))


@dataclass(frozen=True)
class TestRequest:
    """Liveness check against a target; never carries payload."""
    kind: TransportKind
    target: str
    port: Optional[int] = None

    def __post_init__(self):
        object.__setattr__(self, 'kind', TransportKind(self.kind))


@dataclass(frozen=True)
class TransportTarget:
    """Validated, transport-specific form of a request target."""
    kind: TransportKind
    location: str  # host, device path or queue name
    port: Optional[int] = None

    @property
    def display(self) -> str:
        """Human-readable address used in messages."""
        if self.kind is not TransportKind.NETWORK:
            return self.location
        if ':' in self.location:
            return f'[{self.location}]:{self.port}'
        return f'{self.location}:{self.port}'

    def __str__(self):
        return self.display


@dataclass(frozen=True)
class PrintResponse:
    """Uniform outcome of a print or test operation."""
    success: bool
    message: str

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass(frozen=True)
class DeviceListing:
    """One addressable endpoint; info is backend-specific text."""
    name: str
    info: str

    def to_dict(self) -> dict:
        return asdict(self)


def resolve_target(request: Union[PrintRequest, TestRequest],
                   default_port: int = DEFAULT_PORT) -> TransportTarget:
    """
    Validate request fields into a TransportTarget without touching any I/O.

    Raises:
        AddressParseError: Network target is not a usable host:port
        InvalidTargetError: Device path is empty
        TargetNotFoundError: Queue name is empty
    """
    if request.kind is TransportKind.NETWORK:
        host, port = parse_network_address(request.target, request.port, default_port)
        return TransportTarget(TransportKind.NETWORK, host, port)

    location = (request.target or '').strip()
    if request.kind is TransportKind.DEVICE:
        if not location:
            raise InvalidTargetError('', 'empty device path')
        # Paths are used verbatim; surrounding spaces may be significant.
        return TransportTarget(TransportKind.DEVICE, request.target)

    if not location:
        raise TargetNotFoundError('', 'empty printer name')
    return TransportTarget(TransportKind.QUEUE, request.target)


def parse_network_address(target: str,
                          port: Optional[int] = None,
                          default_port: int = DEFAULT_PORT) -> Tuple[str, int]:
    """
    Split and validate a network target.

    Accepts 'ip', 'ip:port', '[v6]:port' and bare IPv6 literals. Host names
    are rejected, so no DNS lookup ever happens. A port embedded in the target
    wins over the separate port argument.

    Args:
        target: IPv4 or IPv6 literal, optionally with a port
        port: Port to use when the target has none
        default_port: Port to use when neither gives one

    Returns:
        (host, port) tuple

    Raises:
        AddressParseError: If the host or port is malformed
    """
    text = (target or '').strip()
    if not text:
        raise AddressParseError('', 'empty address')

    host, port_text = _split_host_port(text)

    if port_text is not None:
        if not port_text.isdigit():
            raise AddressParseError(text, f'invalid port {port_text!r}')
        port = int(port_text)
    elif port is None:
        port = default_port

    if isinstance(port, bool) or not isinstance(port, int) or not 1 <= port <= 65535:
        raise AddressParseError(text, f'port out of range: {port!r}')

    if not _valid_host(host):
        raise AddressParseError(text, f'invalid host {host!r}')

    return host, port


def _split_host_port(text):
    if text.startswith('['):
        end = text.find(']')
        if end == -1:
            raise AddressParseError(text, 'unterminated IPv6 literal')
        host, rest = text[1:end], text[end + 1:]
        if not rest:
            return host, None
        if not rest.startswith(':'):
            raise AddressParseError(text, f'unexpected text after address: {rest!r}')
        return host, rest[1:]

    colons = text.count(':')
    if colons == 1:
        host, port_text = text.split(':')
        return host, port_text
    # More than one colon without brackets can only be a bare IPv6 literal.
    return text, None


def _valid_host(host):
    # IP literals only; host names are never resolved.
    try:
        ipaddress.ip_address(host)
    except ValueError:
        return False
    return True


__all__ = [
    'TransportKind',
    'PrintRequest',
    'TestRequest',
    'TransportTarget',
    'PrintResponse',
    'DeviceListing',
    'as_payload',
    'resolve_target',
    'parse_network_address',
]
