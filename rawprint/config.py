#!/usr/bin/env python3
"""
Runtime settings for rawprint.

Defaults match what receipt printers expect out of the box: raw TCP on port
9100 and a five second budget for connecting and for writing. Every value can
be overridden from the environment, the same way CUPS hands a backend its
DEVICE_URI.
"""

import math
import os
from dataclasses import dataclass
from typing import Mapping, Optional

DEFAULT_PORT = 9100
DEFAULT_TIMEOUT = 5.0
DEFAULT_JOB_NAME = 'rawprint'
DEFAULT_USB_QUERY_TIMEOUT = 10.0

ENV_DEFAULT_PORT = 'RAWPRINT_DEFAULT_PORT'
ENV_TIMEOUT = 'RAWPRINT_TIMEOUT'
ENV_JOB_NAME = 'RAWPRINT_JOB_NAME'
ENV_USB_QUERY_TIMEOUT = 'RAWPRINT_USB_QUERY_TIMEOUT'


@dataclass(frozen=True)
class Settings:
    """Timeout and naming policy shared by transports and enumerators."""
    default_port: int = DEFAULT_PORT
    connect_timeout: float = DEFAULT_TIMEOUT
    write_timeout: Optional[float] = None  # None: same as connect_timeout
    job_name: str = DEFAULT_JOB_NAME
    usb_query_timeout: float = DEFAULT_USB_QUERY_TIMEOUT

    def __post_init__(self):
        if not 1 <= self.default_port <= 65535:
            raise ValueError(f'default_port out of range: {self.default_port}')
        _check_timeout('connect_timeout', self.connect_timeout)
        if self.write_timeout is not None:
            _check_timeout('write_timeout', self.write_timeout)
        _check_timeout('usb_query_timeout', self.usb_query_timeout)
        if not self.job_name.strip():
            raise ValueError('job_name must not be empty')

    @property
    def effective_write_timeout(self) -> float:
        if self.write_timeout is None:
            return self.connect_timeout
        return self.write_timeout

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> 'Settings':
        """
        Build settings from environment variables.

        Args:
            environ: Mapping to read from (defaults to os.environ)

        Returns:
            Settings with any overrides applied

        Raises:
            ValueError: If a variable is set to an unusable value
        """
        env = os.environ if environ is None else environ
        changes = {}

        port = _read(env, ENV_DEFAULT_PORT, int)
        if port is not None:
            changes['default_port'] = port

        timeout = _read(env, ENV_TIMEOUT, float)
        if timeout is not None:
            changes['connect_timeout'] = timeout

        job_name = env.get(ENV_JOB_NAME, '').strip()
        if job_name:
            changes['job_name'] = job_name

        usb_timeout = _read(env, ENV_USB_QUERY_TIMEOUT, float)
        if usb_timeout is not None:
            changes['usb_query_timeout'] = usb_timeout

        try:
            return cls(**changes)
        except ValueError as e:
            raise ValueError(f'Invalid rawprint environment: {e}') from e


def _read(env, name, convert):
    raw = env.get(name, '').strip()
    if not raw:
        return None
    try:
        value = convert(raw)
    except ValueError:
        raise ValueError(f'{name} must be a number, got {raw!r}') from None
    if not math.isfinite(value):
        raise ValueError(f'{name} must be a finite number, got {raw!r}')
    return value


def _check_timeout(name, value):
    # Deadlines must be finite; socket.settimeout rejects NaN and treats inf as none.
    if not math.isfinite(value) or value <= 0:
        raise ValueError(f'{name} must be a positive number of seconds: {value}')


__all__ = ['Settings', 'DEFAULT_PORT', 'DEFAULT_TIMEOUT', 'DEFAULT_JOB_NAME', 'DEFAULT_USB_QUERY_TIMEOUT']
