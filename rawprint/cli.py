#!/usr/bin/env python3
"""
rawprint command line

Sends raw printer data (ESC/POS or any other printer language) over TCP, to a
device node, or through the system spooler.

Usage:
    Discovery mode (no arguments):
        rawprint

    Print mode:
        rawprint print-network 192.168.1.50 -p 9100 receipt.bin
        rawprint print-usb /dev/usb/lp0 < receipt.bin
        rawprint test-system Receipt_Printer
"""

import argparse
import json
import logging
import os
import sys

from . import __version__, commands
from .errors import CommandError

logger = logging.getLogger('rawprint')

CHUNK_SIZE = 8192


def read_payload(path):
    """
    Read the print payload from a file, or stdin when path is None or '-'.

    Returns:
        Payload bytes
    """
    if path and path != '-':
        with open(path, 'rb') as f:
            return f.read()

    chunks = []
    with os.fdopen(sys.stdin.fileno(), 'rb', closefd=False) as stdin:
        while True:
            data = stdin.read(CHUNK_SIZE)
            if not data:
                break
            chunks.append(data)
            logger.debug('read %d', len(data))
    return b''.join(chunks)


def configure_logging(verbose=False):
    """Log to stderr as 'LEVEL: message', the way CUPS backends report."""
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter('%(levelname)s: %(message)s'))
    logger.handlers[:] = [handler]
    logger.setLevel(logging.DEBUG if verbose else logging.WARNING)
    logger.propagate = False


def build_parser():
    parser = argparse.ArgumentParser(
        prog='rawprint',
        description='Send raw data to network, USB/serial and spooler printers'
    )
    parser.add_argument('--version', action='version', version=f'%(prog)s {__version__}')
    parser.add_argument('-v', '--verbose', action='store_true', help='Enable debug logging')
    sub = parser.add_subparsers(dest='command', metavar='COMMAND')

    sub.add_parser('list-printers', help='List system printers')
    sub.add_parser('list-cups', help='List spooler queues with device URIs')
    sub.add_parser('list-usb', help='Dump USB topology')

    for name, help_text in (('print-network', 'Print over raw TCP'),
                            ('test-network', 'Check a network printer accepts connections')):
        p = sub.add_parser(name, help=help_text)
        p.add_argument('host', help='Printer IPv4 or IPv6 address')
        p.add_argument('-p', '--port', type=int, default=None, help='TCP port (default: 9100)')
        if name.startswith('print'):
            p.add_argument('file', nargs='?', help='Payload file (default: stdin)')

    for name, help_text in (('print-system', 'Print through a spooler queue'),
                            ('test-system', 'Check a spooler queue exists')):
        p = sub.add_parser(name, help=help_text)
        p.add_argument('name', help='Exact queue name')
        if name.startswith('print'):
            p.add_argument('file', nargs='?', help='Payload file (default: stdin)')

    for name, help_text in (('print-usb', 'Write to a device node'),
                            ('test-usb', 'Check a device node opens for writing')):
        p = sub.add_parser(name, help=help_text)
        p.add_argument('path', help='Device path, e.g. /dev/usb/lp0')
        if name.startswith('print'):
            p.add_argument('file', nargs='?', help='Payload file (default: stdin)')

    return parser


def parse_args(argv=None):
    """
    Parse the command line.

    argparse binds an optional FILE positional together with the target
    positional, so in `print-network HOST -p PORT FILE` the trailing FILE is
    left over. A single leftover operand is taken as FILE.
    """
    parser = build_parser()
    args, extra = parser.parse_known_args(argv)
    if extra:
        operand = extra[0] if len(extra) == 1 else None
        takes_file = getattr(args, 'file', '') is None
        if takes_file and operand is not None and (operand == '-' or not operand.startswith('-')):
            args.file = operand
        else:
            parser.error(f'unrecognized arguments: {" ".join(extra)}')
    return args


def discover():
    """List system printers and USB devices; a missing backend is only a warning."""
    found = {}
    for key, command in (('system_printers', commands.list_system_printers),
                         ('usb_devices', commands.list_usb_devices)):
        try:
            found[key] = command()
        except CommandError as e:
            logger.warning('%s', e)
            found[key] = []
    return found


def run(args):
    """Execute one parsed command and return its JSON-ready result."""
    command = args.command
    if command is None:
        return discover()
    if command == 'list-printers':
        return commands.list_system_printers()
    if command == 'list-cups':
        return commands.list_cups_printers()
    if command == 'list-usb':
        return commands.list_usb_devices()
    if command == 'print-network':
        return commands.print_to_network(read_payload(args.file), args.host, args.port)
    if command == 'test-network':
        return commands.test_printer_connection(args.host, args.port)
    if command == 'print-system':
        return commands.print_to_system_printer(args.name, read_payload(args.file))
    if command == 'test-system':
        return commands.test_system_printer(args.name)
    if command == 'print-usb':
        return commands.print_to_usb(args.path, read_payload(args.file))
    if command == 'test-usb':
        return commands.test_usb_connection(args.path)
    raise CommandError(f'Unknown command: {command}')


def main(argv=None):
    """Main entry point for the rawprint command."""
    args = parse_args(argv)
    configure_logging(args.verbose)

    try:
        result = run(args)
    except CommandError as e:
        print(f'ERROR: {e}', file=sys.stderr)
        return 1
    except OSError as e:
        print(f'ERROR: Cannot read payload: {e}', file=sys.stderr)
        return 1

    print(json.dumps(result, indent=2))
    return 0


if __name__ == '__main__':
    sys.exit(main())
