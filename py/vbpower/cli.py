"""Command-line interface for vbpower-dump."""

from __future__ import annotations

import argparse
import logging
import sys

from .dump import format_power
from .errors import DecodeError
from .imagetarget import ImageTarget
from .model import DirectoryLocation
from .power import parse_power


def parse_int(text: str) -> int:
    text = text.strip()
    if not text:
        raise ValueError('empty value')
    return int(text, 0)


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog='vbpower-dump',
        description='Decode the power tables of a video BIOS image',
    )
    parser.add_argument('image', help='Video BIOS image file')
    parser.add_argument('-o', '--offset', type=parse_int, required=True,
                        help='Absolute offset of the power directory')
    parser.add_argument('-l', '--length', type=parse_int, required=True,
                        help='Length of the power directory in bytes')
    parser.add_argument('-V', '--version', type=parse_int, default=2,
                        help='Power directory format version (default: 2)')
    parser.add_argument('-x', '--hex', action='store_true', help='Show raw bytes of headers and records')
    parser.add_argument('-v', '--verbose', action='count', default=0, help='Increase log verbosity')

    return parser.parse_args(argv)


def setup_logging(verbose: int):
    if verbose >= 2:
        level = logging.DEBUG
    elif verbose == 1:
        level = logging.INFO
    else:
        level = logging.WARNING

    logging.basicConfig(level=level, format='%(levelname)s %(name)s: %(message)s')


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)

    setup_logging(args.verbose)

    location = DirectoryLocation(offset=args.offset, length=args.length, version=args.version)

    try:
        with ImageTarget(args.image) as target:
            pd = parse_power(target, location)
            sys.stdout.write(format_power(pd, target if args.hex else None))
    except (OSError, DecodeError) as e:
        print(f'Error: {e}', file=sys.stderr)
        return 1

    for kind, e in pd.errors.items():
        print(f'{kind.display_name}: {e}', file=sys.stderr)

    return 0


if __name__ == '__main__':
    sys.exit(main())
