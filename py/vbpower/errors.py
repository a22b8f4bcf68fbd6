"""Exceptions raised while decoding power tables."""

from __future__ import annotations

__all__ = [
    'DecodeError',
    'InvalidArgumentError',
    'UnsupportedVersionError',
    'NotFoundError',
    'TruncatedTableError',
    'OutOfBoundsError',
]


class DecodeError(Exception):
    """Base class for power table decoding errors."""
    pass


class InvalidArgumentError(DecodeError, ValueError):
    """Raised when a function is called with an invalid combination of arguments."""
    pass


class UnsupportedVersionError(DecodeError):
    """Raised when a directory or table declares a layout version we cannot decode."""

    def __init__(self, table: str, version: int) -> None:
        super().__init__(f'Unknown {table} table version {version:#x}')
        self.table = table
        self.version = version


class NotFoundError(DecodeError, LookupError):
    """Raised when a directory slot does not match any known sub-table."""
    pass


class TruncatedTableError(DecodeError):
    """Raised when a table's declared extent does not fit its container."""
    pass


class OutOfBoundsError(DecodeError, IndexError):
    """Raised when a read falls outside the image."""

    def __init__(self, addr: int, size: int, length: int) -> None:
        super().__init__(f'Access outside image: {addr:#x}+{size} (image length {length:#x})')
        self.addr = addr
        self.size = size
        self.length = length
