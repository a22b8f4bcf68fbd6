from __future__ import annotations

import mmap
import os
from typing import BinaryIO

from .enums import Endianness
from .errors import OutOfBoundsError
from .target import Target

__all__ = [ 'ImageTarget', ]

class ImageTarget(Target):
    def __init__(self, source: str | os.PathLike | bytes | bytearray | BinaryIO) -> None:
        self._mmap: mmap.mmap | None = None

        if isinstance(source, (bytes, bytearray)):
            self._map = bytes(source)
        else:
            if isinstance(source, (str, os.PathLike)):
                fd = os.open(source, os.O_RDONLY)
            else:
                # mmap will (apparently?) close its fd, so duplicate it first
                fd = os.dup(source.fileno())

            try:
                size = os.fstat(fd).st_size
                if size == 0:
                    # mmap cannot map empty files
                    self._map = b''
                else:
                    self._mmap = mmap.mmap(fd, 0, access=mmap.ACCESS_READ)
                    self._map = self._mmap
            finally:
                os.close(fd)

        self._length = len(self._map)

    @property
    def length(self) -> int:
        return self._length

    def close(self):
        # It is ok to call close() multiple times
        if self._mmap is not None:
            self._mmap.close()

    def _check_access(self, addr: int, data_size: int):
        if addr < 0 or addr + data_size > self._length:
            raise OutOfBoundsError(addr, data_size, self._length)

    def read(self, addr: int, data_size: int = 1,
             data_endianness: Endianness = Endianness.Default) -> int:
        if data_size <= 0:
            raise ValueError(f'Data size must be positive, got {data_size}')

        self._check_access(addr, data_size)

        bo = self._endianness_to_bo(data_endianness)

        v = self._map[addr:addr + data_size]

        return int.from_bytes(v, bo, signed=False)

    def read_bytes(self, addr: int, length: int) -> bytes:
        if length < 0:
            raise ValueError(f'Length must be non-negative, got {length}')

        self._check_access(addr, length)

        return bytes(self._map[addr:addr + length])
