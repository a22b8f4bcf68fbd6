from __future__ import annotations

import ctypes
from abc import ABC, abstractmethod
from typing import TypeVar

from .enums import Endianness

__all__ = [
    'Target',
]

_S = TypeVar('_S', bound=ctypes.Structure)


class Target(ABC):
    """Read-only, bounds-checked access to an image at absolute offsets."""

    @property
    @abstractmethod
    def length(self) -> int: ...

    @abstractmethod
    def read(
        self,
        addr: int,
        data_size: int = 1,
        data_endianness: Endianness = Endianness.Default,
    ) -> int: ...

    @abstractmethod
    def read_bytes(self, addr: int, length: int) -> bytes: ...

    @abstractmethod
    def close(self): ...

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_value, exc_tb):
        self.close()

    def read_u8(self, addr: int) -> int:
        return self.read(addr, 1, Endianness.Little)

    def read_u16(self, addr: int) -> int:
        return self.read(addr, 2, Endianness.Little)

    def read_u32(self, addr: int) -> int:
        return self.read(addr, 4, Endianness.Little)

    def read_struct(self, cls: type[_S], addr: int) -> _S:
        """Read a ctypes structure at addr. The whole structure must be inside the image."""
        return cls.from_buffer_copy(self.read_bytes(addr, ctypes.sizeof(cls)))

    def _endianness_to_bo(self, endianness: Endianness):
        # Video BIOS images are little-endian regardless of the host
        if endianness in (Endianness.Default, Endianness.Little):
            return 'little'
        elif endianness == Endianness.Big:
            return 'big'

        raise NotImplementedError()
