"""Decoded power directory and sub-table records."""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Iterator, Mapping

from .enums import SubtableKind
from .errors import DecodeError

__all__ = [
    'DirectoryLocation',
    'SubtableRef',
    'BoostSubentry',
    'BoostEntry',
    'BoostTable',
    'CstepEntry1',
    'CstepEntry2',
    'CstepTable',
    'PowerDirectory',
]


@dataclass(frozen=True)
class DirectoryLocation:
    offset: int
    length: int
    version: int


@dataclass(frozen=True)
class SubtableRef:
    kind: SubtableKind | None
    name: str
    slot: int
    offset: int


@dataclass(frozen=True)
class BoostSubentry:
    offset: int
    domain: int
    percent: int
    min: int
    max: int


@dataclass(frozen=True)
class BoostEntry:
    offset: int
    pstate: int
    min: int
    max: int
    subentries: tuple[BoostSubentry, ...] = ()


@dataclass(frozen=True)
class BoostTable:
    offset: int
    version: int
    hlen: int = 0
    rlen: int = 0
    ssz: int = 0
    snr: int = 0
    entriesnum: int = 0
    entries: tuple[BoostEntry, ...] = ()
    valid: bool = False

    @property
    def stride(self) -> int:
        return self.rlen + self.snr * self.ssz


@dataclass(frozen=True)
class CstepEntry1:
    offset: int
    pstate: int
    index: int


@dataclass(frozen=True)
class CstepEntry2:
    offset: int
    freq: int
    unkn0: int
    unkn1: int
    voltage: int

    @property
    def valid(self) -> bool:
        return self.freq > 0


@dataclass(frozen=True)
class CstepTable:
    offset: int
    version: int
    hlen: int = 0
    rlen: int = 0
    entriesnum: int = 0
    ssz: int = 0
    snr: int = 0
    entries1: tuple[CstepEntry1, ...] = ()
    entries2: tuple[CstepEntry2, ...] = ()
    valid: bool = False

    def valid_entries2(self) -> Iterator[tuple[int, CstepEntry2]]:
        """Yield (index, entry) for the second-array entries that are in use."""
        for idx, e in enumerate(self.entries2):
            if e.valid:
                yield idx, e


@dataclass(frozen=True)
class PowerDirectory:
    location: DirectoryLocation
    # Read-only views, left out of the hash
    refs: Mapping[SubtableKind, SubtableRef] = field(default_factory=lambda: MappingProxyType({}), hash=False)
    unknown: tuple[SubtableRef, ...] = ()
    boost: BoostTable | None = None
    cstep: CstepTable | None = None
    # Exceptions don't compare by value
    errors: Mapping[SubtableKind, DecodeError] = field(default_factory=lambda: MappingProxyType({}), compare=False)

    @property
    def version(self) -> int:
        return self.location.version

    def offset_of(self, kind: SubtableKind) -> int:
        """Absolute offset of a sub-table, or 0 if it is not present."""
        ref = self.refs.get(kind)
        return ref.offset if ref else 0

    def slots(self) -> list[SubtableRef]:
        """All located and unknown slots, in slot order."""
        return sorted([*self.refs.values(), *self.unknown], key=lambda r: r.slot)
