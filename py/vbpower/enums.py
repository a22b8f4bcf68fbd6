from __future__ import annotations

from enum import Enum

__all__ = [ 'Endianness', 'SubtableKind', ]


class Endianness(Enum):
    Default = 0
    Big = 1
    Little  = 2


class SubtableKind(Enum):
    PERFORMANCE = 'PERFORMANCE'
    MEMORY_TIMINGS = 'MEMORY TIMINGS'
    MEMORY_TIMINGS_MAPPING = 'MEMORY TIMINGS MAPPING'
    THERMAL = 'THERMAL'
    VOLTAGE = 'VOLTAGE'
    UNK = 'UNK'
    VOLT_MAPPING = 'VOLT MAPPING'
    BOOST = 'BOOST'
    CSTEP = 'CSTEP'

    @property
    def display_name(self) -> str:
        return self.value
