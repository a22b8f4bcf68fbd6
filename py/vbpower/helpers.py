from __future__ import annotations

from ._structs import PSTATE_HIGH, PSTATE_LOW
from .errors import TruncatedTableError

def genmask(high: int, low: int):
    return ((1 << (high + 1)) - 1) & ~((1 << low) - 1)

def get_field_value(r_val: int, high: int, low: int):
    mask = genmask(high, low)
    return (r_val & mask) >> low

def get_pstate(flags: int):
    # bits 8..5, i.e. (flags & 0x01e0) >> 5
    return get_field_value(flags, PSTATE_HIGH, PSTATE_LOW)

def record_offsets(base: int, stride: int, count: int):
    return [base + i * stride for i in range(count)]

def check_extent(target, table: str, end: int):
    """Refuse to decode records whose last byte would lie outside the image."""
    if end > target.length:
        raise TruncatedTableError(f'{table} records end at {end:#x}, past image end {target.length:#x}')
