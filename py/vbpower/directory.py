"""BIT 'P' power directory slot resolution."""

from __future__ import annotations

import logging

from ._structs import SLOT_SIZE
from .enums import SubtableKind
from .errors import InvalidArgumentError, NotFoundError, OutOfBoundsError, TruncatedTableError, UnsupportedVersionError
from .model import DirectoryLocation, SubtableRef
from .target import Target

__all__ = [ 'resolve_slot', 'walk_directory', 'slot_layout', 'UNKNOWN_NAME', ]

log = logging.getLogger(__name__)

UNKNOWN_NAME = 'UNKNOWN'

# (slot offset within the directory, kind)
_P1_SLOTS = (
    (0x00, SubtableKind.PERFORMANCE),
    (0x04, SubtableKind.MEMORY_TIMINGS),
    (0x0c, SubtableKind.THERMAL),
    (0x10, SubtableKind.VOLTAGE),
    (0x15, SubtableKind.UNK),
)

_P2_SLOTS = (
    (0x00, SubtableKind.PERFORMANCE),
    (0x04, SubtableKind.MEMORY_TIMINGS_MAPPING),
    (0x08, SubtableKind.MEMORY_TIMINGS),
    (0x0c, SubtableKind.VOLTAGE),
    (0x10, SubtableKind.THERMAL),
    (0x18, SubtableKind.UNK),
    (0x20, SubtableKind.VOLT_MAPPING),
    (0x30, SubtableKind.BOOST),
    (0x34, SubtableKind.CSTEP),
)

_LAYOUTS = {
    1: _P1_SLOTS,
    2: _P2_SLOTS,
}


def slot_layout(version: int) -> tuple[tuple[int, SubtableKind], ...]:
    """Return the known slots of a power directory format version."""
    layout = _LAYOUTS.get(version)
    if layout is None:
        raise UnsupportedVersionError('power directory', version)
    return layout


def _find_slot(layout, index: int | SubtableKind | None, slot: int | None) -> tuple[int, SubtableKind]:
    if slot is not None:
        for entry in layout:
            if entry[0] == slot:
                return entry
        raise NotFoundError(f'No known table at directory slot {slot:#x}')

    if isinstance(index, SubtableKind):
        for entry in layout:
            if entry[1] == index:
                return entry
        raise NotFoundError(f'{index.display_name} table is not part of this directory version')

    if index < 0 or index >= len(layout):
        raise NotFoundError(f'Directory index {index} out of range (0..{len(layout) - 1})')

    return layout[index]


def resolve_slot(target: Target, location: DirectoryLocation,
                 index: int | SubtableKind | None = None, slot: int | None = None) -> SubtableRef:
    """Resolve a directory slot, selected by either index or slot offset, to its sub-table.

    index is a position in the directory layout or a SubtableKind, slot is a
    byte offset within the directory. Exactly one of them must be given.
    """
    if (index is None) == (slot is None):
        raise InvalidArgumentError('Exactly one of index and slot must be given')

    layout = slot_layout(location.version)

    slot, kind = _find_slot(layout, index, slot)

    if slot + SLOT_SIZE > location.length:
        raise TruncatedTableError(f'{kind.display_name} slot {slot:#x} lies past directory length {location.length:#x}')

    offset = target.read_u16(location.offset + slot)

    return SubtableRef(kind=kind, name=kind.display_name, slot=slot, offset=offset)


def walk_directory(target: Target, location: DirectoryLocation) -> tuple[dict[SubtableKind, SubtableRef], list[SubtableRef]]:
    """Read every slot of the directory.

    Returns the located known sub-tables, keyed by kind, and the non-zero
    slots that do not match any known kind. Zero slots are absent tables,
    slots lying outside the image are skipped.
    """
    try:
        slot_layout(location.version)
    except UnsupportedVersionError:
        log.warning('Unknown power directory version %#x', location.version)
        raise

    refs: dict[SubtableKind, SubtableRef] = {}
    unknown: list[SubtableRef] = []

    for slot in range(0, location.length - SLOT_SIZE + 1, SLOT_SIZE):
        try:
            addr = target.read_u16(location.offset + slot)
        except OutOfBoundsError as e:
            log.debug('Power directory slot %#04x unreadable: %s', slot, e)
            continue

        if addr == 0:
            continue

        try:
            ref = resolve_slot(target, location, slot=slot)
        except NotFoundError:
            log.warning('Unknown table %#x in power directory slot %#04x', addr, slot)
            unknown.append(SubtableRef(kind=None, name=UNKNOWN_NAME, slot=slot, offset=addr))
            continue

        log.debug('%#04x: %#x => %s table', slot, ref.offset, ref.name)
        refs[ref.kind] = ref

    if location.length % SLOT_SIZE:
        log.debug('Ignoring trailing byte at power directory offset %#04x', location.length - 1)

    return refs, unknown
