"""Top-level decoding of the BIT 'P' power directory and its sub-tables."""

from __future__ import annotations

import logging
from types import MappingProxyType

from .boost import parse_boost
from .cstep import parse_cstep
from .directory import walk_directory
from .enums import SubtableKind
from .errors import DecodeError
from .model import DirectoryLocation, PowerDirectory
from .target import Target

__all__ = [ 'parse_power', 'DECODERS', ]

log = logging.getLogger(__name__)

# Sub-tables we know how to decode
DECODERS = {
    SubtableKind.BOOST: parse_boost,
    SubtableKind.CSTEP: parse_cstep,
}


def parse_power(target: Target, location: DirectoryLocation) -> PowerDirectory:
    """Walk the power directory at location and decode every present sub-table.

    A sub-table that fails to decode is recorded in PowerDirectory.errors and
    does not affect the others. Slots that cannot be read are skipped; an
    unknown directory version is raised.
    """
    refs, unknown = walk_directory(target, location)

    tables = {}
    errors = {}

    for kind, decoder in DECODERS.items():
        ref = refs.get(kind)
        if ref is None:
            continue

        try:
            tables[kind] = decoder(target, ref.offset)
        except DecodeError as e:
            log.debug('%s table at %#x not decoded: %s', ref.name, ref.offset, e)
            errors[kind] = e

    return PowerDirectory(
        location=location,
        refs=MappingProxyType(refs),
        unknown=tuple(unknown),
        boost=tables.get(SubtableKind.BOOST),
        cstep=tables.get(SubtableKind.CSTEP),
        errors=MappingProxyType(errors),
    )
