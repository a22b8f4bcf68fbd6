"""BOOST sub-table decoder."""

from __future__ import annotations

import ctypes
import logging

from ._structs import BOOST_VERSION_V11, BoostEntryData, BoostHeaderV11, BoostSubentryData
from .errors import OutOfBoundsError, UnsupportedVersionError
from .helpers import check_extent, get_pstate, record_offsets
from .model import BoostEntry, BoostSubentry, BoostTable
from .target import Target

__all__ = [ 'parse_boost', ]

log = logging.getLogger(__name__)


def _records_end(hdr: BoostHeaderV11, offset: int) -> int:
    # Without entries nothing past the header is read
    if hdr.entriesnum == 0:
        return offset + ctypes.sizeof(BoostHeaderV11)

    base = offset + hdr.hlen

    last = base + (hdr.entriesnum - 1) * (hdr.rlen + hdr.snr * hdr.ssz)
    end = last + ctypes.sizeof(BoostEntryData)

    if hdr.snr:
        last_sub = last + hdr.rlen + (hdr.snr - 1) * hdr.ssz
        end = max(end, last_sub + ctypes.sizeof(BoostSubentryData))

    return end


def _parse_subentries(target: Target, data: int, hdr: BoostHeaderV11) -> tuple[BoostSubentry, ...]:
    subentries = []

    for sdata in record_offsets(data + hdr.rlen, hdr.ssz, hdr.snr):
        sd = target.read_struct(BoostSubentryData, sdata)
        subentries.append(BoostSubentry(offset=sdata, domain=sd.domain, percent=sd.percent,
                                        min=sd.min, max=sd.max))

    return tuple(subentries)


def _parse_v11(target: Target, offset: int) -> BoostTable:
    try:
        hdr = target.read_struct(BoostHeaderV11, offset)
    except OutOfBoundsError:
        log.debug('BOOST header at %#x is truncated', offset)
        return BoostTable(offset=offset, version=BOOST_VERSION_V11)

    base = offset + hdr.hlen
    stride = hdr.rlen + hdr.snr * hdr.ssz

    check_extent(target, 'BOOST', _records_end(hdr, offset))

    entries = []

    for data in record_offsets(base, stride, hdr.entriesnum):
        ed = target.read_struct(BoostEntryData, data)
        entries.append(BoostEntry(offset=data, pstate=get_pstate(ed.flags), min=ed.min, max=ed.max,
                                  subentries=_parse_subentries(target, data, hdr)))

    log.debug('BOOST table at %#x: %d entries, %d subentries each', offset, hdr.entriesnum, hdr.snr)

    return BoostTable(offset=offset, version=hdr.version,
                      hlen=hdr.hlen, rlen=hdr.rlen, ssz=hdr.ssz, snr=hdr.snr,
                      entriesnum=hdr.entriesnum, entries=tuple(entries), valid=True)


_PARSERS = {
    BOOST_VERSION_V11: _parse_v11,
}


def parse_boost(target: Target, offset: int) -> BoostTable:
    """Decode the BOOST table at the given absolute offset.

    Raises UnsupportedVersionError for unknown table versions. A table whose
    header cannot be read completely is returned with valid=False and no entries.
    """
    version = target.read_u8(offset)

    parser = _PARSERS.get(version)
    if parser is None:
        log.warning('Unknown BOOST table version %#x', version)
        raise UnsupportedVersionError('BOOST', version)

    return parser(target, offset)
