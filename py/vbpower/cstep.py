"""CSTEP sub-table decoder."""

from __future__ import annotations

import ctypes
import logging

from ._structs import CSTEP_VERSION_V10, CstepEntry1Data, CstepEntry2Data, CstepHeaderV10
from .errors import OutOfBoundsError, UnsupportedVersionError
from .helpers import check_extent, get_pstate, record_offsets
from .model import CstepEntry1, CstepEntry2, CstepTable
from .target import Target

__all__ = [ 'parse_cstep', ]

log = logging.getLogger(__name__)


def _records_end(hdr: CstepHeaderV10, offset: int) -> int:
    # Without records nothing past the header is read
    base = offset + hdr.hlen
    end = offset + ctypes.sizeof(CstepHeaderV10)

    if hdr.entriesnum:
        end = base + (hdr.entriesnum - 1) * hdr.rlen + ctypes.sizeof(CstepEntry1Data)

    if hdr.snr:
        ent2_base = base + hdr.entriesnum * hdr.rlen
        end = max(end, ent2_base + (hdr.snr - 1) * hdr.ssz + ctypes.sizeof(CstepEntry2Data))

    return end


def _parse_v10(target: Target, offset: int) -> CstepTable:
    try:
        hdr = target.read_struct(CstepHeaderV10, offset)
    except OutOfBoundsError:
        log.debug('CSTEP header at %#x is truncated', offset)
        return CstepTable(offset=offset, version=CSTEP_VERSION_V10)

    base = offset + hdr.hlen

    check_extent(target, 'CSTEP', _records_end(hdr, offset))

    entries1 = []
    for data in record_offsets(base, hdr.rlen, hdr.entriesnum):
        ed = target.read_struct(CstepEntry1Data, data)
        entries1.append(CstepEntry1(offset=data, pstate=get_pstate(ed.flags), index=ed.index))

    # The second array starts right after the first one
    entries2 = []
    for data in record_offsets(base + hdr.entriesnum * hdr.rlen, hdr.ssz, hdr.snr):
        ed = target.read_struct(CstepEntry2Data, data)
        entries2.append(CstepEntry2(offset=data, freq=ed.freq, unkn0=ed.unkn0, unkn1=ed.unkn1,
                                    voltage=ed.voltage))

    log.debug('CSTEP table at %#x: %d + %d entries', offset, hdr.entriesnum, hdr.snr)

    return CstepTable(offset=offset, version=hdr.version,
                      hlen=hdr.hlen, rlen=hdr.rlen, entriesnum=hdr.entriesnum,
                      ssz=hdr.ssz, snr=hdr.snr,
                      entries1=tuple(entries1), entries2=tuple(entries2), valid=True)


_PARSERS = {
    CSTEP_VERSION_V10: _parse_v10,
}


def parse_cstep(target: Target, offset: int) -> CstepTable:
    version = target.read_u8(offset)

    parser = _PARSERS.get(version)
    if parser is None:
        log.warning('Unknown CSTEP table version %#x', version)
        raise UnsupportedVersionError('CSTEP', version)

    return parser(target, offset)
