"""Text rendering of decoded power tables."""

from __future__ import annotations

import tabulate

from .directory import UNKNOWN_NAME
from .model import BoostTable, CstepTable, PowerDirectory
from .target import Target

__all__ = [
    'format_hex',
    'raw_bytes',
    'hexdump',
    'format_directory',
    'format_boost',
    'format_cstep',
    'format_power',
]

tabulate.PRESERVE_WHITESPACE = True


def format_hex(val: int) -> str:
    return f'0x{val:x}'


def raw_bytes(target: Target, addr: int, length: int) -> str:
    """Space separated hex bytes, clamped to the end of the image."""
    length = max(0, min(length, target.length - addr))
    return ' '.join(f'{b:02x}' for b in target.read_bytes(addr, length))


def hexdump(target: Target, addr: int, length: int) -> str:
    lines = []
    for i in range(0, length, 16):
        lines.append(f'{addr + i:06x}: {raw_bytes(target, addr + i, min(16, length - i))}')
    return '\n'.join(lines)


def format_directory(pd: PowerDirectory) -> str:
    out = [f"BIT table 'P' at {format_hex(pd.location.offset)}, version {pd.version}"]

    table = []
    for ref in pd.slots():
        name = ref.name if ref.name == UNKNOWN_NAME else f'{ref.name} TABLE'
        table.append((f'0x{ref.slot:02x}', format_hex(ref.offset), name))

    out.append(tabulate.tabulate(table, ['Slot', 'Offset', 'Table'], disable_numparse=True))
    return '\n'.join(out)


def format_boost(boost: BoostTable, target: Target | None = None) -> str:
    """Render a BOOST table. When a target is given, raw record bytes are included."""
    out = [f'BOOST table at {format_hex(boost.offset)}, version {boost.version:x}'
           + ('' if boost.valid else ' (invalid)')]

    if target is not None:
        out.append(hexdump(target, boost.offset, boost.hlen))

    table = []
    for i, e in enumerate(boost.entries):
        row = [str(i), f'pstate {e.pstate:x}', '', e.min, e.max]
        if target is not None:
            row.append(raw_bytes(target, e.offset, boost.rlen))
        table.append(row)

        for j, sub in enumerate(e.subentries):
            row = [f'    {j}', f'domain {sub.domain:x}', sub.percent, sub.min, sub.max]
            if target is not None:
                row.append(raw_bytes(target, sub.offset, boost.ssz))
            table.append(row)

    headers = ['#', 'Id', 'Percent', 'Min (MHz)', 'Max (MHz)']
    if target is not None:
        headers.append('Raw')

    out.append(tabulate.tabulate(table, headers, disable_numparse=True))
    return '\n'.join(out)


def format_cstep(cstep: CstepTable, target: Target | None = None) -> str:
    """Render a CSTEP table. Unused second-array entries are skipped."""
    out = [f'CSTEP table at {format_hex(cstep.offset)}, version {cstep.version:x}'
           + ('' if cstep.valid else ' (invalid)')]

    if target is not None:
        out.append(hexdump(target, cstep.offset, cstep.hlen))

    table1 = []
    for i, e in enumerate(cstep.entries1):
        row = [i, f'{e.pstate:x}', e.index]
        if target is not None:
            row.append(raw_bytes(target, e.offset, cstep.rlen))
        table1.append(row)

    headers1 = ['#', 'PState', 'Index']
    if target is not None:
        headers1.append('Raw')

    out.append(tabulate.tabulate(table1, headers1, disable_numparse=True))
    out.append('---')

    table2 = []
    for i, e in cstep.valid_entries2():
        row = [i, e.freq, f'{e.unkn0:x}', f'{e.unkn1:x}', e.voltage]
        if target is not None:
            row.append(raw_bytes(target, e.offset, cstep.ssz))
        table2.append(row)

    headers2 = ['#', 'Freq (MHz)', 'Unkn0', 'Unkn1', 'Voltage']
    if target is not None:
        headers2.append('Raw')

    out.append(tabulate.tabulate(table2, headers2, disable_numparse=True))
    return '\n'.join(out)


def format_power(pd: PowerDirectory, target: Target | None = None) -> str:
    sections = [format_directory(pd)]

    if pd.boost:
        sections.append(format_boost(pd.boost, target))

    if pd.cstep:
        sections.append(format_cstep(pd.cstep, target))

    return '\n\n'.join(sections) + '\n'
