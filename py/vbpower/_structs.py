"""
Power table binary layout definitions.

This module defines the ctypes structures used for reading the BOOST and
CSTEP sub-tables of the BIT 'P' power directory. All video BIOS data is
little-endian and byte packed.
"""

import ctypes


class BoostHeaderV11(ctypes.LittleEndianStructure):
    """BOOST table header, version 0x11 (6 bytes)."""
    _pack_ = 1
    _fields_ = [
        ('version', ctypes.c_uint8),        # Table version (0x11)
        ('hlen', ctypes.c_uint8),           # Header length
        ('rlen', ctypes.c_uint8),           # Entry record length, without subentries
        ('ssz', ctypes.c_uint8),            # Subentry record length
        ('snr', ctypes.c_uint8),            # Number of subentries per entry
        ('entriesnum', ctypes.c_uint8),     # Number of entries
    ]


class BoostEntryData(ctypes.LittleEndianStructure):
    """BOOST entry fixed fields (6 bytes)."""
    _pack_ = 1
    _fields_ = [
        ('flags', ctypes.c_uint16),         # Packed, pstate in bits 8..5
        ('min', ctypes.c_uint16),           # Minimum clock (MHz)
        ('max', ctypes.c_uint16),           # Maximum clock (MHz)
    ]


class BoostSubentryData(ctypes.LittleEndianStructure):
    """BOOST subentry fixed fields (6 bytes)."""
    _pack_ = 1
    _fields_ = [
        ('domain', ctypes.c_uint8),         # Clock domain id
        ('percent', ctypes.c_uint8),        # Percentage
        ('min', ctypes.c_uint16),           # Minimum clock (MHz)
        ('max', ctypes.c_uint16),           # Maximum clock (MHz)
    ]


class CstepHeaderV10(ctypes.LittleEndianStructure):
    """CSTEP table header, version 0x10 (6 bytes)."""
    _pack_ = 1
    _fields_ = [
        ('version', ctypes.c_uint8),        # Table version (0x10)
        ('hlen', ctypes.c_uint8),           # Header length
        ('rlen', ctypes.c_uint8),           # First array record length
        ('entriesnum', ctypes.c_uint8),     # First array record count
        ('ssz', ctypes.c_uint8),            # Second array record length
        ('snr', ctypes.c_uint8),            # Second array record count
    ]


class CstepEntry1Data(ctypes.LittleEndianStructure):
    """CSTEP first array fixed fields (4 bytes)."""
    _pack_ = 1
    _fields_ = [
        ('flags', ctypes.c_uint16),         # Packed, pstate in bits 8..5
        ('unk2', ctypes.c_uint8),
        ('index', ctypes.c_uint8),          # Index into the second array
    ]


class CstepEntry2Data(ctypes.LittleEndianStructure):
    """CSTEP second array fixed fields (5 bytes)."""
    _pack_ = 1
    _fields_ = [
        ('freq', ctypes.c_uint16),          # Frequency (MHz), 0 = unused
        ('unkn0', ctypes.c_uint8),
        ('unkn1', ctypes.c_uint8),
        ('voltage', ctypes.c_uint8),
    ]


# Known table versions
BOOST_VERSION_V11 = 0x11
CSTEP_VERSION_V10 = 0x10

# Width of a power directory slot
SLOT_SIZE = 2

# Power state index within the packed entry flags
PSTATE_HIGH = 8
PSTATE_LOW = 5
