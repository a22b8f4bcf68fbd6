#!/usr/bin/env python3

import unittest

import vbpower as vp
from imagebuilder import CSTEP_ENTRIES1, CSTEP_ENTRIES2, CSTEP_OFFSET, ImageBuilder, build_v2_image


class CstepTests(unittest.TestCase):
    def setUp(self):
        self.cstep = vp.parse_cstep(build_v2_image().target(), CSTEP_OFFSET)

    def test_header(self):
        cstep = self.cstep

        self.assertTrue(cstep.valid)
        self.assertEqual(cstep.version, 0x10)
        self.assertEqual((cstep.hlen, cstep.rlen, cstep.entriesnum, cstep.ssz, cstep.snr), (6, 4, 2, 5, 3))

    def test_entries1(self):
        cstep = self.cstep

        self.assertEqual(len(cstep.entries1), cstep.entriesnum)
        self.assertEqual([e.offset for e in cstep.entries1], [CSTEP_OFFSET + 6, CSTEP_OFFSET + 10])
        self.assertEqual([e.pstate for e in cstep.entries1], [1, 2])
        self.assertEqual([e.index for e in cstep.entries1], [index for _, index in CSTEP_ENTRIES1])

    def test_entries2(self):
        cstep = self.cstep
        base = CSTEP_OFFSET + cstep.hlen + cstep.entriesnum * cstep.rlen

        self.assertEqual(len(cstep.entries2), cstep.snr)

        for i, (e, (freq, unkn0, unkn1, voltage)) in enumerate(zip(cstep.entries2, CSTEP_ENTRIES2)):
            self.assertEqual(e.offset, base + i * cstep.ssz)
            self.assertEqual(e.freq, freq)
            self.assertEqual(e.unkn0, unkn0)
            self.assertEqual(e.unkn1, unkn1)
            self.assertEqual(e.voltage, voltage)
            self.assertEqual(e.valid, freq > 0)

    def test_unused_entries_kept(self):
        cstep = self.cstep

        self.assertFalse(cstep.entries2[1].valid)
        self.assertEqual(cstep.entries2[1].freq, 0)
        self.assertEqual([i for i, _ in cstep.valid_entries2()], [0, 2])


class CstepLayoutTests(unittest.TestCase):
    def test_header_order(self):
        # entriesnum precedes ssz/snr, unlike BOOST
        b = ImageBuilder()
        b.put(0x40, bytes([0x10, 8, 5, 1, 6, 2]))
        b.put(0x48, bytes([0xa0, 0x00, 0xff, 0x07, 0xee]))
        b.put(0x4d, bytes([0x10, 0x00, 1, 2, 3, 0xff]))
        b.put(0x53, bytes([0x20, 0x00, 4, 5, 6, 0xff]))

        cstep = vp.parse_cstep(b.target(), 0x40)

        self.assertEqual((cstep.hlen, cstep.rlen, cstep.entriesnum, cstep.ssz, cstep.snr), (8, 5, 1, 6, 2))
        self.assertEqual(len(cstep.entries1), 1)
        self.assertEqual(cstep.entries1[0].pstate, 5)
        self.assertEqual(cstep.entries1[0].index, 7)
        self.assertEqual([(e.offset, e.freq, e.unkn0, e.unkn1, e.voltage) for e in cstep.entries2],
                         [(0x4d, 16, 1, 2, 3), (0x53, 32, 4, 5, 6)])

    def test_no_entries1(self):
        b = ImageBuilder()
        b.cstep(0x40, [], [(100, 0, 0, 1)])

        cstep = vp.parse_cstep(b.target(), 0x40)

        self.assertEqual(cstep.entries1, ())
        self.assertEqual([e.offset for e in cstep.entries2], [0x46])

    def test_empty_long_header(self):
        # The header claims 0x20 bytes but the image ends at 0x50
        b = ImageBuilder(0x50)
        b.put(0x40, bytes([0x10, 0x20, 4, 0, 5, 0]))

        cstep = vp.parse_cstep(b.target(), 0x40)

        self.assertTrue(cstep.valid)
        self.assertEqual(cstep.hlen, 0x20)
        self.assertEqual(cstep.entries1, ())
        self.assertEqual(cstep.entries2, ())

    def test_empty(self):
        b = ImageBuilder()
        b.cstep(0x40, [], [])

        cstep = vp.parse_cstep(b.target(), 0x40)

        self.assertTrue(cstep.valid)
        self.assertEqual(cstep.entries1, ())
        self.assertEqual(cstep.entries2, ())


class CstepErrorTests(unittest.TestCase):
    def test_unsupported_version(self):
        for version in (0x00, 0x11, 0x20):
            b = ImageBuilder()
            b.cstep(0x40, CSTEP_ENTRIES1, CSTEP_ENTRIES2, version=version)

            with self.assertLogs('vbpower.cstep', level='WARNING'):
                with self.assertRaises(vp.UnsupportedVersionError) as cm:
                    vp.parse_cstep(b.target(), 0x40)

            self.assertEqual(cm.exception.version, version)
            self.assertEqual(cm.exception.table, 'CSTEP')

    def test_truncated_header(self):
        b = ImageBuilder(0x43)
        b.put_u8(0x40, 0x10)

        cstep = vp.parse_cstep(b.target(), 0x40)

        self.assertFalse(cstep.valid)
        self.assertEqual(cstep.entries1, ())
        self.assertEqual(cstep.entries2, ())

    def test_records_past_image(self):
        b = ImageBuilder(0x50)
        b.put(0x40, bytes([0x10, 6, 4, 1, 5, 255]))

        self.assertRaises(vp.TruncatedTableError, vp.parse_cstep, b.target(), 0x40)

    def test_records_at_image_end(self):
        b = ImageBuilder()
        b.cstep(0x40, CSTEP_ENTRIES1, CSTEP_ENTRIES2)
        end = 0x40 + 6 + 2 * 4 + 3 * 5

        cstep = vp.parse_cstep(vp.ImageTarget(bytes(b.data[:end])), 0x40)
        self.assertEqual(len(cstep.entries2), 3)

        self.assertRaises(vp.TruncatedTableError, vp.parse_cstep, vp.ImageTarget(bytes(b.data[:end - 1])), 0x40)


if __name__ == '__main__':
    unittest.main()
