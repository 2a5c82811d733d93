"""
pcfont test suite
low-level decoding: cursor, binary structures, format words and directory
"""

import unittest

from pcfont.cursor import ByteCursor
from pcfont.struct import big_endian as be, little_endian as le
from pcfont.decoder import (
    TableFormat, FormatDecoder, read_format, PCF_BYTE_MASK,
    PCF_COMPRESSED_METRICS,
)
from pcfont.toc import read_toc, table_name, MAGIC, PCF_PROPERTIES, PCF_METRICS
from pcfont.binary import ceildiv, round_up
from pcfont.errors import (
    DecodeError, TruncatedInputError, UnsupportedVariantError,
    BadMagicError, InvalidTableCountError,
)
from .base import (
    BaseTester, BIG_FORMAT, LITTLE_FORMAT, build_pcf, properties_table,
    metrics_table,
)


class TestCursor(BaseTester):

    def test_read(self):
        cursor = ByteCursor(b'abcd')
        self.assertEqual(cursor.read(2), b'ab')
        self.assertEqual(cursor.tell(), 2)
        self.assertEqual(cursor.remaining, 2)
        self.assertEqual(cursor.read(2), b'cd')
        self.assertEqual(cursor.remaining, 0)

    def test_read_past_end(self):
        cursor = ByteCursor(b'abcd')
        cursor.read(2)
        with self.assertRaises(TruncatedInputError) as cm:
            cursor.read(3)
        self.assertEqual(cm.exception.offset, 2)
        # position is unchanged after a failed read
        self.assertEqual(cursor.tell(), 2)

    def test_negative_read(self):
        with self.assertRaises(TruncatedInputError):
            ByteCursor(b'abcd').read(-1)

    def test_seek(self):
        cursor = ByteCursor(b'abcd')
        cursor.seek(4)
        self.assertEqual(cursor.read(0), b'')
        cursor.seek(1)
        self.assertEqual(cursor.read(1), b'b')
        with self.assertRaises(TruncatedInputError):
            cursor.seek(5)
        with self.assertRaises(TruncatedInputError):
            cursor.seek(-1)

    def test_skip(self):
        cursor = ByteCursor(b'abcd')
        cursor.skip(3)
        self.assertEqual(cursor.read(1), b'd')
        with self.assertRaises(TruncatedInputError):
            cursor.skip(1)


class TestBinary(unittest.TestCase):

    def test_ceildiv(self):
        self.assertEqual(ceildiv(7, 8), 1)
        self.assertEqual(ceildiv(8, 8), 1)
        self.assertEqual(ceildiv(9, 8), 2)

    def test_round_up(self):
        self.assertEqual(round_up(1, 4), 4)
        self.assertEqual(round_up(4, 4), 4)
        self.assertEqual(round_up(5, 2), 6)
        self.assertEqual(round_up(1, 1), 1)


class TestStruct(unittest.TestCase):

    def test_struct_bytes(self):
        mystruct = be.Struct(first='uint8', second='uint16')
        self.assertEqual(mystruct(first=1, second=2), b'\1\0\2')
        self.assertEqual(mystruct.size, 3)
        value = mystruct.from_bytes(b'\1\0\2')
        self.assertEqual((value.first, value.second), (1, 2))

    def test_little_endian_struct(self):
        mystruct = le.Struct(first='uint8', second='uint16')
        self.assertEqual(mystruct(first=1, second=2), b'\1\2\0')

    def test_signed(self):
        self.assertEqual(be.int16.from_bytes(b'\xff\xfe'), -2)
        self.assertEqual(le.int32.from_bytes(b'\xfe\xff\xff\xff'), -2)
        self.assertEqual(be.uint16.from_bytes(b'\xff\xfe'), 0xfffe)

    def test_array(self):
        self.assertEqual((be.int16 * 2).from_bytes(b'\0\1\0\2'), (1, 2))
        self.assertEqual((be.int16 * 0).from_bytes(b''), ())

    def test_short_data(self):
        with self.assertRaises(TruncatedInputError):
            be.int32.from_bytes(b'\0\0')


class TestFormat(unittest.TestCase):

    def test_format_word(self):
        word = BIG_FORMAT | 2 | (1 << 4) | PCF_COMPRESSED_METRICS
        format = TableFormat.from_word(word)
        self.assertEqual(format.word, word)
        self.assertEqual(format.byte_order, 'big')
        self.assertEqual(format.bit_order, 'big')
        self.assertEqual(format.glyph_pad, 2)
        self.assertEqual(format.padding_bytes, 4)
        self.assertEqual(format.scan_unit, 1)
        self.assertTrue(format.compressed_metrics)
        self.assertTrue(format.msb_first)

    def test_default_format(self):
        format = TableFormat.from_word(0)
        self.assertEqual(format.byte_order, 'little')
        self.assertEqual(format.bit_order, 'little')
        self.assertEqual(format.padding_bytes, 1)
        self.assertFalse(format.compressed_metrics)
        self.assertFalse(format.msb_first)

    def test_padding_units(self):
        self.assertEqual(
            [TableFormat.from_word(_p).padding_bytes for _p in range(4)],
            [1, 2, 4, 8]
        )

    def test_read_format_is_little_endian(self):
        cursor = ByteCursor(le.uint32(BIG_FORMAT))
        self.assertEqual(read_format(cursor).word, BIG_FORMAT)
        self.assertEqual(cursor.tell(), 4)


class TestFormatDecoder(unittest.TestCase):

    def test_big_endian(self):
        decoder = FormatDecoder(BIG_FORMAT)
        self.assertEqual(decoder.read(ByteCursor(b'\1\2'), 'int16'), 0x0102)

    def test_little_endian(self):
        decoder = FormatDecoder(LITTLE_FORMAT)
        self.assertEqual(decoder.read(ByteCursor(b'\1\2'), 'int16'), 0x0201)

    def test_read_array(self):
        decoder = FormatDecoder(BIG_FORMAT)
        cursor = ByteCursor(be.int32(-1) + be.int32(7))
        self.assertEqual(decoder.read_array(cursor, 'int32', 2), (-1, 7))

    def test_read_struct(self):
        decoder = FormatDecoder(LITTLE_FORMAT)
        record = decoder.struct(a='int16', b='uint8')
        value = decoder.read(ByteCursor(b'\2\0\3'), record)
        self.assertEqual((value.a, value.b), (2, 3))

    def test_lsb_first_unsupported(self):
        decoder = FormatDecoder(PCF_BYTE_MASK)
        with self.assertRaises(UnsupportedVariantError):
            decoder.read(ByteCursor(b'\1\2'), 'int16')
        with self.assertRaises(UnsupportedVariantError):
            decoder.read_array(ByteCursor(b'\1\2'), 'int8', 2)


class TestErrors(unittest.TestCase):

    def test_message_context(self):
        error = DecodeError('Bad thing', table='metrics', offset=16)
        self.assertEqual(str(error), 'Bad thing [table metrics, offset 0x10]')
        self.assertEqual(str(DecodeError('Bad thing')), 'Bad thing')

    def test_annotate_keeps_first(self):
        error = TruncatedInputError('Short', offset=4)
        error.annotate('bitmaps', 100)
        error.annotate('metrics', 200)
        self.assertEqual(error.table, 'bitmaps')
        self.assertEqual(error.offset, 4)

    def test_hierarchy(self):
        self.assertTrue(issubclass(BadMagicError, DecodeError))
        self.assertTrue(issubclass(TruncatedInputError, DecodeError))
        self.assertTrue(issubclass(UnsupportedVariantError, DecodeError))


class TestDirectory(BaseTester):

    def test_read_toc(self):
        props = properties_table({'FOUNDRY': 'Test'})
        metrics = metrics_table(((0, 4, 4, 5, 1),))
        data = build_pcf((
            (PCF_PROPERTIES, BIG_FORMAT, props),
            (PCF_METRICS, LITTLE_FORMAT, metrics),
        ))
        toc = read_toc(ByteCursor(data))
        self.assertEqual(len(toc), 2)
        self.assertEqual(toc[0].type, PCF_PROPERTIES)
        self.assertEqual(toc[0].name, 'properties')
        self.assertTrue(toc[0].known)
        # header of 8 bytes plus two directory entries of 16 bytes
        self.assertEqual(toc[0].offset, 40)
        self.assertEqual(toc[0].size, len(props))
        self.assertEqual(toc[1].offset, 40 + len(props))
        self.assertEqual(toc[1].format, LITTLE_FORMAT)

    def test_bad_magic(self):
        data = build_pcf((), magic=b'STAR', table_count=1)
        with self.assertRaises(BadMagicError):
            read_toc(ByteCursor(data))

    def test_zero_tables(self):
        with self.assertRaises(InvalidTableCountError):
            read_toc(ByteCursor(build_pcf(())))

    def test_negative_table_count(self):
        with self.assertRaises(InvalidTableCountError):
            read_toc(ByteCursor(build_pcf((), table_count=-1)))

    def test_truncated_directory(self):
        with self.assertRaises(TruncatedInputError):
            read_toc(ByteCursor(build_pcf((), table_count=2)))

    def test_empty_input(self):
        with self.assertRaises(BadMagicError):
            read_toc(ByteCursor(b''))

    def test_short_input(self):
        for data in (b'STAR', b'hello', b'\1f'):
            with self.subTest(data=data):
                with self.assertRaises(BadMagicError):
                    read_toc(ByteCursor(data))

    def test_signature_only(self):
        with self.assertRaises(TruncatedInputError):
            read_toc(ByteCursor(MAGIC))

    def test_table_name(self):
        self.assertEqual(table_name(PCF_METRICS), 'metrics')
        self.assertEqual(table_name(0x400), 'unknown-0x400')


if __name__ == '__main__':
    unittest.main()
