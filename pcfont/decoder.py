"""
pcfont.decoder - format-word driven primitive decoding

(c) 2019--2024 Rob Hagemans
licence: https://opensource.org/licenses/MIT
"""

from typing import NamedTuple

from .struct import big_endian as be, little_endian as le
from .errors import UnsupportedVariantError


# format field
#define PCF_DEFAULT_FORMAT       0x00000000
PCF_DEFAULT_FORMAT = 0x00000000
#define PCF_INKBOUNDS           0x00000200
PCF_INKBOUNDS = 0x00000200
#define PCF_ACCEL_W_INKBOUNDS   0x00000100
PCF_ACCEL_W_INKBOUNDS = 0x00000100
#define PCF_COMPRESSED_METRICS  0x00000100
PCF_COMPRESSED_METRICS = 0x00000100

# format field modifiers
#define PCF_GLYPH_PAD_MASK       (3<<0)            /* See the bitmap table for explanation */
PCF_GLYPH_PAD_MASK = (3<<0)
#define PCF_BYTE_MASK           (1<<2)            /* If set then Most Sig Byte First */
PCF_BYTE_MASK = (1<<2)
#define PCF_BIT_MASK            (1<<3)            /* If set then Most Sig Bit First */
PCF_BIT_MASK = (1<<3)
#define PCF_SCAN_UNIT_MASK      (3<<4)            /* See the bitmap table for explanation */
PCF_SCAN_UNIT_MASK = (3<<4)


class TableFormat(NamedTuple):
    """Decoding strategy derived from a table's format word."""
    word: int
    byte_order: str
    bit_order: str
    glyph_pad: int
    scan_unit: int
    compressed_metrics: bool

    @classmethod
    def from_word(cls, word):
        word = int(word) & 0xffffffff
        return cls(
            word=word,
            byte_order='big' if word & PCF_BYTE_MASK else 'little',
            bit_order='big' if word & PCF_BIT_MASK else 'little',
            # /* how each row in each glyph's bitmap is padded (format&3) */
            # /*  0=>bytes, 1=>shorts, 2=>ints */
            glyph_pad=word & PCF_GLYPH_PAD_MASK,
            # /* what the bits are stored in (bytes, shorts, ints) (format>>4)&3 */
            scan_unit=(word & PCF_SCAN_UNIT_MASK) >> 4,
            compressed_metrics=bool(word & PCF_COMPRESSED_METRICS),
        )

    @property
    def padding_bytes(self):
        """Row padding unit in bytes."""
        return 1 << self.glyph_pad

    @property
    def msb_first(self):
        """Leftmost pixel is the most significant bit."""
        return self.bit_order == 'big'


class FormatDecoder:
    """Read integers in the byte order selected by a table's format word."""

    def __init__(self, format):
        if not isinstance(format, TableFormat):
            format = TableFormat.from_word(format)
        self.format = format
        self._base = be if format.byte_order == 'big' else le

    def __repr__(self):
        return f'{type(self).__name__}({self.format.word:#x})'

    def _check_variant(self):
        # FIXME: lsb-first tables would need their bits reversed
        if not self.format.msb_first:
            raise UnsupportedVariantError(
                f'Least-significant-bit-first format {self.format.word:#x} '
                'is not supported'
            )

    def _type(self, type):
        if isinstance(type, str):
            return getattr(self._base, type)
        return type

    def struct(self, **description):
        """Record type in this table's byte order."""
        return self._base.Struct(**description)

    def read(self, cursor, type):
        """Read one value of the given type or type name, e.g. 'int16'."""
        self._check_variant()
        return self._type(type).read_from(cursor)

    def read_array(self, cursor, type, count):
        """Read a run of values of the given type or type name."""
        self._check_variant()
        return (self._type(type) * count).read_from(cursor)


def read_format(cursor):
    """Read the format record at start of tables."""
    return TableFormat.from_word(le.uint32.read_from(cursor))
