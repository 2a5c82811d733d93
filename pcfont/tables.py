"""
pcfont.tables - PCF table parsers

(c) 2019--2024 Rob Hagemans
licence: https://opensource.org/licenses/MIT
"""

from typing import NamedTuple

from .decoder import FormatDecoder, read_format
from .errors import FormatError, InvalidMetricsCountError


def _string_at(strings, offset):
    """Extract null-terminated string from string pool."""
    if not 0 <= offset < len(strings):
        return ''
    name, _, _ = strings[offset:].partition(b'\0')
    return name.decode('latin-1')


def _check_count(count, what):
    if count < 0:
        raise FormatError(f'Negative {what} count {count}')
    return count


##############################################################################
# Properties table

# can be be or le
_PROPS = dict(
    name_offset='int32',
    is_string='int8',
    value='int32',
)

def read_properties(cursor):
    """Read the Properties table. Returns dict of str or int values."""
    decoder = FormatDecoder(read_format(cursor))
    nprops = _check_count(decoder.read(cursor, 'int32'), 'property')
    props = decoder.read_array(cursor, decoder.struct(**_PROPS), nprops)
    #  pad to next int32 boundary
    cursor.skip(0 if nprops&3 == 0 else 4-(nprops&3))
    string_size = _check_count(decoder.read(cursor, 'int32'), 'string pool')
    strings = cursor.read(string_size)
    xlfd_props = {}
    for prop in props:
        name = _string_at(strings, prop.name_offset)
        if prop.is_string:
            xlfd_props[name] = _string_at(strings, prop.value)
        else:
            xlfd_props[name] = int(prop.value)
    return xlfd_props


##############################################################################
# Accelerator table

class AcceleratorInfo(NamedTuple):
    """Font-wide shape flags and extents."""
    # /* if for all i, max(metrics[i].rightSideBearing - metrics[i].characterWidth) */
    # /*      <= minbounds.leftSideBearing */
    no_overlap: bool = False
    # /* Means the perchar field of the XFontStruct can be NULL */
    constant_metrics: bool = False
    # /* constantMetrics true and forall characters: */
    # /*      the left side bearing==0 */
    # /*      the right side bearing== the character's width */
    # /*      the character's ascent==the font's ascent */
    # /*      the character's descent==the font's descent */
    terminal_font: bool = False
    # /* monospace font like courier */
    constant_width: bool = False
    # /* Means that all inked bits are within the rectangle with x between [0,charwidth] */
    # /*  and y between [-descent,ascent]. So no ink overlaps another char when drawing */
    ink_inside: bool = False
    # /* true if the ink metrics differ from the metrics somewhere */
    ink_metrics: bool = False
    # /* 0=>left to right, 1=>right to left */
    draw_direction: bool = False
    font_ascent: int = 0
    font_descent: int = 0
    max_overlap: int = 0


_ACC_FLAGS = (
    'no_overlap', 'constant_metrics', 'terminal_font', 'constant_width',
    'ink_inside', 'ink_metrics', 'draw_direction',
)

_ACC_TABLE = dict(
    no_overlap='uint8',
    constant_metrics='uint8',
    terminal_font='uint8',
    constant_width='uint8',
    ink_inside='uint8',
    ink_metrics='uint8',
    draw_direction='uint8',
    padding='uint8',
    font_ascent='int32',
    font_descent='int32',
    max_overlap='int32',
)


def read_accelerators(cursor):
    """Read the Accelerator or BDF Accelerator table."""
    decoder = FormatDecoder(read_format(cursor))
    acc = vars(decoder.read(cursor, decoder.struct(**_ACC_TABLE)))
    return AcceleratorInfo(
        **{_k: bool(acc[_k]) for _k in _ACC_FLAGS},
        font_ascent=acc['font_ascent'],
        font_descent=acc['font_descent'],
        max_overlap=acc['max_overlap'],
    )


##############################################################################
# Glyph metrics and ink-metrics

# There are two different metrics tables, PCF_METRICS and PCF_INK_METRICS, the
# former contains the size of the stored bitmaps, while the latter contains the
# minimum bounding box. The two may contain the same data, but many CJK fonts
# pad the bitmaps so all bitmaps are the same size.

class Metric(NamedTuple):
    """Per-glyph metrics, as in XCharStruct."""
    # /* origin to left edge of raster */
    left_side_bearing: int
    # /* origin to right edge of raster */
    right_side_bearing: int
    # /* advance to next char's origin */
    character_width: int
    # /* baseline to top edge of raster */
    character_ascent: int
    # /* baseline to bottom edge of raster */
    character_descent: int


class MetricsMaxima(NamedTuple):
    """Running maxima over the pixel metrics; these size the glyph box."""
    max_ascent: int = 0
    max_descent: int = 0
    max_width: int = 0

    def update(self, metric):
        return MetricsMaxima(
            max_ascent=max(self.max_ascent, metric.character_ascent),
            max_descent=max(self.max_descent, metric.character_descent),
            max_width=max(self.max_width, metric.character_width),
        )

    @property
    def height(self):
        return self.max_ascent + self.max_descent


_UNCOMPRESSED_METRICS = dict(
    left_side_bearing='int16',
    right_side_bearing='int16',
    character_width='int16',
    character_ascent='int16',
    character_descent='int16',
)

# The (compressed) bytes are unsigned bytes which are offset by 0x80
# (so the actual value will be (getc(pcf_file)-0x80). :
_COMPRESSED_METRICS = dict(
    left_side_bearing='uint8',
    right_side_bearing='uint8',
    character_width='uint8',
    character_ascent='uint8',
    character_descent='uint8',
)


def read_metrics(cursor):
    """
    Read the Metrics or Ink-Metrics table.
    Returns tuple of Metric and the MetricsMaxima over them.
    """
    decoder = FormatDecoder(read_format(cursor))
    count = decoder.read(cursor, 'int16')
    if count <= 0:
        raise InvalidMetricsCountError(f'Invalid metrics count {count}')
    if decoder.format.compressed_metrics:
        records = decoder.read_array(
            cursor, decoder.struct(**_COMPRESSED_METRICS), count
        )
        # adjust unsigned bytes by 0x80 offset
        metrics = tuple(
            Metric(**{_k: _v-0x80 for _k, _v in vars(_m).items()})
            for _m in records
        )
    else:
        records = decoder.read_array(
            cursor, decoder.struct(**_UNCOMPRESSED_METRICS), count
        )
        metrics = tuple(Metric(**vars(_m)) for _m in records)
    maxima = MetricsMaxima()
    for metric in metrics:
        maxima = maxima.update(metric)
    return metrics, maxima


##############################################################################
# Encoding table

# FontForge docs suggest the encoding table has signed integers
# but the XFontStruct has them unsigned
_ENCODING_TABLE = dict(
    min_char_or_byte2='int16',
    max_char_or_byte2='int16',
    min_byte1='int16',
    max_byte1='int16',
    default_char='int16',
)


class EncodingMap(NamedTuple):
    """Map from code points to glyph indices."""
    min_char_or_byte2: int = 0
    max_char_or_byte2: int = -1
    min_byte1: int = 0
    max_byte1: int = 0
    default_char: int = 0
    # -1 means 'not used'
    indices: tuple = ()

    @property
    def columns(self):
        return max(0, self.max_char_or_byte2 - self.min_char_or_byte2 + 1)

    @property
    def rows(self):
        return max(0, self.max_byte1 - self.min_byte1 + 1)

    @property
    def single_byte(self):
        return self.min_byte1 == 0 and self.max_byte1 == 0

    def glyph_index_for(self, codepoint):
        """Glyph index for the given code point, or None if not mapped."""
        if not 0 <= codepoint <= 0xffff:
            return None
        if self.single_byte:
            table_index = codepoint - self.min_char_or_byte2
        else:
            hi, lo = codepoint >> 8, codepoint & 0xff
            if not self.min_char_or_byte2 <= lo <= self.max_char_or_byte2:
                return None
            if not self.min_byte1 <= hi <= self.max_byte1:
                return None
            table_index = (
                (hi - self.min_byte1) * self.columns
                + (lo - self.min_char_or_byte2)
            )
        if not 0 <= table_index < len(self.indices):
            return None
        index = self.indices[table_index]
        if index < 0:
            return None
        return index

    def codepoints(self):
        """Generate all code points in the table range."""
        if self.single_byte:
            return range(
                self.min_char_or_byte2,
                self.min_char_or_byte2 + len(self.indices)
            )
        return (
            (_hi << 8) | _lo
            for _hi in range(self.min_byte1, self.max_byte1+1)
            for _lo in range(self.min_char_or_byte2, self.max_char_or_byte2+1)
        )

    def items(self):
        """Generate (code point, glyph index) for all mapped code points."""
        for codepoint in self.codepoints():
            index = self.glyph_index_for(codepoint)
            if index is not None:
                yield codepoint, index


def read_encoding(cursor):
    """Read the BDF Encodings table."""
    decoder = FormatDecoder(read_format(cursor))
    enc = decoder.read(cursor, decoder.struct(**_ENCODING_TABLE))
    enc = EncodingMap(**vars(enc))
    count = enc.columns * enc.rows
    glyph_indices = decoder.read_array(cursor, 'int16', count)
    return enc._replace(indices=glyph_indices)


##############################################################################
# Bitmaps table

class RawBitmapBlock(NamedTuple):
    """Packed glyph bitmaps and their offsets."""
    glyph_count: int = 0
    offsets: tuple = ()
    bitmap_sizes: tuple = (0, 0, 0, 0)
    format: int = 0
    data: bytes = b''


def read_bitmaps(cursor):
    """Read the Bitmaps table."""
    format = read_format(cursor)
    decoder = FormatDecoder(format)
    glyph_count = _check_count(decoder.read(cursor, 'int32'), 'glyph')
    offsets = decoder.read_array(cursor, 'int32', glyph_count)
    # bytes # shorts # ints #?
    bitmap_sizes = decoder.read_array(cursor, 'int32', 4)
    bitmap_size = bitmap_sizes[format.glyph_pad]
    if bitmap_size < 0:
        raise FormatError(f'Negative bitmap size {bitmap_size}')
    bitmap_data = cursor.read(bitmap_size)
    return RawBitmapBlock(
        glyph_count=glyph_count,
        offsets=offsets,
        bitmap_sizes=bitmap_sizes,
        format=format.word,
        data=bitmap_data,
    )


##############################################################################
# Scalable widths and glyph names

def read_swidths(cursor):
    """Read the Scalable Widths table."""
    decoder = FormatDecoder(read_format(cursor))
    glyph_count = _check_count(decoder.read(cursor, 'int32'), 'glyph')
    return decoder.read_array(cursor, 'int32', glyph_count)


def read_glyph_names(cursor):
    """Read the Glyph Names table."""
    decoder = FormatDecoder(read_format(cursor))
    glyph_count = _check_count(decoder.read(cursor, 'int32'), 'glyph')
    offsets = decoder.read_array(cursor, 'int32', glyph_count)
    string_size = _check_count(decoder.read(cursor, 'int32'), 'string pool')
    strings = cursor.read(string_size)
    return tuple(_string_at(strings, _ofs) for _ofs in offsets)
