"""
pcfont.raster - glyph bitmap reconstruction

(c) 2019--2024 Rob Hagemans
licence: https://opensource.org/licenses/MIT
"""

import logging

from .binary import round_up
from .decoder import TableFormat
from .errors import GlyphCountMismatchError, TruncatedInputError


class Glyph:
    """Glyph raster in the font-wide glyph box; one byte per pixel, 0 or 1."""

    def __init__(self, width, height, pixels=None):
        self._width = width
        self._height = height
        if pixels is None:
            pixels = bytes(width * height)
        if len(pixels) != width * height:
            raise ValueError(
                f'Pixel buffer of {len(pixels)} does not match {width}x{height}'
            )
        self._pixels = bytes(pixels)

    def __repr__(self):
        return f'{type(self).__name__}(width={self._width}, height={self._height})'

    def __eq__(self, other):
        if not isinstance(other, Glyph):
            return NotImplemented
        return (
            (self._width, self._height, self._pixels)
            == (other._width, other._height, other._pixels)
        )

    @property
    def width(self):
        return self._width

    @property
    def height(self):
        return self._height

    @property
    def pixels(self):
        """Row-major pixel bytes."""
        return self._pixels

    def pixel(self, x, y):
        """Pixel value at (x, y), counted from top left."""
        if not (0 <= x < self._width and 0 <= y < self._height):
            raise IndexError(f'Pixel ({x}, {y}) outside {self._width}x{self._height} glyph')
        return self._pixels[y * self._width + x]

    def rows(self):
        """Tuple of rows, each a tuple of booleans."""
        return tuple(
            tuple(bool(_p) for _p in self._pixels[_y*self._width:(_y+1)*self._width])
            for _y in range(self._height)
        )

    def as_text(self, paper='.', ink='@', end='\n'):
        """Convert raster to text."""
        if not self._height:
            return ''
        return ''.join(
            ''.join(ink if _p else paper for _p in _row) + end
            for _row in self.rows()
        )


def rasterize(metrics, maxima, accelerators, bitmaps):
    """
    Convert packed bitmaps to glyph rasters.

    metrics: pixel metrics, one per glyph
    maxima: MetricsMaxima over the pixel metrics
    accelerators: AcceleratorInfo providing font ascent and max overlap
    bitmaps: RawBitmapBlock
    """
    if len(metrics) != bitmaps.glyph_count:
        raise GlyphCountMismatchError(
            f'Metrics table has {len(metrics)} glyphs, '
            f'bitmaps table has {bitmaps.glyph_count}'
        )
    format = TableFormat.from_word(bitmaps.format)
    if format.scan_unit:
        logging.debug(
            'Ignoring scan unit of %d bytes in bitmap table', 1 << format.scan_unit
        )
    box_height = maxima.max_ascent + maxima.max_descent
    baseline = accelerators.font_ascent - 1
    return tuple(
        _rasterize_glyph(
            bitmaps.data, _offset, _metric, format,
            box_height=box_height, baseline=baseline,
            max_overlap=accelerators.max_overlap,
        )
        for _offset, _metric in zip(bitmaps.offsets, metrics)
    )


def _rasterize_glyph(data, offset, metric, format, box_height, baseline, max_overlap):
    """Extract one glyph from the bitmap data."""
    width = max(0, metric.character_width + max_overlap)
    height = metric.character_ascent + metric.character_descent
    # rows are padded to a multiple of the glyph pad unit
    bytes_per_row = round_up(max(width // 8, 1), format.padding_bytes)
    # align on common baseline inside the glyph box
    shift = max(0, baseline - metric.character_ascent + 1)
    pixels = bytearray(width * max(0, box_height))
    for y in range(height):
        row = y + shift
        if row >= box_height:
            break
        start = offset + bytes_per_row * y
        for x in range(width):
            index = start + x // 8
            if not 0 <= index < len(data):
                raise TruncatedInputError(
                    f'Glyph bitmap at offset {offset} runs outside '
                    f'bitmap data of {len(data)} bytes'
                )
            byte = data[index]
            if format.msb_first:
                bit = (byte << (x % 8)) & 0x80
            else:
                bit = (byte >> (x % 8)) & 1
            pixels[row * width + x] = 1 if bit else 0
    return Glyph(width, max(0, box_height), pixels)
