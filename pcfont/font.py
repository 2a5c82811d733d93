"""
pcfont.font - decoded PCF font

(c) 2019--2024 Rob Hagemans
licence: https://opensource.org/licenses/MIT
"""

import logging
from pathlib import Path
from types import SimpleNamespace

from .cursor import ByteCursor
from .errors import DecodeError
from .toc import (
    read_toc, PCF_PROPERTIES, PCF_ACCELERATORS, PCF_METRICS, PCF_BITMAPS,
    PCF_INK_METRICS, PCF_BDF_ENCODINGS, PCF_SWIDTHS, PCF_GLYPH_NAMES,
    PCF_BDF_ACCELERATORS,
)
from .tables import (
    read_properties, read_accelerators, read_metrics, read_encoding,
    read_bitmaps, read_swidths, read_glyph_names,
    AcceleratorInfo, EncodingMap, MetricsMaxima, RawBitmapBlock,
)
from .raster import rasterize
from . import styles


def loads(data):
    """Decode a PCF font from bytes."""
    return PCFFont.from_bytes(data)


def load(infile):
    """Decode a PCF font from a file path or binary stream."""
    if hasattr(infile, 'read'):
        return loads(infile.read())
    return loads(Path(infile).read_bytes())


def _read_pcf(cursor):
    """Read all tables from a PCF file."""
    toc = read_toc(cursor)
    pcf_data = SimpleNamespace(
        xlfd_props={},
        acc_props=None,
        bdf_acc_props=None,
        metrics=None,
        maxima=MetricsMaxima(),
        ink_metrics=None,
        bitmaps=None,
        encoding=None,
        swidths=None,
        glyph_names=None,
    )
    for entry in toc:
        if not entry.known:
            logging.debug('Skipping unknown table type %#x', entry.type)
            continue
        logging.debug(
            'Reading %s table at offset %#x (format %#x)',
            entry.name, entry.offset, entry.format
        )
        try:
            cursor.seek(entry.offset)
            if entry.type == PCF_PROPERTIES:
                pcf_data.xlfd_props.update(read_properties(cursor))
            elif entry.type == PCF_ACCELERATORS:
                # mandatory if BDF_ACCELERATORS not defined
                pcf_data.acc_props = read_accelerators(cursor)
            elif entry.type == PCF_BDF_ACCELERATORS:
                # optional
                pcf_data.bdf_acc_props = read_accelerators(cursor)
            elif entry.type == PCF_METRICS:
                # mandatory
                pcf_data.metrics, pcf_data.maxima = read_metrics(cursor)
            elif entry.type == PCF_INK_METRICS:
                # optional
                pcf_data.ink_metrics, _ = read_metrics(cursor)
            elif entry.type == PCF_BITMAPS:
                # mandatory
                pcf_data.bitmaps = read_bitmaps(cursor)
            elif entry.type == PCF_BDF_ENCODINGS:
                # mandatory, but could be empty
                pcf_data.encoding = read_encoding(cursor)
            elif entry.type == PCF_SWIDTHS:
                # optional - does not exist in X11 R6.4 sources
                pcf_data.swidths = read_swidths(cursor)
            elif entry.type == PCF_GLYPH_NAMES:
                # optional - does not exist in X11 R6.4 sources
                pcf_data.glyph_names = read_glyph_names(cursor)
        except DecodeError as e:
            e.annotate(entry.name, entry.offset)
            raise
    return pcf_data


class PCFFont:
    """Font decoded from a PCF file."""

    def __init__(
            self, *, properties, accelerators, encoding, glyphs,
            maxima, metrics=(), ink_metrics=None,
            bdf_accelerators=None, swidths=None, glyph_names=None,
        ):
        """Set up font from decoded tables. Use PCFFont.from_bytes to decode a file."""
        self._properties = dict(properties)
        self._acc = accelerators
        self._bdf_acc = bdf_accelerators
        self._encoding = encoding
        self._glyphs = tuple(glyphs)
        self._maxima = maxima
        self._metrics = tuple(metrics)
        self._ink_metrics = ink_metrics
        self._swidths = swidths
        self._glyph_names = glyph_names

    @classmethod
    def from_bytes(cls, data):
        """Decode PCF file contents."""
        pcf_data = _read_pcf(ByteCursor(data))
        acc = pcf_data.acc_props
        if acc is None:
            acc = pcf_data.bdf_acc_props
            if acc is None:
                logging.warning('No accelerator table found.')
                acc = AcceleratorInfo()
        encoding = pcf_data.encoding
        if encoding is None:
            logging.warning('No encoding table found; no glyphs will be mapped.')
            encoding = EncodingMap()
        metrics = pcf_data.metrics or ()
        bitmaps = pcf_data.bitmaps or RawBitmapBlock()
        ink_metrics = pcf_data.ink_metrics
        if ink_metrics is not None and len(ink_metrics) != len(metrics):
            logging.warning(
                'Ink metrics table has %d entries, metrics table has %d.',
                len(ink_metrics), len(metrics)
            )
        unmapped = sum(1 for _, _index in encoding.items() if _index >= len(metrics))
        if unmapped:
            logging.warning(
                'Encoding table has %d entries beyond the %d glyphs; ignoring them.',
                unmapped, len(metrics)
            )
        # all tables have been read, so the glyph box is final
        try:
            glyphs = rasterize(metrics, pcf_data.maxima, acc, bitmaps)
        except DecodeError as e:
            e.annotate('bitmaps', None)
            raise
        return cls(
            properties=pcf_data.xlfd_props,
            accelerators=acc,
            bdf_accelerators=pcf_data.bdf_acc_props,
            encoding=encoding,
            glyphs=glyphs,
            maxima=pcf_data.maxima,
            metrics=metrics,
            ink_metrics=ink_metrics,
            swidths=pcf_data.swidths,
            glyph_names=pcf_data.glyph_names,
        )

    def __repr__(self):
        return (
            f"<{type(self).__name__} '{self.name()}' "
            f'{self.pixel_size()}px, {self.glyph_count()} glyphs>'
        )

    ##########################################################################
    # property access

    def _get_property(self, key, kind, default):
        """Property value of the expected type, or default."""
        value = self._properties.get(key, None)
        if value is None:
            return default
        if kind is int and isinstance(value, int):
            return value
        if kind is str and isinstance(value, str):
            return value
        logging.warning(
            'Ignoring property %s=%r: expected %s value.',
            key, value, kind.__name__
        )
        return default

    @property
    def properties(self):
        """XLFD properties as str or int values."""
        return dict(self._properties)

    @property
    def accelerators(self):
        return self._acc

    @property
    def bdf_accelerators(self):
        return self._bdf_acc

    @property
    def encoding(self):
        return self._encoding

    @property
    def metrics(self):
        return self._metrics

    @property
    def ink_metrics(self):
        """Ink metrics, or None if the font has no ink metrics table."""
        return self._ink_metrics

    @property
    def swidths(self):
        """Scalable widths, or None if the font has no swidths table."""
        return self._swidths

    @property
    def glyph_names(self):
        """Glyph names, or None if the font has no glyph names table."""
        return self._glyph_names

    ##########################################################################
    # glyphs

    def glyph_index_for(self, codepoint):
        """Glyph index for a code point, or None if there is no glyph."""
        index = self._encoding.glyph_index_for(codepoint)
        if index is None or index >= len(self._glyphs):
            return None
        return index

    def glyph(self, index):
        if not 0 <= index < len(self._glyphs):
            raise IndexError(f'Glyph index {index} outside {len(self._glyphs)} glyphs')
        return self._glyphs[index]

    def glyph_width(self, index):
        return self.glyph(index).width

    def glyph_name(self, index):
        if not self._glyph_names or not 0 <= index < len(self._glyph_names):
            return None
        return self._glyph_names[index]

    def draw_glyph(self, index):
        """Glyph pixels as rows of booleans, True for ink."""
        return self.glyph(index).rows()

    def glyph_count(self):
        return len(self._glyphs)

    def glyph_size(self):
        """Width and height of the glyph box."""
        return self._maxima.max_width, self._maxima.height

    def codepoints(self):
        """Code points mapped to a glyph, in table order."""
        return tuple(
            _cp for _cp, _index in self._encoding.items()
            if _index < len(self._glyphs)
        )

    def highest_codepoint(self):
        """One past the highest mapped code point."""
        return max(self.codepoints(), default=-1) + 1

    def default_glyph_index(self):
        """Glyph index for the default character, if it has a glyph."""
        return self.glyph_index_for(self._encoding.default_char)

    def is_fixed_width(self):
        return self._acc.constant_width

    ##########################################################################
    # metadata

    def baseline(self):
        return self._acc.font_ascent - 1

    def family(self):
        return self._get_property('FAMILY_NAME', str, 'Unknown')

    def weight_name(self):
        return self._get_property('WEIGHT_NAME', str, 'Regular')

    def name(self):
        return f'{self.family()} {self.weight_name()}'

    def weight(self):
        """Numeric weight, 100 (thin) to 900 (black)."""
        # use some common weight names because some fonts don't include any other weight info
        common = {
            'thin': 'Thin',
            'light': 'Light',
            'medium': 'Regular',
            'regular': 'Regular',
            'bold': 'Bold',
        }
        name = self.weight_name()
        if name.lower() in common:
            return styles.name_to_weight(common[name.lower()])
        xlfd_weight = self._get_property('WEIGHT', int, None)
        if xlfd_weight is not None:
            return styles.xlfd_weight_to_weight(xlfd_weight)
        relative_weight = self._get_property('RELATIVE_WEIGHT', int, None)
        if relative_weight is not None:
            return styles.relative_weight_to_weight(relative_weight)
        return styles.name_to_weight(name, default=styles.name_to_weight('Regular'))

    def relative_weight(self):
        """XLFD relative weight, 10 (ultralight) to 90 (ultrabold)."""
        return self._get_property('RELATIVE_WEIGHT', int, self.weight() // 10)

    def slope(self):
        """Numeric slope; 0 is upright."""
        slant = self._get_property('SLANT', str, None)
        if slant is None:
            return styles.name_to_slope('Regular')
        # FIXME: Reverse Italic, Reverse Oblique, Other
        return styles.slant_to_slope(slant)

    def pixel_size(self):
        return self._get_property('PIXEL_SIZE', int, 0)

    def x_height(self):
        return self._get_property('X_HEIGHT', int, 0)

    def construct_filename(self):
        """Suggested file name, e.g. TerminusBoldItalic16.font"""
        parts = [self.family()]
        weight = self.weight()
        slope = self.slope()
        # Only name the weight if it's either non-regular, or
        # the slope is non-regular and thus omitted.
        # This results in names like TerminusRegular16, TerminusBoldItalic24,
        # but not TerminusRegularRegular16.
        if slope == 0 or weight != 400:
            parts.append(styles.weight_to_name(weight).replace(' ', ''))
        if slope != 0:
            parts.append(styles.slope_to_name(slope).replace(' ', ''))
        pixel_size = self._get_property('PIXEL_SIZE', int, None)
        if pixel_size is not None:
            parts.append(str(pixel_size))
        return ''.join(parts) + '.font'
