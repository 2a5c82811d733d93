"""
pcfont - decoder for X11 Portable Compiled Format bitmap fonts

(c) 2019--2024 Rob Hagemans
licence: https://opensource.org/licenses/MIT
"""

import sys as _sys
assert _sys.version_info >= (3, 9)

from .constants import VERSION as __version__
from .errors import (
    DecodeError, FormatError, BadMagicError, InvalidTableCountError,
    InvalidMetricsCountError, GlyphCountMismatchError, TruncatedInputError,
    UnsupportedVariantError,
)
from .font import PCFFont, load, loads
from .raster import Glyph
