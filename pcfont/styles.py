"""
pcfont.styles - numeric weight and slope vocabulary

(c) 2019--2024 Rob Hagemans
licence: https://opensource.org/licenses/MIT
"""

WEIGHT_NAMES = {
    100: 'Thin',
    200: 'Extra Light',
    300: 'Light',
    400: 'Regular',
    500: 'Medium',
    600: 'Semi Bold',
    700: 'Bold',
    800: 'Extra Bold',
    900: 'Black',
    950: 'Extra Black',
}

SLOPE_NAMES = {
    0: 'Regular',
    1: 'Italic',
    2: 'Oblique',
    3: 'Reclined',
}

# alternative spellings found in XLFD WEIGHT_NAME
_WEIGHT_ALIASES = {
    'ultralight': 200,
    'demilight': 300,
    'semilight': 300,
    'book': 400,
    'normal': 400,
    'demibold': 600,
    'ultrabold': 800,
    'heavy': 900,
}

# XLFD RELATIVE_WEIGHT steps
_RELATIVE_WEIGHTS = {
    10: 100, # UltraLight
    20: 200, # ExtraLight
    30: 300, # Light
    40: 300, # SemiLight, Book
    50: 400, # Medium, Normal, Regular
    60: 600, # SemiBold, DemiBold
    70: 700, # Bold
    80: 800, # ExtraBold, Heavy
    90: 900, # UltraBold, Black
}

# XLFD SLANT codes
_SLANT_CODES = {
    'I': 'Italic',
    'O': 'Oblique',
}


def _normalise(name):
    return ''.join(_c for _c in name.lower() if _c.isalnum())


def name_to_weight(name, default=None):
    """Numeric weight for a weight name, case and spacing insensitive."""
    key = _normalise(name)
    for weight, weight_name in WEIGHT_NAMES.items():
        if _normalise(weight_name) == key:
            return weight
    return _WEIGHT_ALIASES.get(key, default)


def weight_to_name(weight):
    """Name for a numeric weight, rounding to the nearest named weight."""
    nearest = min(WEIGHT_NAMES, key=lambda _w: (abs(_w - weight), _w))
    return WEIGHT_NAMES[nearest]


def name_to_slope(name, default=None):
    """Numeric slope for a slope name."""
    key = _normalise(name)
    for slope, slope_name in SLOPE_NAMES.items():
        if _normalise(slope_name) == key:
            return slope
    return default


def slope_to_name(slope):
    """Name for a numeric slope."""
    return SLOPE_NAMES.get(slope, 'Regular')


def slant_to_slope(slant):
    """Numeric slope for an XLFD SLANT code; unhandled codes are upright."""
    name = _SLANT_CODES.get(slant)
    if name is None:
        return name_to_slope('Regular')
    return name_to_slope(name)


def xlfd_weight_to_weight(value):
    """
    Convert the XLFD calculated WEIGHT (0 to 1000, lightest first)
    to a numeric weight in steps of 100 from 100 to 900.
    """
    step = (max(0, min(1000, value)) * 8 + 500) // 1000
    return 100 * (step + 1)


def relative_weight_to_weight(value):
    """
    Convert XLFD RELATIVE_WEIGHT (10 = UltraLight to 90 = UltraBold)
    to a numeric weight; 0 (undefined) maps to regular.
    """
    if value <= 0:
        return 400
    step = max(10, min(90, 10 * ((value + 5) // 10)))
    return _RELATIVE_WEIGHTS[step]
