"""
pcfont.binary - binary utilities

(c) 2019--2024 Rob Hagemans
licence: https://opensource.org/licenses/MIT
"""


def ceildiv(num, den):
    """Integer division, rounding up."""
    return -(-num // den)


def round_up(num, unit):
    """Round up to a multiple of unit."""
    return ceildiv(num, unit) * unit
