"""
pcfont.errors - decoding errors

(c) 2019--2024 Rob Hagemans
licence: https://opensource.org/licenses/MIT
"""


class DecodeError(Exception):
    """PCF file could not be decoded."""

    def __init__(self, message='', *, table=None, offset=None):
        super().__init__(message)
        self.message = message
        self.table = table
        self.offset = offset

    def annotate(self, table, offset):
        """Record where the failure happened, unless already known."""
        if self.table is None:
            self.table = table
        if self.offset is None:
            self.offset = offset
        return self

    def __str__(self):
        context = []
        if self.table is not None:
            context.append(f'table {self.table}')
        if self.offset is not None:
            context.append(f'offset {self.offset:#x}')
        if context:
            return f'{self.message} [{", ".join(context)}]'
        return self.message


class FormatError(DecodeError):
    """Incorrect file format."""


class BadMagicError(FormatError):
    """File does not start with the PCF signature."""


class InvalidTableCountError(FormatError):
    """Table directory is empty or has a negative size."""


class InvalidMetricsCountError(FormatError):
    """Metrics table holds no entries."""


class GlyphCountMismatchError(FormatError):
    """Metrics and bitmap tables disagree on the number of glyphs."""


class TruncatedInputError(DecodeError):
    """Read or seek beyond the end of the input."""


class UnsupportedVariantError(DecodeError):
    """Encoding variant the decoder can't handle."""
