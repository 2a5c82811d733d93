"""
pcfont.toc - PCF header and table directory

(c) 2019--2024 Rob Hagemans
licence: https://opensource.org/licenses/MIT
"""

import logging
from typing import NamedTuple

from .struct import little_endian as le
from .errors import BadMagicError, InvalidTableCountError


MAGIC = b'\1fcp'

# https://fontforge.org/docs/techref/pcf-format.html

# fontforge recap has these as apparent signed ints,
# but X sources say CARD32 which is an unsigned int
_TOC_ENTRY = le.Struct(
    # /* See below, indicates which table */
    type='uint32',
    # /* See below, indicates how the data are formatted in the table */
    format='uint32',
    # /* In bytes */
    size='uint32',
    # /* from start of file */
    offset='uint32',
)

# type field
#define PCF_PROPERTIES               (1<<0)
PCF_PROPERTIES = (1<<0)
#define PCF_ACCELERATORS            (1<<1)
PCF_ACCELERATORS = (1<<1)
#define PCF_METRICS                 (1<<2)
PCF_METRICS = (1<<2)
#define PCF_BITMAPS                 (1<<3)
PCF_BITMAPS = (1<<3)
#define PCF_INK_METRICS             (1<<4)
PCF_INK_METRICS = (1<<4)
#define PCF_BDF_ENCODINGS           (1<<5)
PCF_BDF_ENCODINGS = (1<<5)
#define PCF_SWIDTHS                 (1<<6)
PCF_SWIDTHS = (1<<6)
#define PCF_GLYPH_NAMES             (1<<7)
PCF_GLYPH_NAMES = (1<<7)
#define PCF_BDF_ACCELERATORS        (1<<8)
PCF_BDF_ACCELERATORS = (1<<8)

TABLE_NAMES = {
    PCF_PROPERTIES: 'properties',
    PCF_ACCELERATORS: 'accelerators',
    PCF_METRICS: 'metrics',
    PCF_BITMAPS: 'bitmaps',
    PCF_INK_METRICS: 'ink-metrics',
    PCF_BDF_ENCODINGS: 'bdf-encodings',
    PCF_SWIDTHS: 'swidths',
    PCF_GLYPH_NAMES: 'glyph-names',
    PCF_BDF_ACCELERATORS: 'bdf-accelerators',
}


def table_name(type):
    """Human-readable name for a table type."""
    return TABLE_NAMES.get(type, f'unknown-{type:#x}')


class TableDescriptor(NamedTuple):
    """Entry in the table of contents."""
    type: int
    format: int
    size: int
    offset: int

    @property
    def name(self):
        return table_name(self.type)

    @property
    def known(self):
        return self.type in TABLE_NAMES


def read_toc(cursor):
    """Read the file header and the table directory."""
    cursor.seek(0)
    # /* always "\1fcp" */
    signature = cursor.read(min(len(MAGIC), cursor.remaining))
    if signature != MAGIC:
        raise BadMagicError(
            f'Not a PCF file: signature {signature!r} != {MAGIC!r}',
            offset=0,
        )
    table_count = le.int32.read_from(cursor)
    if table_count <= 0:
        raise InvalidTableCountError(
            f'Invalid table count {table_count}', offset=4,
        )
    toc = (_TOC_ENTRY * table_count).read_from(cursor)
    toc = tuple(TableDescriptor(**vars(_entry)) for _entry in toc)
    logging.debug('PCF directory with %d tables', len(toc))
    return toc
