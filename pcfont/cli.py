"""
pcfont.cli - inspect PCF fonts from the command line

(c) 2019--2024 Rob Hagemans
licence: https://opensource.org/licenses/MIT
"""

import os
import sys
import logging
import argparse
from contextlib import contextmanager

from .constants import VERSION
from .font import load
from .chart import chart_text, save_chart


@contextmanager
def wrap_main(debug=False):
    """Main script context."""
    # set log level
    if debug:
        loglevel = logging.DEBUG
    else:
        loglevel = logging.WARNING
    logging.basicConfig(level=loglevel, format='%(levelname)s: %(message)s', force=True)
    # run main script
    try:
        yield
    except BrokenPipeError:
        # happens e.g. when piping to `head`
        sys.stdout = os.fdopen(1)
    except Exception as exc:
        logging.error(exc)
        if debug:
            raise
        sys.exit(1)


def _codepoint(arg):
    """Parse code point given as decimal, 0x hex or a single character."""
    if len(arg) == 1 and not arg.isdigit():
        return ord(arg)
    return int(arg, 0)


def _pair(arg):
    """Parse NxM or N into a pair of ints."""
    x, _, y = arg.partition('x')
    return int(x), int(y or x)


def _info(font):
    """Summary of font metadata."""
    width, height = font.glyph_size()
    return '\n'.join((
        f'family: {font.family()}',
        f'name: {font.name()}',
        f'pixel-size: {font.pixel_size()}',
        f'weight: {font.weight()}',
        f'slope: {font.slope()}',
        f'baseline: {font.baseline()}',
        f'glyph-size: {width}x{height}',
        f'fixed-width: {font.is_fixed_width()}',
        f'glyph-count: {font.glyph_count()}',
        f'highest-codepoint: {font.highest_codepoint()}',
        f'filename: {font.construct_filename()}',
    ))


def main(argv=None):
    parser = argparse.ArgumentParser(
        prog='pcfont',
        description='Decode an X11 Portable Compiled Format (PCF) font.',
    )
    parser.add_argument('infile', help='PCF file to read')
    parser.add_argument(
        '--glyph', action='append', default=[], type=_codepoint, metavar='CODEPOINT',
        help='show the glyph for this code point; may be given more than once'
    )
    parser.add_argument(
        '--text', action='store_true', default=False,
        help='show all glyphs as text'
    )
    parser.add_argument(
        '--chart', default=None, metavar='OUTFILE',
        help='draw the glyphs to a chart image'
    )
    parser.add_argument(
        '--columns', default=32, type=int,
        help='number of columns in chart image (default: 32)'
    )
    parser.add_argument(
        '--scale', default=(1, 1), type=_pair,
        help='number of image pixels per glyph pixel, as N or NxM (default: 1)'
    )
    parser.add_argument(
        '--debug', action='store_true', default=False,
        help='enable debugging output'
    )
    parser.add_argument('--version', action='version', version=f'pcfont v{VERSION}')
    args = parser.parse_args(argv)
    with wrap_main(args.debug):
        font = load(args.infile)
        print(_info(font))
        if args.glyph:
            print()
            print(chart_text(font, args.glyph))
        if args.text:
            print()
            print(chart_text(font))
        if args.chart:
            logging.info('Writing %s', args.chart)
            save_chart(font, args.chart, columns=args.columns, scale=args.scale)


if __name__ == '__main__':
    main()
