"""
pcfont.chart - glyph charts as text or image

(c) 2019--2024 Rob Hagemans
licence: https://opensource.org/licenses/MIT
"""

import logging

try:
    from PIL import Image
except ImportError:
    Image = None

from .binary import ceildiv


def chart_text(font, codepoints=None, paper='.', ink='@'):
    """Glyphs as text blocks, each headed by its code point."""
    if codepoints is None:
        codepoints = font.codepoints()
    blocks = []
    for codepoint in codepoints:
        index = font.glyph_index_for(codepoint)
        if index is None:
            logging.debug('No glyph for code point %#x', codepoint)
            continue
        glyph = font.glyph(index)
        blocks.append(
            f'0x{codepoint:04x}:\n'
            + glyph.as_text(paper=paper, ink=ink, end='\n')
        )
    return '\n'.join(blocks)


def _cell_size(font):
    width, height = font.glyph_size()
    width = max(
        (font.glyph(_i).width for _i in range(font.glyph_count())),
        default=width
    )
    return max(width, 1), max(height, 1)


def chart_image(
        font, *,
        columns=32,
        margin=(0, 0),
        padding=(1, 1),
        scale=(1, 1),
        border=(32, 32, 32), paper=(0, 0, 0), ink=(255, 255, 255),
    ):
    """
    Draw the font's code page to a grid-based image.

    columns: number of columns in glyph chart (default: 32)
    margin: number of pixels in X,Y direction around glyph chart (default: 0x0)
    padding: number of pixels in X,Y direction between glyph (default: 1x1)
    scale: number of pixels in X,Y direction per glyph bit (default: 1x1)
    paper: background colour R,G,B 0--255 (default: 0,0,0)
    ink: foreground colour R,G,B 0--255 (default: 255,255,255)
    border: border colour R,G,B 0--255 (default 32,32,32)
    """
    if Image is None:
        raise ImportError('Drawing a chart image requires Pillow.')
    if columns < 1:
        raise ValueError('columns must be at least 1.')
    cell_x, cell_y = _cell_size(font)
    end = font.highest_codepoint()
    if not end:
        raise ValueError('No mapped code points in font.')
    # start at a codepoint that is a multple of the number of columns
    start = columns * (min(font.codepoints()) // columns)
    rows = ceildiv(end - start, columns)
    step_x, step_y = cell_x + padding[0], cell_y + padding[1]
    width = columns * step_x + 2 * margin[0] - padding[0]
    height = rows * step_y + 2 * margin[1] - padding[1]
    img = Image.new('RGB', (width, height), border)
    for codepoint in range(start, end):
        row, col = divmod(codepoint - start, columns)
        left, top = margin[0] + col * step_x, margin[1] + row * step_y
        img.paste(paper, (left, top, left + cell_x, top + cell_y))
        index = font.glyph_index_for(codepoint)
        if index is None:
            continue
        glyph = font.glyph(index)
        for y, glyph_row in enumerate(glyph.rows()):
            for x, bit in enumerate(glyph_row):
                if bit and x < cell_x and y < cell_y:
                    img.putpixel((left + x, top + y), ink)
    if scale != (1, 1):
        img = img.resize(
            (width * scale[0], height * scale[1]), resample=Image.NEAREST
        )
    return img


def save_chart(font, outfile, *, image_format=None, **kwargs):
    """Save font chart to an image file."""
    img = chart_image(font, **kwargs)
    img.save(outfile, format=image_format)
    return img
