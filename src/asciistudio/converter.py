import logging

from asciistudio.charsets import resolve_palette
from asciistudio.engine import NEUTRAL, Cell, CharacterGrid, ConversionConfig, PixelBuffer
from asciistudio.errors import InvalidImageError
from asciistudio.sampling import (
    luma,
    palette_indices,
    perceived_brightness,
    sample_pixels,
    shade_colours,
    strides,
)

log = logging.getLogger(__name__)


def convert(buffer: PixelBuffer, config: ConversionConfig | None = None) -> CharacterGrid:
    """Convert a pixel buffer to a grid of characters, sampling one pixel per cell.

    Grayscale mode uses linear luma and paints every cell white; colour mode
    uses quadratic brightness and keeps a shaded copy of the sampled pixel's
    colour per cell.
    """
    if config is None:
        config = ConversionConfig()
    if buffer.width == 0 or buffer.height == 0:
        raise InvalidImageError(f"Invalid image dimensions: {buffer.width}x{buffer.height}")

    chars = resolve_palette(config.palette)
    column_stride, row_stride = strides(buffer.width, buffer.height, config.resolution)
    rgb = sample_pixels(buffer.pixels, column_stride, row_stride)

    if config.grayscale:
        brightness = luma(rgb)
    else:
        brightness = perceived_brightness(rgb)
    indices = palette_indices(brightness, len(chars), config.inverted)

    if config.grayscale:
        cells = tuple(tuple(Cell(chars[i], NEUTRAL) for i in row) for row in indices.tolist())
    else:
        colours = shade_colours(rgb, indices, len(chars)).tolist()
        cells = tuple(
            tuple(Cell(chars[i], tuple(colour)) for i, colour in zip(row, colour_row))
            for row, colour_row in zip(indices.tolist(), colours)
        )

    grid = CharacterGrid(cells=cells, grayscale=config.grayscale)
    log.debug(
        "Converted %dx%d image to %dx%d grid (strides %d, %d)",
        buffer.width,
        buffer.height,
        grid.columns,
        grid.rows,
        column_stride,
        row_stride,
    )
    return grid


def image_to_ascii(buffer: PixelBuffer, config: ConversionConfig | None = None) -> str:
    """Shortcut returning only the plain text of a conversion."""
    return convert(buffer, config).text
