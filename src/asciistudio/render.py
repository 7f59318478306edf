from PIL import Image, ImageDraw, ImageFont

from asciistudio.engine import NEUTRAL, CharacterGrid

FONT_SIZE = 8
GLYPH_WIDTH_RATIO = 0.6
GLYPH_HEIGHT = FONT_SIZE
GLYPH_WIDTH = FONT_SIZE * GLYPH_WIDTH_RATIO


def load_font(font_path: str | None = None, font_size: int = FONT_SIZE):
    """Load a TrueType font, or Pillow's built-in font when no path is given."""
    if font_path is None:
        return ImageFont.load_default(font_size)
    return ImageFont.truetype(font_path, font_size)


def surface_size(grid: CharacterGrid) -> tuple[int, int]:
    """Pixel (width, height) needed to draw every row of the grid."""
    if grid.rows == 0:
        return (0, 0)
    max_line = max(len(line) for line in grid.lines)
    return (int(max_line * GLYPH_WIDTH), grid.rows * GLYPH_HEIGHT)


def render(grid: CharacterGrid, grayscale: bool | None = None, font=None) -> Image.Image:
    """Draw a character grid onto a transparent RGBA image sized exactly to the grid.

    Grayscale grids are drawn a line at a time in white. Colour grids are drawn
    cell by cell, each at its own glyph box position in its own colour.
    """
    if grayscale is None:
        grayscale = grid.grayscale
    image = Image.new("RGBA", surface_size(grid), (0, 0, 0, 0))
    if grid.rows == 0:
        return image

    if font is None or isinstance(font, str):
        font = load_font(font)
    draw = ImageDraw.Draw(image)

    if grayscale:
        for r, line in enumerate(grid.text.split("\n")[: grid.rows]):
            draw.text((0, r * GLYPH_HEIGHT), line, fill=NEUTRAL, font=font)
    else:
        for r, row in enumerate(grid.cells):
            for c, cell in enumerate(row):
                draw.text((int(c * GLYPH_WIDTH), r * GLYPH_HEIGHT), cell.character, fill=cell.colour, font=font)
    return image


def render_ansi(grid: CharacterGrid) -> str:
    """Wrap each character of a colour grid in ANSI truecolor escape sequences."""
    if grid.grayscale:
        return "\n".join(grid.lines)
    out = []
    for row in grid.cells:
        parts = []
        for cell in row:
            r, g, b = cell.colour
            parts.append(f"\033[38;2;{r};{g};{b}m{cell.character}")
        parts.append("\033[0m")
        out.append("".join(parts))
    return "\n".join(out)
