import numpy as np
from PIL import Image

from asciistudio.converter import convert
from asciistudio.engine import Cell, CharacterGrid, ConversionConfig, PixelBuffer
from asciistudio.render import GLYPH_HEIGHT, load_font, render, render_ansi, surface_size


def make_grid(lines, colour=(255, 255, 255), grayscale=True):
    return CharacterGrid(
        cells=tuple(tuple(Cell(char, colour) for char in line) for line in lines),
        grayscale=grayscale,
    )


def test_surface_size_matches_grid():
    grid = make_grid(["@" * 10, "@" * 10])
    assert surface_size(grid) == (48, 2 * GLYPH_HEIGHT)


def test_surface_size_truncates_fractional_width():
    grid = make_grid(["@@@"])
    # 3 * 4.8 = 14.4
    assert surface_size(grid) == (14, 8)


def test_empty_grid_renders_nothing():
    image = render(CharacterGrid(cells=()), grayscale=True)
    assert image.size == (0, 0)


def test_render_size_and_mode():
    grid = make_grid(["@@@@@", "@@@@@", "@@@@@"])
    image = render(grid, grayscale=True)
    assert image.mode == "RGBA"
    assert image.size == (24, 24)


def test_render_grayscale_draws_white():
    image = render(make_grid(["@@@@@"]), grayscale=True)
    assert image.getbbox() is not None
    arr = np.asarray(image)
    ink = arr[arr[:, :, 3] > 0]
    assert len(ink) > 0
    # White ink is blended only through alpha
    np.testing.assert_array_equal(ink[:, 0], ink[:, 1])
    np.testing.assert_array_equal(ink[:, 1], ink[:, 2])


def test_render_blank_characters_leave_surface_transparent():
    image = render(make_grid(["     "]), grayscale=True)
    assert image.size == (24, 8)
    assert image.getbbox() is None


def test_render_colour_uses_cell_colour():
    grid = make_grid(["@@@@@"], colour=(220, 40, 40), grayscale=False)
    arr = np.asarray(render(grid, grayscale=False)).astype(int)
    assert arr[:, :, 3].max() > 0
    assert arr[:, :, 0].max() > arr[:, :, 1].max()


def test_render_defaults_to_grid_mode():
    buffer = PixelBuffer(np.full((4, 10, 4), 255, dtype=np.uint8))
    grid = convert(buffer, ConversionConfig(resolution=1.0, grayscale=False))
    image = render(grid)
    assert image.size == (int(grid.columns * 4.8), grid.rows * 8)


def test_render_with_truetype_font(font_path):
    grid = make_grid(["#@#@#", "@#@#@"])
    image = render(grid, grayscale=True, font=font_path)
    assert image.size == (24, 16)
    assert image.getbbox() is not None


def test_load_font_default():
    font = load_font()
    assert font is not None


def test_render_ansi_colour():
    grid = make_grid(["ab"], colour=(40, 50, 60), grayscale=False)
    out = render_ansi(grid)
    assert out == "\033[38;2;40;50;60ma\033[38;2;40;50;60mb\033[0m"


def test_render_ansi_grayscale_has_no_escapes():
    grid = make_grid(["ab", "cd"])
    assert render_ansi(grid) == "ab\ncd"


def test_render_is_stateless():
    grid = make_grid(["@@@@@"])
    first = render(grid, grayscale=True)
    second = render(grid, grayscale=True)
    assert first.tobytes() == second.tobytes()
    assert isinstance(first, Image.Image)
