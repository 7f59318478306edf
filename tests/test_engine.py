import numpy as np
import pytest
from PIL import Image

from asciistudio.charsets import Palette, resolve_palette
from asciistudio.engine import CharacterGrid, ConversionConfig, PixelBuffer
from asciistudio.errors import PixelAccessError


def test_buffer_from_image_is_rgba():
    image = Image.new("RGB", (3, 2), (10, 20, 30))
    buffer = PixelBuffer.from_image(image)
    assert (buffer.width, buffer.height) == (3, 2)
    np.testing.assert_array_equal(buffer.pixels[1, 2], [10, 20, 30, 255])


def test_buffer_from_bytes():
    data = bytes(range(24))
    buffer = PixelBuffer.from_bytes(3, 2, data)
    assert (buffer.width, buffer.height) == (3, 2)
    np.testing.assert_array_equal(buffer.pixels[0, 1], [4, 5, 6, 7])


def test_buffer_from_bytes_wrong_length():
    with pytest.raises(PixelAccessError, match="Expected 24 bytes"):
        PixelBuffer.from_bytes(3, 2, b"\x00" * 10)


def test_buffer_is_read_only():
    source = np.zeros((2, 2, 4), dtype=np.uint8)
    buffer = PixelBuffer(source)
    with pytest.raises(ValueError):
        buffer.pixels[0, 0, 0] = 1
    # The caller's array stays writable and detached
    source[0, 0, 0] = 9
    assert buffer.pixels[0, 0, 0] == 0


def test_buffer_rejects_wrong_shape():
    with pytest.raises(ValueError, match="Expected an"):
        PixelBuffer(np.zeros((2, 2, 3), dtype=np.uint8))


def test_config_defaults():
    config = ConversionConfig()
    assert config.resolution == 0.11
    assert config.palette == Palette.STANDARD.value
    assert not config.inverted
    assert config.grayscale


def test_config_replace_returns_copy():
    config = ConversionConfig()
    changed = config.replace(inverted=True)
    assert changed.inverted
    assert not config.inverted


@pytest.mark.parametrize("resolution", [0.0, -0.1, 1.5])
def test_config_validate_resolution(resolution):
    with pytest.raises(ValueError, match="Resolution"):
        ConversionConfig(resolution=resolution).validate()


def test_config_validate_palette():
    with pytest.raises(ValueError, match="Palette"):
        ConversionConfig(palette="").validate()


def test_empty_grid_projections():
    grid = CharacterGrid(cells=())
    assert grid.rows == 0
    assert grid.columns == 0
    assert grid.text == ""
    assert grid.colours.shape == (0, 0, 3)


def test_palette_values():
    assert Palette.STANDARD.value == " .:-=+*#%@"
    assert Palette.DETAILED.value == " .,:;i1tfLCG08@"
    assert Palette.BLOCKS.value == " ░▒▓█"
    assert Palette.MINIMAL.value == " .:█"
    assert Palette.CUSTOM.value == " .-~:;=!*#$@"
    assert Palette.names() == ["standard", "detailed", "blocks", "minimal", "custom"]


def test_resolve_palette():
    assert resolve_palette(Palette.MINIMAL) == " .:█"
    assert resolve_palette("Detailed") == "Detailed"
    assert resolve_palette(" o0") == " o0"
    with pytest.raises(ValueError):
        resolve_palette("")


def test_palette_from_name_unknown():
    with pytest.raises(ValueError, match="Unknown palette"):
        Palette.from_name("fancy")
