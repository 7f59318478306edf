from __future__ import annotations

from dataclasses import dataclass, field, replace

import numpy as np
from PIL import Image

from asciistudio.charsets import Palette
from asciistudio.errors import PixelAccessError

Colour = tuple[int, int, int]

NEUTRAL = (255, 255, 255)

DEFAULT_RESOLUTION = 0.11
RESOLUTION_MIN = 0.05
RESOLUTION_MAX = 0.30
RESOLUTION_STEP = 0.01


@dataclass(frozen=True, eq=False)
class PixelBuffer:
    """Read-only RGBA pixels, shape (height, width, 4), row-major top to bottom."""

    pixels: np.ndarray = field(repr=False)

    def __post_init__(self):
        pixels = np.asarray(self.pixels, dtype=np.uint8)
        if pixels.ndim != 3 or pixels.shape[2] != 4:
            raise ValueError(f"Expected an (height, width, 4) array, got shape {pixels.shape}")
        pixels = pixels.copy() if pixels.flags.writeable else pixels
        pixels.flags.writeable = False
        object.__setattr__(self, "pixels", pixels)

    @property
    def width(self) -> int:
        return self.pixels.shape[1]

    @property
    def height(self) -> int:
        return self.pixels.shape[0]

    @classmethod
    def from_image(cls, image: Image.Image) -> PixelBuffer:
        return cls(np.asarray(image.convert("RGBA"), dtype=np.uint8))

    @classmethod
    def from_bytes(cls, width: int, height: int, data: bytes) -> PixelBuffer:
        expected = width * height * 4
        if len(data) != expected:
            raise PixelAccessError(f"Expected {expected} bytes for a {width}x{height} RGBA buffer, got {len(data)}")
        return cls(np.frombuffer(data, dtype=np.uint8).reshape(height, width, 4))


@dataclass(frozen=True)
class ConversionConfig:
    resolution: float = DEFAULT_RESOLUTION
    palette: str = Palette.STANDARD.value
    inverted: bool = False
    grayscale: bool = True

    def replace(self, **changes) -> ConversionConfig:
        return replace(self, **changes)

    def validate(self) -> None:
        """Raise ValueError if the config breaks the converter's preconditions."""
        if not 0 < self.resolution <= 1:
            raise ValueError(f"Resolution must be in (0, 1], got {self.resolution}")
        if len(self.palette) < 1:
            raise ValueError("Palette must contain at least one character")


@dataclass(frozen=True)
class Cell:
    character: str
    colour: Colour


@dataclass(frozen=True)
class CharacterGrid:
    cells: tuple[tuple[Cell, ...], ...]
    grayscale: bool = True

    @property
    def rows(self) -> int:
        return len(self.cells)

    @property
    def columns(self) -> int:
        return len(self.cells[0]) if self.cells else 0

    @property
    def lines(self) -> list[str]:
        return ["".join(cell.character for cell in row) for row in self.cells]

    @property
    def text(self) -> str:
        """Plain text: one line per row, each terminated by a newline."""
        return "".join(line + "\n" for line in self.lines)

    @property
    def colours(self) -> np.ndarray:
        """Per-cell colours as a (rows, cols, 3) uint8 array."""
        return np.array(
            [[cell.colour for cell in row] for row in self.cells], dtype=np.uint8
        ).reshape(self.rows, self.columns, 3)
