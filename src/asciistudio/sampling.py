import math

import numpy as np

# Characters are roughly twice as tall as they are wide; sample rows twice as sparsely
FONT_ASPECT_RATIO = 0.5

# Rec. 601 luma weights in per mille so a pure white pixel sums to exactly 1.0
LUMA_WEIGHTS = np.array([299, 587, 114], dtype=np.int64)
LUMA_SCALE = 1000

MIN_CHANNEL = 40
MAX_CHANNEL = 255


def grid_shape(width: int, height: int, resolution: float) -> tuple[int, int]:
    """Target (columns, rows) before aspect correction, each at least 1."""
    return max(1, math.floor(width * resolution)), max(1, math.floor(height * resolution))


def strides(width: int, height: int, resolution: float) -> tuple[int, int]:
    """Return (column_stride, row_stride) in source pixels."""
    target_width, target_height = grid_shape(width, height, resolution)
    column_stride = math.ceil(width / target_width)
    row_stride = math.ceil(height / target_height / FONT_ASPECT_RATIO)
    return column_stride, row_stride


def sample_pixels(pixels: np.ndarray, column_stride: int, row_stride: int) -> np.ndarray:
    """Pick one pixel every stride along each axis, starting at (0, 0). Returns (rows, cols, 3) RGB."""
    return pixels[::row_stride, ::column_stride, :3]


def luma(rgb: np.ndarray) -> np.ndarray:
    """Linear luma in [0, 1]: (0.299 r + 0.587 g + 0.114 b) / 255."""
    weighted = rgb.astype(np.int64) @ LUMA_WEIGHTS
    return weighted / (LUMA_SCALE * 255)


def perceived_brightness(rgb: np.ndarray) -> np.ndarray:
    """Quadratic brightness in [0, 1]: sqrt(0.299 r'^2 + 0.587 g'^2 + 0.114 b'^2) with r' = r / 255."""
    channels = rgb.astype(np.int64)
    weighted = (channels * channels) @ LUMA_WEIGHTS
    return np.sqrt(weighted / (LUMA_SCALE * 255 * 255))


def palette_indices(brightness: np.ndarray, palette_size: int, inverted: bool = False) -> np.ndarray:
    """Map brightness to palette positions, 0 = first character."""
    if inverted:
        brightness = 1.0 - brightness
    if palette_size == 1:
        return np.zeros(brightness.shape, dtype=np.int64)
    indices = np.floor(brightness * (palette_size - 1)).astype(np.int64)
    return np.clip(indices, 0, palette_size - 1)


def shade_colours(rgb: np.ndarray, indices: np.ndarray, palette_size: int) -> np.ndarray:
    """Scale each pixel's colour by its palette position and clamp to [MIN_CHANNEL, MAX_CHANNEL].

    The factor runs from 0.5 for the first character to 2.0 for the last, so
    sparse glyphs are dimmed and dense ones brightened. Returns uint8 (rows, cols, 3).
    """
    if palette_size == 1:
        factor = np.full(indices.shape, 0.5)
    else:
        factor = indices / (palette_size - 1) * 1.5 + 0.5
    scaled = rgb.astype(np.float64) * factor[..., None]
    # Round half up
    rounded = np.floor(scaled + 0.5)
    return np.clip(rounded, MIN_CHANNEL, MAX_CHANNEL).astype(np.uint8)
