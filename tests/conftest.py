import shutil
import subprocess

import numpy as np
import pytest

from asciistudio.engine import PixelBuffer

DEJAVU_MONO = "/usr/share/fonts/truetype/dejavu/DejaVuSansMono.ttf"


def _system_mono_font():
    """Ask fontconfig for a monospace TrueType file, falling back to DejaVu's usual path."""
    if shutil.which("fc-match"):
        out = subprocess.run(["fc-match", "-f", "%{file}", "monospace"], capture_output=True, text=True)
        path = out.stdout.strip()
        if out.returncode == 0 and path.endswith((".ttf", ".otf")):
            return path
    return DEJAVU_MONO if shutil.os.path.exists(DEJAVU_MONO) else None


@pytest.fixture
def font_path():
    path = _system_mono_font()
    if path is None:
        pytest.skip("No monospace font found on system")
    return path


@pytest.fixture
def noise():
    rng = np.random.default_rng(42)
    pixels = rng.integers(0, 256, size=(23, 37, 4), dtype=np.uint8)
    return PixelBuffer(pixels)
