import logging
from pathlib import Path

from PIL import Image

from asciistudio import export, loader
from asciistudio.converter import convert
from asciistudio.engine import CharacterGrid, ConversionConfig, PixelBuffer
from asciistudio.errors import AsciiStudioError
from asciistudio.presets import get_preset
from asciistudio.render import render

log = logging.getLogger(__name__)


class Studio:
    """Holds the loaded image, the active config and the latest conversion.

    Every change recomputes the whole grid and swaps it into ``result`` only
    once it is complete. Any error clears ``result`` and is kept in ``error``
    before being re-raised to the caller.
    """

    def __init__(self, config: ConversionConfig | None = None):
        self.config = config if config is not None else ConversionConfig()
        self.buffer: PixelBuffer | None = None
        self.result: CharacterGrid | None = None
        self.error: str | None = None

    def _fail(self, e: AsciiStudioError) -> None:
        log.warning("%s", e)
        self.result = None
        self.error = str(e)

    def load(self, source: str | Path | None = None, session=None) -> CharacterGrid:
        self.buffer = None
        try:
            self.buffer = loader.load(source, session=session)
        except AsciiStudioError as e:
            self._fail(e)
            raise
        return self.refresh()

    def load_buffer(self, buffer: PixelBuffer) -> CharacterGrid:
        self.buffer = buffer
        return self.refresh()

    def configure(self, **changes) -> CharacterGrid | None:
        """Replace config fields and recompute. An invalid config leaves the session untouched."""
        config = self.config.replace(**changes)
        config.validate()
        self.config = config
        return self.refresh() if self.buffer is not None else None

    def apply_preset(self, name: str) -> CharacterGrid | None:
        self.config = get_preset(name).apply(self.config)
        return self.refresh() if self.buffer is not None else None

    def refresh(self) -> CharacterGrid:
        if self.buffer is None:
            raise RuntimeError("No image loaded")
        try:
            grid = convert(self.buffer, self.config)
        except AsciiStudioError as e:
            self._fail(e)
            raise
        self.result = grid
        self.error = None
        return grid

    def preview(self, font=None) -> Image.Image:
        if self.result is None:
            return Image.new("RGBA", (0, 0))
        return render(self.result, self.config.grayscale, font=font)

    def copy(self, stream=None) -> None:
        try:
            export.copy_text(self.result, stream)
        except AsciiStudioError as e:
            self.error = str(e)
            raise

    def download(self, path: str | Path = export.DEFAULT_FILENAME) -> Path:
        try:
            return export.write_text(self.result, path)
        except AsciiStudioError as e:
            self.error = str(e)
            raise
