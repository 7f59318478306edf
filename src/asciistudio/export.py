import logging
import sys
from pathlib import Path
from typing import TextIO

from asciistudio.engine import CharacterGrid
from asciistudio.errors import ExportError

log = logging.getLogger(__name__)

DEFAULT_FILENAME = "ascii-art.txt"


def _require_text(grid: CharacterGrid | None, action: str) -> str:
    if grid is None or grid.rows == 0:
        raise ExportError(f"No ASCII art to {action}")
    return grid.text


def write_text(grid: CharacterGrid | None, path: str | Path = DEFAULT_FILENAME) -> Path:
    """Save the plain text as UTF-8 with a trailing newline."""
    text = _require_text(grid, "download")
    path = Path(path)
    try:
        path.write_text(text, encoding="utf-8", newline="\n")
    except OSError as e:
        raise ExportError(f"Failed to write {path}: {e}") from e
    log.info("Wrote %d lines to %s", grid.rows, path)
    return path


def copy_text(grid: CharacterGrid | None, stream: TextIO | None = None) -> None:
    """Write the plain text to a stream (stdout by default) for piping into a clipboard tool."""
    text = _require_text(grid, "copy")
    if stream is None:
        stream = sys.stdout
    stream.write(text)
    stream.flush()
