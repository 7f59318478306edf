"""Turn files, raw encoded bytes and URLs into pixel buffers."""

import io
import logging
import mimetypes
from pathlib import Path

import requests
from PIL import Image, UnidentifiedImageError
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

from asciistudio.engine import PixelBuffer
from asciistudio.errors import ImageAcquisitionError, InvalidImageError, PixelAccessError

log = logging.getLogger(__name__)

DEFAULT_IMAGE_URL = (
    "https://hebbkx1anhila5yf.public.blob.vercel-storage.com/"
    "CleanShot%202025-04-21%20at%2007.18.50%402x-dZYTCjkP7AhQCvCtNcNHt4amOQSwtX.png"
)
USER_AGENT = "asciistudio/0.1"
TIMEOUT = (5.0, 15.0)


def make_session(retries: int = 3) -> requests.Session:
    """HTTP session that retries transient failures at the transport level."""
    session = requests.Session()
    session.headers["User-Agent"] = USER_AGENT
    retry = Retry(
        total=retries,
        connect=retries,
        read=retries,
        backoff_factor=0.3,
        status_forcelist=(429, 500, 502, 503, 504),
    )
    adapter = HTTPAdapter(max_retries=retry)
    session.mount("http://", adapter)
    session.mount("https://", adapter)
    return session


def to_buffer(image: Image.Image) -> PixelBuffer:
    """Decode the first frame of an opened image into an RGBA buffer."""
    if image.width == 0 or image.height == 0:
        raise InvalidImageError("Invalid image dimensions")
    try:
        image.seek(0)
        return PixelBuffer.from_image(image)
    except (OSError, SyntaxError, ValueError) as e:
        raise PixelAccessError(f"Failed to get image data: {e}") from e


def load_bytes(data: bytes) -> PixelBuffer:
    if not data:
        raise ImageAcquisitionError("No image data")
    try:
        image = Image.open(io.BytesIO(data))
        image.load()
    except (UnidentifiedImageError, Image.DecompressionBombError, OSError, SyntaxError) as e:
        raise ImageAcquisitionError(f"Failed to load image: {e}") from e
    return to_buffer(image)


def load_path(path: str | Path) -> PixelBuffer:
    path = Path(path)
    if not path.is_file():
        raise ImageAcquisitionError(f"File not found: {path}")
    mime, _ = mimetypes.guess_type(path.name)
    if mime is not None and not mime.startswith("image/"):
        raise ImageAcquisitionError("Please upload an image file")
    try:
        data = path.read_bytes()
    except OSError as e:
        raise ImageAcquisitionError(f"Failed to read file: {e}") from e
    buffer = load_bytes(data)
    log.info("Loaded %s (%dx%d)", path, buffer.width, buffer.height)
    return buffer


def load_url(url: str, session: requests.Session | None = None) -> PixelBuffer:
    if session is None:
        session = make_session()
    try:
        response = session.get(url, timeout=TIMEOUT)
        response.raise_for_status()
    except requests.RequestException as e:
        raise ImageAcquisitionError(f"Failed to load image: {e}") from e
    buffer = load_bytes(response.content)
    log.info("Fetched %s (%dx%d)", url, buffer.width, buffer.height)
    return buffer


def load_default(session: requests.Session | None = None) -> PixelBuffer:
    return load_url(DEFAULT_IMAGE_URL, session=session)


def load(source: str | Path | None = None, session: requests.Session | None = None) -> PixelBuffer:
    """Load from a path or an http(s) URL; the default image when source is None."""
    if source is None:
        return load_default(session)
    if isinstance(source, str) and source.startswith(("http://", "https://")):
        return load_url(source, session)
    return load_path(source)
