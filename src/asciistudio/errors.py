class AsciiStudioError(Exception):
    """Base class for every error reported to the caller of the converter."""


class ImageAcquisitionError(AsciiStudioError):
    """The source image could not be read, fetched or decoded."""


class InvalidImageError(AsciiStudioError):
    """The decoded image has zero width or height."""


class PixelAccessError(AsciiStudioError):
    """Pixel data could not be read from a decoded image."""


class ExportError(AsciiStudioError):
    """Copy or download was requested before any conversion produced text."""
