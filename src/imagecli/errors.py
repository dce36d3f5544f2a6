"""Custom exception hierarchy for imagecli."""


class ImageCliError(Exception):
    """Base exception for all imagecli errors."""


class ImageError(ImageCliError):
    """Errors related to image loading or processing."""


class ImageFormatError(ImageError):
    """Unsupported or corrupted image format."""


class ImageDimensionError(ImageError):
    """Image dimensions exceed limits or are mismatched."""


class RawDecodeError(ImageError):
    """Camera RAW file could not be developed."""


class ValidationError(ImageCliError):
    """Input validation failures."""
