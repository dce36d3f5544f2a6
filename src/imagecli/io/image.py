"""Image I/O built on imageio v3.

Images are decoded to 8-bit Bitmaps with 1, 3 or 4 channels. Reading
falls back to stdin and writing to PNG on stdout when no path is given,
so commands can be chained in a shell pipeline.
"""

from __future__ import annotations

import logging
import os
import sys
from pathlib import Path
from typing import Optional

import imageio.v3 as iio
import numpy as np

from imagecli.config import (
    DEFAULT_OUTPUT_FORMAT,
    IMAGE_EXTENSIONS,
    MAX_IMAGE_DIMENSION,
    MAX_IMAGE_PIXELS,
    RAW_EXTENSIONS,
)
from imagecli.core.types import Bitmap
from imagecli.errors import ImageDimensionError, ImageFormatError

logger = logging.getLogger(__name__)


def validate_input_path(filepath: str | Path, allowed: frozenset = IMAGE_EXTENSIONS) -> Path:
    """Validate an input file path.

    Args:
        filepath: Path to validate.
        allowed: Accepted lowercase suffixes.

    Returns:
        Resolved Path object.

    Raises:
        FileNotFoundError: If file does not exist.
        ImageFormatError: If extension is not allowed.
    """
    path = Path(filepath).resolve()

    if not path.exists():
        raise FileNotFoundError(f"Input file not found: {path}")

    if not path.is_file():
        raise ImageFormatError(f"Not a regular file: {path}")

    if path.suffix.lower() not in allowed:
        raise ImageFormatError(
            f"Unsupported image format: {path.suffix}. "
            f"Supported: {', '.join(sorted(allowed))}"
        )

    return path


def validate_output_path(filepath: str | Path) -> Path:
    """Validate an output file path.

    Raises:
        FileNotFoundError: If parent directory does not exist.
        PermissionError: If the directory is not writable.
        ImageFormatError: If the extension cannot be encoded.
    """
    path = Path(filepath).resolve()

    if not path.parent.exists():
        raise FileNotFoundError(f"Output directory does not exist: {path.parent}")

    if not os.access(path.parent, os.W_OK):
        raise PermissionError(f"Cannot write to directory: {path.parent}")

    if path.suffix.lower() not in IMAGE_EXTENSIONS:
        raise ImageFormatError(f"Unsupported output format: {path.suffix}")

    return path


def _validate_dimensions(width: int, height: int) -> None:
    """Check image dimensions before allocating working buffers."""
    if width > MAX_IMAGE_DIMENSION or height > MAX_IMAGE_DIMENSION:
        raise ImageDimensionError(
            f"Image dimension {max(width, height)} exceeds "
            f"maximum allowed {MAX_IMAGE_DIMENSION}"
        )
    if width * height > MAX_IMAGE_PIXELS:
        raise ImageDimensionError(
            f"Image has {width * height:,} pixels, exceeds "
            f"maximum allowed {MAX_IMAGE_PIXELS:,}"
        )


def to_bitmap(raw: np.ndarray) -> Bitmap:
    """Normalize a decoded array to an 8-bit Bitmap.

    Accepts (H, W), (H, W, 1|2|3|4) arrays of any integer or float dtype.
    16-bit and wider integers are rescaled; floats are taken as [0, 1].
    Gray+alpha is expanded to RGBA.
    """
    if raw.ndim == 2:
        raw = raw[:, :, np.newaxis]
    if raw.ndim != 3 or raw.shape[2] not in (1, 2, 3, 4):
        raise ImageFormatError(f"Unsupported image shape: {raw.shape}")

    _validate_dimensions(raw.shape[1], raw.shape[0])

    if raw.dtype == np.uint8:
        data = raw
    elif np.issubdtype(raw.dtype, np.integer):
        scale = 255.0 / np.iinfo(raw.dtype).max
        data = np.clip(np.floor(raw.astype(np.float64) * scale + 0.5), 0, 255).astype(np.uint8)
    elif np.issubdtype(raw.dtype, np.floating):
        data = np.clip(np.floor(raw.astype(np.float64) * 255.0 + 0.5), 0, 255).astype(np.uint8)
    elif raw.dtype == np.bool_:
        data = raw.astype(np.uint8) * 255
    else:
        raise ImageFormatError(f"Unsupported pixel type: {raw.dtype}")

    if data.shape[2] == 2:
        gray = data[:, :, :1]
        data = np.concatenate([gray, gray, gray, data[:, :, 1:2]], axis=2)

    return Bitmap(np.ascontiguousarray(data))


def load_image(filepath: Optional[str | Path] = None) -> Bitmap:
    """Load an image file, or stdin when ``filepath`` is None.

    Returns:
        Decoded Bitmap.

    Raises:
        ImageFormatError: If the data cannot be decoded.
    """
    if filepath is None:
        data = sys.stdin.buffer.read()
        if not data:
            raise ImageFormatError("No image data on stdin")
        logger.debug("Loading %d bytes from stdin", len(data))
        source = data
    else:
        source = validate_input_path(filepath)
        logger.debug("Loading with imageio: %s", source)

    try:
        raw = iio.imread(source, index=0)
    except Exception as e:
        raise ImageFormatError(f"Failed to decode image: {e}") from e

    return to_bitmap(np.asarray(raw))


def encode_image(bitmap: Bitmap, extension: str = DEFAULT_OUTPUT_FORMAT) -> bytes:
    """Encode a bitmap to bytes in the format named by ``extension``."""
    pixels = bitmap.pixels
    if bitmap.channels == 1:
        pixels = pixels[:, :, 0]
    return iio.imwrite("<bytes>", pixels, extension=extension)


def save_image(bitmap: Bitmap, filepath: Optional[str | Path] = None) -> Optional[Path]:
    """Save a bitmap; PNG bytes go to stdout when ``filepath`` is None.

    Returns:
        Resolved output path, or None when written to stdout.
    """
    if filepath is None:
        sys.stdout.buffer.write(encode_image(bitmap))
        sys.stdout.buffer.flush()
        logger.debug("Wrote %dx%d PNG to stdout", bitmap.width, bitmap.height)
        return None

    path = validate_output_path(filepath)
    pixels = bitmap.pixels
    if bitmap.channels == 1:
        pixels = pixels[:, :, 0]
    if bitmap.channels == 4 and path.suffix.lower() in (".jpg", ".jpeg"):
        pixels = pixels[:, :, :3]
    iio.imwrite(path, pixels)

    logger.info("Saved image: %s (%dx%d)", path, bitmap.width, bitmap.height)
    return path


def is_raw_path(filepath: str | Path) -> bool:
    """True if the suffix names a camera RAW format."""
    return Path(filepath).suffix.lower() in RAW_EXTENSIONS
