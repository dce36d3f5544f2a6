"""Camera RAW development through rawpy (LibRaw).

rawpy is an optional dependency (``pip install imagecli[raw]``).
"""

from __future__ import annotations

import logging
from pathlib import Path

import numpy as np

from imagecli.config import RAW_EXTENSIONS
from imagecli.core.types import Bitmap
from imagecli.errors import RawDecodeError
from imagecli.io.image import to_bitmap, validate_input_path

logger = logging.getLogger(__name__)


def decode_raw(filepath: str | Path) -> Bitmap:
    """Demosaic and develop a RAW file to an 8-bit RGB bitmap.

    Uses the camera white balance and LibRaw's default sRGB output.

    Raises:
        RawDecodeError: If rawpy is not installed or LibRaw rejects the file.
    """
    path = validate_input_path(filepath, allowed=RAW_EXTENSIONS)

    try:
        import rawpy
    except ImportError as e:
        raise RawDecodeError(
            "RAW support requires rawpy. Install it with `pip install imagecli[raw]`."
        ) from e

    logger.debug("Developing RAW file: %s", path)
    try:
        with rawpy.imread(str(path)) as raw:
            rgb = raw.postprocess(use_camera_wb=True, output_bps=8)
    except (rawpy.LibRawError, OSError) as e:
        raise RawDecodeError(f"Failed to develop RAW {path}: {e}") from e

    return to_bitmap(np.asarray(rgb))
