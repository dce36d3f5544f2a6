"""imagecli: tone, color and texture adjustments for 8-bit images."""

__version__ = "0.3.0"
