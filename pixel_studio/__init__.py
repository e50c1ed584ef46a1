"""Pixel transform engine with image I/O, an HTTP service and a CLI."""

from .buffer import ImageBuffer
from .color import HSL, RGB, hsl_to_rgb, rgb_to_hsl
from .errors import DimensionMismatchError, ImageIOError, PixelStudioError, UnknownTransformError
from . import infrastructure, processing

__version__ = "1.0.0"

__all__ = [
    "__version__",
    "ImageBuffer",
    "HSL",
    "RGB",
    "hsl_to_rgb",
    "rgb_to_hsl",
    "DimensionMismatchError",
    "ImageIOError",
    "PixelStudioError",
    "UnknownTransformError",
    "infrastructure",
    "processing",
]
