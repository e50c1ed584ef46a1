"""Pixel transforms operating on :class:`~pixel_studio.buffer.ImageBuffer`."""

from .adjust import set_hue, set_lightness, set_saturation
from .composite import OverlayPair, blend_overlay, vignette_grain_filter, warm_shift
from .geometry import rotate_clockwise
from .pipeline import TRANSFORMS, TransformSpec, apply_chain, apply_transform, get_transform
from .threshold import luminance, median_luminance, stylize_bw
from .tone import grayscale, invert, sepia

__all__ = [
    "set_hue",
    "set_lightness",
    "set_saturation",
    "OverlayPair",
    "blend_overlay",
    "vignette_grain_filter",
    "warm_shift",
    "rotate_clockwise",
    "TRANSFORMS",
    "TransformSpec",
    "apply_chain",
    "apply_transform",
    "get_transform",
    "luminance",
    "median_luminance",
    "stylize_bw",
    "grayscale",
    "invert",
    "sepia",
]
