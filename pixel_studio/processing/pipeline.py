from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Dict, Iterable, Optional, Tuple

from ..buffer import ImageBuffer
from ..errors import UnknownTransformError
from .adjust import set_hue, set_lightness, set_saturation
from .composite import OverlayPair, vignette_grain_filter
from .geometry import rotate_clockwise
from .threshold import stylize_bw
from .tone import grayscale, invert, sepia

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class TransformSpec:
    name: str
    func: Callable[..., ImageBuffer]
    description: str
    takes_value: bool = False
    needs_overlays: bool = False


TRANSFORMS: Dict[str, TransformSpec] = {
    spec.name: spec
    for spec in (
        TransformSpec("grayscale", grayscale, "Average the channels of every pixel"),
        TransformSpec("invert", invert, "Replace every channel with 255 minus its value"),
        TransformSpec("sepia", sepia, "Classic sepia tone matrix"),
        TransformSpec("bw", stylize_bw, "Pure black/white split at the median luminance"),
        TransformSpec("rotate", rotate_clockwise, "Rotate 90 degrees clockwise"),
        TransformSpec(
            "vignette",
            vignette_grain_filter,
            "Warm shift, halo vignette and film grain",
            needs_overlays=True,
        ),
        TransformSpec("hue", set_hue, "Set every pixel's hue (degrees)", takes_value=True),
        TransformSpec(
            "saturation", set_saturation, "Set every pixel's saturation (0-1)", takes_value=True
        ),
        TransformSpec(
            "lightness", set_lightness, "Set every pixel's lightness (0-1)", takes_value=True
        ),
    )
}


def get_transform(name: str) -> TransformSpec:
    try:
        return TRANSFORMS[name.lower()]
    except KeyError:
        raise UnknownTransformError(name) from None


def apply_transform(
    name: str,
    img: ImageBuffer,
    value: Optional[float] = None,
    overlays: Optional[OverlayPair] = None,
) -> ImageBuffer:
    """Run one catalog transform and return its result.

    Most transforms mutate ``img`` and hand it back; ``rotate`` returns a new
    buffer. Callers should always continue with the returned buffer.
    """
    spec = get_transform(name)
    log.debug("Applying %s to %dx%d image", spec.name, img.width, img.height)
    if spec.takes_value:
        if value is None:
            raise ValueError(f"Transform '{spec.name}' requires a value")
        return spec.func(img, float(value))
    if spec.needs_overlays:
        if overlays is None:
            raise ValueError(f"Transform '{spec.name}' requires halo and grain overlays")
        return spec.func(img, overlays.halo, overlays.grain)
    return spec.func(img)


def apply_chain(
    steps: Iterable[str],
    img: ImageBuffer,
    value: Optional[float] = None,
    overlays: Optional[Callable[[Tuple[int, int]], OverlayPair]] = None,
) -> ImageBuffer:
    """Apply transforms in order, feeding each one the previous result.

    ``overlays`` is a factory called with the current image size, since an
    earlier rotation changes the size the composite filter must match.
    """
    for name in steps:
        spec = get_transform(name)
        pair = overlays(img.size) if spec.needs_overlays and overlays is not None else None
        img = apply_transform(spec.name, img, value=value, overlays=pair)
    return img
