from __future__ import annotations

import logging
from typing import NamedTuple

from ..buffer import ImageBuffer
from ..color import clamp_channel
from ..errors import DimensionMismatchError

log = logging.getLogger(__name__)

VIGNETTE_WEIGHT = 0.35
GRAIN_WEIGHT = 0.05
WARM_RED_GAIN = 1.2


class OverlayPair(NamedTuple):
    halo: ImageBuffer
    grain: ImageBuffer


def check_overlay_dimensions(img: ImageBuffer, halo: ImageBuffer, grain: ImageBuffer) -> None:
    for name, overlay in (("halo", halo), ("grain", grain)):
        if overlay.size != img.size:
            raise DimensionMismatchError(name, img.size, overlay.size)


def warm_shift(img: ImageBuffer) -> ImageBuffer:
    """Boost red by 20% and halve blue, in place."""
    width, height = img.size
    for y in range(height):
        for x in range(width):
            r, g, b = img.get_pixel(x, y)
            img.set_pixel(x, y, (clamp_channel(WARM_RED_GAIN * r), g, b // 2))
    return img


def blend_overlay(img: ImageBuffer, overlay: ImageBuffer, weight: float) -> ImageBuffer:
    """Mix ``overlay`` into ``img`` in place: ``(1 - weight) * img + weight * overlay``."""
    if overlay.size != img.size:
        raise DimensionMismatchError("blend", img.size, overlay.size)
    keep = 1.0 - weight
    width, height = img.size
    for y in range(height):
        for x in range(width):
            r, g, b = img.get_pixel(x, y)
            r2, g2, b2 = overlay.get_pixel(x, y)
            img.set_pixel(
                x,
                y,
                (
                    clamp_channel(keep * r + weight * r2),
                    clamp_channel(keep * g + weight * g2),
                    clamp_channel(keep * b + weight * b2),
                ),
            )
    return img


def vignette_grain_filter(img: ImageBuffer, halo: ImageBuffer, grain: ImageBuffer) -> ImageBuffer:
    """Warm the image, darken its border with ``halo`` and add ``grain``.

    Both overlays must match the image size exactly; the check runs before
    any pixel is written so a mismatch leaves ``img`` unchanged.
    """
    check_overlay_dimensions(img, halo, grain)
    log.debug("Applying vignette/grain filter to %dx%d image", img.width, img.height)
    warm_shift(img)
    blend_overlay(img, halo, VIGNETTE_WEIGHT)
    blend_overlay(img, grain, GRAIN_WEIGHT)
    return img
