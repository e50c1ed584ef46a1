from __future__ import annotations

import math
from typing import Callable

from ..buffer import ImageBuffer
from ..color import HSL, clamp_unit, rgb_to_hsl, wrap_hue


def _finite(name: str, value: float) -> float:
    value = float(value)
    if not math.isfinite(value):
        raise ValueError(f"{name} must be a finite number, got {value}")
    return value


def _map_hsl(img: ImageBuffer, update: Callable[[HSL], HSL]) -> ImageBuffer:
    width, height = img.size
    for y in range(height):
        for x in range(width):
            hsl = rgb_to_hsl(img.get_pixel(x, y))
            img.set_pixel(x, y, update(hsl).to_rgb())
    return img


def set_hue(img: ImageBuffer, hue: float) -> ImageBuffer:
    """Give every pixel the same hue; ``hue`` wraps into [0, 360)."""
    hue = wrap_hue(_finite("hue", hue))
    return _map_hsl(img, lambda hsl: hsl.with_hue(hue))


def set_saturation(img: ImageBuffer, saturation: float) -> ImageBuffer:
    saturation = clamp_unit(_finite("saturation", saturation))
    return _map_hsl(img, lambda hsl: hsl.with_saturation(saturation))


def set_lightness(img: ImageBuffer, lightness: float) -> ImageBuffer:
    lightness = clamp_unit(_finite("lightness", lightness))
    return _map_hsl(img, lambda hsl: hsl.with_lightness(lightness))
