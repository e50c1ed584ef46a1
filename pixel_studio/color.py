"""RGB and HSL color values and the conversions between them."""

from __future__ import annotations

import math
from dataclasses import dataclass, replace
from typing import NamedTuple


def clamp_channel(value: float) -> int:
    """Round half up and clamp to the 8-bit channel range."""
    return min(255, max(0, int(math.floor(value + 0.5))))


def clamp_unit(value: float) -> float:
    return min(1.0, max(0.0, float(value)))


def wrap_hue(value: float) -> float:
    hue = float(value) % 360.0
    # Tiny negative inputs can round up to exactly 360.0.
    return 0.0 if hue >= 360.0 else hue


class RGB(NamedTuple):
    red: int
    green: int
    blue: int

    def to_hsl(self) -> "HSL":
        return rgb_to_hsl(self)


@dataclass(frozen=True)
class HSL:
    hue: float = 0.0
    saturation: float = 0.0
    lightness: float = 0.0

    def with_hue(self, hue: float) -> "HSL":
        return replace(self, hue=wrap_hue(hue))

    def with_saturation(self, saturation: float) -> "HSL":
        return replace(self, saturation=clamp_unit(saturation))

    def with_lightness(self, lightness: float) -> "HSL":
        return replace(self, lightness=clamp_unit(lightness))

    def to_rgb(self) -> RGB:
        return hsl_to_rgb(self)


BLACK = RGB(0, 0, 0)
WHITE = RGB(255, 255, 255)


def rgb_to_hsl(rgb: RGB) -> HSL:
    r, g, b = (channel / 255.0 for channel in rgb)
    max_channel = max(r, g, b)
    min_channel = min(r, g, b)
    lightness = (max_channel + min_channel) / 2.0
    delta = max_channel - min_channel
    if delta == 0:
        # Achromatic: hue is undefined, report 0.
        return HSL(0.0, 0.0, lightness)

    saturation = delta / (1.0 - abs(2.0 * lightness - 1.0))
    if max_channel == r:
        hue = 60.0 * (((g - b) / delta) % 6.0)
    elif max_channel == g:
        hue = 60.0 * ((b - r) / delta + 2.0)
    else:
        hue = 60.0 * ((r - g) / delta + 4.0)
    return HSL(wrap_hue(hue), clamp_unit(saturation), lightness)


def hsl_to_rgb(hsl: HSL) -> RGB:
    hue = wrap_hue(hsl.hue)
    saturation = clamp_unit(hsl.saturation)
    lightness = clamp_unit(hsl.lightness)

    chroma = (1.0 - abs(2.0 * lightness - 1.0)) * saturation
    sector = hue / 60.0
    x = chroma * (1.0 - abs(sector % 2.0 - 1.0))
    m = lightness - chroma / 2.0

    if sector < 1:
        r, g, b = chroma, x, 0.0
    elif sector < 2:
        r, g, b = x, chroma, 0.0
    elif sector < 3:
        r, g, b = 0.0, chroma, x
    elif sector < 4:
        r, g, b = 0.0, x, chroma
    elif sector < 5:
        r, g, b = x, 0.0, chroma
    else:
        r, g, b = chroma, 0.0, x

    return RGB(
        clamp_channel((r + m) * 255.0),
        clamp_channel((g + m) * 255.0),
        clamp_channel((b + m) * 255.0),
    )
