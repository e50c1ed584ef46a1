from __future__ import annotations

import math
from typing import List

from ..buffer import ImageBuffer
from ..color import BLACK, WHITE


def luminance(rgb) -> float:
    """Perceptual luminance from the weighted squares of the channels."""
    r, g, b = rgb
    return math.sqrt(0.299 * r * r + 0.587 * g * g + 0.114 * b * b)


def median_luminance(img: ImageBuffer) -> float:
    """Return the score at index ``count // 2`` of the sorted luminances.

    For an even pixel count this is the upper of the two middle scores.
    Raises ``ValueError`` for an empty image.
    """
    scores: List[float] = sorted(luminance(rgb) for rgb in img.pixels())
    if not scores:
        raise ValueError("Cannot take the median luminance of an empty image")
    return scores[len(scores) // 2]


def stylize_bw(img: ImageBuffer) -> ImageBuffer:
    """Map every pixel to pure white or black around the median luminance."""
    width, height = img.size
    if width == 0 or height == 0:
        return img

    threshold = median_luminance(img)
    for y in range(height):
        for x in range(width):
            lum = luminance(img.get_pixel(x, y))
            img.set_pixel(x, y, WHITE if lum >= threshold else BLACK)
    return img
