from __future__ import annotations

from ..buffer import ImageBuffer
from ..color import RGB, clamp_channel


def grayscale(img: ImageBuffer) -> ImageBuffer:
    """Average the three channels of every pixel, in place."""
    width, height = img.size
    for y in range(height):
        for x in range(width):
            r, g, b = img.get_pixel(x, y)
            avg = (r + g + b) // 3
            img.set_pixel(x, y, (avg, avg, avg))
    return img


def invert(img: ImageBuffer) -> ImageBuffer:
    width, height = img.size
    for y in range(height):
        for x in range(width):
            r, g, b = img.get_pixel(x, y)
            img.set_pixel(x, y, (255 - r, 255 - g, 255 - b))
    return img


def sepia_pixel(rgb: RGB) -> RGB:
    r, g, b = rgb
    return RGB(
        clamp_channel(0.393 * r + 0.769 * g + 0.189 * b),
        clamp_channel(0.349 * r + 0.686 * g + 0.168 * b),
        clamp_channel(0.272 * r + 0.534 * g + 0.131 * b),
    )


def sepia(img: ImageBuffer) -> ImageBuffer:
    width, height = img.size
    for y in range(height):
        for x in range(width):
            img.set_pixel(x, y, sepia_pixel(img.get_pixel(x, y)))
    return img
