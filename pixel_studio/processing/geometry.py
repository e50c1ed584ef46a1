from __future__ import annotations

from ..buffer import ImageBuffer


def rotate_clockwise(img: ImageBuffer) -> ImageBuffer:
    """Return a new buffer holding ``img`` turned 90 degrees clockwise.

    The source pixel at ``(x, y)`` lands at ``(height - 1 - y, x)`` in a
    ``height x width`` result. The source buffer is left untouched.
    """
    width, height = img.size
    out = ImageBuffer(height, width)
    for y in range(height):
        for x in range(width):
            out.set_pixel(height - 1 - y, x, img.get_pixel(x, y))

    if img.alpha is not None:
        rotated = [0] * (width * height)
        for y in range(height):
            for x in range(width):
                rotated[x * height + (height - 1 - y)] = img.alpha[y * width + x]
        out.alpha = rotated
    return out
