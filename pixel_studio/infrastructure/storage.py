from __future__ import annotations

import io
import logging
from pathlib import Path
from typing import BinaryIO, Union

from PIL import Image

from ..buffer import ImageBuffer
from ..errors import ImageIOError

log = logging.getLogger(__name__)

Target = Union[str, Path, BinaryIO]

_FORMAT_ALIASES = {"jpg": "JPEG", "tif": "TIFF"}
# Formats Pillow writes without an alpha channel.
_NO_ALPHA_FORMATS = {"JPEG", "BMP", "PPM"}


def _describe(target: Target) -> str:
    return str(target) if isinstance(target, (str, Path)) else "<stream>"


def normalize_format(fmt: str) -> str:
    key = fmt.strip().lower().lstrip(".")
    name = _FORMAT_ALIASES.get(key, key.upper())
    Image.init()
    if name not in Image.SAVE:
        raise ImageIOError(f"Unsupported image format: {fmt}")
    return name


def buffer_from_image(img: Image.Image) -> ImageBuffer:
    has_alpha = img.mode in ("RGBA", "LA", "PA") or "transparency" in img.info
    src = img.convert("RGBA" if has_alpha else "RGB")
    width, height = src.size
    buffer = ImageBuffer(width, height)
    if width == 0 or height == 0:
        return buffer

    pixels = src.load()
    alpha = [] if has_alpha else None
    for y in range(height):
        for x in range(width):
            value = pixels[x, y]
            buffer.set_pixel(x, y, value[:3])
            if alpha is not None:
                alpha.append(value[3])
    buffer.alpha = alpha
    return buffer


def image_from_buffer(buffer: ImageBuffer, keep_alpha: bool = True) -> Image.Image:
    width, height = buffer.size
    with_alpha = keep_alpha and buffer.alpha is not None and len(buffer.alpha) == width * height
    out = Image.new("RGBA" if with_alpha else "RGB", (width, height))
    if width == 0 or height == 0:
        return out

    dst = out.load()
    for y in range(height):
        for x in range(width):
            r, g, b = buffer.get_pixel(x, y)
            if with_alpha:
                dst[x, y] = (r, g, b, buffer.alpha[y * width + x])
            else:
                dst[x, y] = (r, g, b)
    return out


def decode(source: Target) -> ImageBuffer:
    """Read an image file (or binary stream) into an :class:`ImageBuffer`."""
    try:
        with Image.open(source) as img:
            img.load()
            buffer = buffer_from_image(img)
    except (OSError, ValueError, Image.DecompressionBombError) as exc:
        raise ImageIOError(f"Could not decode image {_describe(source)}: {exc}") from exc
    log.info("Decoded %s (%dx%d)", _describe(source), buffer.width, buffer.height)
    return buffer


def encode(buffer: ImageBuffer, fmt: str, target: Target) -> None:
    """Write ``buffer`` to ``target`` in the given format (``"png"`` always works)."""
    name = normalize_format(fmt)
    img = image_from_buffer(buffer, keep_alpha=name not in _NO_ALPHA_FORMATS)
    try:
        img.save(target, name)
    except (OSError, ValueError, SystemError) as exc:
        raise ImageIOError(f"Could not encode image to {_describe(target)}: {exc}") from exc
    log.info("Encoded %dx%d image as %s to %s", buffer.width, buffer.height, name, _describe(target))


def encode_png_bytes(buffer: ImageBuffer) -> bytes:
    stream = io.BytesIO()
    encode(buffer, "png", stream)
    return stream.getvalue()
