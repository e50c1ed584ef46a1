from __future__ import annotations

import io

from flask import send_file

from .buffer import ImageBuffer
from .infrastructure.storage import encode_png_bytes


def send_png_bytes(data: bytes):
    return send_file(io.BytesIO(data), mimetype="image/png")


def send_png(img: ImageBuffer):
    return send_png_bytes(encode_png_bytes(img))
