"""Collaborators around the transform engine: codecs, overlay assets, networking and caching."""

from .assets import OverlayAssets
from .cache import CACHE, ResponseCache
from .network import FETCHER, SourceFetcher
from .storage import buffer_from_image, decode, encode, encode_png_bytes, image_from_buffer

__all__ = [
    "OverlayAssets",
    "CACHE",
    "ResponseCache",
    "FETCHER",
    "SourceFetcher",
    "buffer_from_image",
    "decode",
    "encode",
    "encode_png_bytes",
    "image_from_buffer",
]
