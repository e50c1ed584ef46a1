"""Exception types raised by the transform engine and its collaborators."""

from __future__ import annotations

from typing import Tuple


class PixelStudioError(Exception):
    """Base class for errors the service and CLI report to the caller."""


class DimensionMismatchError(PixelStudioError, ValueError):
    def __init__(self, name: str, expected: Tuple[int, int], actual: Tuple[int, int]) -> None:
        super().__init__(
            f"{name} overlay is {actual[0]}x{actual[1]}, expected {expected[0]}x{expected[1]}"
        )
        self.name = name
        self.expected = expected
        self.actual = actual


class ImageIOError(PixelStudioError, OSError):
    """Decoding or encoding an image failed."""


class UnknownTransformError(PixelStudioError, KeyError):
    def __init__(self, name: str) -> None:
        super().__init__(name)
        self.name = name

    def __str__(self) -> str:
        return f"Unknown transform: {self.name}"


class SourceFetchError(PixelStudioError):
    """The remote source image could not be fetched after all retries."""
