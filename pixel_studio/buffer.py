from __future__ import annotations

from typing import Iterable, Iterator, List, Optional, Sequence, Tuple

from .color import BLACK, RGB


class ImageBuffer:
    """A width x height grid of RGB pixels addressed by ``(x, y)``.

    ``x`` is the column in ``[0, width)`` and ``y`` the row in ``[0, height)``.
    Pixels are stored row-major. An optional alpha band is carried alongside
    the colors so that encoders can write it back out; transforms never read
    it, and only those that move pixels around (rotation) move it as well.
    """

    __slots__ = ("_width", "_height", "_pixels", "alpha")

    def __init__(self, width: int, height: int, fill: Tuple[int, int, int] = BLACK) -> None:
        if width < 0 or height < 0:
            raise ValueError(f"Image dimensions must be non-negative, got {width}x{height}")
        self._width = width
        self._height = height
        self._pixels: List[RGB] = [RGB(*fill)] * (width * height)
        self.alpha: Optional[List[int]] = None

    @classmethod
    def from_rows(cls, rows: Sequence[Sequence[Tuple[int, int, int]]]) -> "ImageBuffer":
        height = len(rows)
        width = len(rows[0]) if height else 0
        buffer = cls(width, height)
        for y, row in enumerate(rows):
            if len(row) != width:
                raise ValueError(f"Row {y} has {len(row)} pixels, expected {width}")
            for x, rgb in enumerate(row):
                buffer.set_pixel(x, y, rgb)
        return buffer

    @classmethod
    def from_pixels(
        cls,
        width: int,
        height: int,
        pixels: Iterable[Tuple[int, int, int]],
        alpha: Optional[Iterable[int]] = None,
    ) -> "ImageBuffer":
        buffer = cls(width, height)
        data = [RGB(*rgb) for rgb in pixels]
        if len(data) != width * height:
            raise ValueError(f"Expected {width * height} pixels, got {len(data)}")
        buffer._pixels = data
        if alpha is not None:
            buffer.alpha = list(alpha)
        return buffer

    @property
    def width(self) -> int:
        return self._width

    @property
    def height(self) -> int:
        return self._height

    @property
    def size(self) -> Tuple[int, int]:
        return self._width, self._height

    def _index(self, x: int, y: int) -> int:
        if not (0 <= x < self._width and 0 <= y < self._height):
            raise IndexError(
                f"Pixel ({x}, {y}) is outside a {self._width}x{self._height} image"
            )
        return y * self._width + x

    def get_pixel(self, x: int, y: int) -> RGB:
        return self._pixels[self._index(x, y)]

    def set_pixel(self, x: int, y: int, rgb: Tuple[int, int, int]) -> None:
        self._pixels[self._index(x, y)] = RGB(*rgb)

    def pixels(self) -> Iterator[RGB]:
        """Row-major iteration over every pixel."""
        return iter(self._pixels)

    def rows(self) -> List[List[RGB]]:
        return [
            self._pixels[y * self._width:(y + 1) * self._width] for y in range(self._height)
        ]

    def copy(self) -> "ImageBuffer":
        clone = ImageBuffer(self._width, self._height)
        clone._pixels = list(self._pixels)
        clone.alpha = list(self.alpha) if self.alpha is not None else None
        return clone

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ImageBuffer):
            return NotImplemented
        return self.size == other.size and self._pixels == other._pixels

    def __repr__(self) -> str:
        return f"ImageBuffer(width={self._width}, height={self._height})"
