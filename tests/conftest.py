import io

import pytest
from PIL import Image

from pixel_studio.buffer import ImageBuffer


def png_bytes(size=(3, 2), color=(120, 60, 30), mode="RGB") -> bytes:
    stream = io.BytesIO()
    Image.new(mode, size, color=color).save(stream, "PNG")
    return stream.getvalue()


@pytest.fixture
def gradient() -> ImageBuffer:
    """A 3x2 image whose pixels are all distinct."""
    return ImageBuffer.from_rows(
        [
            [(10, 20, 30), (40, 50, 60), (70, 80, 90)],
            [(100, 110, 120), (130, 140, 150), (160, 170, 180)],
        ]
    )


@pytest.fixture
def overlay_files(tmp_path):
    halo = tmp_path / "halo.png"
    grain = tmp_path / "grain.png"
    Image.new("RGB", (4, 4), color=(20, 40, 60)).save(halo)
    Image.new("RGB", (4, 4), color=(100, 100, 100)).save(grain)
    return halo, grain
