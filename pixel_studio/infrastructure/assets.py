from __future__ import annotations

import logging
from pathlib import Path
from typing import Dict, Optional, Tuple

from PIL import Image

from ..buffer import ImageBuffer
from ..config import SETTINGS, StudioSettings
from ..errors import ImageIOError
from ..processing.composite import OverlayPair
from .storage import buffer_from_image

log = logging.getLogger(__name__)

Size = Tuple[int, int]


class OverlayAssets:
    """Halo and grain overlays for the vignette filter, loaded once per path.

    The filter itself only accepts overlays of exactly the image size. When
    ``fit`` is enabled the overlays are resampled here, on the caller side,
    to whatever size is requested; otherwise they are handed over as stored.
    """

    def __init__(
        self, halo_path: str, grain_path: str, fit: bool = True, max_sizes: int = 8
    ) -> None:
        self.halo_path = Path(halo_path)
        self.grain_path = Path(grain_path)
        self.fit = fit
        self._sources: Optional[Tuple[Image.Image, Image.Image]] = None
        self._fitted: Dict[Size, OverlayPair] = {}
        self._max_sizes = max_sizes

    @classmethod
    def from_settings(cls, settings: StudioSettings = SETTINGS) -> "OverlayAssets":
        return cls(settings.halo_path, settings.grain_path, fit=settings.fit_overlays)

    def _open(self, path: Path) -> Image.Image:
        try:
            with Image.open(path) as img:
                return img.convert("RGB")
        except OSError as exc:
            raise ImageIOError(f"Could not load overlay {path}: {exc}") from exc

    def sources(self) -> Tuple[Image.Image, Image.Image]:
        if self._sources is None:
            self._sources = (self._open(self.halo_path), self._open(self.grain_path))
            log.info("Loaded overlays %s and %s", self.halo_path, self.grain_path)
        return self._sources

    def overlays_for(self, size: Size) -> OverlayPair:
        cached = self._fitted.get(size)
        if cached is not None:
            return cached

        halo, grain = self.sources()
        if self.fit and 0 in size:
            return OverlayPair(ImageBuffer(*size), ImageBuffer(*size))
        if self.fit:
            if halo.size != size:
                halo = halo.resize(size, Image.Resampling.LANCZOS)
            if grain.size != size:
                grain = grain.resize(size, Image.Resampling.LANCZOS)
        pair = OverlayPair(buffer_from_image(halo), buffer_from_image(grain))
        if len(self._fitted) >= self._max_sizes:
            self._fitted.pop(next(iter(self._fitted)))
        self._fitted[size] = pair
        return pair

    def __call__(self, size: Size) -> OverlayPair:
        return self.overlays_for(size)
