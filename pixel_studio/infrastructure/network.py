from __future__ import annotations

import io
import logging
import time
from typing import Callable

import requests

from ..buffer import ImageBuffer
from ..config import SETTINGS, StudioSettings
from ..errors import ImageIOError, SourceFetchError
from .storage import decode

log = logging.getLogger(__name__)

SessionFactory = Callable[[], requests.Session]


class SourceFetcher:
    def __init__(
        self,
        session_factory: SessionFactory | None = None,
        settings: StudioSettings = SETTINGS,
        backoff: float = 0.4,
    ) -> None:
        self._session_factory = session_factory or requests.Session
        self._settings = settings
        self._backoff = backoff
        self._session = self._create_session()

    def _create_session(self) -> requests.Session:
        session = self._session_factory()
        session.headers.update({"User-Agent": "pixel-studio/1.0"})
        return session

    def fetch_source(self, source_url: str | None = None) -> ImageBuffer:
        target_url = source_url or self._settings.source_url
        if not target_url:
            raise SourceFetchError("No source URL given and SOURCE_URL is not set")

        last_exception: Exception | None = None
        for attempt in range(1, self._settings.retries + 2):
            try:
                response = self._session.get(target_url, timeout=self._settings.timeout)
                response.raise_for_status()
                return decode(io.BytesIO(response.content))
            except (requests.RequestException, ImageIOError) as exc:
                last_exception = exc
                log.warning("Fetching %s failed (attempt %d): %s", target_url, attempt, exc)
                time.sleep(self._backoff * attempt)
        raise SourceFetchError(f"Could not fetch {target_url}: {last_exception}") from last_exception


FETCHER = SourceFetcher()
