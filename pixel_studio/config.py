import logging
import os
from dataclasses import dataclass


def _env_flag(name: str, default: str) -> bool:
    return os.getenv(name, default).strip().lower() in ("1", "true", "yes", "on")


@dataclass(frozen=True)
class StudioSettings:
    halo_path: str
    grain_path: str
    fit_overlays: bool
    output_format: str
    port: int
    source_url: str
    timeout: float
    retries: int
    cache_ttl: float
    log_level: str

    @classmethod
    def from_env(cls) -> "StudioSettings":
        return cls(
            halo_path=os.getenv("HALO_PATH", "resources/halo.png"),
            grain_path=os.getenv("GRAIN_PATH", "resources/decorative_grain.png"),
            fit_overlays=_env_flag("FIT_OVERLAYS", "1"),
            output_format=os.getenv("OUTPUT_FORMAT", "png").lower(),
            port=int(os.getenv("PORT", "5600")),
            source_url=os.getenv("SOURCE_URL", ""),
            timeout=float(os.getenv("SOURCE_TIMEOUT", "10.0")),
            retries=int(os.getenv("SOURCE_RETRIES", "2")),
            cache_ttl=float(os.getenv("CACHE_TTL", "5")),
            log_level=os.getenv("LOG_LEVEL", "INFO"),
        )


SETTINGS = StudioSettings.from_env()


def configure_logging(settings: StudioSettings = SETTINGS) -> logging.Logger:
    logging.basicConfig(level=settings.log_level)
    return logging.getLogger("pixel-studio")
