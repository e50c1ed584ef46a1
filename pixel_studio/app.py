from __future__ import annotations

import io
import logging
import math
from dataclasses import asdict
from typing import Optional

from flask import Flask, jsonify, request

from . import __version__
from .config import SETTINGS, StudioSettings, configure_logging
from .errors import DimensionMismatchError, ImageIOError, SourceFetchError, UnknownTransformError
from .infrastructure.assets import OverlayAssets
from .infrastructure.cache import CACHE, ResponseCache
from .infrastructure.network import FETCHER, SourceFetcher
from .infrastructure.storage import decode, encode_png_bytes
from .processing.pipeline import TRANSFORMS, apply_transform, get_transform
from .responses import send_png, send_png_bytes

APP_VERSION = __version__

log = logging.getLogger(__name__)


def parse_value(raw: Optional[str]) -> Optional[float]:
    if raw is None or raw == "":
        return None
    try:
        value = float(raw)
    except ValueError:
        raise ValueError(f"Invalid value: {raw!r}") from None
    if not math.isfinite(value):
        raise ValueError(f"Value must be a finite number, got {raw!r}")
    return value


def cache_key(name: str, value: Optional[float], source_url: str) -> str:
    return f"{name}|{value}|{source_url}"


def create_app(
    settings: StudioSettings = SETTINGS,
    fetcher: SourceFetcher | None = None,
    cache: ResponseCache | None = None,
    assets: OverlayAssets | None = None,
) -> Flask:
    configure_logging(settings)
    app = Flask(__name__)
    fetcher = fetcher or FETCHER
    cache = cache or CACHE
    assets = assets or OverlayAssets.from_settings(settings)

    def run(name: str, img, value: Optional[float]):
        spec = get_transform(name)
        overlays = assets.overlays_for(img.size) if spec.needs_overlays else None
        return apply_transform(spec.name, img, value=value, overlays=overlays)

    @app.errorhandler(UnknownTransformError)
    def unknown_transform(exc: UnknownTransformError):
        return jsonify(error=str(exc), available=sorted(TRANSFORMS)), 404

    @app.errorhandler(DimensionMismatchError)
    def dimension_mismatch(exc: DimensionMismatchError):
        return jsonify(error=str(exc)), 409

    @app.errorhandler(ImageIOError)
    def image_io_error(exc: ImageIOError):
        log.warning("Image I/O failed: %s", exc)
        return jsonify(error=str(exc)), 400

    @app.errorhandler(ValueError)
    def bad_parameter(exc: ValueError):
        return jsonify(error=str(exc)), 400

    @app.route("/transform/<name>", methods=["POST"])
    def transform_upload(name: str):
        value = parse_value(request.args.get("value"))
        get_transform(name)
        upload = request.files.get("image")
        payload = upload.read() if upload is not None else request.get_data()
        if not payload:
            return jsonify(error="No image supplied"), 400
        img = decode(io.BytesIO(payload))
        return send_png(run(name, img, value))

    @app.route("/transform/<name>", methods=["GET"])
    def transform_source(name: str):
        value = parse_value(request.args.get("value"))
        spec = get_transform(name)
        source_url = request.args.get("source_url") or settings.source_url
        key = cache_key(spec.name, value, source_url)
        cached = cache.get(key)
        if cached is not None:
            return send_png_bytes(cached)
        try:
            img = fetcher.fetch_source(source_url)
        except SourceFetchError as exc:
            fallback = cache.last_good(key)
            if fallback:
                log.warning("Serving last good image for %s: %s", key, exc)
                return send_png_bytes(fallback)
            return jsonify(error=str(exc)), 502
        data = encode_png_bytes(run(spec.name, img, value))
        cache.put(key, data)
        return send_png_bytes(data)

    @app.route("/transforms")
    def transforms():
        return jsonify(
            [
                {
                    "name": spec.name,
                    "description": spec.description,
                    "takes_value": spec.takes_value,
                    "needs_overlays": spec.needs_overlays,
                }
                for spec in TRANSFORMS.values()
            ]
        )

    @app.route("/health")
    def health():
        return jsonify(ok=True, version=APP_VERSION, transforms=len(TRANSFORMS))

    @app.route("/settings")
    def settings_view():
        return jsonify(asdict(settings))

    return app
