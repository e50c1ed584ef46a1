import io
from dataclasses import replace

import pytest

pytest.importorskip("flask")

from pixel_studio.app import create_app, parse_value
from pixel_studio.buffer import ImageBuffer
from pixel_studio.color import RGB
from pixel_studio.config import SETTINGS
from pixel_studio.errors import SourceFetchError
from pixel_studio.infrastructure.cache import ResponseCache
from pixel_studio.infrastructure.storage import decode

from conftest import png_bytes


class FakeFetcher:
    def __init__(self, img=None, error=None) -> None:
        self.img = img
        self.error = error
        self.urls = []

    def fetch_source(self, source_url=None):
        self.urls.append(source_url)
        if self.error is not None:
            raise self.error
        return self.img.copy()


@pytest.fixture
def make_client(overlay_files):
    halo, grain = overlay_files
    settings = replace(SETTINGS, halo_path=str(halo), grain_path=str(grain), fit_overlays=True)

    def factory(fetcher=None, cache=None):
        app = create_app(
            settings, fetcher=fetcher or FakeFetcher(), cache=cache or ResponseCache(ttl=60)
        )
        app.config["TESTING"] = True
        return app.test_client()

    return factory


def decode_response(response) -> ImageBuffer:
    assert response.mimetype == "image/png"
    return decode(io.BytesIO(response.data))


def test_parse_value():
    assert parse_value(None) is None
    assert parse_value("") is None
    assert parse_value("0.25") == 0.25
    with pytest.raises(ValueError):
        parse_value("bright")
    with pytest.raises(ValueError):
        parse_value("nan")


def test_health_and_catalog(make_client):
    client = make_client()

    health = client.get("/health").get_json()
    catalog = client.get("/transforms").get_json()

    assert health["ok"] is True
    assert {entry["name"] for entry in catalog} >= {"sepia", "vignette", "hue"}
    assert next(e for e in catalog if e["name"] == "hue")["takes_value"] is True


def test_settings_view(make_client):
    data = make_client().get("/settings").get_json()

    assert data["output_format"] == SETTINGS.output_format
    assert data["halo_path"].endswith("halo.png")


def test_upload_raw_body(make_client):
    response = make_client().post(
        "/transform/invert",
        data=png_bytes((3, 2), (10, 20, 30)),
        content_type="application/octet-stream",
    )

    assert response.status_code == 200
    assert decode_response(response).get_pixel(0, 0) == RGB(245, 235, 225)


def test_upload_multipart_with_value(make_client):
    response = make_client().post(
        "/transform/lightness?value=1",
        data={"image": (io.BytesIO(png_bytes()), "in.png")},
        content_type="multipart/form-data",
    )

    assert response.status_code == 200
    assert set(decode_response(response).pixels()) == {RGB(255, 255, 255)}


def test_upload_rotate_swaps_dimensions(make_client):
    response = make_client().post("/transform/rotate", data=png_bytes((3, 2)))

    assert decode_response(response).size == (2, 3)


def test_upload_vignette_uses_fitted_overlays(make_client):
    response = make_client().post("/transform/vignette", data=png_bytes((3, 2), (230, 100, 94)))

    assert response.status_code == 200
    assert decode_response(response).get_pixel(1, 1) == RGB(169, 80, 54)


def test_unknown_transform_is_404(make_client):
    response = make_client().post("/transform/blur", data=png_bytes())

    assert response.status_code == 404
    assert "sepia" in response.get_json()["available"]


@pytest.mark.parametrize("url", ["/transform/hue", "/transform/hue?value=abc"])
def test_bad_value_is_400(make_client, url):
    response = make_client().post(url, data=png_bytes())

    assert response.status_code == 400


def test_missing_or_corrupt_upload_is_400(make_client):
    client = make_client()

    assert client.post("/transform/sepia").status_code == 400
    assert client.post("/transform/sepia", data=b"not an image").status_code == 400


def test_source_transform_is_cached(make_client):
    fetcher = FakeFetcher(ImageBuffer(2, 2, fill=(0, 0, 0)))
    client = make_client(fetcher)

    first = client.get("/transform/invert?source_url=http://example.com/a.png")
    second = client.get("/transform/invert?source_url=http://example.com/a.png")

    assert first.status_code == second.status_code == 200
    assert first.data == second.data
    assert fetcher.urls == ["http://example.com/a.png"]
    assert decode_response(first).get_pixel(0, 0) == RGB(255, 255, 255)


def test_source_failure_without_fallback_is_502(make_client):
    client = make_client(FakeFetcher(error=SourceFetchError("down")))

    response = client.get("/transform/sepia?source_url=http://example.com/a.png")

    assert response.status_code == 502


def test_uploads_are_never_served_as_a_source_fallback(make_client):
    fetcher = FakeFetcher(error=SourceFetchError("down"))
    client = make_client(fetcher)

    upload = client.post("/transform/invert", data=png_bytes((3, 2), (10, 20, 30)))
    response = client.get("/transform/sepia?source_url=http://other/b.png")

    assert upload.status_code == 200
    assert response.status_code == 502
    assert response.data != upload.data


def test_source_failure_serves_last_good_result_for_same_request(make_client):
    now = [100.0]
    cache = ResponseCache(ttl=5, clock=lambda: now[0])
    fetcher = FakeFetcher(ImageBuffer(2, 2, fill=(0, 0, 0)))
    client = make_client(fetcher, cache)
    url = "/transform/invert?source_url=http://example.com/a.png"

    first = client.get(url)
    now[0] = 200.0
    fetcher.error = SourceFetchError("down")
    again = client.get(url)
    other_transform = client.get("/transform/sepia?source_url=http://example.com/a.png")
    other_source = client.get("/transform/invert?source_url=http://example.com/b.png")

    assert first.status_code == again.status_code == 200
    assert again.data == first.data
    assert len(fetcher.urls) == 4
    assert other_transform.status_code == 502
    assert other_source.status_code == 502


@pytest.mark.parametrize("value", ["nan", "inf", "-inf"])
def test_non_finite_value_is_400(make_client, value):
    response = make_client().post(f"/transform/hue?value={value}", data=png_bytes())

    assert response.status_code == 400
    assert "finite" in response.get_json()["error"]
