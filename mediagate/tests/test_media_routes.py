"""
HTTP tests for the fetch flows and the method fallback.
"""

import base64
import io
import json

import httpx
import pytest
from PIL import Image

from mediagate import config

from .helpers import BACKEND, CONVERTER, STORE, make_image

DIGEST = "a" * 64


def _resolves_to(respx_mock, backend_path, store_path, body, media_type=None):
    payload = {"Url": f"{STORE}{store_path}"}
    if media_type:
        payload["Type"] = media_type
    backend = respx_mock.get(f"{BACKEND}{backend_path}").mock(
        return_value=httpx.Response(200, json=payload)
    )
    store = respx_mock.get(f"{STORE}{store_path}").mock(return_value=httpx.Response(200, content=body))
    return backend, store


def test_pdf_is_served_as_attachment(client, respx_mock):
    _resolves_to(respx_mock, "/guild/7/report.pdf", "/files/r", b"%PDF-1.7", "application/pdf")

    response = client.get("/7/report.pdf")

    assert response.status_code == 200
    assert response.content == b"%PDF-1.7"
    assert response.headers["content-type"] == "application/pdf"
    assert response.headers["content-disposition"] == 'attachment; filename="report.pdf"'


def test_image_is_served_inline_with_path_filename(client, respx_mock, png_bytes):
    _resolves_to(respx_mock, "/guild/7/holiday.png", "/files/h", png_bytes, "image/png")

    response = client.get("/7/holiday.png")

    assert response.status_code == 200
    assert response.headers["content-disposition"] == 'inline; filename="holiday.png"'


def test_stale_cache_is_retried_once(client, respx_mock):
    backend = respx_mock.get(f"{BACKEND}/guild/7/clip.mp4").mock(
        side_effect=[
            httpx.Response(209, text="stale"),
            httpx.Response(200, json={"Url": f"{STORE}/files/c", "Type": "video/mp4"}),
        ]
    )
    respx_mock.get(f"{STORE}/files/c").mock(return_value=httpx.Response(200, content=b"mp4"))

    response = client.get("/7/clip.mp4")

    assert response.status_code == 200
    assert backend.call_count == 2
    assert response.headers["content-disposition"] == 'inline; filename="clip.mp4"'


@pytest.mark.respx(assert_all_called=False)
def test_stale_cache_twice_is_not_retried_again(client, respx_mock):
    backend = respx_mock.get(f"{BACKEND}/guild/7/clip.mp4").mock(
        return_value=httpx.Response(209, text="stale")
    )
    store = respx_mock.route(url__startswith=STORE)

    response = client.get("/7/clip.mp4")

    assert backend.call_count == 2
    assert store.call_count == 0
    assert response.status_code == 209
    assert response.text == "stale"


def test_backend_rejection_body_stays_out_of_warning_logs(client, respx_mock, production, log_messages):
    respx_mock.get(f"{BACKEND}/guild/7/report.pdf").mock(
        return_value=httpx.Response(401, text="signature SECRETDETAIL")
    )

    response = client.get("/7/report.pdf")

    assert response.status_code == 500
    loud = [r["message"] for r in log_messages if r["level"].no >= 30]
    assert any("401" in message for message in loud)
    assert not any("SECRETDETAIL" in message for message in loud)


def test_missing_object_is_hidden_in_production(client, respx_mock, production):
    respx_mock.get(f"{BACKEND}/guild/7/gone.txt").mock(
        return_value=httpx.Response(404, text="no such key in bucket media-prod")
    )

    response = client.get("/7/gone.txt")

    assert response.status_code == 500
    assert "bucket" not in response.text


def test_icon_resize_outputs_png_at_requested_size(client, respx_mock):
    _resolves_to(respx_mock, f"/icon/42/{DIGEST}", "/icons/i", make_image(200, 200), "image/png")

    response = client.get(f"/icon/42/{DIGEST}.webp?width=50&height=50")

    assert response.status_code == 200
    assert response.headers["content-type"] == "image/png"
    assert Image.open(io.BytesIO(response.content)).size == (50, 50)


def test_icon_resize_never_upscales(client, respx_mock):
    _resolves_to(respx_mock, f"/icon/42/{DIGEST}", "/icons/i", make_image(64, 48), "image/png")

    response = client.get(f"/icon/42/{DIGEST}.png?size=512")

    assert Image.open(io.BytesIO(response.content)).size == (64, 48)


def test_icon_negative_size_falls_back_to_32(client, respx_mock):
    _resolves_to(respx_mock, f"/icon/42/{DIGEST}", "/icons/i", make_image(200, 200), "image/png")

    response = client.get(f"/icon/42/{DIGEST}.png?width=-4&height=100")

    assert response.status_code == 200
    assert Image.open(io.BytesIO(response.content)).size == (32, 32)


def test_icon_in_requested_format_is_served_raw(client, respx_mock):
    jpeg = make_image(fmt="JPEG")
    _resolves_to(respx_mock, f"/icon/42/{DIGEST}", "/icons/i", jpeg, "image/jpeg")

    response = client.get(f"/icon/42/{DIGEST}.jpeg")

    assert response.status_code == 200
    assert response.content == jpeg
    assert response.headers["content-type"] == "image/jpeg"
    assert response.headers["content-disposition"] == f'inline; filename="{DIGEST}.jpeg"'


def test_icon_in_other_format_goes_through_convert(client, respx_mock):
    png = make_image()
    gif = make_image(fmt="GIF")
    # The declared type is ignored; the bytes are sniffed
    _resolves_to(respx_mock, f"/icon/42/{DIGEST}", "/icons/i", png, "image/gif")
    convert = respx_mock.post(f"{CONVERTER}/convert").mock(
        return_value=httpx.Response(200, json={"File": base64.b64encode(gif).decode()})
    )

    response = client.get(f"/icon/42/{DIGEST}.gif")

    assert response.status_code == 200
    assert response.content == gif
    assert response.headers["content-type"] == "image/gif"
    sent = json.loads(convert.calls.last.request.content)
    assert sent == {"File": base64.b64encode(png).decode(), "To": "gif"}


def test_stored_icon_that_is_not_an_image_is_rejected(client, respx_mock):
    _resolves_to(respx_mock, f"/icon/42/{DIGEST}", "/icons/i", b"<html>oops</html>", "image/png")

    response = client.get(f"/icon/42/{DIGEST}.png")

    assert response.status_code == 415


@pytest.mark.respx(assert_all_called=False)
@pytest.mark.parametrize(
    "query",
    ["size=10&width=5&height=5", "width=50", "height=50", "size=abc"],
)
def test_invalid_resize_parameters_fail_fast(client, respx_mock, query):
    backend = respx_mock.route(url__startswith=BACKEND)

    response = client.get(f"/icon/42/{DIGEST}.png?{query}")

    assert response.status_code == 400
    assert backend.call_count == 0


@pytest.mark.respx(assert_all_called=False)
def test_unsupported_icon_extension_fails_fast(client, respx_mock):
    backend = respx_mock.route(url__startswith=BACKEND)

    response = client.get(f"/icon/42/{DIGEST}.bmp")

    assert response.status_code == 400
    assert backend.call_count == 0


@pytest.mark.parametrize("method", ["HEAD", "POST", "DELETE", "PATCH"])
def test_other_methods_are_not_allowed(client, method):
    response = client.request(method, "/7/report.pdf")

    assert response.status_code == 405
    assert response.headers["allow"] == "GET, PUT"


def test_health(client):
    response = client.get("/health")

    assert response.status_code == 200
    assert response.json()["status"] == "ok"


def test_request_log_names_the_handler(client, respx_mock, monkeypatch, log_messages):
    monkeypatch.setattr(config, "REQUEST_LOGGING_ENABLED", True)
    _resolves_to(respx_mock, "/guild/7/report.pdf", "/files/r", b"%PDF-1.7", "application/pdf")

    client.get("/7/report.pdf?k=K&ex=E&s=S")
    client.post("/7/report.pdf")

    lines = [r["message"] for r in log_messages if r["message"].startswith(("GET /7", "POST /7"))]
    assert any("-> fetch_file | 200 in " in line for line in lines)
    assert any("-> method_not_allowed | 405 in " in line for line in lines)
    assert not any("ex=E" in line for line in lines)
