# tests/test_image.py
import threading
import pytest
from functools import partial
from http.server import SimpleHTTPRequestHandler, ThreadingHTTPServer
import requests
from unittest.mock import Mock, patch
from core.exceptions import ValidationError
from core.utils.image import ImageDownloader, cover_filename, inspect_cover

def test_inspect_png(png_bytes):
    cover = inspect_cover(png_bytes)
    assert cover.content_type == "image/png"
    assert (cover.width, cover.height) == (40, 60)
    assert cover.extension == ".png"

@pytest.mark.parametrize("data", [b"", b"definitely not an image"])
def test_inspect_rejects_non_images(data):
    with pytest.raises(ValidationError):
        inspect_cover(data)

def test_cover_filename_uses_detected_extension(png_bytes):
    cover = inspect_cover(png_bytes)
    assert cover_filename("front.jpeg", cover) == "front.png"
    assert cover_filename(None, cover) == "cover.png"

def test_download_image(png_bytes):
    response = Mock(content=png_bytes, headers={"content-type": "image/png"})
    with patch("core.utils.image.requests.get", return_value=response) as mock_get:
        cover, filename = ImageDownloader().download_image("  http://localhost:8000/covers/dune.jpg ")

    mock_get.assert_called_once_with("http://localhost:8000/covers/dune.jpg", timeout=10)
    assert cover.content_type == "image/png"
    assert filename == "dune.png"

def test_download_rejects_non_image_content_type():
    response = Mock(content=b"<html></html>", headers={"content-type": "text/html"})
    with patch("core.utils.image.requests.get", return_value=response):
        with pytest.raises(ValidationError, match="did not return an image"):
            ImageDownloader().download_image("https://example.com/page")

def test_download_failure():
    with patch("core.utils.image.requests.get", side_effect=requests.ConnectionError("boom")):
        with pytest.raises(ValidationError, match="Could not download cover image"):
            ImageDownloader().download_image("https://example.com/dune.jpg")

@pytest.fixture
def http_cover_server(tmp_path, png_bytes):
    """Plain-http server with dune.png at its root"""
    (tmp_path / "dune.png").write_bytes(png_bytes)
    handler = partial(SimpleHTTPRequestHandler, directory=str(tmp_path))
    server = ThreadingHTTPServer(("127.0.0.1", 0), handler)
    thread = threading.Thread(target=server.serve_forever, daemon=True)
    thread.start()
    try:
        yield f"http://127.0.0.1:{server.server_address[1]}"
    finally:
        server.shutdown()
        server.server_close()

def test_download_from_plain_http_server(http_cover_server, png_bytes):
    cover, filename = ImageDownloader(timeout=3).download_image(f"{http_cover_server}/dune.png")
    assert cover.data == png_bytes
    assert filename == "dune.png"
