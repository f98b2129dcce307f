# tests/test_storage.py
import pytest
from datetime import datetime, timedelta, UTC
from urllib.parse import parse_qs, urlparse
from jose import jwt
from core.exceptions import ObjectExistsError, StorageError
from core.storage import BOOKS_BUCKET, COVERS_BUCKET, make_object_path

def test_make_object_path_is_unique_and_keeps_name():
    first = make_object_path("Dune (1965).pdf")
    second = make_object_path("Dune (1965).pdf")
    assert first != second
    assert first.endswith("-Dune_1965_.pdf")

@pytest.mark.parametrize("filename", ["../../etc/passwd", "C:\\Users\\me\\book.pdf", ""])
def test_make_object_path_strips_directories(filename):
    path = make_object_path(filename)
    assert "/" not in path
    assert ".." not in path

def test_upload_and_open(store):
    store.upload(BOOKS_BUCKET, "a.pdf", b"%PDF-data")
    assert store.exists(BOOKS_BUCKET, "a.pdf")
    assert store.open(BOOKS_BUCKET, "a.pdf").read_bytes() == b"%PDF-data"

def test_upload_without_upsert_rejects_existing(store):
    store.upload(COVERS_BUCKET, "c.png", b"one")
    with pytest.raises(ObjectExistsError, match="The resource already exists"):
        store.upload(COVERS_BUCKET, "c.png", b"two")
    assert store.open(COVERS_BUCKET, "c.png").read_bytes() == b"one"

def test_upload_with_upsert_overwrites(store):
    store.upload(BOOKS_BUCKET, "a.pdf", b"one")
    store.upload(BOOKS_BUCKET, "a.pdf", b"two", upsert=True)
    assert store.open(BOOKS_BUCKET, "a.pdf").read_bytes() == b"two"

@pytest.mark.parametrize("path", ["../escape.pdf", "/abs.pdf", "a//b.pdf", ""])
def test_invalid_keys_rejected(store, path):
    with pytest.raises(StorageError):
        store.upload(BOOKS_BUCKET, path, b"x")

def test_unknown_bucket(store):
    with pytest.raises(StorageError, match="Bucket not found"):
        store.upload("videos", "a.mp4", b"x")

def test_remove(store):
    store.upload(BOOKS_BUCKET, "a.pdf", b"x")
    assert store.remove(BOOKS_BUCKET, ["a.pdf", "missing.pdf"]) == ["a.pdf"]
    assert not store.exists(BOOKS_BUCKET, "a.pdf")

def test_public_url_only_for_public_bucket(store):
    assert store.get_public_url(COVERS_BUCKET, "c.png") == "http://testserver/storage/v1/object/public/book-covers/c.png"
    with pytest.raises(StorageError):
        store.get_public_url(BOOKS_BUCKET, "a.pdf")

def test_signed_url_round_trip(store):
    store.upload(BOOKS_BUCKET, "a.pdf", b"x")
    url = store.create_signed_url(BOOKS_BUCKET, "a.pdf", 60)

    parsed = urlparse(url)
    assert parsed.path == "/storage/v1/object/sign/books/a.pdf"
    token = parse_qs(parsed.query)["token"][0]
    store.verify_signed_token(BOOKS_BUCKET, "a.pdf", token)

    with pytest.raises(StorageError):
        store.verify_signed_token(BOOKS_BUCKET, "other.pdf", token)

def test_signed_url_for_missing_object(store):
    with pytest.raises(StorageError, match="Object not found"):
        store.create_signed_url(BOOKS_BUCKET, "missing.pdf", 60)

def test_expired_signed_token(store):
    token = jwt.encode(
        {"url": "books/a.pdf", "exp": datetime.now(UTC) - timedelta(seconds=5)},
        store.secret,
        algorithm="HS256",
    )
    with pytest.raises(StorageError, match="Invalid signature"):
        store.verify_signed_token(BOOKS_BUCKET, "a.pdf", token)
