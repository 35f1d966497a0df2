import io

import pytest
from werkzeug.datastructures import FileStorage

from ffmaxarena.helpers.storage import (
    MAX_UPLOAD_BYTES,
    UploadError,
    check_image,
    public_url,
    storage_file_name,
    upload_image,
)
from tests.conftest import FakeResponse


def _file(name="My Poster.png", content_type="image/png", data=b"\x89PNG fake"):
    return FileStorage(stream=io.BytesIO(data), filename=name, content_type=content_type)


def test_storage_file_name():
    assert storage_file_name("My Poster.png", now_ms=1718000000000) == "1718000000000-My-Poster.png"
    assert storage_file_name("a\tb c.webp", now_ms=5) == "5-a-b-c.webp"


def test_public_url(app):
    assert public_url("1-p.png") == "https://demo.supabase.co/storage/v1/object/public/tournament-posters/1-p.png"


def test_check_image_limits():
    check_image("image/jpeg", MAX_UPLOAD_BYTES)
    with pytest.raises(UploadError, match="under 5MB"):
        check_image("image/jpeg", MAX_UPLOAD_BYTES + 1)
    with pytest.raises(UploadError, match="JPG, PNG, or WEBP"):
        check_image("image/gif", 10)


def test_upload_posts_to_bucket_and_returns_public_url(app, monkeypatch):
    calls = []

    def fake_post(url, data=None, headers=None, timeout=None, **kwargs):
        calls.append({"url": url, "data": data, "headers": headers})
        return FakeResponse(200, {"Key": "tournament-posters/x"})

    monkeypatch.setattr("ffmaxarena.helpers.storage.requests.post", fake_post)

    url = upload_image(_file())

    assert len(calls) == 1
    assert calls[0]["url"].startswith("https://demo.supabase.co/storage/v1/object/tournament-posters/")
    assert calls[0]["url"].endswith("-My-Poster.png")
    assert calls[0]["headers"]["Content-Type"] == "image/png"
    assert calls[0]["headers"]["apikey"] == "anon-key"
    assert url.startswith("https://demo.supabase.co/storage/v1/object/public/tournament-posters/")
    assert url.endswith("-My-Poster.png")


def test_upload_rejects_before_calling_storage(app, monkeypatch):
    calls = []
    monkeypatch.setattr("ffmaxarena.helpers.storage.requests.post", lambda *a, **kw: calls.append(1))

    with pytest.raises(UploadError):
        upload_image(_file(name="clip.gif", content_type="image/gif"))
    with pytest.raises(UploadError, match="No file selected"):
        upload_image(None)
    assert calls == []


def test_upload_storage_error(app, monkeypatch):
    monkeypatch.setattr(
        "ffmaxarena.helpers.storage.requests.post",
        lambda *a, **kw: FakeResponse(403, {"message": "new row violates row-level security policy"}),
    )
    with pytest.raises(UploadError, match="row-level security"):
        upload_image(_file())
