import re
import sys
import time
from typing import Optional

import requests
from flask import current_app

MAX_UPLOAD_BYTES = 5 * 1024 * 1024
ALLOWED_IMAGE_TYPES = ("image/jpeg", "image/png", "image/webp")


class UploadError(Exception):
    """File rejected before upload, or the storage call failed."""


def _log(msg: str):
    print(f"[STORAGE] {msg}", file=sys.stderr)


def storage_file_name(filename: str, now_ms: Optional[int] = None) -> str:
    """"My Poster.png" -> "1718000000000-My-Poster.png" """
    now_ms = now_ms if now_ms is not None else int(time.time() * 1000)
    base = re.sub(r"\s", "-", (filename or "upload").strip().split("/")[-1].split("\\")[-1])
    return f"{now_ms}-{base or 'upload'}"


def public_url(path: str, bucket: Optional[str] = None) -> str:
    bucket = bucket or current_app.config["STORAGE_BUCKET"]
    base = current_app.config["SUPABASE_URL"].rstrip("/")
    return f"{base}/storage/v1/object/public/{bucket}/{path}"


def check_image(content_type: str, size: int):
    if size > MAX_UPLOAD_BYTES:
        raise UploadError("File is too large. Please upload an image under 5MB.")
    if content_type not in ALLOWED_IMAGE_TYPES:
        raise UploadError("Invalid file type. Please upload a JPG, PNG, or WEBP image.")


def upload_image(file_storage, bucket: Optional[str] = None) -> str:
    """
    Upload a werkzeug FileStorage to the object store and return its public
    URL. Raises UploadError on validation or storage failure.
    """
    if file_storage is None or not file_storage.filename:
        raise UploadError("No file selected.")

    data = file_storage.read()
    content_type = file_storage.mimetype or ""
    check_image(content_type, len(data))

    bucket = bucket or current_app.config["STORAGE_BUCKET"]
    path = storage_file_name(file_storage.filename)
    base = current_app.config["SUPABASE_URL"].rstrip("/")
    key = current_app.config["SUPABASE_ANON_KEY"]

    try:
        resp = requests.post(
            f"{base}/storage/v1/object/{bucket}/{path}",
            data=data,
            headers={
                "apikey": key,
                "Authorization": f"Bearer {key}",
                "Content-Type": content_type,
                "cache-control": "max-age=3600",
                "x-upsert": "true",
            },
            timeout=current_app.config.get("HTTP_TIMEOUT", 15),
        )
    except requests.RequestException as e:
        _log(f"Upload request failed: {e}")
        raise UploadError(f"Upload failed: {e}") from e

    if resp.status_code >= 400:
        try:
            message = resp.json().get("message") or resp.text
        except ValueError:
            message = resp.text
        _log(f"Upload rejected ({resp.status_code}): {message}")
        raise UploadError(f"Upload failed: {message}")

    url = public_url(path, bucket)
    _log(f"Uploaded {path} to {bucket}")
    return url
