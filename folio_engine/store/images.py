"""Project image uploads to object storage."""

from __future__ import annotations

import mimetypes
import re
import secrets
import time
from dataclasses import dataclass
from pathlib import Path
from urllib.parse import quote, unquote, urlparse

from PIL import Image, UnidentifiedImageError

from .rest import request_json, supabase_headers


DEFAULT_BUCKET = "project-assets"
ASSET_KINDS = ("logo", "mockup")


@dataclass(frozen=True)
class ImageInfo:
    format: str
    width: int
    height: int
    mime_type: str


def sanitize_owner(name: str) -> str:
    slug = re.sub(r"[^a-z0-9]", "-", name.lower())
    slug = re.sub(r"-+", "-", slug)
    return slug.strip("-")


def build_asset_path(
    owner: str,
    kind: str,
    filename: str,
    *,
    stamp_ms: int | None = None,
    token: str | None = None,
) -> str:
    """Object path namespaced by owner and asset kind."""
    if kind not in ASSET_KINDS:
        raise ValueError(f"Unknown asset kind: {kind}")
    slug = sanitize_owner(owner)
    if not slug:
        raise ValueError("Owner name must contain at least one letter or digit.")
    ext = Path(filename).suffix.lstrip(".").lower() or "png"
    stamp = stamp_ms if stamp_ms is not None else int(time.time() * 1000)
    token = token or secrets.token_hex(4)[:7]
    return f"{slug}/{kind}s/{slug}_{kind}_{stamp}_{token}.{ext}"


def inspect_image(path: Path) -> ImageInfo:
    try:
        with Image.open(path) as image:
            image.verify()
        # verify() leaves the image unusable; reopen for the metadata.
        with Image.open(path) as image:
            fmt = (image.format or "").upper()
            width, height = image.size
    except (UnidentifiedImageError, OSError, SyntaxError) as exc:
        raise ValueError(f"Not an image file: {path}") from exc
    mime = Image.MIME.get(fmt) or mimetypes.guess_type(str(path))[0] or "application/octet-stream"
    return ImageInfo(format=fmt, width=width, height=height, mime_type=mime)


class StorageClient:
    def __init__(
        self,
        base_url: str,
        api_key: str,
        bucket: str = DEFAULT_BUCKET,
        timeout_s: float = 60.0,
    ) -> None:
        if not base_url or not api_key:
            raise RuntimeError("Object storage not configured. Set SUPABASE_URL and SUPABASE_KEY.")
        self.base_url = base_url.rstrip("/")
        self.api_key = api_key
        self.bucket = bucket
        self.timeout_s = timeout_s

    def public_url(self, object_path: str) -> str:
        return f"{self.base_url}/storage/v1/object/public/{self.bucket}/{quote(object_path)}"

    def upload(self, path: Path, owner: str, kind: str) -> str:
        info = inspect_image(path)
        object_path = build_asset_path(owner, kind, path.name)
        headers = supabase_headers(self.api_key)
        headers.update(
            {
                "Content-Type": info.mime_type,
                "Cache-Control": "max-age=3600",
                "x-upsert": "false",
            }
        )
        try:
            request_json(
                "POST",
                f"{self.base_url}/storage/v1/object/{self.bucket}/{quote(object_path)}",
                headers,
                body=path.read_bytes(),
                timeout_s=self.timeout_s,
                label="Image upload",
            )
        except RuntimeError as exc:
            if "Bucket not found" in str(exc):
                raise RuntimeError(
                    f'Bucket "{self.bucket}" does not exist. Create it (case-sensitive) and make it public.'
                ) from exc
            raise
        return self.public_url(object_path)

    def object_path_from_url(self, public_url: str) -> str:
        parts = urlparse(public_url).path.split("/")
        if self.bucket not in parts:
            raise ValueError("Invalid image URL - bucket not found in path")
        idx = parts.index(self.bucket)
        return unquote("/".join(parts[idx + 1:]))

    def delete(self, public_url: str) -> None:
        if not public_url:
            return
        object_path = self.object_path_from_url(public_url)
        request_json(
            "DELETE",
            f"{self.base_url}/storage/v1/object/{self.bucket}",
            supabase_headers(self.api_key),
            {"prefixes": [object_path]},
            timeout_s=self.timeout_s,
            label="Image delete",
        )
