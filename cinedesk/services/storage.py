"""Object storage for posters, backdrops, videos and cast photos.

Two backends share one small interface: the Supabase storage REST API (what
production uses) and a local directory served under /media (development).
"""

import asyncio
import logging
import re
from pathlib import Path
from typing import Protocol
from urllib.parse import quote

import httpx

from cinedesk.config import get_settings
from cinedesk.constants import LOCAL_MEDIA_URL_PREFIX, STORAGE_CACHE_CONTROL
from cinedesk.utils.http_client import get_storage_client

logger = logging.getLogger(__name__)

_UNSAFE_KEY_CHARS = re.compile(r"[^A-Za-z0-9._/-]")


class StorageError(Exception):
    """An upload failed; the message comes from the storage backend verbatim."""


class ObjectStorage(Protocol):
    """What the submission pipeline needs from a storage backend."""

    async def upload(self, bucket: str, key: str, data: bytes, content_type: str) -> str:
        """Store `data` and return its path inside the bucket."""
        ...

    def public_url(self, bucket: str, path: str) -> str:
        """Public URL of a stored object."""
        ...


def safe_key(key: str) -> str:
    """Replace characters object stores reject (spaces, accents, ...) with '_'.

    Empty, "." and ".." segments are dropped so a key never climbs out of its bucket.
    """
    segments = [segment for segment in key.split("/") if segment not in ("", ".", "..")]
    return _UNSAFE_KEY_CHARS.sub("_", "/".join(segments))


class SupabaseStorage:
    """Supabase storage REST API backend."""

    def __init__(
        self,
        base_url: str,
        service_key: str,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.service_key = service_key
        self._client = client

    def _headers(self, content_type: str) -> dict[str, str]:
        return {
            "Authorization": f"Bearer {self.service_key}",
            "apikey": self.service_key,
            "Content-Type": content_type,
            "cache-control": f"max-age={STORAGE_CACHE_CONTROL}",
            "x-upsert": "false",
        }

    async def upload(self, bucket: str, key: str, data: bytes, content_type: str) -> str:
        client = self._client or get_storage_client()
        path = safe_key(key)
        try:
            response = await client.post(
                f"{self.base_url}/storage/v1/object/{bucket}/{quote(path)}",
                content=data,
                headers=self._headers(content_type),
            )
        except httpx.HTTPError as e:
            raise StorageError(str(e) or "Storage is unreachable.") from e

        if response.status_code >= 400:
            message = None
            try:
                body = response.json()
                message = body.get("message") or body.get("error")
            except ValueError:
                message = response.text or None
            raise StorageError(message or f"Upload failed (HTTP {response.status_code}).")

        logger.debug(f"Uploaded {bucket}/{path} ({len(data)} bytes)")
        return path

    def public_url(self, bucket: str, path: str) -> str:
        return f"{self.base_url}/storage/v1/object/public/{bucket}/{quote(path)}"


class LocalStorage:
    """Stores objects under `root/<bucket>/<key>`, served at /media."""

    def __init__(self, root: str | Path, base_url: str) -> None:
        self.root = Path(root)
        self.base_url = base_url.rstrip("/")

    async def upload(self, bucket: str, key: str, data: bytes, content_type: str) -> str:
        path = safe_key(key)
        bucket_root = (self.root / bucket).resolve()
        target = (bucket_root / path).resolve()
        if not path or not target.is_relative_to(bucket_root):
            raise StorageError(f"Invalid object key: {key!r}")
        if target.exists():
            raise StorageError("The resource already exists")
        try:
            await asyncio.to_thread(_write_file, target, data)
        except OSError as e:
            raise StorageError(str(e)) from e
        logger.debug(f"Stored {target} ({len(data)} bytes)")
        return path

    def public_url(self, bucket: str, path: str) -> str:
        return f"{self.base_url}{LOCAL_MEDIA_URL_PREFIX}/{bucket}/{quote(path)}"


def _write_file(target: Path, data: bytes) -> None:
    target.parent.mkdir(parents=True, exist_ok=True)
    target.write_bytes(data)


def get_storage() -> ObjectStorage:
    """FastAPI dependency: the configured storage backend."""
    settings = get_settings()
    if settings.storage_backend == "supabase":
        return SupabaseStorage(settings.supabase_url, settings.supabase_service_key)
    return LocalStorage(settings.media_root, settings.app_url)
