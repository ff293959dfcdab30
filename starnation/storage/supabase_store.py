"""
Supabase Storage adapter for generated images and videos.

Objects live under `{user}/{star_id}/{timestamp}-{rand}.{ext}` and are served
from public bucket URLs.
"""

from __future__ import annotations

from typing import List, Optional

from ..config import IMAGES_BUCKET, VIDEOS_BUCKET
from ..errors import StorageError
from ..utils import extension_for_mime, get_logger, make_object_key, object_folder
from .base import MediaData, MediaStore, coerce_media

logger = get_logger("storage.supabase")

LIST_LIMIT = 100


def _is_file_entry(entry: dict) -> bool:
    entry = entry or {}
    name = entry.get("name") or ""
    # Folder placeholders are listed with a null id
    if entry.get("id") is None:
        return False
    return bool(name) and not name.endswith("/") and not name.startswith(".")


class SupabaseMediaStore(MediaStore):
    def __init__(self, client, bucket: str, kind: str = "image"):
        self.client = client
        self.bucket = bucket
        self.kind = kind

    @classmethod
    def for_images(cls, client) -> "SupabaseMediaStore":
        return cls(client, IMAGES_BUCKET, kind="image")

    @classmethod
    def for_videos(cls, client) -> "SupabaseMediaStore":
        return cls(client, VIDEOS_BUCKET, kind="video")

    def _bucket(self):
        return self.client.storage.from_(self.bucket)

    def _list_files(self, folder: str) -> List[dict]:
        entries = self._bucket().list(
            folder,
            {"limit": LIST_LIMIT, "offset": 0, "sortBy": {"column": "created_at", "order": "desc"}},
        )
        return [entry for entry in entries or [] if _is_file_entry(entry)]

    def save(self, user_id: str, star_id: str, data: MediaData, mime: Optional[str] = None) -> str:
        default_mime = "image/jpeg" if self.kind == "image" else "video/mp4"
        raw, resolved_mime = coerce_media(data, mime or default_mime)
        ext = extension_for_mime(resolved_mime, "jpg" if self.kind == "image" else "mp4")
        path = make_object_key(user_id, star_id, ext)

        try:
            self._bucket().upload(
                path=path,
                file=raw,
                file_options={"content-type": resolved_mime, "upsert": "false"},
            )
            public_url = self._bucket().get_public_url(path)
        except Exception as exc:
            logger.error(f"Error uploading {self.kind} to {self.bucket}/{path}: {exc}")
            raise StorageError(f"Failed to save {self.kind}: {exc}") from exc

        if not public_url:
            raise StorageError(f"Failed to get public URL for uploaded {self.kind}")
        logger.info(f"{self.kind.capitalize()} saved to Supabase: {public_url}")
        return public_url

    def get(self, user_id: str, star_id: str) -> List[str]:
        folder = f"{user_id}/{star_id}"
        try:
            folder = object_folder(user_id, star_id)
            files = self._list_files(folder)
            urls = [self._bucket().get_public_url(f"{folder}/{entry['name']}") for entry in files]
        except Exception as exc:
            logger.error(f"Error listing {self.kind}s from {self.bucket}/{folder}: {exc}")
            return []
        urls = [url for url in urls if url]
        logger.info(f"Loaded {len(urls)} {self.kind}s from Supabase for {star_id}")
        return urls

    def delete(self, user_id: str, star_id: str, index: Optional[int] = None) -> None:
        folder = f"{user_id}/{star_id}"
        try:
            folder = object_folder(user_id, star_id)
            files = self._list_files(folder)
            if index is not None:
                files = [files[index]] if 0 <= index < len(files) else []
            paths = [f"{folder}/{entry['name']}" for entry in files]
            if paths:
                self._bucket().remove(paths)
        except Exception as exc:
            logger.error(f"Error deleting {self.kind}s from {self.bucket}/{folder}: {exc}")
            raise StorageError(f"Failed to delete {self.kind}: {exc}") from exc
