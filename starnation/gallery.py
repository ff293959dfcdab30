"""
Gallery loader - recent generated media across all creators.

Walks `bucket/{user}/{star}/` listings and projects matching files into
GalleryItem records, newest first.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import List, Optional

from .config import IMAGES_BUCKET, VIDEOS_BUCKET
from .errors import StorageAccessDeniedError
from .utils import get_logger

logger = get_logger("gallery")

IMAGE_PATTERN = re.compile(r"\.(jpg|jpeg|png|webp|gif)$", re.IGNORECASE)
VIDEO_PATTERN = re.compile(r"\.(mp4|webm|mov)$", re.IGNORECASE)

ACCESS_DENIED_MARKERS = ("row-level security", "permission", "policy")
ROOT_LIST_LIMIT = 1000
STAR_LIST_LIMIT = 100


@dataclass(frozen=True)
class GalleryItem:
    url: str
    type: str
    user_id: Optional[str] = None
    star_id: Optional[str] = None
    created_at: Optional[str] = None


def _is_folder(entry: dict) -> bool:
    name = (entry or {}).get("name") or ""
    return bool(name) and "." not in name


def _timestamp(value: Optional[str]) -> float:
    if not value:
        return 0.0
    try:
        parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError:
        return 0.0
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed.timestamp()


def is_access_denied(exc: Exception) -> bool:
    """True when a storage error looks like a bucket access-policy denial."""
    message = str(exc).lower()
    if any(marker in message for marker in ACCESS_DENIED_MARKERS):
        return True
    for attr in ("status", "status_code", "statusCode", "code"):
        if str(getattr(exc, attr, "")) == "403":
            return True
    return False


def _list_recent(
    client,
    bucket: str,
    media_type: str,
    pattern: re.Pattern,
    per_folder_limit: int,
    limit: int,
) -> List[GalleryItem]:
    storage = client.storage.from_(bucket)
    try:
        user_folders = storage.list("", {"limit": ROOT_LIST_LIMIT})
    except Exception as exc:
        logger.error(f"Error listing {media_type} folders in {bucket}: {exc}")
        if is_access_denied(exc):
            logger.warning("Storage bucket access denied - check bucket policies for public read access")
            raise StorageAccessDeniedError(
                "Storage bucket access denied. Please configure RLS policies for public read access."
            ) from exc
        return []

    if not user_folders:
        logger.info(f"No {media_type} folders found in {bucket}")
        return []

    items: List[GalleryItem] = []
    for user_folder in user_folders:
        if not _is_folder(user_folder):
            continue
        user_id = user_folder["name"]
        try:
            star_folders = storage.list(user_id, {"limit": STAR_LIST_LIMIT})
        except Exception as exc:
            logger.error(f"Error listing star folders for {user_id}: {exc}")
            continue

        for star_folder in star_folders or []:
            if not _is_folder(star_folder):
                continue
            star_id = star_folder["name"]
            folder = f"{user_id}/{star_id}"
            try:
                files = storage.list(
                    folder,
                    {"limit": per_folder_limit, "sortBy": {"column": "created_at", "order": "desc"}},
                )
            except Exception as exc:
                logger.error(f"Error listing files for {folder}: {exc}")
                continue

            for entry in (files or [])[:per_folder_limit]:
                name = entry.get("name") or ""
                if not name or name.endswith("/") or not pattern.search(name):
                    continue
                url = storage.get_public_url(f"{folder}/{name}")
                if not url:
                    continue
                items.append(
                    GalleryItem(
                        url=url,
                        type=media_type,
                        user_id=user_id,
                        star_id=star_id,
                        created_at=entry.get("created_at") or entry.get("updated_at"),
                    )
                )

    items.sort(key=lambda item: _timestamp(item.created_at), reverse=True)
    logger.info(f"Gallery found {len(items)} {media_type}(s) in {bucket}")
    return items[:limit]


def list_recent_images(client, limit: int = 20) -> List[GalleryItem]:
    """Most recent images from all creators."""
    return _list_recent(client, IMAGES_BUCKET, "image", IMAGE_PATTERN, per_folder_limit=10, limit=limit)


def list_recent_videos(client, limit: int = 10) -> List[GalleryItem]:
    """Most recent videos from all creators."""
    return _list_recent(client, VIDEOS_BUCKET, "video", VIDEO_PATTERN, per_folder_limit=5, limit=limit)
