"""
JSON-file image store, one document per creator.

Each document maps star id -> list of image URLs (usually data URLs). The
document name is derived from the key `cosmic-creator-images-{user}`.
"""

from __future__ import annotations

import json
import os
import tempfile
from pathlib import Path
from typing import Dict, List, Optional
from urllib.parse import quote

from ..config import LOCAL_IMAGES_KEY_PREFIX, get_data_dir
from ..errors import StorageError
from ..utils import get_logger, to_data_url
from .base import MediaData, MediaStore, coerce_media

logger = get_logger("storage.local")


def storage_key(user_id: str) -> str:
    return f"{LOCAL_IMAGES_KEY_PREFIX}{user_id}"


class LocalImageStore(MediaStore):
    kind = "image"

    def __init__(self, root: Optional[Path] = None):
        self.root = Path(root) if root is not None else get_data_dir()

    def _path(self, user_id: str) -> Path:
        # Percent-encoding keeps distinct user names in distinct files.
        return self.root / f"{quote(storage_key(user_id), safe='')}.json"

    def _read(self, user_id: str) -> Dict[str, List[str]]:
        path = self._path(user_id)
        if not path.exists():
            return {}
        with open(path, "r", encoding="utf-8") as f:
            raw = json.load(f)
        if not isinstance(raw, dict):
            raise ValueError(f"Unexpected document in {path}")
        normalized = {}
        for star_id, value in raw.items():
            # Older documents stored a single image per star.
            if isinstance(value, str):
                normalized[star_id] = [value]
            elif isinstance(value, list):
                normalized[star_id] = [v for v in value if isinstance(v, str) and v]
        return normalized

    def _write(self, user_id: str, document: Dict[str, List[str]]) -> None:
        self.root.mkdir(parents=True, exist_ok=True)
        path = self._path(user_id)
        fd, tmp_path = tempfile.mkstemp(dir=self.root, suffix=".tmp")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(document, f)
            os.replace(tmp_path, path)
        except Exception:
            if os.path.exists(tmp_path):
                os.unlink(tmp_path)
            raise

    def save(self, user_id: str, star_id: str, data: MediaData, mime: Optional[str] = None) -> str:
        if isinstance(data, str) and not data.startswith("data:"):
            url = data
        else:
            raw, resolved_mime = coerce_media(data, mime or "image/jpeg")
            url = to_data_url(raw, resolved_mime)
        try:
            document = self._read(user_id)
            document[star_id] = [url] + document.get(star_id, [])
            self._write(user_id, document)
        except Exception as exc:
            logger.error(f"Error saving image for {user_id}/{star_id}: {exc}")
            raise StorageError(f"Failed to save image: {exc}") from exc
        logger.info(f"Image saved locally for {user_id}/{star_id}")
        return url

    def get(self, user_id: str, star_id: str) -> List[str]:
        try:
            return list(self._read(user_id).get(star_id, []))
        except Exception as exc:
            logger.error(f"Error reading local images for {user_id}: {exc}")
            return []

    def delete(self, user_id: str, star_id: str, index: Optional[int] = None) -> None:
        try:
            document = self._read(user_id)
            images = document.get(star_id, [])
            if index is None:
                document.pop(star_id, None)
            elif 0 <= index < len(images):
                del images[index]
                if images:
                    document[star_id] = images
                else:
                    document.pop(star_id, None)
            self._write(user_id, document)
        except Exception as exc:
            logger.error(f"Error deleting local images for {user_id}/{star_id}: {exc}")
            raise StorageError(f"Failed to delete image: {exc}") from exc
