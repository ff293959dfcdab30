"""
SQLite blob store for generated videos, keyed by the composite (user_id, star_id).

One video is kept per star; saving again replaces it.
"""

from __future__ import annotations

import sqlite3
from contextlib import closing
from pathlib import Path
from typing import List, Optional

from ..config import VIDEO_DB_NAME, get_data_dir
from ..errors import StorageError
from ..utils import get_logger, to_data_url
from .base import MediaData, MediaStore, coerce_media

logger = get_logger("storage.blob")

_SCHEMA = """
CREATE TABLE IF NOT EXISTS videos (
    user_id TEXT NOT NULL,
    star_id TEXT NOT NULL,
    mime TEXT NOT NULL,
    data BLOB NOT NULL,
    PRIMARY KEY (user_id, star_id)
)
"""


class BlobVideoStore(MediaStore):
    kind = "video"

    def __init__(self, db_path: Optional[Path] = None):
        self.db_path = Path(db_path) if db_path is not None else get_data_dir() / VIDEO_DB_NAME

    def _connect(self) -> sqlite3.Connection:
        self.db_path.parent.mkdir(parents=True, exist_ok=True)
        conn = sqlite3.connect(self.db_path)
        conn.execute(_SCHEMA)
        return conn

    def save(self, user_id: str, star_id: str, data: MediaData, mime: Optional[str] = None) -> str:
        raw, resolved_mime = coerce_media(data, mime or "video/mp4")
        try:
            with closing(self._connect()) as conn, conn:
                conn.execute(
                    "INSERT OR REPLACE INTO videos (user_id, star_id, mime, data) VALUES (?, ?, ?, ?)",
                    (user_id, star_id, resolved_mime, sqlite3.Binary(raw)),
                )
        except sqlite3.Error as exc:
            logger.error(f"Error saving video for {user_id}/{star_id}: {exc}")
            raise StorageError(f"Failed to save video: {exc}") from exc
        logger.info(f"Video saved locally for {user_id}/{star_id} ({len(raw)} bytes)")
        return to_data_url(raw, resolved_mime)

    def get(self, user_id: str, star_id: str) -> List[str]:
        try:
            with closing(self._connect()) as conn:
                row = conn.execute(
                    "SELECT mime, data FROM videos WHERE user_id = ? AND star_id = ?",
                    (user_id, star_id),
                ).fetchone()
        except sqlite3.Error as exc:
            logger.error(f"Error loading video for {user_id}/{star_id}: {exc}")
            return []
        if row is None:
            return []
        mime, data = row
        return [to_data_url(bytes(data), mime)]

    def delete(self, user_id: str, star_id: str, index: Optional[int] = None) -> None:
        try:
            with closing(self._connect()) as conn, conn:
                conn.execute("DELETE FROM videos WHERE user_id = ? AND star_id = ?", (user_id, star_id))
        except sqlite3.Error as exc:
            logger.error(f"Error deleting video for {user_id}/{star_id}: {exc}")
            raise StorageError(f"Failed to delete video: {exc}") from exc
