"""
MediaLibrary - per-creator media merged into the star catalog.

Loading degrades to "no media shown" on storage errors; linking new media is
user-triggered, so storage errors propagate to the caller.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple

from .catalog import find_star, replace_star
from .star_system import StarSystem
from .storage import BlobVideoStore, LocalImageStore, MediaStore, SupabaseMediaStore
from .storage.base import MediaData
from .utils import get_logger

logger = get_logger("media")


@dataclass
class MediaLibrary:
    user_id: str
    images: MediaStore
    videos: MediaStore

    @classmethod
    def for_user(cls, user_id: str, supabase_client=None) -> "MediaLibrary":
        """Supabase-backed when a client is given, local stores otherwise."""
        if supabase_client is not None:
            return cls(
                user_id,
                SupabaseMediaStore.for_images(supabase_client),
                SupabaseMediaStore.for_videos(supabase_client),
            )
        return cls(user_id, LocalImageStore(), BlobVideoStore())

    def _media_for(self, star_id: str) -> Tuple[List[str], Optional[str]]:
        try:
            images = self.images.get(self.user_id, star_id)
        except Exception as exc:
            logger.error(f"Image lookup failed for {self.user_id}/{star_id}: {exc}")
            images = []
        try:
            videos = self.videos.get(self.user_id, star_id)
        except Exception as exc:
            logger.error(f"Video lookup failed for {self.user_id}/{star_id}: {exc}")
            videos = []
        return images, (videos[0] if videos else None)

    def load(self, systems: Sequence[StarSystem]) -> List[StarSystem]:
        """Return a copy of `systems` augmented with this creator's media."""
        loaded = []
        for star in systems:
            images, video = self._media_for(star.id)
            loaded.append(star.with_media(images=images, video=video) if images or video else star)
        count = sum(1 for star in loaded if star.has_generated_media)
        logger.info(f"Loaded media for {count}/{len(loaded)} stars for {self.user_id}")
        return loaded

    def _require(self, systems: Sequence[StarSystem], star_id: str) -> StarSystem:
        star = find_star(systems, star_id)
        if star is None:
            raise KeyError(f"Unknown star: {star_id}")
        return star

    def link_image(
        self,
        systems: Sequence[StarSystem],
        star_id: str,
        data: MediaData,
        mime: Optional[str] = None,
    ) -> List[StarSystem]:
        """
        Save an image for a star and return the updated systems list.

        Raises:
            KeyError: unknown star id
            StorageError: the store rejected the save
        """
        star = self._require(systems, star_id)
        url = self.images.save(self.user_id, star_id, data, mime)
        stored = self.images.get(self.user_id, star_id)
        if url not in stored:
            stored = [url] + [u for u in star.images if u != url]
        return replace_star(systems, star.with_media(images=stored))

    def link_video(
        self,
        systems: Sequence[StarSystem],
        star_id: str,
        data: MediaData,
        mime: Optional[str] = "video/mp4",
    ) -> List[StarSystem]:
        """Save a video for a star and return the updated systems list."""
        star = self._require(systems, star_id)
        url = self.videos.save(self.user_id, star_id, data, mime)
        return replace_star(systems, star.with_media(video=url))
