"""
Common interface for the media persistence adapters.

Every adapter is keyed by (user, star_id). Images accumulate newest first and
the first URL is the star's primary image.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import List, Optional, Tuple, Union

from ..utils import parse_data_url

MediaData = Union[bytes, str]


def coerce_media(data: MediaData, mime: Optional[str] = None) -> Tuple[bytes, str]:
    """
    Normalize raw bytes or a data URL into (bytes, mime).

    Raises:
        ValueError: if `data` is a string that is not a data URL
    """
    if isinstance(data, (bytes, bytearray)):
        return bytes(data), mime or "application/octet-stream"
    if isinstance(data, str) and data.startswith("data:"):
        raw, parsed_mime = parse_data_url(data)
        return raw, mime or parsed_mime
    raise ValueError("Media must be bytes or a data URL")


class MediaStore(ABC):
    """save / get / delete keyed by (user, star_id)."""

    kind: str = "image"

    @abstractmethod
    def save(self, user_id: str, star_id: str, data: MediaData, mime: Optional[str] = None) -> str:
        """Persist media and return the URL it can be displayed from."""

    @abstractmethod
    def get(self, user_id: str, star_id: str) -> List[str]:
        """Return stored URLs, newest first. Errors degrade to []."""

    @abstractmethod
    def delete(self, user_id: str, star_id: str, index: Optional[int] = None) -> None:
        """Delete one item by index or everything stored for the star."""
