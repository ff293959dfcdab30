"""
StarSystem dataclass - one portal in the fixed thematic catalog.

Generated media is attached to copies of the catalog entries; the hardcoded
catalog itself is never mutated.
"""

from dataclasses import dataclass, field, replace
from typing import List, Optional

THEMES = (
    "pleiaden",
    "arcturus",
    "sirius",
    "lyra",
    "andromeda",
    "orion",
    "zeta-reticuli",
    "polaris",
)


@dataclass(frozen=True)
class StarSystem:
    """A star system record plus any media the creator generated for it."""

    id: str
    label: str
    theme: str
    lore: str
    details: str
    image: str = ""

    # Generated media (newest first; images[0] is the primary image)
    images: List[str] = field(default_factory=list)
    video: Optional[str] = None

    def __post_init__(self):
        if self.theme not in THEMES:
            raise ValueError(f"Unknown star theme: {self.theme}")

    @property
    def has_generated_media(self) -> bool:
        return bool(self.images) or bool(self.video)

    def with_media(self, images: Optional[List[str]] = None, video: Optional[str] = None) -> "StarSystem":
        """Return a copy carrying generated media; the primary image replaces the default."""
        images = list(images) if images is not None else list(self.images)
        return replace(
            self,
            image=images[0] if images else self.image,
            images=images,
            video=video or self.video,
        )

