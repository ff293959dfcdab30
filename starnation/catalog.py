"""
The fixed star-system catalog and the helpers the portal and chambers use.
"""

from __future__ import annotations

import math
from typing import Dict, List, Optional, Sequence, Tuple

from .star_system import StarSystem

CENTRAL_STAR_ID = "polaris"
_IMAGE_BASE = "https://storage.googleapis.com/generative-ai-story/space"

_CATALOG: Tuple[StarSystem, ...] = (
    StarSystem(
        id="polaris",
        label="Polaris",
        theme="polaris",
        lore="The Still Point of the Turning Cosmos",
        details=(
            "Polaris, the North Star, serves as a celestial anchor. Its frequency is one of unwavering "
            "guidance, stability, and purpose. It is the constant in a universe of flux, a beacon for lost "
            "souls and a reminder of the unshakable core of one's being. Meditating on Polaris helps to find "
            "one's true north and navigate life's complexities with clarity."
        ),
        image=f"{_IMAGE_BASE}/polaris.jpeg",
    ),
    StarSystem(
        id="sirius",
        label="Sirius",
        theme="sirius",
        lore="The Gateway of Liberation",
        details=(
            "Sirius, the brightest star in the night sky, radiates a frequency of freedom, spiritual "
            "evolution, and advanced knowledge. It is associated with great teachers and civilisations who "
            "brought profound wisdom to Earth. Connecting with Sirius can accelerate personal growth, unlock "
            "latent abilities, and reveal deeper truths about the nature of reality."
        ),
        image=f"{_IMAGE_BASE}/sirius.jpeg",
    ),
    StarSystem(
        id="pleiaden",
        label="Pleiades",
        theme="pleiaden",
        lore="The Cradle of Unconditional Love",
        details=(
            "The Pleiades star cluster emanates a gentle, nurturing frequency of love, compassion, and unity. "
            "It is considered a home for heart-centered beings dedicated to healing and harmony. This energy "
            "soothes the soul, fosters emotional healing, and encourages a deep sense of connection with all "
            "life, reminding us of our shared cosmic origins."
        ),
        image=f"{_IMAGE_BASE}/pleiades.jpeg",
    ),
    StarSystem(
        id="arcturus",
        label="Arcturus",
        theme="arcturus",
        lore="The Forge of Celestial Healing",
        details=(
            "Arcturus is a star of immense healing power and technological advancement. Its frequency is one "
            "of integration, renewal, and spiritual technology. It offers blueprints for emotional and "
            "physical healing, using light and sound to restructure energetic fields. Connecting with "
            "Arcturus can aid in releasing old patterns and embracing a state of holistic well-being."
        ),
        image=f"{_IMAGE_BASE}/arcturus.jpeg",
    ),
    StarSystem(
        id="lyra",
        label="Lyra",
        theme="lyra",
        lore="The Echo of Cosmic Creation",
        details=(
            "Lyra is believed to be the original source of humanoid consciousness in our galactic sector. Its "
            "frequency carries the codes of creation, sound, and the sacred feminine. It resonates with the "
            "primordial song of the universe, inspiring artistic expression, profound creativity, and a "
            "connection to the ancient history of the soul."
        ),
        image=f"{_IMAGE_BASE}/lyra.jpeg",
    ),
    StarSystem(
        id="orion",
        label="Orion",
        theme="orion",
        lore="The Crucible of Duality",
        details=(
            "The Orion constellation holds a complex frequency of duality, struggle, and integration. It "
            "represents the cosmic dance of light and dark, teaching lessons of sovereignty, resilience, and "
            "the courage to face one's shadow. Connecting with Orion can help integrate opposing forces within "
            "oneself and find strength in overcoming challenges."
        ),
        image=f"{_IMAGE_BASE}/orion.jpeg",
    ),
    StarSystem(
        id="andromeda",
        label="Andromeda",
        theme="andromeda",
        lore="The Weaver of Galactic Consciousness",
        details=(
            "The Andromeda Galaxy brings a frequency of expansion, interdimensional awareness, and unity "
            "consciousness. It challenges our limited perspectives and invites us to embrace a broader, "
            "galactic identity. Connecting with Andromeda fosters a sense of being part of a vast cosmic "
            "family and encourages collaboration on a universal scale."
        ),
        image=f"{_IMAGE_BASE}/andromeda.jpeg",
    ),
)

# Portal glow per theme (used for the label colour in the orbit grid)
THEME_COLORS: Dict[str, str] = {
    "pleiaden": "#93c5fd",
    "arcturus": "#fdba74",
    "sirius": "#a5f3fc",
    "lyra": "#d8b4fe",
    "andromeda": "#c7d2fe",
    "orion": "#c7d2fe",
    "zeta-reticuli": "#99f6e4",
    "polaris": "#fef9c3",
}


def get_catalog() -> List[StarSystem]:
    """Return a fresh list of the catalog entries in display order."""
    return list(_CATALOG)


def find_star(systems: Sequence[StarSystem], star_id: str) -> Optional[StarSystem]:
    for star in systems:
        if star.id == star_id:
            return star
    return None


def replace_star(systems: Sequence[StarSystem], updated: StarSystem) -> List[StarSystem]:
    """Return a new list with the entry sharing `updated.id` swapped out."""
    return [updated if star.id == updated.id else star for star in systems]


def split_portals(systems: Sequence[StarSystem]) -> Tuple[Optional[StarSystem], List[StarSystem]]:
    """Return (central portal, orbiting portals in catalog order)."""
    central = find_star(systems, CENTRAL_STAR_ID)
    orbiting = [star for star in systems if star.id != CENTRAL_STAR_ID]
    return central, orbiting


def orbit_positions(count: int, radius_x: float = 350, radius_y: float = 220) -> List[Tuple[float, float]]:
    """Ellipse offsets for `count` orbiting portals, starting from the top."""
    positions = []
    for index in range(count):
        angle = (index / count) * 2 * math.pi - math.pi / 2
        positions.append((radius_x * math.cos(angle), radius_y * math.sin(angle)))
    return positions


def build_vision_prompt(star: StarSystem) -> str:
    """Seed prompt for the Celestial Forge when opened from a star."""
    return (
        f"A vision of a being from the star system {star.label}, a place known as \"{star.lore}\". "
        f"The being embodies the concepts of: {star.details}"
    )


def build_animation_prompt(star: StarSystem) -> str:
    """Seed prompt for the Stellar Animator when opened from a star."""
    return f"The being from {star.label} comes to life. {star.lore}"
