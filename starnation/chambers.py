"""
Chamber registry and per-chamber request status.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, List, Optional, Tuple

STATUS_IDLE = "idle"
STATUS_LOADING = "loading"
STATUS_SUCCESS = "success"
STATUS_ERROR = "error"

VISION_WEAVER = "vision-weaver"
CELESTIAL_FORGE = "celestial-forge"
STELLAR_ANIMATOR = "stellar-animator"


@dataclass(frozen=True)
class ChamberSpec:
    key: str
    label: str
    icon: str
    description: str
    requires_source_image: bool
    aspect_ratios: Tuple[str, ...] = ()
    default_aspect_ratio: Optional[str] = None


def get_chamber_specs() -> List[ChamberSpec]:
    """Return the generation chambers in display order."""
    return [
        ChamberSpec(
            key=VISION_WEAVER,
            label="Vision Weaver",
            icon="🌀",
            description="Reshape an existing image with a creative prompt.",
            requires_source_image=True,
        ),
        ChamberSpec(
            key=CELESTIAL_FORGE,
            label="Celestial Forge",
            icon="✨",
            description="Forge a new vision from a text prompt.",
            requires_source_image=False,
            aspect_ratios=("1:1", "16:9", "9:16", "4:3", "3:4"),
            default_aspect_ratio="1:1",
        ),
        ChamberSpec(
            key=STELLAR_ANIMATOR,
            label="Stellar Animator",
            icon="🎞️",
            description="Bring a still vision to life as a short video.",
            requires_source_image=True,
            aspect_ratios=("16:9", "9:16"),
            default_aspect_ratio="16:9",
        ),
    ]


def get_chamber_spec(key: str) -> ChamberSpec:
    """Lookup a chamber by key."""
    for spec in get_chamber_specs():
        if spec.key == key:
            return spec
    raise KeyError(f"Unknown chamber key: {key}")


@dataclass
class ChamberState:
    """Client-side status of one chamber request."""

    status: str = STATUS_IDLE
    error: str = ""
    result: Any = None

    @property
    def is_loading(self) -> bool:
        return self.status == STATUS_LOADING

    def start(self) -> None:
        self.status = STATUS_LOADING
        self.error = ""
        self.result = None

    def succeed(self, result: Any) -> None:
        self.status = STATUS_SUCCESS
        self.error = ""
        self.result = result

    def fail(self, message: str) -> None:
        self.status = STATUS_ERROR
        self.error = message
        self.result = None

    def reset(self) -> None:
        self.status = STATUS_IDLE
        self.error = ""
        self.result = None
