"""
Session gate - remembers the logged-in creator in the Streamlit session state.
"""

from __future__ import annotations

from typing import MutableMapping, Optional

from .config import SESSION_USER_KEY

# Per-user keys dropped on logout
USER_SCOPED_KEYS = (
    "star_systems",
    "selected_star_id",
    "active_chamber",
    "context_star_id",
    "chamber_prompt",
    "chamber_states",
    "cancel_video",
    "mirror_log",
    "oracle_answer",
    "transmission",
    "payment_checked",
    "checkout_name",
)


def current_user(state: MutableMapping) -> Optional[str]:
    user = state.get(SESSION_USER_KEY)
    return user or None


def login(state: MutableMapping, creator_name: str) -> str:
    name = (creator_name or "").strip()
    if not name:
        raise ValueError("A creator name is required.")
    if "/" in name:
        raise ValueError("Creator names cannot contain \"/\".")
    state[SESSION_USER_KEY] = name
    return name


def logout(state: MutableMapping) -> None:
    for key in (SESSION_USER_KEY,) + USER_SCOPED_KEYS:
        if key in state:
            del state[key]
