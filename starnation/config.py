"""
Configuration, constants, and environment accessors for Cosmic Community Creator.
"""

from __future__ import annotations
import os
from pathlib import Path
from typing import Optional

# ---------- Gen AI Models ----------
TEXT_MODEL_REFLECTION = "gemini-2.5-pro"
TEXT_MODEL_FAST = "gemini-2.5-flash"
IMAGE_EDIT_MODEL = "gemini-2.5-flash-image"
IMAGEN_MODEL = "imagen-4.0-generate-001"
VEO_MODEL = "veo-3.1-fast-generate-preview"
VIDEO_RESOLUTION = "720p"

# ---------- Storage ----------
IMAGES_BUCKET = "starnation-images"
VIDEOS_BUCKET = "starnation-videos"
SESSION_USER_KEY = "cosmic-creator-user"
LOCAL_IMAGES_KEY_PREFIX = "cosmic-creator-images-"
VIDEO_DB_NAME = "cosmic-creator-videos.sqlite3"

# ---------- Polling ----------
DEFAULT_VIDEO_POLL_INTERVAL = 10.0
DEFAULT_VIDEO_POLL_MAX_ATTEMPTS = 60
DEFAULT_PAYMENT_POLL_INTERVAL = 2.0
DEFAULT_PAYMENT_POLL_MAX_ATTEMPTS = 10
LOADING_MESSAGE_PERIOD = 5.0

LOADING_MESSAGES = [
    "Aligning cosmic frequencies...",
    "Gathering starlight...",
    "Weaving temporal threads...",
    "Synchronizing realities...",
    "Manifesting the vision...",
    "The animation is almost complete...",
]

# ---------- Prompts ----------
POETIC_REFLECTION_PROMPT = (
    "You are The Oracle's Mirror, a mystical AI that reflects the user's query back in the form "
    "of a short, poetic, and insightful verse. Do not give direct answers. Instead, offer a "
    "contemplative and metaphorical reflection on their question. The user's query is: \"{prompt}\""
)

POETIC_REFLECTION_FALLBACK = "The ether's hum is faint... the connection is lost in the cosmic static."

SYMBOL_DECODER_PROMPT = (
    "You are an AI specializing in energetic interpretation of symbols, sigils, and light language. "
    "Analyze this image and provide a brief, mystical interpretation of its meaning and energy. "
    "Speak as if you are deciphering an ancient cosmic transmission."
)

SYMBOL_DECODER_FAILURE = "A veil of static obscures the message. The transmission could not be received."

ORACLE_PROMPT = """You are the Universal Oracle, a wise and compassionate voice of the cosmos.
You answer questions about the cosmos, consciousness, spirituality and the nature of reality.
Speak with warmth and clarity, weaving grounded insight with cosmic imagery.

{length_rule}

The seeker asks: "{question}"
"""

ORACLE_CONCISE_RULE = "Answer in one or two short paragraphs."
ORACLE_DETAILED_RULE = (
    "Give an in-depth answer of several paragraphs, exploring the question from multiple perspectives "
    "and closing with a practical reflection the seeker can carry with them."
)


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        value = float(raw)
    except ValueError:
        return default
    return value if value > 0 else default


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        value = int(raw)
    except ValueError:
        return default
    return value if value > 0 else default


def get_api_key() -> Optional[str]:
    """Return the Gen AI API key, preferring GEMINI_API_KEY."""
    for name in ("GEMINI_API_KEY", "GOOGLE_GENAI_API_KEY", "API_KEY"):
        value = (os.getenv(name) or "").strip()
        if value and value != "undefined":
            return value
    return None


def get_supabase_credentials() -> Optional[tuple[str, str]]:
    url = (os.getenv("SUPABASE_URL") or "").strip()
    key = (os.getenv("SUPABASE_ANON_KEY") or "").strip()
    if not url or not key:
        return None
    return url, key


def get_stripe_secret_key() -> Optional[str]:
    return (os.getenv("STRIPE_SECRET_KEY") or "").strip() or None


def get_stripe_price_id() -> Optional[str]:
    return (os.getenv("STRIPE_PRICE_ID") or "").strip() or None


def get_app_origin() -> str:
    """Public URL of the app, used for checkout redirects."""
    return (os.getenv("APP_ORIGIN") or "http://localhost:8501").strip().rstrip("/")


def get_data_dir() -> Path:
    """Directory holding the local image and video stores."""
    return Path(os.getenv("STARNATION_DATA_DIR", ".starnation"))


def get_video_poll_settings() -> tuple[float, int]:
    """Return (interval_seconds, max_attempts) for the video operation poll."""
    return (
        _env_float("VIDEO_POLL_INTERVAL", DEFAULT_VIDEO_POLL_INTERVAL),
        _env_int("VIDEO_POLL_MAX_ATTEMPTS", DEFAULT_VIDEO_POLL_MAX_ATTEMPTS),
    )


def get_payment_poll_settings() -> tuple[float, int]:
    """Return (interval_seconds, max_attempts) for the payment status check."""
    return (
        _env_float("PAYMENT_POLL_INTERVAL", DEFAULT_PAYMENT_POLL_INTERVAL),
        _env_int("PAYMENT_POLL_MAX_ATTEMPTS", DEFAULT_PAYMENT_POLL_MAX_ATTEMPTS),
    )


def get_log_level() -> str:
    return os.getenv("STARNATION_LOG_LEVEL", "INFO").upper()
