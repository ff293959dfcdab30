"""
Gemini API client initialization and error mapping.
"""

from __future__ import annotations
from typing import Optional

try:
    from google import genai
    from google.genai import types as genai_types
except Exception:
    genai = None
    genai_types = None

from .config import get_api_key
from .errors import GenerationError, InvalidApiKeyError, MissingApiKeyError

INVALID_KEY_MARKER = "Requested entity was not found"


def has_api_key() -> bool:
    return get_api_key() is not None


def get_genai_client() -> Optional["genai.Client"]:
    """
    Initialize and return a Gen AI client.

    A new client is built per call so a key changed in the sidebar is picked
    up by the next chamber action.

    Returns:
        genai.Client instance or None if API key not available
    """
    api_key = get_api_key()
    if not api_key or genai is None:
        return None
    try:
        return genai.Client(api_key=api_key)
    except Exception:
        return None


def require_genai_client():
    """Return a client or raise MissingApiKeyError."""
    client = get_genai_client()
    if client is None:
        raise MissingApiKeyError()
    return client


def to_generation_error(exc: Exception, fallback: str) -> GenerationError:
    """
    Map a vendor exception onto the application's error types.

    Args:
        exc: Exception raised by the SDK
        fallback: Message used when the exception carries none
    """
    if isinstance(exc, GenerationError):
        return exc
    message = str(exc) or fallback
    if INVALID_KEY_MARKER in message:
        return InvalidApiKeyError()
    return GenerationError(message)
