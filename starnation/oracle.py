"""
Oracle tools - poetic reflection chat, symbolic image decoding, Universal Oracle Q&A.
"""

from __future__ import annotations

import itertools
import time
from dataclasses import dataclass, field
from typing import List, Optional

try:
    from google.genai import types as genai_types
except Exception:
    genai_types = None

from .config import (
    ORACLE_CONCISE_RULE,
    ORACLE_DETAILED_RULE,
    ORACLE_PROMPT,
    POETIC_REFLECTION_FALLBACK,
    POETIC_REFLECTION_PROMPT,
    SYMBOL_DECODER_FAILURE,
    SYMBOL_DECODER_PROMPT,
    TEXT_MODEL_FAST,
    TEXT_MODEL_REFLECTION,
)
from .errors import GenerationError, InvalidApiKeyError
from .gemini_client import get_genai_client, require_genai_client, to_generation_error
from .utils import get_logger

logger = get_logger("oracle")

ROLE_USER = "user"
ROLE_MODEL = "model"


@dataclass(frozen=True)
class ChatMessage:
    id: str
    role: str
    text: str


@dataclass
class ChatLog:
    """Append-only transcript for the Oracle's Mirror."""

    messages: List[ChatMessage] = field(default_factory=list)
    _ids: itertools.count = field(default_factory=lambda: itertools.count(int(time.time() * 1000)), repr=False)

    def append(self, role: str, text: str) -> ChatMessage:
        if role not in (ROLE_USER, ROLE_MODEL):
            raise ValueError(f"Unknown chat role: {role}")
        message = ChatMessage(id=str(next(self._ids)), role=role, text=text)
        self.messages.append(message)
        return message

    def __len__(self) -> int:
        return len(self.messages)


def get_poetic_reflection(prompt: str) -> str:
    """Reflect the query back as a short verse. Never raises."""
    client = get_genai_client()
    if client is None:
        logger.warning("Poetic reflection requested without an API key")
        return POETIC_REFLECTION_FALLBACK
    try:
        response = client.models.generate_content(
            model=TEXT_MODEL_REFLECTION,
            contents=POETIC_REFLECTION_PROMPT.format(prompt=prompt),
        )
        return response.text or POETIC_REFLECTION_FALLBACK
    except Exception as exc:
        logger.error(f"Error getting poetic reflection: {exc}")
        return POETIC_REFLECTION_FALLBACK


def reflect(log: ChatLog, prompt: str) -> Optional[ChatMessage]:
    """Append the user's prompt and the mirror's reply to the log."""
    if not prompt or not prompt.strip():
        return None
    log.append(ROLE_USER, prompt)
    return log.append(ROLE_MODEL, get_poetic_reflection(prompt))


def decode_symbolic_message(image_bytes: bytes, mime: str) -> str:
    """Return a mystical interpretation of a symbolic image."""
    if not (mime or "").startswith("image/"):
        raise ValueError("Only symbolic images can be decoded at this time.")

    client = require_genai_client()
    try:
        response = client.models.generate_content(
            model=TEXT_MODEL_FAST,
            contents=[
                genai_types.Part.from_bytes(data=image_bytes, mime_type=mime),
                SYMBOL_DECODER_PROMPT,
            ],
        )
    except Exception as exc:
        logger.error(f"Error decoding symbolic message: {exc}")
        error = to_generation_error(exc, SYMBOL_DECODER_FAILURE)
        if isinstance(error, InvalidApiKeyError):
            raise error from exc
        raise GenerationError(SYMBOL_DECODER_FAILURE) from exc

    text = (response.text or "").strip()
    if not text:
        raise GenerationError(SYMBOL_DECODER_FAILURE)
    return text


def get_oracle_response(question: str, detailed: bool = False) -> str:
    """Answer a seeker's question, concise or in depth."""
    if not question or not question.strip():
        raise ValueError("A question is required to consult the Oracle.")

    client = require_genai_client()
    prompt = ORACLE_PROMPT.format(
        length_rule=ORACLE_DETAILED_RULE if detailed else ORACLE_CONCISE_RULE,
        question=question.strip(),
    )
    try:
        response = client.models.generate_content(model=TEXT_MODEL_FAST, contents=prompt)
    except Exception as exc:
        logger.error(f"Error getting oracle response: {exc}")
        raise to_generation_error(exc, "The Oracle cannot reach through the veil.") from exc

    logger.info(f"Oracle answered ({'detailed' if detailed else 'concise'}, {len(response.text or '')} chars)")
    return response.text or ""
