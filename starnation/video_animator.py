"""
Stellar Animator - Veo image-to-video generation and operation polling.
"""

from __future__ import annotations

import time
from typing import Any, Callable, Optional

import requests

try:
    from google.genai import types as genai_types
except Exception:
    genai_types = None

from .config import LOADING_MESSAGE_PERIOD, LOADING_MESSAGES, VEO_MODEL, VIDEO_RESOLUTION, get_api_key, get_video_poll_settings
from .errors import GenerationError, PollCancelledError, PollTimeoutError
from .gemini_client import require_genai_client, to_generation_error
from .polling import POLL_CANCELLED, POLL_TIMED_OUT, poll_until
from .utils import get_logger

logger = get_logger("video_animator")

NO_VIDEO_FOUND = "Generation finished but no video was found."


def initiate_video_generation(image_bytes: bytes, mime: str, prompt: str, aspect_ratio: str = "16:9"):
    """
    Submit a Veo job animating `image_bytes`.

    Returns:
        The initial operation handle from the API
    """
    if not image_bytes:
        raise ValueError("Please provide a source image.")

    client = require_genai_client()
    try:
        operation = client.models.generate_videos(
            model=VEO_MODEL,
            prompt=prompt,
            image=genai_types.Image(image_bytes=image_bytes, mime_type=mime),
            config=genai_types.GenerateVideosConfig(
                number_of_videos=1,
                resolution=VIDEO_RESOLUTION,
                aspect_ratio=aspect_ratio,
            ),
        )
    except Exception as exc:
        logger.error(f"Failed to start video generation: {exc}")
        raise to_generation_error(exc, "Failed to start video generation.") from exc

    logger.info(f"Veo operation submitted: {getattr(operation, 'name', '?')}")
    return operation


def poll_video_operation(operation):
    """Fetch the latest state of a video operation."""
    client = require_genai_client()
    try:
        return client.operations.get(operation)
    except Exception as exc:
        logger.error(f"Failed to poll video status: {exc}")
        raise to_generation_error(exc, "Failed to poll video status.") from exc


def _operation_error_message(operation) -> Optional[str]:
    error = getattr(operation, "error", None)
    if not error:
        return None
    if isinstance(error, dict):
        return error.get("message") or str(error)
    return getattr(error, "message", None) or str(error)


def fetch_video_bytes(operation, timeout: int = 120) -> bytes:
    """
    Download the first generated video of a completed operation.

    Raises:
        GenerationError: if the operation carries no video
    """
    response = getattr(operation, "response", None)
    videos = getattr(response, "generated_videos", None) or []
    video = videos[0].video if videos else None

    if video is not None and getattr(video, "video_bytes", None):
        return video.video_bytes

    uri = getattr(video, "uri", None) if video is not None else None
    if not uri:
        raise GenerationError(_operation_error_message(operation) or NO_VIDEO_FOUND)

    params = {}
    api_key = get_api_key()
    if api_key:
        params["key"] = api_key
    resp = requests.get(uri, params=params, timeout=timeout)
    resp.raise_for_status()
    logger.info(f"Downloaded generated video ({len(resp.content)} bytes)")
    return resp.content


def loading_message(elapsed_seconds: float) -> str:
    """Rotating status line shown while the animation renders."""
    index = int(elapsed_seconds // LOADING_MESSAGE_PERIOD) % len(LOADING_MESSAGES)
    return LOADING_MESSAGES[index]


def animate(
    image_bytes: bytes,
    mime: str,
    prompt: str,
    aspect_ratio: str = "16:9",
    interval: Optional[float] = None,
    max_attempts: Optional[int] = None,
    sleep: Callable[[float], None] = time.sleep,
    should_cancel: Optional[Callable[[], bool]] = None,
    on_attempt: Optional[Callable[[int, Any], None]] = None,
) -> bytes:
    """
    Submit a video job, poll it to completion and return the video bytes.

    Raises:
        PollTimeoutError: the operation did not finish within the attempt cap
        PollCancelledError: `should_cancel` returned true while waiting
        GenerationError: the vendor finished without a video or failed
    """
    default_interval, default_attempts = get_video_poll_settings()
    interval = interval or default_interval
    max_attempts = max_attempts or default_attempts

    operation = initiate_video_generation(image_bytes, mime, prompt, aspect_ratio)
    if getattr(operation, "done", False):
        return fetch_video_bytes(operation)

    result = poll_until(
        refresh=poll_video_operation,
        initial=operation,
        is_done=lambda op: bool(getattr(op, "done", False)),
        interval=interval,
        max_attempts=max_attempts,
        sleep=sleep,
        should_cancel=should_cancel,
        on_attempt=on_attempt,
    )

    if result.status == POLL_CANCELLED:
        raise PollCancelledError("Video generation was closed before it completed.")
    if result.status == POLL_TIMED_OUT:
        raise PollTimeoutError(
            f"Video generation did not complete after {max_attempts * interval:.0f} seconds.",
            attempts=result.attempts,
        )
    return fetch_video_bytes(result.value)
