"""
Utility functions for Cosmic Community Creator.
"""

from __future__ import annotations
import base64
import io
import logging
import random
import re
import string
import time
from pathlib import Path
from typing import Optional, Tuple
from urllib.parse import unquote, urlparse

import requests
from PIL import Image

from .config import get_log_level

_LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"
_DATA_URL_RE = re.compile(r"^data:(?P<mime>[^;,]+)?(?P<b64>;base64)?,(?P<payload>.*)$", re.DOTALL)

MIME_TO_EXT = {
    "image/jpeg": "jpg",
    "image/png": "png",
    "image/webp": "webp",
    "image/gif": "gif",
    "video/mp4": "mp4",
    "video/webm": "webm",
    "video/quicktime": "mov",
}


def get_logger(name: str) -> logging.Logger:
    """
    Return a namespaced logger with a single stream handler.

    Args:
        name: Short module name, e.g. "gallery"

    Returns:
        Logger named "starnation.<name>"
    """
    root = logging.getLogger("starnation")
    if not root.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(_LOG_FORMAT))
        root.addHandler(handler)
        root.setLevel(get_log_level())
        root.propagate = False
    return root.getChild(name)


def load_image_bytes(file) -> Tuple[bytes, str]:
    """
    Load and convert an uploaded file to PNG bytes.

    Args:
        file: Streamlit UploadedFile object (or any binary file-like)

    Returns:
        Tuple of (image_bytes, mime_type)
    """
    image = Image.open(file).convert("RGB")
    buf = io.BytesIO()
    image.save(buf, format="PNG")
    return buf.getvalue(), "image/png"


def extension_for_mime(mime: Optional[str], default: str = "jpg") -> str:
    return MIME_TO_EXT.get((mime or "").lower(), default)


def to_data_url(data: bytes, mime: str) -> str:
    return f"data:{mime};base64,{base64.b64encode(data).decode('ascii')}"


def parse_data_url(url: str) -> Tuple[bytes, str]:
    """
    Split a data URL into its bytes and mime type.

    Raises:
        ValueError: if the string is not a data URL
    """
    match = _DATA_URL_RE.match(url or "")
    if not match:
        raise ValueError("Not a data URL")
    mime = match.group("mime") or "text/plain"
    payload = match.group("payload")
    if match.group("b64"):
        return base64.b64decode(payload), mime
    return unquote(payload).encode("utf-8"), mime


def object_folder(user_id: str, star_id: str) -> str:
    """
    Bucket folder `{user}/{star}` for one creator and star.

    Raises:
        ValueError: if a segment is empty or contains "/"
    """
    for segment in (user_id, star_id):
        if not segment or "/" in segment:
            raise ValueError(f"Invalid storage path segment: {segment!r}")
    return f"{user_id}/{star_id}"


def make_object_key(user_id: str, star_id: str, ext: str, now_ms: Optional[int] = None) -> str:
    """Object key `{user}/{star}/{timestamp}-{rand}.{ext}` used in the storage buckets."""
    timestamp = now_ms if now_ms is not None else int(time.time() * 1000)
    rand = "".join(random.choices(string.ascii_lowercase + string.digits, k=7))
    return f"{object_folder(user_id, star_id)}/{timestamp}-{rand}.{ext}"


def read_media_url(url: str, timeout: int = 30) -> bytes:
    """Resolve a data:, file:// or http(s) URL to its bytes."""
    if url.startswith("data:"):
        return parse_data_url(url)[0]
    parsed = urlparse(url)
    if parsed.scheme == "file":
        return Path(unquote(parsed.path)).read_bytes()
    resp = requests.get(url, timeout=timeout)
    resp.raise_for_status()
    return resp.content
