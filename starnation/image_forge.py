"""
Image chambers - Imagen text-to-image (Celestial Forge) and Gemini image edit (Vision Weaver).
"""

from __future__ import annotations

from typing import Tuple

try:
    from google.genai import types as genai_types
except Exception:
    genai_types = None

from .config import IMAGE_EDIT_MODEL, IMAGEN_MODEL
from .errors import GenerationError
from .gemini_client import require_genai_client, to_generation_error
from .utils import get_logger

logger = get_logger("image_forge")

EMPTY_NEBULA = "The Celestial Forge returned an empty nebula. The vision could not be formed."
FORGE_STORM = "A cosmic storm interfered with the forging process."
WEAVE_FAILED = "The Vision Weaver could not manifest a new reality from your request."
WEAVE_UNKNOWN = "An unknown error occurred during the weaving process."


def generate_image_with_imagen(prompt: str, aspect_ratio: str = "1:1") -> bytes:
    """
    Generate one JPEG image from a text prompt with Imagen.

    Args:
        prompt: Description of the desired image
        aspect_ratio: One of the Celestial Forge aspect ratios

    Returns:
        JPEG bytes of the generated image
    """
    if not prompt or not prompt.strip():
        raise ValueError("A prompt is required to forge a vision from the cosmos.")

    client = require_genai_client()
    try:
        response = client.models.generate_images(
            model=IMAGEN_MODEL,
            prompt=prompt,
            config=genai_types.GenerateImagesConfig(
                number_of_images=1,
                output_mime_type="image/jpeg",
                aspect_ratio=aspect_ratio,
            ),
        )
    except Exception as exc:
        logger.error(f"Error generating image with Imagen: {exc}")
        raise to_generation_error(exc, FORGE_STORM) from exc

    generated = getattr(response, "generated_images", None) or []
    if generated and generated[0].image and generated[0].image.image_bytes:
        logger.info(f"Imagen returned {len(generated[0].image.image_bytes)} bytes ({aspect_ratio})")
        return generated[0].image.image_bytes

    logger.warning("Imagen response contained no images")
    raise GenerationError(EMPTY_NEBULA)


def edit_image_with_prompt(image_bytes: bytes, mime: str, prompt: str) -> Tuple[bytes, str]:
    """
    Edit an image according to a prompt.

    Returns:
        Tuple of (image_bytes, mime_type) for the first image part in the model response
    """
    if not (mime or "").startswith("image/"):
        raise ValueError("Only image files can be woven.")
    if not image_bytes or not prompt or not prompt.strip():
        raise ValueError("Please provide a source image and a creative prompt.")

    client = require_genai_client()
    try:
        response = client.models.generate_content(
            model=IMAGE_EDIT_MODEL,
            contents=[
                genai_types.Part.from_bytes(data=image_bytes, mime_type=mime),
                prompt,
            ],
            config=genai_types.GenerateContentConfig(response_modalities=["IMAGE"]),
        )
    except Exception as exc:
        logger.error(f"Error editing image: {exc}")
        raise to_generation_error(exc, WEAVE_UNKNOWN) from exc

    for candidate in getattr(response, "candidates", None) or []:
        content = getattr(candidate, "content", None)
        for part in getattr(content, "parts", None) or []:
            inline = getattr(part, "inline_data", None)
            if inline is not None and inline.data:
                return inline.data, getattr(inline, "mime_type", None) or "image/png"

    logger.warning("Image edit response contained no inline image")
    raise GenerationError(WEAVE_FAILED)
