"""
Cosmic Community Creator - Service Components

This package contains the non-UI modules behind the Streamlit app:
- config: Configuration, constants, and environment accessors
- utils: Logging and media helpers
- gemini_client: Gen AI client initialization and error mapping
- catalog / star_system: The fixed star-system catalog
- chambers: Chamber registry and request status
- image_forge / video_animator / oracle: Generative AI tools
- polling: Bounded fixed-interval polling
- storage / media: Media persistence adapters and the per-creator library
- gallery: Recent media across all creators
- payments: Stripe checkout and payment status
- session: Session gate
"""

# Lazy imports so pages only load the vendor SDKs they use
__all__ = [
    # Config
    "get_api_key",
    "get_data_dir",
    # Utils
    "get_logger",
    "load_image_bytes",
    "to_data_url",
    # Catalog
    "StarSystem",
    "get_catalog",
    "find_star",
    "build_vision_prompt",
    "build_animation_prompt",
    # Chambers
    "ChamberState",
    "get_chamber_spec",
    "get_chamber_specs",
    # Generative tools
    "generate_image_with_imagen",
    "edit_image_with_prompt",
    "animate",
    "get_poetic_reflection",
    "decode_symbolic_message",
    "get_oracle_response",
    # Media
    "MediaLibrary",
    "list_recent_images",
    "list_recent_videos",
    # Payments
    "create_checkout_session",
    "wait_for_payment",
    # Session
    "current_user",
    "login",
    "logout",
]

_EXPORTS = {
    "get_api_key": "config",
    "get_data_dir": "config",
    "get_logger": "utils",
    "load_image_bytes": "utils",
    "to_data_url": "utils",
    "StarSystem": "star_system",
    "get_catalog": "catalog",
    "find_star": "catalog",
    "build_vision_prompt": "catalog",
    "build_animation_prompt": "catalog",
    "ChamberState": "chambers",
    "get_chamber_spec": "chambers",
    "get_chamber_specs": "chambers",
    "generate_image_with_imagen": "image_forge",
    "edit_image_with_prompt": "image_forge",
    "animate": "video_animator",
    "get_poetic_reflection": "oracle",
    "decode_symbolic_message": "oracle",
    "get_oracle_response": "oracle",
    "MediaLibrary": "media",
    "list_recent_images": "gallery",
    "list_recent_videos": "gallery",
    "create_checkout_session": "payments",
    "wait_for_payment": "payments",
    "current_user": "session",
    "login": "session",
    "logout": "session",
}


def __getattr__(name):
    """Lazy import to avoid loading every vendor SDK on Streamlit reruns."""
    module_name = _EXPORTS.get(name)
    if module_name is None:
        raise AttributeError(f"module '{__name__}' has no attribute '{name}'")
    from importlib import import_module

    module = import_module(f".{module_name}", __name__)
    return getattr(module, name)
