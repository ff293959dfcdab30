"""
Supabase client initialization.
"""

from __future__ import annotations
from typing import Optional

from supabase import Client, create_client

from .config import get_supabase_credentials
from .utils import get_logger

logger = get_logger("supabase_client")


def get_supabase_client() -> Optional[Client]:
    """
    Create a Supabase client from SUPABASE_URL / SUPABASE_ANON_KEY.

    Returns:
        Client instance or None if not configured
    """
    credentials = get_supabase_credentials()
    if credentials is None:
        return None
    url, key = credentials
    try:
        return create_client(url, key)
    except Exception as exc:
        logger.error(f"Could not create Supabase client: {exc}")
        return None
