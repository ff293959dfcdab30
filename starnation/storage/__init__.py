"""
Media persistence adapters.
"""

from .base import MediaStore, coerce_media
from .blob_store import BlobVideoStore
from .local_store import LocalImageStore
from .supabase_store import SupabaseMediaStore

__all__ = ["MediaStore", "coerce_media", "BlobVideoStore", "LocalImageStore", "SupabaseMediaStore"]
