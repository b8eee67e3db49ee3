"""Persistence backends for context snapshots."""

from .base import StorageBackend
from .memory import InMemoryStorage
from .file import FileStorage

__all__ = ["StorageBackend", "InMemoryStorage", "FileStorage", "SupabaseStorage"]


def __getattr__(name):
    # Imported lazily so the Supabase client stack loads only when used
    if name == "SupabaseStorage":
        from .supabase import SupabaseStorage
        return SupabaseStorage
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
