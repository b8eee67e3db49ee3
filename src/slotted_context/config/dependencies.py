"""Dependency injection configuration."""

from pathlib import Path
from typing import Optional
from dataclasses import dataclass

from .settings import Settings, settings as default_settings
from ..storage.base import StorageBackend
from ..storage.file import FileStorage
from ..storage.memory import InMemoryStorage
from ..store.context_store import ContextStore

@dataclass
class Dependencies:
    """Container for application dependencies."""
    
    settings: Settings
    storage: StorageBackend
    store: ContextStore

def create_storage(app_settings: Settings) -> StorageBackend:
    """Create the persistence backend selected by ``storage_backend``."""
    if app_settings.storage_backend == "memory":
        return InMemoryStorage(quota_bytes=app_settings.storage_quota_bytes)
    if app_settings.storage_backend == "supabase":
        from ..storage.supabase import SupabaseStorage
        from ..utils.supabase_utils import SupabaseManager
        return SupabaseStorage(SupabaseManager(app_settings), table=app_settings.supabase_table)
    return FileStorage(Path(app_settings.storage_path).expanduser())

def create_dependencies(app_settings: Optional[Settings] = None) -> Dependencies:
    """Create and configure application dependencies.

    The store is not initialized; call ``await deps.store.init()`` or use it
    as an async context manager.
    """
    app_settings = app_settings or default_settings
    storage = create_storage(app_settings)
    store = ContextStore(storage, key=app_settings.storage_key)
    
    return Dependencies(
        settings=app_settings,
        storage=storage,
        store=store
    )
