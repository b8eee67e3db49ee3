"""Supabase table storage backend.

Expects a table (``context_snapshots`` by default) shaped like::

    create table context_snapshots (
        key text primary key,
        value text not null,
        updated_at timestamptz not null default now()
    );
"""

from typing import Optional

import httpx
from postgrest.exceptions import APIError

from ..errors import StorageError
from ..models.context_document import utcnow
from ..utils.logging import get_logger
from ..utils.supabase_utils import SupabaseManager
from .base import StorageBackend

logger = get_logger(__name__)


class SupabaseStorage(StorageBackend):
    """Key/value storage on a Supabase table, with retries on API and transport errors."""

    name = "supabase"

    def __init__(self, supabase: SupabaseManager, table: Optional[str] = None):
        self.supabase = supabase
        self.table = table or supabase.settings.supabase_table

    async def _execute(self, operation: str, data: dict, key: str):
        try:
            return await self.supabase.execute_with_retry(operation, self.table, data)
        except (APIError, httpx.HTTPError) as e:
            raise StorageError(
                f"Supabase {operation} on '{self.table}' failed: {e}", key=key
            ) from e

    async def get(self, key: str) -> Optional[str]:
        rows = await self._execute("select", {"key": key, "select": "key,value"}, key)
        if not rows:
            return None
        return rows[0].get("value")

    async def set(self, key: str, value: str) -> None:
        await self._execute(
            "upsert",
            {"key": key, "value": value, "updated_at": utcnow().isoformat()},
            key
        )

    async def clear(self, key: str) -> None:
        await self._execute("delete", {"key": key}, key)
