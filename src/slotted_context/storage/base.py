"""Abstract key/value persistence used by the context store."""

from abc import ABC, abstractmethod
from typing import Optional


class StorageBackend(ABC):
    """
    Async key/value persistence for serialized context snapshots.

    Implementations translate their native failures into
    ``slotted_context.errors.StorageError``.
    """

    name: str = "storage"

    @abstractmethod
    async def get(self, key: str) -> Optional[str]:
        """Return the value stored under ``key``, or None when absent."""

    @abstractmethod
    async def set(self, key: str, value: str) -> None:
        """Store ``value`` under ``key``, replacing any previous value."""

    @abstractmethod
    async def clear(self, key: str) -> None:
        """Remove ``key``. Removing an absent key is not an error."""

    async def close(self) -> None:
        """Release any resources held by the backend."""
