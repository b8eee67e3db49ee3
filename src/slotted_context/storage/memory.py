"""In-process storage backend."""

from typing import Dict, Optional

from ..errors import StorageError
from ..utils.logging import get_logger
from .base import StorageBackend

logger = get_logger(__name__)


class InMemoryStorage(StorageBackend):
    """Dictionary-backed storage with an optional byte quota.

    The quota mirrors browser storage, which rejects writes once full.
    """

    name = "memory"

    def __init__(self, quota_bytes: Optional[int] = None):
        self.quota_bytes = quota_bytes
        self._values: Dict[str, str] = {}

    def _used_bytes(self, excluding: Optional[str] = None) -> int:
        return sum(
            len(k.encode("utf-8")) + len(v.encode("utf-8"))
            for k, v in self._values.items()
            if k != excluding
        )

    async def get(self, key: str) -> Optional[str]:
        return self._values.get(key)

    async def set(self, key: str, value: str) -> None:
        if self.quota_bytes is not None:
            required = self._used_bytes(excluding=key) + len(key.encode("utf-8")) + len(value.encode("utf-8"))
            if required > self.quota_bytes:
                logger.warning(
                    "Storage quota exceeded",
                    extra={"key": key, "required_bytes": required, "quota_bytes": self.quota_bytes}
                )
                raise StorageError(
                    f"Storage quota exceeded: {required} bytes needed, {self.quota_bytes} available",
                    key=key
                )
        self._values[key] = value

    async def clear(self, key: str) -> None:
        self._values.pop(key, None)
