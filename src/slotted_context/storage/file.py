"""Local disk storage backend."""

import asyncio
import json
import os
import tempfile
from pathlib import Path
from typing import Dict, Optional, Union

from ..errors import StorageError
from ..utils.logging import get_logger
from .base import StorageBackend

logger = get_logger(__name__)


class FileStorage(StorageBackend):
    """
    Stores every key in a single JSON object on local disk.

    Writes go to a temporary file in the same directory which then replaces
    the target, so a crash mid-write never leaves a truncated file behind.

    Attributes:
        path (Path): Location of the JSON file
    """

    name = "file"

    def __init__(self, path: Union[str, Path]):
        self.path = Path(path)
        # Disk I/O runs in worker threads; read-modify-write cycles must not interleave
        self._lock = asyncio.Lock()

    def _read_all(self) -> Dict[str, str]:
        try:
            text = self.path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return {}
        except OSError as e:
            logger.error(
                "Failed to read storage file",
                extra={"path": str(self.path), "error_type": type(e).__name__, "error_message": str(e)}
            )
            raise StorageError(f"Cannot read storage file {self.path}: {e}") from e

        if not text.strip():
            return {}
        try:
            values = json.loads(text)
        except json.JSONDecodeError as e:
            raise StorageError(f"Storage file {self.path} is not a JSON object: {e}") from e
        if not isinstance(values, dict):
            raise StorageError(f"Storage file {self.path} is not a JSON object")
        return values

    def _write_all(self, values: Dict[str, str]) -> None:
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_path = tempfile.mkstemp(dir=self.path.parent, prefix=f".{self.path.name}.", suffix=".tmp")
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as f:
                    json.dump(values, f, indent=2)
                os.replace(tmp_path, self.path)
            except BaseException:
                if os.path.exists(tmp_path):
                    os.unlink(tmp_path)
                raise
        except OSError as e:
            logger.error(
                "Failed to write storage file",
                extra={"path": str(self.path), "error_type": type(e).__name__, "error_message": str(e)}
            )
            raise StorageError(f"Cannot write storage file {self.path}: {e}") from e

    def _set_sync(self, key: str, value: str) -> None:
        values = self._read_all()
        values[key] = value
        self._write_all(values)

    def _clear_sync(self, key: str) -> None:
        values = self._read_all()
        if key in values:
            del values[key]
            self._write_all(values)

    async def get(self, key: str) -> Optional[str]:
        values = await asyncio.to_thread(self._read_all)
        return values.get(key)

    async def set(self, key: str, value: str) -> None:
        async with self._lock:
            await asyncio.to_thread(self._set_sync, key, value)

    async def clear(self, key: str) -> None:
        async with self._lock:
            await asyncio.to_thread(self._clear_sync, key)
