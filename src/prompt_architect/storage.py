"""Key-value byte stores used to persist the prompt library."""

import logging
import os
from abc import ABC, abstractmethod
from pathlib import Path

from .config import get_data_path

logger = logging.getLogger(__name__)


class ByteStore(ABC):
    """Minimal persistent store: whole values read and written by key."""

    @abstractmethod
    def read(self, key: str) -> bytes | None:
        """Return the stored bytes for ``key``, or None if absent."""
        ...

    @abstractmethod
    def write(self, key: str, data: bytes) -> None:
        """Replace the value stored under ``key``."""
        ...


class FileByteStore(ByteStore):
    """Stores each key as ``<key>.json`` under a data directory."""

    def __init__(self, base_path: Path | None = None):
        self._base_path = base_path

    def get_base_path(self) -> Path:
        return self._base_path if self._base_path is not None else get_data_path()

    def path_for(self, key: str) -> Path:
        safe_key = "".join(c if c.isalnum() or c in "-_" else "_" for c in key)
        if not safe_key:
            raise ValueError(f"Invalid store key: {key!r}")
        return self.get_base_path() / f"{safe_key}.json"

    def read(self, key: str) -> bytes | None:
        path = self.path_for(key)
        if not path.is_file():
            return None
        return path.read_bytes()

    def write(self, key: str, data: bytes) -> None:
        path = self.path_for(key)
        path.parent.mkdir(parents=True, exist_ok=True)
        tmp_path = path.with_suffix(".tmp")
        tmp_path.write_bytes(data)
        os.replace(tmp_path, path)
        logger.debug("Wrote %d bytes to %s", len(data), path)


class MemoryByteStore(ByteStore):
    """Volatile store, for tests and sessions that should not persist."""

    def __init__(self, initial: dict[str, bytes] | None = None):
        self._data: dict[str, bytes] = dict(initial or {})

    def read(self, key: str) -> bytes | None:
        return self._data.get(key)

    def write(self, key: str, data: bytes) -> None:
        self._data[key] = data
