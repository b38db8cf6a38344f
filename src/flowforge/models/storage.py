"""
FlowForge Storage

This module provides the key/value storage backends that stand in for browser
local storage, and the collection store that keeps whole JSON arrays under a
single key.

Storage is last-write-wins: every write replaces the full value under its
key, there are no transactions and no cross-process notification.
"""

import json
import logging
import os
import tempfile
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional

# Set up module logger
logger = logging.getLogger(__name__)


class StorageBackend(ABC):
    """
    Abstract string key/value store with local-storage semantics.
    """
    
    @abstractmethod
    def get_item(self, key: str) -> Optional[str]:
        """Return the stored string for ``key``, or None if absent."""
        pass
    
    @abstractmethod
    def set_item(self, key: str, value: str) -> None:
        """Store ``value`` under ``key``, replacing any previous value."""
        pass
    
    @abstractmethod
    def remove_item(self, key: str) -> None:
        """Remove ``key``. Removing an absent key is a no-op."""
        pass
    
    @abstractmethod
    def keys(self) -> Iterable[str]:
        """Return the keys currently stored."""
        pass


class InMemoryBackend(StorageBackend):
    """Dict-backed storage, used by tests and throwaway sessions."""
    
    def __init__(self, initial: Optional[Dict[str, str]] = None) -> None:
        self._data: Dict[str, str] = dict(initial or {})
    
    def get_item(self, key: str) -> Optional[str]:
        return self._data.get(key)
    
    def set_item(self, key: str, value: str) -> None:
        self._data[key] = value
    
    def remove_item(self, key: str) -> None:
        self._data.pop(key, None)
    
    def keys(self) -> List[str]:
        return list(self._data)


class JsonFileBackend(StorageBackend):
    """
    Directory-backed storage with one ``<key>.json`` file per key.
    
    Writes go to a temp file in the same directory and are moved into place
    with ``os.replace`` so a crash never leaves a half-written value.
    """
    
    SUFFIX = ".json"
    
    def __init__(self, directory: Path) -> None:
        """
        Initialize the backend for a data directory.
        
        Args:
            directory: Directory holding one file per key
        """
        self.directory = Path(directory).expanduser()
    
    def _path_for(self, key: str) -> Path:
        if not key or "/" in key or "\\" in key or key.startswith("."):
            raise ValueError(f"Invalid storage key: {key!r}")
        return self.directory / f"{key}{self.SUFFIX}"
    
    def get_item(self, key: str) -> Optional[str]:
        path = self._path_for(key)
        if not path.exists():
            return None
        return path.read_text(encoding="utf-8")
    
    def set_item(self, key: str, value: str) -> None:
        path = self._path_for(key)
        self.directory.mkdir(parents=True, exist_ok=True)
        fd, temp_path = tempfile.mkstemp(dir=self.directory, prefix=f".{key}_", suffix=".tmp")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(value)
            os.replace(temp_path, path)
        except OSError:
            if os.path.exists(temp_path):
                os.unlink(temp_path)
            raise
    
    def remove_item(self, key: str) -> None:
        path = self._path_for(key)
        if path.exists():
            path.unlink()
    
    def keys(self) -> List[str]:
        if not self.directory.exists():
            return []
        return sorted(p.stem for p in self.directory.glob(f"*{self.SUFFIX}") if not p.name.startswith("."))


class LocalCollectionStore:
    """
    Reads and writes whole JSON-array collections under single keys.
    
    Failures never reach the caller: a broken read degrades to an empty
    collection and a failed write is logged and dropped.
    """
    
    def __init__(self, backend: StorageBackend) -> None:
        self.backend = backend
    
    def read_all(self, key: str) -> List[Dict[str, Any]]:
        """
        Read the collection stored under ``key``.
        
        Args:
            key: Collection key
            
        Returns:
            List of records, empty if absent or unreadable
        """
        try:
            raw = self.backend.get_item(key)
            if raw is None:
                return []
            data = json.loads(raw)
        except (OSError, ValueError) as e:
            logger.error(f"Error reading collection '{key}' from storage: {e}")
            return []
        
        if not isinstance(data, list):
            logger.error(f"Collection '{key}' is not a JSON array, ignoring stored value")
            return []
        return data
    
    def write_all(self, key: str, items: List[Dict[str, Any]]) -> bool:
        """
        Serialize and overwrite the whole collection under ``key``.
        
        Args:
            key: Collection key
            items: JSON-serializable records
            
        Returns:
            True if written, False if the write failed
        """
        try:
            self.backend.set_item(key, json.dumps(items, separators=(",", ":"), ensure_ascii=False))
            return True
        except (OSError, TypeError, ValueError) as e:
            logger.error(f"Error saving collection '{key}' to storage: {e}")
            return False


def record_id(record: Any) -> Optional[str]:
    """The ``id`` of a raw stored record, or None when it has none."""
    return record.get("id") if isinstance(record, dict) else None
