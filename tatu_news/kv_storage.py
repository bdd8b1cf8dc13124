"""
KV Storage - Key-value cache for article summaries.

Provides:
- KVNamespace: raw string store with pluggable backends
- MemoryNamespace: per-process dict
- DiskNamespace: one JSON file per key, survives restarts
- KVStorage: service wrapper with JSON encoding and KVError mapping

Entries never expire here; expiry is left to the backing store.
"""

import asyncio
import hashlib
import json
import logging
import os
import tempfile
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Literal

from .errors import KVError
from .models import ArticleSummary

logger = logging.getLogger(__name__)


class KVNamespace(ABC):
    """Abstract base class for KV backends."""

    @abstractmethod
    async def get(self, key: str) -> str | None:
        """Get a raw value, or None if absent."""
        pass

    @abstractmethod
    async def put(self, key: str, value: str) -> None:
        """Store a raw value, replacing any previous one."""
        pass

    @abstractmethod
    async def delete(self, key: str) -> None:
        """Delete a value. Deleting a missing key is not an error."""
        pass


class MemoryNamespace(KVNamespace):
    """In-memory namespace, lost on restart."""

    def __init__(self):
        self._data: dict[str, str] = {}

    async def get(self, key: str) -> str | None:
        return self._data.get(key)

    async def put(self, key: str, value: str) -> None:
        self._data[key] = value

    async def delete(self, key: str) -> None:
        self._data.pop(key, None)


class DiskNamespace(KVNamespace):
    """Persistent namespace storing one JSON file per key."""

    def __init__(self, directory: Path):
        self.directory = directory
        self.directory.mkdir(parents=True, exist_ok=True)

    def _key_to_path(self, key: str) -> Path:
        """Convert key to file path."""
        hashed = hashlib.sha256(key.encode()).hexdigest()
        return self.directory / f"{hashed}.json"

    def _read(self, key: str) -> str | None:
        path = self._key_to_path(key)
        if not path.exists():
            return None

        data = json.loads(path.read_text(encoding="utf-8"))

        # Verify key matches (handle hash collisions)
        if data.get("key") != key:
            return None
        return data["value"]

    def _write(self, key: str, value: str) -> None:
        path = self._key_to_path(key)
        # Unique temp file per write, renamed into place
        with tempfile.NamedTemporaryFile(
            "w", dir=self.directory, suffix=".tmp", delete=False, encoding="utf-8"
        ) as tmp:
            tmp.write(json.dumps({"key": key, "value": value}))
        os.replace(tmp.name, path)

    def _remove(self, key: str) -> None:
        self._key_to_path(key).unlink(missing_ok=True)

    async def get(self, key: str) -> str | None:
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(None, self._read, key)

    async def put(self, key: str, value: str) -> None:
        loop = asyncio.get_running_loop()
        await loop.run_in_executor(None, self._write, key, value)

    async def delete(self, key: str) -> None:
        loop = asyncio.get_running_loop()
        await loop.run_in_executor(None, self._remove, key)

    def clear(self) -> None:
        """Remove every stored entry."""
        for file in self.directory.glob("*.json"):
            file.unlink(missing_ok=True)


class KVStorage:
    """Cache service over a KVNamespace. Absence is None, failure is KVError."""

    def __init__(self, namespace: KVNamespace):
        self.namespace = namespace

    async def get(self, key: str, format: Literal["text", "json"] = "text") -> Any | None:
        try:
            raw = await self.namespace.get(key)
        except Exception as e:
            raise KVError("get", key, f"Failed to get key '{key}': {e}") from e

        if raw is None or format == "text":
            return raw

        try:
            return json.loads(raw)
        except json.JSONDecodeError as e:
            raise KVError("get", key, f"Failed to decode JSON for key '{key}': {e}") from e

    async def put(self, key: str, value: str | dict | list) -> None:
        try:
            encoded = value if isinstance(value, str) else json.dumps(value)
            await self.namespace.put(key, encoded)
        except Exception as e:
            raise KVError("put", key, f"Failed to put key '{key}': {e}") from e

    async def delete(self, key: str) -> None:
        try:
            await self.namespace.delete(key)
        except Exception as e:
            raise KVError("delete", key, f"Failed to delete key '{key}': {e}") from e

    async def get_article_summary(self, url: str) -> ArticleSummary | None:
        try:
            data = await self.get(url, format="json")
        except KVError as e:
            raise KVError("get", url, f"Failed to get article summary for '{url}': {e.message}") from e

        if not isinstance(data, dict):
            return None
        return ArticleSummary.from_dict(data)

    async def put_article_summary(self, url: str, summary: ArticleSummary) -> None:
        try:
            await self.put(url, summary.to_dict())
        except KVError as e:
            raise KVError("put", url, f"Failed to put article summary for '{url}': {e.message}") from e


def create_namespace(backend: str, directory: str | Path) -> KVNamespace:
    """Factory function to create the KV namespace binding from settings."""
    if backend == "memory":
        return MemoryNamespace()
    if backend == "disk":
        return DiskNamespace(Path(directory))
    raise ValueError(f"Unknown KV backend: {backend}. Available: ['disk', 'memory']")
