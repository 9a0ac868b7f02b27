"""
Document store used by the service layer.

A small async key-value document API modelled on hosted document databases:
- Documents are JSON objects addressed by slash-separated paths
  ("users/u1/learningPath/active")
- ``get`` / ``set`` / ``update`` / ``delete`` and atomic write batches
- ``ArrayUnion`` field transform appends without overwriting, so two
  concurrent writers never lose each other's entries

Two implementations are provided: an in-memory store for tests and a JSON
file store that keeps one file per document.
"""

from __future__ import annotations

import asyncio
import json
import threading
from abc import ABC, abstractmethod
from copy import deepcopy
from pathlib import Path
from typing import Any, Iterable, Optional

from .log import get_logger

logger = get_logger(__name__)


class DocumentNotFoundError(LookupError):
    """Raised when a document that must exist is absent."""

    def __init__(self, path: str):
        super().__init__(f"Document not found: {path}")
        self.path = path


class LessonNotFoundError(DocumentNotFoundError):
    """Raised when a lesson document is absent from the catalog."""


class ArrayUnion:
    """
    Field transform: append values not already in the stored array.

    Usage:
        await store.update(path, {"completedLessons": ArrayUnion(["l1"])})
    """

    def __init__(self, values: Iterable[Any]):
        self.values = list(values)

    def apply(self, current: Any) -> list:
        result = list(current) if isinstance(current, list) else []
        for value in self.values:
            if value not in result:
                result.append(value)
        return result

    def __repr__(self) -> str:
        return f"ArrayUnion({self.values!r})"


def _normalize(path: str) -> str:
    parts = [part for part in path.strip("/").split("/") if part]
    if not parts:
        raise ValueError("Document path cannot be empty")
    if any(part in (".", "..") for part in parts):
        raise ValueError(f"Invalid document path: {path}")
    return "/".join(parts)


def apply_fields(document: Optional[dict], fields: dict[str, Any]) -> dict:
    """Merge fields into a copy of document, resolving transforms."""
    merged = deepcopy(document) if document else {}
    for key, value in fields.items():
        if isinstance(value, ArrayUnion):
            merged[key] = value.apply(merged.get(key))
        else:
            merged[key] = deepcopy(value)
    return merged


class WriteBatch:
    """
    Collects writes and applies them atomically on ``commit``.

    Usage:
        batch = store.batch()
        batch.set("learningPaths/p1", {...})
        batch.set("learningPaths/p1/modules/m1/lessons/l1", {...})
        await batch.commit()
    """

    def __init__(self, store: DocumentStore):
        self._store = store
        self._ops: list[tuple[str, str, Any, bool]] = []
        self._committed = False

    def set(self, path: str, data: dict[str, Any], merge: bool = False) -> WriteBatch:
        self._ops.append(("set", _normalize(path), data, merge))
        return self

    def update(self, path: str, fields: dict[str, Any]) -> WriteBatch:
        self._ops.append(("update", _normalize(path), fields, False))
        return self

    def delete(self, path: str) -> WriteBatch:
        self._ops.append(("delete", _normalize(path), None, False))
        return self

    def __len__(self) -> int:
        return len(self._ops)

    async def commit(self) -> int:
        """
        Apply all writes atomically.

        Returns:
            Number of writes applied

        Raises:
            RuntimeError: If the batch was already committed
            DocumentNotFoundError: If an update targets a missing document
                (no write in the batch is applied)
        """
        if self._committed:
            raise RuntimeError("Batch already committed")
        await self._store._commit(self._ops)
        self._committed = True
        return len(self._ops)


class DocumentStore(ABC):
    """Async document store interface."""

    async def get(self, path: str) -> Optional[dict[str, Any]]:
        """Get a document, or None if it doesn't exist."""
        return await self._read(_normalize(path))

    async def set(self, path: str, data: dict[str, Any], merge: bool = False) -> None:
        """Create or overwrite a document (or merge fields into it)."""
        await self._commit([("set", _normalize(path), data, merge)])

    async def update(self, path: str, fields: dict[str, Any]) -> None:
        """
        Update fields of an existing document.

        Raises:
            DocumentNotFoundError: If the document doesn't exist
        """
        await self._commit([("update", _normalize(path), fields, False)])

    async def delete(self, path: str) -> None:
        await self._commit([("delete", _normalize(path), None, False)])

    async def list(self, collection: str) -> list[tuple[str, dict[str, Any]]]:
        """List (document id, document) pairs directly under a collection."""
        return await self._list(_normalize(collection))

    def batch(self) -> WriteBatch:
        return WriteBatch(self)

    @staticmethod
    def _plan(
        ops: list[tuple[str, str, Any, bool]],
        read,
    ) -> dict[str, Optional[dict]]:
        """Resolve a list of writes into final document states (None = delete)."""
        staged: dict[str, Optional[dict]] = {}

        def current(path: str) -> Optional[dict]:
            return staged[path] if path in staged else read(path)

        for op, path, data, merge in ops:
            if op == "set":
                staged[path] = apply_fields(current(path) if merge else None, data)
            elif op == "update":
                existing = current(path)
                if existing is None:
                    raise DocumentNotFoundError(path)
                staged[path] = apply_fields(existing, data)
            else:
                staged[path] = None
        return staged

    @abstractmethod
    async def _read(self, path: str) -> Optional[dict[str, Any]]: ...

    @abstractmethod
    async def _list(self, collection: str) -> list[tuple[str, dict[str, Any]]]: ...

    @abstractmethod
    async def _commit(self, ops: list[tuple[str, str, Any, bool]]) -> None: ...


class InMemoryDocumentStore(DocumentStore):
    """Document store held in a dict. Safe for concurrent coroutines."""

    def __init__(self, documents: Optional[dict[str, dict[str, Any]]] = None):
        self._documents: dict[str, dict[str, Any]] = {
            _normalize(path): deepcopy(data) for path, data in (documents or {}).items()
        }
        self._lock = asyncio.Lock()

    async def _read(self, path: str) -> Optional[dict[str, Any]]:
        document = self._documents.get(path)
        return deepcopy(document) if document is not None else None

    async def _list(self, collection: str) -> list[tuple[str, dict[str, Any]]]:
        prefix = collection + "/"
        return [
            (path[len(prefix):], deepcopy(data))
            for path, data in sorted(self._documents.items())
            if path.startswith(prefix) and "/" not in path[len(prefix):]
        ]

    async def _commit(self, ops: list[tuple[str, str, Any, bool]]) -> None:
        async with self._lock:
            staged = self._plan(ops, self._documents.get)
            for path, document in staged.items():
                if document is None:
                    self._documents.pop(path, None)
                else:
                    self._documents[path] = document

    def __len__(self) -> int:
        return len(self._documents)


class JsonFileDocumentStore(DocumentStore):
    """
    Document store persisted as one JSON file per document.

    ``learningPaths/p1/modules/m1`` is stored at
    ``<root>/learningPaths/p1/modules/m1.json``. File I/O runs in a worker
    thread; a process-wide lock serializes read-modify-write commits.
    """

    _lock = threading.Lock()

    def __init__(self, root: Path | str):
        """
        Initialize the store.

        Args:
            root: Directory holding the document files (created if missing)
        """
        self.root = Path(root)
        self.root.mkdir(parents=True, exist_ok=True)

    def _file(self, path: str) -> Path:
        return self.root / f"{path}.json"

    def _read_file(self, path: str) -> Optional[dict[str, Any]]:
        filepath = self._file(path)
        if not filepath.exists():
            return None
        with open(filepath, "r", encoding="utf-8") as f:
            return json.load(f)

    def _write_file(self, path: str, document: Optional[dict[str, Any]]) -> None:
        filepath = self._file(path)
        if document is None:
            filepath.unlink(missing_ok=True)
            return
        filepath.parent.mkdir(parents=True, exist_ok=True)
        tmp = filepath.with_suffix(".json.tmp")
        with open(tmp, "w", encoding="utf-8") as f:
            json.dump(document, f, indent=2, ensure_ascii=False)
        tmp.replace(filepath)

    def _commit_sync(self, ops: list[tuple[str, str, Any, bool]]) -> None:
        with self._lock:
            staged = self._plan(ops, self._read_file)
            for path, document in staged.items():
                self._write_file(path, document)
        logger.debug("Committed %d write(s) to %s", len(ops), self.root)

    def _list_sync(self, collection: str) -> list[tuple[str, dict[str, Any]]]:
        directory = self.root / collection
        if not directory.is_dir():
            return []
        documents = []
        for filepath in sorted(directory.glob("*.json")):
            with open(filepath, "r", encoding="utf-8") as f:
                documents.append((filepath.stem, json.load(f)))
        return documents

    async def _read(self, path: str) -> Optional[dict[str, Any]]:
        return await asyncio.to_thread(self._read_file, path)

    async def _list(self, collection: str) -> list[tuple[str, dict[str, Any]]]:
        return await asyncio.to_thread(self._list_sync, collection)

    async def _commit(self, ops: list[tuple[str, str, Any, bool]]) -> None:
        await asyncio.to_thread(self._commit_sync, ops)
