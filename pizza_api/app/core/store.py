"""
Record store over named collections of flat records.

Everything the API persists lives in a single JSON document of the
form ``{"ingredients": [...], "orders": [...]}``.  Each collection is
an ordered list of flat objects, and every stored record carries a
unique ``id`` supplied by the caller.

``JsonFileRecordStore`` is the persisted implementation.  Every call
is a locked read‑modify‑write of the whole document: the file is read,
the collection is changed in memory, and the document is written back
to a temporary file which then atomically replaces the original.  A
crash during a write therefore leaves either the old or the new
document, never a truncated one.  The lock serialises all callers of
one store instance, so concurrent mutations inside a process cannot
overwrite each other.

``InMemoryRecordStore`` implements the same contract without touching
the filesystem and is used as a test double for the services.
"""

from __future__ import annotations

import copy
import json
import logging
import os
import tempfile
import threading
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional, Union

from .errors import StorageError

logger = logging.getLogger(__name__)

Record = Dict[str, Any]
Document = Dict[str, List[Record]]

INGREDIENTS = "ingredients"
ORDERS = "orders"
DEFAULT_COLLECTIONS = (INGREDIENTS, ORDERS)


class RecordStore(ABC):
    """Generic find/insert/update/delete interface over named collections."""

    @abstractmethod
    def list_all(self, collection: str) -> List[Record]:
        """Return every record of ``collection`` in insertion order."""

    @abstractmethod
    def find_by_id(self, collection: str, record_id: str) -> Optional[Record]:
        """Return the first record whose ``id`` equals ``record_id``."""

    @abstractmethod
    def insert(self, collection: str, record: Record) -> Record:
        """Append ``record`` and persist.  The record must carry an ``id``."""

    @abstractmethod
    def update_by_id(self, collection: str, record_id: str, patch: Record) -> Optional[Record]:
        """Merge ``patch`` into the matching record and persist."""

    @abstractmethod
    def delete_by_id(self, collection: str, record_id: str) -> bool:
        """Remove the matching record and persist."""


class _DocumentRecordStore(RecordStore):
    """Shared collection logic; subclasses provide ``_load``/``_save``."""

    def __init__(self, collections: Iterable[str] = DEFAULT_COLLECTIONS) -> None:
        self._collections = tuple(collections)
        self._lock = threading.RLock()

    def _empty_document(self) -> Document:
        return {name: [] for name in self._collections}

    @abstractmethod
    def _load(self) -> Document:
        ...

    @abstractmethod
    def _save(self, document: Document) -> None:
        ...

    def list_all(self, collection: str) -> List[Record]:
        with self._lock:
            document = self._load()
            return [dict(record) for record in document.get(collection, [])]

    def find_by_id(self, collection: str, record_id: str) -> Optional[Record]:
        with self._lock:
            document = self._load()
            for record in document.get(collection, []):
                if record.get("id") == record_id:
                    return dict(record)
            return None

    def insert(self, collection: str, record: Record) -> Record:
        if "id" not in record:
            raise ValueError("Records must carry an 'id' before they are inserted")
        stored = dict(record)
        with self._lock:
            document = self._load()
            document.setdefault(collection, []).append(stored)
            self._save(document)
        logger.debug("Inserted %s/%s", collection, stored["id"])
        return dict(stored)

    def update_by_id(self, collection: str, record_id: str, patch: Record) -> Optional[Record]:
        changes = {key: value for key, value in patch.items() if key != "id"}
        with self._lock:
            document = self._load()
            for record in document.get(collection, []):
                if record.get("id") == record_id:
                    record.update(changes)
                    self._save(document)
                    logger.debug("Updated %s/%s", collection, record_id)
                    return dict(record)
            return None

    def delete_by_id(self, collection: str, record_id: str) -> bool:
        with self._lock:
            document = self._load()
            records = document.get(collection, [])
            for index, record in enumerate(records):
                if record.get("id") == record_id:
                    del records[index]
                    self._save(document)
                    logger.debug("Deleted %s/%s", collection, record_id)
                    return True
            return False


class InMemoryRecordStore(_DocumentRecordStore):
    """Record store kept entirely in process memory."""

    def __init__(
        self,
        initial: Optional[Document] = None,
        collections: Iterable[str] = DEFAULT_COLLECTIONS,
    ) -> None:
        super().__init__(collections)
        self._document = self._empty_document()
        if initial:
            self._document.update(copy.deepcopy(initial))

    def _load(self) -> Document:
        return copy.deepcopy(self._document)

    def _save(self, document: Document) -> None:
        self._document = copy.deepcopy(document)


class JsonFileRecordStore(_DocumentRecordStore):
    """Record store persisted as one JSON document on disk.

    The file is created with empty collections if it does not exist.
    Construction raises ``StorageError`` when the path cannot be
    created or does not contain a JSON object; the application treats
    that as fatal at startup.
    """

    def __init__(
        self,
        path: Union[str, Path],
        collections: Iterable[str] = DEFAULT_COLLECTIONS,
    ) -> None:
        super().__init__(collections)
        self.path = Path(path)
        with self._lock:
            if self.path.exists():
                document = self._load()
                missing = [name for name in self._collections if name not in document]
                if missing:
                    for name in missing:
                        document[name] = []
                    self._save(document)
            else:
                try:
                    self.path.parent.mkdir(parents=True, exist_ok=True)
                except OSError as exc:
                    raise StorageError(f"Cannot create directory for {self.path}: {exc}") from exc
                self._save(self._empty_document())
                logger.info("Created empty data file %s", self.path)

    def _load(self) -> Document:
        try:
            with open(self.path, "r", encoding="utf-8") as fh:
                document = json.load(fh)
        except (OSError, json.JSONDecodeError) as exc:
            logger.error("Failed to read data file %s: %s", self.path, exc)
            raise StorageError(f"Cannot read data file {self.path}: {exc}") from exc
        if not isinstance(document, dict):
            raise StorageError(f"Data file {self.path} does not contain a JSON object")
        return document

    def _save(self, document: Document) -> None:
        # Serialise before touching the disk; non-finite floats are not JSON.
        try:
            text = json.dumps(document, ensure_ascii=False, indent=2, allow_nan=False)
        except (TypeError, ValueError) as exc:
            logger.error("Refusing to write unserialisable document to %s: %s", self.path, exc)
            raise StorageError(f"Cannot serialise data file {self.path}: {exc}") from exc
        try:
            fd, tmp_name = tempfile.mkstemp(
                prefix=f".{self.path.name}.", suffix=".tmp", dir=str(self.path.parent)
            )
        except OSError as exc:
            logger.error("Failed to open temporary file next to %s: %s", self.path, exc)
            raise StorageError(f"Cannot write data file {self.path}: {exc}") from exc
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as fh:
                fh.write(text)
                fh.flush()
                os.fsync(fh.fileno())
            os.replace(tmp_name, self.path)
        except OSError as exc:
            logger.error("Failed to write data file %s: %s", self.path, exc)
            try:
                os.unlink(tmp_name)
            except OSError:
                pass
            raise StorageError(f"Cannot write data file {self.path}: {exc}") from exc
