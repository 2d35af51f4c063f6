"""JSON file storage: load/save the whole document per request."""

import json
import logging
import os
import tempfile
import threading
from collections.abc import Iterator
from contextlib import contextmanager
from functools import lru_cache
from pathlib import Path

from pydantic import ValidationError

from planhub.core.config import get_settings
from planhub.core.errors import StoreError
from planhub.models import Document

logger = logging.getLogger(__name__)

# One lock per resolved file path, shared by every JsonStore pointing at it.
_locks: dict[str, threading.Lock] = {}
_locks_guard = threading.Lock()


def _lock_for(path: Path) -> threading.Lock:
    key = str(path.resolve())
    with _locks_guard:
        lock = _locks.get(key)
        if lock is None:
            lock = _locks[key] = threading.Lock()
        return lock


class JsonStore:
    """
    Single-document store backed by a JSON file.

    No caching: every load() reads the file. transaction() serializes
    read-modify-write cycles within this process only; separate processes
    writing the same file can still overwrite each other (last write wins).
    """

    def __init__(self, path: str | Path) -> None:
        self.path = Path(path)
        self._lock = _lock_for(self.path)

    def load(self) -> Document:
        """Return the current document, or an empty one if the file does not exist."""
        try:
            raw = self.path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return Document()
        except OSError as e:
            raise StoreError(f"Cannot read data file: {e}", path=str(self.path)) from e

        if not raw.strip():
            return Document()
        try:
            data = json.loads(raw)
        except json.JSONDecodeError as e:
            raise StoreError(f"Malformed JSON in data file: {e}", path=str(self.path)) from e
        if not isinstance(data, dict):
            raise StoreError("Data file must contain a JSON object.", path=str(self.path))
        # Missing sections are treated as empty, as the original server did.
        data.setdefault("users", {})
        data.setdefault("approvals", [])
        if data["users"] is None:
            data["users"] = {}
        if data["approvals"] is None:
            data["approvals"] = []
        try:
            return Document.model_validate(data)
        except ValidationError as e:
            raise StoreError(
                f"Data file has an invalid structure: {e.error_count()} error(s)",
                path=str(self.path),
            ) from e

    def save(self, document: Document) -> None:
        """Write the document to a temp file beside the target, then replace it."""
        payload = json.dumps(document.to_json_dict(), indent=2, ensure_ascii=False)
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(
                dir=self.path.parent, prefix=f".{self.path.name}.", suffix=".tmp"
            )
        except OSError as e:
            raise StoreError(f"Cannot write data file: {e}", path=str(self.path)) from e
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(payload)
                f.write("\n")
                f.flush()
                os.fsync(f.fileno())
            os.replace(tmp_name, self.path)
        except OSError as e:
            try:
                os.unlink(tmp_name)
            except OSError:
                pass
            raise StoreError(f"Cannot write data file: {e}", path=str(self.path)) from e

    @contextmanager
    def transaction(self) -> Iterator[Document]:
        """
        Load the document under the per-file lock and save it when the block
        exits cleanly. An exception inside the block discards all changes.
        """
        with self._lock:
            document = self.load()
            yield document
            self.save(document)

    def check(self) -> bool:
        """True if the document can be loaded."""
        try:
            self.load()
            return True
        except StoreError:
            logger.warning("Store check failed for %s", self.path, exc_info=True)
            return False


@lru_cache
def _store_for(path: str) -> JsonStore:
    return JsonStore(path)


def get_store() -> JsonStore:
    """Dependency that returns the store for the configured DATA_FILE."""
    return _store_for(get_settings().DATA_FILE)
