"""Local JSON file implementation of the key-value store."""

import contextlib
import json
import logging
import os
import tempfile
from dataclasses import dataclass
from pathlib import Path

from streak_tracker.services.storage import KeyValueStore, StorageError

_logger = logging.getLogger(__name__)


@dataclass
class JsonFileStore(KeyValueStore):
    """Stores every key in one JSON document on local disk.

    Writes go to a temporary file that replaces the document, so a crash
    mid-write leaves the previous document intact.
    """

    path: Path

    @classmethod
    def create(cls, path: str | Path) -> "JsonFileStore":
        """Create a store for a path, expanding ``~``."""
        return cls(path=Path(path).expanduser())

    def get(self, key: str) -> object | None:
        """Return the value stored under a key."""
        return self._read().get(key)

    def set(self, key: str, value: object) -> None:
        """Store a value under a key and flush the document to disk."""
        document = self._read()
        document[key] = value
        self._write(document)

    def _read(self) -> dict[str, object]:
        try:
            raw = self.path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return {}
        except OSError as exc:
            raise StorageError(f"Failed to read {self.path}") from exc
        try:
            document = json.loads(raw)
        except json.JSONDecodeError:
            _logger.warning("Ignoring unreadable storage document %s", self.path)
            return {}
        if not isinstance(document, dict):
            _logger.warning("Ignoring non-object storage document %s", self.path)
            return {}
        return document

    def _write(self, document: dict[str, object]) -> None:
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(
                dir=self.path.parent, prefix=f".{self.path.name}.", suffix=".tmp"
            )
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as handle:
                    json.dump(document, handle)
                    handle.flush()
                    os.fsync(handle.fileno())
                os.replace(tmp_name, self.path)
            except BaseException:
                with contextlib.suppress(FileNotFoundError):
                    os.unlink(tmp_name)
                raise
        except (OSError, TypeError, ValueError) as exc:
            raise StorageError(f"Failed to write {self.path}") from exc

