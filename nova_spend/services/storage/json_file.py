"""
JSON File Storage Implementation

DESIGN DECISION: All records live in ONE JSON object file, keyed by record
key. This is the local equivalent of a browser's origin storage. It also
gives us multi-key atomicity for free: every commit rewrites the whole file
to a temp file and renames it over the original, so a crash leaves either
the old file or the new one, never a mix.

TRADEOFFS:
- Every write rewrites the whole file (fine for a personal ledger)
- Reads always go to disk, so there is no in-process cache to invalidate
  after an import, a reset, or a change by another process
"""

import json
from pathlib import Path
from typing import Any, Iterable, Mapping, Optional

from nova_spend.observability import get_logger
from nova_spend.services.storage.interface import (
    KeyValueStore,
    StorageError,
    encode_document,
)

logger = get_logger(__name__)


class JsonFileStore(KeyValueStore):
    """
    Durable key-value store backed by a single JSON file.

    Also tracks what this instance last saw for each key, so changes
    written by another process can be detected and broadcast.
    """

    def __init__(self, path: Path):
        self.path = Path(path)
        # key -> JSON text as of this instance's last write or poll
        self._seen: dict[str, str] = {
            key: self._encode(value) for key, value in self._read_all().items()
        }
        logger.info("json_store_initialized", path=str(self.path), records=len(self._seen))

    @staticmethod
    def _encode(document: Any) -> str:
        return json.dumps(document, sort_keys=True, ensure_ascii=False)

    def _read_all(self) -> dict[str, Any]:
        """Load the whole store. A missing or unreadable file reads as empty."""
        if not self.path.exists():
            return {}
        try:
            with open(self.path, encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            logger.warning("store_file_unreadable", path=str(self.path), error=str(e))
            return {}
        if not isinstance(data, dict):
            logger.warning(
                "store_file_unreadable",
                path=str(self.path),
                error=f"top-level {type(data).__name__}, expected object",
            )
            return {}
        return data

    def _write_all(self, data: dict[str, Any]) -> None:
        """Atomic write: write to temp file then rename."""
        temp_file = self.path.with_suffix(self.path.suffix + ".tmp")
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with open(temp_file, "w", encoding="utf-8") as f:
                json.dump(data, f, indent=2, ensure_ascii=False)
            temp_file.replace(self.path)
        except OSError as e:
            logger.error("store_write_failed", path=str(self.path), error=str(e))
            raise StorageError(f"Failed to write store file {self.path}: {e}")

    def get(self, key: str) -> Optional[Any]:
        # Reads never move the change-detection baseline
        return self._read_all().get(key)

    def set_many(self, documents: Mapping[str, Any]) -> None:
        # Encode everything before touching the file
        encoded = {key: encode_document(key, doc) for key, doc in documents.items()}

        data = self._read_all()
        for key, text in encoded.items():
            data[key] = json.loads(text)
        self._write_all(data)

        for key in encoded:
            self._seen[key] = self._encode(data[key])
        logger.debug("records_written", keys=sorted(encoded))

    def remove_many(self, keys: Iterable[str]) -> None:
        keys = list(keys)
        data = self._read_all()
        removed = [key for key in keys if key in data]
        for key in removed:
            del data[key]
        self._write_all(data)

        for key in keys:
            self._seen.pop(key, None)
        logger.debug("records_removed", keys=sorted(removed))

    def keys(self) -> list[str]:
        return list(self._read_all().keys())

    def check_for_external_changes(self) -> list[str]:
        """
        Find keys changed by someone else since this instance last saw them.

        Covers keys added, modified and removed behind our back. The
        current file contents become the new baseline.

        Returns:
            Sorted list of changed keys (empty if nothing changed)
        """
        current = {key: self._encode(value) for key, value in self._read_all().items()}
        changed = sorted(
            key
            for key in set(current) | set(self._seen)
            if current.get(key) != self._seen.get(key)
        )
        self._seen = current
        if changed:
            logger.info("external_changes_detected", keys=changed)
        return changed
