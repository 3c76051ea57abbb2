"""
Backup Service

Export, import and reset of the whole store.

DESIGN DECISION: Import is a wholesale overwrite.
- The document is DECODED first; malformed JSON is rejected before any
  record is touched
- The decoded fields are NOT schema-checked; they are written back
  verbatim, and readers apply their defaults later
- All four records are written in one commit, so the store never holds a
  mix of old and new state
"""

import json
from pathlib import Path
from typing import Any

from nova_spend.models.backup import BackupDocument
from nova_spend.models.events import EventType
from nova_spend.observability import get_logger
from nova_spend.services.notifications import EventBus
from nova_spend.services.preferences import SettingsService
from nova_spend.services.storage import KeyValueStore, RecordKeys

logger = get_logger(__name__)


class BackupError(Exception):
    """Base exception for backup operations."""
    pass


class BackupFormatError(BackupError):
    """The backup could not be decoded into a backup document."""
    pass


class BackupService:
    """Serializes all state to one document and restores it."""

    def __init__(
        self,
        store: KeyValueStore,
        keys: RecordKeys,
        preferences: SettingsService,
        bus: EventBus,
        backup_filename: str = "nova-spend-backup.json",
    ):
        self._store = store
        self._keys = keys
        self._preferences = preferences
        self._bus = bus
        self.backup_filename = backup_filename

    def _get_or(self, key: str, default: Any) -> Any:
        document = self._store.get(key)
        return default if document is None else document

    # === Export ===

    def export(self) -> BackupDocument:
        """Snapshot of the four records; missing ones become {}, {}, [] and ""."""
        return BackupDocument(
            settings=self._get_or(self._keys.settings, {}),
            stats=self._get_or(self._keys.stats, {}),
            transactions=self._get_or(self._keys.transactions, []),
            currency=self._get_or(self._keys.currency, ""),
        )

    def export_json(self) -> str:
        return self.export().to_json()

    def export_to_file(self, directory: Path) -> Path:
        """
        Write the backup file into a directory.

        Raises:
            BackupError: If the file cannot be written
        """
        path = Path(directory) / self.backup_filename
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(self.export_json(), encoding="utf-8")
        except OSError as e:
            raise BackupError(f"Could not write backup to {path}: {e}")
        logger.info("backup_exported", path=str(path))
        return path

    # === Import ===

    def import_document(self, document: BackupDocument) -> None:
        """Overwrite all four records with the document's contents."""
        self._store.set_many({
            self._keys.settings: document.settings,
            self._keys.stats: document.stats,
            self._keys.transactions: document.transactions,
            self._keys.currency: document.currency,
        })

        transactions = document.transactions
        logger.info(
            "backup_imported",
            transactions=len(transactions) if isinstance(transactions, list) else None,
        )
        self._bus.publish(EventType.DATA_IMPORTED, source="backup")
        self._bus.publish(
            EventType.THEME_CHANGED,
            {"theme": self._preferences.read().theme.value},
            source="backup",
        )

    def import_json(self, text: str) -> None:
        """
        Decode and import a backup.

        Raises:
            BackupFormatError: If text is not a JSON object (nothing is written)
        """
        try:
            payload = json.loads(text)
        except json.JSONDecodeError as e:
            logger.warning("backup_decode_failed", error=str(e))
            raise BackupFormatError(f"Backup is not valid JSON: {e}") from e
        if not isinstance(payload, dict):
            logger.warning("backup_decode_failed", error="top-level value is not an object")
            raise BackupFormatError(
                f"Backup must be a JSON object, got {type(payload).__name__}"
            )
        self.import_document(BackupDocument.model_validate(payload))

    def import_file(self, path: Path) -> None:
        """
        Read, decode and import a backup file.

        Raises:
            BackupError: If the file cannot be read
            BackupFormatError: If the file is not a JSON object
        """
        try:
            text = Path(path).read_text(encoding="utf-8")
        except UnicodeDecodeError as e:
            raise BackupFormatError(f"Backup {path} is not UTF-8 text: {e}") from e
        except OSError as e:
            raise BackupError(f"Could not read backup {path}: {e}") from e
        self.import_json(text)

    # === Reset ===

    def clear(self) -> None:
        """Remove all four records. Readers fall back to their defaults."""
        self._store.remove_many(self._keys.all_keys())

        logger.info("data_cleared")
        self._bus.publish(EventType.DATA_CLEARED, source="backup")
        self._bus.publish(
            EventType.THEME_CHANGED,
            {"theme": self._preferences.read().theme.value},
            source="backup",
        )
