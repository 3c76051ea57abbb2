"""Services package."""

from nova_spend.services.analytics import AnalyticsService
from nova_spend.services.backup import BackupError, BackupFormatError, BackupService
from nova_spend.services.ledger import LedgerService, current_millis
from nova_spend.services.notifications import EventBus
from nova_spend.services.preferences import SettingsService
from nova_spend.services.stats import StatsService
from nova_spend.services.storage import (
    InMemoryStore,
    JsonFileStore,
    KeyValueStore,
    RecordKeys,
    StorageError,
)

__all__ = [
    # Domain services
    "AnalyticsService",
    "BackupService",
    "LedgerService",
    "SettingsService",
    "StatsService",
    "current_millis",
    # Notifications
    "EventBus",
    # Backup errors
    "BackupError",
    "BackupFormatError",
    # Storage services
    "InMemoryStore",
    "JsonFileStore",
    "KeyValueStore",
    "RecordKeys",
    "StorageError",
]
