"""
Application Facade for Nova Spend

This module ties together all the components and defines what the
presentation layer can DO:
1. Add an expense
2. Save settings / switch theme / edit balance or budget
3. Export, import and clear data

DESIGN DECISION: Every user action returns an ActionResult carrying the
acknowledgment to show. Input problems and backup problems are reported
here, once, to the user; they never reach the services as exceptions.

Views that stay mounted subscribe to `tracker.bus` and re-read from the
services when notified.
"""

from decimal import Decimal, InvalidOperation
from pathlib import Path
from typing import Any, Callable, Optional

from pydantic import ValidationError

from nova_spend.config import TrackerConfig, get_config
from nova_spend.models.events import EventType
from nova_spend.models.expense import ExpenseInput
from nova_spend.models.reports import ActionResult
from nova_spend.models.settings import Settings
from nova_spend.observability import configure_logging, get_logger
from nova_spend.services import (
    AnalyticsService,
    BackupError,
    BackupService,
    EventBus,
    JsonFileStore,
    KeyValueStore,
    LedgerService,
    RecordKeys,
    SettingsService,
    StatsService,
    StorageError,
    current_millis,
)

logger = get_logger(__name__)

# User-facing acknowledgments
EXPENSE_ADDED = "Expense added successfully!"
SETTINGS_SAVED = "Settings saved successfully!"
DATA_EXPORTED = "Data exported successfully!"
DATA_IMPORTED = "Data imported successfully!"
IMPORT_FAILED = "Error importing data. Please check the file format."
EXPORT_FAILED = "Error exporting data."
DATA_CLEARED = "All data has been cleared. The application will now run from scratch."
CLEAR_CANCELLED = "Clear data cancelled."
CLEAR_PROMPT = "Are you sure you want to clear all data? This action cannot be undone."
INVALID_NUMBER = "Please enter a valid number."


def _describe(error: ValidationError) -> str:
    """One line per failing field, e.g. 'amount: Input should be greater than 0'."""
    parts = []
    for issue in error.errors():
        field = ".".join(str(part) for part in issue["loc"]) or "input"
        parts.append(f"{field}: {issue['msg']}")
    return "; ".join(parts)


def _parse_amount(raw: Any) -> Optional[Decimal]:
    """Parse a typed-in number; None if it is not a finite number."""
    try:
        amount = Decimal(str(raw).strip())
    except InvalidOperation:
        return None
    return amount if amount.is_finite() else None


class ExpenseTracker:
    """
    The assembled data layer.

    Services are exposed as attributes for reading
    (`tracker.stats.read()`, `tracker.analytics.category_breakdown()`, ...);
    the methods below are the user actions.
    """

    def __init__(
        self,
        store: KeyValueStore,
        keys: RecordKeys,
        bus: EventBus,
        stats: StatsService,
        ledger: LedgerService,
        preferences: SettingsService,
        backup: BackupService,
        analytics: AnalyticsService,
    ):
        self.store = store
        self.keys = keys
        self.bus = bus
        self.stats = stats
        self.ledger = ledger
        self.preferences = preferences
        self.backup = backup
        self.analytics = analytics

    # === Expenses ===

    def add_expense(self, **fields: Any) -> ActionResult:
        """
        Validate and record an expense.

        Accepts amount, category, date, description and notes.
        """
        try:
            expense = ExpenseInput.model_validate(fields)
        except ValidationError as e:
            return ActionResult(success=False, message=_describe(e))

        transaction = self.ledger.record_expense(expense)
        self._notify_budget()
        return ActionResult(success=True, message=EXPENSE_ADDED, data=transaction)

    def _notify_budget(self) -> None:
        """Broadcast a budget warning if the user asked for notifications."""
        if not self.preferences.read().notifications:
            return

        status = self.analytics.budget_status()
        if status.exceeded:
            event_type = EventType.BUDGET_EXCEEDED
        elif status.warning:
            event_type = EventType.BUDGET_WARNING
        else:
            return

        logger.info(event_type.value, percent_used=status.percent_used)
        self.bus.publish(event_type, status.model_dump(mode="json"), source="budget")

    # === Preferences ===

    def save_settings(self, **changes: Any) -> ActionResult:
        """
        Apply changes on top of the current settings and save.

        Accepts monthly_budget, balance, theme, notifications, currency.
        Any other keyword is rejected and nothing is saved.
        """
        unknown = sorted(set(changes) - set(Settings.model_fields))
        if unknown:
            return ActionResult(success=False, message=f"Unknown settings: {', '.join(unknown)}")

        current = self.preferences.read()
        try:
            settings = Settings.model_validate({**current.model_dump(), **changes})
        except ValidationError as e:
            return ActionResult(success=False, message=_describe(e))

        self.preferences.save(settings)
        return ActionResult(success=True, message=SETTINGS_SAVED, data=settings)

    def set_theme(self, theme: str) -> ActionResult:
        try:
            settings = self.preferences.set_theme(theme)
        except ValueError:
            return ActionResult(success=False, message=f"Unknown theme: {theme}")
        return ActionResult(success=True, message=f"Theme set to {settings.theme.value}.", data=settings)

    def update_balance(self, raw: Any) -> ActionResult:
        """Dashboard balance edit. Non-numeric input leaves the store untouched."""
        amount = _parse_amount(raw)
        if amount is None:
            return ActionResult(success=False, message=INVALID_NUMBER)
        stats = self.stats.adjust_balance(amount)
        return ActionResult(success=True, message="Balance updated.", data=stats)

    def update_budget(self, raw: Any) -> ActionResult:
        """Dashboard budget edit. Non-numeric input leaves the store untouched."""
        amount = _parse_amount(raw)
        if amount is None:
            return ActionResult(success=False, message=INVALID_NUMBER)
        stats = self.stats.adjust_budget(amount)
        return ActionResult(success=True, message="Monthly budget updated.", data=stats)

    # === Data management ===

    def export_data(self, directory: Path) -> ActionResult:
        try:
            path = self.backup.export_to_file(directory)
        except BackupError as e:
            logger.warning("backup_export_failed", error=str(e))
            return ActionResult(success=False, message=EXPORT_FAILED)
        return ActionResult(success=True, message=DATA_EXPORTED, data=path)

    def import_data(self, path: Path) -> ActionResult:
        """Import a backup file; any failure gets the same generic message."""
        try:
            self.backup.import_file(path)
        except (BackupError, StorageError) as e:
            logger.warning("backup_import_failed", path=str(path), error=str(e))
            return ActionResult(success=False, message=IMPORT_FAILED)
        return ActionResult(success=True, message=DATA_IMPORTED)

    def clear_data(self, confirm: Callable[[str], bool]) -> ActionResult:
        """
        Remove all records after explicit confirmation.

        Args:
            confirm: Called with the warning prompt; must return True to proceed
        """
        if not confirm(CLEAR_PROMPT):
            return ActionResult(success=False, message=CLEAR_CANCELLED)
        self.backup.clear()
        return ActionResult(success=True, message=DATA_CLEARED)

    def poll_storage(self) -> list[str]:
        """
        Broadcast records changed by another process sharing the store file.

        Returns:
            The changed keys (always empty for non-file stores)
        """
        if not isinstance(self.store, JsonFileStore):
            return []
        changed = self.store.check_for_external_changes()
        if changed:
            self.bus.publish(EventType.STORAGE_CHANGED, {"keys": changed}, source="storage")
        return changed


def create_app_components(
    config: Optional[TrackerConfig] = None,
    store: Optional[KeyValueStore] = None,
    clock: Callable[[], int] = current_millis,
) -> ExpenseTracker:
    """
    Factory function to create all application components.

    Args:
        config: Configuration; loaded from the environment if omitted
        store: Storage backend; a JsonFileStore at the configured path if omitted
        clock: Millisecond clock used for transaction ids

    Returns:
        The assembled ExpenseTracker
    """
    config = config or get_config()
    runtime = config.runtime
    storage = config.storage

    configure_logging(runtime.effective_log_level, runtime.json_logs)

    if store is None:
        store = JsonFileStore(storage.store_path)
    keys = RecordKeys.with_prefix(storage.key_prefix)
    bus = EventBus()

    stats = StatsService(store, keys)
    ledger = LedgerService(store, keys, stats, bus, clock=clock)
    preferences = SettingsService(store, keys, stats, bus)
    backup = BackupService(
        store,
        keys,
        preferences,
        bus,
        backup_filename=runtime.backup_filename,
    )
    analytics = AnalyticsService(
        ledger,
        stats,
        warn_at_percent=runtime.budget_warn_at_percent,
    )

    logger.info("app_components_created", store=type(store).__name__, key_prefix=storage.key_prefix)
    return ExpenseTracker(
        store=store,
        keys=keys,
        bus=bus,
        stats=stats,
        ledger=ledger,
        preferences=preferences,
        backup=backup,
        analytics=analytics,
    )
