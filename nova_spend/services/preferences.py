"""
Settings Service

Owns user preferences: budget, balance, theme, notifications, currency.

DESIGN DECISION: Theme and everything else are persisted differently.
- Theme is written IMMEDIATELY and broadcast, so every mounted view can
  restyle without waiting for a full save.
- Budget, balance, notifications and currency are batched behind an explicit
  save(), which also mirrors budget/balance into Stats and currency into
  its legacy key.
"""

from typing import Union

from nova_spend.models.events import EventType
from nova_spend.models.expense import Stats
from nova_spend.models.settings import Currency, Settings, Theme, number_text
from nova_spend.observability import get_logger
from nova_spend.services.notifications import EventBus
from nova_spend.services.stats import StatsService
from nova_spend.services.storage import KeyValueStore, RecordKeys

logger = get_logger(__name__)


class SettingsService:
    """Reads, saves and live-updates user preferences."""

    def __init__(
        self,
        store: KeyValueStore,
        keys: RecordKeys,
        stats: StatsService,
        bus: EventBus,
    ):
        self._store = store
        self._keys = keys
        self._stats = stats
        self._bus = bus

    def read(self) -> Settings:
        """
        Current preferences, as the settings view shows them.

        Starts from the settings record (per-field defaults), then:
        1. A valid legacy currency record wins over settings.currency
        2. If a stats record exists, its balance and budget win, so the
           form always shows the live figures
        """
        settings = Settings.from_document(self._store.get(self._keys.settings))
        updates = {}

        legacy_currency = self._store.get(self._keys.currency)
        if isinstance(legacy_currency, str) and legacy_currency:
            try:
                updates["currency"] = Currency(legacy_currency)
            except ValueError:
                logger.warning("legacy_currency_ignored", value=legacy_currency)

        stats_document = self._store.get(self._keys.stats)
        if stats_document is not None:
            stats = Stats.from_document(stats_document)
            updates["balance"] = number_text(stats.balance)
            updates["monthly_budget"] = number_text(stats.monthly_budget)

        return settings.model_copy(update=updates)

    def save(self, settings: Settings) -> Settings:
        """
        Persist preferences.

        Writes the settings record, the legacy currency record and a stats
        record whose balance/budget are overwritten from settings (total
        expenses is kept), all in one commit.
        """
        stats = self._stats.read().model_copy(update={
            "balance": settings.balance_amount,
            "monthly_budget": settings.budget_amount,
        })
        self._store.set_many({
            self._keys.settings: settings.to_document(),
            self._keys.currency: settings.currency.value,
            self._keys.stats: stats.to_document(),
        })

        logger.info(
            "settings_saved",
            currency=settings.currency.value,
            theme=settings.theme.value,
            notifications=settings.notifications,
        )
        self._bus.publish(
            EventType.SETTINGS_SAVED,
            {"currency": settings.currency.value, "theme": settings.theme.value},
            source="settings",
        )
        return settings

    def set_theme(self, theme: Union[Theme, str]) -> Settings:
        """
        Switch theme and persist it immediately, independent of save().

        Raises:
            ValueError: If theme is not "light" or "dark"
        """
        theme = Theme(theme)
        settings = self.read().model_copy(update={"theme": theme})
        self._store.set(self._keys.settings, settings.to_document())

        logger.info("theme_changed", theme=theme.value)
        self._bus.publish(EventType.THEME_CHANGED, {"theme": theme.value}, source="settings")
        return settings
