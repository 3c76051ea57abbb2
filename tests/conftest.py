"""
Shared fixtures for Nova Spend tests.

Every service is built on an InMemoryStore and a fresh EventBus, and
transaction ids come from a fixed clock so stored documents are predictable.
"""

import pytest

from nova_spend.models.events import EventType
from nova_spend.services import (
    AnalyticsService,
    BackupService,
    EventBus,
    InMemoryStore,
    LedgerService,
    RecordKeys,
    SettingsService,
    StatsService,
)

FIXED_MILLIS = 1704067200000


@pytest.fixture
def store():
    return InMemoryStore()


@pytest.fixture
def keys():
    return RecordKeys()


@pytest.fixture
def bus():
    return EventBus()


@pytest.fixture
def received(bus):
    """Every event published on the bus, in order."""
    events = []
    bus.subscribe(list(EventType), events.append)
    return events


@pytest.fixture
def stats_service(store, keys):
    return StatsService(store, keys)


@pytest.fixture
def ledger(store, keys, stats_service, bus):
    return LedgerService(store, keys, stats_service, bus, clock=lambda: FIXED_MILLIS)


@pytest.fixture
def preferences(store, keys, stats_service, bus):
    return SettingsService(store, keys, stats_service, bus)


@pytest.fixture
def backup(store, keys, preferences, bus):
    return BackupService(store, keys, preferences, bus)


@pytest.fixture
def analytics(ledger, stats_service):
    return AnalyticsService(ledger, stats_service, warn_at_percent=80)
