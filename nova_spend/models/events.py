"""
Notification Models

Views that are currently mounted subscribe to these events and re-read
the affected records from the store when one arrives.

DESIGN DECISION: Events carry only small hints (which theme, which keys).
The store stays the single source of truth; subscribers never apply event
payloads as state.
"""

from datetime import datetime, timezone
from enum import Enum
from typing import Any, Callable, Optional

from pydantic import BaseModel, Field


class EventType(str, Enum):
    """Named broadcast signals."""
    # Preferences
    THEME_CHANGED = "theme_changed"
    SETTINGS_SAVED = "settings_saved"

    # Ledger
    EXPENSE_RECORDED = "expense_recorded"

    # Whole-store lifecycle
    DATA_IMPORTED = "data_imported"
    DATA_CLEARED = "data_cleared"

    # Records changed by another process sharing the store file
    STORAGE_CHANGED = "storage_changed"

    # Budget notifications
    BUDGET_WARNING = "budget_warning"
    BUDGET_EXCEEDED = "budget_exceeded"


class Event(BaseModel):
    """A single broadcast notification."""

    event_type: EventType = Field(
        ...,
        description="Type of event"
    )
    data: dict[str, Any] = Field(
        default_factory=dict,
        description="Event-specific hints"
    )
    timestamp: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        description="When the event was published (UTC)"
    )
    source: Optional[str] = Field(
        default=None,
        description="Component that published the event"
    )

    def to_log_dict(self) -> dict[str, Any]:
        """Flat dict for structured logging."""
        return {
            "event_type": self.event_type.value,
            "data": self.data,
            "timestamp": self.timestamp.isoformat(),
            "source": self.source,
        }

    def __str__(self) -> str:
        return f"Event({self.event_type.value}, data={self.data})"


# Type alias for event handlers
EventHandler = Callable[[Event], None]
