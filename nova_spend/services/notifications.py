"""
Notification Bus

Synchronous publish/subscribe for keeping mounted views in step with the
store. A view subscribes while it is mounted and unsubscribes when it goes
away; a view that is not listening simply reads fresh state on its next
mount.

Usage:
    bus = EventBus()
    bus.subscribe(EventType.THEME_CHANGED, lambda e: print(e.data["theme"]))
    bus.publish(EventType.THEME_CHANGED, {"theme": "dark"})
"""

from typing import Any, Iterable, Optional, Union

from nova_spend.models.events import Event, EventHandler, EventType
from nova_spend.observability import get_logger

logger = get_logger(__name__)


class EventBus:
    """
    In-process broadcast bus.

    Handlers run inline, in subscription order, before publish() returns.
    A failing handler is logged and skipped; the remaining handlers still
    receive the event.
    """

    def __init__(self):
        self._subscribers: dict[EventType, list[EventHandler]] = {}

    def subscribe(
        self,
        event_types: Union[EventType, Iterable[EventType]],
        handler: EventHandler,
    ) -> None:
        """
        Subscribe a handler to one or more event types.

        Example:
            >>> bus.subscribe(
            ...     [EventType.DATA_IMPORTED, EventType.DATA_CLEARED],
            ...     dashboard.reload,
            ... )
        """
        if isinstance(event_types, EventType):
            event_types = [event_types]
        for event_type in event_types:
            self._subscribers.setdefault(event_type, []).append(handler)
            logger.debug("subscribed", event_type=event_type.value)

    def unsubscribe(self, event_type: EventType, handler: EventHandler) -> bool:
        """
        Unsubscribe from an event type.

        Returns:
            True if handler was found and removed, False otherwise.
        """
        handlers = self._subscribers.get(event_type, [])
        if handler in handlers:
            handlers.remove(handler)
            logger.debug("unsubscribed", event_type=event_type.value)
            return True
        return False

    def publish(
        self,
        event_type: EventType,
        data: Optional[dict[str, Any]] = None,
        source: Optional[str] = None,
    ) -> Event:
        """
        Publish an event to every current subscriber.

        Returns:
            The event that was dispatched.
        """
        event = Event(event_type=event_type, data=data or {}, source=source)
        logger.debug("event_published", **event.to_log_dict())

        for handler in list(self._subscribers.get(event_type, [])):
            try:
                handler(event)
            except Exception as e:
                logger.error(
                    "event_handler_failed",
                    event_type=event_type.value,
                    error=str(e),
                    exc_info=True,
                )
        return event

    def clear_subscribers(self, event_type: Optional[EventType] = None) -> None:
        """Clear subscribers for one event type, or for all of them."""
        if event_type:
            self._subscribers.pop(event_type, None)
        else:
            self._subscribers.clear()

    def get_subscriber_count(self, event_type: EventType) -> int:
        return len(self._subscribers.get(event_type, []))
