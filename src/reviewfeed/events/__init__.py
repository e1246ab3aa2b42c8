"""Event bus and feed event types."""

from .bus import Event, EventBus, Subscription
from .feed_events import PageFailedEvent, PageLoadedEvent, RowExpandedEvent

__all__ = [
    "Event",
    "EventBus",
    "PageFailedEvent",
    "PageLoadedEvent",
    "RowExpandedEvent",
    "Subscription",
]
