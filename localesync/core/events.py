"""
Event system for localesync.

The surrounding content repository reports node lifecycle changes
(adoption of a new locale variant, publishing to a workspace) as events.
Services subscribe to the event types they care about. Dispatch is
synchronous: every handler runs to completion before `publish` returns.
"""

from __future__ import annotations

import fnmatch
import logging
import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Callable

logger = logging.getLogger(__name__)

# Type for event handlers
EventHandler = Callable[["Event"], list["Event"]]

NODE_ADOPTED = "node.adopted"
NODE_PUBLISHED = "node.published"


@dataclass
class Event:
    """
    An event in the system.

    Payloads carry live collaborator objects (nodes, contexts), so events
    are only meaningful inside the process that raised them.
    """

    event_type: str  # e.g., "node.adopted", "node.published"
    payload: dict[str, Any] = field(default_factory=dict)

    # Tracing
    id: str = field(default_factory=lambda: str(uuid.uuid4()))
    correlation_id: str | None = None  # Groups related events
    causation_id: str | None = None  # Event that caused this one

    # Timing
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))


@dataclass
class Subscription:
    """A subscription to events matching a pattern."""

    pattern: str  # e.g., "node.*" or "node.published"
    handler: EventHandler

    def matches(self, event: Event) -> bool:
        """Check if this subscription matches the given event."""
        return fnmatch.fnmatch(event.event_type, self.pattern)


class EventBus:
    """
    In-memory, synchronous event bus.

    Handler failures are logged and re-raised: a failed synchronization
    must be visible to whoever triggered the lifecycle change.
    """

    def __init__(self):
        self._subscriptions: list[Subscription] = []
        self._event_history: list[Event] = []
        self._max_history = 10000
        self._middlewares: list[Callable[[Event], Event | None]] = []

    def subscribe(self, pattern: str, handler: EventHandler) -> Subscription:
        """
        Subscribe to events matching a pattern.

        Args:
            pattern: Event type pattern (supports wildcards like "node.*")
            handler: Function to handle matching events

        Returns:
            The subscription object (can be used to unsubscribe)
        """
        subscription = Subscription(pattern=pattern, handler=handler)
        self._subscriptions.append(subscription)
        return subscription

    def unsubscribe(self, subscription: Subscription) -> None:
        """Remove a subscription."""
        if subscription in self._subscriptions:
            self._subscriptions.remove(subscription)

    def add_middleware(self, middleware: Callable[[Event], Event | None]) -> None:
        """
        Add middleware that processes events before they're dispatched.

        Middleware can modify events or return None to drop them.
        """
        self._middlewares.append(middleware)

    def publish(self, event: Event) -> list[Event]:
        """
        Publish an event and return any events produced by handlers.

        Handlers can return new events, which are then also published.
        """
        current_event: Event | None = event
        for middleware in self._middlewares:
            current_event = middleware(current_event)
            if current_event is None:
                logger.debug(f"Dropped {event.event_type} event {event.id}")
                return []

        self._event_history.append(current_event)
        if len(self._event_history) > self._max_history:
            self._event_history = self._event_history[-self._max_history:]

        matching = [s for s in self._subscriptions if s.matches(current_event)]

        all_resulting_events: list[Event] = []
        for subscription in matching:
            try:
                resulting_events = subscription.handler(current_event)
            except Exception:
                logger.exception(f"Error in event handler for {current_event.event_type}")
                raise
            all_resulting_events.extend(resulting_events or [])

        for resulting_event in list(all_resulting_events):
            all_resulting_events.extend(self.publish(resulting_event))

        return all_resulting_events

    def get_history(self, event_type: str | None = None, limit: int = 100) -> list[Event]:
        """Query event history with an optional event type pattern."""
        results = self._event_history

        if event_type:
            results = [e for e in results if fnmatch.fnmatch(e.event_type, event_type)]

        return results[-limit:]


# Convenience functions for the lifecycle events
def node_adopted(node: Any, context: Any, recursive: bool = False) -> Event:
    """Create a node.adopted event."""
    return Event(
        event_type=NODE_ADOPTED,
        payload={
            "node": node,
            "context": context,
            "recursive": recursive,
        },
    )


def node_published(node: Any, workspace_name: str) -> Event:
    """Create a node.published event."""
    return Event(
        event_type=NODE_PUBLISHED,
        payload={
            "node": node,
            "workspace_name": workspace_name,
        },
    )
