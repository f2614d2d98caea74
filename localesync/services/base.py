"""
Base class for all services.

Services handle lifecycle events raised by the content repository and
may produce new events in return.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from localesync.core.events import Event, EventBus


class Service(ABC):
    """
    Base class for all services.

    Services:
    1. Subscribe to specific event types
    2. Process those events synchronously
    3. Return follow-up events (usually none)

    Example:
        class AuditService(Service):
            service_id = "audit"
            subscribes_to = ["node.published"]

            def handle(self, event: Event) -> list[Event]:
                log.append(event.payload["node"].identifier)
                return []
    """

    @property
    @abstractmethod
    def service_id(self) -> str:
        """Unique identifier for this service."""
        pass

    @property
    @abstractmethod
    def subscribes_to(self) -> list[str]:
        """
        List of event patterns this service handles.

        Supports wildcards like "node.*" or "node.published".
        """
        pass

    @abstractmethod
    def handle(self, event: Event) -> list[Event]:
        """
        Handle an event and return any resulting events.

        Args:
            event: The event to process

        Returns:
            List of events produced by handling this event
            (can be empty if no follow-up events needed)
        """
        pass

    def register(self, event_bus: EventBus) -> None:
        """Subscribe `handle` to every pattern in `subscribes_to`."""
        for pattern in self.subscribes_to:
            event_bus.subscribe(pattern, self.handle)

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__}(id={self.service_id})>"
