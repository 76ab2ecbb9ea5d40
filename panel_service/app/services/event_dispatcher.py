from abc import ABC, abstractmethod
from typing import Awaitable, Callable, Type

from panel_service.domain.events import DomainEvent

EventHandler = Callable[[DomainEvent], Awaitable[None]]


class EventDispatcher(ABC):
    """Delivers committed domain events to registered listeners"""

    @abstractmethod
    def listen(self, event_type: Type[DomainEvent], handler: EventHandler) -> None:
        """Register a handler for an event type"""
        pass

    @abstractmethod
    async def dispatch(self, event: DomainEvent) -> None:
        """Deliver an event to every handler registered for its type"""
        pass
