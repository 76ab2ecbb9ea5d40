"""
In-process implementation of EventDispatcher.

Handlers run inline, in registration order, when an event is dispatched.
A failing handler is logged and does not stop the remaining handlers.
"""

import logging
from collections import defaultdict
from typing import Dict, List, Type

from panel_service.app.services.event_dispatcher import EventDispatcher, EventHandler
from panel_service.domain.events import DomainEvent

logger = logging.getLogger(__name__)


class InMemoryEventDispatcher(EventDispatcher):
    """In-process event dispatcher"""

    def __init__(self):
        self._handlers: Dict[Type[DomainEvent], List[EventHandler]] = defaultdict(list)

    def listen(self, event_type: Type[DomainEvent], handler: EventHandler) -> None:
        """Register a handler for an event type"""
        self._handlers[event_type].append(handler)
        logger.debug(f"Registered {_handler_name(handler)} for {event_type.__name__}")

    async def dispatch(self, event: DomainEvent) -> None:
        """Deliver an event to every handler registered for its type"""
        handlers = list(self._handlers.get(type(event), []))
        logger.debug(f"Dispatching {event.event_name} to {len(handlers)} handler(s)")

        for handler in handlers:
            try:
                await handler(event)
            except Exception as e:
                logger.error(
                    f"Handler {_handler_name(handler)} failed for event "
                    f"{event.event_name}: {e}"
                )


def _handler_name(handler: EventHandler) -> str:
    return getattr(handler, "__name__", handler.__class__.__name__)
