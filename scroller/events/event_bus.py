"""Synchronous event bus for domain event dispatch.

The EventBus provides a lightweight, synchronous pub/sub mechanism for
decoupling the simulation from hosts, logging and statistics.

Design goals:
- Zero overhead when no subscribers (single dict lookup)
- Synchronous, so handlers run inside the tick that produced the event
- Type-safe dispatch via event type
"""

from __future__ import annotations

from collections import defaultdict
from typing import TypeVar
from collections.abc import Callable

T = TypeVar("T")


class EventBus:
    """Synchronous event bus for domain events.

    Example:
        bus = EventBus()
        bus.subscribe(RoundEnded, handle_round_end)
        bus.emit(RoundEnded(score=12, high_score=12, new_record=True, frame=640))
    """

    def __init__(self) -> None:
        self._handlers: dict[type, list[Callable]] = defaultdict(list)

    def emit(self, event: object) -> None:
        """Emit an event to all registered handlers, in registration order."""
        handlers = self._handlers.get(type(event))
        if handlers:
            for handler in list(handlers):
                handler(event)

    def subscribe(self, event_type: type[T], handler: Callable[[T], None]) -> None:
        """Register a handler for a specific event type."""
        self._handlers[event_type].append(handler)

    def unsubscribe(self, event_type: type[T], handler: Callable[[T], None]) -> bool:
        """Remove a handler for a specific event type.

        Returns:
            True if handler was found and removed, False otherwise
        """
        handlers = self._handlers.get(event_type)
        if handlers and handler in handlers:
            handlers.remove(handler)
            return True
        return False

    def clear_subscribers(self) -> None:
        """Remove all registered handlers."""
        self._handlers.clear()

    def has_subscribers(self, event_type: type) -> bool:
        return bool(self._handlers.get(event_type))

    def subscriber_count(self, event_type: type) -> int:
        return len(self._handlers.get(event_type, []))
