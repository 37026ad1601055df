"""Event bus for observing the autocomplete store.

The store publishes a ``StateChanged`` event after every setter call and the
``Autocomplete`` instance publishes ``QueryFailed`` for failed cycles.
Presentation layers subscribe instead of polling the store.

Event Handler Contract:
    Handlers MUST be synchronous. They run inside the setter call, between
    two suspension points of the pipeline, so they may not await anything.
    A handler that needs async work schedules it with asyncio.create_task().
"""

import inspect
from typing import Callable, Type, TypeVar

from autocomplete_core.logger import get_logger

from .types import Event

logger = get_logger("events.bus")

T = TypeVar("T", bound=Event)

# Type alias for event handlers - must be synchronous
EventHandler = Callable[[Event], None]


class EventBus:
    """Publish/subscribe hub keyed by event type.

    Example:
        ```python
        bus = EventBus()
        bus.subscribe(StateChanged, lambda event: print(event.state.status))
        store = InMemoryAutocompleteStore(AutocompleteState(), event_bus=bus)
        store.set_status(AutocompleteStatus.LOADING)  # prints AutocompleteStatus.LOADING
        ```

    Thread safety:
        Not thread-safe. All publishing happens on the event loop thread that
        drives the pipeline.
    """

    def __init__(self):
        self._handlers: dict[Type[Event], list[EventHandler]] = {}
        """Registry of event handlers by event type."""

    def subscribe(self, event_type: Type[T], handler: Callable[[T], None]) -> None:
        """
        Subscribe to events of a specific type.

        Args:
            event_type: The type of event to subscribe to (e.g., StateChanged)
            handler: Synchronous callback receiving the event instance

        Raises:
            TypeError: If handler is an async function (coroutine function)
        """
        if inspect.iscoroutinefunction(handler):
            raise TypeError(
                f"Event handlers must be synchronous functions. "
                f"Handler {handler.__name__} is a coroutine function; "
                f"schedule async work with asyncio.create_task() instead."
            )

        handlers = self._handlers.setdefault(event_type, [])
        if handler in handlers:
            logger.debug(f"Handler already subscribed for {event_type.__name__}, skipping")
            return
        handlers.append(handler)  # type: ignore[arg-type]
        logger.debug(f"Subscribed handler for {event_type.__name__}")

    def unsubscribe(self, event_type: Type[T], handler: Callable[[T], None]) -> None:
        """
        Unsubscribe a handler. Unknown handlers are ignored.

        Args:
            event_type: The type of event to unsubscribe from
            handler: The handler callback to remove
        """
        handlers = self._handlers.get(event_type, [])
        if handler in handlers:
            handlers.remove(handler)  # type: ignore[arg-type]
            logger.debug(f"Unsubscribed handler for {event_type.__name__}")

    def publish(self, event: Event) -> None:
        """
        Publish an event to all handlers subscribed to its exact type.

        Handlers are called in subscription order. A handler that raises is
        logged and does not prevent the remaining handlers from running.

        Args:
            event: The event instance to publish
        """
        event_type = type(event)
        handlers = self._handlers.get(event_type)
        if not handlers:
            return

        for handler in list(handlers):
            try:
                handler(event)
            except Exception as e:
                logger.exception(f"Error in event handler for {event_type.__name__}: {e}")

    def clear(self) -> None:
        """Clear all event subscriptions."""
        self._handlers.clear()
        logger.debug("Event bus cleared")

    def has_subscribers(self, event_type: Type[Event]) -> bool:
        """Check if there are any subscribers for a specific event type."""
        return bool(self._handlers.get(event_type))
