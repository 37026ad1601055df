"""Event system for observing autocomplete state changes.

Example:
    ```python
    from autocomplete_core.domain.events import EventBus, StateChanged

    event_bus = EventBus()

    def handle_change(event: StateChanged):
        print(f"{event.changed_field} -> {event.state.status.value}")

    event_bus.subscribe(StateChanged, handle_change)
    ```
"""

from .bus import EventBus
from .types import Event, QueryFailed, StateChanged

__all__ = [
    "EventBus",
    "Event",
    "QueryFailed",
    "StateChanged",
]
