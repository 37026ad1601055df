"""In-memory autocomplete store.

Holds the single ``AutocompleteState`` of a widget and broadcasts every
change. State is lost when the instance is garbage collected.
"""

from dataclasses import replace
from typing import Any, Callable, Generic, Mapping

from autocomplete_core.domain.events import EventBus, StateChanged
from autocomplete_core.domain.types import (
    AutocompleteSetters,
    AutocompleteState,
    AutocompleteStatus,
    StatusContext,
    Suggestion,
    TItem,
)
from autocomplete_core.logger import get_logger

logger = get_logger(__name__)


class InMemoryAutocompleteStore(Generic[TItem]):
    """Single-record store implementing ``AutocompleteStore``.

    Every setter swaps in a copy of the state with one field replaced, then
    notifies ``on_state_change`` and publishes ``StateChanged`` on the event
    bus (when one is given). There is no batching: observers see each
    intermediate state.

    Thread-safe for asyncio (single-threaded event loop).

    Example:
        >>> store = InMemoryAutocompleteStore(AutocompleteState())
        >>> store.set_query("ap")
        >>> store.get_state().query
        'ap'
    """

    def __init__(
        self,
        initial_state: AutocompleteState[TItem] | None = None,
        on_state_change: Callable[..., None] | None = None,
        event_bus: EventBus | None = None,
    ) -> None:
        """
        Initialize the store.

        Args:
            initial_state: Starting state (defaults to an empty idle state)
            on_state_change: Called as ``on_state_change(state=...)`` after each change
            event_bus: Optional bus receiving a ``StateChanged`` event per change
        """
        self._state: AutocompleteState[TItem] = initial_state or AutocompleteState()
        self._on_state_change = on_state_change
        self._event_bus = event_bus
        self._setters = AutocompleteSetters(
            set_highlighted_index=self.set_highlighted_index,
            set_query=self.set_query,
            set_suggestions=self.set_suggestions,
            set_is_open=self.set_is_open,
            set_status=self.set_status,
            set_context=self.set_context,
        )

    def get_state(self) -> AutocompleteState[TItem]:
        """Return the current state snapshot."""
        return self._state

    @property
    def setters(self) -> AutocompleteSetters[TItem]:
        """The six field setters bundled for the pipeline and sources."""
        return self._setters

    def set_highlighted_index(self, value: int) -> None:
        self._update("highlighted_index", value)

    def set_query(self, value: str) -> None:
        self._update("query", value)

    def set_suggestions(self, value: list[Suggestion[TItem]]) -> None:
        self._update("suggestions", list(value))

    def set_is_open(self, value: bool) -> None:
        self._update("is_open", bool(value))

    def set_status(self, value: AutocompleteStatus) -> None:
        self._update("status", AutocompleteStatus(value))

    def set_context(self, value: Mapping[str, Any]) -> None:
        """Merge ``value`` into the current context (keys in ``value`` win)."""
        self._update("context", {**self._state.context, **value})

    def set_status_context(self, value: StatusContext) -> None:
        self._update("status_context", value)

    def _update(self, field_name: str, value: Any) -> None:
        previous_state = self._state
        self._state = replace(previous_state, **{field_name: value})
        logger.trace(f"State field '{field_name}' updated")

        if self._on_state_change is not None:
            self._on_state_change(state=self._state)

        if self._event_bus is not None:
            self._event_bus.publish(
                StateChanged(
                    state=self._state,
                    previous_state=previous_state,
                    changed_field=field_name,
                )
            )
