"""
Autocomplete instance: store + pipeline + error channel.

This is the object a presentation layer holds. It feeds input changes to the
suggestion pipeline, owns the store the pipeline mutates, and turns failed
cycles into ``status_context.error`` and ``on_error`` notifications.
"""

from __future__ import annotations

import asyncio
from functools import partial
from typing import Any, Generic, Literal, Mapping

from autocomplete_core.application.defaults import AutocompleteOptions, ResolvedOptions, get_default_options
from autocomplete_core.application.pipeline import SuggestionPipeline
from autocomplete_core.domain.events import EventBus, QueryFailed
from autocomplete_core.domain.protocols import AutocompleteStore, has_capability
from autocomplete_core.domain.types import (
    AutocompleteSetters,
    AutocompleteState,
    NextState,
    StatusContext,
    Suggestion,
    TItem,
)
from autocomplete_core.infrastructure.store import InMemoryAutocompleteStore
from autocomplete_core.logger import get_logger

logger = get_logger("autocomplete")

NavigationTarget = Literal["self", "tab", "window"]


class Autocomplete(Generic[TItem]):
    """
    Behavioral core of one autocomplete widget.

    Example:
        ```python
        autocomplete = create_autocomplete(get_sources=lambda params: [StaticSource(["apple", "apricot"])])
        task = autocomplete.on_input("ap")
        await task
        autocomplete.state.suggestions[0].items  # ["apple", "apricot"]
        ```
    """

    def __init__(
        self,
        options: AutocompleteOptions | ResolvedOptions | Mapping[str, Any],
        store: AutocompleteStore[TItem] | None = None,
        event_bus: EventBus | None = None,
    ):
        """
        Initialize the Autocomplete instance.

        Args:
            options: Raw options (validated and defaulted) or already resolved options
            store: Store holding the state; an in-memory store seeded with the
                initial state is created when omitted
            event_bus: Bus receiving ``StateChanged`` (from the default store)
                and ``QueryFailed`` events
        """
        if not isinstance(options, ResolvedOptions):
            options = get_default_options(options)
        self.options = options
        self.event_bus = event_bus or EventBus()
        self._store: AutocompleteStore[TItem] = store or InMemoryAutocompleteStore(
            options.initial_state,
            on_state_change=options.on_state_change,
            event_bus=self.event_bus,
        )
        self._pipeline: SuggestionPipeline[TItem] = SuggestionPipeline(options, self._store)
        logger.debug(f"Autocomplete {options.id} created")

    @property
    def id(self) -> str:
        return self.options.id

    @property
    def state(self) -> AutocompleteState[TItem]:
        """Current state snapshot."""
        return self._store.get_state()

    @property
    def setters(self) -> AutocompleteSetters[TItem]:
        return self._store.setters

    @property
    def pipeline(self) -> SuggestionPipeline[TItem]:
        return self._pipeline

    def on_input(self, query: str, next_state: NextState | None = None) -> asyncio.Task[None] | None:
        """
        Handle an input change.

        Args:
            query: The new input text
            next_state: Optional overrides (``NextState(is_open=False)`` closes the dropdown)

        Returns:
            The cycle task (await it to observe the cycle's error), or ``None``
            for queries shorter than ``min_length``
        """
        # status_context only describes the cycle that set status to error
        if self.state.status_context.error is not None:
            self._store.set_status_context(StatusContext())

        task = self._pipeline.run_query(query, next_state)
        if task is not None:
            task.add_done_callback(partial(self._on_cycle_done, self._pipeline.generation, query))
        return task

    def select_item(self, suggestion: Suggestion[TItem], item: TItem) -> asyncio.Task[None] | None:
        """
        Select ``item`` from ``suggestion`` and close the dropdown.

        The source's optional ``get_input_value`` decides the new query (the
        current query is kept without it) and its optional ``on_select`` is
        notified before the query is re-run with the dropdown forced closed.
        """
        source = suggestion.source
        state = self.state

        query = state.query
        if has_capability(source, "get_input_value"):
            query = source.get_input_value(suggestion=suggestion, item=item, state=state)

        if has_capability(source, "on_select"):
            source.on_select(suggestion=suggestion, item=item, state=state, setters=self.setters)

        return self.on_input(query, NextState(is_open=False))

    def open_item_url(
        self,
        suggestion: Suggestion[TItem],
        item: TItem,
        target: NavigationTarget = "self",
    ) -> bool:
        """
        Navigate to the URL the source gives for ``item``.

        Returns:
            True if a URL was found and handed to the navigator, False otherwise
        """
        source = suggestion.source
        if not has_capability(source, "get_suggestion_url"):
            return False

        state = self.state
        suggestion_url = source.get_suggestion_url(suggestion=suggestion, item=item, state=state)
        if not suggestion_url:
            return False

        navigator = self.options.navigator
        navigate = {
            "self": navigator.navigate,
            "tab": navigator.navigate_new_tab,
            "window": navigator.navigate_new_window,
        }[target]
        navigate(suggestion_url=suggestion_url, suggestion=suggestion, item=item, state=state)
        return True

    def _on_cycle_done(self, generation: int, query: str, task: asyncio.Task[None]) -> None:
        if task.cancelled():
            return

        error = task.exception()
        if not self._pipeline.is_current(generation):
            if error is not None:
                logger.debug(f"Superseded query {query!r} failed: {error}")
            return

        if error is None:
            return

        logger.warning(f"Query {query!r} failed: {error}")
        self._store.set_status_context(StatusContext(error=error))
        self.event_bus.publish(QueryFailed(query=query, error=error))
        self.options.on_error(state=self.state, setters=self.setters, error=error)


def create_autocomplete(
    store: AutocompleteStore[Any] | None = None,
    event_bus: EventBus | None = None,
    **options: Any,
) -> Autocomplete[Any]:
    """
    Create an Autocomplete instance from keyword options.

    Raises:
        pydantic.ValidationError: If the options are invalid
    """
    return Autocomplete(AutocompleteOptions(**options), store=store, event_bus=event_bus)
