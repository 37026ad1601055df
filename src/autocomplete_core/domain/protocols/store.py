"""Store protocol for the autocomplete state holder."""

from typing import Any, Mapping, Protocol

from autocomplete_core.domain.types.state import (
    AutocompleteSetters,
    AutocompleteState,
    AutocompleteStatus,
    StatusContext,
    Suggestion,
    TItem,
)

__all__ = ["AutocompleteStore"]


class AutocompleteStore(Protocol[TItem]):
    """Protocol for the store that holds and broadcasts ``AutocompleteState``.

    There is no transactional batching: every setter call is an independent
    mutation, visible to ``get_state()`` as soon as it returns.
    """

    def get_state(self) -> AutocompleteState[TItem]:
        """Return the current state snapshot."""
        ...

    def set_highlighted_index(self, value: int) -> None: ...

    def set_query(self, value: str) -> None: ...

    def set_suggestions(self, value: list[Suggestion[TItem]]) -> None: ...

    def set_is_open(self, value: bool) -> None: ...

    def set_status(self, value: AutocompleteStatus) -> None: ...

    def set_context(self, value: Mapping[str, Any]) -> None:
        """Merge ``value`` into the current context."""
        ...

    def set_status_context(self, value: StatusContext) -> None:
        """Replace the diagnostic payload (owned by the error handler)."""
        ...

    @property
    def setters(self) -> AutocompleteSetters[TItem]:
        """The six field setters bundled for the pipeline and sources."""
        ...
