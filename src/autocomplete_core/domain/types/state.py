"""Autocomplete state domain types.

The state record is immutable: every change goes through one of the store
setters, which swaps in a copy with a single field replaced.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import TYPE_CHECKING, Any, Callable, Generic, Mapping, TypeVar

if TYPE_CHECKING:
    from autocomplete_core.domain.protocols.source import AutocompleteSource

__all__ = [
    "AutocompleteSetters",
    "AutocompleteState",
    "AutocompleteStatus",
    "NextState",
    "SourceParams",
    "StatusContext",
    "Suggestion",
    "TItem",
    "get_items_count",
]

TItem = TypeVar("TItem")


class AutocompleteStatus(Enum):
    """Lifecycle of the current fetch cycle.

    Within one cycle the status only moves forward:
    ``IDLE -> LOADING -> (STALLED -> LOADING) -> IDLE | ERROR``.
    """

    IDLE = "idle"
    LOADING = "loading"
    STALLED = "stalled"
    ERROR = "error"


@dataclass(frozen=True)
class StatusContext:
    """Diagnostic payload, only populated while the status is ``ERROR``."""

    error: BaseException | None = None
    """The error that failed the last fetch cycle."""


@dataclass(frozen=True)
class Suggestion(Generic[TItem]):
    """Items returned by one source for the current query."""

    source: "AutocompleteSource[TItem]"
    """The source that produced the items."""
    items: list[TItem] = field(default_factory=list)
    """Items in the order the source returned them."""

    def without_items(self) -> "Suggestion[TItem]":
        """Return the same group with no items, keeping the source."""
        return replace(self, items=[])


@dataclass(frozen=True)
class AutocompleteState(Generic[TItem]):
    """Single source of truth rendered by the presentation layer."""

    highlighted_index: int = 0
    """Currently highlighted row, reset to 0 on every new query."""
    query: str = ""
    """Last committed input text."""
    suggestions: list[Suggestion[TItem]] = field(default_factory=list)
    """One group per source, in source order."""
    is_open: bool = False
    """Dropdown visibility, only ever decided by the pipeline."""
    status: AutocompleteStatus = AutocompleteStatus.IDLE
    """Lifecycle of the current fetch."""
    status_context: StatusContext = field(default_factory=StatusContext)
    """Diagnostic payload for the ``ERROR`` status."""
    context: Mapping[str, Any] = field(default_factory=dict)
    """Free-form side channel populated by sources (merged, never replaced)."""


@dataclass(frozen=True, slots=True)
class AutocompleteSetters(Generic[TItem]):
    """One independent mutator per state field."""

    set_highlighted_index: Callable[[int], None]
    set_query: Callable[[str], None]
    set_suggestions: Callable[[list[Suggestion[TItem]]], None]
    set_is_open: Callable[[bool], None]
    set_status: Callable[[AutocompleteStatus], None]
    set_context: Callable[[Mapping[str, Any]], None]


@dataclass(frozen=True, slots=True)
class SourceParams(Generic[TItem]):
    """Context handed to ``get_sources`` and to every source fetcher."""

    query: str
    state: AutocompleteState[TItem]
    setters: AutocompleteSetters[TItem]


@dataclass(frozen=True, slots=True)
class NextState:
    """Overrides applied at the end of a query cycle."""

    is_open: bool | None = None
    """Force the dropdown visibility instead of asking ``should_dropdown_open``."""


def get_items_count(state: AutocompleteState[Any]) -> int:
    """Total number of items across all suggestion groups."""
    return sum(len(suggestion.items) for suggestion in state.suggestions)
