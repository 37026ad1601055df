"""Shared domain types."""

from autocomplete_core.domain.types.state import (
    AutocompleteSetters,
    AutocompleteState,
    AutocompleteStatus,
    NextState,
    SourceParams,
    StatusContext,
    Suggestion,
    TItem,
    get_items_count,
)

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
