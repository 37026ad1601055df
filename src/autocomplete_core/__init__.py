"""Behavioral core of an autocomplete widget.

Turns a stream of input changes into a consistent ``AutocompleteState``:
fans out to pluggable sources, tracks loading/stalled/error status and
decides dropdown visibility.
"""

from autocomplete_core.application import (
    Autocomplete,
    AutocompleteOptions,
    SuggestionPipeline,
    create_autocomplete,
)
from autocomplete_core.domain.types import (
    AutocompleteState,
    AutocompleteStatus,
    NextState,
    SourceParams,
    Suggestion,
)

__version__ = "0.1.0"

__all__ = [
    "Autocomplete",
    "AutocompleteOptions",
    "AutocompleteState",
    "AutocompleteStatus",
    "NextState",
    "SourceParams",
    "Suggestion",
    "SuggestionPipeline",
    "create_autocomplete",
]
