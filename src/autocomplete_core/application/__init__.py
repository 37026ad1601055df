"""Application layer: suggestion pipeline and the pieces it is wired from."""

from autocomplete_core.application.autocomplete import Autocomplete, create_autocomplete
from autocomplete_core.application.defaults import (
    AutocompleteOptions,
    InitialStateOptions,
    Navigator,
    NavigatorOptions,
    ResolvedOptions,
    get_default_options,
)
from autocomplete_core.application.pipeline import SuggestionPipeline
from autocomplete_core.application.sources import fetch_source_items, normalize_get_sources
from autocomplete_core.application.stall_timer import StallTimer

__all__ = [
    "Autocomplete",
    "AutocompleteOptions",
    "InitialStateOptions",
    "Navigator",
    "NavigatorOptions",
    "ResolvedOptions",
    "StallTimer",
    "SuggestionPipeline",
    "create_autocomplete",
    "fetch_source_items",
    "get_default_options",
    "normalize_get_sources",
]
