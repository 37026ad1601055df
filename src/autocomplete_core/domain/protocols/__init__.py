"""Domain protocols - interfaces for all implementations.

This module defines protocols (structural types) that describe the contracts
the pipeline's collaborators must satisfy: the sources it queries, the store
it mutates and the host environment that provides timers and navigation.
"""

from autocomplete_core.domain.protocols.environment import Environment, Location
from autocomplete_core.domain.protocols.source import AutocompleteSource, has_capability
from autocomplete_core.domain.protocols.store import AutocompleteStore

__all__ = [
    "AutocompleteSource",
    "AutocompleteStore",
    "Environment",
    "Location",
    "has_capability",
]
