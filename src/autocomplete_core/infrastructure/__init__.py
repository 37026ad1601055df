"""Infrastructure implementations of the domain protocols."""

from autocomplete_core.infrastructure.environment import AsyncioEnvironment
from autocomplete_core.infrastructure.store import InMemoryAutocompleteStore

__all__ = ["AsyncioEnvironment", "InMemoryAutocompleteStore"]
