"""Source protocol.

A source is a capability object: ``get_suggestions`` is the only required
operation. ``get_input_value``, ``get_suggestion_url`` and ``on_select`` are
optional and must be checked with :func:`has_capability` before use.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Awaitable, Protocol, Sequence, runtime_checkable

from autocomplete_core.domain.types.state import TItem

if TYPE_CHECKING:
    from autocomplete_core.domain.types.state import SourceParams

__all__ = ["AutocompleteSource", "has_capability"]


@runtime_checkable
class AutocompleteSource(Protocol[TItem]):
    """Protocol for suggestion sources.

    Example:
        >>> class Fruits:
        ...     def get_suggestions(self, params):
        ...         return [f for f in ["apple", "apricot"] if f.startswith(params.query)]
        >>> isinstance(Fruits(), AutocompleteSource)
        True

    Optional capabilities (not part of the structural check):

    - ``get_input_value(suggestion, item, state) -> str``: value to put in
      the input when the item is selected.
    - ``get_suggestion_url(suggestion, item, state) -> str | None``: URL
      used by the navigator.
    - ``on_select(suggestion, item, state, setters) -> None``: called when
      the item is selected.
    """

    def get_suggestions(
        self, params: "SourceParams[TItem]"
    ) -> Sequence[TItem] | Awaitable[Sequence[TItem]]:
        """Return the items matching ``params.query``.

        Args:
            params: Query, state snapshot and setters of the current cycle

        Returns:
            The items, or an awaitable resolving to them
        """
        ...


def has_capability(source: Any, name: str) -> bool:
    """Return ``True`` when ``source`` provides the callable ``name``."""
    return callable(getattr(source, name, None))

