"""
Static list source.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from typing import Any, Generic

from autocomplete_core.domain.types import AutocompleteState, SourceParams, Suggestion, TItem
from autocomplete_core.logger import get_logger

logger = get_logger("sources.static")


class StaticSource(Generic[TItem]):
    """Matches the query against a fixed collection of items.

    Prefix matches come first, then the remaining substring matches, each
    group in the collection's order. An empty query matches everything.
    """

    def __init__(
        self,
        items: Sequence[TItem] | Callable[[], Sequence[TItem]],
        *,
        key: Callable[[TItem], str] | None = None,
        case_sensitive: bool = False,
        limit: int | None = None,
        url_template: str | None = None,
    ) -> None:
        """
        Args:
            items: The items, or a provider called on every fetch
            key: Text of an item used for matching (defaults to ``str``)
            case_sensitive: Whether matching respects case
            limit: Maximum number of items returned
            url_template: ``str.format`` template with a ``{value}`` field,
                enables ``get_suggestion_url``
        """
        self._items = items
        self._key = key or str
        self._case_sensitive = case_sensitive
        self._limit = limit
        self._url_template = url_template
        if url_template is not None:
            self.get_suggestion_url = self._format_url

    def get_suggestions(self, params: SourceParams[TItem]) -> list[TItem]:
        return self.match(params.query)

    def match(self, query: str) -> list[TItem]:
        """Return the items matching ``query``, best matches first."""
        items = list(self._items() if callable(self._items) else self._items)
        normalized_query = self._normalize(query)

        prefix_matches: list[TItem] = []
        substring_matches: list[TItem] = []
        for item in items:
            text = self._normalize(self._key(item))
            if text.startswith(normalized_query):
                prefix_matches.append(item)
            elif normalized_query in text:
                substring_matches.append(item)

        matches = prefix_matches + substring_matches
        if self._limit is not None:
            matches = matches[: self._limit]

        logger.debug(f"StaticSource matched {len(matches)}/{len(items)} item(s) for {query!r}")
        return matches

    def get_input_value(self, suggestion: Suggestion[TItem], item: TItem, state: AutocompleteState[Any]) -> str:
        return self._key(item)

    def _format_url(self, suggestion: Suggestion[TItem], item: TItem, state: AutocompleteState[Any]) -> str:
        """``get_suggestion_url``, bound only when a ``url_template`` is given."""
        return self._url_template.format(value=self._key(item))

    def _normalize(self, text: str) -> str:
        return text if self._case_sensitive else text.lower()
