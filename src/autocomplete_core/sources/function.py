"""
Function-backed source.
"""

from __future__ import annotations

import inspect
from collections.abc import Awaitable, Callable, Sequence
from typing import Any, Generic

from autocomplete_core.domain.types import AutocompleteState, SourceParams, Suggestion, TItem


class CallableSource(Generic[TItem]):
    """Adapts ``fetch(query)`` (plain or async) into a source.

    Example:
        >>> async def search(query):
        ...     return await api.search(query)
        >>> source = CallableSource(search, input_value=lambda hit: hit["title"])
    """

    def __init__(
        self,
        fetch: Callable[[str], Sequence[TItem] | Awaitable[Sequence[TItem]]],
        *,
        input_value: Callable[[TItem], str] | None = None,
    ) -> None:
        self._fetch = fetch
        self._input_value = input_value
        if input_value is not None:
            self.get_input_value = self._apply_input_value

    async def get_suggestions(self, params: SourceParams[TItem]) -> list[TItem]:
        result = self._fetch(params.query)
        if inspect.isawaitable(result):
            result = await result
        return list(result)

    def _apply_input_value(self, suggestion: Suggestion[TItem], item: TItem, state: AutocompleteState[Any]) -> str:
        """``get_input_value``, bound only when ``input_value`` is given."""
        return self._input_value(item)
