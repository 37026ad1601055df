"""
Source resolution helpers.

``get_sources`` and ``get_suggestions`` may both be plain or async
functions. These adapters give the pipeline one shape to await.
"""

from __future__ import annotations

import inspect
from collections.abc import Iterable
from typing import Any, Awaitable, Callable

from autocomplete_core.domain.protocols import AutocompleteSource, has_capability
from autocomplete_core.domain.types import SourceParams, Suggestion

GetSources = Callable[[SourceParams[Any]], Any]
ResolvedGetSources = Callable[[SourceParams[Any]], Awaitable[list[AutocompleteSource[Any]]]]


def _is_source(value: Any) -> bool:
    return has_capability(value, "get_suggestions")


def _as_source_list(result: Any) -> list[AutocompleteSource[Any]]:
    if result is None:
        return []
    if _is_source(result):
        return [result]
    if isinstance(result, Iterable) and not isinstance(result, (str, bytes, dict)):
        sources = list(result)
        invalid = [source for source in sources if not _is_source(source)]
        if invalid:
            raise TypeError(
                f"get_sources returned {len(invalid)} object(s) without a get_suggestions method: "
                f"{invalid[0]!r}"
            )
        return sources
    raise TypeError(f"get_sources must return a source or a list of sources, got {type(result).__name__}")


def normalize_get_sources(get_sources: GetSources) -> ResolvedGetSources:
    """Wrap ``get_sources`` so it always resolves to an ordered list of sources.

    The wrapped function may return a single source, an iterable of sources,
    or an awaitable of either. Order is preserved, nothing is cached and
    nothing is retried.

    Raises:
        TypeError: When the result (once awaited) holds something that is not a source
    """

    async def resolved(params: SourceParams[Any]) -> list[AutocompleteSource[Any]]:
        result = get_sources(params)
        if inspect.isawaitable(result):
            result = await result
        return _as_source_list(result)

    resolved.__wrapped__ = get_sources  # type: ignore[attr-defined]
    return resolved


async def fetch_source_items(source: AutocompleteSource[Any], params: SourceParams[Any]) -> Suggestion[Any]:
    """Run one source fetcher and pair its items with the source."""
    items = source.get_suggestions(params)
    if inspect.isawaitable(items):
        items = await items
    return Suggestion(source=source, items=list(items or []))
