import pytest

from autocomplete_core.domain.protocols import has_capability
from autocomplete_core.domain.types import AutocompleteState, SourceParams, Suggestion
from autocomplete_core.infrastructure.store import InMemoryAutocompleteStore
from autocomplete_core.sources import CallableSource


def make_params(query: str) -> SourceParams:
    store = InMemoryAutocompleteStore(AutocompleteState())
    return SourceParams(query=query, state=store.get_state(), setters=store.setters)


@pytest.mark.asyncio
async def test_sync_fetch():
    source = CallableSource(lambda query: (query.upper(), query))

    assert await source.get_suggestions(make_params("ap")) == ["AP", "ap"]


@pytest.mark.asyncio
async def test_async_fetch():
    async def fetch(query):
        return [f"{query}!"]

    source = CallableSource(fetch)

    assert await source.get_suggestions(make_params("ap")) == ["ap!"]


@pytest.mark.asyncio
async def test_fetch_errors_propagate():
    async def fetch(query):
        raise LookupError("not found")

    with pytest.raises(LookupError, match="not found"):
        await CallableSource(fetch).get_suggestions(make_params("ap"))


def test_input_value_capability():
    plain = CallableSource(lambda query: [])
    titled = CallableSource(lambda query: [], input_value=lambda hit: hit["title"])
    hit = {"title": "Apple"}

    assert not hasattr(plain, "get_input_value")
    assert not has_capability(plain, "get_input_value")
    assert has_capability(titled, "get_input_value")
    suggestion = Suggestion(source=titled, items=[hit])
    assert titled.get_input_value(suggestion=suggestion, item=hit, state=AutocompleteState()) == "Apple"
