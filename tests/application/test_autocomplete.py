"""Tests for the Autocomplete instance: error channel, selection, navigation."""

import asyncio

import pytest
from pydantic import ValidationError

from autocomplete_core.application import Autocomplete, create_autocomplete
from autocomplete_core.domain.events import EventBus, QueryFailed
from autocomplete_core.domain.types import AutocompleteStatus, StatusContext, Suggestion
from autocomplete_core.sources import CallableSource, StaticSource

from conftest import FailingSource, GatedSource, ListSource


class TestCreateAutocomplete:
    def test_initial_state_and_id(self, environment):
        autocomplete = create_autocomplete(
            get_sources=lambda params: [],
            id="search",
            environment=environment,
            initial_state={"query": "ap", "is_open": True},
        )

        assert autocomplete.id == "search"
        assert autocomplete.state.query == "ap"
        assert autocomplete.state.is_open is True
        assert autocomplete.pipeline.generation == 0

    def test_invalid_options_raise(self):
        with pytest.raises(ValidationError):
            create_autocomplete(get_sources=lambda params: [], min_length=-1)

    def test_accepts_mapping(self, environment):
        autocomplete = Autocomplete({"get_sources": lambda params: [], "environment": environment})

        assert autocomplete.state.status == AutocompleteStatus.IDLE

    @pytest.mark.asyncio
    async def test_on_state_change_sees_every_update(self, environment):
        seen = []
        source = ListSource(["apple"])
        autocomplete = create_autocomplete(
            get_sources=lambda params: [source],
            environment=environment,
            on_state_change=lambda *, state: seen.append(state),
        )

        await autocomplete.on_input("ap")

        assert seen[-1] == autocomplete.state
        assert [state.status for state in seen].count(AutocompleteStatus.LOADING) >= 1


class TestOnInput:
    @pytest.mark.asyncio
    async def test_short_query_returns_none(self, environment):
        autocomplete = create_autocomplete(get_sources=lambda params: [], environment=environment, min_length=2)

        assert autocomplete.on_input("a") is None
        assert autocomplete.state.query == "a"

    @pytest.mark.asyncio
    async def test_suggestions_are_committed(self, environment):
        source = StaticSource(["apple", "apricot", "banana"])
        autocomplete = create_autocomplete(get_sources=lambda params: [source], environment=environment)

        await autocomplete.on_input("ap")

        assert autocomplete.state.suggestions == [Suggestion(source=source, items=["apple", "apricot"])]
        assert autocomplete.state.is_open is True
        assert autocomplete.state.status == AutocompleteStatus.IDLE


class TestErrorChannel:
    @pytest.mark.asyncio
    async def test_failure_populates_status_context(self, environment):
        error = RuntimeError("backend down")
        errors = []
        failures = []
        event_bus = EventBus()
        event_bus.subscribe(QueryFailed, failures.append)
        autocomplete = create_autocomplete(
            get_sources=lambda params: [FailingSource(error)],
            environment=environment,
            on_error=lambda *, state, setters, error: errors.append((state.status, error)),
            event_bus=event_bus,
        )

        task = autocomplete.on_input("ap")
        with pytest.raises(RuntimeError, match="backend down"):
            await task

        assert autocomplete.state.status == AutocompleteStatus.ERROR
        assert autocomplete.state.status_context == StatusContext(error=error)
        assert errors == [(AutocompleteStatus.ERROR, error)]
        assert [(event.query, event.error) for event in failures] == [("ap", error)]

    @pytest.mark.asyncio
    async def test_later_success_clears_error(self, environment):
        calls = []

        def get_sources(params):
            calls.append(params.query)
            if len(calls) == 1:
                return [FailingSource(ValueError("first call fails"))]
            return [ListSource(["apple"])]

        autocomplete = create_autocomplete(get_sources=get_sources, environment=environment)

        with pytest.raises(ValueError):
            await autocomplete.on_input("ap")
        await autocomplete.on_input("app")

        assert autocomplete.state.status == AutocompleteStatus.IDLE
        assert autocomplete.state.status_context.error is None

    @pytest.mark.asyncio
    async def test_short_query_after_failure_clears_error(self, environment):
        autocomplete = create_autocomplete(
            get_sources=lambda params: [FailingSource(RuntimeError("boom"))],
            environment=environment,
            min_length=2,
        )

        with pytest.raises(RuntimeError):
            await autocomplete.on_input("ab")
        assert autocomplete.on_input("a") is None

        assert autocomplete.state.status == AutocompleteStatus.IDLE
        assert autocomplete.state.status_context == StatusContext()

    @pytest.mark.asyncio
    async def test_pending_fetch_after_failure_has_no_error(self, environment):
        source = GatedSource()
        autocomplete = create_autocomplete(get_sources=lambda params: [source], environment=environment)

        failed = autocomplete.on_input("ap")
        source.fail("ap", RuntimeError("boom"))
        with pytest.raises(RuntimeError):
            await failed
        assert autocomplete.state.status_context.error is not None

        pending = autocomplete.on_input("app")

        assert autocomplete.state.status == AutocompleteStatus.LOADING
        assert autocomplete.state.status_context.error is None

        source.release("app")
        await pending

    @pytest.mark.asyncio
    async def test_superseded_failure_is_not_reported(self, environment):
        source = GatedSource()
        errors = []
        autocomplete = create_autocomplete(
            get_sources=lambda params: [source],
            environment=environment,
            on_error=lambda **kwargs: errors.append(kwargs["error"]),
        )

        old = autocomplete.on_input("ap")
        await asyncio.sleep(0)
        new = autocomplete.on_input("app")
        source.fail("ap", RuntimeError("stale"))
        with pytest.raises(RuntimeError, match="stale"):
            await old
        source.release("app")
        await new

        assert errors == []
        assert autocomplete.state.status_context.error is None
        assert autocomplete.state.suggestions[0].items == ["app"]


class TestSelectItem:
    @pytest.mark.asyncio
    async def test_uses_input_value_and_closes(self, environment):
        source = StaticSource(["apple", "apricot"])
        autocomplete = create_autocomplete(get_sources=lambda params: [source], environment=environment)
        await autocomplete.on_input("ap")
        suggestion = autocomplete.state.suggestions[0]

        await autocomplete.select_item(suggestion, "apricot")

        assert autocomplete.state.query == "apricot"
        assert autocomplete.state.is_open is False
        assert autocomplete.state.suggestions[0].items == ["apricot"]

    @pytest.mark.asyncio
    async def test_without_input_value_keeps_query(self, environment):
        source = CallableSource(lambda query: [f"{query}-1", f"{query}-2"])
        autocomplete = create_autocomplete(get_sources=lambda params: [source], environment=environment)
        await autocomplete.on_input("ap")

        await autocomplete.select_item(autocomplete.state.suggestions[0], "ap-2")

        assert autocomplete.state.query == "ap"
        assert autocomplete.state.is_open is False

    @pytest.mark.asyncio
    async def test_on_select_receives_setters(self, environment):
        class SelectingSource(ListSource):
            def on_select(self, *, suggestion, item, state, setters):
                setters.set_context({"selected": item})

        source = SelectingSource(["apple"])
        autocomplete = create_autocomplete(get_sources=lambda params: [source], environment=environment)
        await autocomplete.on_input("ap")

        await autocomplete.select_item(autocomplete.state.suggestions[0], "apple")

        assert autocomplete.state.context == {"selected": "apple"}

    def test_short_selection_returns_none(self, environment):
        source = StaticSource([""])
        autocomplete = create_autocomplete(get_sources=lambda params: [source], environment=environment)

        assert autocomplete.select_item(Suggestion(source=source, items=[""]), "") is None
        assert autocomplete.state.is_open is False


class TestOpenItemUrl:
    def test_navigates_with_source_url(self, environment):
        source = StaticSource(["apple"], url_template="https://example.com/{value}")
        autocomplete = create_autocomplete(get_sources=lambda params: [source], environment=environment)
        suggestion = Suggestion(source=source, items=["apple"])

        assert autocomplete.open_item_url(suggestion, "apple") is True
        assert autocomplete.open_item_url(suggestion, "apple", target="tab") is True
        assert autocomplete.open_item_url(suggestion, "apple", target="window") is True

        assert environment.location.assigned == ["https://example.com/apple"]
        assert environment.opened == [
            ("https://example.com/apple", "_blank", "noopener"),
            ("https://example.com/apple", "_blank", "noopener"),
        ]

    def test_source_without_url_capability(self, environment):
        source = StaticSource(["apple"])
        autocomplete = create_autocomplete(get_sources=lambda params: [source], environment=environment)

        assert autocomplete.open_item_url(Suggestion(source=source, items=["apple"]), "apple") is False
        assert environment.location.assigned == []

    def test_custom_navigator_receives_context(self, environment):
        calls = []
        source = StaticSource(["apple"], url_template="/fruit/{value}")
        autocomplete = create_autocomplete(
            get_sources=lambda params: [source],
            environment=environment,
            navigator={"navigate": lambda **kwargs: calls.append(kwargs)},
        )
        suggestion = Suggestion(source=source, items=["apple"])

        autocomplete.open_item_url(suggestion, "apple")

        assert calls == [
            {"suggestion_url": "/fruit/apple", "suggestion": suggestion, "item": "apple", "state": autocomplete.state}
        ]
