"""Shared fixtures and fakes for autocomplete tests."""

import asyncio
import itertools
from typing import Any, Callable, Optional

import pytest

from autocomplete_core.application.defaults import AutocompleteOptions, get_default_options
from autocomplete_core.application.pipeline import SuggestionPipeline
from autocomplete_core.domain.events import EventBus, StateChanged
from autocomplete_core.domain.types import AutocompleteStatus, SourceParams
from autocomplete_core.infrastructure.store import InMemoryAutocompleteStore


class FakeLocation:
    """Records ``location.assign`` calls."""

    def __init__(self):
        self.assigned: list[str] = []

    def assign(self, url: str) -> None:
        self.assigned.append(url)


class FakeWindow:
    def __init__(self):
        self.focused = False

    def focus(self) -> None:
        self.focused = True


class FakeEnvironment:
    """Environment whose timers only fire when the test says so."""

    def __init__(self):
        self.location = FakeLocation()
        self.timers: dict[int, tuple[Callable[[], None], float]] = {}
        self.opened: list[tuple[str, str, str]] = []
        self.window_reference: Optional[FakeWindow] = FakeWindow()
        self._ids = itertools.count(1)

    def set_timeout(self, callback: Callable[[], None], delay_ms: float) -> int:
        handle = next(self._ids)
        self.timers[handle] = (callback, delay_ms)
        return handle

    def clear_timeout(self, handle: int) -> None:
        self.timers.pop(handle, None)

    def fire_all(self) -> None:
        """Fire every pending timer, in scheduling order."""
        for handle in sorted(self.timers):
            callback, _ = self.timers.pop(handle)
            callback()

    def open(self, url: str, target: str, features: str) -> Optional[FakeWindow]:
        self.opened.append((url, target, features))
        return self.window_reference


class ListSource:
    """Source answering synchronously with fixed items."""

    def __init__(self, items: list[Any], name: str = "list"):
        self.items = items
        self.name = name
        self.queries: list[str] = []

    def get_suggestions(self, params: SourceParams) -> list[Any]:
        self.queries.append(params.query)
        return list(self.items)

    def __repr__(self) -> str:
        return f"ListSource({self.name!r})"


class GatedSource:
    """Async source that answers only once ``release(query)`` is called."""

    def __init__(self, items_for: Callable[[str], list[Any]] = lambda query: [query], name: str = "gated"):
        self._items_for = items_for
        self.name = name
        self._gates: dict[str, asyncio.Event] = {}
        self._errors: dict[str, BaseException] = {}
        self.queries: list[str] = []

    def _gate(self, query: str) -> asyncio.Event:
        return self._gates.setdefault(query, asyncio.Event())

    async def get_suggestions(self, params: SourceParams) -> list[Any]:
        self.queries.append(params.query)
        await self._gate(params.query).wait()
        if params.query in self._errors:
            raise self._errors[params.query]
        return self._items_for(params.query)

    def release(self, query: str) -> None:
        self._gate(query).set()

    def fail(self, query: str, error: BaseException) -> None:
        self._errors[query] = error
        self._gate(query).set()


class FailingSource:
    def __init__(self, error: BaseException):
        self.error = error

    async def get_suggestions(self, params: SourceParams) -> list[Any]:
        raise self.error


@pytest.fixture
def environment() -> FakeEnvironment:
    return FakeEnvironment()


@pytest.fixture
def status_log() -> list[AutocompleteStatus]:
    """Every status set on stores built by ``make_pipeline``, in order."""
    return []


@pytest.fixture
def make_pipeline(environment, status_log):
    """Build a pipeline + store pair around the fake environment."""

    def record_status(event: StateChanged) -> None:
        if event.changed_field == "status":
            status_log.append(event.state.status)

    def factory(get_sources, **options):
        on_state_change = options.pop("on_state_change", None)
        event_bus = EventBus()
        event_bus.subscribe(StateChanged, record_status)
        resolved = get_default_options(
            AutocompleteOptions(get_sources=get_sources, environment=options.pop("environment", environment), **options)
        )
        store = InMemoryAutocompleteStore(
            resolved.initial_state, on_state_change=on_state_change, event_bus=event_bus
        )
        return SuggestionPipeline(resolved, store), store

    return factory
