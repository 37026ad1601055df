"""
Suggestion pipeline: turns one input change into committed state.

Every ``run_query`` call is a fetch cycle. The synchronous head of the cycle
resets the highlighted row, commits the query and either clears the
suggestions (short query) or arms the stall timer and schedules the
asynchronous tail, which resolves the sources, fans out to them and commits
the joint result.

Cycles are numbered. A cycle whose number is no longer the latest when its
asynchronous work completes commits nothing, so a slow response for an old
query can never overwrite the state produced by a newer one.
"""

from __future__ import annotations

import asyncio
from typing import Generic

from autocomplete_core.application.defaults import ResolvedOptions
from autocomplete_core.application.sources import fetch_source_items
from autocomplete_core.application.stall_timer import StallTimer
from autocomplete_core.domain.protocols import AutocompleteStore
from autocomplete_core.domain.types import (
    AutocompleteSetters,
    AutocompleteStatus,
    NextState,
    SourceParams,
    Suggestion,
    TItem,
)
from autocomplete_core.logger import get_logger

logger = get_logger("pipeline")


class SuggestionPipeline(Generic[TItem]):
    """Orchestrates fetch cycles for one autocomplete instance.

    Only the stall timer is truly cancelable. Source fetches of a superseded
    cycle keep running to completion; their results are discarded.
    """

    def __init__(
        self,
        options: ResolvedOptions,
        store: AutocompleteStore[TItem],
        setters: AutocompleteSetters[TItem] | None = None,
    ) -> None:
        """
        Args:
            options: Resolved options (min_length, stall_threshold, get_sources,
                should_dropdown_open, environment)
            store: Store read for state snapshots
            setters: Mutators used for every state change (defaults to the store's)
        """
        self._options = options
        self._store = store
        self._setters = setters or store.setters
        self._stall_timer = StallTimer(options.environment)
        self._generation = 0
        self._tasks: set[asyncio.Task[None]] = set()

    @property
    def generation(self) -> int:
        """Number of the latest cycle (0 before the first ``run_query``)."""
        return self._generation

    @property
    def stall_timer(self) -> StallTimer:
        return self._stall_timer

    @property
    def pending_tasks(self) -> frozenset[asyncio.Task[None]]:
        """Cycle tasks that have not finished yet, superseded ones included."""
        return frozenset(self._tasks)

    def is_current(self, generation: int) -> bool:
        """Whether ``generation`` is still the latest cycle."""
        return generation == self._generation

    def run_query(self, query: str, next_state: NextState | None = None) -> asyncio.Task[None] | None:
        """
        Start a fetch cycle for ``query``.

        Must be called from a running event loop when the query is long
        enough to fetch.

        Args:
            query: The new input text
            next_state: Overrides applied when the cycle commits (``is_open``)

        Returns:
            The task running the asynchronous tail, or ``None`` when the query
            is shorter than ``min_length``. Awaiting the task re-raises the
            error of a failed cycle.
        """
        next_state = next_state or NextState()
        self._generation += 1
        generation = self._generation
        setters = self._setters

        self._stall_timer.cancel()

        setters.set_highlighted_index(0)
        setters.set_query(query)

        if len(query) < self._options.min_length:
            setters.set_status(AutocompleteStatus.IDLE)
            setters.set_suggestions(
                [suggestion.without_items() for suggestion in self._store.get_state().suggestions]
            )
            setters.set_is_open(self._resolve_is_open(next_state, query, require_min_length=False))
            return None

        setters.set_status(AutocompleteStatus.LOADING)
        self._stall_timer.arm(
            self._options.stall_threshold,
            lambda: setters.set_status(AutocompleteStatus.STALLED),
        )

        logger.debug(f"Cycle {generation} started for query {query!r}")
        task = asyncio.get_running_loop().create_task(
            self._fetch(query, generation, next_state),
            name=f"{self._options.id}-query-{generation}",
        )
        # The loop only keeps weak references to tasks
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        return task

    async def _fetch(self, query: str, generation: int, next_state: NextState) -> None:
        setters = self._setters
        try:
            sources = await self._options.get_sources(self._params(query))

            if not self.is_current(generation):
                logger.debug(f"Cycle {generation} superseded after resolving sources")
                return

            setters.set_status(AutocompleteStatus.LOADING)

            suggestions: list[Suggestion[TItem]] = list(
                await asyncio.gather(
                    *(fetch_source_items(source, self._params(query)) for source in sources)
                )
            )
        except asyncio.CancelledError:
            if self.is_current(generation):
                logger.debug(f"Cycle {generation} cancelled")
                setters.set_status(AutocompleteStatus.IDLE)
            raise
        except Exception:
            if self.is_current(generation):
                setters.set_status(AutocompleteStatus.ERROR)
            else:
                logger.debug(f"Cycle {generation} failed after being superseded")
            raise
        else:
            if not self.is_current(generation):
                logger.debug(f"Discarding {len(suggestions)} suggestion group(s) of superseded cycle {generation}")
                return

            setters.set_status(AutocompleteStatus.IDLE)
            setters.set_suggestions(suggestions)
            setters.set_is_open(self._resolve_is_open(next_state, query, require_min_length=True))
            logger.debug(f"Cycle {generation} committed {len(suggestions)} suggestion group(s)")
        finally:
            if self.is_current(generation):
                self._stall_timer.cancel()

    def _params(self, query: str) -> SourceParams[TItem]:
        return SourceParams(query=query, state=self._store.get_state(), setters=self._setters)

    def _resolve_is_open(self, next_state: NextState, query: str, *, require_min_length: bool) -> bool:
        if next_state.is_open is not None:
            return next_state.is_open
        if require_min_length and len(query) < self._options.min_length:
            return False
        return bool(self._options.should_dropdown_open(state=self._store.get_state()))

