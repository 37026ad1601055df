"""Event types for the event bus system.

This module defines the events published while the autocomplete state
evolves, so observers can follow it without holding a store reference.
"""

import time
from dataclasses import dataclass, field
from typing import Any

from autocomplete_core.domain.types.state import AutocompleteState


@dataclass
class Event:
    """Base class for all events.

    The timestamp field is automatically set when the event is created.
    """

    timestamp: float = field(default_factory=time.time, init=False)
    """Timestamp when the event was created (Unix timestamp)."""


@dataclass
class StateChanged(Event):
    """Event published by the store after every setter call.

    Attributes:
        state: State after the change
        previous_state: State before the change
        changed_field: Name of the state field the setter replaced
    """

    state: AutocompleteState[Any]
    """State after the change."""
    previous_state: AutocompleteState[Any]
    """State before the change."""
    changed_field: str
    """Name of the replaced field (e.g. ``"status"``)."""


@dataclass
class QueryFailed(Event):
    """Event published when the latest query cycle fails.

    Failures of superseded cycles are not published: their status is never
    committed either.
    """

    query: str
    """Query of the failed cycle."""
    error: BaseException
    """The error raised by source resolution or by a source fetcher."""
