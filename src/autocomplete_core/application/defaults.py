"""Autocomplete options and their defaults.

``AutocompleteOptions`` validates what the caller passes in; ``get_default_options``
turns it into a fully populated ``ResolvedOptions`` the rest of the package
can rely on without ``None`` checks.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Mapping

from pydantic import BaseModel, ConfigDict, Field, field_validator

from autocomplete_core.application.sources import ResolvedGetSources, normalize_get_sources
from autocomplete_core.domain.protocols import Environment
from autocomplete_core.domain.types import (
    AutocompleteState,
    AutocompleteStatus,
    StatusContext,
    Suggestion,
    get_items_count,
)
from autocomplete_core.infrastructure.environment import AsyncioEnvironment
from autocomplete_core.logger import get_logger
from autocomplete_core.utils import generate_autocomplete_id, noop

logger = get_logger("defaults")

DEFAULT_MIN_LENGTH = 1
DEFAULT_STALL_THRESHOLD_MS = 300

NavigateCallback = Callable[..., None]


class InitialStateOptions(BaseModel):
    """Partial state applied when the widget is created."""

    highlighted_index: int | None = Field(None, ge=0)
    query: str | None = None
    suggestions: list[Any] | None = None
    is_open: bool | None = None
    status: AutocompleteStatus | None = None
    status_context: Any = None
    context: dict[str, Any] | None = None

    model_config = ConfigDict(extra="forbid")

    @field_validator("suggestions")
    @classmethod
    def _check_suggestions(cls, value: list[Any] | None) -> list[Any] | None:
        if value is not None and not all(isinstance(suggestion, Suggestion) for suggestion in value):
            raise ValueError("suggestions must be Suggestion instances")
        return value

    @field_validator("status_context")
    @classmethod
    def _check_status_context(cls, value: Any) -> Any:
        if value is not None and not isinstance(value, StatusContext):
            raise ValueError("status_context must be a StatusContext")
        return value


class NavigatorOptions(BaseModel):
    """Navigator overrides. Each callback receives ``suggestion_url``, ``suggestion``, ``item`` and ``state``."""

    navigate: NavigateCallback | None = None
    navigate_new_tab: NavigateCallback | None = None
    navigate_new_window: NavigateCallback | None = None

    model_config = ConfigDict(extra="forbid")


class AutocompleteOptions(BaseModel):
    """Options accepted by ``create_autocomplete``."""

    get_sources: Callable[..., Any] = Field(..., description="Returns the sources for a query")
    id: str | None = Field(None, description="Autocomplete id used by accessibility attributes")
    min_length: int = Field(DEFAULT_MIN_LENGTH, ge=0, description="Minimum query length that triggers a fetch")
    stall_threshold: int = Field(
        DEFAULT_STALL_THRESHOLD_MS, ge=0, description="Milliseconds before a fetch is flagged as stalled"
    )
    placeholder: str = ""
    show_completion: bool = False
    environment: Any = Field(None, description="Host environment (timers, navigation)")
    should_dropdown_open: Callable[..., bool] | None = None
    on_state_change: Callable[..., None] | None = None
    on_error: Callable[..., None] | None = None
    initial_state: InitialStateOptions = Field(default_factory=InitialStateOptions)
    navigator: NavigatorOptions = Field(default_factory=NavigatorOptions)

    model_config = ConfigDict(extra="forbid", frozen=True)


@dataclass(frozen=True)
class Navigator:
    """Opens suggestion URLs."""

    navigate: NavigateCallback
    navigate_new_tab: NavigateCallback
    navigate_new_window: NavigateCallback


@dataclass(frozen=True)
class ResolvedOptions:
    """Options with every default applied."""

    id: str
    min_length: int
    stall_threshold: int
    placeholder: str
    show_completion: bool
    environment: Environment
    should_dropdown_open: Callable[..., bool]
    on_state_change: Callable[..., None]
    on_error: Callable[..., None]
    initial_state: AutocompleteState[Any]
    get_sources: ResolvedGetSources
    navigator: Navigator


def default_should_dropdown_open(*, state: AutocompleteState[Any]) -> bool:
    """Open the dropdown when at least one source returned items."""
    return get_items_count(state) > 0


def merge_initial_state(overrides: InitialStateOptions) -> AutocompleteState[Any]:
    """Build the initial state, field by field, from the given overrides."""
    defaults = AutocompleteState()
    return AutocompleteState(
        highlighted_index=(
            overrides.highlighted_index if overrides.highlighted_index is not None else defaults.highlighted_index
        ),
        query=overrides.query if overrides.query is not None else defaults.query,
        suggestions=list(overrides.suggestions) if overrides.suggestions is not None else defaults.suggestions,
        is_open=overrides.is_open if overrides.is_open is not None else defaults.is_open,
        status=overrides.status if overrides.status is not None else defaults.status,
        status_context=(
            overrides.status_context if overrides.status_context is not None else defaults.status_context
        ),
        context=dict(overrides.context) if overrides.context is not None else defaults.context,
    )


def merge_navigator(environment: Environment, overrides: NavigatorOptions) -> Navigator:
    """Build the navigator, falling back to the environment for missing callbacks."""

    def navigate(*, suggestion_url: str, **_: Any) -> None:
        environment.location.assign(suggestion_url)

    def navigate_new_tab(*, suggestion_url: str, **_: Any) -> None:
        window_reference = environment.open(suggestion_url, "_blank", "noopener")
        if window_reference is not None and callable(getattr(window_reference, "focus", None)):
            window_reference.focus()

    def navigate_new_window(*, suggestion_url: str, **_: Any) -> None:
        environment.open(suggestion_url, "_blank", "noopener")

    return Navigator(
        navigate=overrides.navigate or navigate,
        navigate_new_tab=overrides.navigate_new_tab or navigate_new_tab,
        navigate_new_window=overrides.navigate_new_window or navigate_new_window,
    )


def get_default_options(options: AutocompleteOptions | Mapping[str, Any]) -> ResolvedOptions:
    """
    Apply defaults to user options.

    Args:
        options: Validated options, or a mapping validated into ``AutocompleteOptions``

    Returns:
        ResolvedOptions with every field populated

    Raises:
        pydantic.ValidationError: If the options are invalid (unknown key,
            negative threshold, unknown status, missing ``get_sources``...)
    """
    if not isinstance(options, AutocompleteOptions):
        options = AutocompleteOptions(**options)

    environment = options.environment if options.environment is not None else AsyncioEnvironment()
    resolved = ResolvedOptions(
        id=options.id or generate_autocomplete_id(),
        min_length=options.min_length,
        stall_threshold=options.stall_threshold,
        placeholder=options.placeholder,
        show_completion=options.show_completion,
        environment=environment,
        should_dropdown_open=options.should_dropdown_open or default_should_dropdown_open,
        on_state_change=options.on_state_change or noop,
        on_error=options.on_error or noop,
        initial_state=merge_initial_state(options.initial_state),
        get_sources=normalize_get_sources(options.get_sources),
        navigator=merge_navigator(environment, options.navigator),
    )
    logger.debug(
        f"Resolved options for {resolved.id}: min_length={resolved.min_length}, "
        f"stall_threshold={resolved.stall_threshold}ms"
    )
    return resolved
