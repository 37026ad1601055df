"""
Formatting helpers for autocomplete state snapshots.
"""

from __future__ import annotations

from typing import Any, Callable

from rich.table import Table
from rich.text import Text

from autocomplete_core.domain.types import AutocompleteState, AutocompleteStatus, get_items_count


def get_status_icon(status: AutocompleteStatus) -> str:
    """Return the glyph used for the given fetch status."""
    status_icons = {
        AutocompleteStatus.IDLE: "●",
        AutocompleteStatus.LOADING: "◌",
        AutocompleteStatus.STALLED: "◔",
        AutocompleteStatus.ERROR: "✗",
    }
    return status_icons.get(status, "?")


def get_status_text(status: AutocompleteStatus) -> str:
    """Return the Rich markup representing the fetch status."""
    status_texts = {
        AutocompleteStatus.IDLE: "[green]Idle[/]",
        AutocompleteStatus.LOADING: "[yellow]Loading...[/]",
        AutocompleteStatus.STALLED: "[dark_orange]Stalled[/]",
        AutocompleteStatus.ERROR: "[red]Error[/]",
    }
    return status_texts.get(status, "[dim]Unknown[/]")


def format_status_line_markup(state: AutocompleteState[Any]) -> str:
    """
    Build the markup for the status line, including the error detail if any.
    """
    markup = f"{get_status_icon(state.status)} {get_status_text(state.status)}"
    if state.status == AutocompleteStatus.ERROR and state.status_context.error is not None:
        markup += f" [red]{state.status_context.error}[/]"
    return markup


def format_state_header_text(state: AutocompleteState[Any]) -> Text:
    """Header line: query, status and dropdown visibility."""
    header = Text()
    header.append("query ", style="dim")
    header.append(repr(state.query), style="bold")
    header.append("  ")
    header.append_text(Text.from_markup(format_status_line_markup(state)))
    header.append("  ")
    header.append("open" if state.is_open else "closed", style="cyan" if state.is_open else "dim")
    header.append(f"  ({get_items_count(state)} items)", style="dim")
    return header


def build_suggestions_table(
    state: AutocompleteState[Any],
    item_text: Callable[[Any], str] = str,
    source_name: Callable[[Any], str] | None = None,
) -> Table:
    """
    Build a table listing every item, grouped by source, highlighted row marked.
    """
    table = Table(title=format_state_header_text(state), show_lines=False, expand=False)
    table.add_column("#", justify="right", style="dim")
    table.add_column("Source", style="magenta")
    table.add_column("Item")

    name_of = source_name or (lambda source: type(source).__name__)
    row = 0
    for suggestion in state.suggestions:
        if not suggestion.items:
            table.add_row("", name_of(suggestion.source), Text("(no items)", style="dim"))
            continue
        for item in suggestion.items:
            marker = "›" if row == state.highlighted_index else ""
            table.add_row(f"{marker}{row}", name_of(suggestion.source), item_text(item))
            row += 1
    return table
