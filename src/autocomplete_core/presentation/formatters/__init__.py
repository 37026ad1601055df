"""
Reusable Rich formatter utilities for autocomplete state.
"""

from .state import (
    build_suggestions_table,
    format_state_header_text,
    format_status_line_markup,
    get_status_icon,
    get_status_text,
)

__all__ = [
    "build_suggestions_table",
    "format_state_header_text",
    "format_status_line_markup",
    "get_status_icon",
    "get_status_text",
]
