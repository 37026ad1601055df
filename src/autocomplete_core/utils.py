"""
Utility functions for autocomplete-core.
"""

import itertools
import os

_autocomplete_ids = itertools.count()


def get_project_root() -> str:
    """
    Get the project root directory (parent of src/autocomplete_core).

    Returns:
        Absolute path to the project root directory
    """
    return os.path.dirname(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))


def generate_autocomplete_id(prefix: str = "autocomplete") -> str:
    """
    Generate a process-unique autocomplete id.

    Ids are sequential ("autocomplete-0", "autocomplete-1", ...) so that
    accessibility attributes built from them stay stable and readable.

    Args:
        prefix: Prefix of the generated id

    Returns:
        The next id for the given prefix
    """
    return f"{prefix}-{next(_autocomplete_ids)}"


def noop(*args, **kwargs) -> None:
    """Accept anything, do nothing."""
    return None
