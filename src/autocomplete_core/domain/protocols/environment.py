"""Environment protocol.

The host the widget runs in. Browsers provide it as ``window``; other hosts
substitute their own. The suggestion pipeline only needs the timer pair.
"""

from typing import Any, Callable, Protocol

__all__ = ["Environment", "Location"]


class Location(Protocol):
    """The part of the host location the navigator uses."""

    def assign(self, url: str) -> None:
        """Navigate the current view to ``url``."""
        ...


class Environment(Protocol):
    """Protocol for host environments."""

    location: Location

    def set_timeout(self, callback: Callable[[], None], delay_ms: float) -> Any:
        """Schedule ``callback`` after ``delay_ms`` milliseconds.

        Returns:
            An opaque handle accepted by ``clear_timeout``
        """
        ...

    def clear_timeout(self, handle: Any) -> None:
        """Cancel a scheduled callback. Unknown or fired handles are ignored."""
        ...

    def open(self, url: str, target: str, features: str) -> Any:
        """Open ``url`` in another view.

        Returns:
            A reference to the opened view, or ``None``
        """
        ...
