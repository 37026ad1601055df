"""Single-slot delayed action flagging slow fetch cycles as stalled."""

from typing import Any, Callable

from autocomplete_core.domain.protocols import Environment
from autocomplete_core.logger import get_logger

logger = get_logger("stall_timer")


class StallTimer:
    """Cancelable delayed callback with exactly one slot.

    Each pipeline owns its own timer, so several autocomplete instances on
    the same loop never cancel each other's stall signal.

    Example:
        >>> timer = StallTimer(environment)
        >>> timer.arm(300, lambda: setters.set_status(AutocompleteStatus.STALLED))
        >>> timer.cancel()  # nothing fires
        >>> timer.cancel()  # no-op
    """

    def __init__(self, environment: Environment) -> None:
        self._environment = environment
        self._handle: Any = None

    @property
    def is_armed(self) -> bool:
        """Whether a callback is pending."""
        return self._handle is not None

    def arm(self, threshold_ms: float, callback: Callable[[], None]) -> None:
        """Schedule ``callback`` after ``threshold_ms``, replacing any pending one."""
        self.cancel()

        def fire() -> None:
            self._handle = None
            logger.debug(f"Stall threshold of {threshold_ms}ms exceeded")
            callback()

        self._handle = self._environment.set_timeout(fire, threshold_ms)

    def cancel(self) -> None:
        """Cancel the pending callback, if any."""
        if self._handle is None:
            return
        self._environment.clear_timeout(self._handle)
        self._handle = None
