"""Asyncio host environment.

Provides the ``Environment`` contract outside of a browser: timers run on the
running asyncio event loop and URLs open through the ``webbrowser`` module.
"""

import asyncio
import webbrowser
from typing import Callable

from autocomplete_core.logger import get_logger

logger = get_logger("environment")


class WebbrowserLocation:
    """``location.assign`` backed by the system browser."""

    def assign(self, url: str) -> None:
        logger.debug(f"Opening {url} in the current browser window")
        webbrowser.open(url, new=0)


class OpenedWindow:
    """Reference returned by ``AsyncioEnvironment.open``.

    The system browser gives no handle on the opened tab, so ``focus`` only
    records the request.
    """

    def __init__(self, url: str) -> None:
        self.url = url
        self.focused = False

    def focus(self) -> None:
        self.focused = True


class AsyncioEnvironment:
    """Environment whose timers are ``loop.call_later`` handles.

    Timers are scheduled on the loop running at ``set_timeout`` time, so the
    environment can be built before any loop exists.
    """

    def __init__(self) -> None:
        self.location = WebbrowserLocation()

    def set_timeout(self, callback: Callable[[], None], delay_ms: float) -> asyncio.TimerHandle:
        loop = asyncio.get_running_loop()
        return loop.call_later(max(delay_ms, 0) / 1000.0, callback)

    def clear_timeout(self, handle: asyncio.TimerHandle | None) -> None:
        if handle is not None:
            handle.cancel()

    def open(self, url: str, target: str, features: str) -> OpenedWindow | None:
        """Open ``url`` in a new tab (``target="_blank"``) or the current window."""
        new = 2 if target == "_blank" else 0
        logger.debug(f"Opening {url} (target={target!r}, features={features!r})")
        if not webbrowser.open(url, new=new):
            return None
        return OpenedWindow(url)
