"""Ready-made suggestion sources."""

from autocomplete_core.sources.function import CallableSource
from autocomplete_core.sources.static import StaticSource

__all__ = ["CallableSource", "StaticSource"]
