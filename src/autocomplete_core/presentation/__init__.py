"""Presentation helpers (console formatting only)."""
