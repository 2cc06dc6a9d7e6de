"""High-level API for rendering rich-text fields."""

from __future__ import annotations

from .render import DEFAULT_RESOLVERS, render_rich_text, resolve_overrides


__all__ = ["DEFAULT_RESOLVERS", "render_rich_text", "resolve_overrides"]
