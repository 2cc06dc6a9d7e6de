"""Built-in node resolvers."""

from __future__ import annotations

from richsmith.core.rules import ResolverRegistry, build_registry

from . import blocks, components, inline, links, media, tables


BUILTIN_HANDLER_MODULES = (blocks, tables, media, inline, links, components)


def builtin_registry() -> ResolverRegistry:
    """Return a registry holding every built-in resolver."""
    return build_registry(*BUILTIN_HANDLER_MODULES)


__all__ = ["BUILTIN_HANDLER_MODULES", "builtin_registry"]
