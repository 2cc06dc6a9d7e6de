"""Primary public API for richsmith."""

from __future__ import annotations

from richsmith.adapters.assets import transform_asset
from richsmith.adapters.images import optimize_image
from richsmith.api import DEFAULT_RESOLVERS, render_rich_text
from richsmith.core.attributes import (
    attrs_to_string,
    attrs_to_style,
    escape_html,
    process_attributes,
)
from richsmith.core.components import ComponentRenderer
from richsmith.core.config import (
    AssetHostConfig,
    ImageFilters,
    ImageOptimizationOptions,
    RenderOptions,
    ResolverConfig,
)
from richsmith.core.context import RenderContext, RenderState
from richsmith.core.documents import has_content
from richsmith.core.engine import RichTextResolver
from richsmith.core.exceptions import (
    ComponentRenderError,
    InvalidNodeError,
    MissingResolverError,
    RichTextRenderingError,
)
from richsmith.core.nodes import BlockTypes, LinkTypes, MarkTypes, TextTypes
from richsmith.core.rules import ResolverRegistry, build_registry, merge, resolves
from richsmith.version import get_version


__version__ = get_version()

__all__ = [
    "DEFAULT_RESOLVERS",
    "AssetHostConfig",
    "BlockTypes",
    "ComponentRenderError",
    "ComponentRenderer",
    "ImageFilters",
    "ImageOptimizationOptions",
    "InvalidNodeError",
    "LinkTypes",
    "MarkTypes",
    "MissingResolverError",
    "RenderContext",
    "RenderOptions",
    "RenderState",
    "ResolverConfig",
    "ResolverRegistry",
    "RichTextRenderingError",
    "RichTextResolver",
    "TextTypes",
    "__version__",
    "attrs_to_string",
    "attrs_to_style",
    "build_registry",
    "escape_html",
    "has_content",
    "merge",
    "optimize_image",
    "process_attributes",
    "render_rich_text",
    "resolves",
    "transform_asset",
]
