"""Convenience entry point rendering a rich-text field to HTML."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from richsmith.adapters.assets import transform_asset
from richsmith.adapters.handlers.links import resolve_href
from richsmith.core.config import RenderOptions, ResolverConfig
from richsmith.core.context import RenderContext
from richsmith.core.engine import RichTextResolver
from richsmith.core.nodes import LinkTypes, MarkTypes, Node, node_attrs
from richsmith.core.rules import Resolver, ResolverRegistry, resolves


@resolves(MarkTypes.HIGHLIGHT, name="default_highlight")
def render_highlight(node: Node, context: RenderContext) -> Any:
    """Render highlights as a span with an inline background colour."""
    color = node_attrs(node).get("color")
    attrs = {"style": f"background-color:{color};"} if color else {}
    return context.emit("span", attrs, node.get("text"))


@resolves(MarkTypes.LINK, name="default_link")
def render_link(node: Node, context: RenderContext) -> Any:
    """Render links with site-relative story URLs and a fixed link class."""
    attrs = node_attrs(node)
    linktype = attrs.get("linktype")
    story = attrs.get("story")
    anchor = attrs.get("anchor")

    href = resolve_href(linktype, attrs.get("href")) or "#"
    if linktype == LinkTypes.STORY.value and isinstance(story, Mapping) and story.get("full_slug"):
        href = f"/{story['full_slug']}"
    elif linktype == LinkTypes.ASSET.value:
        href = transform_asset(href) or href
    if anchor:
        href = f"{href}#{anchor}"

    return context.emit(
        "a",
        {"href": href, "target": attrs.get("target") or "_self", "class": "rich-text-link"},
        node.get("text"),
    )


DEFAULT_RESOLVERS: ResolverRegistry = ResolverRegistry(
    {MarkTypes.HIGHLIGHT: render_highlight, MarkTypes.LINK: render_link}
)


def render_unwrapped(node: Node, context: RenderContext) -> Any:
    """Return the already rendered text of an excluded mark unchanged."""
    return node.get("text", "")


def resolve_overrides(options: RenderOptions) -> dict[str, Resolver]:
    """Return the resolver overrides implied by *options*.

    Excluded mark types render their text without a wrapping element, unless
    the caller supplies its own resolver for them.
    """
    excluded = set(options.except_)
    merged: dict[str, Resolver] = {
        key: resolver for key, resolver in DEFAULT_RESOLVERS.items() if key not in excluded
    }
    merged.update(dict.fromkeys(excluded, render_unwrapped))
    merged.update(options.resolvers)
    return merged


async def render_rich_text(
    content: Any,
    options: RenderOptions | Mapping[str, Any] | None = None,
    **engine_options: Any,
) -> str:
    """Render a rich-text document to HTML.

    ``options`` accepts ``except`` (mark types whose default resolver is
    disabled), ``resolvers`` (caller overrides, highest priority) and
    ``language`` (forwarded to the component renderer). Remaining keyword
    arguments are passed to :class:`RichTextResolver`.
    """
    if options is None:
        settings = RenderOptions()
    elif isinstance(options, RenderOptions):
        settings = options
    else:
        settings = RenderOptions.model_validate(dict(options))

    config = engine_options.pop("config", None) or ResolverConfig()
    if settings.language is not None:
        config = config.model_copy(update={"language": settings.language})

    resolver = RichTextResolver(config, resolvers=resolve_overrides(settings), **engine_options)
    return await resolver.render_html(content)


__all__ = [
    "DEFAULT_RESOLVERS",
    "render_highlight",
    "render_link",
    "render_unwrapped",
    "render_rich_text",
    "resolve_overrides",
]
