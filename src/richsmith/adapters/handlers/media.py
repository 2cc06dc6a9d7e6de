"""Image and emoji resolvers."""

from __future__ import annotations

from typing import Any

from richsmith.core.attributes import clean_attributes
from richsmith.core.context import RenderContext
from richsmith.core.nodes import BlockTypes, Node, node_attrs
from richsmith.core.rules import resolves


EMOJI_IMAGE_STYLE = "width: 1.25em; height: 1.25em; vertical-align: text-top"


@resolves(BlockTypes.IMAGE, name="image")
def render_image(node: Node, context: RenderContext) -> Any:
    """Render ``image`` nodes, routing the source through the optimiser when enabled."""
    attrs = node_attrs(node)
    src = attrs.get("src")
    extra: dict[str, Any] = {}

    options = context.config.image_options()
    if options is not None and context.image_optimizer is not None and src:
        src, extra = context.image_optimizer(src, options)

    image_attrs = {
        "src": src,
        "alt": attrs.get("alt"),
        "title": attrs.get("title"),
        "srcset": attrs.get("srcset"),
        "sizes": attrs.get("sizes"),
        **extra,
    }
    return context.emit("img", clean_attributes(image_attrs))


@resolves(BlockTypes.EMOJI, name="emoji")
def render_emoji(node: Node, context: RenderContext) -> Any:
    """Render ``emoji`` nodes as a data-annotated span around a fallback image."""
    attrs = node_attrs(node)
    image = context.emit(
        "img",
        clean_attributes(
            {
                "src": attrs.get("fallbackImage"),
                "alt": attrs.get("alt"),
                "style": EMOJI_IMAGE_STYLE,
                "draggable": "false",
                "loading": "lazy",
            }
        ),
    )
    return context.emit(
        "span",
        clean_attributes(
            {
                "data-type": "emoji",
                "data-name": attrs.get("name"),
                "data-emoji": attrs.get("emoji"),
            }
        ),
        image,
    )
