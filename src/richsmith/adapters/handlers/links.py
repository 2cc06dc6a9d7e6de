"""Link and anchor mark resolvers."""

from __future__ import annotations

from typing import Any

from richsmith.core.context import RenderContext
from richsmith.core.nodes import LinkTypes, MarkTypes, Node, node_attrs
from richsmith.core.rules import resolves


def resolve_href(linktype: Any, href: Any, anchor: Any = None) -> str:
    """Compute the final destination for a link mark."""
    href = href or ""
    if linktype == LinkTypes.EMAIL.value:
        return f"mailto:{href}" if href else ""
    if linktype == LinkTypes.STORY.value and anchor:
        return f"{href}#{anchor}"
    # url, asset and unknown link types keep the raw destination
    return str(href)


@resolves(MarkTypes.LINK, MarkTypes.ANCHOR, name="link")
def render_link(node: Node, context: RenderContext) -> Any:
    """Render link and anchor marks as ``a`` elements."""
    attrs = node_attrs(node)
    linktype = attrs.pop("linktype", None)
    href = attrs.pop("href", None)
    anchor = attrs.pop("anchor", None)

    final_href = resolve_href(linktype, href, anchor)
    if final_href:
        attrs["href"] = final_href
    return context.emit("a", attrs, node.get("text"))
