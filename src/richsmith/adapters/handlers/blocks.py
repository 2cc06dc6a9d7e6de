"""Structural block resolvers."""

from __future__ import annotations

from typing import Any

from richsmith.core.attributes import clean_attributes, process_attributes
from richsmith.core.context import RenderContext
from richsmith.core.nodes import BlockTypes, Node, node_attrs
from richsmith.core.rules import resolves

from ._helpers import children_or_empty, tag_resolver


HEADING_PREFIX = "h"

render_document = resolves(BlockTypes.DOCUMENT, name="document")(tag_resolver(""))
render_paragraph = resolves(BlockTypes.PARAGRAPH, name="paragraph")(tag_resolver("p"))
render_bullet_list = resolves(BlockTypes.UL_LIST, name="bullet_list")(tag_resolver("ul"))
render_ordered_list = resolves(BlockTypes.OL_LIST, name="ordered_list")(tag_resolver("ol"))
render_list_item = resolves(BlockTypes.LIST_ITEM, name="list_item")(tag_resolver("li"))
render_blockquote = resolves(BlockTypes.QUOTE, name="blockquote")(tag_resolver("blockquote"))
render_horizontal_rule = resolves(BlockTypes.HR, name="horizontal_rule")(tag_resolver("hr"))
render_hard_break = resolves(BlockTypes.BR, name="hard_break")(tag_resolver("br"))


@resolves(BlockTypes.HEADING, name="heading")
def render_heading(node: Node, context: RenderContext) -> Any:
    """Render ``heading`` nodes as ``h<level>`` elements."""
    attrs = node_attrs(node)
    level = attrs.pop("level", None)
    return context.emit(f"{HEADING_PREFIX}{level}", process_attributes(attrs), node.get("children"))


@resolves(BlockTypes.CODE_BLOCK, name="code_block")
def render_code_block(node: Node, context: RenderContext) -> Any:
    """Render ``code_block`` nodes as ``<pre><code>``; attributes stay on ``pre``."""
    code = context.emit("code", {}, children_or_empty(node))
    return context.emit("pre", clean_attributes(node_attrs(node)), code)
