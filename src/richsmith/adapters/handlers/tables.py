"""Table resolvers."""

from __future__ import annotations

from typing import Any

from richsmith.core.attributes import process_attributes, table_cell_attributes
from richsmith.core.context import RenderContext
from richsmith.core.nodes import BlockTypes, Node, node_attrs
from richsmith.core.rules import resolves

from ._helpers import tag_resolver


render_table_row = resolves(BlockTypes.TABLE_ROW, name="table_row")(tag_resolver("tr"))


@resolves(BlockTypes.TABLE, name="table")
def render_table(node: Node, context: RenderContext) -> Any:
    """Render ``table`` nodes with their rows wrapped in ``tbody``."""
    body = context.emit("tbody", {}, node.get("children"))
    return context.emit("table", process_attributes(node_attrs(node)), body)


@resolves(BlockTypes.TABLE_CELL, name="table_cell")
def render_table_cell(node: Node, context: RenderContext) -> Any:
    return context.emit("td", table_cell_attributes(node_attrs(node)), node.get("children"))


@resolves(BlockTypes.TABLE_HEADER, name="table_header")
def render_table_header(node: Node, context: RenderContext) -> Any:
    return context.emit("th", table_cell_attributes(node_attrs(node)), node.get("children"))
