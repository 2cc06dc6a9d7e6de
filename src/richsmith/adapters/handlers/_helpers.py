"""Internal helpers shared across handler modules."""

from __future__ import annotations

from typing import Any

from richsmith.core.attributes import process_attributes
from richsmith.core.context import RenderContext
from richsmith.core.nodes import Node, node_attrs
from richsmith.core.rules import Resolver


def tag_resolver(tag: str) -> Resolver:
    """Return a resolver wrapping the rendered children in *tag*."""

    def resolver(node: Node, context: RenderContext) -> Any:
        attributes = process_attributes(node_attrs(node))
        return context.emit(tag, attributes, node.get("children"))

    resolver.__name__ = f"render_{tag or 'fragment'}"
    resolver.__qualname__ = resolver.__name__
    return resolver


def children_or_empty(node: Node) -> Any:
    children = node.get("children")
    return "" if children is None else children
