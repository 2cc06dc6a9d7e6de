"""Embedded component (``blok``) resolver."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from richsmith.core.context import RenderContext
from richsmith.core.nodes import BlockTypes, Node, node_attrs
from richsmith.core.rules import resolves


@resolves(BlockTypes.COMPONENT, name="component")
def render_component(node: Node, context: RenderContext) -> Any:
    """Emit one placeholder per component reference in ``attrs.body``.

    The placeholders are substituted after the walk, once the queued
    components have been rendered; see :mod:`richsmith.core.components`.
    """
    body = node_attrs(node).get("body")
    if not isinstance(body, list):
        return ""

    fragments: list[str] = []
    for blok in body:
        if not isinstance(blok, Mapping):
            fragments.append("")
            continue
        fragments.append(context.state.defer_component(blok))
    return "\n".join(fragments)
