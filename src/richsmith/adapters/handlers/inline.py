"""Text and mark resolvers.

Marks are folded onto their text node innermost first: the bare text leaf is
rendered, then every mark in order re-renders through its own resolver with
the accumulated value as ``text``.
"""

from __future__ import annotations

from collections.abc import Mapping
from functools import reduce
from typing import Any

from richsmith.core.attributes import attrs_to_style, clean_attributes
from richsmith.core.context import RenderContext
from richsmith.core.nodes import MarkTypes, Node, TextTypes, node_attrs, node_type
from richsmith.core.rules import Resolver, resolves


def mark_resolver(tag: str, *, styled: bool = False) -> Resolver:
    """Return a resolver wrapping the node text in *tag*.

    Styled marks keep ``class`` and ``id`` and fold every other attribute into
    a ``style`` string.
    """

    def resolver(node: Node, context: RenderContext) -> Any:
        attrs = node_attrs(node)
        if styled:
            class_name = attrs.pop("class", None)
            id_name = attrs.pop("id", None)
            attributes = {
                "class": class_name,
                "id": id_name,
                "style": attrs_to_style(clean_attributes(attrs)) or None,
            }
        else:
            attributes = attrs
        return context.emit(tag, clean_attributes(attributes), node.get("text"))

    resolver.__name__ = f"render_{tag}_mark"
    resolver.__qualname__ = resolver.__name__
    return resolver


render_bold = resolves(MarkTypes.BOLD, MarkTypes.STRONG, name="bold")(mark_resolver("strong"))
render_italic = resolves(MarkTypes.ITALIC, name="italic")(mark_resolver("em"))
render_underline = resolves(MarkTypes.UNDERLINE, name="underline")(mark_resolver("u"))
render_strike = resolves(MarkTypes.STRIKE, name="strike")(mark_resolver("s"))
render_code = resolves(MarkTypes.CODE, name="code")(mark_resolver("code"))
render_superscript = resolves(MarkTypes.SUPERSCRIPT, name="superscript")(mark_resolver("sup"))
render_subscript = resolves(MarkTypes.SUBSCRIPT, name="subscript")(mark_resolver("sub"))
render_highlight = resolves(MarkTypes.HIGHLIGHT, name="highlight")(mark_resolver("mark"))
render_styled = resolves(MarkTypes.STYLED, MarkTypes.TEXT_STYLE, name="styled")(
    mark_resolver("span", styled=True)
)


def fold_marks(text_value: Any, marks: list[Mapping[str, Any]], context: RenderContext) -> Any:
    """Wrap *text_value* with each mark in turn, first mark innermost."""

    def wrap(accumulated: Any, mark: Mapping[str, Any]) -> Any:
        if node_type(mark) is None:
            return accumulated
        return context.render({**mark, "text": accumulated})

    return reduce(wrap, marks, text_value)


@resolves(TextTypes.TEXT, name="text")
def render_text(node: Node, context: RenderContext) -> Any:
    """Render a text leaf, folding its marks when present."""
    if "text" not in node:
        return ""
    marks = node.get("marks")
    if marks:
        bare = {key: value for key, value in node.items() if key != "marks"}
        return fold_marks(context.render(bare), list(marks), context)

    attributes = node_attrs(node)
    if context.config.keyed_resolvers:
        attributes["key"] = context.state.next_key("txt")
    return context.text_fn(node["text"], attributes)
