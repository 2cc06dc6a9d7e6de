"""Vocabulary of the rich-text document tree.

Nodes are plain mappings as delivered by the CMS API. The enumerations below
name the types understood by the built-in resolvers; callers may register
resolvers under any other string key, which is why lookups always go through
plain ``str`` values.
"""

from __future__ import annotations

from collections.abc import Mapping
from enum import Enum
from typing import Any


class BlockTypes(str, Enum):
    """Structural node types."""

    DOCUMENT = "doc"
    HEADING = "heading"
    PARAGRAPH = "paragraph"
    QUOTE = "blockquote"
    OL_LIST = "ordered_list"
    UL_LIST = "bullet_list"
    LIST_ITEM = "list_item"
    CODE_BLOCK = "code_block"
    HR = "horizontal_rule"
    BR = "hard_break"
    IMAGE = "image"
    EMOJI = "emoji"
    COMPONENT = "blok"
    TABLE = "table"
    TABLE_ROW = "tableRow"
    TABLE_CELL = "tableCell"
    TABLE_HEADER = "tableHeader"


class MarkTypes(str, Enum):
    """Inline decorations attached to text nodes."""

    BOLD = "bold"
    STRONG = "strong"
    STRIKE = "strike"
    UNDERLINE = "underline"
    ITALIC = "italic"
    CODE = "code"
    LINK = "link"
    ANCHOR = "anchor"
    STYLED = "styled"
    SUPERSCRIPT = "superscript"
    SUBSCRIPT = "subscript"
    TEXT_STYLE = "textStyle"
    HIGHLIGHT = "highlight"


class TextTypes(str, Enum):
    TEXT = "text"


class LinkTypes(str, Enum):
    """Destination kinds carried by link marks."""

    URL = "url"
    STORY = "story"
    ASSET = "asset"
    EMAIL = "email"


Node = Mapping[str, Any]
"""A single document, text or mark node."""


def node_type(node: Any) -> str | None:
    """Return the type key of *node* as a plain string, or ``None``."""
    if not isinstance(node, Mapping):
        return None
    value = node.get("type")
    if isinstance(value, Enum):
        value = value.value
    return value if isinstance(value, str) and value else None


def node_attrs(node: Node) -> dict[str, Any]:
    """Return a shallow copy of the node attributes, tolerating ``None``."""
    attrs = node.get("attrs")
    return dict(attrs) if isinstance(attrs, Mapping) else {}


def is_text_node(node: Node) -> bool:
    return node_type(node) == TextTypes.TEXT.value


__all__ = [
    "BlockTypes",
    "LinkTypes",
    "MarkTypes",
    "Node",
    "TextTypes",
    "is_text_node",
    "node_attrs",
    "node_type",
]
