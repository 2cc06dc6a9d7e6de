"""Default HTML output functions."""

from __future__ import annotations

from typing import Any

from richsmith.core.attributes import SELF_CLOSING_TAGS, attrs_to_string, escape_html


def _join_children(children: Any) -> str:
    if children is None:
        return ""
    if isinstance(children, (list, tuple)):
        return "".join(_join_children(child) for child in children)
    return str(children)


def render_html(tag: str, attrs: dict[str, Any] | None = None, children: Any = None) -> str:
    """Serialise an element; an empty *tag* returns the children alone."""
    content = _join_children(children)
    if not tag:
        return content
    attrs_string = attrs_to_string(attrs or {})
    tag_string = f"{tag} {attrs_string}" if attrs_string else tag
    if tag in SELF_CLOSING_TAGS:
        return f"<{tag_string}>"
    return f"<{tag_string}>{content}</{tag}>"


def render_text(text: str, attrs: dict[str, Any] | None = None) -> str:
    """Escape a text leaf; attributes are ignored by the HTML output."""
    return escape_html(text)


__all__ = ["render_html", "render_text"]
