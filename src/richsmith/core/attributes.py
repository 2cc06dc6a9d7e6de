"""Attribute normalisation and HTML serialisation primitives.

Resolvers never build attribute strings themselves. They reshape the raw
``attrs`` mapping of a node with the helpers below and hand the result to
``RenderContext.emit``; the emitter decides how the mapping is serialised.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any


SELF_CLOSING_TAGS: frozenset[str] = frozenset(
    {
        "area",
        "base",
        "br",
        "col",
        "embed",
        "hr",
        "img",
        "input",
        "link",
        "meta",
        "param",
        "source",
        "track",
        "wbr",
    }
)

_HTML_ESCAPES = {
    "&": "&amp;",
    "<": "&lt;",
    ">": "&gt;",
    '"': "&quot;",
    "'": "&#039;",
}
_HTML_ESCAPE_TABLE = str.maketrans(_HTML_ESCAPES)


def escape_html(text: Any) -> str:
    """Escape the five HTML-significant characters of *text*."""
    if text is None:
        return ""
    return str(text).translate(_HTML_ESCAPE_TABLE)


def clean_attributes(attrs: Mapping[str, Any]) -> dict[str, Any]:
    """Return a copy of *attrs* without ``None`` values."""
    return {key: value for key, value in attrs.items() if value is not None}


def _as_number(value: Any) -> float | None:
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return value
    if isinstance(value, str):
        try:
            return float(value.strip())
        except ValueError:
            return None
    return None


def process_attributes(attrs: Mapping[str, Any] | None = None) -> dict[str, Any]:
    """Reshape block attributes into their emitted form.

    ``textAlign`` and an existing ``style`` collapse into a single ``style``
    string (existing style first, always ``;`` terminated); ``class`` and ``id``
    pass through; ``None`` values are dropped.
    """
    rest = dict(attrs or {})
    text_align = rest.pop("textAlign", None)
    class_name = rest.pop("class", None)
    id_name = rest.pop("id", None)
    existing_style = rest.pop("style", None)

    styles: list[str] = []
    if existing_style:
        existing_style = str(existing_style)
        styles.append(existing_style if existing_style.endswith(";") else f"{existing_style};")
    if text_align:
        styles.append(f"text-align: {text_align};")

    result: dict[str, Any] = {**rest, "class": class_name, "id": id_name}
    if styles:
        result["style"] = " ".join(styles)
    return clean_attributes(result)


def table_cell_attributes(attrs: Mapping[str, Any] | None = None) -> dict[str, Any]:
    """Reshape ``tableCell``/``tableHeader`` attributes.

    Spans are kept only above one; ``colwidth``, ``backgroundColor`` and
    ``textAlign`` are consumed into the style string in that order.
    """
    rest = dict(attrs or {})
    colspan = rest.pop("colspan", None)
    rowspan = rest.pop("rowspan", None)
    colwidth = rest.pop("colwidth", None)
    background_color = rest.pop("backgroundColor", None)
    text_align = rest.pop("textAlign", None)

    styles: list[str] = []
    if colwidth:
        styles.append(f"width: {_format_width(colwidth)}px;")
    if background_color:
        styles.append(f"background-color: {background_color};")
    if text_align:
        styles.append(f"text-align: {text_align};")

    span = _as_number(colspan)
    if span is not None and span > 1:
        rest["colspan"] = colspan
    span = _as_number(rowspan)
    if span is not None and span > 1:
        rest["rowspan"] = rowspan
    if styles:
        rest["style"] = " ".join(styles)
    return clean_attributes(rest)


def _format_width(value: Any) -> str:
    # The editor stores column widths as a one-element list.
    if isinstance(value, (list, tuple)):
        return ",".join(str(item) for item in value)
    return str(value)


def attrs_to_style(attrs: Mapping[str, Any] | None = None) -> str:
    """Serialise a mapping of CSS properties as ``key: value; key: value``."""
    if not attrs:
        return ""
    return "; ".join(f"{key}: {value}" for key, value in attrs.items())


def attrs_to_string(attrs: Mapping[str, Any] | None = None) -> str:
    """Serialise attributes as ``key="value"`` pairs.

    A nested ``custom`` mapping (free-form link attributes) is flattened into
    the top level; ``None`` values and other nested mappings (such as the
    ``story`` payload of internal links) are skipped.
    """
    if not attrs:
        return ""
    normalised = {key: value for key, value in attrs.items() if key != "custom"}
    custom = attrs.get("custom")
    if isinstance(custom, Mapping):
        normalised.update(custom)

    parts: list[str] = []
    for key, value in normalised.items():
        if value is None or isinstance(value, Mapping):
            continue
        if isinstance(value, bool):
            value = "true" if value else "false"
        parts.append(f'{key}="{escape_html(value)}"')
    return " ".join(parts)


__all__ = [
    "SELF_CLOSING_TAGS",
    "attrs_to_string",
    "attrs_to_style",
    "clean_attributes",
    "escape_html",
    "process_attributes",
    "table_cell_attributes",
]
