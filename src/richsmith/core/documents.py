"""Document-level helpers."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any


def has_content(document: Any) -> bool:
    """Return whether any top-level child of *document* has children.

    Malformed input yields ``False`` rather than raising.
    """
    if not isinstance(document, Mapping):
        return False
    content = document.get("content") or []
    if not isinstance(content, list):
        return False
    for item in content:
        if not isinstance(item, Mapping):
            continue
        children = item.get("content")
        if isinstance(children, list) and children:
            return True
    return False


__all__ = ["has_content"]
