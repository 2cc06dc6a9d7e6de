"""Custom exception hierarchy for the rich-text rendering pipeline."""

from __future__ import annotations


class RichTextRenderingError(RuntimeError):
    """Base exception for rich-text rendering failures."""


class MissingResolverError(RichTextRenderingError):
    """Raised when no resolver is registered for a node type."""

    def __init__(self, node_type: str) -> None:
        super().__init__(f"No resolver found for node type {node_type}")
        self.node_type = node_type


class InvalidNodeError(RichTextRenderingError):
    """Raised when a resolver receives an unexpected node shape."""


class ComponentRenderError(RichTextRenderingError):
    """Raised when an embedded component cannot be rendered."""


def exception_messages(exc: BaseException) -> list[str]:
    """Return the collected message chain for an exception and its causes."""
    messages: list[str] = []
    visited: set[int] = set()
    current: BaseException | None = exc
    while current is not None and id(current) not in visited:
        visited.add(id(current))
        text = str(current).strip()
        if text:
            first_line = text.splitlines()[0].strip()
            if first_line:
                messages.append(first_line)
        current = current.__cause__ or current.__context__
    return messages


def exception_hint(exc: BaseException) -> str | None:
    """Return the most specific message available for an exception chain."""
    messages = exception_messages(exc)
    return messages[-1] if messages else None


__all__ = [
    "ComponentRenderError",
    "InvalidNodeError",
    "MissingResolverError",
    "RichTextRenderingError",
    "exception_hint",
    "exception_messages",
]
