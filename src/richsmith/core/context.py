"""Rendering context primitives shared across resolvers."""

from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Protocol
import uuid

from .components import PendingComponent, placeholder_for
from .diagnostics import DiagnosticEmitter, NullEmitter


if TYPE_CHECKING:  # pragma: no cover - typing only
    from .components import ComponentRenderer
    from .config import ResolverConfig
    from .rules import ResolverRegistry


class RenderFn(Protocol):
    """Output-construction function composing a tag, attributes and children."""

    def __call__(self, tag: str, attrs: dict[str, Any], children: Any = None) -> Any: ...


TextFn = Callable[[str, dict[str, Any]], Any]
ImageOptimizer = Callable[[str, Any], tuple[str, dict[str, Any]]]


@dataclass(slots=True)
class RenderState:
    """Mutable state owned by a single top-level render invocation."""

    component_renderer: ComponentRenderer | None = None
    pending: list[PendingComponent] = field(default_factory=list)
    counters: dict[str, int] = field(default_factory=dict)

    def next_key(self, tag: str) -> str:
        """Return the next stable key for *tag* (``<tag>-<n>``, zero based)."""
        count = self.counters.get(tag, 0)
        self.counters[tag] = count + 1
        return f"{tag}-{count}"

    def defer_component(self, blok: Mapping[str, Any]) -> str:
        """Mint a placeholder for *blok* and queue it when a renderer exists."""
        token = str(uuid.uuid4())
        if self.component_renderer is not None:
            self.pending.append(PendingComponent(token=token, blok=blok))
        return placeholder_for(token)


@dataclass
class RenderContext:
    """Handle passed to every resolver invocation."""

    render_fn: RenderFn
    original_resolvers: ResolverRegistry
    merged_resolvers: ResolverRegistry
    config: ResolverConfig
    state: RenderState
    render: Callable[[Any], Any]
    text_fn: TextFn
    emitter: DiagnosticEmitter = field(default_factory=NullEmitter)
    image_optimizer: ImageOptimizer | None = None

    def emit(self, tag: str, attrs: Mapping[str, Any] | None = None, children: Any = None) -> Any:
        """Compose *tag*, *attrs* and *children* into an output value."""
        attributes = dict(attrs or {})
        if self.config.keyed_resolvers and tag:
            attributes["key"] = self.state.next_key(tag)
        return self.render_fn(tag, attributes, children)


__all__ = ["ImageOptimizer", "RenderContext", "RenderFn", "RenderState", "TextFn"]
