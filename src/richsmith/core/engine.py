"""Rich-text rendering engine.

:class:`RichTextResolver` walks a document tree and dispatches every node to
the resolver registered for its type. The walk is synchronous and never
suspends; embedded components are deferred through placeholders and resolved
by :meth:`RichTextResolver.render_html` in one batched await.

Invocation-scoped state (stable-key counters, queued components) lives in a
:class:`~richsmith.core.context.RenderState` created per top-level call and
handed to resolvers through their :class:`~richsmith.core.context.RenderContext`,
so concurrent renders on one resolver never share tokens or keys.
"""

from __future__ import annotations

from collections.abc import Mapping
from enum import Enum
import logging
from typing import Any

from .components import (
    ComponentRenderer,
    ComponentRendererFactory,
    ComponentRendererProvider,
    resolve_pending,
    substitute_placeholders,
)
from .config import ResolverConfig
from .context import ImageOptimizer, RenderContext, RenderFn, RenderState, TextFn
from .diagnostics import DiagnosticEmitter, LoggingEmitter
from .exceptions import MissingResolverError
from .nodes import BlockTypes, is_text_node, node_type
from .rules import Resolver, ResolverRegistry, merge


logger = logging.getLogger(__name__)


def _default_registry() -> ResolverRegistry:
    from richsmith.adapters.handlers import builtin_registry

    return builtin_registry()


class RichTextResolver:
    """Render rich-text documents through a registry of node resolvers."""

    def __init__(
        self,
        config: ResolverConfig | None = None,
        *,
        resolvers: Mapping[str | Enum, Resolver] | None = None,
        render_fn: RenderFn | None = None,
        text_fn: TextFn | None = None,
        image_optimizer: ImageOptimizer | None = None,
        component_renderer: ComponentRenderer | None = None,
        component_factory: ComponentRendererFactory | None = None,
        emitter: DiagnosticEmitter | None = None,
    ) -> None:
        from richsmith.adapters import html
        from richsmith.adapters.images import optimize_image

        self.config = config or ResolverConfig()
        self.render_fn: RenderFn = render_fn or html.render_html
        self.text_fn: TextFn = text_fn or html.render_text
        self.image_optimizer = image_optimizer or optimize_image
        self.emitter = emitter or LoggingEmitter(logger_obj=logger)

        self.original_resolvers = _default_registry()
        self.merged_resolvers = merge(self.original_resolvers, resolvers)
        self.components = ComponentRendererProvider(
            component_renderer, component_factory, emitter=self.emitter
        )

    def render(self, node: Any) -> Any:
        """Render *node* synchronously.

        Embedded components are left as placeholders; use
        :meth:`render_html` to have them substituted.
        """
        return self._render(node, RenderState())

    async def render_html(self, document: Any) -> str:
        """Render *document* to text and substitute embedded components."""
        renderer = await self.components.get()
        state = RenderState(component_renderer=renderer)
        output = self._flatten(self._render(document, state))
        replacements = await resolve_pending(
            state.pending,
            renderer,
            language=self.config.language,
            emitter=self.emitter,
        )
        return substitute_placeholders(output, replacements)

    def _render(self, node: Any, state: RenderState) -> Any:
        if isinstance(node, list):
            return [self._render_node(item, state) for item in node if item]
        if not node:
            return ""
        if node_type(node) == BlockTypes.DOCUMENT.value:
            content = node.get("content")
            items = content if isinstance(content, list) else []
            rendered = [self._render_node(item, state) for item in items if item]
            if self.config.structured_output:
                return rendered
            return self._flatten(rendered)
        return self._render_node(node, state)

    def _render_node(self, node: Any, state: RenderState) -> Any:
        type_key = node_type(node)
        if type_key is None:
            return ""

        resolver = self.merged_resolvers.get(type_key)
        if resolver is None:
            error = MissingResolverError(type_key)
            self.emitter.warning(str(error))
            self.emitter.event("missing_resolver", {"type": type_key})
            return ""

        context = self._create_context(state)
        if is_text_node(node):
            return resolver(node, context)

        content = node.get("content")
        children = (
            [self._render(child, state) for child in content if child]
            if isinstance(content, list)
            else None
        )
        return resolver({**node, "children": children}, context)

    def _create_context(self, state: RenderState) -> RenderContext:
        return RenderContext(
            render_fn=self.render_fn,
            original_resolvers=self.original_resolvers,
            merged_resolvers=self.merged_resolvers,
            config=self.config,
            state=state,
            render=lambda node: self._render(node, state),
            text_fn=self.text_fn,
            emitter=self.emitter,
            image_optimizer=self.image_optimizer,
        )

    @staticmethod
    def _flatten(output: Any) -> str:
        if isinstance(output, str):
            return output
        if isinstance(output, (list, tuple)):
            return "".join(RichTextResolver._flatten(item) for item in output)
        return "" if output is None else str(output)


__all__ = ["RichTextResolver"]
