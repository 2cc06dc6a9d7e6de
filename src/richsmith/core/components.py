"""Deferred rendering of embedded components.

The tree walk is synchronous. Embedded components (``blok`` nodes) can only be
rendered by an external asynchronous capability, so the component resolver
emits an opaque placeholder and queues a :class:`PendingComponent` on the
invocation's render state. Once the walk finishes, :func:`resolve_pending`
renders every queued component concurrently and :func:`substitute_placeholders`
swaps each placeholder for its result in a single pass.
"""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Callable, Mapping, Sequence
from dataclasses import dataclass
import logging
import re
from typing import Any, Protocol, runtime_checkable

from .diagnostics import DiagnosticEmitter, NullEmitter
from .exceptions import ComponentRenderError


logger = logging.getLogger(__name__)

PLACEHOLDER_PATTERN = re.compile(r"<!--ASYNC-([\w-]+)-->")
COMPONENT_ERROR_MARKER = "<!-- Component render error -->"


@runtime_checkable
class ComponentRenderer(Protocol):
    """External capability rendering one component reference to markup."""

    async def render_component(
        self, blok: Mapping[str, Any], *, language: str | None = None
    ) -> str: ...


ComponentRendererFactory = Callable[[], Awaitable["ComponentRenderer | None"]]


@dataclass(frozen=True, slots=True)
class PendingComponent:
    """Component queued during the walk, keyed by its placeholder token."""

    token: str
    blok: Mapping[str, Any]


def placeholder_for(token: str) -> str:
    """Return the placeholder string standing in for *token*."""
    return f"<!--ASYNC-{token}-->"


class ComponentRendererProvider:
    """Lazily initialise a component renderer exactly once.

    The provider wraps either a ready renderer or an async factory. The
    factory runs on first use; concurrent callers share the same attempt. A
    factory that fails or returns ``None`` leaves the capability unavailable
    for the lifetime of the provider.
    """

    def __init__(
        self,
        renderer: ComponentRenderer | None = None,
        factory: ComponentRendererFactory | None = None,
        *,
        emitter: DiagnosticEmitter | None = None,
    ) -> None:
        self._renderer = renderer
        self._factory = factory
        self._initialised = renderer is not None or factory is None
        self._lock: asyncio.Lock | None = None
        self._emitter = emitter or NullEmitter()

    @property
    def renderer(self) -> ComponentRenderer | None:
        return self._renderer

    @property
    def initialised(self) -> bool:
        return self._initialised

    async def get(self) -> ComponentRenderer | None:
        """Return the renderer, running the factory on first call."""
        if self._initialised:
            return self._renderer
        if self._lock is None:
            self._lock = asyncio.Lock()
        async with self._lock:
            if self._initialised:
                return self._renderer
            assert self._factory is not None
            try:
                self._renderer = await self._factory()
            except Exception as exc:
                self._renderer = None
                self._emitter.warning(
                    "Component renderer could not be initialised; embedded components render blank.",
                    exc,
                )
            else:
                if self._renderer is None:
                    self._emitter.event(
                        "component_renderer_unavailable",
                        {"reason": "factory returned no renderer"},
                    )
            finally:
                self._initialised = True
        return self._renderer


async def _render_one(
    pending: PendingComponent,
    renderer: ComponentRenderer,
    language: str | None,
    emitter: DiagnosticEmitter,
) -> tuple[str, str]:
    try:
        result = await renderer.render_component(pending.blok, language=language)
    except Exception as exc:
        component = pending.blok.get("component") if isinstance(pending.blok, Mapping) else None
        error = ComponentRenderError(f"Component rendering failed: {component or '<unknown>'}")
        error.__cause__ = exc
        emitter.error(str(error), error)
        return pending.token, COMPONENT_ERROR_MARKER
    return pending.token, "" if result is None else str(result)


async def resolve_pending(
    pending: Sequence[PendingComponent],
    renderer: ComponentRenderer | None,
    *,
    language: str | None = None,
    emitter: DiagnosticEmitter | None = None,
) -> dict[str, str]:
    """Render queued components concurrently and map tokens to results.

    Individual failures are converted to :data:`COMPONENT_ERROR_MARKER` and
    never cancel sibling renders.
    """
    active_emitter = emitter or NullEmitter()
    if not pending or renderer is None:
        return {}
    results = await asyncio.gather(
        *(_render_one(item, renderer, language, active_emitter) for item in pending)
    )
    replacements = dict(results)
    failed = sum(1 for value in replacements.values() if value == COMPONENT_ERROR_MARKER)
    active_emitter.event("component_render", {"pending": len(pending), "failed": failed})
    return replacements


def substitute_placeholders(text: str, replacements: Mapping[str, str]) -> str:
    """Replace every placeholder in *text*; unknown tokens become blank."""
    return PLACEHOLDER_PATTERN.sub(lambda match: replacements.get(match.group(1), ""), text)


__all__ = [
    "COMPONENT_ERROR_MARKER",
    "PLACEHOLDER_PATTERN",
    "ComponentRenderer",
    "ComponentRendererFactory",
    "ComponentRendererProvider",
    "PendingComponent",
    "placeholder_for",
    "resolve_pending",
    "substitute_placeholders",
]
