from __future__ import annotations

import asyncio
from collections.abc import Mapping
import logging
from typing import Any

import pytest

from richsmith.core.components import (
    COMPONENT_ERROR_MARKER,
    PLACEHOLDER_PATTERN,
    ComponentRenderer,
    ComponentRendererProvider,
    PendingComponent,
    placeholder_for,
    resolve_pending,
    substitute_placeholders,
)
from richsmith.core.config import ResolverConfig
from richsmith.core.diagnostics import DiagnosticEmitter
from richsmith.core.engine import RichTextResolver


class FakeRenderer:
    def __init__(self, *, fail_on: set[str] | None = None) -> None:
        self.fail_on = fail_on or set()
        self.calls: list[tuple[str, str | None]] = []

    async def render_component(
        self, blok: Mapping[str, Any], *, language: str | None = None
    ) -> str:
        name = str(blok.get("component"))
        self.calls.append((name, language))
        await asyncio.sleep(0)
        if name in self.fail_on:
            raise RuntimeError(f"cannot render {name}")
        return f"<div>{name}</div>"


class RecordingEmitter:
    debug_enabled = False

    def __init__(self) -> None:
        self.warnings: list[str] = []
        self.errors: list[tuple[str, BaseException | None]] = []
        self.events: list[tuple[str, dict[str, Any]]] = []

    def warning(self, message: str, exc: BaseException | None = None) -> None:
        self.warnings.append(message)

    def error(self, message: str, exc: BaseException | None = None) -> None:
        self.errors.append((message, exc))

    def event(self, name: str, payload: Mapping[str, Any]) -> None:
        self.events.append((name, dict(payload)))


def _blok(*components: Any) -> dict[str, Any]:
    body = [{"component": name} if isinstance(name, str) else name for name in components]
    return {"type": "blok", "attrs": {"body": body}}


def _doc(*content: dict[str, Any]) -> dict[str, Any]:
    return {"type": "doc", "content": list(content)}


def test_fake_renderer_satisfies_protocol() -> None:
    assert isinstance(FakeRenderer(), ComponentRenderer)
    assert isinstance(RecordingEmitter(), DiagnosticEmitter)


def test_placeholders_are_substituted() -> None:
    renderer = FakeRenderer()
    resolver = RichTextResolver(component_renderer=renderer)
    output = asyncio.run(resolver.render_html(_doc(_blok("teaser", "grid"))))
    assert output == "<div>teaser</div>\n<div>grid</div>"
    assert {name for name, _ in renderer.calls} == {"teaser", "grid"}


def test_components_mix_with_regular_content() -> None:
    resolver = RichTextResolver(component_renderer=FakeRenderer())
    document = _doc(
        {"type": "paragraph", "content": [{"type": "text", "text": "Before"}]},
        _blok("banner"),
    )
    output = asyncio.run(resolver.render_html(document))
    assert output == "<p>Before</p><div>banner</div>"


def test_non_mapping_body_entries_render_blank() -> None:
    resolver = RichTextResolver(component_renderer=FakeRenderer())
    output = asyncio.run(resolver.render_html(_doc(_blok("teaser", 42, "grid"))))
    assert output == "<div>teaser</div>\n\n<div>grid</div>"


def test_non_list_body_renders_blank() -> None:
    resolver = RichTextResolver(component_renderer=FakeRenderer())
    node = {"type": "blok", "attrs": {"body": {"component": "teaser"}}}
    assert asyncio.run(resolver.render_html(node)) == ""


def test_failed_component_becomes_error_marker(caplog: pytest.LogCaptureFixture) -> None:
    renderer = FakeRenderer(fail_on={"broken"})
    resolver = RichTextResolver(component_renderer=renderer)
    with caplog.at_level(logging.ERROR):
        output = asyncio.run(resolver.render_html(_doc(_blok("broken", "grid"))))
    assert output == f"{COMPONENT_ERROR_MARKER}\n<div>grid</div>"
    assert any("Component rendering failed: broken" in record.message for record in caplog.records)


def test_failures_are_reported_through_emitter() -> None:
    emitter = RecordingEmitter()
    resolver = RichTextResolver(
        component_renderer=FakeRenderer(fail_on={"broken"}), emitter=emitter
    )
    asyncio.run(resolver.render_html(_doc(_blok("broken", "grid"))))
    assert len(emitter.errors) == 1
    message, exc = emitter.errors[0]
    assert "broken" in message
    assert isinstance(exc.__cause__, RuntimeError)
    assert ("component_render", {"pending": 2, "failed": 1}) in emitter.events


def test_missing_renderer_leaves_no_placeholders() -> None:
    resolver = RichTextResolver()
    output = asyncio.run(resolver.render_html(_doc(_blok("teaser", "grid"))))
    assert output == "\n"
    assert "<!--ASYNC" not in output


def test_sync_render_keeps_placeholders() -> None:
    resolver = RichTextResolver(component_renderer=FakeRenderer())
    output = resolver.render(_blok("teaser"))
    assert PLACEHOLDER_PATTERN.fullmatch(output)


def test_language_is_forwarded() -> None:
    renderer = FakeRenderer()
    resolver = RichTextResolver(ResolverConfig(language="de"), component_renderer=renderer)
    asyncio.run(resolver.render_html(_blok("teaser")))
    assert renderer.calls == [("teaser", "de")]


def test_factory_runs_once() -> None:
    calls = 0

    async def factory() -> FakeRenderer:
        nonlocal calls
        calls += 1
        return FakeRenderer()

    resolver = RichTextResolver(component_factory=factory)

    async def scenario() -> list[str]:
        first = await resolver.render_html(_blok("a"))
        second, third = await asyncio.gather(
            resolver.render_html(_blok("b")), resolver.render_html(_blok("c"))
        )
        return [first, second, third]

    assert asyncio.run(scenario()) == ["<div>a</div>", "<div>b</div>", "<div>c</div>"]
    assert calls == 1
    assert resolver.components.initialised


def test_failing_factory_renders_components_blank() -> None:
    async def factory() -> FakeRenderer:
        raise ConnectionError("CMS unreachable")

    emitter = RecordingEmitter()
    resolver = RichTextResolver(component_factory=factory, emitter=emitter)
    assert asyncio.run(resolver.render_html(_blok("teaser"))) == ""
    assert asyncio.run(resolver.render_html(_blok("teaser"))) == ""
    assert len(emitter.warnings) == 1
    assert resolver.components.renderer is None


def test_factory_returning_none_is_reported() -> None:
    async def factory() -> None:
        return None

    emitter = RecordingEmitter()
    resolver = RichTextResolver(component_factory=factory, emitter=emitter)
    assert asyncio.run(resolver.render_html(_blok("teaser"))) == ""
    assert emitter.events == [
        ("component_renderer_unavailable", {"reason": "factory returned no renderer"})
    ]


def test_concurrent_invocations_do_not_share_state() -> None:
    resolver = RichTextResolver(component_renderer=FakeRenderer())

    async def scenario() -> tuple[str, str]:
        return await asyncio.gather(
            resolver.render_html(_doc(_blok("left-1", "left-2"))),
            resolver.render_html(_doc(_blok("right-1"))),
        )

    left, right = asyncio.run(scenario())
    assert left == "<div>left-1</div>\n<div>left-2</div>"
    assert right == "<div>right-1</div>"


def test_provider_without_factory_is_initialised() -> None:
    provider = ComponentRendererProvider()
    assert provider.initialised
    assert asyncio.run(provider.get()) is None


def test_resolve_pending_without_renderer_is_empty() -> None:
    pending = [PendingComponent(token="abc", blok={"component": "x"})]
    assert asyncio.run(resolve_pending(pending, None)) == {}


def test_resolve_pending_converts_none_results() -> None:
    class SilentRenderer:
        async def render_component(
            self, blok: Mapping[str, Any], *, language: str | None = None
        ) -> Any:
            return None

    pending = [PendingComponent(token="abc", blok={"component": "x"})]
    assert asyncio.run(resolve_pending(pending, SilentRenderer())) == {"abc": ""}


def test_substitute_placeholders_blanks_unknown_tokens() -> None:
    text = f"a{placeholder_for('known-1')}b{placeholder_for('unknown-2')}c"
    assert substitute_placeholders(text, {"known-1": "X"}) == "aXbc"
