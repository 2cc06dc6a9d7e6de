from typing import Any

import pytest

from richsmith.adapters.handlers import builtin_registry
from richsmith.core.nodes import BlockTypes, MarkTypes
from richsmith.core.rules import (
    ResolverDefinition,
    ResolverRegistry,
    build_registry,
    collect_from,
    merge,
    resolves,
)


def _noop(node: Any, context: Any) -> str:
    return ""


def test_resolves_records_definition() -> None:
    @resolves(BlockTypes.PARAGRAPH, "custom", name="para")
    def handler(node: Any, context: Any) -> str:
        return "x"

    definition = handler.__resolver_rule__
    assert isinstance(definition, ResolverDefinition)
    assert definition.types == ("paragraph", "custom")
    assert definition.name == "para"


def test_resolves_requires_a_type() -> None:
    with pytest.raises(TypeError):
        resolves()


def test_registry_normalises_enum_keys() -> None:
    registry = ResolverRegistry({BlockTypes.HEADING: _noop})
    assert "heading" in registry
    assert BlockTypes.HEADING in registry
    assert registry[BlockTypes.HEADING] is _noop
    assert registry["heading"] is _noop
    assert 42 not in registry


def test_registry_rejects_non_callables() -> None:
    with pytest.raises(TypeError, match="must be callable"):
        ResolverRegistry({"paragraph": "not a resolver"})


def test_registry_is_read_only() -> None:
    registry = ResolverRegistry({"paragraph": _noop})
    with pytest.raises(TypeError):
        registry["paragraph"] = _noop  # type: ignore[index]


def test_collect_from_class_body() -> None:
    class Handlers:
        @resolves("alpha", name="alpha")
        def alpha(node: Any, context: Any) -> str:
            return "a"

        @resolves("beta", "gamma")
        def beta(node: Any, context: Any) -> str:
            return "b"

        def undecorated(self) -> None:
            return None

    collected = collect_from(Handlers)
    assert set(collected) == {"alpha", "beta", "gamma"}
    assert collected["gamma"] is collected["beta"]


def test_build_registry_later_sources_win() -> None:
    @resolves("paragraph")
    def first(node: Any, context: Any) -> str:
        return "first"

    @resolves("paragraph")
    def second(node: Any, context: Any) -> str:
        return "second"

    registry = build_registry(first, second)
    assert registry["paragraph"] is second


def test_merge_returns_new_registry() -> None:
    base = ResolverRegistry({"paragraph": _noop, "heading": _noop})

    def override(node: Any, context: Any) -> str:
        return "override"

    merged = merge(base, {BlockTypes.PARAGRAPH: override, "custom": override})
    assert merged is not base
    assert merged["paragraph"] is override
    assert merged["heading"] is _noop
    assert merged["custom"] is override
    assert base["paragraph"] is _noop


def test_merge_without_overrides_keeps_entries() -> None:
    base = builtin_registry()
    assert dict(merge(base, {})) == dict(base)
    assert dict(merge(base, None)) == dict(base)


def test_builtin_registry_covers_every_known_type() -> None:
    registry = builtin_registry()
    for member in (*BlockTypes, *MarkTypes):
        assert member.value in registry, member
    assert "text" in registry


def test_describe_lists_resolver_names() -> None:
    entries = builtin_registry().describe()
    by_type = {entry["type"]: entry for entry in entries}
    assert by_type["heading"]["name"] == "heading"
    assert by_type["bold"]["name"] == by_type["strong"]["name"] == "bold"
    assert by_type["blok"]["module"] == "richsmith.adapters.handlers.components"
    assert [entry["type"] for entry in entries] == sorted(by_type)
