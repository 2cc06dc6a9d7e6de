"""Resolver declaration and registry for the rich-text renderer.

Resolvers declare the node types they handle with the ``@resolves``
decorator, which records a lightweight :class:`ResolverDefinition` on the
callable. :func:`build_registry` collects those declarations from handler
modules into an immutable :class:`ResolverRegistry`, and :func:`merge`
overlays caller-supplied resolvers on top of it.

Architecture

`Declaration layer`
: ``@resolves`` stores a :class:`ResolverDefinition` on every handler.

`Registry layer`
: :class:`ResolverRegistry` is a read-only mapping from node type to
  resolver. Registries are never mutated after construction; merging
  produces a new instance.

Dispatch itself lives in :mod:`richsmith.core.engine`.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Iterator, Mapping
from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import TYPE_CHECKING, Any, cast


if TYPE_CHECKING:  # pragma: no cover - typing only
    from .context import RenderContext


Resolver = Callable[[Any, "RenderContext"], Any]


def _type_key(value: str | Enum) -> str:
    if isinstance(value, Enum):
        return str(value.value)
    return str(value)


@dataclass(frozen=True)
class ResolverDefinition:
    """Descriptor installed on resolver callables by the decorator."""

    types: tuple[str, ...]
    name: str | None = None

    def bind(self, handler: Resolver) -> dict[str, Resolver]:
        """Return the type-to-handler entries contributed by *handler*."""
        return dict.fromkeys(self.types, handler)


def resolves(*types: str | Enum, name: str | None = None) -> Callable[[Resolver], Resolver]:
    """Decorator used to register node resolvers."""
    if not types:
        msg = "@resolves requires at least one node type"
        raise TypeError(msg)
    definition = ResolverDefinition(types=tuple(_type_key(item) for item in types), name=name)

    def decorator(handler: Resolver) -> Resolver:
        cast(Any, handler).__resolver_rule__ = definition
        return handler

    return decorator


class ResolverRegistry(Mapping[str, Resolver]):
    """Immutable mapping from node type to resolver."""

    __slots__ = ("_entries",)

    def __init__(
        self,
        entries: Mapping[str | Enum, Resolver] | Iterable[tuple[str | Enum, Resolver]] = (),
    ) -> None:
        items = entries.items() if isinstance(entries, Mapping) else entries
        table: dict[str, Resolver] = {}
        for key, resolver in items:
            if not callable(resolver):
                msg = f"Resolver for '{_type_key(key)}' must be callable"
                raise TypeError(msg)
            table[_type_key(key)] = resolver
        self._entries = MappingProxyType(table)

    def __getitem__(self, key: str | Enum) -> Resolver:
        return self._entries[_type_key(key)]

    def __iter__(self) -> Iterator[str]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, key: object) -> bool:
        if isinstance(key, (str, Enum)):
            return _type_key(key) in self._entries
        return False

    def __repr__(self) -> str:
        return f"ResolverRegistry({sorted(self._entries)!r})"

    def describe(self) -> list[dict[str, object]]:
        """Return a serialisable snapshot of the registered resolvers."""
        entries: list[dict[str, object]] = []
        for node_type in sorted(self._entries):
            resolver = self._entries[node_type]
            definition = getattr(resolver, "__resolver_rule__", None)
            name = getattr(definition, "name", None) or getattr(
                resolver, "__name__", resolver.__class__.__name__
            )
            entries.append(
                {
                    "type": node_type,
                    "name": name,
                    "module": getattr(resolver, "__module__", None),
                }
            )
        return entries


def collect_from(owner: Any) -> dict[str, Resolver]:
    """Collect decorated resolvers from a module, class or object."""
    collected: dict[str, Resolver] = {}
    for attribute in dir(owner):
        handler = getattr(owner, attribute)
        definition = getattr(handler, "__resolver_rule__", None)
        if definition is None and hasattr(handler, "__func__"):
            definition = getattr(handler.__func__, "__resolver_rule__", None)
        if isinstance(definition, ResolverDefinition):
            collected.update(definition.bind(handler))
    return collected


def build_registry(*sources: Any) -> ResolverRegistry:
    """Build an immutable registry from decorated handlers.

    Sources are modules/objects exposing ``@resolves`` callables, or
    standalone decorated callables. Later sources win on type collisions.
    """
    table: dict[str, Resolver] = {}
    for source in sources:
        definition = getattr(source, "__resolver_rule__", None)
        if isinstance(definition, ResolverDefinition):
            table.update(definition.bind(source))
        else:
            table.update(collect_from(source))
    return ResolverRegistry(table)


def merge(
    base: Mapping[str, Resolver],
    overrides: Mapping[str | Enum, Resolver] | None = None,
) -> ResolverRegistry:
    """Return a new registry where *overrides* replace entries of *base*."""
    table: dict[str | Enum, Resolver] = dict(base)
    if overrides:
        for key, resolver in overrides.items():
            table[_type_key(key)] = resolver
    return ResolverRegistry(table)


__all__ = [
    "Resolver",
    "ResolverDefinition",
    "ResolverRegistry",
    "build_registry",
    "collect_from",
    "merge",
    "resolves",
]
