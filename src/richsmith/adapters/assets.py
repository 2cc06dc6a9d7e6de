"""Rewrite CMS asset URLs to an alternate host."""

from __future__ import annotations

from collections.abc import Callable

from richsmith.core.config import AssetHostConfig


def transform_asset(
    src: str | None,
    transformer: Callable[[str], str] | None = None,
    *,
    config: AssetHostConfig | None = None,
) -> str | None:
    """Return *src* with the CMS asset host swapped when enabled.

    The configuration is read from the environment unless given explicitly.
    *transformer* runs last, on the possibly rewritten URL.
    """
    if not src:
        return src
    settings = config or AssetHostConfig.from_env()
    transformed = src
    if settings.enabled and src.startswith(settings.source_host):
        transformed = settings.assets_url + src[len(settings.source_host) :]
    return transformer(transformed) if transformer else transformed


__all__ = ["transform_asset"]
