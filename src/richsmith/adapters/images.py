"""Image service URL rewriting for CMS-hosted images."""

from __future__ import annotations

import logging
from typing import Any

from richsmith.core.config import ImageFilters, ImageOptimizationOptions


logger = logging.getLogger(__name__)


def _filter_params(filters: ImageFilters | None) -> list[str]:
    if filters is None:
        return []
    params: list[str] = []
    if filters.blur:
        params.append(f"blur({filters.blur})")
    if filters.quality:
        params.append(f"quality({filters.quality})")
    if filters.brightness:
        params.append(f"brightness({filters.brightness})")
    if filters.fill:
        params.append(f"fill({filters.fill})")
    if filters.grayscale:
        params.append("grayscale()")
    if filters.rotate:
        params.append(f"rotate({filters.rotate})")
    if filters.format:
        params.append(f"format({filters.format})")
    return params


def _filters_segment(params: list[str]) -> str:
    return f"filters:{':'.join(params)}" if params else ""


def optimize_image(
    src: str, options: bool | ImageOptimizationOptions | None = True
) -> tuple[str, dict[str, Any]]:
    """Return the optimised source and the extra ``img`` attributes.

    The source is rewritten to ``<src>/m/[<w>x<h>/][filters:...]``; width,
    height, loading, class, ``srcset`` and ``sizes`` become attributes.
    """
    if not options or not src:
        return src, {}
    settings = options if isinstance(options, ImageOptimizationOptions) else ImageOptimizationOptions()

    attrs: dict[str, Any] = {}
    width = settings.width or 0
    height = settings.height or 0
    if width:
        attrs["width"] = width
    if height:
        attrs["height"] = height
    if settings.width == 0 and settings.height == 0:
        logger.warning("Image optimisation ignores a 0x0 resize for %s", src)
    if settings.loading:
        attrs["loading"] = settings.loading
    if settings.class_name:
        attrs["class"] = settings.class_name

    params = _filter_params(settings.filters)
    segment = _filters_segment(params)

    if settings.srcset:
        entries: list[str] = []
        for entry in settings.srcset:
            if isinstance(entry, int):
                entries.append(f"{src}/m/{entry}x0/{segment} {entry}w")
            else:
                entry_width, entry_height = entry
                entries.append(f"{src}/m/{entry_width}x{entry_height}/{segment} {entry_width}w")
        attrs["srcset"] = ", ".join(entries)
    if settings.sizes:
        attrs["sizes"] = ", ".join(settings.sizes)

    result = f"{src}/m/"
    if width > 0 or height > 0:
        result = f"{result}{width}x{height}/"
    if segment:
        result = f"{result}{segment}"
    return result, attrs


__all__ = ["optimize_image"]
