"""Configuration models used by the rich-text renderer.

ImageFilters

`blur` (`int | None`)
: Gaussian blur radius passed to the image service (0-100).

`brightness` (`int | None`)
: Brightness adjustment (-100-100).

`fill` (`str | None`)
: Background colour used when padding transparent images (hex without `#`
  or `transparent`).

`format` (`str | None`)
: Output format (`webp`, `png`, `jpeg`, `avif`).

`grayscale` (`bool`)
: Render the image in shades of grey.

`quality` (`int | None`)
: Compression quality (0-100).

`rotate` (`int | None`)
: Rotation in degrees (0, 90, 180, 270).

ImageOptimizationOptions

`class_name` (`str | None`)
: CSS class added to the emitted `img` element.

`width` / `height` (`int | None`)
: Resize target in pixels; `0` keeps the aspect ratio on that axis.

`loading` (`"lazy" | "eager" | None`)
: Native loading hint.

`filters` (`ImageFilters | None`)
: Image service filters appended to the optimised URL.

`srcset` (`list[int | tuple[int, int]]`)
: Widths (or width/height pairs) used to build a responsive `srcset`.

`sizes` (`list[str]`)
: Media conditions joined into the `sizes` attribute.

ResolverConfig

`keyed_resolvers` (`bool`)
: Stamp a stable `key` attribute (`<tag>-<n>`) on every emitted element and
  text leaf. Useful when the output feeds a virtual DOM.

`optimize_images` (`bool | ImageOptimizationOptions`)
: Route image sources through the image service. `True` applies the service
  without resizing.

`language` (`str | None`)
: Locale tag forwarded unchanged to the embedded component renderer.

`structured_output` (`bool`)
: Return the list of rendered top-level nodes instead of joining them into a
  single string. Enable it with a custom render function whose output is not
  a string.

AssetHostConfig

`enabled` (`bool`)
: Rewrite CMS asset URLs to `assets_url`.

`assets_url` (`str`)
: Replacement host (or path prefix) for CMS assets.

`source_host` (`str`)
: Host whose URLs get rewritten.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
import os
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .nodes import MarkTypes


ASSET_HOST_ENV = "RICHSMITH_ASSET_HOST_ENABLED"
ASSETS_URL_ENV = "RICHSMITH_ASSETS_URL"
DEFAULT_ASSETS_PATH = "/web-assets"
STORYBLOK_ASSET_HOST = "https://a.storyblok.com"

_MARK_TYPES = frozenset(member.value for member in MarkTypes)


class ImageFilters(BaseModel):
    """Filters understood by the CMS image service."""

    model_config = ConfigDict(extra="forbid")

    blur: int | None = Field(default=None, ge=0, le=100)
    brightness: int | None = Field(default=None, ge=-100, le=100)
    fill: str | None = None
    format: Literal["webp", "png", "jpeg", "avif"] | None = None
    grayscale: bool = False
    quality: int | None = Field(default=None, ge=0, le=100)
    rotate: Literal[0, 90, 180, 270] | None = None


class ImageOptimizationOptions(BaseModel):
    """Options applied when image optimisation is enabled."""

    model_config = ConfigDict(extra="forbid")

    class_name: str | None = None
    width: int | None = Field(default=None, ge=0)
    height: int | None = Field(default=None, ge=0)
    loading: Literal["lazy", "eager"] | None = None
    filters: ImageFilters | None = None
    srcset: list[int | tuple[int, int]] = Field(default_factory=list)
    sizes: list[str] = Field(default_factory=list)


class ResolverConfig(BaseModel):
    """Configuration of a :class:`~richsmith.core.engine.RichTextResolver`."""

    model_config = ConfigDict(extra="forbid")

    keyed_resolvers: bool = False
    optimize_images: bool | ImageOptimizationOptions = False
    language: str | None = None
    structured_output: bool = False

    def image_options(self) -> ImageOptimizationOptions | None:
        """Return the effective image options, or ``None`` when disabled."""
        if isinstance(self.optimize_images, ImageOptimizationOptions):
            return self.optimize_images
        if self.optimize_images:
            return ImageOptimizationOptions()
        return None


class RenderOptions(BaseModel):
    """Options accepted by :func:`richsmith.api.render_rich_text`."""

    model_config = ConfigDict(extra="forbid", populate_by_name=True)

    except_: list[str] = Field(default_factory=list, alias="except")
    resolvers: dict[str, Callable[..., Any]] = Field(default_factory=dict)
    language: str | None = None

    @field_validator("except_", mode="before")
    @classmethod
    def _coerce_except(cls, value: Any) -> Any:
        if isinstance(value, str):
            return [value]
        if isinstance(value, (set, frozenset, tuple)):
            return list(value)
        return value

    @field_validator("except_")
    @classmethod
    def _check_except(cls, value: list[str]) -> list[str]:
        names = [getattr(item, "value", item) for item in value]
        unknown = [name for name in names if name not in _MARK_TYPES]
        if unknown:
            msg = f"except accepts mark types only, got: {', '.join(unknown)}"
            raise ValueError(msg)
        return names

    @field_validator("resolvers", mode="before")
    @classmethod
    def _coerce_resolvers(cls, value: Any) -> Any:
        if value is None:
            return {}
        if isinstance(value, Mapping):
            return {getattr(key, "value", key): resolver for key, resolver in value.items()}
        return value


class AssetHostConfig(BaseModel):
    """Where CMS-hosted assets are served from."""

    model_config = ConfigDict(extra="forbid")

    enabled: bool = False
    assets_url: str = DEFAULT_ASSETS_PATH
    source_host: str = STORYBLOK_ASSET_HOST

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> AssetHostConfig:
        """Build the configuration from environment variables."""
        env = os.environ if environ is None else environ
        return cls(
            enabled=env.get(ASSET_HOST_ENV, "").strip().lower() == "yes",
            assets_url=env.get(ASSETS_URL_ENV) or DEFAULT_ASSETS_PATH,
        )


__all__ = [
    "ASSETS_URL_ENV",
    "ASSET_HOST_ENV",
    "DEFAULT_ASSETS_PATH",
    "STORYBLOK_ASSET_HOST",
    "AssetHostConfig",
    "ImageFilters",
    "ImageOptimizationOptions",
    "RenderOptions",
    "ResolverConfig",
]
