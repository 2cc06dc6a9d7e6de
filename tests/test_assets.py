import pytest

from richsmith.adapters.assets import transform_asset
from richsmith.core.config import AssetHostConfig


ASSET = "https://a.storyblok.com/f/12345/logo.svg"


def test_asset_untouched_when_disabled(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("RICHSMITH_ASSET_HOST_ENABLED", raising=False)
    assert transform_asset(ASSET) == ASSET


def test_asset_host_rewritten_to_default_path(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("RICHSMITH_ASSET_HOST_ENABLED", "yes")
    monkeypatch.delenv("RICHSMITH_ASSETS_URL", raising=False)
    assert transform_asset(ASSET) == "/web-assets/f/12345/logo.svg"


def test_explicit_config_overrides_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("RICHSMITH_ASSET_HOST_ENABLED", "no")
    config = AssetHostConfig(enabled=True, assets_url="https://cdn.example.com")
    assert transform_asset(ASSET, config=config) == "https://cdn.example.com/f/12345/logo.svg"


def test_foreign_hosts_are_left_alone() -> None:
    config = AssetHostConfig(enabled=True)
    assert transform_asset("https://example.com/a.png", config=config) == "https://example.com/a.png"


def test_transformer_runs_after_rewrite() -> None:
    config = AssetHostConfig(enabled=True)
    result = transform_asset(ASSET, lambda url: f"{url}?v=2", config=config)
    assert result == "/web-assets/f/12345/logo.svg?v=2"


def test_empty_source_passes_through() -> None:
    assert transform_asset(None) is None
    assert transform_asset("") == ""


def test_from_env_reads_flags() -> None:
    config = AssetHostConfig.from_env(
        {"RICHSMITH_ASSET_HOST_ENABLED": " YES ", "RICHSMITH_ASSETS_URL": "/static"}
    )
    assert config.enabled is True
    assert config.assets_url == "/static"
    assert AssetHostConfig.from_env({}).enabled is False
