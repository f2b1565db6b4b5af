"""Configuration models for the storefront end-to-end framework."""

from __future__ import annotations

from collections.abc import Mapping
from pathlib import Path
from typing import Any, Optional

from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from .models import BrowserFamily, ExecutionMode


class Timeouts(BaseModel):
    """Wait durations in seconds shared by every session and wait."""

    implicit_wait: float = Field(default=10.0, ge=0)
    explicit_wait: float = Field(default=10.0, ge=0)
    page_load: float = Field(default=30.0, ge=0)
    poll_interval: float = Field(default=0.25, gt=0)


class AppConfig(BaseModel):
    """Settings for the application under test."""

    base_url: str = Field(default="https://www.saucedemo.com")
    environment: str = Field(default="test")


class BrowserConfig(BaseModel):
    """Settings for the browser backend."""

    family: BrowserFamily = BrowserFamily.CHROME
    mode: ExecutionMode = ExecutionMode.LOCAL
    headless: bool = False
    channel: Optional[str] = Field(
        default=None,
        description="Playwright channel for chromium-based families (e.g. 'chrome').",
    )
    viewport_width: int = 1920
    viewport_height: int = 1080
    grid_url: str = Field(default="ws://localhost:4444")
    remote_browser: str = Field(
        default="chromium",
        description="Browser name requested from the grid for the 'remote' family.",
    )
    extra_args: list[str] = Field(default_factory=list)


class CredentialsConfig(BaseModel):
    """Test accounts of the storefront."""

    standard_user: str = "standard_user"
    password: str = "secret_sauce"
    locked_user: str = "locked_out_user"
    problem_user: str = "problem_user"
    performance_user: str = "performance_glitch_user"


class ArtifactConfig(BaseModel):
    """Where failure artifacts are written."""

    screenshot_dir: Path = Field(default=Path("test-output/screenshots"))
    capture_on_failure: bool = True


class ReportConfig(BaseModel):
    """Report sink settings."""

    channel: str = Field(
        default="console",
        description="Comma-separated report channels: console, memory or none.",
    )
    title: str = Field(default="SauceDemo E2E Test Report")


class E2EConfig(BaseSettings):
    """Top-level configuration for running the suite."""

    model_config = SettingsConfigDict(
        env_prefix="STOREFRONT_E2E_",
        env_file=(".env",),
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
    )

    app: AppConfig = Field(default_factory=AppConfig)
    browser: BrowserConfig = Field(default_factory=BrowserConfig)
    timeouts: Timeouts = Field(default_factory=Timeouts)
    credentials: CredentialsConfig = Field(default_factory=CredentialsConfig)
    artifacts: ArtifactConfig = Field(default_factory=ArtifactConfig)
    report: ReportConfig = Field(default_factory=ReportConfig)


def load_config(
    path: Path | None = None,
    *,
    env_file: Path | None = None,
    **overrides: object,
) -> E2EConfig:
    """Load configuration from an optional YAML file, env and overrides."""

    data: dict[str, Any] = {}
    if path:
        import yaml

        data = yaml.safe_load(path.read_text()) or {}
    if overrides:
        _deep_update(data, overrides)
    settings_kwargs: dict[str, object] = {}
    if env_file is not None:
        settings_kwargs["_env_file"] = env_file
    config = E2EConfig(**data, **settings_kwargs)
    if not data:
        return config

    merged = config.model_dump(mode="python")
    _deep_update(merged, data)
    return E2EConfig.model_validate(merged)


def _deep_update(target: dict[str, Any], updates: Mapping[str, Any]) -> None:
    """Recursively merge ``updates`` into ``target`` in-place."""

    for key, value in updates.items():
        if (
            isinstance(value, Mapping)
            and isinstance(existing := target.get(key), Mapping)
        ):
            nested: dict[str, Any]
            if isinstance(existing, dict):
                nested = existing
            else:
                nested = dict(existing)
            _deep_update(nested, value)
            target[key] = nested
        else:
            target[key] = value
