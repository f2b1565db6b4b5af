from pathlib import Path

import pytest
from pydantic import ValidationError

from storefront_e2e.config import E2EConfig, Timeouts, load_config
from storefront_e2e.models import BrowserFamily, ExecutionMode


def test_defaults_match_storefront_setup(tmp_path: Path) -> None:
    config = load_config(env_file=tmp_path / "missing.env")

    assert config.timeouts == Timeouts(implicit_wait=10, explicit_wait=10, page_load=30)
    assert config.browser.family == BrowserFamily.CHROME
    assert config.browser.mode == ExecutionMode.LOCAL
    assert config.credentials.password == "secret_sauce"
    assert config.artifacts.capture_on_failure is True


def test_load_config_reads_env_file(tmp_path: Path) -> None:
    env_path = tmp_path / ".env"
    env_path.write_text(
        "\n".join(
            [
                "STOREFRONT_E2E_BROWSER__FAMILY=firefox",
                "STOREFRONT_E2E_BROWSER__MODE=grid",
                "STOREFRONT_E2E_BROWSER__GRID_URL=ws://grid:4444",
                "STOREFRONT_E2E_TIMEOUTS__EXPLICIT_WAIT=5",
            ]
        )
    )

    config = load_config(env_file=env_path)

    assert config.browser.family == BrowserFamily.FIREFOX
    assert config.browser.mode == ExecutionMode.GRID
    assert config.browser.grid_url == "ws://grid:4444"
    assert config.timeouts.explicit_wait == 5
    assert config.timeouts.page_load == 30


def test_load_config_prioritises_overrides(tmp_path: Path) -> None:
    env_path = tmp_path / ".env"
    env_path.write_text(
        "\n".join(
            [
                "STOREFRONT_E2E_BROWSER__FAMILY=edge",
                "STOREFRONT_E2E_APP__ENVIRONMENT=staging",
            ]
        )
    )

    config_path = tmp_path / "suite.yaml"
    config_path.write_text(
        "\n".join(
            [
                "app:",
                "  base_url: https://staging.shop.test",
                "browser:",
                "  headless: false",
            ]
        )
    )

    config = load_config(config_path, env_file=env_path, browser={"headless": True})

    assert config.app.base_url == "https://staging.shop.test"
    assert config.app.environment == "staging"
    assert config.browser.family == BrowserFamily.EDGE
    assert config.browser.headless is True


def test_poll_interval_must_be_positive() -> None:
    with pytest.raises(ValidationError):
        E2EConfig.model_validate({"timeouts": {"poll_interval": 0}})
