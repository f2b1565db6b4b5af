from __future__ import annotations

from typer.testing import CliRunner

from storefront_e2e.cli import app
from storefront_e2e.config import E2EConfig
from storefront_e2e.runner.suite import RunSummary, ScenarioResult, ScenarioStatus


def _base_config() -> E2EConfig:
    return E2EConfig.model_validate(
        {
            "app": {"base_url": "https://shop.test"},
            "browser": {"family": "firefox", "headless": True},
        }
    )


def _capture_builder(name: str, calls: dict[str, list[object]]):
    def _factory(config_section: object) -> str:
        calls.setdefault(name, []).append(config_section)
        return f"{name}-stub"

    return _factory


def _make_runner(state: dict[str, object], statuses: list[ScenarioStatus]):
    class DummyRunner:
        def __init__(self, **kwargs):
            state.update(kwargs)

        def run(self, scenarios):
            state["scenarios"] = [item.name for item in scenarios]
            return RunSummary(
                [ScenarioResult(name=f"s{index}", status=status, elapsed=0.1)
                 for index, status in enumerate(statuses)]
            )

    return DummyRunner


def _patch_builders(monkeypatch, calls: dict[str, list[object]]) -> None:
    monkeypatch.setattr("storefront_e2e.cli.build_registry", _capture_builder("registry", calls))
    monkeypatch.setattr("storefront_e2e.cli.build_report_sink", _capture_builder("sink", calls))
    monkeypatch.setattr(
        "storefront_e2e.cli.build_artifact_store", _capture_builder("artifacts", calls)
    )


def test_run_command_success(monkeypatch, tmp_path):
    runner = CliRunner()

    config_path = tmp_path / "config.yaml"
    config_path.write_text("app: {}\n")
    env_file = tmp_path / "vars.env"
    env_file.write_text("STOREFRONT_E2E_APP__ENVIRONMENT=ci\n")
    screenshots = tmp_path / "shots"

    config = _base_config()
    load_args: dict[str, object] = {}

    def fake_load_config(path, *, env_file=None, **overrides):  # type: ignore[no-untyped-def]
        load_args["path"] = path
        load_args["env_file"] = env_file
        load_args["overrides"] = overrides
        return config

    monkeypatch.setattr("storefront_e2e.cli.load_config", fake_load_config)
    builder_calls: dict[str, list[object]] = {}
    _patch_builders(monkeypatch, builder_calls)
    runner_state: dict[str, object] = {}
    monkeypatch.setattr(
        "storefront_e2e.cli.SuiteRunner",
        _make_runner(runner_state, [ScenarioStatus.PASSED, ScenarioStatus.SKIPPED]),
    )

    result = runner.invoke(
        app,
        [
            "run",
            "--config",
            str(config_path),
            "--env-file",
            str(env_file),
            "--browser",
            "firefox",
            "--mode",
            "grid",
            "--grid-url",
            "ws://grid:4444",
            "--headless",
            "--base-url",
            "https://shop.test",
            "--screenshot-dir",
            str(screenshots),
            "--scenario",
            "successful-login",
            "--scenario",
            "add-to-cart",
        ],
    )

    assert result.exit_code == 0
    assert "Running 2 scenario(s) on firefox against https://shop.test" in result.stdout
    assert "Passed: 1  Failed: 0  Skipped: 1" in result.stdout

    assert load_args["path"] == config_path
    assert load_args["env_file"] == env_file
    overrides = load_args["overrides"]
    assert overrides["browser"] == {
        "family": "firefox",
        "mode": "grid",
        "grid_url": "ws://grid:4444",
        "headless": True,
    }
    assert overrides["app"] == {"base_url": "https://shop.test"}
    assert overrides["artifacts"] == {"screenshot_dir": str(screenshots)}

    assert builder_calls["registry"] == [config]
    assert builder_calls["sink"] == [config.report]
    assert builder_calls["artifacts"] == [config.artifacts]

    assert runner_state["config"] is config
    assert runner_state["registry"] == "registry-stub"
    assert runner_state["sink"] == "sink-stub"
    assert runner_state["artifacts"] == "artifacts-stub"
    assert runner_state["scenarios"] == ["successful-login", "add-to-cart"]


def test_run_command_failure(monkeypatch):
    runner = CliRunner()
    config = _base_config()

    monkeypatch.setattr("storefront_e2e.cli.load_config", lambda *_, **__: config)
    _patch_builders(monkeypatch, {})
    runner_state: dict[str, object] = {}
    monkeypatch.setattr(
        "storefront_e2e.cli.SuiteRunner",
        _make_runner(runner_state, [ScenarioStatus.PASSED, ScenarioStatus.FAILED]),
    )

    result = runner.invoke(app, ["run", "--tag", "login"])

    assert result.exit_code == 1
    assert "Failed: 1" in result.stdout
    assert len(runner_state["scenarios"]) == 6


def test_run_command_rejects_unknown_scenario(monkeypatch):
    runner = CliRunner()
    config = _base_config()

    monkeypatch.setattr("storefront_e2e.cli.load_config", lambda *_, **__: config)
    runner_state: dict[str, object] = {}
    monkeypatch.setattr("storefront_e2e.cli.SuiteRunner", _make_runner(runner_state, []))

    result = runner.invoke(app, ["run", "--scenario", "does-not-exist"])

    assert result.exit_code == 2
    assert runner_state == {}


def test_scenarios_command_lists_builtin_scenarios():
    runner = CliRunner()

    result = runner.invoke(app, ["scenarios", "--tag", "cart"])

    assert result.exit_code == 0
    assert "cart-page" in result.stdout
    assert "successful-login" not in result.stdout


def test_version_command_prints_a_version():
    runner = CliRunner()

    result = runner.invoke(app, ["version"])

    assert result.exit_code == 0
    assert result.stdout.strip()
