"""Command line interface for storefront-e2e."""

from __future__ import annotations

import logging
from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as get_version
from pathlib import Path
from typing import Annotated, Any, Optional

import typer

from .config import load_config
from .factory import build_artifact_store, build_registry, build_report_sink
from .runner.scenarios import select_scenarios
from .runner.suite import SuiteRunner

app = typer.Typer(help="Storefront end-to-end test runner")


@app.callback()
def main(
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Enable debug logging"),
    ] = False,
) -> None:
    """Configure logging before executing any command."""

    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(level=level, format="%(asctime)s %(levelname)s %(name)s: %(message)s")


@app.command()
def version() -> None:
    """Print the package version."""

    try:
        typer.echo(get_version("storefront-e2e"))
    except PackageNotFoundError:  # pragma: no cover - when running from source tree
        typer.echo("0.0.0")


@app.command()
def scenarios(
    tag: Annotated[
        Optional[list[str]],
        typer.Option("--tag", "-t", help="Only list scenarios with this tag."),
    ] = None,
) -> None:
    """List the built-in scenarios."""

    for item in select_scenarios(tags=tag):
        typer.echo(f"{item.name:<24} [{', '.join(item.tags)}] {item.description}")


@app.command()
def run(
    config_path: Annotated[
        Optional[Path],
        typer.Option("--config", "-c", help="Path to YAML configuration."),
    ] = None,
    env_file: Annotated[
        Optional[Path],
        typer.Option(
            "--env-file",
            help="Path to an .env file with default configuration values.",
        ),
    ] = None,
    browser: Annotated[
        Optional[str],
        typer.Option("--browser", "-b", help="Browser family: chrome, firefox, edge, safari, remote."),
    ] = None,
    mode: Annotated[
        Optional[str],
        typer.Option("--mode", help="Execution mode: local or grid."),
    ] = None,
    grid_url: Annotated[
        Optional[str],
        typer.Option("--grid-url", help="Grid endpoint for remote sessions."),
    ] = None,
    headless: Annotated[
        Optional[bool],
        typer.Option("--headless/--headed", help="Run firefox/safari headless (or headed)."),
    ] = None,
    base_url: Annotated[
        Optional[str],
        typer.Option("--base-url", help="URL of the storefront under test."),
    ] = None,
    screenshot_dir: Annotated[
        Optional[Path],
        typer.Option("--screenshot-dir", help="Directory for failure screenshots."),
    ] = None,
    scenario: Annotated[
        Optional[list[str]],
        typer.Option("--scenario", "-s", help="Scenario to run (repeatable). Defaults to all."),
    ] = None,
    tag: Annotated[
        Optional[list[str]],
        typer.Option("--tag", "-t", help="Only run scenarios with this tag (repeatable)."),
    ] = None,
) -> None:
    """Run storefront scenarios."""

    overrides: dict[str, Any] = {}
    if any(value is not None for value in (browser, mode, grid_url, headless)):
        overrides.setdefault("browser", {})
        if browser is not None:
            overrides["browser"]["family"] = browser
        if mode is not None:
            overrides["browser"]["mode"] = mode
        if grid_url is not None:
            overrides["browser"]["grid_url"] = grid_url
        if headless is not None:
            overrides["browser"]["headless"] = headless
    if base_url is not None:
        overrides["app"] = {"base_url": base_url}
    if screenshot_dir is not None:
        overrides["artifacts"] = {"screenshot_dir": str(screenshot_dir)}

    config = load_config(config_path, env_file=env_file, **overrides)
    try:
        selected = select_scenarios(scenario, tag)
    except KeyError as exc:
        typer.echo(str(exc.args[0]), err=True)
        raise typer.Exit(code=2)
    typer.echo(
        f"Running {len(selected)} scenario(s) on {config.browser.family.value} "
        f"against {config.app.base_url}"
    )

    runner = SuiteRunner(
        config=config,
        registry=build_registry(config),
        sink=build_report_sink(config.report),
        artifacts=build_artifact_store(config.artifacts),
    )
    summary = runner.run(selected)
    typer.echo(
        f"Passed: {summary.passed}  Failed: {summary.failed}  Skipped: {summary.skipped}"
    )
    if not summary.success:
        raise typer.Exit(code=1)


if __name__ == "__main__":
    app()
