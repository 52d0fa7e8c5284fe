"""Command-line interface for schemaguard."""

from __future__ import annotations

import json
import sys
from pathlib import Path

import click

from schemaguard import __version__
from schemaguard.checker import run_check
from schemaguard.config import (
    ProjectConfig,
    find_project_root,
    get_schemaguard_dir,
    load_config,
    save_config,
    set_config_value,
)
from schemaguard.exceptions import ConfigError, SchemaGuardError
from schemaguard.logging_config import setup_logging
from schemaguard.report import render
from schemaguard.ui.console import Console

console = Console()

EXIT_BREAKING = 1
EXIT_ERROR = 2


def _get_project_root(path: str | None = None) -> Path:
    """Resolve the project root: --path, else nearest .schemaguard, else cwd."""
    if path:
        root = Path(path).resolve()
        if not root.exists():
            console.error(f"Path does not exist: {path}")
            sys.exit(EXIT_ERROR)
        return root
    return find_project_root() or Path.cwd()


def _load_config(root: Path) -> ProjectConfig:
    try:
        return load_config(root)
    except ConfigError as e:
        console.error(str(e))
        sys.exit(EXIT_ERROR)


@click.group()
@click.version_option(version=__version__, prog_name="schemaguard")
def main():
    """schemaguard - catch changelog changes that break rolling deployments."""
    pass


@main.command()
@click.option("--path", "-p", default=None, help="Project root to initialize.")
def init(path: str | None):
    """Write a default .schemaguard/config.json for a project."""
    root = Path(path or ".").resolve()
    if not root.exists():
        console.error(f"Path does not exist: {root}")
        sys.exit(EXIT_ERROR)

    config_path = get_schemaguard_dir(root)
    save_config(root, _load_config(root))
    console.success(f"Configuration saved to {config_path}")


@main.command()
@click.argument("changelogs", nargs=-1, required=True)
@click.option("--path", "-p", default=None, help="Project root holding .schemaguard/.")
@click.option(
    "--format", "output_format",
    type=click.Choice(["text", "markdown", "json"]),
    default=None,
    help="Report format (default: from config, else text).",
)
@click.option("--database", default=None, help="Database name handed to the changelog parser.")
@click.option("--strict", is_flag=True, help="Exit with status 1 when breaking changes are found.")
@click.option("--all", "report_all", is_flag=True, help="Include non-breaking changes in the report.")
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging.")
@click.option("--quiet", "-q", is_flag=True, help="Only print the report.")
def check(
    changelogs: tuple[str, ...],
    path: str | None,
    output_format: str | None,
    database: str | None,
    strict: bool,
    report_all: bool,
    verbose: bool,
    quiet: bool,
):
    """Check CHANGELOGS (files or directories) for breaking changes.

    Usage in CI:

        schemaguard check db/changelog.xml --strict
    """
    setup_logging(verbose=verbose, quiet=quiet)

    root = _get_project_root(path)
    config = _load_config(root)
    if database:
        config.database = database
    if report_all:
        config.report_all = True
    if strict:
        config.fail_on_breaking = True
    output_format = output_format or config.output_format

    try:
        if quiet:
            result = run_check(list(changelogs), config)
        else:
            with console.parsing_progress() as progress:
                task = progress.add_task("Parsing...", total=None)

                def on_progress(file_path: str, current: int, total: int):
                    progress.update(
                        task, total=total, completed=current,
                        description=f"Parsing {file_path}",
                    )

                result = run_check(list(changelogs), config, on_progress)
    except (SchemaGuardError, OSError) as e:
        console.error(str(e))
        sys.exit(EXIT_ERROR)

    report = render(result, output_format)
    if report:
        click.echo(report)

    if not quiet:
        console.show_summary(result)
        if result.has_breaking:
            console.warning(f"{len(result.breaking)} breaking change(s) found")
        else:
            console.success("No breaking changes found")

    if result.has_breaking and config.fail_on_breaking:
        sys.exit(EXIT_BREAKING)


# =========================================================================
# Config Management
# =========================================================================

@main.command("config")
@click.argument("action", type=click.Choice(["set", "get", "show"]))
@click.argument("key", required=False)
@click.argument("value", required=False)
@click.option("--path", "-p", default=None, help="Path to the project root.")
def config_cmd(action: str, key: str | None, value: str | None, path: str | None):
    """Manage schemaguard configuration."""
    root = _get_project_root(path)
    config = _load_config(root)

    if action == "show":
        click.echo(json.dumps(config.model_dump(), indent=2))
    elif action == "get":
        if not key:
            console.error("Usage: schemaguard config get <key>")
            sys.exit(EXIT_ERROR)
        data = config.model_dump()
        for part in key.split("."):
            if isinstance(data, dict) and part in data:
                data = data[part]
            else:
                console.error(f"Unknown key: {key}")
                sys.exit(EXIT_ERROR)
        click.echo(f"{key} = {data}")
    elif action == "set":
        if not key or value is None:
            console.error("Usage: schemaguard config set <key> <value>")
            sys.exit(EXIT_ERROR)
        try:
            # Try to parse as JSON for non-string values
            try:
                parsed_value = json.loads(value)
            except json.JSONDecodeError:
                parsed_value = value

            config = set_config_value(config, key, parsed_value)
            save_config(root, config)
            console.success(f"Set {key} = {parsed_value}")
        except KeyError:
            console.error(f"Unknown config key: {key}")
            sys.exit(EXIT_ERROR)
        except ConfigError as e:
            console.error(str(e))
            sys.exit(EXIT_ERROR)


if __name__ == "__main__":
    main()
