"""Click-based CLI for the stacking-context linter."""

import sys
from pathlib import Path

import click

from . import __version__
from .config import ConfigLoader, LintConfig
from .errors import LintError, handle_exception
from .linter import Linter
from .linter_logging import LogCategory, get_category_logger, setup_logging
from .models import LintResult
from .reporters import CLIReporter, JSONReporter
from .rules.engine import create_rule_engine

logger = get_category_logger(LogCategory.CLI)

STYLESHEET_EXTENSIONS = frozenset([".css"])

EXIT_CLEAN = 0
EXIT_WARNINGS = 1
EXIT_ERRORS = 2


def expand_paths(paths: tuple[Path, ...]) -> list[Path]:
    """Expand directories into the stylesheets they contain."""
    expanded: list[Path] = []
    for path in paths:
        if path.is_dir():
            expanded.extend(
                sorted(p for p in path.rglob("*") if p.suffix.lower() in STYLESHEET_EXTENSIONS)
            )
        else:
            expanded.append(path)
    return expanded


def exit_code_for(results: list[LintResult]) -> int:
    """0 when clean, 1 for warnings only, 2 when any error was reported."""
    if any(r.errored for r in results):
        return EXIT_ERRORS
    if any(r.diagnostics for r in results):
        return EXIT_WARNINGS
    return EXIT_CLEAN


def load_lint_config(config_path: Path | None) -> LintConfig:
    return ConfigLoader().load(config_path)


@click.group()
@click.version_option(version=__version__, prog_name="isolate-on-stack")
def cli() -> None:
    """Lint CSS for stacking contexts and 'isolation: isolate' misuse."""


@cli.command()
@click.argument("files", nargs=-1, required=True, type=click.Path(path_type=Path))
@click.option(
    "--config",
    "-c",
    "config_path",
    type=click.Path(path_type=Path),
    help="Config file (default: nearest .isolate-on-stack.json)",
)
@click.option(
    "--format",
    "output_format",
    type=click.Choice(["text", "json"]),
    default="text",
    show_default=True,
    help="Output format",
)
@click.option("--fix", is_flag=True, help="Apply autofixes and rewrite files")
@click.option("--color/--no-color", default=None, help="Force or disable ANSI colors")
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")
@click.option("--quiet", "-q", is_flag=True, help="Suppress log output")
@click.option("--log-file", type=click.Path(path_type=Path), help="Also write logs to this file")
@click.option(
    "--log-format",
    type=click.Choice(["text", "json"]),
    default="text",
    show_default=True,
    help="Log file format",
)
def lint(
    files: tuple[Path, ...],
    config_path: Path | None,
    output_format: str,
    fix: bool,
    color: bool | None,
    verbose: bool,
    quiet: bool,
    log_file: Path | None,
    log_format: str,
) -> None:
    """Lint stylesheets (files or directories)."""
    if quiet and verbose:
        raise click.UsageError("--quiet and --verbose are mutually exclusive")

    setup_logging(quiet=quiet, verbose=verbose, log_file=log_file, log_format=log_format)

    try:
        linter = Linter(load_lint_config(config_path))
    except LintError as e:
        message, code = handle_exception(e, use_color=bool(color), verbose=verbose)
        click.echo(message, err=True)
        sys.exit(code)

    paths = expand_paths(files)
    logger.debug(f"Linting {len(paths)} file(s)")
    results = linter.lint_files(paths, fix=fix)

    if fix:
        for result in results:
            linter.write_fixed(result)

    if output_format == "json":
        JSONReporter(stream=sys.stdout).report(results)
    else:
        CLIReporter(stream=sys.stdout, use_color=color).report(results)

    sys.exit(exit_code_for(results))


@cli.command("rules")
@click.option(
    "--config",
    "-c",
    "config_path",
    type=click.Path(path_type=Path),
    help="Config file (default: nearest .isolate-on-stack.json)",
)
def list_rules(config_path: Path | None) -> None:
    """List available rules and whether they are enabled."""
    try:
        engine = create_rule_engine(load_lint_config(config_path))
    except LintError as e:
        message, code = handle_exception(e, use_color=False)
        click.echo(message, err=True)
        sys.exit(code)

    for rule in engine.get_all_rules():
        state = "on " if engine.config.is_rule_enabled(rule.rule_id) else "off"
        click.echo(f"{state}  {rule.rule_id}  {rule.description}")


@cli.command()
@click.option("--force", is_flag=True, help="Overwrite an existing config file")
def init(force: bool) -> None:
    """Write the recommended config to .isolate-on-stack.json."""
    loader = ConfigLoader()
    target = loader.project_path / loader.CONFIG_FILENAME
    if target.exists() and not force:
        raise click.UsageError(f"{target} already exists (use --force to overwrite)")

    path = loader.save(LintConfig.recommended())
    click.echo(f"Wrote {path}")


def main() -> None:
    """Console script entry point."""
    cli()


if __name__ == "__main__":
    main()
