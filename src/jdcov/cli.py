"""jdcov CLI: top-level command group."""

from __future__ import annotations

import json
import logging
from dataclasses import asdict
from typing import Any, TypedDict, Unpack

import click
import yaml
from rich.logging import RichHandler

from jdcov import __version__
from jdcov.config import JdcovConfig, load_config, validate_config
from jdcov.parsing import Access, SourceModelError, load_source_set
from jdcov.reporters.terminal import console, reporter
from jdcov.reporters.text import write_report
from jdcov.stats import build_project_coverage

logger = logging.getLogger(__name__)

_ACCESS_CHOICES = [level.value for level in Access]


class _ReportKwargs(TypedDict):
    """Keyword arguments for the report CLI command."""

    sources: tuple[str, ...]
    path: str
    output: str | None
    access: str | None
    exclude_patterns: tuple[str, ...]
    fail_under: float | None
    summary: bool | None


def _configure_logging(*, verbose: bool) -> None:
    """Send log records to stderr through rich, leaving stdout for the report."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=console, show_path=False, rich_tracebacks=True)],
        force=True,
    )


def _config_to_dict(config: JdcovConfig) -> dict[str, Any]:
    """Convert JdcovConfig to dictionary for display."""
    result = asdict(config)
    # Remove the raw field as it's redundant
    result.pop("raw", None)
    return result


def _load_valid_config(path: str) -> JdcovConfig:
    try:
        config = load_config(path)
    except (OSError, yaml.YAMLError, ValueError) as e:
        reporter.print_error(f"Failed to load configuration: {e}")
        raise click.Abort from e

    errors = validate_config(config)
    if errors:
        reporter.print_error(f"Found {len(errors)} configuration error(s):")
        for idx, error in enumerate(errors, start=1):
            console.print(f"  {idx}. [red]{error}[/red]")
        raise click.Abort
    return config


@click.group()
@click.option("--verbose", "-v", is_flag=True, help="Show debug logging on stderr.")
@click.version_option(version=__version__, prog_name="jdcov")
@click.pass_context
def cli(ctx: click.Context, *, verbose: bool) -> None:
    """jdcov: javadoc documentation coverage for Java sources."""
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    _configure_logging(verbose=verbose)


@cli.command()
@click.argument("sources", nargs=-1, type=click.Path(exists=True, resolve_path=True))
@click.option(
    "--path",
    default=".",
    type=click.Path(exists=True, file_okay=False, resolve_path=True),
    help="Project root directory (where .jdcov.yml lives).",
)
@click.option(
    "--output",
    "-o",
    default=None,
    help="Report destination file, or '-' for standard output.",
)
@click.option(
    "--access",
    type=click.Choice(_ACCESS_CHOICES),
    default=None,
    help="Minimum access level to analyse (default: protected).",
)
@click.option(
    "--exclude",
    "exclude_patterns",
    multiple=True,
    help="Glob pattern of source files to skip (repeatable).",
)
@click.option(
    "--fail-under",
    type=click.FloatRange(0.0, 100.0),
    default=None,
    help="Exit with status 1 when project coverage is below this percentage.",
)
@click.option(
    "--summary/--no-summary",
    default=None,
    help="Print a per-package summary table to stderr.",
)
def report(**kwargs: Unpack[_ReportKwargs]) -> None:
    """Measure javadoc coverage and print the coverage report.

    SOURCES are Java files or directories; when omitted, the configured
    source.paths (or the project root) are analysed.

    Example:
      jdcov report src/main/java
      jdcov report --access public --fail-under 80
    """
    config = _load_valid_config(kwargs["path"])

    sources = kwargs["sources"]
    source_paths = list(sources) if sources else config.source_paths()
    access = Access(kwargs["access"]) if kwargs["access"] else config.source.access_level
    output = kwargs["output"] or config.report_output()
    fail_under = kwargs["fail_under"]
    threshold = fail_under if fail_under is not None else config.coverage.fail_under
    summary = kwargs["summary"]
    show_summary = summary if summary is not None else config.report.summary

    try:
        source_set = load_source_set(
            source_paths,
            access=access,
            exclude_patterns=[*config.source.exclude_patterns, *kwargs["exclude_patterns"]],
            encoding=config.source.encoding,
            fail_on_parse_errors=config.source.fail_on_parse_errors,
        )
    except SourceModelError as e:
        reporter.print_error(str(e))
        raise click.Abort from e

    if not source_set.classes:
        reporter.print_warning("No Java types found in the analysed sources.")

    project = build_project_coverage(source_set)
    write_report(project, output)

    if show_summary:
        reporter.print_coverage_summary(project)

    if threshold > 0:
        reporter.print_threshold_result(project.percent, threshold)
        if project.percent < threshold:
            raise SystemExit(1)


@cli.group("config")
def config_group() -> None:
    """Inspect `.jdcov.yml` configuration."""


@config_group.command("show")
@click.option(
    "--path",
    default=".",
    type=click.Path(exists=True, file_okay=False, resolve_path=True),
    help="Project root directory.",
)
@click.option(
    "--json-output",
    "as_json",
    is_flag=True,
    help="Output as JSON instead of YAML.",
)
def config_show(path: str, *, as_json: bool) -> None:
    """Display the resolved configuration.

    Example:
      jdcov config show
      jdcov config show --json-output
    """
    try:
        config = load_config(path)
    except (OSError, yaml.YAMLError, ValueError) as e:
        reporter.print_error(f"Failed to load configuration: {e}")
        raise click.Abort from e

    config_dict = _config_to_dict(config)
    if as_json:
        click.echo(json.dumps(config_dict, indent=2))
    else:
        click.echo(yaml.safe_dump(config_dict, sort_keys=False, default_flow_style=False))


@config_group.command("validate")
@click.option(
    "--path",
    default=".",
    type=click.Path(exists=True, file_okay=False, resolve_path=True),
    help="Project root directory.",
)
def config_validate(path: str) -> None:
    """Validate `.jdcov.yml` and list any errors.

    Example:
      jdcov config validate
    """
    _load_valid_config(path)
    reporter.print_success("Configuration is valid!")


def main() -> None:
    """Console-script entry point."""
    cli(obj={})


if __name__ == "__main__":
    main()
