"""Terminal reporter with rich output formatting."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from rich.console import Console
from rich.table import Table

from jdcov.reporters.text import UNNAMED_PACKAGE_LABEL
from jdcov.stats.base import coverage_percent, format_percent

if TYPE_CHECKING:
    from jdcov.stats.project import ProjectCoverage

# Status output goes to stderr so it never mixes with a report on stdout
console = Console(stderr=True)


_PERFECT_RATE = 100.0
_GOOD_RATE = 80.0
_FAIR_RATE = 50.0


def _coverage_color(percent: float) -> str:
    """Return a Rich color name for a coverage percentage."""
    if percent >= _PERFECT_RATE:
        return "green"
    if percent >= _GOOD_RATE:
        return "yellow"
    if percent >= _FAIR_RATE:
        return "dark_orange"
    return "red"


def _colored_percent(percent: float, *, bold: bool = False) -> str:
    style = f"bold {_coverage_color(percent)}" if bold else _coverage_color(percent)
    return f"[{style}]{format_percent(percent)}%[/{style}]"


@dataclass
class _PackageRow:
    """Per-package totals accumulated for the summary table."""

    classes: int = 0
    total: int = 0
    documented: int = 0
    own_documented: bool = False

    @property
    def percent(self) -> float:
        return coverage_percent(self.documented, self.total)


class CLIReporter:
    """Rich terminal output for status messages and the coverage summary."""

    def __init__(self) -> None:
        """Initialize the CLI reporter."""
        self.console = console

    def print_success(self, message: str) -> None:
        """Print a success message."""
        self.console.print(f"[green]✓[/green] {message}")

    def print_error(self, message: str) -> None:
        """Print an error message."""
        self.console.print(f"[red]✗[/red] {message}")

    def print_warning(self, message: str) -> None:
        """Print a warning message."""
        self.console.print(f"[yellow]⚠[/yellow] {message}")

    def print_coverage_summary(self, project: ProjectCoverage) -> None:
        """Print a per-package summary table followed by the overall figures."""
        rows: dict[str, _PackageRow] = {
            package.name: _PackageRow(own_documented=package.own_documented)
            for package in project.packages.packages
        }
        for coverage in project.classes.classes:
            row = rows.setdefault(coverage.package_name, _PackageRow())
            row.classes += 1
            row.total += coverage.total
            row.documented += coverage.documented

        table = Table(title="Documentation Coverage", title_style="bold cyan")
        table.add_column("Package", style="bold")
        table.add_column("Types", justify="right")
        table.add_column("Documented", justify="right")
        table.add_column("Coverage", justify="right")
        table.add_column("Package Doc", justify="center")

        for name, row in rows.items():
            table.add_row(
                name or UNNAMED_PACKAGE_LABEL,
                str(row.classes),
                f"{row.documented}/{row.total}",
                _colored_percent(row.percent),
                "[green]✓[/green]" if row.own_documented else "[red]✗[/red]",
            )

        table.add_section()
        for label, stats in (
            (project.classes.kind_label, project.classes),
            (project.packages.kind_label, project.packages),
        ):
            table.add_row(
                f"[bold]{label}[/bold]",
                "",
                f"{stats.documented}/{stats.total}",
                _colored_percent(stats.percent, bold=True),
                "",
            )
        table.add_row(
            "[bold]Project[/bold]",
            "",
            "",
            _colored_percent(project.percent, bold=True),
            "",
        )

        self.console.print(table)

    def print_threshold_result(self, percent: float, threshold: float) -> None:
        """Report whether the project met the configured minimum coverage."""
        actual = f"Documentation coverage {format_percent(percent)}%"
        wanted = f"{format_percent(threshold)}% threshold"
        if percent >= threshold:
            self.print_success(f"{actual} meets the {wanted}")
        else:
            self.print_error(f"{actual} is below the {wanted}")


# Singleton instance for easy import
reporter = CLIReporter()
