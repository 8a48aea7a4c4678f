"""Plain-text coverage report.

The layout is fixed because downstream tooling parses it: an aggregate line
for classes, one block per class (fields, constructors, methods, enum
constants, with parameter and exception groups under each executable), an
aggregate line for packages followed by one line per package, and finally
the project percentage. Percentages always carry two decimals and booleans
print as ``true``/``false``.
"""

from __future__ import annotations

import io
import logging
from typing import TYPE_CHECKING, TextIO

import click

from jdcov.stats.base import format_percent

if TYPE_CHECKING:
    from collections.abc import Callable

    from jdcov.stats.base import DocStats
    from jdcov.stats.classes import ClassCoverage
    from jdcov.stats.members import MemberGroupCounter
    from jdcov.stats.methods import MethodCoverageGroup
    from jdcov.stats.project import ProjectCoverage

logger = logging.getLogger(__name__)

UNNAMED_PACKAGE_LABEL = "<unnamed>"

_CLASS_GROUP_LABEL = "\t\t{:<20}"
_METHOD_GROUP_LABEL = "\t\t\t{:<12}"


def _bool(value: bool) -> str:
    return "true" if value else "false"


def _package_label(name: str) -> str:
    return name or UNNAMED_PACKAGE_LABEL


class TextReportRenderer:
    """Write the hierarchical report for a :class:`ProjectCoverage` to a text stream."""

    def __init__(self, stream: TextIO) -> None:
        self._stream = stream

    def render(self, project: ProjectCoverage) -> None:
        """Write every section, flushing the stream after each one."""
        sections: tuple[Callable[[ProjectCoverage], None], ...] = (
            self._write_classes_section,
            self._write_packages_section,
            self._write_project_line,
        )
        for section in sections:
            try:
                section(project)
            finally:
                self._stream.flush()

    def _write(self, text: str) -> None:
        self._stream.write(text)

    def _write_aggregate_line(self, stats: DocStats) -> None:
        self._write(
            f"{stats.kind_label:<26}: \t{stats.total:>11} "
            f"Undocumented: {stats.undocumented:>6} Documented: {stats.documented:>6} "
            f"({format_percent(stats.percent)}%)\n"
        )

    def _write_classes_section(self, project: ProjectCoverage) -> None:
        self._write_aggregate_line(project.classes)
        for class_coverage in project.classes.classes:
            self._write_class(class_coverage)
        self._write("\n")

    def _write_class(self, coverage: ClassCoverage) -> None:
        self._write(
            f"\t{coverage.kind_label} {coverage.name}: "
            f"Package: {_package_label(coverage.package_name)} "
            f"Documented: {_bool(coverage.own_documented)} "
            f"({format_percent(coverage.percent)}%)\n"
        )
        self._write_group(coverage.fields, _CLASS_GROUP_LABEL)
        self._write_methods(coverage.constructors)
        self._write_methods(coverage.methods)
        self._write_group(coverage.enum_constants, _CLASS_GROUP_LABEL)
        self._stream.flush()

    def _write_methods(self, group: MethodCoverageGroup) -> None:
        for method in group:
            self._write(
                f"\t\t{method.kind_label}: {method.name} "
                f"Documented: {_bool(method.own_documented)} "
                f"({format_percent(method.own_percent)}%)\n"
            )
            self._write_group(method.parameters, _METHOD_GROUP_LABEL)
            self._write_group(method.exceptions, _METHOD_GROUP_LABEL)

    def _write_group(self, group: MemberGroupCounter, label_format: str) -> None:
        if not group.visible:
            return
        label = label_format.format(f"{group.kind_label}:")
        self._write(
            f"{label} {group.total:>6} "
            f"Undocumented: {group.undocumented:>6} Documented: {group.documented:>6} "
            f"({format_percent(group.percent)}%) \n"
        )

    def _write_packages_section(self, project: ProjectCoverage) -> None:
        self._write_aggregate_line(project.packages)
        for package in project.packages.packages:
            self._write(
                f"\tPackage {_package_label(package.name)}. "
                f"Documented: {_bool(package.own_documented)}\n"
            )
        self._write("\n")

    def _write_project_line(self, project: ProjectCoverage) -> None:
        self._write(f"{project.kind_label}: {format_percent(project.percent)}%\n\n")


def render_report(project: ProjectCoverage) -> str:
    """Return the full report as a string."""
    buffer = io.StringIO()
    TextReportRenderer(buffer).render(project)
    return buffer.getvalue()


def write_report(project: ProjectCoverage, output: str = "-") -> None:
    """Write the report to *output* (a file path, or ``-`` for standard output).

    The stream is opened once and released when the report is done, even if
    a section fails; standard output is flushed but left open.
    """
    logger.debug("Writing coverage report to %s", output)
    with click.open_file(output, "w", encoding="utf-8") as stream:
        TextReportRenderer(stream).render(project)
