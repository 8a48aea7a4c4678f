"""Reporters for documentation coverage results."""

from __future__ import annotations

from jdcov.reporters.terminal import CLIReporter, reporter
from jdcov.reporters.text import TextReportRenderer, render_report, write_report

__all__ = [
    "CLIReporter",
    "TextReportRenderer",
    "render_report",
    "reporter",
    "write_report",
]
