"""Configuration parsing from ``.jdcov.yml``."""

from __future__ import annotations

import logging
import os
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

from jdcov.parsing.model import Access

logger = logging.getLogger(__name__)

CONFIG_FILE = ".jdcov.yml"

_ENV_VAR_RE = re.compile(r"\$\{(\w+)\}")

_MAX_PERCENTAGE = 100.0


def _resolve_env_vars(value: str) -> str:
    """Replace ``${VAR_NAME}`` placeholders with environment variable values."""

    def _replace(match: re.Match[str]) -> str:
        var = match.group(1)
        resolved = os.environ.get(var)
        if resolved is None:
            logger.warning("Environment variable %s is not set (referenced in config)", var)
            return ""
        return resolved

    return _ENV_VAR_RE.sub(_replace, value)


def _resolve_value(value: Any) -> Any:
    if isinstance(value, str):
        return _resolve_env_vars(value)
    if isinstance(value, dict):
        return {key: _resolve_value(item) for key, item in value.items()}
    if isinstance(value, list):
        return [_resolve_value(item) for item in value]
    return value


def _section(raw: dict[str, Any], name: str) -> dict[str, Any]:
    value = raw.get(name, {})
    return value if isinstance(value, dict) else {}


def _str_list(value: Any) -> list[str]:
    if isinstance(value, str):
        return [value]
    if isinstance(value, list):
        return [str(item) for item in value]
    return []


@dataclass
class SourceConfig:
    """Which Java sources to analyse."""

    paths: list[str] = field(default_factory=list)
    """Source roots or files, relative to the project root (empty = project root)."""

    exclude_patterns: list[str] = field(default_factory=list)
    """Glob patterns for files to skip."""

    access: str = Access.PROTECTED.value
    """Minimum access level analysed: public, protected, package or private."""

    encoding: str = "utf-8"
    """Source file encoding."""

    fail_on_parse_errors: bool = True
    """Abort when a file has syntax errors instead of using a partial tree."""

    @property
    def access_level(self) -> Access:
        return Access(self.access)


@dataclass
class ReportConfig:
    """Report output configuration."""

    output: str = "-"
    """Report destination, relative to the project root (``-`` = standard output)."""

    summary: bool = False
    """Also print a rich summary table to stderr."""


@dataclass
class CoverageConfig:
    """Coverage thresholds."""

    fail_under: float = 0.0
    """Minimum acceptable project documentation coverage percentage."""


@dataclass
class JdcovConfig:
    """Complete jdcov configuration from ``.jdcov.yml``."""

    root: str
    """Project root directory."""

    source: SourceConfig = field(default_factory=SourceConfig)
    report: ReportConfig = field(default_factory=ReportConfig)
    coverage: CoverageConfig = field(default_factory=CoverageConfig)

    raw: dict[str, Any] = field(default_factory=dict)
    """Raw parsed YAML for extension/debugging."""

    def source_paths(self) -> list[Path]:
        """Configured source paths resolved against the project root."""
        root = Path(self.root)
        if not self.source.paths:
            return [root]
        return [root / path for path in self.source.paths]

    def report_output(self) -> str:
        """Configured report destination resolved against the project root."""
        if self.report.output == "-":
            return "-"
        return str(Path(self.root) / self.report.output)


def _parse_source_config(raw: dict[str, Any]) -> SourceConfig:
    source_raw = _section(raw, "source")
    return SourceConfig(
        paths=_str_list(source_raw.get("paths", [])),
        exclude_patterns=_str_list(source_raw.get("exclude_patterns", [])),
        access=str(source_raw.get("access", Access.PROTECTED.value)).lower(),
        encoding=str(source_raw.get("encoding", "utf-8")),
        fail_on_parse_errors=source_raw.get("fail_on_parse_errors", True),
    )


def _parse_report_config(raw: dict[str, Any]) -> ReportConfig:
    report_raw = _section(raw, "report")
    return ReportConfig(
        output=str(report_raw.get("output", "-")),
        summary=report_raw.get("summary", False),
    )


def _parse_coverage_config(raw: dict[str, Any]) -> CoverageConfig:
    coverage_raw = _section(raw, "coverage")
    return CoverageConfig(
        fail_under=float(
            coverage_raw.get("fail_under", os.environ.get("JDCOV_FAIL_UNDER", 0.0))
        ),
    )


def load_config(root: str | Path) -> JdcovConfig:
    """Load and parse ``.jdcov.yml`` from *root*.

    Falls back to defaults when the file is missing or incomplete.
    """
    root_path = Path(root).resolve()
    config_file = root_path / CONFIG_FILE

    raw: dict[str, Any] = {}
    if config_file.is_file():
        parsed = yaml.safe_load(config_file.read_text(encoding="utf-8"))
        if isinstance(parsed, dict):
            raw = _resolve_value(parsed)
        logger.debug("Loaded configuration from %s", config_file)

    return JdcovConfig(
        root=str(root_path),
        source=_parse_source_config(raw),
        report=_parse_report_config(raw),
        coverage=_parse_coverage_config(raw),
        raw=raw,
    )


def validate_config(config: JdcovConfig) -> list[str]:
    """Validate the configuration and return a list of error messages.

    Returns an empty list if the configuration is valid.
    """
    errors: list[str] = []

    valid_access = [level.value for level in Access]
    if config.source.access not in valid_access:
        errors.append(
            f"source.access must be one of {', '.join(valid_access)} "
            f"(got: {config.source.access})"
        )

    if any(not path.strip() for path in config.source.paths):
        errors.append("source.paths must not contain empty entries")

    if not config.source.encoding:
        errors.append("source.encoding must not be empty")

    if not config.report.output:
        errors.append("report.output must not be empty (use '-' for standard output)")

    for name, value in (
        ("source.fail_on_parse_errors", config.source.fail_on_parse_errors),
        ("report.summary", config.report.summary),
    ):
        if not isinstance(value, bool):
            errors.append(f"{name} must be true or false (got: {value!r})")

    if not 0.0 <= config.coverage.fail_under <= _MAX_PERCENTAGE:
        errors.append(
            f"coverage.fail_under must be between 0 and 100 "
            f"(got: {config.coverage.fail_under})"
        )

    return errors
