"""Documentation coverage statistics."""

from jdcov.stats.base import EMPTY_PERCENT, DocStats, coverage_percent, format_percent, mean
from jdcov.stats.classes import ClassCoverage, ClassesAggregate
from jdcov.stats.members import MemberGroupCounter
from jdcov.stats.methods import MethodCoverage, MethodCoverageGroup
from jdcov.stats.packages import PackageCoverage, PackagesAggregate
from jdcov.stats.project import ProjectCoverage, build_project_coverage

__all__ = [
    "EMPTY_PERCENT",
    "ClassCoverage",
    "ClassesAggregate",
    "DocStats",
    "MemberGroupCounter",
    "MethodCoverage",
    "MethodCoverageGroup",
    "PackageCoverage",
    "PackagesAggregate",
    "ProjectCoverage",
    "build_project_coverage",
    "coverage_percent",
    "format_percent",
    "mean",
]
