"""Project-level documentation coverage."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from jdcov.stats.base import mean
from jdcov.stats.classes import ClassesAggregate
from jdcov.stats.packages import PackagesAggregate

if TYPE_CHECKING:
    from jdcov.parsing.model import SourceSet

logger = logging.getLogger(__name__)

PROJECT = "Project Documentation Coverage"


@dataclass(frozen=True)
class ProjectCoverage:
    """Root of the coverage tree.

    ``percent`` is the plain mean of the class and package percentages, so
    packages keep half of the weight however many classes the project has.
    ``total`` and ``documented`` are informational sums and are not used to
    derive ``percent``.
    """

    classes: ClassesAggregate
    packages: PackagesAggregate
    kind_label: str = PROJECT

    @property
    def total(self) -> int:
        return self.classes.total + self.packages.total

    @property
    def documented(self) -> int:
        return self.classes.documented + self.packages.documented

    @property
    def undocumented(self) -> int:
        return self.total - self.documented

    @property
    def percent(self) -> float:
        return mean(self.classes.percent, self.packages.percent)


def build_project_coverage(source_set: SourceSet) -> ProjectCoverage:
    """Compute the whole coverage tree in one pass over a symbol-tree snapshot.

    The result holds only names and counts; nothing refers back to the
    source model afterwards.
    """
    project = ProjectCoverage(
        classes=ClassesAggregate.from_classes(source_set.classes),
        packages=PackagesAggregate.from_classes(source_set.classes),
    )
    logger.info(
        "Documentation coverage: classes %.2f%%, packages %.2f%%, project %.2f%%",
        project.classes.percent,
        project.packages.percent,
        project.percent,
    )
    return project
