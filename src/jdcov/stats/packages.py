"""Coverage of package-level comments."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from jdcov.parsing.model import UNNAMED_PACKAGE
from jdcov.stats.base import coverage_percent, is_documented, present

if TYPE_CHECKING:
    from collections.abc import Iterable

    from jdcov.parsing.model import ClassDoc

PACKAGES = "Packages"


@dataclass(frozen=True)
class PackageCoverage:
    """One package: a single unit, documented by its ``package-info.java`` comment."""

    name: str
    own_documented: bool


@dataclass(frozen=True)
class PackagesAggregate:
    """Every distinct package that contains an analysed class."""

    packages: tuple[PackageCoverage, ...] = ()
    kind_label: str = PACKAGES

    @classmethod
    def from_classes(cls, class_docs: Iterable[ClassDoc] | None) -> PackagesAggregate:
        """Collect packages in first-seen order, deduplicated by name."""
        seen: dict[str, PackageCoverage] = {}
        for class_doc in present(class_docs):
            package = class_doc.package
            name = package.name if package is not None else UNNAMED_PACKAGE
            if name in seen:
                continue
            seen[name] = PackageCoverage(
                name=name,
                own_documented=is_documented(package.comment if package is not None else None),
            )
        return cls(packages=tuple(seen.values()))

    @property
    def total(self) -> int:
        return len(self.packages)

    @property
    def documented(self) -> int:
        return sum(1 for package in self.packages if package.own_documented)

    @property
    def undocumented(self) -> int:
        return self.total - self.documented

    @property
    def percent(self) -> float:
        return coverage_percent(self.documented, self.total)
