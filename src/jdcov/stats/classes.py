"""Coverage of classes, interfaces, enums, annotation types and records."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from jdcov.parsing.model import UNNAMED_PACKAGE
from jdcov.stats.base import coverage_percent, is_documented, kind_name, present
from jdcov.stats.members import ENUM_CONSTANTS, FIELDS, MemberGroupCounter
from jdcov.stats.methods import CONSTRUCTORS, METHODS, MethodCoverageGroup

if TYPE_CHECKING:
    from collections.abc import Iterable

    from jdcov.parsing.model import ClassDoc

CLASSES = "Classes/Interfaces/Enums"


@dataclass(frozen=True)
class ClassCoverage:
    """One class-like type and all of its members.

    ``total`` counts the type itself, its fields and enum constants, and
    every constructor and method together with their parameters and
    thrown exceptions.
    """

    kind_label: str
    name: str
    package_name: str
    own_documented: bool
    fields: MemberGroupCounter = field(
        default_factory=lambda: MemberGroupCounter(FIELDS, always_show=True)
    )
    enum_constants: MemberGroupCounter = field(
        default_factory=lambda: MemberGroupCounter(ENUM_CONSTANTS, always_show=True)
    )
    constructors: MethodCoverageGroup = field(
        default_factory=lambda: MethodCoverageGroup(CONSTRUCTORS)
    )
    methods: MethodCoverageGroup = field(default_factory=lambda: MethodCoverageGroup(METHODS))

    @classmethod
    def from_symbol(cls, class_doc: ClassDoc) -> ClassCoverage:
        package = class_doc.package
        return cls(
            kind_label=kind_name(class_doc.kind),
            name=class_doc.name,
            package_name=package.name if package is not None else UNNAMED_PACKAGE,
            own_documented=is_documented(class_doc.comment),
            fields=MemberGroupCounter.from_units(class_doc.fields, FIELDS, always_show=True),
            enum_constants=MemberGroupCounter.from_units(
                class_doc.enum_constants, ENUM_CONSTANTS, always_show=True
            ),
            constructors=MethodCoverageGroup.from_symbols(class_doc.constructors, CONSTRUCTORS),
            methods=MethodCoverageGroup.from_symbols(class_doc.methods, METHODS),
        )

    @property
    def own_percent(self) -> float:
        return 100.0 if self.own_documented else 0.0

    @property
    def total(self) -> int:
        return (
            1
            + self.fields.total
            + self.enum_constants.total
            + self.constructors.subtree_total
            + self.methods.subtree_total
        )

    @property
    def documented(self) -> int:
        return (
            int(self.own_documented)
            + self.fields.documented
            + self.enum_constants.documented
            + self.constructors.subtree_documented
            + self.methods.subtree_documented
        )

    @property
    def undocumented(self) -> int:
        return self.total - self.documented

    @property
    def percent(self) -> float:
        return coverage_percent(self.documented, self.total)


@dataclass(frozen=True)
class ClassesAggregate:
    """Every analysed class, summed into one project-wide class coverage."""

    classes: tuple[ClassCoverage, ...] = ()
    kind_label: str = CLASSES

    @classmethod
    def from_classes(cls, class_docs: Iterable[ClassDoc] | None) -> ClassesAggregate:
        return cls(classes=tuple(ClassCoverage.from_symbol(doc) for doc in present(class_docs)))

    @property
    def total(self) -> int:
        return sum(coverage.total for coverage in self.classes)

    @property
    def documented(self) -> int:
        return sum(coverage.documented for coverage in self.classes)

    @property
    def undocumented(self) -> int:
        return self.total - self.documented

    @property
    def percent(self) -> float:
        return coverage_percent(self.documented, self.total)
