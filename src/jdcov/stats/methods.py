"""Coverage of constructors and methods."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from jdcov.stats.base import coverage_percent, is_documented, kind_name, present
from jdcov.stats.members import EXCEPTIONS, PARAMETERS, MemberGroupCounter

if TYPE_CHECKING:
    from collections.abc import Iterable, Iterator

    from jdcov.parsing.model import ExecutableDoc

CONSTRUCTORS = "Constructors"
METHODS = "Methods"


@dataclass(frozen=True)
class MethodCoverage:
    """One constructor or method.

    ``own_percent`` reflects only the executable's own comment; parameter
    and exception groups are reported beside it, never merged into it.
    ``total``/``documented`` count the executable itself plus both groups.
    """

    kind_label: str
    name: str
    own_documented: bool
    parameters: MemberGroupCounter = field(
        default_factory=lambda: MemberGroupCounter(PARAMETERS)
    )
    exceptions: MemberGroupCounter = field(
        default_factory=lambda: MemberGroupCounter(EXCEPTIONS)
    )

    @classmethod
    def from_symbol(cls, executable: ExecutableDoc) -> MethodCoverage:
        return cls(
            kind_label=kind_name(executable.kind),
            name=executable.name,
            own_documented=is_documented(executable.comment),
            parameters=MemberGroupCounter.from_units(
                executable.parameters, PARAMETERS, positioned_only=False
            ),
            exceptions=MemberGroupCounter.from_units(
                executable.thrown_exceptions, EXCEPTIONS, positioned_only=False
            ),
        )

    @property
    def own_percent(self) -> float:
        return 100.0 if self.own_documented else 0.0

    @property
    def total(self) -> int:
        return 1 + self.parameters.total + self.exceptions.total

    @property
    def documented(self) -> int:
        return int(self.own_documented) + self.parameters.documented + self.exceptions.documented

    @property
    def undocumented(self) -> int:
        return self.total - self.documented

    @property
    def percent(self) -> float:
        return coverage_percent(self.documented, self.total)


@dataclass(frozen=True)
class MethodCoverageGroup:
    """The constructors or the methods of one class, in declaration order.

    Executables without a source position are dropped, so ``total`` is the
    number of executables actually written in the source.
    """

    kind_label: str
    members: tuple[MethodCoverage, ...] = ()

    @classmethod
    def from_symbols(
        cls, executables: Iterable[ExecutableDoc] | None, kind_label: str
    ) -> MethodCoverageGroup:
        return cls(
            kind_label=kind_label,
            members=tuple(
                MethodCoverage.from_symbol(executable)
                for executable in present(executables)
                if executable.has_source_position
            ),
        )

    def __iter__(self) -> Iterator[MethodCoverage]:
        return iter(self.members)

    def __len__(self) -> int:
        return len(self.members)

    def __getitem__(self, index: int) -> MethodCoverage:
        return self.members[index]

    @property
    def total(self) -> int:
        return len(self.members)

    @property
    def documented(self) -> int:
        return sum(1 for member in self.members if member.own_documented)

    @property
    def undocumented(self) -> int:
        return self.total - self.documented

    @property
    def percent(self) -> float:
        return coverage_percent(self.documented, self.total)

    @property
    def subtree_total(self) -> int:
        """Units of every member including their parameters and exceptions."""
        return sum(member.total for member in self.members)

    @property
    def subtree_documented(self) -> int:
        return sum(member.documented for member in self.members)
