"""Counter for one homogeneous group of documentable members."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from jdcov.stats.base import coverage_percent, is_documented, present

if TYPE_CHECKING:
    from collections.abc import Iterable

    from jdcov.stats.base import Documentable

FIELDS = "Fields"
ENUM_CONSTANTS = "Enum Constants"
PARAMETERS = "Parameters"
EXCEPTIONS = "Exceptions"


@dataclass(frozen=True)
class MemberGroupCounter:
    """Documented vs. undocumented counts for e.g. the fields of one class.

    Built once from a snapshot of the owner's members. Units without a
    source position (synthesized by the compiler) are left out of ``total``
    unless ``positioned_only`` is turned off, as for parameters, which can
    not exist apart from their declared method.
    """

    kind_label: str
    total: int = 0
    documented: int = 0
    always_show: bool = False
    """Render the group even when it has no members."""

    @classmethod
    def from_units(
        cls,
        units: Iterable[Documentable] | None,
        kind_label: str,
        *,
        positioned_only: bool = True,
        always_show: bool = False,
    ) -> MemberGroupCounter:
        counted = [
            unit
            for unit in present(units)
            if not positioned_only or unit.has_source_position
        ]
        return cls(
            kind_label=kind_label,
            total=len(counted),
            documented=sum(1 for unit in counted if is_documented(unit.comment)),
            always_show=always_show,
        )

    @property
    def undocumented(self) -> int:
        return self.total - self.documented

    @property
    def percent(self) -> float:
        return coverage_percent(self.documented, self.total)

    @property
    def visible(self) -> bool:
        """Whether a report should print this group."""
        return self.total > 0 or self.always_show
