"""Shared counter contract and percentage helpers."""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal
from enum import Enum
from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from collections.abc import Iterable

EMPTY_PERCENT = 100.0
"""Coverage of a group with no eligible units: nothing is undocumented."""

_HUNDREDTHS = Decimal("0.01")


class DocStats(Protocol):
    """Capability shared by every coverage node."""

    @property
    def kind_label(self) -> str: ...

    @property
    def total(self) -> int: ...

    @property
    def documented(self) -> int: ...

    @property
    def undocumented(self) -> int: ...

    @property
    def percent(self) -> float: ...


class Documentable(Protocol):
    """What the counters read from a source-model symbol."""

    @property
    def comment(self) -> str | None: ...

    @property
    def has_source_position(self) -> bool: ...


def is_documented(comment: str | None) -> bool:
    """A comment counts when it has any non-whitespace text."""
    return bool(comment and comment.strip())


def coverage_percent(documented: int, total: int) -> float:
    """Documented share of *total* as a percentage; ``EMPTY_PERCENT`` when empty."""
    if total <= 0:
        return EMPTY_PERCENT
    return documented / total * 100


def mean(*values: float) -> float:
    """Unweighted arithmetic mean."""
    if not values:
        return EMPTY_PERCENT
    return sum(values) / len(values)


def format_percent(value: float) -> str:
    """Two-decimal rendering used in every report.

    Ties round half up on the shortest decimal form of *value*, so 3.125
    renders as ``3.13`` and 1.005 as ``1.01``.
    """
    return str(Decimal(repr(value)).quantize(_HUNDREDTHS, rounding=ROUND_HALF_UP))


def kind_name(kind: Enum | str) -> str:
    """Display label of a kind enum (or a plain string from a foreign model)."""
    return str(kind.value) if isinstance(kind, Enum) else str(kind)


def present(items: Iterable[object] | None) -> list:
    """Normalize a possibly-``None`` member list, dropping ``None`` entries."""
    return [item for item in items or () if item is not None]
