"""Filter and sort pipeline for analytics projections.

The same two stages apply to design rows and respondent rows:
1. Filter by case-insensitive name substring AND a minimum rating, where
   the rating check passes if EITHER average meets the threshold.
2. Sort by a selected key and direction.

Rows are rebuilt from the snapshot on every call; source records are
never mutated.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Literal, Sequence, TypeVar

from designpoll.aggregation.stats import (
    DesignRow,
    RespondentRow,
    build_design_rows,
    build_respondent_rows,
)
from designpoll.models.domain import DesignEntity, ResponseEntity

Direction = Literal["asc", "desc"]
DesignSortKey = Literal["name", "avg_quality", "avg_purchase", "total_ratings", "uploaded_at"]
RespondentSortKey = Literal["name", "avg_quality", "avg_purchase", "total_ratings", "submitted_at"]

Row = TypeVar("Row", DesignRow, RespondentRow)


@dataclass(frozen=True)
class RowFilter:
    """Viewer filter selection. Unset fields always pass."""

    name: str | None = None
    min_rating: float | None = None

    def matches(self, row: DesignRow | RespondentRow) -> bool:
        name_match = not self.name or self.name.lower() in row.name.lower()
        rating_match = (
            self.min_rating is None
            or row.stats.avg_quality >= self.min_rating
            or row.stats.avg_purchase >= self.min_rating
        )
        return name_match and rating_match


@dataclass(frozen=True)
class SortState:
    """Active sort column and direction."""

    key: str
    direction: Direction = "asc"

    def toggle(self, key: str) -> SortState:
        """Select a column header.

        Re-selecting the active key flips direction; a new key starts ascending.
        """
        if key == self.key:
            return SortState(key=key, direction="desc" if self.direction == "asc" else "asc")
        return SortState(key=key, direction="asc")


DEFAULT_DESIGN_SORT = SortState(key="avg_quality", direction="desc")
DEFAULT_RESPONDENT_SORT = SortState(key="submitted_at", direction="desc")


def _nullable(value: Any) -> tuple[bool, Any]:
    # Missing timestamps sort before present ones without comparing None
    return (value is not None, value)


DESIGN_SORT_KEYS: dict[str, Callable[[DesignRow], Any]] = {
    "name": lambda row: row.design.name,
    "avg_quality": lambda row: row.stats.avg_quality,
    "avg_purchase": lambda row: row.stats.avg_purchase,
    "total_ratings": lambda row: row.stats.total_ratings,
    "uploaded_at": lambda row: _nullable(row.design.uploaded_at),
}

RESPONDENT_SORT_KEYS: dict[str, Callable[[RespondentRow], Any]] = {
    "name": lambda row: row.display_name,
    "avg_quality": lambda row: row.stats.avg_quality,
    "avg_purchase": lambda row: row.stats.avg_purchase,
    "total_ratings": lambda row: row.stats.total_ratings,
    "submitted_at": lambda row: _nullable(row.submitted_at),
}


def apply_filter(rows: Sequence[Row], row_filter: RowFilter) -> list[Row]:
    return [row for row in rows if row_filter.matches(row)]


def apply_sort(
    rows: Sequence[Row],
    sort: SortState,
    sort_keys: dict[str, Callable[[Row], Any]],
) -> list[Row]:
    """Sort rows by the selected key.

    Raises:
        ValueError: If sort.key is not a known column.
    """
    if sort.key not in sort_keys:
        raise ValueError(f"Unknown sort key: {sort.key}")
    return sorted(rows, key=sort_keys[sort.key], reverse=sort.direction == "desc")


def project_designs(
    responses: list[ResponseEntity],
    designs: Sequence[DesignEntity],
    row_filter: RowFilter | None = None,
    sort: SortState = DEFAULT_DESIGN_SORT,
) -> list[DesignRow]:
    """Compute, filter and sort design rows from a snapshot."""
    rows = build_design_rows(designs, responses)
    rows = apply_filter(rows, row_filter or RowFilter())
    return apply_sort(rows, sort, DESIGN_SORT_KEYS)


def project_respondents(
    responses: list[ResponseEntity],
    row_filter: RowFilter | None = None,
    sort: SortState = DEFAULT_RESPONDENT_SORT,
) -> list[RespondentRow]:
    """Group, filter and sort respondent rows from a snapshot.

    responses must be newest first so each group's representative is its
    latest submission.
    """
    rows = build_respondent_rows(responses)
    rows = apply_filter(rows, row_filter or RowFilter())
    return apply_sort(rows, sort, RESPONDENT_SORT_KEYS)
