"""Rating statistics for designs and respondents.

Pure functions over an in-memory snapshot of responses - no database access.
Averages are reported to one decimal place, rounding halves up, and an
empty set of ratings averages to 0.0.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime
from decimal import ROUND_HALF_UP, Decimal
from typing import Iterable

from designpoll.models.domain import (
    DesignEntity,
    RatingValue,
    RespondentAttributes,
    ResponseEntity,
)

logger = logging.getLogger(__name__)

SCORES = (1, 2, 3, 4, 5)
ANONYMOUS = "Anonymous"


@dataclass
class DesignStats:
    """Aggregate ratings for one design."""

    avg_quality: float
    avg_purchase: float
    total_ratings: int
    quality_distribution: dict[int, int]
    purchase_distribution: dict[int, int]


@dataclass
class RespondentStats:
    """Ratings summary for a single response."""

    avg_quality: float
    avg_purchase: float
    total_ratings: int


@dataclass
class DesignRow:
    """Design projection row."""

    design: DesignEntity
    stats: DesignStats

    @property
    def name(self) -> str:
        return self.design.name


@dataclass
class RespondentRow:
    """Respondent projection row.

    The representative is the first response of the group in snapshot
    order; responses holds every response sharing the display name.
    """

    display_name: str
    user_data: RespondentAttributes
    stats: RespondentStats
    submitted_at: datetime | None
    responses: list[ResponseEntity] = field(default_factory=list)

    @property
    def name(self) -> str:
        return self.display_name


def mean_one_decimal(total: int, count: int) -> float:
    """Mean of integer scores rounded half-up to one decimal.

    Rounds the exact binary value of the float mean, like toFixed(1):
    9/4 = 2.25 is exact and rounds to 2.3, while 23/20 is stored as
    1.1499... and rounds to 1.1.
    """
    if count == 0:
        return 0.0
    mean = Decimal(total / count)
    return float(mean.quantize(Decimal("0.1"), rounding=ROUND_HALF_UP))


def empty_distribution() -> dict[int, int]:
    return {1: 0, 2: 0, 3: 0, 4: 0, 5: 0}


def is_valid_rating(rating: RatingValue) -> bool:
    """True if both scores are integers in 1..5."""
    return all(
        isinstance(score, int) and not isinstance(score, bool) and score in SCORES
        for score in (rating.design_quality, rating.buy_intention)
    )


def _valid_ratings(ratings: Iterable[RatingValue]) -> list[RatingValue]:
    valid = []
    for rating in ratings:
        if is_valid_rating(rating):
            valid.append(rating)
        else:
            logger.debug(f"Skipping malformed rating: {rating}")
    return valid


def compute_design_stats(design_id: str, responses: Iterable[ResponseEntity]) -> DesignStats:
    """Compute rating statistics for a design.

    Args:
        design_id: Design to summarize.
        responses: Full response snapshot, any order.

    Returns:
        DesignStats with averages, count and 1..5 distributions.
    """
    ratings = _valid_ratings(
        response.ratings[design_id] for response in responses if design_id in response.ratings
    )

    quality_distribution = empty_distribution()
    purchase_distribution = empty_distribution()
    for rating in ratings:
        quality_distribution[rating.design_quality] += 1
        purchase_distribution[rating.buy_intention] += 1

    total = len(ratings)
    return DesignStats(
        avg_quality=mean_one_decimal(sum(r.design_quality for r in ratings), total),
        avg_purchase=mean_one_decimal(sum(r.buy_intention for r in ratings), total),
        total_ratings=total,
        quality_distribution=quality_distribution,
        purchase_distribution=purchase_distribution,
    )


def compute_response_stats(response: ResponseEntity) -> RespondentStats:
    """Compute averages across one response's own ratings.

    Entries for deleted designs still count. A response with no ratings
    yields zeros.
    """
    ratings = _valid_ratings(response.ratings.values())
    total = len(ratings)
    return RespondentStats(
        avg_quality=mean_one_decimal(sum(r.design_quality for r in ratings), total),
        avg_purchase=mean_one_decimal(sum(r.buy_intention for r in ratings), total),
        total_ratings=total,
    )


def display_name(response: ResponseEntity) -> str:
    return response.user_data.name or ANONYMOUS


def group_by_respondent(responses: Iterable[ResponseEntity]) -> dict[str, list[ResponseEntity]]:
    """Group responses by display name, preserving first-seen order."""
    groups: dict[str, list[ResponseEntity]] = {}
    for response in responses:
        groups.setdefault(display_name(response), []).append(response)
    return groups


def build_design_rows(
    designs: Iterable[DesignEntity], responses: list[ResponseEntity]
) -> list[DesignRow]:
    """One row per live design. Ratings for deleted designs are ignored."""
    return [
        DesignRow(design=design, stats=compute_design_stats(design.design_id, responses))
        for design in designs
    ]


def build_respondent_rows(responses: Iterable[ResponseEntity]) -> list[RespondentRow]:
    """One row per distinct display name.

    Expects responses newest first (the store's listing order) so that the
    representative is the latest submission. Grouping does not re-sort.
    """
    rows = []
    for name, group in group_by_respondent(responses).items():
        representative = group[0]
        rows.append(
            RespondentRow(
                display_name=name,
                user_data=representative.user_data,
                stats=compute_response_stats(representative),
                submitted_at=representative.submitted_at,
                responses=group,
            )
        )
    return rows
