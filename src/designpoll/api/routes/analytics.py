"""Analytics API endpoints.

GET /api/admin/analytics/designs     - Per-design statistics, filtered and sorted
GET /api/admin/analytics/respondents - Per-respondent statistics, filtered and sorted

Both recompute rows from the current store snapshot on every request.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, Query

from designpoll.aggregation.pipeline import (
    DEFAULT_DESIGN_SORT,
    DEFAULT_RESPONDENT_SORT,
    DesignSortKey,
    Direction,
    RespondentSortKey,
    RowFilter,
    SortState,
    project_designs,
    project_respondents,
)
from designpoll.aggregation.stats import DesignRow, RespondentRow
from designpoll.api.app import get_db_session, require_admin
from designpoll.api.errors import to_http_exception
from designpoll.api.routes.designs import design_detail
from designpoll.core.errors import DesignPollError
from designpoll.db import repo
from designpoll.db.repo import DbSession
from designpoll.models.types import (
    DesignRowOut,
    DesignStats,
    RespondentInfo,
    RespondentRowOut,
    RespondentStats,
)

router = APIRouter(prefix="/admin/analytics", dependencies=[Depends(require_admin)])


def row_filter_params(
    name: str | None = Query(default=None, description="Case-insensitive name substring"),
    min_rating: float | None = Query(
        default=None, ge=0, le=5, description="Keep rows where either average reaches this"
    ),
) -> RowFilter:
    """Dependency building the row filter from query parameters."""
    return RowFilter(name=name or None, min_rating=min_rating)


def design_sort_params(
    sort_key: DesignSortKey = Query(default=DEFAULT_DESIGN_SORT.key),
    direction: Direction = Query(default=DEFAULT_DESIGN_SORT.direction),
) -> SortState:
    """Dependency building the design sort selection."""
    return SortState(key=sort_key, direction=direction)


def respondent_sort_params(
    sort_key: RespondentSortKey = Query(default=DEFAULT_RESPONDENT_SORT.key),
    direction: Direction = Query(default=DEFAULT_RESPONDENT_SORT.direction),
) -> SortState:
    """Dependency building the respondent sort selection."""
    return SortState(key=sort_key, direction=direction)


def load_design_rows(
    session: DbSession, row_filter: RowFilter, sort: SortState
) -> list[DesignRow]:
    """Snapshot the store and project design rows.

    Raises:
        HTTPException: If the record store fails.
    """
    try:
        with repo.store_call(session, "load analytics snapshot"):
            designs = repo.list_designs(session)
            responses = repo.list_responses(session)
    except DesignPollError as e:
        raise to_http_exception(e) from e
    return project_designs(responses, designs, row_filter, sort)


def load_respondent_rows(
    session: DbSession, row_filter: RowFilter, sort: SortState
) -> list[RespondentRow]:
    """Snapshot the store and project respondent rows.

    Raises:
        HTTPException: If the record store fails.
    """
    try:
        with repo.store_call(session, "load analytics snapshot"):
            responses = repo.list_responses(session)
    except DesignPollError as e:
        raise to_http_exception(e) from e
    return project_respondents(responses, row_filter, sort)


def _design_row_out(row: DesignRow) -> DesignRowOut:
    return DesignRowOut(
        design=design_detail(row.design),
        stats=DesignStats(
            avg_quality=row.stats.avg_quality,
            avg_purchase=row.stats.avg_purchase,
            total_ratings=row.stats.total_ratings,
            quality_distribution=row.stats.quality_distribution,
            purchase_distribution=row.stats.purchase_distribution,
        ),
    )


def _respondent_row_out(row: RespondentRow) -> RespondentRowOut:
    return RespondentRowOut(
        display_name=row.display_name,
        user_data=RespondentInfo(
            name=row.user_data.name,
            age=row.user_data.age,
            gender=row.user_data.gender,
            contact=row.user_data.contact,
        ),
        stats=RespondentStats(
            avg_quality=row.stats.avg_quality,
            avg_purchase=row.stats.avg_purchase,
            total_ratings=row.stats.total_ratings,
        ),
        submitted_at=row.submitted_at,
        response_count=len(row.responses),
        response_ids=[r.response_id for r in row.responses],
    )


@router.get("/designs", response_model=list[DesignRowOut])
def design_analytics(
    row_filter: RowFilter = Depends(row_filter_params),
    sort: SortState = Depends(design_sort_params),
    session: DbSession = Depends(get_db_session),
) -> list[DesignRowOut]:
    """Per-design statistics for the design analytics table."""
    rows = load_design_rows(session, row_filter, sort)
    return [_design_row_out(row) for row in rows]


@router.get("/respondents", response_model=list[RespondentRowOut])
def respondent_analytics(
    row_filter: RowFilter = Depends(row_filter_params),
    sort: SortState = Depends(respondent_sort_params),
    session: DbSession = Depends(get_db_session),
) -> list[RespondentRowOut]:
    """Per-respondent statistics for the user analytics table."""
    rows = load_respondent_rows(session, row_filter, sort)
    return [_respondent_row_out(row) for row in rows]

