"""Export API endpoint.

GET /api/admin/analytics/designs/export     - Download design analytics as HTML
GET /api/admin/analytics/respondents/export - Download user analytics as HTML

Exports take the same filter and sort parameters as the analytics tables
and contain exactly the rows those would show.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone

from fastapi import APIRouter, Depends
from fastapi.responses import HTMLResponse

from designpoll.aggregation.export import (
    ReportKind,
    render_design_report,
    render_respondent_report,
    report_filename,
)
from designpoll.aggregation.pipeline import RowFilter, SortState
from designpoll.api.app import get_db_session, require_admin
from designpoll.api.routes.analytics import (
    design_sort_params,
    load_design_rows,
    load_respondent_rows,
    respondent_sort_params,
    row_filter_params,
)
from designpoll.db.repo import DbSession

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/admin/analytics", dependencies=[Depends(require_admin)])


def _download(content: str, kind: ReportKind, generated_at: datetime) -> HTMLResponse:
    """Wrap a report as a downloadable HTML file."""
    filename = report_filename(kind, generated_at)
    return HTMLResponse(
        content=content,
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )


@router.get("/designs/export", response_class=HTMLResponse)
def export_design_analytics(
    row_filter: RowFilter = Depends(row_filter_params),
    sort: SortState = Depends(design_sort_params),
    session: DbSession = Depends(get_db_session),
) -> HTMLResponse:
    """Export the filtered and sorted design table as an HTML report."""
    rows = load_design_rows(session, row_filter, sort)
    generated_at = datetime.now(timezone.utc)
    logger.info(f"Exporting design report with {len(rows)} rows")
    return _download(render_design_report(rows, generated_at), "design", generated_at)


@router.get("/respondents/export", response_class=HTMLResponse)
def export_respondent_analytics(
    row_filter: RowFilter = Depends(row_filter_params),
    sort: SortState = Depends(respondent_sort_params),
    session: DbSession = Depends(get_db_session),
) -> HTMLResponse:
    """Export the filtered and sorted respondent table as an HTML report."""
    rows = load_respondent_rows(session, row_filter, sort)
    generated_at = datetime.now(timezone.utc)
    logger.info(f"Exporting user report with {len(rows)} rows")
    return _download(render_respondent_report(rows, generated_at), "user", generated_at)
