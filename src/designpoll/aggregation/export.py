"""HTML report export for analytics projections.

Renders exactly the rows it is given, so callers pass the filtered and
sorted projection currently on screen.
"""

from __future__ import annotations

from datetime import datetime, timezone
from html import escape
from typing import Literal, Sequence

from designpoll.aggregation.stats import DesignRow, RespondentRow

ReportKind = Literal["design", "user"]

REPORT_STYLE = """
    body { font-family: Arial, sans-serif; margin: 20px; }
    table { width: 100%; border-collapse: collapse; margin-top: 20px; }
    th, td { border: 1px solid #ddd; padding: 8px; text-align: left; }
    th { background-color: #f2f2f2; }
    h1 { color: #333; }
    .header { margin-bottom: 20px; }
"""


def report_filename(kind: ReportKind, generated_at: datetime | None = None) -> str:
    """Download name, e.g. design-analytics-2025-09-25.html."""
    generated_at = generated_at or datetime.now(timezone.utc)
    return f"{kind}-analytics-{generated_at.date().isoformat()}.html"


def _format_date(value: datetime | None) -> str:
    return value.date().isoformat() if value else "N/A"


def _format_distribution(distribution: dict[int, int]) -> str:
    return ", ".join(f"{score}★: {count}" for score, count in sorted(distribution.items()))


def _render_document(
    title: str,
    count_label: str,
    headers: Sequence[str],
    rows: Sequence[Sequence[object]],
    generated_at: datetime,
) -> str:
    head = "".join(f"<th>{escape(h)}</th>" for h in headers)
    body = "\n".join(
        "<tr>" + "".join(f"<td>{escape(str(cell))}</td>" for cell in row) + "</tr>"
        for row in rows
    )
    return f"""<!DOCTYPE html>
<html>
  <head>
    <meta charset="utf-8">
    <title>{escape(title)}</title>
    <style>{REPORT_STYLE}</style>
  </head>
  <body>
    <div class="header">
      <h1>{escape(title)}</h1>
      <p>Generated on: {escape(generated_at.strftime("%Y-%m-%d %H:%M:%S %Z").strip())}</p>
      <p>{escape(count_label)}: {len(rows)}</p>
    </div>
    <table>
      <thead>
        <tr>{head}</tr>
      </thead>
      <tbody>
{body}
      </tbody>
    </table>
  </body>
</html>
"""


def render_design_report(rows: Sequence[DesignRow], generated_at: datetime | None = None) -> str:
    """Render design rows as a standalone HTML document."""
    return _render_document(
        title="Design Analytics Report",
        count_label="Total Designs",
        headers=[
            "Design Name",
            "Avg Quality Rating",
            "Avg Purchase Rating",
            "Total Ratings",
            "Quality Distribution",
            "Purchase Distribution",
            "Uploaded",
        ],
        rows=[
            [
                row.design.name,
                f"{row.stats.avg_quality:.1f}/5",
                f"{row.stats.avg_purchase:.1f}/5",
                row.stats.total_ratings,
                _format_distribution(row.stats.quality_distribution),
                _format_distribution(row.stats.purchase_distribution),
                _format_date(row.design.uploaded_at),
            ]
            for row in rows
        ],
        generated_at=generated_at or datetime.now(timezone.utc),
    )


def render_respondent_report(
    rows: Sequence[RespondentRow], generated_at: datetime | None = None
) -> str:
    """Render respondent rows as a standalone HTML document."""
    return _render_document(
        title="User Analytics Report",
        count_label="Total Users",
        headers=[
            "User Name",
            "Age",
            "Gender",
            "Avg Quality Rating",
            "Avg Purchase Rating",
            "Total Ratings",
            "Contact",
            "Last Submitted",
        ],
        rows=[
            [
                row.display_name,
                row.user_data.age,
                row.user_data.gender,
                f"{row.stats.avg_quality:.1f}/5",
                f"{row.stats.avg_purchase:.1f}/5",
                row.stats.total_ratings,
                row.user_data.contact or "N/A",
                _format_date(row.submitted_at),
            ]
            for row in rows
        ],
        generated_at=generated_at or datetime.now(timezone.utc),
    )
