from __future__ import annotations

import csv
import io
from datetime import date
from typing import Iterable, List, Literal, Optional, Sequence

from ..data import recommendation_rows, spend_services

ExportType = Literal["spending", "recommendations", "full"]

SPENDING_HEADERS = (
    "Service",
    "Current Month ($)",
    "Previous Month ($)",
    "Change (%)",
    "Trend",
    "Resource Count",
)
RECOMMENDATION_HEADERS = (
    "Id",
    "Category",
    "Status",
    "Expected Savings ($)",
    "Rationale",
)


def to_csv(headers: Sequence[str], rows: Iterable[Sequence[object]]) -> str:
    buffer = io.StringIO()
    writer = csv.writer(buffer, lineterminator="\n")
    writer.writerow(headers)
    for row in rows:
        writer.writerow(["" if value is None else value for value in row])
    return buffer.getvalue().rstrip("\n")


def _minor_to_dollars(value: object) -> Optional[str]:
    if value is None:
        return None
    return f"{int(value) / 100:.2f}"


def spending_csv() -> str:
    rows: List[Sequence[object]] = [
        (
            service.get("name"),
            service.get("currentCost"),
            service.get("previousCost"),
            service.get("changePercent"),
            service.get("trend"),
            service.get("resourceCount") or 0,
        )
        for service in spend_services()
    ]
    return to_csv(SPENDING_HEADERS, rows)


def recommendations_csv() -> str:
    rows: List[Sequence[object]] = [
        (
            item.get("id"),
            item.get("category"),
            item.get("status"),
            _minor_to_dollars(item.get("expectedSavingsMinor")),
            item.get("rationale"),
        )
        for item in recommendation_rows()
    ]
    return to_csv(RECOMMENDATION_HEADERS, rows)


def build_export(export_type: ExportType, today: date) -> tuple[str, str]:
    """Return ``(filename, csv_content)`` for the requested export."""
    if export_type == "spending":
        content = spending_csv()
    elif export_type == "recommendations":
        content = recommendations_csv()
    else:
        content = f"SPENDING DATA\n{spending_csv()}\n\nRECOMMENDATIONS DATA\n{recommendations_csv()}"
    return f"{export_type}-export-{today.isoformat()}.csv", content
