from __future__ import annotations

import csv
from pathlib import Path

from leadfinder.models import FormattedLead

HEADERS = [
    "Company",
    "Industry",
    "Location",
    "Confidence Score",
    "Urgency",
    "Detected Problem",
    "Pain Summary",
    "Outreach Suggestion",
    "Website",
    "Email",
    "Phone",
    "Source",
    "Source URL",
    "Found At",
]


def lead_record(lead: FormattedLead) -> dict[str, str | int]:
    return dict(zip(HEADERS, lead.to_row()))


def _existing_header(csv_path: Path) -> list[str] | None:
    if not csv_path.exists() or csv_path.stat().st_size == 0:
        return None
    with csv_path.open("r", encoding="utf-8", newline="") as handle:
        return next(csv.reader(handle), None)


def write_leads_csv(path: str, leads: list[FormattedLead]) -> int:
    """Append leads to ``path``; returns the number of rows written."""
    csv_path = Path(path)
    header = _existing_header(csv_path)
    if header is not None and header != HEADERS:
        raise ValueError(f"{path} has a different column layout; export to a new file")

    csv_path.parent.mkdir(parents=True, exist_ok=True)
    with csv_path.open("a", encoding="utf-8", newline="") as handle:
        writer = csv.DictWriter(handle, fieldnames=HEADERS)
        if header is None:
            writer.writeheader()
        writer.writerows(lead_record(lead) for lead in leads)
    return len(leads)


def read_leads_csv(path: str) -> list[dict[str, str]]:
    csv_path = Path(path)
    if not csv_path.exists():
        return []
    with csv_path.open("r", encoding="utf-8", newline="") as handle:
        return [{key: row.get(key) or "" for key in HEADERS} for row in csv.DictReader(handle)]
