from __future__ import annotations

from dataclasses import asdict, dataclass, field
from datetime import datetime, timezone


def utc_now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


class RequestError(ValueError):
    """Raised when a search request is malformed."""


@dataclass(frozen=True)
class RawLead:
    id: str
    title: str
    body: str
    author: str
    source: str
    source_url: str | None = None
    found_at: str = field(default_factory=utc_now_iso)
    email: str | None = None
    phone: str | None = None
    company_website: str | None = None

    def __post_init__(self) -> None:
        if not self.id:
            raise ValueError("RawLead.id must be non-empty")


@dataclass(frozen=True)
class FormattedLead:
    id: str
    title: str
    company_name: str
    industry: str
    location: str | None
    detected_problem: str
    pain_summary: str
    confidence_score: int
    urgency: str
    outreach_suggestion: str
    source: str
    source_url: str | None
    found_at: str
    email: str | None
    phone: str | None
    company_website: str | None

    def to_dict(self) -> dict:
        return asdict(self)

    def to_row(self) -> list[str | int]:
        return [
            self.company_name,
            self.industry,
            self.location or "",
            self.confidence_score,
            self.urgency,
            self.detected_problem,
            self.pain_summary,
            self.outreach_suggestion,
            self.company_website or "",
            self.email or "",
            self.phone or "",
            self.source,
            self.source_url or "",
            self.found_at,
        ]


@dataclass
class SearchRequest:
    action: str
    industry: str = ""
    business_size: str = "any"
    location: str = ""
    problem_signals: list[str] = field(default_factory=list)
    custom_signals: str = ""
    sources: list[str] = field(default_factory=lambda: ["reddit"])
    credential: str = ""

    @classmethod
    def from_payload(cls, payload: object) -> SearchRequest:
        if not isinstance(payload, dict):
            raise RequestError("request body must be a JSON object")
        action = payload.get("action")
        if not action or not isinstance(action, str):
            raise RequestError("action is required")

        params = payload.get("params") or {}
        if not isinstance(params, dict):
            raise RequestError("params must be an object")

        signals = params.get("problemSignals") or []
        sources = params.get("sources") or ["reddit"]
        if not isinstance(signals, list) or not isinstance(sources, list):
            raise RequestError("problemSignals and sources must be lists")

        return cls(
            action=action,
            industry=str(params.get("industry") or ""),
            business_size=str(params.get("businessSize") or "any"),
            location=str(params.get("location") or ""),
            problem_signals=[str(s) for s in signals],
            custom_signals=str(params.get("customSignals") or ""),
            sources=[str(s) for s in sources],
        )


@dataclass(frozen=True)
class RunMeta:
    total: int
    sources: list[str]
    with_email: int
    with_phone: int
    scraped_at: str

    def to_dict(self) -> dict:
        return {
            "total": self.total,
            "sources": list(self.sources),
            "withEmail": self.with_email,
            "withPhone": self.with_phone,
            "scrapedAt": self.scraped_at,
        }


@dataclass(frozen=True)
class SearchResult:
    leads: list[FormattedLead]
    meta: RunMeta

    def to_dict(self) -> dict:
        return {
            "leads": [lead.to_dict() for lead in self.leads],
            "meta": self.meta.to_dict(),
        }
