from __future__ import annotations

from leadfinder.models import FormattedLead, RawLead
from leadfinder.utils import short_snippet

RICHNESS_WEIGHTS = {"email": 30, "phone": 25, "website": 15}
DETECTED_PROBLEM = "direct_scrape"
PAIN_SUMMARY_LENGTH = 300


class Scorer:
    """Derives confidence, urgency and contact richness from contact presence."""

    @staticmethod
    def confidence(lead: RawLead | FormattedLead) -> int:
        if lead.email:
            return 75
        if lead.phone:
            return 70
        if lead.company_website:
            return 60
        return 45

    @staticmethod
    def urgency(lead: RawLead | FormattedLead) -> str:
        if lead.email or lead.phone:
            return "high"
        return "medium"

    @staticmethod
    def richness(lead: RawLead | FormattedLead) -> int:
        score = 0
        if lead.email:
            score += RICHNESS_WEIGHTS["email"]
        if lead.phone:
            score += RICHNESS_WEIGHTS["phone"]
        if lead.company_website:
            score += RICHNESS_WEIGHTS["website"]
        return score

    @staticmethod
    def band(score: int) -> str:
        if score >= 80:
            return "Hot"
        if score >= 60:
            return "Warm"
        if score >= 40:
            return "Mild"
        return "Cold"

    def format(self, lead: RawLead, industry: str = "", location: str = "") -> FormattedLead:
        company = lead.author or "Unknown"
        return FormattedLead(
            id=lead.id,
            title=lead.title,
            company_name=company,
            industry=industry or "General",
            location=location or None,
            detected_problem=DETECTED_PROBLEM,
            pain_summary=short_snippet(lead.body, PAIN_SUMMARY_LENGTH),
            confidence_score=self.confidence(lead),
            urgency=self.urgency(lead),
            outreach_suggestion=outreach_message(company, lead.source, industry),
            source=lead.source,
            source_url=lead.source_url,
            found_at=lead.found_at,
            email=lead.email,
            phone=lead.phone,
            company_website=lead.company_website,
        )

    def rank(self, leads: list[FormattedLead]) -> list[FormattedLead]:
        # sorted() is stable, reverse=True keeps input order among equal keys
        return sorted(leads, key=self.richness, reverse=True)


def outreach_message(company: str, source: str, industry: str = "") -> str:
    sector = f"{industry.lower()} " if industry else ""
    return (
        f"Hi {company}, I came across your activity on {source} and it sounds like getting in front of "
        f"the right customers is a challenge. We create ad creatives and motion graphics that help "
        f"{sector}businesses stand out and convert. Would you be open to a quick chat?"
    )
