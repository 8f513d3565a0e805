from leadfinder.models import RawLead
from leadfinder.scorer import Scorer


def _lead(**contacts) -> RawLead:
    return RawLead(id="reddit-1", title="t", body="b", author="acme", source="Reddit", **contacts)


def test_confidence_mapping() -> None:
    assert Scorer.confidence(_lead(email="a@b.com", phone="+260 97 1234567")) == 75
    assert Scorer.confidence(_lead(phone="+260 97 1234567", company_website="https://a.com")) == 70
    assert Scorer.confidence(_lead(company_website="https://a.com")) == 60
    assert Scorer.confidence(_lead()) == 45


def test_urgency_high_only_with_email_or_phone() -> None:
    assert Scorer.urgency(_lead(email="a@b.com")) == "high"
    assert Scorer.urgency(_lead(phone="+260 97 1234567")) == "high"
    assert Scorer.urgency(_lead(company_website="https://a.com")) == "medium"
    assert Scorer.urgency(_lead()) == "medium"


def test_format_passes_request_context_through() -> None:
    lead = _lead(email="a@b.com")
    formatted = Scorer().format(lead, industry="Real Estate", location="Lusaka")

    assert formatted.company_name == "acme"
    assert formatted.industry == "Real Estate"
    assert formatted.location == "Lusaka"
    assert formatted.confidence_score == 75
    assert formatted.urgency == "high"
    assert "Reddit" in formatted.outreach_suggestion


def test_rank_is_stable_and_descending_by_richness() -> None:
    scorer = Scorer()
    website_only = scorer.format(RawLead(id="b", title="", body="", author="b", source="Google", company_website="https://b.com"))
    bare_1 = scorer.format(RawLead(id="c1", title="", body="", author="c1", source="Reddit"))
    rich = scorer.format(RawLead(id="a", title="", body="", author="a", source="Reddit", email="a@a.com", phone="+260 97 1234567"))
    bare_2 = scorer.format(RawLead(id="c2", title="", body="", author="c2", source="Reddit"))

    ranked = scorer.rank([website_only, bare_1, rich, bare_2])
    assert [lead.id for lead in ranked] == ["a", "b", "c1", "c2"]


def test_band() -> None:
    assert Scorer.band(75) == "Warm"
    assert Scorer.band(45) == "Mild"
