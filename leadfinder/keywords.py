from __future__ import annotations

SIGNAL_PHRASES: dict[str, str] = {
    "no_leads": '"no clients" OR "no leads" OR "need more customers"',
    "low_conversions": '"low conversions" OR "no sales" OR "visitors but no sales"',
    "no_marketing": '"no marketing" OR "how do I market" OR "nobody knows about my business"',
    "looking_for_clients": '"looking for clients" OR "how to get clients" OR "finding customers"',
    "bad_ads": '"ads not working" OR "bad ads" OR "ad creatives"',
    "hiring_marketing": '"hiring a marketer" OR "need a graphic designer" OR "looking for a designer"',
    "weak_branding": '"need a logo" OR "rebranding" OR "no website"',
    "competitor_complaints": '"losing customers to" OR "competitors are stealing" OR "can\'t compete"',
}

DEFAULT_SIGNALS = ["no_leads"]

# Placeholder industry values sent by the search form carry no search meaning.
NEUTRAL_INDUSTRIES = {"any", "any industry"}


def build_query(
    problem_signals: list[str] | None = None,
    custom_signals: str = "",
    industry: str = "",
    extra_phrases: dict[str, str] | None = None,
) -> str:
    phrases = dict(SIGNAL_PHRASES)
    if extra_phrases:
        phrases.update(extra_phrases)

    signals = [s.strip() for s in (problem_signals or []) if s and s.strip()] or DEFAULT_SIGNALS
    signal_part = " OR ".join(phrases.get(signal, signal) for signal in signals)

    industry_hint = (industry or "").strip()
    if industry_hint.lower() in NEUTRAL_INDUSTRIES:
        industry_hint = ""

    parts = [signal_part, (custom_signals or "").strip(), industry_hint]
    return " ".join(part for part in parts if part)
