from __future__ import annotations

from leadfinder.models import RawLead
from leadfinder.sources.base import Source

APOLLO_SEARCH_URL = "https://api.apollo.io/v1/mixed_people/search"
DEFAULT_KEYWORDS = "marketing design advertising"
DEFAULT_TITLES = ["CEO", "Founder", "Owner", "Marketing Manager", "Marketing Director", "CMO", "Business Owner"]
SIGNUP_URL = "https://app.apollo.io/#/settings/integrations/api"


class ApolloSource(Source):
    label = "Apollo"

    def __init__(
        self,
        request_manager,
        person_titles: list[str] | None = None,
        per_page: int = 25,
        default_location: str = "Zambia",
        api_key: str = "",
        signup_url: str = SIGNUP_URL,
        **kwargs,
    ) -> None:
        kwargs.setdefault("timeout_seconds", 20)
        super().__init__("apollo", request_manager, **kwargs)
        self.person_titles = list(person_titles or DEFAULT_TITLES)
        self.per_page = max(1, min(int(per_page), 100))
        self.default_location = default_location
        self.api_key = api_key
        self.signup_url = signup_url

    def build_payload(self, keywords: str, location: str) -> dict:
        return {
            "q_keywords": keywords or DEFAULT_KEYWORDS,
            "person_titles": self.person_titles,
            "person_locations": [location or self.default_location],
            "per_page": self.per_page,
            "page": 1,
        }

    def fetch(self, keywords: str, industry: str, location: str = "", credential: str = "") -> list[RawLead]:
        api_key = credential or self.api_key
        if not api_key:
            return []

        headers = {"Content-Type": "application/json", "Cache-Control": "no-cache", "X-Api-Key": api_key}
        try:
            payload = self.request_manager.post_json(APOLLO_SEARCH_URL, self.build_payload(keywords, location), headers=headers)
        except (RuntimeError, ValueError) as exc:
            self.logger.warning("Apollo people search failed: %s", exc)
            return []

        people = payload.get("people") if isinstance(payload, dict) else None
        if not isinstance(people, list):
            return []
        return [self._to_lead(index, person) for index, person in enumerate(people) if isinstance(person, dict)]

    def placeholder(self) -> RawLead:
        return RawLead(
            id="apollo-setup",
            title="Connect Apollo.io to unlock LinkedIn and contact data",
            body=(
                "No Apollo API key is configured. Create a free Apollo.io account, generate an API key "
                "under Settings > Integrations > API, then set APOLLO_API_KEY or sources.apollo.api_key "
                "to search decision makers with verified emails and phone numbers."
            ),
            author="Apollo.io",
            source=self.label,
            source_url=self.signup_url,
        )

    def _to_lead(self, index: int, person: dict) -> RawLead:
        org = person.get("organization") if isinstance(person.get("organization"), dict) else {}
        first = _text(person.get("first_name"))
        last = _text(person.get("last_name"))
        name = f"{first} {last}".strip()
        role = _text(person.get("title"))
        place = " ".join(part for part in (_text(person.get(k)) for k in ("city", "state", "country")) if part)

        body = f"{name or 'This person'} is {role or 'a professional'} at {_text(org.get('name')) or 'Unknown Company'}."
        description = _text(org.get("short_description"))
        if description:
            body += f" {description}"
        if place:
            body += f" Located in {place}."

        linkedin_url = _text(person.get("linkedin_url")) or None
        return RawLead(
            id=f"apollo-{person.get('id') or index}",
            title=f"{name} - {role or 'Unknown Role'}".strip(" -"),
            body=body[:2000],
            author=name or "Unknown",
            source="LinkedIn" if linkedin_url else self.label,
            source_url=linkedin_url,
            email=_text(person.get("email")) or None,
            phone=_first_phone(person.get("phone_numbers")),
            company_website=_website(org),
        )


def _text(value: object) -> str:
    return value.strip() if isinstance(value, str) else ""


def _first_phone(numbers: object) -> str | None:
    if not isinstance(numbers, list) or not numbers or not isinstance(numbers[0], dict):
        return None
    return _text(numbers[0].get("sanitized_number")) or None


def _website(org: dict) -> str | None:
    website = _text(org.get("website_url"))
    if website:
        return website
    domain = _text(org.get("primary_domain"))
    return f"https://{domain}" if domain else None
