from __future__ import annotations

import re
from urllib.parse import quote_plus, unquote

from leadfinder.extract import is_excluded_host
from leadfinder.models import RawLead
from leadfinder.sources.base import BROWSER_HEADERS, Source
from leadfinder.utils import host_from_url, strip_tags

RESULT_PATTERN = re.compile(
    r'<a[^>]*href="/url\?q=([^"&]+)[^"]*"[^>]*>.*?<h3[^>]*>(.*?)</h3>',
    re.IGNORECASE | re.DOTALL,
)
SELF_DOMAINS = ("google.com", "youtube.com")
INTENT_TERMS = '"need" OR "looking for" OR "hiring" graphic designer OR marketing OR advertising'


class GoogleSource(Source):
    label = "Google"

    def __init__(self, request_manager, default_location: str = "Zambia", **kwargs) -> None:
        kwargs.setdefault("timeout_seconds", 10)
        kwargs.setdefault("max_results", 15)
        super().__init__("google", request_manager, **kwargs)
        self.default_location = default_location

    def build_query(self, industry: str, location: str) -> str:
        return f"{industry or 'business'} {location or self.default_location} {INTENT_TERMS}"

    def fetch(self, keywords: str, industry: str, location: str = "", credential: str = "") -> list[RawLead]:
        url = f"https://www.google.com/search?q={quote_plus(self.build_query(industry, location))}&num=20"
        try:
            html = self.request_manager.get_text(url, headers=BROWSER_HEADERS)
        except RuntimeError as exc:
            self.logger.warning("Google search failed: %s", exc)
            return []

        return self.parse(html, location)

    def parse(self, html: str, location: str = "") -> list[RawLead]:
        leads: list[RawLead] = []
        place = location or self.default_location

        for encoded_url, heading in RESULT_PATTERN.findall(html):
            result_url = unquote(encoded_url)
            host = host_from_url(result_url)
            if not result_url.startswith(("http://", "https://")) or not host:
                continue
            if is_excluded_host(host, SELF_DOMAINS):
                continue

            title = strip_tags(heading)
            leads.append(
                RawLead(
                    id=f"google-{len(leads)}-{host}",
                    title=title,
                    body=(
                        f'Found via Google search: "{title}". This result appeared when searching for '
                        f"businesses needing design/marketing services in {place}."
                    ),
                    author=host,
                    source=self.label,
                    source_url=result_url,
                    company_website=result_url,
                )
            )
            if len(leads) >= self.max_results:
                break

        return leads
