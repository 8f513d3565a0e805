from __future__ import annotations

import re
from urllib.parse import quote_plus

from leadfinder.models import RawLead
from leadfinder.sources.base import BROWSER_HEADERS, Source
from leadfinder.utils import strip_tags

GIG_TITLE_PATTERN = re.compile(r'<h3[^>]*class="[^"]*"[^>]*>(.*?)</h3>', re.DOTALL)
SELLER_PATTERN = re.compile(r'href="/([a-zA-Z0-9_]+)\?')
RESERVED_PATHS = {"search", "categories"}


class FiverrSource(Source):
    """Marketplace search page scraper.

    Gig titles and seller handles come from two independent scans of the page and are
    paired by position. Cards with a missing title or seller shift the pairing.
    """

    label = "Fiverr"

    def __init__(self, request_manager, **kwargs) -> None:
        kwargs.setdefault("timeout_seconds", 15)
        kwargs.setdefault("max_results", 15)
        super().__init__("fiverr", request_manager, **kwargs)

    def fetch(self, keywords: str, industry: str, location: str = "", credential: str = "") -> list[RawLead]:
        query = quote_plus(f"{industry or 'graphic design'} {keywords}".strip())
        url = (
            f"https://www.fiverr.com/search/gigs?query={query}&source=top-bar"
            f"&search_in=everywhere&search-autocomplete-original-term={query}"
        )
        try:
            html = self.request_manager.get_text(url, headers=BROWSER_HEADERS)
        except RuntimeError as exc:
            self.logger.warning("Fiverr search failed: %s", exc)
            return []

        return self.parse(html, industry)

    def parse(self, html: str, industry: str = "") -> list[RawLead]:
        titles = [strip_tags(title) for title in GIG_TITLE_PATTERN.findall(html)]

        sellers: list[str] = []
        for handle in SELLER_PATTERN.findall(html):
            if handle in RESERVED_PATHS or handle in sellers:
                continue
            sellers.append(handle)

        leads: list[RawLead] = []
        service = industry or "design"
        for index, seller in enumerate(sellers[: self.max_results]):
            title = titles[index] if index < len(titles) and titles[index] else f"Fiverr seller: {seller}"
            leads.append(
                RawLead(
                    id=f"fiverr-{seller}-{index}",
                    title=title,
                    body=(
                        f'Fiverr seller "{seller}" found searching for "{service}" services. '
                        "This person is either offering or looking for creative services on Fiverr."
                    ),
                    author=seller,
                    source=self.label,
                    source_url=f"https://www.fiverr.com/{seller}",
                )
            )
        return leads
