from __future__ import annotations

import re
from urllib.parse import quote

from leadfinder.extract import extract_email
from leadfinder.models import RawLead
from leadfinder.sources.base import BROWSER_HEADERS, Source
from leadfinder.utils import strip_tags

# One match per listing: the vacancy anchor plus everything up to the next vacancy anchor.
LISTING_PATTERN = re.compile(
    r'<a[^>]*href="(/vacancy/[^"]+)"[^>]*>(.*?)</a>(.*?)(?=<a[^>]*href="/vacancy/|\Z)',
    re.IGNORECASE | re.DOTALL,
)
COMPANY_PATTERN = re.compile(r'<span[^>]*class="[^"]*company[^"]*"[^>]*>(.*?)</span>', re.IGNORECASE | re.DOTALL)
ROLE_TERMS = "marketing design graphic"
MIN_TITLE_LENGTH = 6


class JobBoardSource(Source):
    label = "GoZambiaJobs"

    def __init__(self, request_manager, base_url: str = "https://www.gozambiajobs.com", **kwargs) -> None:
        kwargs.setdefault("timeout_seconds", 15)
        kwargs.setdefault("max_results", 20)
        super().__init__("gozambiajobs", request_manager, **kwargs)
        self.base_url = base_url.rstrip("/")

    def fetch(self, keywords: str, industry: str, location: str = "", credential: str = "") -> list[RawLead]:
        query = quote(f"{industry or ''} {ROLE_TERMS}".strip())
        try:
            html = self.request_manager.get_text(f"{self.base_url}/search/{query}", headers=BROWSER_HEADERS)
        except RuntimeError as exc:
            self.logger.warning("job board search failed: %s", exc)
            return []

        return self.parse(html)

    def parse(self, html: str) -> list[RawLead]:
        leads: list[RawLead] = []
        seen_paths: set[str] = set()

        for path, anchor_markup, block in LISTING_PATTERN.findall(html):
            title = strip_tags(anchor_markup)
            if len(title) < MIN_TITLE_LENGTH or path in seen_paths:
                continue
            seen_paths.add(path)

            company_match = COMPANY_PATTERN.search(block)
            company = strip_tags(company_match.group(1)) if company_match else ""
            company = company or "Unknown Company"
            block_text = strip_tags(block)

            leads.append(
                RawLead(
                    id=f"gzj-{path.rstrip('/').rsplit('/', 1)[-1]}",
                    title=title,
                    body=(
                        f'{company} is hiring: "{title}". Companies hiring for marketing/design roles '
                        "are potential clients who need creative services."
                    ),
                    author=company,
                    source=self.label,
                    source_url=f"{self.base_url}{path}",
                    email=extract_email(block_text),
                )
            )
            if len(leads) >= self.max_results:
                break

        return leads
