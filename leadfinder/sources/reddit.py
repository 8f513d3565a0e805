from __future__ import annotations

from datetime import datetime, timezone
from urllib.parse import quote_plus

from leadfinder.extract import extract_email, extract_phone, extract_website
from leadfinder.models import RawLead, utc_now_iso
from leadfinder.sources.base import Source

MIN_BODY_LENGTH = 50
MAX_BODY_LENGTH = 2000


class RedditSource(Source):
    label = "Reddit"

    def __init__(
        self,
        request_manager,
        subreddits: list[str] | None = None,
        community_limit: int = 4,
        excluded_domains: list[str] | None = None,
        user_agent: str = "LeadFinder/1.0",
        **kwargs,
    ) -> None:
        kwargs.setdefault("timeout_seconds", 20)
        super().__init__("reddit", request_manager, **kwargs)
        self.subreddits = list(subreddits or [])
        self.community_limit = max(0, int(community_limit))
        self.excluded_domains = excluded_domains
        self.user_agent = user_agent

    def search_urls(self, keywords: str) -> list[str]:
        query = quote_plus(keywords)
        urls = [f"https://www.reddit.com/search.json?q={query}&sort=new&limit=30&t=month"]
        for subreddit in self.subreddits[: self.community_limit]:
            urls.append(
                f"https://www.reddit.com/r/{subreddit}/search.json?q={query}&restrict_sr=1&sort=new&limit=20&t=month"
            )
        return urls

    def fetch(self, keywords: str, industry: str, location: str = "", credential: str = "") -> list[RawLead]:
        leads: list[RawLead] = []
        seen_ids: set[str] = set()

        for url in self.search_urls(keywords):
            if self.out_of_time():
                self.logger.info("time budget spent, skipping remaining Reddit queries")
                break
            self._wait_for_slot()
            try:
                payload = self.request_manager.get_json(url, headers={"User-Agent": self.user_agent})
            except (RuntimeError, ValueError) as exc:
                self.logger.warning("Reddit request failed for %s: %s", url, exc)
                continue

            for post in self._posts(payload):
                post_id = str(post.get("id") or "")
                selftext = post.get("selftext") or ""
                if not post_id or not isinstance(selftext, str) or len(selftext) < MIN_BODY_LENGTH:
                    continue
                if post_id in seen_ids:
                    continue
                seen_ids.add(post_id)
                leads.append(self._to_lead(post_id, post, selftext))

        return leads

    @staticmethod
    def _posts(payload: object) -> list[dict]:
        data = payload.get("data") if isinstance(payload, dict) else None
        if not isinstance(data, dict):
            return []
        children = data.get("children")
        if not isinstance(children, list):
            return []
        return [child["data"] for child in children if isinstance(child, dict) and isinstance(child.get("data"), dict)]

    def _to_lead(self, post_id: str, post: dict, selftext: str) -> RawLead:
        title = str(post.get("title") or "")
        full_text = f"{title} {selftext}"
        permalink = post.get("permalink") or ""
        website_kwargs = {"excluded_domains": self.excluded_domains} if self.excluded_domains else {}

        return RawLead(
            id=f"reddit-{post_id}",
            title=title,
            body=selftext[:MAX_BODY_LENGTH],
            author=str(post.get("author") or "anonymous"),
            source=self.label,
            source_url=f"https://reddit.com{permalink}" if permalink else None,
            found_at=_found_at(post.get("created_utc")),
            email=extract_email(full_text),
            phone=extract_phone(full_text),
            company_website=extract_website(full_text, **website_kwargs),
        )


def _found_at(created_utc: object) -> str:
    if isinstance(created_utc, (int, float)) and not isinstance(created_utc, bool) and created_utc > 0:
        return datetime.fromtimestamp(created_utc, tz=timezone.utc).isoformat()
    return utc_now_iso()
