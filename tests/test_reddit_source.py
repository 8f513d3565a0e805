import asyncio
import time

from leadfinder.http import RequestManager
from leadfinder.sources.reddit import RedditSource

LONG_BODY = "We opened a bakery six months ago and still have almost no customers walking in."


class FakeRequestManager(RequestManager):
    def __init__(self, payload):
        super().__init__(timeout_seconds=10)
        self.payload = payload
        self.urls: list[str] = []

    def get_json(self, url, params=None, headers=None):
        self.urls.append(url)
        if isinstance(self.payload, Exception):
            raise self.payload
        return self.payload


def _payload(*posts):
    return {"data": {"children": [{"kind": "t3", "data": post} for post in posts]}}


def test_reddit_source_extracts_lead() -> None:
    manager = FakeRequestManager(
        _payload(
            {
                "id": "abc123",
                "permalink": "/r/smallbusiness/comments/abc123/no_customers/",
                "title": "No customers",
                "selftext": LONG_BODY + " Email owner@crumbs.co.zm or see https://crumbs.co.zm",
                "author": "crumbs_owner",
                "created_utc": 1700000000,
            }
        )
    )
    source = RedditSource(manager, subreddits=["smallbusiness"], requests_per_minute=9999)
    leads = source.fetch('"no clients"', "Restaurants & Food")

    assert len(leads) == 1
    lead = leads[0]
    assert lead.id == "reddit-abc123"
    assert lead.source == "Reddit"
    assert lead.author == "crumbs_owner"
    assert lead.source_url == "https://reddit.com/r/smallbusiness/comments/abc123/no_customers/"
    assert lead.found_at.startswith("2023-11-14T22:13:20")
    assert lead.email == "owner@crumbs.co.zm"
    assert lead.company_website == "https://crumbs.co.zm"


def test_reddit_source_queries_global_and_limited_communities() -> None:
    manager = FakeRequestManager(_payload())
    source = RedditSource(manager, subreddits=["a", "b", "c", "d", "e"], community_limit=4, requests_per_minute=9999)
    source.fetch("no leads", "")

    assert len(manager.urls) == 5
    assert manager.urls[0].startswith("https://www.reddit.com/search.json?q=no+leads")
    assert all("t=month" in url for url in manager.urls)
    assert "/r/e/" not in " ".join(manager.urls)


def test_reddit_source_skips_short_and_duplicate_posts() -> None:
    manager = FakeRequestManager(
        _payload(
            {"id": "short", "title": "hi", "selftext": "too short", "author": "x"},
            {"id": "keep", "title": "Need help", "selftext": LONG_BODY, "author": "y"},
        )
    )
    source = RedditSource(manager, subreddits=["smallbusiness"], requests_per_minute=9999)
    leads = source.fetch("no leads", "")

    # both URLs return the same post, it is kept once
    assert [lead.id for lead in leads] == ["reddit-keep"]
    assert leads[0].email is None


def test_reddit_source_tolerates_request_failures() -> None:
    manager = FakeRequestManager(RuntimeError("boom"))
    source = RedditSource(manager, subreddits=["smallbusiness"], requests_per_minute=9999)
    assert source.fetch("no leads", "") == []


def test_reddit_source_ignores_unexpected_payload_shape() -> None:
    manager = FakeRequestManager({"data": ["not", "a", "listing"]})
    source = RedditSource(manager, requests_per_minute=9999)
    assert source.fetch("no leads", "") == []


def test_reddit_source_keeps_posts_with_markdown_links() -> None:
    manager = FakeRequestManager(
        _payload(
            {"id": "plain", "title": "Help", "selftext": LONG_BODY, "author": "a"},
            {"id": "md", "title": "Menu", "selftext": LONG_BODY + " [https://crumbs.co.zm](https://crumbs.co.zm)", "author": "b"},
        )
    )
    source = RedditSource(manager, requests_per_minute=9999)
    leads = source.fetch("no leads", "")

    assert [lead.id for lead in leads] == ["reddit-plain", "reddit-md"]
    assert leads[1].company_website == "https://crumbs.co.zm"


def test_reddit_source_caps_body_length() -> None:
    manager = FakeRequestManager(_payload({"id": "long", "title": "Long", "selftext": "x" * 5000, "author": "a"}))
    leads = RedditSource(manager, requests_per_minute=9999).fetch("no leads", "")
    assert len(leads[0].body) == 2000


class SlowRequestManager(FakeRequestManager):
    def get_json(self, url, params=None, headers=None):
        time.sleep(0.15)
        return super().get_json(url, params, headers)


def test_reddit_source_stops_querying_after_timeout() -> None:
    manager = SlowRequestManager(_payload())
    source = RedditSource(manager, subreddits=["a", "b", "c", "d"], requests_per_minute=9999, timeout_seconds=0.2)

    outcome = asyncio.run(source.invoke("no leads", ""))

    assert not outcome.ok
    assert len(manager.urls) < 5
    assert not source.out_of_time()
