import requests

from leadfinder.http import RequestManager
from leadfinder.sources.fiverr import FiverrSource
from leadfinder.sources.google import GoogleSource
from leadfinder.sources.job_board import JobBoardSource


class FakeResponse:
    def __init__(self, text: str, status_code: int = 200):
        self.text = text
        self.status_code = status_code

    def raise_for_status(self) -> None:
        if self.status_code >= 400:
            raise requests.HTTPError("bad status", response=self)

    def json(self):
        return {}


FIVERR_HTML = """
<div class="gig"><a href="/search/gigs?query=x">search</a>
<a href="/pixelpro?source=gig_cards"><img/></a>
<h3 class="text-bold">I will design a <b>modern</b> logo</h3></div>
<div class="gig"><a href="/pixelpro?source=gig_cards">again</a>
<a href="/motionmaya?source=gig_cards"></a>
<h3 class="text-bold">I will animate your ad</h3></div>
<a href="/categories?x=1">categories</a>
<a href="/lonely_seller?source=gig_cards"></a>
"""

JOBS_HTML = """
<ul>
<li><a href="/vacancy/marketing-officer-123"><img src="logo.png"/></a>
<a href="/vacancy/marketing-officer-123">Marketing Officer</a>
<span class="job-company">Zed Foods Ltd</span>
<p>Apply to hr@zedfoods.co.zm</p></li>
<li><a href="/vacancy/graphic-designer-456">Graphic Designer</a>
<p>No company listed</p></li>
<li><a href="/vacancy/brand-lead-789">Brand Lead</a>
<span class="company-name">Copper <em>Media</em></span></li>
</ul>
"""

GOOGLE_HTML = """
<div><a href="/url?q=https://lusakabakery.com/about&amp;sa=U"><h3 class="r">Lusaka Bakery | Need a <b>designer</b></h3></a></div>
<div><a href="/url?q=https://www.youtube.com/watch%3Fv%3Dabc&amp;sa=U"><h3>Video</h3></a></div>
<div><a href="/url?q=https://maps.google.com/x&amp;sa=U"><h3>Map</h3></a></div>
<div><a href="/url?q=https://www.copperhomes.co.zm/&amp;sa=U"><h3>Copper Homes hiring marketer</h3></a></div>
"""


def test_fiverr_pairs_titles_and_sellers_by_position(monkeypatch) -> None:
    calls = {}

    def fake_get(url, timeout=10, **kwargs):
        calls["url"] = url
        return FakeResponse(FIVERR_HTML)

    monkeypatch.setattr(requests, "get", fake_get)
    source = FiverrSource(RequestManager(max_retries=1))
    leads = source.fetch("no clients", "Real Estate")

    assert "query=Real+Estate+no+clients" in calls["url"]
    assert [lead.author for lead in leads] == ["pixelpro", "motionmaya", "lonely_seller"]
    assert leads[0].title == "I will design a modern logo"
    assert leads[1].title == "I will animate your ad"
    assert leads[2].title == "Fiverr seller: lonely_seller"
    assert leads[0].id == "fiverr-pixelpro-0"
    assert leads[0].source_url == "https://www.fiverr.com/pixelpro"
    assert leads[0].email is None


def test_fiverr_returns_empty_on_http_error(monkeypatch) -> None:
    monkeypatch.setattr(requests, "get", lambda url, timeout=10, **kwargs: FakeResponse("", 403))
    source = FiverrSource(RequestManager(max_retries=1))
    assert source.fetch("no clients", "") == []


def test_job_board_pairs_company_within_listing() -> None:
    source = JobBoardSource(RequestManager())
    leads = source.parse(JOBS_HTML)

    assert [lead.title for lead in leads] == ["Marketing Officer", "Graphic Designer", "Brand Lead"]
    assert [lead.author for lead in leads] == ["Zed Foods Ltd", "Unknown Company", "Copper Media"]
    assert leads[0].id == "gzj-marketing-officer-123"
    assert leads[0].email == "hr@zedfoods.co.zm"
    assert leads[1].email is None
    assert leads[0].source_url == "https://www.gozambiajobs.com/vacancy/marketing-officer-123"
    assert "Zed Foods Ltd is hiring" in leads[0].body


def test_job_board_respects_max_results() -> None:
    source = JobBoardSource(RequestManager(), max_results=1)
    assert len(source.parse(JOBS_HTML)) == 1


def test_google_parses_results_and_skips_own_domains() -> None:
    source = GoogleSource(RequestManager())
    leads = source.parse(GOOGLE_HTML, "Lusaka")

    assert [lead.author for lead in leads] == ["lusakabakery.com", "copperhomes.co.zm"]
    assert leads[0].title == "Lusaka Bakery | Need a designer"
    assert leads[0].company_website == "https://lusakabakery.com/about"
    assert "in Lusaka" in leads[0].body
    assert leads[0].source == "Google"


def test_google_query_embeds_intent_terms() -> None:
    source = GoogleSource(RequestManager())
    query = source.build_query("", "")
    assert query.startswith("business Zambia ")
    assert '"looking for"' in query and '"hiring"' in query


def test_google_skips_malformed_result_urls() -> None:
    html = (
        '<a href="/url?q=https://x.com]y/&amp;sa=U"><h3>Broken</h3></a>'
        '<a href="/url?q=https://lusakabakery.com/&amp;sa=U"><h3>Lusaka Bakery</h3></a>'
    )
    leads = GoogleSource(RequestManager()).parse(html)
    assert [lead.author for lead in leads] == ["lusakabakery.com"]
