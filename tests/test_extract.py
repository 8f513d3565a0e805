from leadfinder.extract import extract_email, extract_phone, extract_website
from leadfinder.utils import host_from_url


def test_extract_email_finds_first_address() -> None:
    text = "Reach me at owner@bakery.co.zm or backup@example.com"
    assert extract_email(text) == "owner@bakery.co.zm"


def test_extract_email_none_without_at_sign() -> None:
    assert extract_email("no contact details in this post") is None
    assert extract_email("") is None


def test_extract_email_requires_tld() -> None:
    assert extract_email("ping me at admin@localhost") is None


def test_extract_phone_accepts_international_number() -> None:
    assert extract_phone("Call us on +260 97 1234567 today") == "+260 97 1234567"


def test_extract_phone_rejects_short_codes() -> None:
    assert extract_phone("order 555-1234 was late, code 42") is None
    assert extract_phone("we have 12 staff") is None


def test_extract_website_skips_social_hosts() -> None:
    text = "See https://www.reddit.com/r/x and https://imgur.com/a.png then https://acme-design.com/work."
    assert extract_website(text) == "https://acme-design.com/work"


def test_extract_website_none_when_only_excluded_urls() -> None:
    text = "video: https://youtu.be/abc and https://m.facebook.com/page"
    assert extract_website(text) is None


def test_extract_website_custom_exclusions() -> None:
    text = "https://acme.com and https://shop.example.org"
    assert extract_website(text, excluded_domains=["acme.com"]) == "https://shop.example.org"


def test_extract_website_handles_markdown_links() -> None:
    text = "Our menu: [https://crumbs.co.zm](https://crumbs.co.zm) (new!)"
    assert extract_website(text) == "https://crumbs.co.zm"


def test_extract_website_stops_at_brackets() -> None:
    assert extract_website("broken https://shop.zm]y/ link") == "https://shop.zm"


def test_host_from_url_returns_empty_for_unparseable_urls() -> None:
    assert host_from_url("https://shop.zm]y/") == ""
    assert host_from_url("https://[shop.zm/") == ""
