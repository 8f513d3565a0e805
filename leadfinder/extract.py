from __future__ import annotations

import re

from leadfinder.utils import host_from_url

EMAIL_PATTERN = re.compile(r"[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}")
PHONE_PATTERN = re.compile(r"(?:\+?\d{1,3}[-.\s]?)?\(?\d{2,4}\)?[-.\s]?\d{3,4}[-.\s]?\d{3,4}")
URL_PATTERN = re.compile(r"https?://[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}[^\s()\[\]\"'<>]*", re.IGNORECASE)

MIN_PHONE_DIGITS = 7

EXCLUDED_WEBSITE_DOMAINS = (
    "reddit.com",
    "redd.it",
    "imgur.com",
    "youtube.com",
    "youtu.be",
    "twitter.com",
    "x.com",
    "facebook.com",
    "fb.com",
    "instagram.com",
    "tiktok.com",
    "linkedin.com",
)


def extract_email(text: str) -> str | None:
    if not text:
        return None
    match = EMAIL_PATTERN.search(text)
    return match.group(0) if match else None


def extract_phone(text: str) -> str | None:
    if not text:
        return None
    match = PHONE_PATTERN.search(text)
    if not match:
        return None
    digits = re.sub(r"\D", "", match.group(0))
    if len(digits) < MIN_PHONE_DIGITS:
        return None
    return match.group(0).strip()


def is_excluded_host(host: str, excluded_domains: tuple[str, ...] | list[str]) -> bool:
    host = host.lower()
    return any(host == domain or host.endswith("." + domain) for domain in excluded_domains)


def extract_website(text: str, excluded_domains: tuple[str, ...] | list[str] = EXCLUDED_WEBSITE_DOMAINS) -> str | None:
    """Return the first http(s) URL in ``text`` that is not a social/media link."""
    if not text:
        return None
    for match in URL_PATTERN.finditer(text):
        url = match.group(0).rstrip(".,;:!?")
        host = host_from_url(url)
        if not host or is_excluded_host(host, excluded_domains):
            continue
        return url
    return None
