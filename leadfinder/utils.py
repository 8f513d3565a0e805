from __future__ import annotations

import html
import re
from urllib.parse import urlparse

TAG_PATTERN = re.compile(r"<[^>]+>")


def host_from_url(url: str) -> str:
    if not url:
        return ""
    try:
        parsed = urlparse(url)
    except ValueError:
        return ""
    host = parsed.netloc or parsed.path
    host = host.lower().strip().split("/")[0].split(":")[0]
    if host.startswith("www."):
        host = host[4:]
    return host


def strip_tags(markup: str) -> str:
    return " ".join(html.unescape(TAG_PATTERN.sub("", markup or "")).split())


def short_snippet(text: str, max_len: int = 180) -> str:
    clean = " ".join((text or "").split())
    if len(clean) <= max_len:
        return clean
    return clean[: max_len - 3] + "..."
