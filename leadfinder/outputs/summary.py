from __future__ import annotations

import logging

import requests
from rich.console import Console

from leadfinder.models import SearchResult

logger = logging.getLogger("leadfinder.outputs.summary")


def summary_message(result: SearchResult) -> str:
    meta = result.meta
    sources = ", ".join(meta.sources) or "none"
    return (
        f"LeadFinder: {meta.total} leads from {sources} "
        f"(email={meta.with_email}, phone={meta.with_phone})"
    )


def emit_summary(mode: str, webhook: str, result: SearchResult) -> None:
    message = summary_message(result)

    if mode == "discord" and webhook:
        try:
            requests.post(webhook, json={"content": message}, timeout=8)
            return
        except requests.RequestException as exc:
            logger.warning("Discord summary failed: %s", exc)
    Console().print(message)
