from __future__ import annotations

import json
import logging

from leadfinder.models import RequestError, SearchRequest
from leadfinder.run import run_search
from leadfinder.sources.base import Source

logger = logging.getLogger("leadfinder.api")


def handle_request(
    payload: object,
    config: dict | None = None,
    sources: dict[str, Source] | None = None,
) -> tuple[int, dict]:
    """Serve one search request; returns ``(status, body)``.

    A missing ``action`` is a 400 and no source is contacted. Any fault while running
    or encoding the result is a 500 with an ``error`` message.
    """
    try:
        request = SearchRequest.from_payload(payload)
    except RequestError as exc:
        return 400, {"error": str(exc)}

    try:
        body = run_search(request, config=config, sources=sources).to_dict()
        json.dumps(body)
    except Exception as exc:  # noqa: BLE001
        logger.exception("search request failed")
        return 500, {"error": str(exc) or "Internal server error"}

    return 200, body
