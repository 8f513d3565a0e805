from __future__ import annotations

import asyncio
import logging
import threading
import time
from abc import ABC, abstractmethod
from concurrent.futures import Executor
from dataclasses import dataclass, field

from leadfinder.http import RequestManager
from leadfinder.models import RawLead

BROWSER_HEADERS = {
    "User-Agent": "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 (KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36",
    "Accept": "text/html,application/xhtml+xml",
    "Accept-Language": "en-US,en;q=0.9",
}


@dataclass(frozen=True)
class Outcome:
    """Settled result of one adapter invocation."""

    source_id: str
    label: str
    leads: list[RawLead] = field(default_factory=list)
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


class Source(ABC):
    label = ""

    def __init__(
        self,
        name: str,
        request_manager: RequestManager,
        timeout_seconds: float = 15,
        max_results: int = 20,
        requests_per_minute: int = 60,
    ) -> None:
        self.name = name
        self.timeout_seconds = float(timeout_seconds)
        self.request_manager = request_manager
        self.max_results = max(1, int(max_results))
        self.requests_per_minute = max(1, int(requests_per_minute))
        self.logger = logging.getLogger(f"leadfinder.sources.{name}")
        self._request_gap_seconds = 60.0 / self.requests_per_minute
        self._last_request_time = 0.0
        self._deadline = threading.local()

    @abstractmethod
    def fetch(self, keywords: str, industry: str, location: str = "", credential: str = "") -> list[RawLead]:
        raise NotImplementedError

    def _wait_for_slot(self) -> None:
        now = time.monotonic()
        elapsed = now - self._last_request_time
        if elapsed < self._request_gap_seconds:
            time.sleep(self._request_gap_seconds - elapsed)
        self._last_request_time = time.monotonic()

    def _fetch_until(self, deadline: float, keywords: str, industry: str, location: str, credential: str) -> list[RawLead]:
        self._deadline.value = deadline
        try:
            return self.fetch(keywords, industry, location, credential)
        finally:
            self._deadline.value = None

    def out_of_time(self) -> bool:
        """True once the running invocation has used up its budget."""
        deadline = getattr(self._deadline, "value", None)
        return deadline is not None and time.monotonic() >= deadline

    async def invoke(
        self,
        keywords: str,
        industry: str,
        location: str = "",
        credential: str = "",
        executor: Executor | None = None,
    ) -> Outcome:
        """Run ``fetch`` off the event loop within ``timeout_seconds``; never raises."""
        loop = asyncio.get_running_loop()
        deadline = time.monotonic() + self.timeout_seconds
        try:
            leads = await asyncio.wait_for(
                loop.run_in_executor(executor, self._fetch_until, deadline, keywords, industry, location, credential),
                timeout=self.timeout_seconds,
            )
        except asyncio.TimeoutError:
            self.logger.warning("source timed out after %.1fs", self.timeout_seconds)
            return Outcome(self.name, self.label, error=f"timed out after {self.timeout_seconds:.1f}s")
        except Exception as exc:  # noqa: BLE001
            self.logger.warning("source failed: %s", exc)
            return Outcome(self.name, self.label, error=str(exc) or exc.__class__.__name__)
        return Outcome(self.name, self.label, leads=list(leads))
