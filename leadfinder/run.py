from __future__ import annotations

import asyncio
import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Awaitable

from leadfinder.config import SOURCE_IDS, load_config
from leadfinder.deduplicator import Deduplicator
from leadfinder.http import RequestManager
from leadfinder.keywords import build_query
from leadfinder.models import RawLead, RequestError, RunMeta, SearchRequest, SearchResult, utc_now_iso
from leadfinder.scorer import Scorer
from leadfinder.sources import ApolloSource, FiverrSource, GoogleSource, JobBoardSource, RedditSource
from leadfinder.sources.base import Outcome, Source

logger = logging.getLogger("leadfinder.run")

FALLBACK_SOURCE = "reddit"


def _common(source_cfg: dict) -> dict:
    keys = ("timeout_seconds", "max_results", "requests_per_minute")
    return {key: source_cfg[key] for key in keys if key in source_cfg}


def build_sources(config: dict, request_manager: RequestManager) -> dict[str, Source]:
    source_cfg = config["sources"]
    excluded = config["extraction"]["excluded_domains"]
    reddit = source_cfg["reddit"]
    google = source_cfg["google"]
    jobs = source_cfg["gozambiajobs"]
    apollo = source_cfg["apollo"]

    return {
        "reddit": RedditSource(
            request_manager,
            subreddits=reddit.get("subreddits"),
            community_limit=reddit.get("community_limit", 4),
            excluded_domains=excluded,
            user_agent=config["http"].get("user_agent", "LeadFinder/1.0"),
            **_common(reddit),
        ),
        "fiverr": FiverrSource(request_manager, **_common(source_cfg["fiverr"])),
        "gozambiajobs": JobBoardSource(request_manager, base_url=jobs.get("base_url", "https://www.gozambiajobs.com"), **_common(jobs)),
        "google": GoogleSource(request_manager, default_location=google.get("default_location", "Zambia"), **_common(google)),
        "apollo": ApolloSource(
            request_manager,
            person_titles=apollo.get("person_titles"),
            per_page=apollo.get("per_page", 25),
            default_location=apollo.get("default_location", "Zambia"),
            api_key=apollo.get("api_key", ""),
            signup_url=apollo.get("signup_url", "https://app.apollo.io/#/settings/integrations/api"),
            **_common(apollo),
        ),
    }


def _request_manager(config: dict) -> RequestManager:
    http = config["http"]
    return RequestManager(
        timeout_seconds=float(http.get("timeout_seconds", 10)),
        max_retries=int(http.get("max_retries", 2)),
        backoff_seconds=tuple(http.get("backoff_seconds", (1, 2))),
    )


async def _settled(outcome: Outcome) -> Outcome:
    return outcome


class Orchestrator:
    def __init__(self, config: dict | None = None, sources: dict[str, Source] | None = None) -> None:
        self.config = config if config is not None else load_config()
        self.sources = sources if sources is not None else build_sources(self.config, _request_manager(self.config))
        self.scorer = Scorer()

    def resolve_sources(self, requested: list[str]) -> list[str]:
        """Recognized, enabled source ids in canonical invocation order."""
        wanted = {name.strip().lower() for name in requested if isinstance(name, str)}
        source_cfg = self.config.get("sources", {})
        resolved = []
        for source_id in SOURCE_IDS:
            if source_id not in wanted or source_id not in self.sources:
                continue
            if not source_cfg.get(source_id, {}).get("enabled", True):
                logger.info("source %s requested but disabled in config", source_id)
                continue
            resolved.append(source_id)

        unknown = wanted - set(SOURCE_IDS)
        if unknown:
            logger.info("ignoring unsupported sources: %s", ", ".join(sorted(unknown)))
        return resolved

    def _credential(self, request: SearchRequest) -> str:
        if request.credential:
            return request.credential
        return self.config.get("sources", {}).get("apollo", {}).get("api_key", "")

    async def run(self, request: SearchRequest) -> SearchResult:
        if not request.action:
            raise RequestError("action is required")

        phrases = self.config.get("signals", {}).get("phrases") or {}
        keywords = build_query(request.problem_signals, request.custom_signals, request.industry, phrases)
        source_ids = self.resolve_sources(request.sources)
        if not source_ids:
            source_ids = [FALLBACK_SOURCE]
        credential = self._credential(request)
        logger.info("running %s across %s with query %r", request.action, ", ".join(source_ids), keywords)

        executor = ThreadPoolExecutor(max_workers=len(source_ids), thread_name_prefix="leadfinder")
        try:
            pending: list[Awaitable[Outcome]] = []
            for source_id in source_ids:
                source = self.sources[source_id]
                if isinstance(source, ApolloSource) and not credential:
                    pending.append(_settled(Outcome(source_id, source.label, leads=[source.placeholder()])))
                    continue
                pending.append(source.invoke(keywords, request.industry, request.location, credential, executor=executor))
            results = await asyncio.gather(*pending, return_exceptions=True)
        finally:
            executor.shutdown(wait=False, cancel_futures=True)

        outcomes: list[Outcome] = []
        for source_id, result in zip(source_ids, results):
            if isinstance(result, Outcome):
                outcomes.append(result)
            else:
                label = self.sources[source_id].label
                outcomes.append(Outcome(source_id, label, error=str(result) or result.__class__.__name__))

        return self.collect(request, outcomes)

    def collect(self, request: SearchRequest, outcomes: list[Outcome]) -> SearchResult:
        raw_leads: list[RawLead] = []
        invoked: list[str] = []
        for outcome in outcomes:
            if not outcome.ok:
                logger.warning("source %s contributed no leads: %s", outcome.source_id, outcome.error)
                continue
            invoked.append(outcome.label)
            raw_leads.extend(outcome.leads)

        unique, duplicates = Deduplicator().split_new_and_seen(raw_leads)
        if duplicates:
            logger.info("dropped %d duplicate leads", len(duplicates))

        formatted = [self.scorer.format(lead, request.industry, request.location) for lead in unique]
        ranked = self.scorer.rank(formatted)

        meta = RunMeta(
            total=len(ranked),
            sources=invoked,
            with_email=sum(1 for lead in ranked if lead.email),
            with_phone=sum(1 for lead in ranked if lead.phone),
            scraped_at=utc_now_iso(),
        )
        logger.info("collected %d leads from %s", meta.total, ", ".join(invoked) or "no sources")
        return SearchResult(leads=ranked, meta=meta)


def run_search(request: SearchRequest, config: dict | None = None, sources: dict[str, Source] | None = None) -> SearchResult:
    return asyncio.run(Orchestrator(config, sources).run(request))
