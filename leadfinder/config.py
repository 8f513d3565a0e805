from __future__ import annotations

import copy
import os
from pathlib import Path

import yaml

from leadfinder.extract import EXCLUDED_WEBSITE_DOMAINS

SOURCE_IDS = ["reddit", "fiverr", "gozambiajobs", "google", "apollo"]

DEFAULT_SOURCE_TIMEOUTS = {
    "reddit": 20,
    "fiverr": 15,
    "gozambiajobs": 15,
    "google": 10,
    "apollo": 20,
}

DEFAULT_CONFIG: dict = {
    "http": {
        "timeout_seconds": 10,
        "max_retries": 2,
        "backoff_seconds": [1, 2],
        "user_agent": "LeadFinder/1.0",
    },
    "sources": {
        "reddit": {
            "subreddits": [
                "smallbusiness",
                "entrepreneur",
                "marketing",
                "startups",
                "freelance",
                "design_critiques",
                "advertising",
                "graphic_design",
            ],
            "community_limit": 4,
            "requests_per_minute": 60,
        },
        "fiverr": {"max_results": 15},
        "gozambiajobs": {"base_url": "https://www.gozambiajobs.com", "max_results": 20},
        "google": {"max_results": 15, "default_location": "Zambia"},
        "apollo": {
            "api_key": "",
            "per_page": 25,
            "default_location": "Zambia",
            "person_titles": [
                "CEO",
                "Founder",
                "Owner",
                "Marketing Manager",
                "Marketing Director",
                "CMO",
                "Business Owner",
            ],
            "signup_url": "https://app.apollo.io/#/settings/integrations/api",
        },
    },
    "signals": {"phrases": {}},
    "extraction": {"excluded_domains": list(EXCLUDED_WEBSITE_DOMAINS)},
    "output": {
        "csv": {"enabled": False, "path": "output/leads.csv"},
        "summary": {"enabled": True, "mode": "stdout", "discord_webhook": ""},
    },
}


def _require_mapping(section: object, section_name: str) -> None:
    if not isinstance(section, dict):
        raise ValueError(f"'{section_name}' must be a mapping")


def _ensure_bool(section: dict, key: str, section_name: str) -> None:
    if key in section and not isinstance(section[key], bool):
        raise ValueError(f"Field '{section_name}.{key}' must be a boolean")


def _ensure_number(section: dict, key: str, section_name: str) -> None:
    if key in section:
        value = section[key]
        if isinstance(value, bool) or not isinstance(value, (int, float)) or value <= 0:
            raise ValueError(f"Field '{section_name}.{key}' must be a positive number")


def _validate(config: dict) -> None:
    for top_level in ["http", "sources", "signals", "extraction", "output"]:
        if top_level in config:
            _require_mapping(config[top_level], top_level)

    http = config.get("http", {})
    for key in ["timeout_seconds", "max_retries"]:
        _ensure_number(http, key, "http")

    sources = config.get("sources", {})
    unknown = set(sources) - set(SOURCE_IDS)
    if unknown:
        raise ValueError(f"Unknown sources: {', '.join(sorted(unknown))}")
    for source_id, source_cfg in sources.items():
        section_name = f"sources.{source_id}"
        _require_mapping(source_cfg, section_name)
        _ensure_bool(source_cfg, "enabled", section_name)
        for key in ["timeout_seconds", "max_results", "requests_per_minute"]:
            _ensure_number(source_cfg, key, section_name)

    reddit = sources.get("reddit", {})
    if "subreddits" in reddit:
        if not isinstance(reddit["subreddits"], list) or not all(isinstance(s, str) for s in reddit["subreddits"]):
            raise ValueError("sources.reddit.subreddits must be list[str]")

    phrases = config.get("signals", {}).get("phrases", {})
    if phrases:
        _require_mapping(phrases, "signals.phrases")
        for signal, fragment in phrases.items():
            if not isinstance(signal, str) or not isinstance(fragment, str):
                raise ValueError("signals.phrases must map signal names to strings")

    excluded = config.get("extraction", {}).get("excluded_domains")
    if excluded is not None and not isinstance(excluded, list):
        raise ValueError("extraction.excluded_domains must be a list")

    output = config.get("output", {})
    summary = output.get("summary", {})
    if summary.get("mode", "stdout") not in {"stdout", "discord"}:
        raise ValueError("output.summary.mode must be 'stdout' or 'discord'")


def _merge(defaults: dict, overrides: dict) -> dict:
    merged = copy.deepcopy(defaults)
    for key, value in overrides.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = _merge(merged[key], value)
        else:
            merged[key] = value
    return merged


def _apply_defaults(config: dict) -> dict:
    config = _merge(DEFAULT_CONFIG, config)

    sources = config["sources"]
    for source_id, timeout in DEFAULT_SOURCE_TIMEOUTS.items():
        sources[source_id].setdefault("enabled", True)
        sources[source_id].setdefault("timeout_seconds", timeout)

    apollo = sources["apollo"]
    if not apollo.get("api_key"):
        apollo["api_key"] = os.getenv("APOLLO_API_KEY", "")

    return config


def load_config(path: str | None = None) -> dict:
    if path is None:
        return _apply_defaults({})

    config_path = Path(path)
    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {path}")

    with config_path.open("r", encoding="utf-8") as handle:
        loaded = yaml.safe_load(handle) or {}

    if not isinstance(loaded, dict):
        raise ValueError("Top-level config must be a YAML mapping")

    _validate(loaded)
    return _apply_defaults(loaded)
