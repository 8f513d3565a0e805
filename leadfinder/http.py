from __future__ import annotations

import time
from dataclasses import dataclass
from typing import Any

import requests

RETRYABLE_STATUSES = {429, 500, 502, 503, 504}


@dataclass
class RequestManager:
    timeout_seconds: float = 10
    max_retries: int = 2
    backoff_seconds: tuple[float, ...] = (1, 2)

    def get_json(self, url: str, params: dict[str, Any] | None = None, headers: dict[str, str] | None = None) -> Any:
        response = self._request("GET", url, params=params, headers=headers)
        return response.json()

    def get_text(self, url: str, params: dict[str, Any] | None = None, headers: dict[str, str] | None = None) -> str:
        response = self._request("GET", url, params=params, headers=headers)
        return response.text

    def post_json(self, url: str, payload: dict[str, Any], headers: dict[str, str] | None = None) -> Any:
        response = self._request("POST", url, json=payload, headers=headers)
        return response.json()

    def _request(self, method: str, url: str, **kwargs: Any) -> requests.Response:
        last_error: Exception | None = None
        for attempt in range(max(1, self.max_retries)):
            try:
                if method == "GET":
                    resp = requests.get(url, timeout=self.timeout_seconds, **kwargs)
                elif method == "POST":
                    resp = requests.post(url, timeout=self.timeout_seconds, **kwargs)
                else:
                    resp = requests.request(method, url, timeout=self.timeout_seconds, **kwargs)
                if resp.status_code in RETRYABLE_STATUSES:
                    raise requests.HTTPError(f"retryable status {resp.status_code}", response=resp)
                resp.raise_for_status()
                return resp
            except requests.RequestException as exc:
                last_error = exc
                if isinstance(exc, requests.ConnectionError) and "NameResolutionError" in str(exc):
                    break
                if isinstance(exc, requests.HTTPError) and exc.response is not None and exc.response.status_code not in RETRYABLE_STATUSES:
                    break
                if attempt >= self.max_retries - 1:
                    break
                delay = self.backoff_seconds[min(attempt, len(self.backoff_seconds) - 1)] if self.backoff_seconds else 0
                time.sleep(delay)
        raise RuntimeError(f"Request failed after retries: {url} ({last_error})")
