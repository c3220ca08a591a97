"""Async GitHub API client."""

from __future__ import annotations

import asyncio
import logging
from typing import Any

import httpx

from ..errors import UpstreamError
from .rate_limit import RateLimitMonitor

logger = logging.getLogger(__name__)

GITHUB_API_URL = "https://api.github.com"
_RETRY_STATUSES = {403, 429, 500, 502, 503, 504}


def _is_rate_limited(payload: dict[str, Any]) -> bool:
    return any(error.get("type") == "RATE_LIMITED" for error in payload.get("errors") or [])


def _decode(response: httpx.Response) -> dict[str, Any]:
    try:
        return response.json()
    except ValueError as exc:
        raise UpstreamError(f"GitHub returned a non-JSON body for {response.url}") from exc


class GitHubClient:
    """Thin wrapper over ``httpx.AsyncClient`` with rate-limit handling.

    Use as an async context manager::

        async with GitHubClient(token) as client:
            data = await client.graphql(query, {"login": "octocat"})
    """

    def __init__(
        self,
        token: str,
        base_url: str = GITHUB_API_URL,
        timeout: float = 10.0,
        max_retries: int = 3,
        backoff: float = 1.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._token = token
        self._base_url = base_url
        self._timeout = timeout
        self._max_retries = max(1, max_retries)
        self._backoff = backoff
        self._transport = transport
        self._rate_limit = RateLimitMonitor()
        self._client: httpx.AsyncClient | None = None

    async def __aenter__(self) -> GitHubClient:
        self._client = httpx.AsyncClient(
            base_url=self._base_url,
            timeout=self._timeout,
            transport=self._transport,
            headers={
                "Authorization": f"bearer {self._token}",
                "Accept": "application/vnd.github+json",
            },
        )
        return self

    async def __aexit__(self, *exc_info) -> None:
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    async def _request(self, method: str, url: str, **kwargs) -> httpx.Response:
        if self._client is None:
            raise RuntimeError("GitHubClient must be used as an async context manager")

        for attempt in range(1, self._max_retries + 1):
            await self._rate_limit.wait_if_needed()
            try:
                response = await self._client.request(method, url, **kwargs)
            except httpx.TransportError as exc:
                logger.warning("%s %s failed (attempt %d): %s", method, url, attempt, exc)
                if attempt == self._max_retries:
                    raise UpstreamError(f"Could not reach GitHub: {exc}") from exc
                await self._sleep_before_retry(attempt)
                continue

            self._rate_limit.update(response)
            if response.status_code not in _RETRY_STATUSES:
                return response
            logger.warning(
                "%s %s returned %d (attempt %d)", method, url, response.status_code, attempt
            )
            if attempt < self._max_retries:
                await self._sleep_before_retry(attempt)

        raise UpstreamError(f"GitHub returned {response.status_code} for {url}")

    async def _sleep_before_retry(self, attempt: int) -> None:
        delay = self._backoff * 2 ** (attempt - 1)
        if delay > 0:
            await asyncio.sleep(delay)

    async def graphql(self, query: str, variables: dict[str, Any]) -> dict[str, Any]:
        """Run a GraphQL query and return the decoded payload.

        Query-level ``errors`` are left in the payload for the caller, except
        rate limiting, which is retried.
        """
        for attempt in range(1, self._max_retries + 1):
            response = await self._request(
                "POST", "/graphql", json={"query": query, "variables": variables}
            )
            if response.status_code != 200:
                raise UpstreamError(f"GitHub GraphQL returned {response.status_code}")
            payload = _decode(response)
            if not _is_rate_limited(payload):
                return payload
            logger.warning("GraphQL query rate limited (attempt %d)", attempt)
            if attempt < self._max_retries:
                await self._sleep_before_retry(attempt)
        raise UpstreamError("GitHub rate limit exceeded")

    async def search_commits_count(self, login: str) -> int:
        response = await self._request(
            "GET",
            "/search/commits",
            params={"q": f"author:{login}"},
            headers={"Accept": "application/vnd.github.cloak-preview"},
        )
        response.raise_for_status()
        return int(_decode(response).get("total_count") or 0)
