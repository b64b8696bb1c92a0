"""HTTP fetcher for documentation pages."""

import logging
from typing import Protocol

import httpx

from apiweaver.config import DEFAULT_TIMEOUT_MS, DEFAULT_USER_AGENT
from apiweaver.errors import FetchError

logger = logging.getLogger(__name__)

ACCEPT_HEADER = "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8"


class UrlFetcher(Protocol):
    def fetch(self, url: str) -> str: ...


class HttpFetcher:
    """Fetches HTML over http/https with a fixed timeout and no retries."""

    def __init__(
        self,
        timeout_ms: int = DEFAULT_TIMEOUT_MS,
        user_agent: str = DEFAULT_USER_AGENT,
        transport: httpx.BaseTransport | None = None,
    ):
        if timeout_ms <= 0:
            raise ValueError("Timeout must be positive")
        if user_agent is None or not user_agent.strip():
            raise ValueError("User agent cannot be None or empty")
        self.timeout_ms = timeout_ms
        self.user_agent = user_agent
        self.transport = transport

    def fetch(self, url: str) -> str:
        """GET url and return the response body as text."""
        if url is None or not url.strip():
            raise FetchError("URL cannot be None or empty")
        url = url.strip()

        try:
            parsed = httpx.URL(url)
        except httpx.InvalidURL as e:
            raise FetchError(f"Invalid URL format: {url}", context=str(e)) from e
        if parsed.scheme not in ("http", "https"):
            raise FetchError(
                f"Unsupported protocol: {parsed.scheme or '<none>'}. Only HTTP and HTTPS are supported.",
                context=url,
            )
        if not parsed.host:
            raise FetchError(f"Invalid URL format: {url}", context="missing host")

        logger.info("Fetching %s", url)
        try:
            with httpx.Client(
                timeout=self.timeout_ms / 1000,
                follow_redirects=True,
                headers={"User-Agent": self.user_agent, "Accept": ACCEPT_HEADER},
                transport=self.transport,
            ) as client:
                response = client.get(parsed)
        except httpx.TimeoutException as e:
            raise FetchError(f"Request timed out after {self.timeout_ms}ms for URL: {url}") from e
        except httpx.HTTPError as e:
            raise FetchError(f"Failed to fetch content from URL: {url} - {e}") from e

        if not response.is_success:
            raise FetchError(
                f"HTTP request failed with status {response.status_code}: {response.reason_phrase}",
                context=url,
            )

        logger.debug("Fetched %d bytes from %s", len(response.content), url)
        return response.text
