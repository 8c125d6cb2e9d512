"""
Page Fetcher

Performs the outbound GET for a product page with a browser-like
user agent, redirect following and caching disabled.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

import requests

from ..common.config_loader import load_fetch_settings
from .errors import FetchFailedError

logger = logging.getLogger(__name__)


@dataclass
class FetchResult:
    """Successful (2xx) response of a page fetch."""
    url: str
    status_code: int
    text: str
    final_url: str = ""


class PageFetcher:
    """
    Fetches third-party product pages.

    Usage:
        with PageFetcher() as fetcher:
            page = fetcher.fetch("https://shop.example/p/123")
            html = page.text
    """

    def __init__(
        self,
        session: requests.Session | None = None,
        user_agent: str | None = None,
        accept: str | None = None,
        accept_language: str | None = None,
        timeout: float | None = None,
    ):
        """
        Initialize the fetcher.

        Args:
            session: Shared session for connection reuse (created if None)
            user_agent: Overrides the configured User-Agent
            accept: Overrides the configured Accept header
            accept_language: Overrides the configured Accept-Language header
            timeout: Overrides the configured socket timeout in seconds
        """
        settings = load_fetch_settings()

        self.user_agent = user_agent or settings.get('user_agent', '')
        self.accept = accept or settings.get('accept', 'text/html,application/xhtml+xml')
        self.accept_language = accept_language or settings.get('accept_language', '')
        self.timeout = timeout or settings.get('timeout', 30)

        self._owns_session = session is None
        self.session = session or requests.Session()

    def __enter__(self):
        return self

    def __exit__(self, *args):
        self.close()

    def close(self):
        if self._owns_session:
            self.session.close()

    def build_headers(self) -> dict:
        """Request headers for a page fetch."""
        headers = {
            "User-Agent": self.user_agent,
            "Accept": self.accept,
            # Never serve a stale copy of a third-party page
            "Cache-Control": "no-cache",
            "Pragma": "no-cache",
        }
        if self.accept_language:
            headers["Accept-Language"] = self.accept_language
        return headers

    def fetch(self, url: str) -> FetchResult:
        """
        Fetch a page.

        Args:
            url: Absolute http(s) URL

        Returns:
            FetchResult with the decoded body

        Raises:
            FetchFailedError: On non-2xx status or transport error
        """
        try:
            response = self.session.get(
                url,
                headers=self.build_headers(),
                allow_redirects=True,
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            error_msg = f"{type(e).__name__}: {str(e)[:100]}"
            logger.warning("Fetch failed for %s: %s", url, error_msg)
            raise FetchFailedError(error_msg) from e

        if not 200 <= response.status_code < 300:
            logger.warning("Fetch failed for %s: HTTP %d", url, response.status_code)
            raise FetchFailedError(f"HTTP {response.status_code}", status_code=response.status_code)

        return FetchResult(
            url=url,
            status_code=response.status_code,
            text=response.text,
            final_url=response.url or url,
        )
