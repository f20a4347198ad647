"""Best-effort robots.txt fetcher."""

from __future__ import annotations

import logging
from urllib.parse import urlsplit

from siteprobe.core.models import RobotsTxtAnalysis
from siteprobe.core.robots import parse_robots_txt

log = logging.getLogger(__name__)


def robots_url(page_url: str) -> str | None:
    """Return ``{origin}/robots.txt`` for a page URL, or None if it has no origin."""
    parts = urlsplit(page_url)
    if parts.scheme not in ("http", "https") or not parts.netloc:
        return None
    return f"{parts.scheme}://{parts.netloc}/robots.txt"


class RobotsClient:
    """Single-attempt robots.txt reader.

    Any failure (bad URL, network error, non-2xx status) means "no robots.txt":
    ``fetch_text`` and ``fetch`` return None and log at DEBUG level only.
    """

    def __init__(self, config: dict | None = None) -> None:
        config = config or {}
        self._timeout = config.get("timeout", 10.0)
        self._user_agent = config.get("user_agent", "siteprobe")
        self._follow_redirects = config.get("follow_redirects", True)

    @property
    def timeout(self) -> float:
        return self._timeout

    @property
    def user_agent(self) -> str:
        return self._user_agent

    def fetch_text(self, page_url: str) -> str | None:
        """GET the robots.txt for the page's origin and return its body."""
        import httpx

        url = robots_url(page_url)
        if url is None:
            log.debug("No origin in %r, skipping robots.txt", page_url)
            return None

        try:
            resp = httpx.get(
                url,
                headers={"User-Agent": self._user_agent},
                timeout=self._timeout,
                follow_redirects=self._follow_redirects,
            )
        except (httpx.HTTPError, OSError) as e:
            log.debug("robots.txt fetch failed for %s: %s", url, e)
            return None

        if not 200 <= resp.status_code < 300:
            log.debug("robots.txt at %s returned HTTP %s", url, resp.status_code)
            return None
        return resp.text

    def fetch(self, page_url: str) -> RobotsTxtAnalysis | None:
        """Fetch and parse robots.txt; None when it is unavailable."""
        text = self.fetch_text(page_url)
        if text is None:
            return None
        return parse_robots_txt(text)
