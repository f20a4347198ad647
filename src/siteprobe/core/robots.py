"""robots.txt parser: summarizes the rules that apply to ``User-agent: *``."""

from __future__ import annotations

import logging

from siteprobe.core.models import RobotsTxtAnalysis

log = logging.getLogger(__name__)

MAX_KEY_DISALLOWS = 20


def _directive_value(line: str, directive: str) -> str | None:
    """Return the trimmed value of ``directive:`` if the line starts with it."""
    prefix = directive + ":"
    if line[: len(prefix)].lower() != prefix:
        return None
    return line[len(prefix):].strip()


def _parse_float(value: str) -> float | None:
    try:
        number = float(value)
    except ValueError:
        return None
    # float() accepts "nan" and "inf"
    if number != number or number in (float("inf"), float("-inf")):
        return None
    return number


def parse_robots_txt(text: str) -> RobotsTxtAnalysis:
    """Parse raw robots.txt text into a RobotsTxtAnalysis.

    Only one scope is tracked: whether the most recent ``User-agent`` line was
    ``*``. Each ``User-agent`` line replaces the previous scope, so consecutive
    agent lines are not merged into one group. ``Sitemap`` lines are global and
    collected regardless of scope. ``Crawl-delay`` keeps the last valid value.

    Never raises; unparseable ``Crawl-delay`` values are ignored.
    """
    in_wildcard_agent = False
    fully_blocked = False
    crawl_delay: float | None = None
    sitemap_urls: list[str] = []
    key_disallows: list[str] = []

    for raw in text.splitlines():
        line = raw.strip()
        if not line or line.startswith("#"):
            continue

        value = _directive_value(line, "sitemap")
        if value is not None:
            if value:
                sitemap_urls.append(value)
            continue

        value = _directive_value(line, "user-agent")
        if value is not None:
            in_wildcard_agent = value == "*"
            continue

        if not in_wildcard_agent:
            continue

        value = _directive_value(line, "disallow")
        if value is not None:
            if value == "/":
                fully_blocked = True
            if value:
                key_disallows.append(value)
            continue

        value = _directive_value(line, "crawl-delay")
        if value is not None:
            delay = _parse_float(value)
            if delay is not None:
                crawl_delay = delay

    log.debug(
        "robots.txt: blocked=%s delay=%s sitemaps=%d disallows=%d",
        fully_blocked, crawl_delay, len(sitemap_urls), len(key_disallows),
    )

    return RobotsTxtAnalysis(
        found=True,
        fully_blocked=fully_blocked,
        crawl_delay=crawl_delay,
        sitemap_urls=sitemap_urls,
        key_disallows=key_disallows[:MAX_KEY_DISALLOWS],
    )
