"""Plain-text report for a snapshot and its recommendation."""

from __future__ import annotations

from siteprobe.core.endpoints import partition_endpoints
from siteprobe.core.models import (
    DetectionCategory,
    InterceptedEndpoint,
    RobotsTxtAnalysis,
    ScrapingRecommendation,
    SiteAnalysisResult,
)

DIFFICULTY_LABELS = {
    "easy": "Easy",
    "moderate": "Moderate",
    "hard": "Hard",
    "very-hard": "Very Hard",
}

DELIVERY_LABELS = {
    "server-rendered": "Server-Rendered HTML",
    "spa-api": "Single-Page App (API)",
    "hybrid": "Hybrid (SSR + API)",
}

CATEGORY_LABELS = {
    DetectionCategory.CAPTCHA.value: "CAPTCHA",
    DetectionCategory.WAF.value: "WAF",
}


def _value(value) -> str:
    return getattr(value, "value", value)


def format_delivery_method(method: str) -> str:
    return DELIVERY_LABELS.get(_value(method), "Unknown")


def format_difficulty(difficulty: str) -> str:
    return DIFFICULTY_LABELS.get(_value(difficulty), _value(difficulty))


def truncate_url(url: str, max_len: int) -> str:
    if len(url) <= max_len:
        return url
    return url[: max_len - 3] + "..."


def endpoint_line(ep: InterceptedEndpoint, url_width: int, show_count: bool = True) -> str:
    line = f"  {', '.join(ep.methods):<10} {truncate_url(ep.endpoint, url_width)}"
    if show_count and ep.count > 1:
        line += f"  ×{ep.count}"
    return line


def robots_lines(robots: RobotsTxtAnalysis) -> list[str]:
    lines = [f"  Fully blocked: {'yes' if robots.fully_blocked else 'no'}"]
    if robots.crawl_delay is not None:
        lines.append(f"  Crawl-delay:   {robots.crawl_delay:g}s")
    for url in robots.sitemap_urls:
        lines.append(f"  Sitemap:       {url}")
    for path in robots.key_disallows:
        lines.append(f"  Disallow:      {path}")
    return lines


def render_report(
    snapshot: SiteAnalysisResult,
    recommendation: ScrapingRecommendation,
    config: dict | None = None,
) -> list[str]:
    """Build the report as a list of lines (no trailing newlines)."""
    report_cfg = (config or {}).get("report") or {}
    max_api = report_cfg.get("max_api_endpoints", 15)
    max_other = report_cfg.get("max_other_endpoints", 20)
    url_width = report_cfg.get("url_width", 60)

    delivery = snapshot.data_delivery

    lines: list[str] = []
    if snapshot.url:
        lines.append(f"Site: {snapshot.url}")
    lines += [
        f"Approach:      {recommendation.approach}",
        f"Difficulty:    {format_difficulty(recommendation.difficulty)}",
        f"Data Delivery: {format_delivery_method(delivery.data_delivery_method)}",
    ]

    if snapshot.anti_bot_detections:
        lines += ["", "Anti-Bot & Security"]
        for d in snapshot.anti_bot_detections:
            label = CATEGORY_LABELS.get(_value(d.category), "Anti-Bot")
            lines.append(f"  {d.name} ({label} · {d.confidence}% confidence)")

    if snapshot.technologies:
        lines += ["", "Technologies"]
        for t in snapshot.technologies:
            lines.append(f"  {t.name} ({t.category})" if t.category else f"  {t.name}")

    split = partition_endpoints(snapshot.intercepted_requests.endpoints)
    if split.api:
        lines += ["", f"API Endpoints ({len(split.api)})"]
        lines += [endpoint_line(ep, url_width) for ep in split.api[:max_api]]
        if len(split.api) > max_api:
            lines.append(f"  +{len(split.api) - max_api} more endpoints")

    if split.other:
        lines += ["", f"Other Requests ({len(split.other)})"]
        lines += [endpoint_line(ep, url_width, show_count=False) for ep in split.other[:max_other]]
        if len(split.other) > max_other:
            lines.append(f"  +{len(split.other) - max_other} more")

    lines += ["", "Data Delivery"]
    lines += [f"  {ev}" for ev in delivery.evidence]
    if delivery.has_structured_data:
        lines.append(f"  JSON-LD: {', '.join(delivery.structured_data_types)}")

    if snapshot.robots_txt is not None:
        lines += ["", "Robots.txt"]
        lines += robots_lines(snapshot.robots_txt)

    lines += ["", "Recommendations"]
    lines += [f"  - {detail}" for detail in recommendation.details]
    if recommendation.tools:
        lines.append("Suggested Tools:")
        lines += [f"  - {tool}" for tool in recommendation.tools]

    return lines
