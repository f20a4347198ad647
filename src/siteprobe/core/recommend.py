"""Scraping difficulty scoring and recommendation composition.

The heuristic is an ordered table of rules. Each rule contributes a score
delta, an optional detail line and an optional tool suggestion when its
predicate holds. Rules run strictly in table order because the order of
``details`` and ``tools`` is part of the output.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass

from siteprobe.core.endpoints import direct_api_endpoints, partition_endpoints
from siteprobe.core.models import (
    AntiBotDetection,
    DeliveryMethod,
    DetectionCategory,
    Difficulty,
    ScrapingRecommendation,
    SiteAnalysisResult,
)

log = logging.getLogger(__name__)

HIGH_CONFIDENCE = 80

FALLBACK_DETAIL = "No significant obstacles detected — standard scraping should work"
FALLBACK_TOOL = "HTTP client + HTML parser"

Predicate = Callable[[SiteAnalysisResult, list[str]], bool]
Text = str | Callable[[SiteAnalysisResult], str] | None


@dataclass(frozen=True)
class Rule:
    """One step of the heuristic.

    ``predicate`` sees the snapshot and the details emitted so far.
    ``detail`` and ``tool`` are either fixed strings or built from the snapshot.
    """

    name: str
    predicate: Predicate
    score_delta: int = 0
    detail: Text = None
    tool: Text = None


# --- Signal selectors ---


def high_confidence_antibot(snapshot: SiteAnalysisResult) -> list[AntiBotDetection]:
    return [
        d for d in snapshot.anti_bot_detections
        if d.category == DetectionCategory.ANTIBOT and d.confidence >= HIGH_CONFIDENCE
    ]


def _by_category(snapshot: SiteAnalysisResult, category: str) -> list[AntiBotDetection]:
    return [d for d in snapshot.anti_bot_detections if d.category == category]


def _unique_names(detections: list[AntiBotDetection]) -> list[str]:
    return list(dict.fromkeys(d.name for d in detections))


def _antibot_names(snapshot: SiteAnalysisResult) -> list[str]:
    return _unique_names(high_confidence_antibot(snapshot))


def _vendor(marker: str) -> Predicate:
    def predicate(snapshot: SiteAnalysisResult, _details: list[str]) -> bool:
        return any(marker in name.lower() for name in _antibot_names(snapshot))

    return predicate


def _category_present(category: str) -> Predicate:
    def predicate(snapshot: SiteAnalysisResult, _details: list[str]) -> bool:
        return bool(_by_category(snapshot, category))

    return predicate


def _category_detail(label: str, category: str) -> Callable[[SiteAnalysisResult], str]:
    def build(snapshot: SiteAnalysisResult) -> str:
        return f"{label}: {', '.join(_unique_names(_by_category(snapshot, category)))}"

    return build


def _delivery_is(method: str) -> Predicate:
    def predicate(snapshot: SiteAnalysisResult, _details: list[str]) -> bool:
        return snapshot.data_delivery.data_delivery_method == method

    return predicate


def _direct_apis(snapshot: SiteAnalysisResult) -> list:
    return direct_api_endpoints(snapshot.intercepted_requests.endpoints)


def _api_endpoints(snapshot: SiteAnalysisResult) -> list:
    return partition_endpoints(snapshot.intercepted_requests.endpoints).api


def _has_marker(*keys: str) -> Predicate:
    def predicate(snapshot: SiteAnalysisResult, _details: list[str]) -> bool:
        return any(key in snapshot.window_properties for key in keys)

    return predicate


def _has_technology(name: str) -> Predicate:
    def predicate(snapshot: SiteAnalysisResult, _details: list[str]) -> bool:
        return any(t.name == name for t in snapshot.technologies)

    return predicate


def _spa_with_api(snapshot: SiteAnalysisResult, details: list[str]) -> bool:
    return _delivery_is(DeliveryMethod.SPA_API)(snapshot, details) and bool(_direct_apis(snapshot))


def _spa_without_api(snapshot: SiteAnalysisResult, details: list[str]) -> bool:
    return _delivery_is(DeliveryMethod.SPA_API)(snapshot, details) and not _direct_apis(snapshot)


def _api_count_not_reported(snapshot: SiteAnalysisResult, details: list[str]) -> bool:
    return bool(_api_endpoints(snapshot)) and not any("API endpoint" in d for d in details)


# --- Rule table ---


RULES: tuple[Rule, ...] = (
    # Anti-bot vendors
    Rule(
        "antibot",
        lambda s, _d: bool(high_confidence_antibot(s)),
        score_delta=3,
        detail=lambda s: f"Anti-bot protection detected: {', '.join(_antibot_names(s))}",
    ),
    Rule(
        "cloudflare",
        _vendor("cloudflare"),
        tool="Cloudflare bypass (e.g., cloudscraper, FlareSolverr)",
    ),
    Rule("akamai", _vendor("akamai"), score_delta=1, tool="Akamai bypass / residential proxies"),
    Rule("datadome", _vendor("datadome"), score_delta=2, tool="DataDome bypass / undetected browser"),
    Rule(
        "perimeterx",
        _vendor("perimeterx"),
        score_delta=2,
        tool="PerimeterX bypass / stealth browser",
    ),
    # CAPTCHA / WAF
    Rule(
        "captcha",
        _category_present(DetectionCategory.CAPTCHA),
        score_delta=2,
        detail=_category_detail("CAPTCHA detected", DetectionCategory.CAPTCHA),
        tool="CAPTCHA solving service (e.g., 2captcha, anti-captcha)",
    ),
    Rule(
        "waf",
        _category_present(DetectionCategory.WAF),
        score_delta=1,
        detail=_category_detail("WAF detected", DetectionCategory.WAF),
    ),
    # Data delivery
    Rule(
        "server-rendered",
        _delivery_is(DeliveryMethod.SERVER_RENDERED),
        detail="Content is server-rendered HTML - direct HTTP requests should work",
        tool="HTTP client (requests/httpx) + HTML parser (BeautifulSoup/lxml)",
    ),
    Rule(
        "spa",
        _delivery_is(DeliveryMethod.SPA_API),
        score_delta=1,
        detail="SPA detected - content loaded via JavaScript/API calls",
    ),
    Rule(
        "spa-direct-api",
        _spa_with_api,
        detail=lambda s: (
            f"Found {len(_direct_apis(s))} API endpoint(s) - consider calling these directly"
        ),
        tool="Direct API calls (faster, more reliable than browser automation)",
    ),
    Rule(
        "spa-headless",
        _spa_without_api,
        tool="Headless browser (Playwright/Puppeteer) for JS rendering",
    ),
    Rule(
        "hybrid",
        _delivery_is(DeliveryMethod.HYBRID),
        detail="Hybrid SSR/SPA - initial content in HTML, dynamic parts via API",
        tool="HTTP client for static content, API calls for dynamic data",
    ),
    # Structured data
    Rule(
        "structured-data",
        lambda s, _d: s.data_delivery.has_structured_data,
        detail=lambda s: (
            f"Structured data available ({', '.join(s.data_delivery.structured_data_types)})"
            " - extract from JSON-LD"
        ),
        tool="JSON-LD extraction (easiest data source)",
    ),
    # API endpoints (skipped when the SPA rule already reported a count)
    Rule(
        "api-endpoints",
        _api_count_not_reported,
        detail=lambda s: f"{len(_api_endpoints(s))} potential API endpoint(s) detected",
    ),
    # Framework window markers
    Rule(
        "next-data",
        _has_marker("__NEXT_DATA__"),
        detail="Next.js page data available in __NEXT_DATA__ - parse for structured content",
    ),
    Rule(
        "nuxt",
        _has_marker("__NUXT__"),
        detail="Nuxt.js state available in __NUXT__ - parse for structured content",
    ),
    Rule(
        "graphql-cache",
        _has_marker("__APOLLO_STATE__", "__RELAY_STORE__"),
        detail="GraphQL cache available in page - extract pre-fetched data",
    ),
    Rule(
        "embedded-state",
        _has_marker("__INITIAL_STATE__", "__PRELOADED_STATE__"),
        detail="Server-side state embedded in page - extract from script tags",
    ),
    # Technology-specific
    Rule(
        "wordpress",
        _has_technology("WordPress"),
        detail="WordPress site - check for REST API at /wp-json/wp/v2/",
        tool="WordPress REST API",
    ),
    Rule(
        "shopify",
        _has_technology("Shopify"),
        detail="Shopify site - products may be available via /products.json",
    ),
)


# --- Composition ---


def _render(text: Text, snapshot: SiteAnalysisResult) -> str | None:
    if text is None or isinstance(text, str):
        return text
    return text(snapshot)


def difficulty_for(score: int) -> Difficulty:
    """Map a difficulty score onto its bucket."""
    if score <= 1:
        return Difficulty.EASY
    if score <= 3:
        return Difficulty.MODERATE
    if score <= 5:
        return Difficulty.HARD
    return Difficulty.VERY_HARD


def choose_approach(snapshot: SiteAnalysisResult, score: int) -> str:
    delivery = snapshot.data_delivery
    if score == 0 and delivery.data_delivery_method == DeliveryMethod.SERVER_RENDERED:
        return "Simple HTTP scraping"
    if _api_endpoints(snapshot) and not high_confidence_antibot(snapshot):
        return "Direct API consumption"
    if score <= 2:
        if delivery.has_spa_indicators:
            return "Headless browser scraping"
        return "HTTP scraping with session handling"
    return "Advanced scraping with anti-bot bypass"


def evaluate_rules(
    snapshot: SiteAnalysisResult,
    rules: tuple[Rule, ...] = RULES,
) -> tuple[int, list[str], list[str]]:
    """Run the rule table and return ``(score, details, tools)``."""
    score = 0
    details: list[str] = []
    tools: list[str] = []

    for rule in rules:
        if not rule.predicate(snapshot, details):
            continue
        score += rule.score_delta
        detail = _render(rule.detail, snapshot)
        if detail is not None:
            details.append(detail)
        tool = _render(rule.tool, snapshot)
        if tool is not None:
            tools.append(tool)
        log.debug("Rule %s fired (+%d, score=%d)", rule.name, rule.score_delta, score)

    return score, details, tools


def compose(snapshot: SiteAnalysisResult) -> ScrapingRecommendation:
    """Score a snapshot and build its scraping recommendation.

    Pure and deterministic: reads only ``snapshot``, never mutates it.
    """
    score, details, tools = evaluate_rules(snapshot)

    difficulty = difficulty_for(score)
    approach = choose_approach(snapshot, score)

    if not details:
        details = [FALLBACK_DETAIL]
        tools = [FALLBACK_TOOL]

    log.debug("Composed recommendation for %s: score=%d difficulty=%s",
              snapshot.url or "<snapshot>", score, difficulty.value)

    return ScrapingRecommendation(
        approach=approach,
        difficulty=difficulty,
        details=details,
        tools=tools,
    )
