"""Data records for site analysis snapshots and scraping recommendations.

Records mirror the JSON shapes produced by the in-page collector (camelCase keys).
``from_dict`` is total: missing optional fields become empty collections,
``False`` or ``0`` so the scoring code never has to guard against them.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from enum import Enum


# --- Enums ---


class DetectionCategory(str, Enum):
    ANTIBOT = "antibot"
    CAPTCHA = "captcha"
    WAF = "waf"


class DeliveryMethod(str, Enum):
    SERVER_RENDERED = "server-rendered"
    SPA_API = "spa-api"
    HYBRID = "hybrid"
    UNKNOWN = "unknown"


class Difficulty(str, Enum):
    EASY = "easy"
    MODERATE = "moderate"
    HARD = "hard"
    VERY_HARD = "very-hard"


# --- Helpers ---


def _list(data: dict, key: str) -> list:
    value = data.get(key)
    return list(value) if isinstance(value, (list, tuple)) else []


def _dict(data: dict, key: str) -> dict:
    value = data.get(key)
    return value if isinstance(value, dict) else {}


def _str(data: dict, key: str, default: str = "") -> str:
    value = data.get(key)
    return value if isinstance(value, str) else default


def _opt_str(data: dict, key: str) -> str | None:
    value = data.get(key)
    return value if isinstance(value, str) else None


def _num(data: dict, key: str, default: float = 0):
    value = data.get(key)
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return default
    # json.loads accepts NaN and Infinity
    if isinstance(value, float) and not math.isfinite(value):
        return default
    return value


def _bool(data: dict, key: str) -> bool:
    return bool(data.get(key, False))


def _enum_value(value: str) -> str:
    return value.value if isinstance(value, Enum) else value


# --- Detections ---


@dataclass(frozen=True)
class AntiBotDetection:
    """A bot-management vendor, CAPTCHA or WAF observed on the page."""

    name: str
    category: str = DetectionCategory.ANTIBOT  # "antibot", "captcha", "waf"
    confidence: int = 0  # 0-100
    evidence: str = ""

    @classmethod
    def from_dict(cls, data: dict) -> AntiBotDetection:
        return cls(
            name=_str(data, "name"),
            category=_str(data, "category", DetectionCategory.ANTIBOT.value),
            confidence=_num(data, "confidence"),
            evidence=_str(data, "evidence"),
        )

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "category": _enum_value(self.category),
            "confidence": self.confidence,
            "evidence": self.evidence,
        }


@dataclass(frozen=True)
class TechDetection:
    """A technology fingerprint (framework, cms, ecommerce, analytics, hosting)."""

    name: str
    category: str = ""
    confidence: int = 0
    evidence: str = ""

    @classmethod
    def from_dict(cls, data: dict) -> TechDetection:
        return cls(
            name=_str(data, "name"),
            category=_str(data, "category"),
            confidence=_num(data, "confidence"),
            evidence=_str(data, "evidence"),
        )

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "category": self.category,
            "confidence": self.confidence,
            "evidence": self.evidence,
        }


# --- Network ---


@dataclass(frozen=True)
class InterceptedEndpoint:
    """A request path observed during page load, aggregated over methods."""

    endpoint: str
    methods: list[str] = field(default_factory=list)
    count: int = 0
    sample_urls: list[str] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: dict) -> InterceptedEndpoint:
        return cls(
            endpoint=_str(data, "endpoint"),
            methods=[str(m) for m in _list(data, "methods")],
            count=int(_num(data, "count")),
            sample_urls=[str(u) for u in _list(data, "sampleUrls")],
        )

    def to_dict(self) -> dict:
        return {
            "endpoint": self.endpoint,
            "methods": list(self.methods),
            "count": self.count,
            "sampleUrls": list(self.sample_urls),
        }


@dataclass(frozen=True)
class InterceptedRequests:
    total_requests: int = 0
    endpoints: list[InterceptedEndpoint] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: dict) -> InterceptedRequests:
        return cls(
            total_requests=int(_num(data, "totalRequests")),
            endpoints=[
                InterceptedEndpoint.from_dict(e)
                for e in _list(data, "endpoints")
                if isinstance(e, dict)
            ],
        )

    def to_dict(self) -> dict:
        return {
            "totalRequests": self.total_requests,
            "endpoints": [e.to_dict() for e in self.endpoints],
        }


# --- Page-level analyses ---


@dataclass(frozen=True)
class ContentSize:
    html: int = 0
    text: int = 0
    ratio: float = 0.0


@dataclass(frozen=True)
class DataDeliveryAnalysis:
    """How page content reaches the client."""

    has_structured_data: bool = False
    structured_data_types: list[str] = field(default_factory=list)
    data_delivery_method: str = DeliveryMethod.UNKNOWN
    has_spa_indicators: bool = False
    has_api_data_in_page: bool = False
    has_server_rendered_content: bool = False
    content_size: ContentSize = field(default_factory=ContentSize)
    evidence: list[str] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: dict) -> DataDeliveryAnalysis:
        size = _dict(data, "contentSize")
        return cls(
            has_structured_data=_bool(data, "hasStructuredData"),
            structured_data_types=[str(t) for t in _list(data, "structuredDataTypes")],
            data_delivery_method=_str(
                data, "dataDeliveryMethod", DeliveryMethod.UNKNOWN.value
            ),
            has_spa_indicators=_bool(data, "hasSPAIndicators"),
            has_api_data_in_page=_bool(data, "hasAPIDataInPage"),
            has_server_rendered_content=_bool(data, "hasServerRenderedContent"),
            content_size=ContentSize(
                html=int(_num(size, "html")),
                text=int(_num(size, "text")),
                ratio=float(_num(size, "ratio")),
            ),
            evidence=[str(e) for e in _list(data, "evidence")],
        )

    def to_dict(self) -> dict:
        return {
            "hasStructuredData": self.has_structured_data,
            "structuredDataTypes": list(self.structured_data_types),
            "hasServerRenderedContent": self.has_server_rendered_content,
            "hasSPAIndicators": self.has_spa_indicators,
            "hasAPIDataInPage": self.has_api_data_in_page,
            "contentSize": {
                "html": self.content_size.html,
                "text": self.content_size.text,
                "ratio": self.content_size.ratio,
            },
            "dataDeliveryMethod": _enum_value(self.data_delivery_method),
            "evidence": list(self.evidence),
        }


@dataclass(frozen=True)
class HeadersAnalysis:
    security_headers: list[str] = field(default_factory=list)
    server_info: str | None = None
    cache_policy: str | None = None

    @classmethod
    def from_dict(cls, data: dict) -> HeadersAnalysis:
        return cls(
            security_headers=[str(h) for h in _list(data, "securityHeaders")],
            server_info=_opt_str(data, "serverInfo"),
            cache_policy=_opt_str(data, "cachePolicy"),
        )

    def to_dict(self) -> dict:
        return {
            "securityHeaders": list(self.security_headers),
            "serverInfo": self.server_info,
            "cachePolicy": self.cache_policy,
        }


@dataclass(frozen=True)
class PaginationAnalysis:
    has_next_prev: bool = False
    has_load_more: bool = False
    has_infinite_scroll: bool = False
    has_page_params: bool = False
    patterns: list[str] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: dict) -> PaginationAnalysis:
        return cls(
            has_next_prev=_bool(data, "hasNextPrev"),
            has_load_more=_bool(data, "hasLoadMore"),
            has_infinite_scroll=_bool(data, "hasInfiniteScroll"),
            has_page_params=_bool(data, "hasPageParams"),
            patterns=[str(p) for p in _list(data, "patterns")],
        )

    def to_dict(self) -> dict:
        return {
            "hasNextPrev": self.has_next_prev,
            "hasLoadMore": self.has_load_more,
            "hasInfiniteScroll": self.has_infinite_scroll,
            "hasPageParams": self.has_page_params,
            "patterns": list(self.patterns),
        }


@dataclass(frozen=True)
class AuthenticationAnalysis:
    has_login_form: bool = False
    has_paywall: bool = False
    has_oauth: bool = False
    indicators: list[str] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: dict) -> AuthenticationAnalysis:
        return cls(
            has_login_form=_bool(data, "hasLoginForm"),
            has_paywall=_bool(data, "hasPaywall"),
            has_oauth=_bool(data, "hasOAuth"),
            indicators=[str(i) for i in _list(data, "indicators")],
        )

    def to_dict(self) -> dict:
        return {
            "hasLoginForm": self.has_login_form,
            "hasPaywall": self.has_paywall,
            "hasOAuth": self.has_oauth,
            "indicators": list(self.indicators),
        }


@dataclass(frozen=True)
class RateLimitHeader:
    name: str
    value: str = ""
    source: str = ""


@dataclass(frozen=True)
class RateLimitingAnalysis:
    detected: bool = False
    headers: list[RateLimitHeader] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: dict) -> RateLimitingAnalysis:
        return cls(
            detected=_bool(data, "detected"),
            headers=[
                RateLimitHeader(
                    name=_str(h, "name"), value=_str(h, "value"), source=_str(h, "source")
                )
                for h in _list(data, "headers")
                if isinstance(h, dict)
            ],
        )

    def to_dict(self) -> dict:
        return {
            "detected": self.detected,
            "headers": [
                {"name": h.name, "value": h.value, "source": h.source} for h in self.headers
            ],
        }


@dataclass(frozen=True)
class CookieCategory:
    category: str
    names: list[str] = field(default_factory=list)
    count: int = 0


@dataclass(frozen=True)
class CookieAnalysis:
    total: int = 0
    categories: list[CookieCategory] = field(default_factory=list)
    has_session_cookies: bool = False
    has_auth_cookies: bool = False
    note: str = ""

    @classmethod
    def from_dict(cls, data: dict) -> CookieAnalysis:
        return cls(
            total=int(_num(data, "total")),
            categories=[
                CookieCategory(
                    category=_str(c, "category"),
                    names=[str(n) for n in _list(c, "names")],
                    count=int(_num(c, "count")),
                )
                for c in _list(data, "categories")
                if isinstance(c, dict)
            ],
            has_session_cookies=_bool(data, "hasSessionCookies"),
            has_auth_cookies=_bool(data, "hasAuthCookies"),
            note=_str(data, "note"),
        )

    def to_dict(self) -> dict:
        return {
            "total": self.total,
            "categories": [
                {"category": c.category, "names": list(c.names), "count": c.count}
                for c in self.categories
            ],
            "hasSessionCookies": self.has_session_cookies,
            "hasAuthCookies": self.has_auth_cookies,
            "note": self.note,
        }


# --- robots.txt ---


@dataclass(frozen=True)
class RobotsTxtAnalysis:
    """Summary of a parsed robots.txt (only the ``User-agent: *`` rules)."""

    found: bool = True
    fully_blocked: bool = False
    crawl_delay: float | None = None
    sitemap_urls: list[str] = field(default_factory=list)
    key_disallows: list[str] = field(default_factory=list)  # first 20, source order

    @classmethod
    def from_dict(cls, data: dict) -> RobotsTxtAnalysis:
        delay = data.get("crawlDelay")
        if isinstance(delay, bool) or not isinstance(delay, (int, float)):
            delay = None
        return cls(
            found=bool(data.get("found", True)),
            fully_blocked=_bool(data, "fullyBlocked"),
            crawl_delay=delay,
            sitemap_urls=[str(u) for u in _list(data, "sitemapUrls")],
            key_disallows=[str(p) for p in _list(data, "keyDisallows")],
        )

    def to_dict(self) -> dict:
        return {
            "found": self.found,
            "fullyBlocked": self.fully_blocked,
            "crawlDelay": self.crawl_delay,
            "sitemapUrls": list(self.sitemap_urls),
            "keyDisallows": list(self.key_disallows),
        }


# --- Snapshot ---


@dataclass(frozen=True)
class SiteAnalysisResult:
    """Immutable snapshot of every signal collected for one page."""

    url: str = ""
    analyzed_at: str = ""
    anti_bot_detections: list[AntiBotDetection] = field(default_factory=list)
    technologies: list[TechDetection] = field(default_factory=list)
    data_delivery: DataDeliveryAnalysis = field(default_factory=DataDeliveryAnalysis)
    intercepted_requests: InterceptedRequests = field(default_factory=InterceptedRequests)
    window_properties: dict[str, str] = field(default_factory=dict)
    robots_txt: RobotsTxtAnalysis | None = None
    headers: HeadersAnalysis = field(default_factory=HeadersAnalysis)
    pagination: PaginationAnalysis = field(default_factory=PaginationAnalysis)
    authentication: AuthenticationAnalysis = field(default_factory=AuthenticationAnalysis)
    rate_limiting: RateLimitingAnalysis = field(default_factory=RateLimitingAnalysis)
    cookies: CookieAnalysis = field(default_factory=CookieAnalysis)

    @classmethod
    def from_dict(cls, data: dict) -> SiteAnalysisResult:
        robots = data.get("robotsTxt")
        return cls(
            url=_str(data, "url"),
            analyzed_at=_str(data, "analyzedAt"),
            anti_bot_detections=[
                AntiBotDetection.from_dict(d)
                for d in _list(data, "antiBotDetections")
                if isinstance(d, dict)
            ],
            technologies=[
                TechDetection.from_dict(t)
                for t in _list(data, "technologies")
                if isinstance(t, dict)
            ],
            data_delivery=DataDeliveryAnalysis.from_dict(_dict(data, "dataDelivery")),
            intercepted_requests=InterceptedRequests.from_dict(
                _dict(data, "interceptedRequests")
            ),
            window_properties={
                str(k): str(v) for k, v in _dict(data, "windowProperties").items()
            },
            robots_txt=RobotsTxtAnalysis.from_dict(robots) if isinstance(robots, dict) else None,
            headers=HeadersAnalysis.from_dict(_dict(data, "headers")),
            pagination=PaginationAnalysis.from_dict(_dict(data, "pagination")),
            authentication=AuthenticationAnalysis.from_dict(_dict(data, "authentication")),
            rate_limiting=RateLimitingAnalysis.from_dict(_dict(data, "rateLimiting")),
            cookies=CookieAnalysis.from_dict(_dict(data, "cookies")),
        )

    def to_dict(self) -> dict:
        return {
            "antiBotDetections": [d.to_dict() for d in self.anti_bot_detections],
            "technologies": [t.to_dict() for t in self.technologies],
            "dataDelivery": self.data_delivery.to_dict(),
            "headers": self.headers.to_dict(),
            "interceptedRequests": self.intercepted_requests.to_dict(),
            "windowProperties": dict(self.window_properties),
            "pagination": self.pagination.to_dict(),
            "authentication": self.authentication.to_dict(),
            "rateLimiting": self.rate_limiting.to_dict(),
            "robotsTxt": self.robots_txt.to_dict() if self.robots_txt else None,
            "cookies": self.cookies.to_dict(),
            "analyzedAt": self.analyzed_at,
            "url": self.url,
        }


# --- Output ---


@dataclass
class ScrapingRecommendation:
    """Advisory verdict for one snapshot. Recomputed on every call."""

    approach: str = ""
    difficulty: str = Difficulty.EASY
    details: list[str] = field(default_factory=list)
    tools: list[str] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "approach": self.approach,
            "difficulty": _enum_value(self.difficulty),
            "details": list(self.details),
            "tools": list(self.tools),
        }
