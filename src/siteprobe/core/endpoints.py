"""Endpoint classification and request-log aggregation."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from urllib.parse import urljoin, urlsplit

from siteprobe.core.models import InterceptedEndpoint, InterceptedRequests

log = logging.getLogger(__name__)

API_PATH_MARKERS = ("/api/", "/graphql", ".json", "/v1/", "/v2/", "/rest/")
DIRECT_API_MARKERS = ("/api/", "/graphql")

MAX_REQUESTS = 200
MAX_SAMPLE_URLS = 3

SKIP_EXTENSIONS = (
    ".js", ".css", ".png", ".jpg", ".jpeg", ".gif", ".svg", ".ico",
    ".woff", ".woff2", ".ttf", ".eot", ".map", ".webp", ".avif",
)

SKIP_HOST_MARKERS = (
    "google-analytics.com",
    "googletagmanager.com",
    "facebook.net",
    "doubleclick.net",
    "analytics.",
    "cdn.",
    "fonts.googleapis.com",
    "fonts.gstatic.com",
    "sentry.io",
    "hotjar.com",
    "clarity.ms",
    "newrelic.com",
    "segment.io",
    "mixpanel.com",
    "amplitude.com",
)


# --- Predicates ---


def is_api_like(endpoint: InterceptedEndpoint) -> bool:
    """Broad check: API-looking path, or the endpoint was hit with POST."""
    path = endpoint.endpoint.lower()
    return any(marker in path for marker in API_PATH_MARKERS) or "POST" in endpoint.methods


def is_direct_api(endpoint: InterceptedEndpoint) -> bool:
    """Narrow check used for SPA pages: only ``/api/`` or ``/graphql`` paths.

    Case-sensitive and method-agnostic, unlike :func:`is_api_like`.
    """
    return any(marker in endpoint.endpoint for marker in DIRECT_API_MARKERS)


@dataclass
class EndpointPartition:
    """Endpoints split by :func:`is_api_like`, relative order preserved."""

    api: list[InterceptedEndpoint] = field(default_factory=list)
    other: list[InterceptedEndpoint] = field(default_factory=list)


def partition_endpoints(endpoints: list[InterceptedEndpoint]) -> EndpointPartition:
    result = EndpointPartition()
    for ep in endpoints:
        (result.api if is_api_like(ep) else result.other).append(ep)
    return result


def direct_api_endpoints(endpoints: list[InterceptedEndpoint]) -> list[InterceptedEndpoint]:
    return [ep for ep in endpoints if is_direct_api(ep)]


# --- Aggregation ---


def is_relevant_request(url: str) -> bool:
    """Skip static assets and analytics/CDN hosts."""
    try:
        parts = urlsplit(url)
        host = (parts.hostname or "").lower()
    except ValueError:
        return False
    path = parts.path.lower()
    if path.endswith(SKIP_EXTENSIONS):
        return False
    if any(marker in host for marker in SKIP_HOST_MARKERS):
        return False
    return True


def endpoint_base(url: str) -> str:
    """Grouping key for a URL: origin + path, query and fragment dropped."""
    parts = urlsplit(url)
    if parts.scheme and parts.netloc:
        return f"{parts.scheme}://{parts.netloc}{parts.path}"
    return parts.path or url


def aggregate_requests(
    requests: list[dict],
    origin: str | None = None,
) -> InterceptedRequests:
    """Group raw ``{method, url}`` request records into intercepted endpoints.

    Args:
        requests: Request records in arrival order.
        origin: Base used to resolve relative URLs (e.g. ``https://example.com``).

    Returns:
        InterceptedRequests with endpoints sorted by count (descending, stable).
    """
    kept: list[tuple[str, str]] = []
    for req in requests:
        if not isinstance(req, dict):
            continue
        url = str(req.get("url") or "")
        if not url:
            continue
        if origin:
            try:
                url = urljoin(origin, url)
            except ValueError:
                log.debug("Skipping unparseable request URL: %s", url)
                continue
        if not is_relevant_request(url):
            log.debug("Skipping irrelevant request: %s", url)
            continue
        if len(kept) >= MAX_REQUESTS:
            break
        method = str(req.get("method") or "GET").upper()
        kept.append((method, url))

    groups: dict[str, dict] = {}
    for method, url in kept:
        base = endpoint_base(url)
        group = groups.get(base)
        if group is None:
            groups[base] = {"methods": [method], "count": 1, "urls": [url]}
            continue
        if method not in group["methods"]:
            group["methods"].append(method)
        group["count"] += 1
        if len(group["urls"]) < MAX_SAMPLE_URLS:
            group["urls"].append(url)

    endpoints = [
        InterceptedEndpoint(
            endpoint=base,
            methods=data["methods"],
            count=data["count"],
            sample_urls=data["urls"],
        )
        for base, data in groups.items()
    ]
    endpoints.sort(key=lambda ep: ep.count, reverse=True)

    return InterceptedRequests(total_requests=len(kept), endpoints=endpoints)
