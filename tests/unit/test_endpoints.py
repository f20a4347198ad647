"""Tests for siteprobe.core.endpoints."""

from siteprobe.core.endpoints import (
    MAX_REQUESTS,
    aggregate_requests,
    direct_api_endpoints,
    endpoint_base,
    is_api_like,
    is_direct_api,
    is_relevant_request,
    partition_endpoints,
)
from siteprobe.core.models import InterceptedEndpoint


def _ep(path: str, methods: list[str] | None = None, count: int = 1) -> InterceptedEndpoint:
    return InterceptedEndpoint(endpoint=path, methods=methods or ["GET"], count=count)


class TestIsApiLike:
    def test_path_markers(self):
        for path in (
            "https://x.com/api/items",
            "https://x.com/graphql",
            "https://x.com/data/feed.json",
            "https://x.com/v1/users",
            "https://x.com/v2/users",
            "https://x.com/rest/orders",
        ):
            assert is_api_like(_ep(path)), path

    def test_case_insensitive_path(self):
        assert is_api_like(_ep("https://x.com/API/items"))

    def test_post_method_counts(self):
        assert is_api_like(_ep("https://x.com/submit", methods=["GET", "POST"]))

    def test_plain_page_is_not_api(self):
        assert not is_api_like(_ep("https://x.com/about"))


class TestIsDirectApi:
    def test_api_and_graphql(self):
        assert is_direct_api(_ep("https://x.com/api/items"))
        assert is_direct_api(_ep("https://x.com/graphql"))

    def test_narrower_than_broad_predicate(self):
        for ep in (
            _ep("https://x.com/feed.json"),
            _ep("https://x.com/v1/users"),
            _ep("https://x.com/rest/orders"),
            _ep("https://x.com/submit", methods=["POST"]),
        ):
            assert is_api_like(ep)
            assert not is_direct_api(ep)


class TestPartition:
    def test_preserves_relative_order(self):
        eps = [
            _ep("https://x.com/api/a"),
            _ep("https://x.com/page"),
            _ep("https://x.com/v1/b"),
            _ep("https://x.com/other"),
        ]
        split = partition_endpoints(eps)
        assert [e.endpoint for e in split.api] == ["https://x.com/api/a", "https://x.com/v1/b"]
        assert [e.endpoint for e in split.other] == ["https://x.com/page", "https://x.com/other"]

    def test_empty(self):
        split = partition_endpoints([])
        assert split.api == []
        assert split.other == []

    def test_direct_api_endpoints(self):
        eps = [_ep("https://x.com/api/a"), _ep("https://x.com/feed.json")]
        assert [e.endpoint for e in direct_api_endpoints(eps)] == ["https://x.com/api/a"]


class TestRelevance:
    def test_static_assets_skipped(self):
        assert not is_relevant_request("https://x.com/static/app.js")
        assert not is_relevant_request("https://x.com/img/logo.PNG")
        assert not is_relevant_request("https://x.com/fonts/a.woff2")

    def test_analytics_hosts_skipped(self):
        assert not is_relevant_request("https://www.google-analytics.com/collect")
        assert not is_relevant_request("https://cdn.example.com/data")

    def test_api_request_kept(self):
        assert is_relevant_request("https://x.com/api/items?page=2")


class TestAggregateRequests:
    def test_groups_by_origin_and_path(self):
        result = aggregate_requests([
            {"method": "get", "url": "https://x.com/api/items?page=1"},
            {"method": "POST", "url": "https://x.com/api/items?page=2"},
            {"method": "GET", "url": "https://x.com/api/items?page=3"},
            {"method": "GET", "url": "https://x.com/api/items?page=4"},
            {"method": "GET", "url": "https://x.com/api/user"},
        ])
        assert result.total_requests == 5
        first = result.endpoints[0]
        assert first.endpoint == "https://x.com/api/items"
        assert first.methods == ["GET", "POST"]
        assert first.count == 4
        assert first.sample_urls == [
            "https://x.com/api/items?page=1",
            "https://x.com/api/items?page=2",
            "https://x.com/api/items?page=3",
        ]

    def test_sorted_by_count_stable(self):
        result = aggregate_requests([
            {"method": "GET", "url": "https://x.com/a"},
            {"method": "GET", "url": "https://x.com/b"},
            {"method": "GET", "url": "https://x.com/c"},
            {"method": "GET", "url": "https://x.com/c"},
        ])
        assert [e.endpoint for e in result.endpoints] == [
            "https://x.com/c",
            "https://x.com/a",
            "https://x.com/b",
        ]

    def test_irrelevant_requests_not_counted(self):
        result = aggregate_requests([
            {"method": "GET", "url": "https://x.com/app.js"},
            {"method": "GET", "url": "https://www.googletagmanager.com/gtm"},
            {"method": "GET", "url": "https://x.com/api/data"},
        ])
        assert result.total_requests == 1
        assert len(result.endpoints) == 1

    def test_relative_urls_resolved_against_origin(self):
        result = aggregate_requests(
            [{"method": "GET", "url": "/api/items?x=1"}],
            origin="https://shop.example",
        )
        assert result.endpoints[0].endpoint == "https://shop.example/api/items"

    def test_unparseable_url_dropped_with_origin(self):
        result = aggregate_requests(
            [
                {"method": "GET", "url": "http://[::1/api/x"},
                {"method": "GET", "url": "/api/ok"},
            ],
            origin="https://e.com",
        )
        assert result.total_requests == 1
        assert [e.endpoint for e in result.endpoints] == ["https://e.com/api/ok"]

    def test_capped_at_max_requests(self):
        requests = [{"method": "GET", "url": f"https://x.com/api/{i}"} for i in range(250)]
        result = aggregate_requests(requests)
        assert result.total_requests == MAX_REQUESTS

    def test_malformed_records_skipped(self):
        result = aggregate_requests(["nope", {"method": "GET"}, {"url": "https://x.com/p"}])
        assert result.total_requests == 1
        assert result.endpoints[0].methods == ["GET"]

    def test_endpoint_base_without_origin(self):
        assert endpoint_base("/api/items?x=1") == "/api/items"
