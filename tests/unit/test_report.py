"""Tests for siteprobe.core.report."""

from siteprobe.core.models import (
    AntiBotDetection,
    DataDeliveryAnalysis,
    Difficulty,
    InterceptedEndpoint,
    InterceptedRequests,
    RobotsTxtAnalysis,
    ScrapingRecommendation,
    SiteAnalysisResult,
    TechDetection,
)
from siteprobe.core.recommend import compose
from siteprobe.core.report import (
    endpoint_line,
    format_delivery_method,
    format_difficulty,
    render_report,
    truncate_url,
)


class TestFormatting:
    def test_delivery_labels(self):
        assert format_delivery_method("server-rendered") == "Server-Rendered HTML"
        assert format_delivery_method("spa-api") == "Single-Page App (API)"
        assert format_delivery_method("hybrid") == "Hybrid (SSR + API)"
        assert format_delivery_method("unknown") == "Unknown"
        assert format_delivery_method("something") == "Unknown"

    def test_difficulty_labels(self):
        assert format_difficulty(Difficulty.VERY_HARD) == "Very Hard"
        assert format_difficulty("moderate") == "Moderate"

    def test_truncate_url(self):
        assert truncate_url("short", 60) == "short"
        long = "https://x.com/" + "a" * 100
        cut = truncate_url(long, 60)
        assert len(cut) == 60
        assert cut.endswith("...")

    def test_endpoint_line_count_suffix(self):
        ep = InterceptedEndpoint(endpoint="/api/x", methods=["GET", "POST"], count=4)
        assert endpoint_line(ep, 60).endswith("×4")
        assert "×" not in endpoint_line(ep, 60, show_count=False)


def _endpoints(n_api: int, n_other: int) -> InterceptedRequests:
    eps = [InterceptedEndpoint(endpoint=f"/api/{i}", methods=["GET"], count=1) for i in range(n_api)]
    eps += [InterceptedEndpoint(endpoint=f"/page/{i}", methods=["GET"], count=1)
            for i in range(n_other)]
    return InterceptedRequests(total_requests=len(eps), endpoints=eps)


class TestRenderReport:
    def test_summary_and_recommendations(self):
        snap = SiteAnalysisResult(
            url="https://x.com",
            anti_bot_detections=[
                AntiBotDetection(name="hCaptcha", category="captcha", confidence=95),
            ],
            technologies=[TechDetection(name="WordPress", category="cms")],
            data_delivery=DataDeliveryAnalysis(
                data_delivery_method="server-rendered",
                has_structured_data=True,
                structured_data_types=["Event"],
                evidence=["Good text/HTML ratio - content is largely server-rendered"],
            ),
        )
        lines = render_report(snap, compose(snap))
        text = "\n".join(lines)
        assert lines[0] == "Site: https://x.com"
        assert "Difficulty:    Moderate" in text
        assert "Data Delivery: Server-Rendered HTML" in text
        assert "hCaptcha (CAPTCHA · 95% confidence)" in text
        assert "WordPress (cms)" in text
        assert "JSON-LD: Event" in text
        assert "Suggested Tools:" in text
        assert "  - WordPress REST API" in text

    def test_endpoint_sections_capped(self):
        snap = SiteAnalysisResult(intercepted_requests=_endpoints(18, 25))
        lines = render_report(snap, compose(snap))
        assert "API Endpoints (18)" in lines
        assert "  +3 more endpoints" in lines
        assert "Other Requests (25)" in lines
        assert "  +5 more" in lines

    def test_caps_from_config(self):
        snap = SiteAnalysisResult(intercepted_requests=_endpoints(3, 0))
        config = {"report": {"max_api_endpoints": 1}}
        lines = render_report(snap, compose(snap), config)
        assert "  +2 more endpoints" in lines

    def test_empty_report_section_uses_defaults(self):
        snap = SiteAnalysisResult(intercepted_requests=_endpoints(18, 0))
        lines = render_report(snap, compose(snap), {"report": None})
        assert "  +3 more endpoints" in lines

    def test_robots_section_only_when_present(self):
        rec = ScrapingRecommendation(approach="x", difficulty="easy")
        without = render_report(SiteAnalysisResult(), rec)
        assert "Robots.txt" not in without

        snap = SiteAnalysisResult(robots_txt=RobotsTxtAnalysis(
            fully_blocked=True, crawl_delay=2.0,
            sitemap_urls=["https://x.com/s.xml"], key_disallows=["/"],
        ))
        text = "\n".join(render_report(snap, rec))
        assert "Robots.txt" in text
        assert "Fully blocked: yes" in text
        assert "Crawl-delay:   2s" in text
        assert "Sitemap:       https://x.com/s.xml" in text

    def test_no_tools_section_when_empty(self):
        rec = ScrapingRecommendation(approach="x", difficulty="easy", details=["d"])
        assert "Suggested Tools:" not in render_report(SiteAnalysisResult(), rec)
