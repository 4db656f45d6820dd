"""Tests for the homepage-based intelligence gatherer."""

from __future__ import annotations

import httpx
import pytest

from finops.shared.web_intel import (
    UNKNOWN,
    DryRunGatherer,
    HttpIntelligenceGatherer,
    detect_cloud_indicators,
    detect_tech_stack,
)

HOMEPAGE = """\
<html>
<head>
  <title>  Acme | Rockets
  for Everyone </title>
  <meta name="description" content="Acme sells rockets to coyotes on subscription.">
  <script src="https://js.stripe.com/v3"></script>
</head>
<body><script id="__NEXT_DATA__" type="application/json">{}</script></body>
</html>
"""


def _gatherer(handler) -> HttpIntelligenceGatherer:
    http = httpx.AsyncClient(transport=httpx.MockTransport(handler), follow_redirects=True)
    return HttpIntelligenceGatherer(http)


class TestSignatures:
    def test_tech_stack_from_markup_and_headers(self) -> None:
        headers = httpx.Headers({"x-powered-by": "Express", "server": "nginx"})
        stack = detect_tech_stack(HOMEPAGE, headers)
        assert stack == ["Next.js", "Stripe", "Express", "nginx"]

    def test_cloud_indicators(self) -> None:
        headers = httpx.Headers({
            "x-amz-cf-id": "abc",
            "cf-ray": "123",
            "via": "1.1 varnish",
        })
        assert detect_cloud_indicators(headers) == [
            "Amazon CloudFront CDN",
            "Cloudflare edge network",
        ]

    def test_no_signals(self) -> None:
        assert detect_cloud_indicators(httpx.Headers()) == []
        assert detect_tech_stack("<html></html>", httpx.Headers()) == []


class TestHttpIntelligenceGatherer:
    @pytest.mark.asyncio
    async def test_gather_from_homepage(self) -> None:
        requested: list[str] = []

        def handler(request: httpx.Request) -> httpx.Response:
            requested.append(str(request.url))
            return httpx.Response(200, text=HOMEPAGE, headers={"x-amz-cf-id": "x"})

        intel = await _gatherer(handler).gather("Acme", "acme.com")

        assert requested[0].startswith("https://acme.com")
        assert intel.company_name == "Acme"
        assert intel.industry == UNKNOWN
        assert intel.business_model == "Acme sells rockets to coyotes on subscription."
        assert "Next.js" in intel.tech_stack
        assert intel.cloud_usage_indicators == ["Amazon CloudFront CDN"]
        assert intel.recent_news == []

    @pytest.mark.asyncio
    async def test_title_used_without_description(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, text="<title>Acme | Rockets</title>")

        intel = await _gatherer(handler).gather("Acme", "https://acme.com")
        assert intel.business_model == "Acme | Rockets"

    @pytest.mark.asyncio
    async def test_http_error_propagates(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(503)

        with pytest.raises(httpx.HTTPStatusError):
            await _gatherer(handler).gather("Acme", "https://acme.com")

    @pytest.mark.asyncio
    async def test_empty_url_skips_fetch(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise AssertionError("no request expected")

        intel = await _gatherer(handler).gather("Acme", "  ")
        assert intel.business_model == UNKNOWN
        assert intel.tech_stack == []


@pytest.mark.asyncio
async def test_dry_run_gatherer() -> None:
    intel = await DryRunGatherer().gather("Acme", "https://acme.com")
    assert intel.company_name == "Acme"
    assert intel.recent_news
