"""Company intelligence gathering.

The recommender only depends on the ``IntelligenceGatherer`` protocol.
``HttpIntelligenceGatherer`` is a thin default that reads signals from the
company homepage; richer research services can be plugged in instead.
"""

from __future__ import annotations

import logging
import re
from typing import Protocol

import httpx

from finops.schemas.company import CompanyIntelligence

logger = logging.getLogger(__name__)

UNKNOWN = "Unknown"

# (pattern in lower-cased HTML, technology name)
_MARKUP_SIGNATURES: list[tuple[str, str]] = [
    ("__next_data__", "Next.js"),
    ("data-reactroot", "React"),
    ("/_nuxt/", "Nuxt"),
    ("ng-version", "Angular"),
    ("wp-content", "WordPress"),
    ("cdn.shopify.com", "Shopify"),
    ("googletagmanager.com", "Google Tag Manager"),
    ("js.stripe.com", "Stripe"),
    ("segment.com/analytics", "Segment"),
    ("intercom", "Intercom"),
]

# (header name, substring of lower-cased value or "" for presence, indicator)
_HEADER_SIGNATURES: list[tuple[str, str, str]] = [
    ("x-amz-cf-id", "", "Amazon CloudFront CDN"),
    ("x-amz-request-id", "", "Amazon S3 / AWS-hosted assets"),
    ("server", "awselb", "AWS Elastic Load Balancing"),
    ("cf-ray", "", "Cloudflare edge network"),
    ("x-vercel-id", "", "Vercel hosting"),
    ("x-goog-generation", "", "Google Cloud Storage"),
    ("via", "google", "Google Cloud load balancing"),
    ("x-azure-ref", "", "Azure Front Door"),
    ("x-ms-request-id", "", "Microsoft Azure services"),
    ("x-served-by", "cache-", "Fastly CDN"),
]

_TITLE = re.compile(r"<title[^>]*>(.*?)</title>", re.IGNORECASE | re.DOTALL)
_META_DESCRIPTION = re.compile(
    r'<meta[^>]+name=["\']description["\'][^>]+content=["\']([^"\']*)["\']',
    re.IGNORECASE,
)


class IntelligenceGatherer(Protocol):
    async def gather(self, company_name: str, website_url: str) -> CompanyIntelligence:
        ...


def _ensure_scheme(url: str) -> str:
    url = url.strip()
    if not re.match(r"^https?://", url, re.IGNORECASE):
        url = f"https://{url}"
    return url


def detect_tech_stack(html: str, headers: httpx.Headers) -> list[str]:
    """Technologies visible in the homepage markup or response headers."""
    lowered = html.lower()
    found = [name for marker, name in _MARKUP_SIGNATURES if marker in lowered]
    if powered_by := headers.get("x-powered-by"):
        found.append(powered_by)
    if server := headers.get("server"):
        found.append(server)
    return list(dict.fromkeys(found))


def detect_cloud_indicators(headers: httpx.Headers) -> list[str]:
    indicators = []
    for name, needle, label in _HEADER_SIGNATURES:
        value = headers.get(name)
        if value is None:
            continue
        if needle and needle not in value.lower():
            continue
        indicators.append(label)
    return list(dict.fromkeys(indicators))


def _extract(pattern: re.Pattern[str], html: str) -> str:
    m = pattern.search(html)
    return " ".join(m.group(1).split()) if m else ""


class HttpIntelligenceGatherer:
    """Derive an intelligence record from a single homepage fetch.

    Network failures propagate; the recommender wraps them as
    ``IntelligenceGatheringError``.
    """

    def __init__(self, http: httpx.AsyncClient | None = None, *, timeout: float = 15.0) -> None:
        self._http = http
        self._timeout = timeout

    async def gather(self, company_name: str, website_url: str) -> CompanyIntelligence:
        if not website_url.strip():
            logger.info("No website URL for %s, returning minimal intelligence", company_name)
            return CompanyIntelligence(
                company_name=company_name, industry=UNKNOWN, business_model=UNKNOWN,
            )

        url = _ensure_scheme(website_url)
        logger.info("Fetching homepage for %s: %s", company_name, url)
        if self._http is not None:
            resp = await self._http.get(url)
        else:
            async with httpx.AsyncClient(follow_redirects=True, timeout=self._timeout) as http:
                resp = await http.get(url)
        resp.raise_for_status()

        html = resp.text
        title = _extract(_TITLE, html)
        description = _extract(_META_DESCRIPTION, html)

        return CompanyIntelligence(
            company_name=company_name,
            industry=UNKNOWN,
            business_model=description or title or UNKNOWN,
            tech_stack=detect_tech_stack(html, resp.headers),
            recent_news=[],
            cloud_usage_indicators=detect_cloud_indicators(resp.headers),
        )


class DryRunGatherer:
    """Canned intelligence record — zero network calls."""

    async def gather(self, company_name: str, website_url: str) -> CompanyIntelligence:
        logger.info("[dry-run] Gathering intelligence for %s", company_name)
        return CompanyIntelligence(
            company_name=company_name,
            industry="Software",
            business_model="B2B SaaS subscription",
            tech_stack=["React", "Python", "PostgreSQL"],
            recent_news=[f"{company_name} announced a new product line"],
            cloud_usage_indicators=["Amazon CloudFront CDN"],
        )
