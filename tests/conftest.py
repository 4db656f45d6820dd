"""Shared test fixtures."""

from __future__ import annotations

from pathlib import Path
from unittest.mock import AsyncMock

import pytest

from finops.schemas.company import CompanyContext, CompanyIntelligence, StockPerformance
from finops.schemas.config import ProviderCredentials
from finops.shared.openai_client import OpenAIClient

VALID_OPENAI_KEY = "sk-test-0123456789abcdefghijklmnop"
VALID_AWS_KEY_ID = "AKIATEST0123456789ABCDEF"
VALID_AWS_SECRET = "secret0123456789abcdefghijklmnopqrstuv"


@pytest.fixture
def context() -> CompanyContext:
    return CompanyContext(
        company_name="CloudZero",
        website_url="https://www.cloudzero.com",
        email="ops@cloudzero.com",
    )


@pytest.fixture
def intelligence() -> CompanyIntelligence:
    return CompanyIntelligence(
        company_name="CloudZero",
        industry="Cloud Cost Intelligence",
        business_model="B2B SaaS subscription",
        tech_stack=["AWS", "Python", "Snowflake"],
        recent_news=["Raised Series C", "Launched AnyCost for Kubernetes"],
        cloud_usage_indicators=["Amazon CloudFront CDN", "Heavy Lambda usage"],
        stock_performance=StockPerformance(summary="Privately held"),
    )


@pytest.fixture
def credentials() -> ProviderCredentials:
    return ProviderCredentials(
        openai_api_key=VALID_OPENAI_KEY,
        aws_access_key_id=VALID_AWS_KEY_ID,
        aws_secret_access_key=VALID_AWS_SECRET,
    )


@pytest.fixture
def tmp_request(tmp_path: Path) -> Path:
    """Write a minimal valid request YAML and return its path."""
    req = tmp_path / "request.yml"
    req.write_text(
        """\
companyName: "CloudZero"
websiteUrl: "https://www.cloudzero.com"
ppa: true
"""
    )
    return req


@pytest.fixture
def mock_openai_client() -> OpenAIClient:
    """Return an OpenAIClient with a mocked OpenAI SDK underneath."""
    client = OpenAIClient.__new__(OpenAIClient)
    client._client = AsyncMock()
    client.model = "gpt-4"
    return client
