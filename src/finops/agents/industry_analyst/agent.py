"""Industry Analyst — short prose assessment from the secondary provider."""

from __future__ import annotations

import asyncio
import logging
from typing import Protocol

from finops.agents.industry_analyst.prompts import build_analysis_prompt, fallback_analysis
from finops.schemas.company import CompanyIntelligence

logger = logging.getLogger(__name__)


class CompletionClient(Protocol):
    async def complete(self, prompt: str, *, max_tokens: int = 300) -> str:
        ...


class IndustryAnalystAgent:
    """Wraps the secondary provider.

    ``analyze`` never raises on provider failure: the error is logged and a
    templated sentence built from the intelligence record is returned.
    """

    def __init__(
        self,
        client: CompletionClient,
        *,
        timeout: float | None = 60.0,
        max_tokens: int = 300,
    ) -> None:
        self.client = client
        self.timeout = timeout
        self.max_tokens = max_tokens

    @property
    def name(self) -> str:
        return "Industry Analyst"

    async def analyze(self, intel: CompanyIntelligence) -> str:
        prompt = build_analysis_prompt(intel)
        try:
            text = await asyncio.wait_for(
                self.client.complete(prompt, max_tokens=self.max_tokens),
                timeout=self.timeout,
            )
        except Exception as exc:
            # CancelledError is a BaseException and still propagates.
            logger.warning(
                "%s failed for %s, using fallback analysis: %r",
                self.name, intel.company_name, exc,
            )
            return fallback_analysis(intel)

        if not text.strip():
            logger.warning("%s returned empty text for %s, using fallback analysis",
                           self.name, intel.company_name)
            return fallback_analysis(intel)
        return text
