"""Recommender Agent — orchestrates intelligence, analysis and the primary provider."""

from __future__ import annotations

import asyncio
import json
import logging
import re
from enum import Enum
from typing import Any, Callable, Protocol

from openai import APIError
from pydantic import ValidationError

from finops.agents.industry_analyst.agent import IndustryAnalystAgent
from finops.agents.recommender.fallback import fallback_recommendation
from finops.agents.recommender.prompts import SYSTEM_PROMPT, build_prompt
from finops.config import load_credentials
from finops.errors import (
    CredentialError,
    IntelligenceGatheringError,
    ParseError,
    ProviderResponseError,
    SchemaValidationError,
)
from finops.schemas.company import CompanyContext, CompanyIntelligence
from finops.schemas.config import ProviderCredentials, RecommenderSettings
from finops.schemas.recommendations import AIRecommendation
from finops.shared.web_intel import IntelligenceGatherer

logger = logging.getLogger(__name__)

ProgressCallback = Callable[[str], None]

REQUIRED_KEYS = ("unitMetrics", "conversationStarters")

_LEADING_FENCE = re.compile(r"^```[a-zA-Z]*[ \t]*\n?")
_TRAILING_FENCE = re.compile(r"\n?```$")


class PrimaryClient(Protocol):
    async def simple_completion(
        self,
        *,
        system: str,
        user_message: str,
        temperature: float = ...,
        max_tokens: int = ...,
        on_tokens: Callable[[int, int], None] | None = ...,
    ) -> str:
        ...


class FailurePolicy(str, Enum):
    """What ``recommend`` does when ``generate`` fails at runtime."""

    RAISE = "raise"
    FALLBACK = "fallback"


# Runtime/provider failures the fallback generator may stand in for.
# CredentialError is never degraded.
DEGRADABLE_ERRORS = (
    IntelligenceGatheringError,
    ProviderResponseError,
    ParseError,
    SchemaValidationError,
)


def strip_code_fences(text: str) -> str:
    """Remove a surrounding ```json ... ``` (or bare ```) fence, if any."""
    text = text.strip()
    text = _LEADING_FENCE.sub("", text)
    text = _TRAILING_FENCE.sub("", text)
    return text.strip()


def validate_structure(data: Any) -> AIRecommendation:
    """Minimal structural check: a JSON object carrying both required keys.

    Everything else is kept as returned, unknown keys and off-shape items
    included; ``AIRecommendation.invariant_violations`` reports those.
    """
    if not isinstance(data, dict):
        raise SchemaValidationError(
            f"Expected a JSON object, got {type(data).__name__}",
        )
    missing = [key for key in REQUIRED_KEYS if key not in data or data[key] is None]
    if missing:
        raise SchemaValidationError(
            f"Invalid response structure from AI: missing {', '.join(missing)}",
            details={"missing": missing},
        )
    try:
        return AIRecommendation.model_validate(data)
    except ValidationError as exc:
        raise SchemaValidationError(
            f"Invalid response structure from AI: {exc.error_count()} field error(s)",
            details={"errors": exc.errors(include_url=False)},
        ) from exc


def parse_recommendation(raw: str) -> AIRecommendation:
    """Strip fences, parse JSON, and run the structural check."""
    cleaned = strip_code_fences(raw)
    try:
        data = json.loads(cleaned)
    except json.JSONDecodeError as exc:
        raise ParseError(f"Failed to parse AI response as JSON: {exc}", raw_text=raw) from exc
    return validate_structure(data)


def require_primary_credentials(creds: ProviderCredentials) -> None:
    """Raise ``CredentialError`` unless the OpenAI key looks usable."""
    if creds.has_primary:
        return
    state = "set but invalid" if creds.openai_api_key else "not set"
    raise CredentialError(
        "OpenAI API key is invalid or missing. Set OPENAI_API_KEY in your "
        f"environment or .env file (current key: {state}).",
        details={"openai_api_key": state},
    )


class RecommenderAgent:
    """Turns a ``CompanyContext`` into an ``AIRecommendation``.

    Pipeline (strictly sequential):
        credentials → intelligence gatherer → industry analyst (optional)
        → prompt → primary provider → parse → validate

    Provider clients are built once by the caller and injected here; the
    agent keeps no per-request state.
    """

    def __init__(
        self,
        client: PrimaryClient,
        gatherer: IntelligenceGatherer,
        *,
        analyst: IndustryAnalystAgent | None = None,
        credentials: ProviderCredentials | None = None,
        settings: RecommenderSettings | None = None,
    ) -> None:
        self.client = client
        self.gatherer = gatherer
        self.analyst = analyst
        self.credentials = credentials
        self.settings = settings or RecommenderSettings()

    @property
    def name(self) -> str:
        return "Recommender"

    def _resolve_credentials(self) -> ProviderCredentials:
        if self.credentials is not None:
            return self.credentials
        return load_credentials()

    async def _gather(self, context: CompanyContext) -> CompanyIntelligence:
        try:
            return await asyncio.wait_for(
                self.gatherer.gather(context.company_name, context.website_url),
                timeout=self.settings.request_timeout,
            )
        except IntelligenceGatheringError:
            raise
        except asyncio.TimeoutError as exc:
            raise IntelligenceGatheringError(
                f"Intelligence gathering for {context.company_name} timed out after "
                f"{self.settings.request_timeout:g}s",
            ) from exc
        except Exception as exc:
            raise IntelligenceGatheringError(
                f"Intelligence gathering for {context.company_name} failed: {exc}",
            ) from exc

    def _log_usage(self, input_tokens: int, output_tokens: int) -> None:
        logger.info(
            "%s token usage: %d input, %d output", self.name, input_tokens, output_tokens,
        )

    async def _complete(self, prompt: str) -> str:
        try:
            return await asyncio.wait_for(
                self.client.simple_completion(
                    system=SYSTEM_PROMPT,
                    user_message=prompt,
                    temperature=self.settings.temperature,
                    max_tokens=self.settings.max_tokens,
                    on_tokens=self._log_usage,
                ),
                timeout=self.settings.request_timeout,
            )
        except asyncio.TimeoutError as exc:
            raise ProviderResponseError(
                f"OpenAI request timed out after {self.settings.request_timeout:g}s",
            ) from exc
        except APIError as exc:
            raise ProviderResponseError(f"OpenAI request failed: {exc}") from exc

    async def generate(
        self,
        context: CompanyContext,
        *,
        on_progress: ProgressCallback | None = None,
    ) -> AIRecommendation:
        """Run the full pipeline. Never substitutes the fallback generator."""
        creds = self._resolve_credentials()
        logger.info("API key status: %s", creds.status())

        require_primary_credentials(creds)

        run_analysis = creds.has_secondary
        if not run_analysis:
            logger.warning("AWS credentials invalid or missing, proceeding with OpenAI only")
        elif self.analyst is None:
            logger.info("No industry analyst configured, skipping industry analysis")
            run_analysis = False

        if on_progress:
            on_progress("Gathering company intelligence…")
        intel = await self._gather(context)

        industry_analysis = ""
        if run_analysis:
            if on_progress:
                on_progress("Analyzing industry context…")
            industry_analysis = await self.analyst.analyze(intel)
        logger.debug("Industry analysis: %s", industry_analysis)

        prompt = build_prompt(context, intel, industry_analysis)

        if on_progress:
            on_progress("Generating recommendations…")
        raw = await self._complete(prompt)
        logger.debug("%s raw output:\n%s", self.name, raw[:500])

        if not raw.strip():
            raise ProviderResponseError("No response from OpenAI")

        recommendation = parse_recommendation(raw)

        if self.settings.strict:
            violations = recommendation.invariant_violations(context)
            if violations:
                raise SchemaValidationError(
                    "AI response breaks output invariants: " + "; ".join(violations),
                    details={"violations": violations},
                )
        return recommendation

    async def recommend(
        self,
        context: CompanyContext,
        *,
        policy: FailurePolicy = FailurePolicy.RAISE,
        on_progress: ProgressCallback | None = None,
    ) -> AIRecommendation:
        """``generate`` composed with a caller-selected failure policy."""
        try:
            return await self.generate(context, on_progress=on_progress)
        except DEGRADABLE_ERRORS as exc:
            if policy is not FailurePolicy.FALLBACK:
                raise
            logger.warning(
                "%s failed (%s), using offline fallback recommendations: %s",
                self.name, exc.kind, exc.message,
            )
            return fallback_recommendation(context)
