"""Async OpenAI API wrapper for the primary (recommendation-writing) provider.

Constructed once by the entry point and passed into the agents that need
it. No retries: a failed call surfaces to the caller.
"""

from __future__ import annotations

import json
import logging
from typing import Any, Callable

from openai import AsyncOpenAI

logger = logging.getLogger(__name__)

DEFAULT_MODEL = "gpt-4"

TokensCallback = Callable[[int, int], None]
"""Called with (input_tokens, output_tokens) when a completion finishes."""


class OpenAIClient:
    """Thin async wrapper around the OpenAI SDK.

    Provides one method, ``simple_completion`` — a single system + user
    request with no tools, returning the assistant text.
    """

    def __init__(
        self,
        api_key: str | None = None,
        *,
        model: str = DEFAULT_MODEL,
        timeout: float | None = None,
    ) -> None:
        self._client = AsyncOpenAI(api_key=api_key, timeout=timeout, max_retries=0)
        self.model = model

    async def simple_completion(
        self,
        *,
        system: str,
        user_message: str,
        temperature: float = 0.7,
        max_tokens: int = 2000,
        on_tokens: TokensCallback | None = None,
    ) -> str:
        """Single request/response with no tools.

        Returns ``""`` when the provider sends back no content.
        """
        kwargs: dict[str, Any] = {
            "model": self.model,
            "max_tokens": max_tokens,
            "temperature": temperature,
            "messages": [
                {"role": "system", "content": system},
                {"role": "user", "content": user_message},
            ],
        }
        response = await self._client.chat.completions.create(**kwargs)
        usage = getattr(response, "usage", None)
        if on_tokens and usage:
            on_tokens(getattr(usage, "prompt_tokens", 0), getattr(usage, "completion_tokens", 0))
        if not response.choices:
            return ""
        return response.choices[0].message.content or ""


# ======================================================================
# Dry-run mock client — zero API calls
# ======================================================================

# Section headings the prompt adds for each enabled focus area
_FOCUS_MARKERS = {
    "ppa": "PPA Discussion Starters",
    "genAI": "GenAI-Specific FinOps Insights",
    "cloudCostConcerns": "Cloud Cost Risk Signals",
}


def _dry_run_payload(user_message: str) -> dict[str, Any]:
    insights = {
        key: [f"Dry-run {key} question {i}" for i in range(1, 4)]
        for key, marker in _FOCUS_MARKERS.items()
        if marker in user_message
    }
    return {
        "unitMetrics": [
            {"title": "Cost per transaction", "description": "Dry-run unit metric."},
            {"title": "Cost per active customer", "description": "Dry-run unit metric."},
            {"title": "Cost per API request", "description": "Dry-run unit metric."},
            {"title": "Cost per feature delivered", "description": "Dry-run unit metric."},
        ],
        "conversationStarters": [
            "Dry-run conversation starter 1?",
            "Dry-run conversation starter 2?",
            "Dry-run conversation starter 3?",
        ],
        "conditionalInsights": insights,
    }


class DryRunClient:
    """Drop-in replacement for OpenAIClient that makes zero API calls.

    Returns canned JSON, fenced the way chat models often fence it, with
    insight keys for whichever focus sections the prompt asked for.
    """

    model = "dry-run"

    async def simple_completion(
        self,
        *,
        system: str,
        user_message: str,
        temperature: float = 0.7,
        max_tokens: int = 2000,
        on_tokens: TokensCallback | None = None,
    ) -> str:
        logger.info("[dry-run] OpenAI completion (%d prompt chars)", len(user_message))
        body = json.dumps(_dry_run_payload(user_message), indent=2)
        return f"```json\n{body}\n```"
