"""Async wrapper for Claude on AWS Bedrock — the secondary (analysis) provider."""

from __future__ import annotations

import logging

from anthropic import AsyncAnthropicBedrock

logger = logging.getLogger(__name__)

DEFAULT_MODEL = "anthropic.claude-3-sonnet-20240229-v1:0"


class BedrockClient:
    """Single-prompt text completions against a Bedrock-hosted Claude model."""

    def __init__(
        self,
        *,
        aws_access_key: str,
        aws_secret_key: str,
        aws_region: str = "us-east-1",
        model: str = DEFAULT_MODEL,
        timeout: float | None = None,
    ) -> None:
        self._client = AsyncAnthropicBedrock(
            aws_access_key=aws_access_key,
            aws_secret_key=aws_secret_key,
            aws_region=aws_region,
            timeout=timeout,
            max_retries=0,
        )
        self.model = model

    async def complete(self, prompt: str, *, max_tokens: int = 300) -> str:
        """Send ``prompt`` as a single user turn and return the joined text blocks."""
        response = await self._client.messages.create(
            model=self.model,
            max_tokens=max_tokens,
            messages=[{"role": "user", "content": prompt}],
        )
        return "".join(
            block.text for block in response.content if getattr(block, "type", "") == "text"
        ).strip()


class DryRunBedrockClient:
    """Canned analysis text, zero API calls."""

    model = "dry-run"

    async def complete(self, prompt: str, *, max_tokens: int = 300) -> str:
        logger.info("[dry-run] Bedrock completion (%d prompt chars)", len(prompt))
        return (
            "Dry-run industry analysis: steady baseline compute with periodic "
            "spikes suggests commitment discounts plus per-unit cost tracking."
        )
