"""Error taxonomy for the recommendation pipeline.

Every fatal failure of a request is raised as a ``FinOpsError`` subclass so
callers can tell a configuration problem (``CredentialError``) apart from a
runtime or provider problem (everything else).
"""

from __future__ import annotations

from typing import Any


class FinOpsError(Exception):
    """Base exception for all pipeline errors."""

    kind = "finops_error"

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details or {}


class CredentialError(FinOpsError):
    """A required provider credential is missing or implausible."""

    kind = "credential"


class IntelligenceGatheringError(FinOpsError):
    """The web-intelligence gatherer failed."""

    kind = "intelligence_gathering"


class ProviderResponseError(FinOpsError):
    """The primary provider returned no usable content."""

    kind = "provider_response"


class ParseError(FinOpsError):
    """The primary provider's text is not valid JSON."""

    kind = "parse"

    def __init__(
        self,
        message: str,
        raw_text: str,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, details)
        self.raw_text = raw_text


class SchemaValidationError(FinOpsError):
    """Parsed provider output is missing required fields or breaks invariants."""

    kind = "schema_validation"
