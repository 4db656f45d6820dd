"""Config loaders — YAML request files and environment credentials."""

import os
from pathlib import Path

import yaml

from finops.schemas.company import CompanyContext
from finops.schemas.config import ProviderCredentials, RecommenderSettings


def load_request(path: str | Path) -> CompanyContext:
    """Load and validate a recommendation request file.

    Raises ``FileNotFoundError`` if the path doesn't exist and
    ``pydantic.ValidationError`` if the YAML content is invalid.
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Request file not found: {path}")

    raw = yaml.safe_load(path.read_text())
    if not isinstance(raw, dict):
        raise ValueError(f"Request file must be a YAML mapping, got {type(raw).__name__}")

    # Keys left blank in YAML load as None; drop them so model defaults apply.
    raw = {key: value for key, value in raw.items() if value is not None}

    return CompanyContext.model_validate(raw)


def load_credentials() -> ProviderCredentials:
    """Read provider credentials from the process environment."""
    return ProviderCredentials(
        openai_api_key=os.environ.get("OPENAI_API_KEY", ""),
        aws_access_key_id=os.environ.get("AWS_ACCESS_KEY_ID", ""),
        aws_secret_access_key=os.environ.get("AWS_SECRET_ACCESS_KEY", ""),
        aws_region=os.environ.get("AWS_REGION") or "us-east-1",
    )


def load_settings(*, strict: bool = False) -> RecommenderSettings:
    """Build settings, letting ``FINOPS_*`` environment variables override defaults.

    Raises ``pydantic.ValidationError`` if an override doesn't fit its field.
    """
    overrides: dict[str, object] = {"strict": strict}
    if model := os.environ.get("FINOPS_OPENAI_MODEL"):
        overrides["openai_model"] = model
    if model := os.environ.get("FINOPS_BEDROCK_MODEL"):
        overrides["bedrock_model"] = model
    if timeout := os.environ.get("FINOPS_REQUEST_TIMEOUT"):
        overrides["request_timeout"] = timeout
    return RecommenderSettings(**overrides)
