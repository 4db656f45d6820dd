"""Configuration schema — provider credentials and pipeline settings."""

from pydantic import BaseModel, Field

# Keys shorter than this are treated as placeholders or typos.
MIN_CREDENTIAL_LENGTH = 20
PLACEHOLDER_TOKEN = "your_"


def is_plausible_credential(value: str | None) -> bool:
    """Shape check only — never proves the key is accepted by the provider."""
    if not value or not value.strip():
        return False
    if PLACEHOLDER_TOKEN in value:
        return False
    return len(value) > MIN_CREDENTIAL_LENGTH


class ProviderCredentials(BaseModel):
    """Credentials for the two generative-text providers.

    ``openai_api_key`` authorizes the primary provider; the AWS pair
    authorizes the Bedrock-hosted secondary provider.
    """

    openai_api_key: str = ""
    aws_access_key_id: str = ""
    aws_secret_access_key: str = ""
    aws_region: str = "us-east-1"

    @property
    def has_primary(self) -> bool:
        return is_plausible_credential(self.openai_api_key)

    @property
    def has_secondary(self) -> bool:
        return is_plausible_credential(self.aws_access_key_id) and is_plausible_credential(
            self.aws_secret_access_key
        )

    def status(self) -> dict[str, str]:
        """Presence summary safe to log."""
        return {
            "openai": "valid" if self.has_primary else "invalid/missing",
            "aws": "valid" if self.has_secondary else "invalid/missing",
        }


class RecommenderSettings(BaseModel):
    """Tuning knobs for the provider calls."""

    openai_model: str = "gpt-4"
    bedrock_model: str = "anthropic.claude-3-sonnet-20240229-v1:0"
    temperature: float = 0.7
    max_tokens: int = 2000
    analysis_max_tokens: int = 300

    # Per external call, in seconds
    request_timeout: float = Field(60.0, gt=0)

    # Enforce list-length and flag/key invariants on provider output
    strict: bool = False
