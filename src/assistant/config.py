"""Assistant configuration with environment variable loading.

Pydantic-based configuration for the hosted assistant client.
Supports OpenAI and OpenAI-compatible Assistants APIs via custom base URL.
"""

import os

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, Field, field_validator

# Load environment variables from .env file
load_dotenv()

DEFAULT_BASE_URL = "https://api.openai.com/v1"


class AssistantConfig(BaseModel):
    """Configuration for the assistant API client.

    Attributes:
        api_key: Bearer credential for the assistant API.
        assistant_id: Identifier of the assistant configuration to run.
        base_url: API base URL.
        poll_interval: Seconds between run status checks.
        max_poll_attempts: Status checks before a run is considered timed out.
        request_timeout: Per-request HTTP timeout in seconds.
    """

    # Environment-backed defaults go through the same validators as arguments
    model_config = ConfigDict(validate_default=True)

    api_key: str = Field(
        default_factory=lambda: os.getenv("OPENAI_API_KEY", ""),
        description="API key for the assistant provider",
    )
    assistant_id: str = Field(
        default_factory=lambda: os.getenv("ASSISTANT_ID", ""),
        description="Assistant configuration identifier",
    )
    base_url: str = Field(
        default_factory=lambda: os.getenv("OPENAI_BASE_URL") or DEFAULT_BASE_URL,
        description="API base URL",
    )
    poll_interval: float = Field(
        default_factory=lambda: float(os.getenv("ASSISTANT_POLL_INTERVAL", "1.0")),
        ge=0.0,
        description="Seconds to wait between run status checks",
    )
    max_poll_attempts: int = Field(
        default_factory=lambda: int(os.getenv("ASSISTANT_MAX_POLL_ATTEMPTS", "60")),
        ge=1,
        description="Maximum run status checks before giving up",
    )
    request_timeout: float = Field(
        default=30.0,
        gt=0.0,
        description="HTTP timeout for each API request",
    )

    @field_validator("api_key")
    @classmethod
    def validate_api_key(cls, v: str) -> str:
        """Validate that API key is provided and non-empty."""
        if not v or not v.strip():
            raise ValueError("API key required. Set OPENAI_API_KEY in .env")
        return v.strip()

    @field_validator("assistant_id")
    @classmethod
    def validate_assistant_id(cls, v: str) -> str:
        """Validate that the assistant identifier is provided and non-empty."""
        if not v or not v.strip():
            raise ValueError("Assistant ID required. Set ASSISTANT_ID in .env")
        return v.strip()

    @field_validator("base_url")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        return v.rstrip("/")


def get_assistant_config() -> AssistantConfig:
    """Create assistant configuration from environment.

    Returns:
        Configured AssistantConfig instance.

    Raises:
        ValueError: If the API key or assistant ID is not set.
    """
    return AssistantConfig()
