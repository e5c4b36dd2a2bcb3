"""Client configuration with environment variable loading.

Pydantic-based configuration for the Flowise transport and the chat page.
"""

import os

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, Field, field_validator

# Load environment variables from .env file
load_dotenv()


class ClientConfig(BaseModel):
    """Configuration for talking to a Flowise chatflow.

    Attributes:
        api_host: Base URL of the Flowise server.
        chatflow_id: Identifier of the chatflow answering questions.
        api_key: Optional bearer token for protected chatflows.
        timeout: Seconds to wait for a prediction before giving up.
        max_visible_sources: Citations shown per answer in the chat page.
    """

    # Environment-derived defaults go through the same validators
    model_config = ConfigDict(validate_default=True)

    api_host: str = Field(
        default_factory=lambda: os.getenv("FLOWISE_API_HOST", "http://localhost:3000"),
        description="Flowise server base URL",
    )
    chatflow_id: str = Field(
        default_factory=lambda: os.getenv("FLOWISE_CHATFLOW_ID", ""),
        description="Chatflow used for predictions",
    )
    api_key: str | None = Field(
        default_factory=lambda: os.getenv("FLOWISE_API_KEY") or None,
        description="Bearer token (None for unprotected chatflows)",
    )
    timeout: float = Field(
        default_factory=lambda: float(os.getenv("FLOWISE_TIMEOUT", "120")),
        gt=0.0,
        le=600.0,
        description="Request timeout in seconds",
    )
    max_visible_sources: int = Field(
        default_factory=lambda: int(os.getenv("MAX_VISIBLE_SOURCES", "3")),
        ge=0,
        le=20,
        description="Citations rendered per assistant message",
    )

    @field_validator("api_host")
    @classmethod
    def validate_api_host(cls, v: str) -> str:
        """Require a host and drop any trailing slash."""
        v = v.strip().rstrip("/")
        if not v:
            raise ValueError("FLOWISE_API_HOST is required")
        return v

    @field_validator("chatflow_id")
    @classmethod
    def validate_chatflow_id(cls, v: str) -> str:
        """Validate that a chatflow ID is provided and non-empty."""
        if not v or not v.strip():
            raise ValueError(
                "FLOWISE_CHATFLOW_ID is required. Set it in .env"
            )
        return v.strip()

    @field_validator("api_key")
    @classmethod
    def normalize_api_key(cls, v: str | None) -> str | None:
        if v is None:
            return None
        return v.strip() or None

    @property
    def prediction_url(self) -> str:
        """Full URL of the chatflow prediction endpoint."""
        return f"{self.api_host}/api/v1/prediction/{self.chatflow_id}"


def get_client_config() -> ClientConfig:
    """Create client configuration from environment.

    Returns:
        Configured ClientConfig instance.

    Raises:
        ValidationError: If FLOWISE_CHATFLOW_ID is missing or a value is out of range.
    """
    return ClientConfig()
