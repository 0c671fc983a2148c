"""Chat pipeline configuration with environment variable loading.

Pydantic-based configuration for prompt budgets, the default provider
credential and the HTTP transport.
"""

import os

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, Field, field_validator

from pdf_chat.agent.providers import Provider
from pdf_chat.parsing.pdf_parser import MAX_FILE_SIZE

# Load environment variables from .env file
load_dotenv()

ANALYSIS_CHAR_LIMIT = 12000
QUESTION_CHAR_LIMIT = 8000


class ChatConfig(BaseModel):
    """Configuration for the PDF chat pipeline.

    An empty API key is valid and puts the assistant in demo mode.

    Attributes:
        api_key: Default provider key for new sessions.
        provider: Explicit provider for ``api_key``, overriding inference from
            its prefix. Keys entered by users are always classified by prefix.
        analysis_char_limit: Characters of document text in the analysis prompt.
        question_char_limit: Characters of document text in question prompts.
        history_window: Earlier messages passed along with each question.
        request_timeout: Seconds before a provider request is abandoned.
        max_file_size: Largest accepted upload in bytes.
    """

    model_config = ConfigDict(validate_default=True)

    api_key: str = Field(
        default_factory=lambda: os.getenv("LLM_API_KEY", ""),
        description="Default API key for LLM provider",
    )
    provider: Provider | None = Field(
        default_factory=lambda: os.getenv("LLM_PROVIDER") or None,
        description="Provider to use regardless of key prefix",
    )
    analysis_char_limit: int = Field(
        default_factory=lambda: int(os.getenv("ANALYSIS_CHAR_LIMIT", ANALYSIS_CHAR_LIMIT)),
        ge=1,
        description="Document characters embedded in the analysis prompt",
    )
    question_char_limit: int = Field(
        default_factory=lambda: int(os.getenv("QUESTION_CHAR_LIMIT", QUESTION_CHAR_LIMIT)),
        ge=1,
        description="Document characters embedded in question prompts",
    )
    history_window: int = Field(
        default_factory=lambda: int(os.getenv("HISTORY_WINDOW", "6")),
        ge=0,
        le=50,
        description="Earlier conversation messages sent with each question",
    )
    request_timeout: float = Field(
        default_factory=lambda: float(os.getenv("REQUEST_TIMEOUT", "120.0")),
        gt=0.0,
        description="Provider request timeout in seconds",
    )
    max_file_size: int = Field(
        default_factory=lambda: int(os.getenv("MAX_FILE_SIZE", MAX_FILE_SIZE)),
        ge=1,
        description="Maximum upload size in bytes",
    )

    @field_validator("api_key")
    @classmethod
    def strip_api_key(cls, v: str) -> str:
        """Strip surrounding whitespace from the API key."""
        return v.strip()

    @field_validator("provider", mode="before")
    @classmethod
    def normalize_provider(cls, v: object) -> object:
        """Accept provider names case-insensitively."""
        if isinstance(v, str):
            return v.strip().lower() or None
        return v


def get_chat_config() -> ChatConfig:
    """Create chat configuration from environment.

    Returns:
        Configured ChatConfig instance.

    Raises:
        ValidationError: If an environment value is out of range.
    """
    return ChatConfig()
