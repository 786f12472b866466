"""Runtime configuration for adapters, credentials and logging.

Centralizes endpoint URLs and tunables so adapters never read the
environment themselves.
"""

import os
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field

OPENAI_BASE_URL = "https://api.openai.com/v1"
GEMINI_BASE_URL = "https://generativelanguage.googleapis.com/v1beta"
ANTHROPIC_BASE_URL = "https://api.anthropic.com/v1"
ANTHROPIC_VERSION = "2023-06-01"

DEFAULT_CREDENTIALS_PATH = Path.home() / ".config" / "chotto" / "credentials.json"


class Settings(BaseModel):
    """Configuration shared by the dispatcher and its adapters."""

    model_config = ConfigDict(frozen=True)

    openai_base_url: str = Field(default=OPENAI_BASE_URL)
    gemini_base_url: str = Field(default=GEMINI_BASE_URL)
    anthropic_base_url: str = Field(default=ANTHROPIC_BASE_URL)
    anthropic_version: str = Field(default=ANTHROPIC_VERSION)
    nano_banana_base_url: str = Field(
        default=OPENAI_BASE_URL,
        description="Images endpoint serving the Nano Banana model"
    )
    nano_banana_model: str = Field(default="nano-banana")

    timeout: float = Field(default=120.0, gt=0, description="HTTP timeout in seconds")
    max_tokens: int = Field(default=4096, ge=1, description="Output bound for the messages API")
    reasoning_effort: str = Field(default="high", description="OpenAI reasoning effort for thinking variants")
    gemini_thinking_budget: int = Field(default=8192, ge=1)
    anthropic_thinking_budget: int = Field(default=2048, ge=1024)
    image_size: str = Field(default="1024x1024")

    credentials_path: Path = Field(default=DEFAULT_CREDENTIALS_PATH)
    log_level: str = Field(default="WARNING")

    @classmethod
    def from_env(cls) -> "Settings":
        """Build settings from CHOTTO_* environment variables.

        Environment variables:
            CHOTTO_OPENAI_BASE_URL: OpenAI API base URL
            CHOTTO_GEMINI_BASE_URL: Gemini API base URL
            CHOTTO_ANTHROPIC_BASE_URL: Anthropic API base URL
            CHOTTO_ANTHROPIC_VERSION: anthropic-version header (default: 2023-06-01)
            CHOTTO_NANO_BANANA_BASE_URL: Images endpoint base for Nano Banana
            CHOTTO_NANO_BANANA_MODEL: Vendor model string for Nano Banana
            CHOTTO_TIMEOUT: HTTP timeout in seconds (default: 120)
            CHOTTO_MAX_TOKENS: Anthropic max_tokens (default: 4096)
            CHOTTO_REASONING_EFFORT: OpenAI reasoning effort for thinking variants (default: high)
            CHOTTO_GEMINI_THINKING_BUDGET: Gemini thinking budget in tokens (default: 8192)
            CHOTTO_ANTHROPIC_THINKING_BUDGET: Claude thinking budget in tokens (default: 2048)
            CHOTTO_IMAGE_SIZE: Generated image size (default: 1024x1024)
            CHOTTO_CREDENTIALS_PATH: Credential file (default: ~/.config/chotto/credentials.json)
            CHOTTO_LOG_LEVEL: Log level (default: WARNING)

        Raises:
            ValidationError: If a variable holds a value the field rejects
        """
        values: dict[str, str] = {}
        for field_name in cls.model_fields:
            raw = os.getenv(f"CHOTTO_{field_name.upper()}")
            if raw:
                values[field_name] = raw
        return cls(**values)
