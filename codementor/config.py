"""Configuration loaded from environment variables."""

import logging
import os
from dataclasses import dataclass

from dotenv import load_dotenv

logger = logging.getLogger(__name__)

load_dotenv()

# Provider-specific key variables consulted when AI_API_KEY is unset.
_PROVIDER_KEY_VARS = {
    "openai": "OPENAI_API_KEY",
    "anthropic": "ANTHROPIC_API_KEY",
}


@dataclass
class Config:
    # Provider configured at startup. Leave empty to start unconfigured and
    # wait for a configuration request.
    # Example: "openai", "anthropic", "litellm"
    ai_provider: str = ""
    ai_api_key: str = ""
    # Model name in the provider's own format; litellm expects "<vendor>/<model>".
    ai_model: str = ""

    # Sampling settings sent with every request.
    temperature: float = 0.7
    max_tokens: int = 8000

    # Language used by the terminal chat (main.py).
    chat_language: str = "python"

    log_level: str = "INFO"

    @property
    def has_startup_provider(self) -> bool:
        return bool(self.ai_provider and self.ai_api_key and self.ai_model)

    def __repr__(self) -> str:
        return (
            f"Config(ai_provider={self.ai_provider!r}, ai_model={self.ai_model!r}, "
            f"temperature={self.temperature}, max_tokens={self.max_tokens}, "
            f"chat_language={self.chat_language!r}, log_level={self.log_level!r})"
        )

    @classmethod
    def from_env(cls) -> "Config":
        ai_provider = os.getenv("AI_PROVIDER", "").strip().lower()
        ai_api_key = os.getenv("AI_API_KEY", "")
        if not ai_api_key and ai_provider in _PROVIDER_KEY_VARS:
            ai_api_key = os.getenv(_PROVIDER_KEY_VARS[ai_provider], "")
        ai_model = os.getenv("AI_MODEL", "")
        if ai_provider and not (ai_api_key and ai_model):
            logger.warning(
                "AI_PROVIDER=%s set without an API key and model, starting unconfigured",
                ai_provider,
            )
        return cls(
            ai_provider=ai_provider,
            ai_api_key=ai_api_key,
            ai_model=ai_model,
            temperature=float(os.getenv("AI_TEMPERATURE", "0.7")),
            max_tokens=int(os.getenv("AI_MAX_TOKENS", "8000")),
            chat_language=os.getenv("CHAT_LANGUAGE", "python"),
            log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
        )
