"""Canonical message, configuration and response shapes shared by every provider."""

from dataclasses import dataclass, field
from enum import Enum

from ..errors import UnsupportedProviderError, ValidationError

ROLES = ("system", "user", "assistant")


class Provider(str, Enum):
    """Known LLM backends."""

    OPENAI = "openai"
    ANTHROPIC = "anthropic"
    LITELLM = "litellm"

    @classmethod
    def parse(cls, value) -> "Provider":
        """Return the Provider for *value*, raising UnsupportedProviderError otherwise."""
        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except ValueError:
            raise UnsupportedProviderError(str(value), tuple(p.value for p in cls)) from None


@dataclass(frozen=True)
class Message:
    role: str      # "system", "user" or "assistant"
    content: str

    def to_dict(self) -> dict:
        return {"role": self.role, "content": self.content}

    @classmethod
    def from_dict(cls, data) -> "Message":
        """Build a Message from caller-supplied history, validating role and content."""
        if not isinstance(data, dict):
            raise ValidationError(
                "Invalid previousMessages",
                details={"previousMessages": "Each message must be an object with role and content"},
            )
        role = data.get("role")
        content = data.get("content")
        if role not in ROLES:
            raise ValidationError(
                "Invalid previousMessages",
                details={"previousMessages": f"Unknown message role: {role!r}"},
            )
        if not isinstance(content, str):
            raise ValidationError(
                "Invalid previousMessages",
                details={"previousMessages": "Message content must be a string"},
            )
        return cls(role=role, content=content)


@dataclass(frozen=True)
class ProviderConfig:
    provider: Provider
    api_key: str = field(repr=False)
    model: str


@dataclass(frozen=True)
class GenerationResult:
    explanation: str
    code: str = ""

    def to_dict(self) -> dict:
        return {"explanation": self.explanation, "code": self.code}
