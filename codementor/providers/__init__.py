"""LLM provider registry."""

from ..models.messages import Provider, ProviderConfig
from .base import DEFAULT_MAX_TOKENS, DEFAULT_TEMPERATURE, LLMProvider
from .anthropic_provider import AnthropicProvider
from .openai_provider import OpenAIProvider
from .litellm_provider import LiteLLMProvider
from .registry import ServiceRegistry

__all__ = [
    "LLMProvider",
    "AnthropicProvider",
    "OpenAIProvider",
    "LiteLLMProvider",
    "ServiceRegistry",
    "AVAILABLE_MODELS",
    "PROVIDER_CLASSES",
    "create_provider",
]

PROVIDER_CLASSES = {
    Provider.OPENAI: OpenAIProvider,
    Provider.ANTHROPIC: AnthropicProvider,
    Provider.LITELLM: LiteLLMProvider,
}

# Informational only; any model name the provider accepts may be configured.
AVAILABLE_MODELS = {
    Provider.OPENAI.value: ["Examples: gpt-4o, gpt-4o-mini, gpt-4-turbo"],
    Provider.ANTHROPIC.value: ["Examples: claude-opus-4-6, claude-sonnet-4-5"],
    Provider.LITELLM.value: ["Examples: anthropic/claude-sonnet-4-5, openai/gpt-4o, gemini/gemini-2.0-flash"],
}


def create_provider(
    config: ProviderConfig,
    temperature: float = DEFAULT_TEMPERATURE,
    max_tokens: int = DEFAULT_MAX_TOKENS,
) -> LLMProvider:
    """Instantiate the correct LLMProvider for *config*.

    Args:
        config: Provider, API key and model to use.
        temperature: Sampling temperature sent with every request.
        max_tokens: Upper bound on output tokens per reply.

    Returns:
        Configured LLMProvider instance.
    """
    provider = Provider.parse(config.provider)
    return PROVIDER_CLASSES[provider](config, temperature=temperature, max_tokens=max_tokens)
