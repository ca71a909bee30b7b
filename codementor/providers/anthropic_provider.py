"""Anthropic (Claude) LLM provider."""

import logging

from ..models.messages import GenerationResult, Provider
from .base import LLMProvider

logger = logging.getLogger(__name__)


def to_anthropic_messages(messages: list) -> list:
    """Map canonical messages onto the two roles the Messages API accepts.

    A system message becomes its own user turn at the same position; it is
    not merged into a neighbouring message.
    """
    return [
        {
            "role": "assistant" if m.role == "assistant" else "user",
            "content": m.content,
        }
        for m in messages
    ]


class AnthropicProvider(LLMProvider):
    provider = Provider.ANTHROPIC
    display_name = "Anthropic"

    def __init__(self, config, **options) -> None:
        try:
            import anthropic
        except ImportError as exc:
            raise ImportError(
                "Install the 'anthropic' package to use the Anthropic provider: "
                "pip install anthropic"
            ) from exc

        super().__init__(config, **options)
        self._client = anthropic.Anthropic(api_key=config.api_key)
        self._async_client = anthropic.AsyncAnthropic(api_key=config.api_key)

    def _request(self, messages: list) -> dict:
        return {
            "model": self.model_name,
            "messages": to_anthropic_messages(messages),
            "temperature": self._temperature,
            "max_tokens": self._max_tokens,
        }

    @staticmethod
    def _reply_text(response):
        return next(
            (block.text for block in response.content if getattr(block, "type", None) == "text"),
            None,
        )

    def generate(self, messages: list, language: str) -> GenerationResult:
        logger.debug("Anthropic request: %d messages (%s)", len(messages), language)
        try:
            response = self._client.messages.create(**self._request(messages))
        except Exception as exc:
            raise self._upstream_error(exc) from exc
        return self._finish(self._reply_text(response))

    async def agenerate(self, messages: list, language: str) -> GenerationResult:
        logger.debug("Anthropic async request: %d messages (%s)", len(messages), language)
        try:
            response = await self._async_client.messages.create(**self._request(messages))
        except Exception as exc:
            raise self._upstream_error(exc) from exc
        return self._finish(self._reply_text(response))
