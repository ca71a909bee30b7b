"""LLM completion via litellm: any "<vendor>/<model>" string through one gateway."""

import logging

import litellm

from ..models.messages import GenerationResult, Provider
from .base import LLMProvider

logger = logging.getLogger(__name__)


class LiteLLMProvider(LLMProvider):
    """Routes requests through litellm, which translates system turns per vendor.

    The configured model must be a litellm model string, e.g.
    "anthropic/claude-sonnet-4-5" or "openai/gpt-4o".
    """

    provider = Provider.LITELLM
    display_name = "LiteLLM"

    def _request(self, messages: list) -> dict:
        return {
            "model": self.model_name,
            "messages": [m.to_dict() for m in messages],
            "api_key": self._config.api_key,
            "temperature": self._temperature,
            "max_tokens": self._max_tokens,
        }

    @staticmethod
    def _reply_text(response):
        choices = response.choices
        return choices[0].message.content if choices else None

    def generate(self, messages: list, language: str) -> GenerationResult:
        logger.debug("litellm request: %d messages (%s)", len(messages), language)
        try:
            response = litellm.completion(**self._request(messages))
        except Exception as exc:
            raise self._upstream_error(exc) from exc
        return self._finish(self._reply_text(response))

    async def agenerate(self, messages: list, language: str) -> GenerationResult:
        logger.debug("litellm async request: %d messages (%s)", len(messages), language)
        try:
            response = await litellm.acompletion(**self._request(messages))
        except Exception as exc:
            raise self._upstream_error(exc) from exc
        return self._finish(self._reply_text(response))
