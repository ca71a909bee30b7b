"""OpenAI (GPT) LLM provider."""

import logging

from ..models.messages import GenerationResult, Provider
from .base import LLMProvider

logger = logging.getLogger(__name__)


class OpenAIProvider(LLMProvider):
    provider = Provider.OPENAI
    display_name = "OpenAI"

    def __init__(self, config, **options) -> None:
        try:
            from openai import AsyncOpenAI, OpenAI
        except ImportError as exc:
            raise ImportError(
                "Install the 'openai' package to use the OpenAI provider: "
                "pip install openai"
            ) from exc

        super().__init__(config, **options)
        self._client = OpenAI(api_key=config.api_key)
        self._async_client = AsyncOpenAI(api_key=config.api_key)

    def _request(self, messages: list) -> dict:
        # Chat completions accept the system role natively.
        return {
            "model": self.model_name,
            "messages": [m.to_dict() for m in messages],
            "temperature": self._temperature,
            "max_tokens": self._max_tokens,
        }

    @staticmethod
    def _reply_text(completion):
        choices = completion.choices
        return choices[0].message.content if choices else None

    def generate(self, messages: list, language: str) -> GenerationResult:
        logger.debug("OpenAI request: %d messages (%s)", len(messages), language)
        try:
            completion = self._client.chat.completions.create(**self._request(messages))
        except Exception as exc:
            raise self._upstream_error(exc) from exc
        return self._finish(self._reply_text(completion))

    async def agenerate(self, messages: list, language: str) -> GenerationResult:
        logger.debug("OpenAI async request: %d messages (%s)", len(messages), language)
        try:
            completion = await self._async_client.chat.completions.create(
                **self._request(messages)
            )
        except Exception as exc:
            raise self._upstream_error(exc) from exc
        return self._finish(self._reply_text(completion))
