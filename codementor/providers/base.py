"""Abstract base class for LLM providers."""

import logging
from abc import ABC, abstractmethod

from ..agent.response_parser import split_explanation_and_code
from ..errors import UpstreamError
from ..models.messages import GenerationResult, Provider, ProviderConfig

logger = logging.getLogger(__name__)

DEFAULT_TEMPERATURE = 0.7
# Large enough for a full explanation plus a code block without truncation.
DEFAULT_MAX_TOKENS = 8000


class LLMProvider(ABC):
    """Uniform interface for any LLM backend.

    An instance wraps one credential/model pair and holds no per-call state,
    so a single instance may serve concurrent requests.
    """

    provider: Provider
    display_name: str

    def __init__(
        self,
        config: ProviderConfig,
        temperature: float = DEFAULT_TEMPERATURE,
        max_tokens: int = DEFAULT_MAX_TOKENS,
    ) -> None:
        self._config = config
        self._temperature = temperature
        self._max_tokens = max_tokens

    @abstractmethod
    def generate(self, messages: list, language: str) -> GenerationResult:
        """Send one request and return the normalized reply.

        Args:
            messages: Ordered list of Message objects (system/user/assistant).
            language: Programming language the conversation is about.

        Returns:
            GenerationResult with explanation and (possibly empty) code.

        Raises:
            UpstreamError: The request failed or the reply had no text.
        """

    @abstractmethod
    async def agenerate(self, messages: list, language: str) -> GenerationResult:
        """Async equivalent of ``generate()``."""

    @property
    def config(self) -> ProviderConfig:
        return self._config

    @property
    def model_name(self) -> str:
        """Model identifier sent to the provider."""
        return self._config.model

    def _upstream_error(self, exc: Exception) -> UpstreamError:
        logger.error("%s API error (model %s): %s", self.display_name, self.model_name, exc)
        return UpstreamError(str(exc) or f"{self.display_name} request failed", self.provider.value)

    def _finish(self, content) -> GenerationResult:
        """Split the reply text, failing when the provider sent none."""
        if not content:
            logger.error("%s returned an empty reply (model %s)", self.display_name, self.model_name)
            raise UpstreamError(f"No response from {self.display_name}", self.provider.value)
        return split_explanation_and_code(content)
