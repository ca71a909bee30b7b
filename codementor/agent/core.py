"""ChatAgent: the provider-agnostic conversation orchestrator."""

import logging
import threading
from dataclasses import dataclass

from ..config import Config
from ..errors import ConfigurationRequiredError, UpstreamError, ValidationError
from ..models.messages import GenerationResult, Message, Provider, ProviderConfig
from ..providers.base import LLMProvider
from ..providers.registry import ServiceRegistry
from .prompts import build_system_prompt

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ActiveSession:
    """The configuration in effect and the adapter built for it.

    Always replaced as a whole so readers never see a config paired with
    another config's adapter.
    """

    config: ProviderConfig
    adapter: LLMProvider


class ChatAgent:
    """Answers coding questions through whichever provider is currently configured.

    Conversation history is owned by the caller and passed in on every call;
    the only state kept here is the active session.
    """

    def __init__(self, registry: ServiceRegistry | None = None) -> None:
        self._registry = registry if registry is not None else ServiceRegistry()
        self._session: ActiveSession | None = None
        self._lock = threading.Lock()

    @classmethod
    def from_config(cls, config: Config) -> "ChatAgent":
        """Build an agent from environment settings, configuring the startup provider if set."""
        registry = ServiceRegistry(temperature=config.temperature, max_tokens=config.max_tokens)
        agent = cls(registry)
        if config.has_startup_provider:
            agent.update_config(config.ai_provider, config.ai_api_key, config.ai_model)
        return agent

    # ------------------------------------------------------------------
    # Session
    # ------------------------------------------------------------------

    @property
    def session(self) -> ActiveSession | None:
        return self._session

    @property
    def config(self) -> ProviderConfig | None:
        session = self._session
        return session.config if session else None

    @property
    def is_configured(self) -> bool:
        return self._session is not None

    @property
    def registry(self) -> ServiceRegistry:
        return self._registry

    def update_config(self, provider: str, api_key: str, model: str) -> ProviderConfig:
        """Validate a new provider configuration and make it the active session.

        Raises:
            ValidationError: A field is missing; ``details`` names each one.
            UnsupportedProviderError: *provider* is not a known identifier.
            AdapterInitError: The adapter could not be built.

        The previous session stays in effect when any of these is raised.
        """
        missing = {}
        if not api_key:
            missing["apiKey"] = "API key is required"
        if not provider:
            missing["provider"] = "Provider is required"
        if not model:
            missing["model"] = "Model name is required"
        if missing:
            raise ValidationError("Invalid configuration", details=missing)

        config = ProviderConfig(provider=Provider.parse(provider), api_key=api_key, model=model)
        adapter = self._registry.get_adapter(config.provider, config)

        session = ActiveSession(config=config, adapter=adapter)
        with self._lock:
            self._session = session
        logger.info("Active provider: %s / model: %s", config.provider.value, config.model)
        return config

    # ------------------------------------------------------------------
    # Messaging
    # ------------------------------------------------------------------

    def build_messages(self, user_text: str, language: str, history=()) -> list:
        """Return system prompt, then *history* in order, then the new user turn."""
        messages = [Message(role="system", content=build_system_prompt(language))]
        messages.extend(history)
        messages.append(Message(role="user", content=user_text))
        return messages

    def _prepare(self, user_text: str, language: str, history) -> tuple:
        if not user_text or not language:
            raise ValidationError("Message and language are required")
        session = self._session
        if session is None:
            raise ConfigurationRequiredError()
        return session, self.build_messages(user_text, language, history)

    def send_message(self, user_text: str, language: str, history=()) -> GenerationResult:
        """Send one user turn and return the provider's split reply.

        Args:
            user_text: The new question from the user.
            language: Programming language the conversation is about.
            history: Earlier Message objects, oldest first.

        Raises:
            ValidationError: *user_text* or *language* is empty.
            ConfigurationRequiredError: No provider has been configured.
            UpstreamError: The provider call failed.
        """
        session, messages = self._prepare(user_text, language, history)
        try:
            return session.adapter.generate(messages, language)
        except UpstreamError:
            logger.warning(
                "Provider call failed (%s / %s)",
                session.config.provider.value,
                session.config.model,
            )
            raise

    async def asend_message(self, user_text: str, language: str, history=()) -> GenerationResult:
        """Async equivalent of ``send_message()``."""
        session, messages = self._prepare(user_text, language, history)
        try:
            return await session.adapter.agenerate(messages, language)
        except UpstreamError:
            logger.warning(
                "Provider call failed (%s / %s)",
                session.config.provider.value,
                session.config.model,
            )
            raise
