"""Shared pytest fixtures."""

from unittest.mock import MagicMock

import pytest

from codementor.agent.core import ChatAgent
from codementor.models.messages import GenerationResult, Message, Provider, ProviderConfig
from codementor.providers.base import LLMProvider
from codementor.providers.registry import ServiceRegistry


@pytest.fixture
def openai_config() -> ProviderConfig:
    return ProviderConfig(provider=Provider.OPENAI, api_key="sk-test-openai-0001", model="gpt-4o")


@pytest.fixture
def anthropic_config() -> ProviderConfig:
    return ProviderConfig(
        provider=Provider.ANTHROPIC, api_key="sk-ant-test-0001", model="claude-sonnet-4-5"
    )


@pytest.fixture
def litellm_config() -> ProviderConfig:
    return ProviderConfig(
        provider=Provider.LITELLM, api_key="sk-test-gateway-0001", model="openai/gpt-4o"
    )


@pytest.fixture
def history() -> list:
    """A short earlier exchange, oldest first."""
    return [
        Message(role="user", content="a"),
        Message(role="assistant", content="b"),
    ]


def _fake_adapter(config: ProviderConfig, **options) -> MagicMock:
    adapter = MagicMock(spec=LLMProvider)
    adapter.config = config
    adapter.model_name = config.model
    adapter.generate.return_value = GenerationResult(explanation="Use a loop.", code="for x in y: pass")
    adapter.agenerate.return_value = GenerationResult(explanation="Use a loop.", code="for x in y: pass")
    adapter.options = options
    return adapter


@pytest.fixture
def fake_factory() -> MagicMock:
    """Adapter factory that builds MagicMock adapters instead of SDK clients."""
    return MagicMock(side_effect=_fake_adapter)


@pytest.fixture
def registry(fake_factory) -> ServiceRegistry:
    return ServiceRegistry(factory=fake_factory)


@pytest.fixture
def agent(registry) -> ChatAgent:
    return ChatAgent(registry)


@pytest.fixture
def configured_agent(agent) -> ChatAgent:
    agent.update_config("openai", "sk-test-openai-0001", "gpt-4o")
    return agent
