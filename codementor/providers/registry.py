"""Per-process cache holding at most one live adapter per provider."""

import logging
import threading
from collections.abc import Callable

from ..errors import AdapterInitError, ValidationError
from ..models.messages import Provider, ProviderConfig
from .base import LLMProvider

logger = logging.getLogger(__name__)


class ServiceRegistry:
    """Builds provider adapters on first use and hands back the same instance afterwards.

    The cache is keyed by provider alone. Asking again for a cached provider
    with a different API key or model returns the existing adapter unchanged;
    call ``reset_all()`` first to rebuild it with new settings.
    """

    def __init__(
        self,
        factory: Callable[..., LLMProvider] | None = None,
        **options,
    ) -> None:
        if factory is None:
            from . import create_provider

            factory = create_provider
        self._factory = factory
        self._options = options
        self._adapters: dict[Provider, LLMProvider] = {}
        self._lock = threading.Lock()

    def get_adapter(self, provider, config: ProviderConfig) -> LLMProvider:
        """Return the cached adapter for *provider*, building it from *config* if absent.

        Raises:
            UnsupportedProviderError: *provider* is not a known identifier.
            ValidationError: *config* names a different provider than *provider*.
            AdapterInitError: The adapter could not be constructed.
        """
        provider = Provider.parse(provider)
        config_provider = Provider.parse(config.provider)
        if config_provider is not provider:
            raise ValidationError(
                "Provider mismatch",
                details={"provider": f"Config is for {config_provider.value}, not {provider.value}"},
            )
        with self._lock:
            adapter = self._adapters.get(provider)
            if adapter is not None:
                if adapter.config != config:
                    logger.warning(
                        "Reusing cached %s adapter (model %s) for a different configuration "
                        "(model %s); reset the registry to apply new settings",
                        provider.value,
                        adapter.model_name,
                        config.model,
                    )
                return adapter

            try:
                adapter = self._factory(config, **self._options)
            except Exception as exc:
                logger.exception("Failed to initialize %s adapter", provider.value)
                raise AdapterInitError(provider.value, str(exc)) from exc
            self._adapters[provider] = adapter
            logger.info("Initialized %s adapter (model %s)", provider.value, adapter.model_name)
            return adapter

    def reset_all(self) -> None:
        """Drop every cached adapter."""
        with self._lock:
            self._adapters.clear()
        logger.info("Provider registry reset")

    def cached_providers(self) -> list[Provider]:
        with self._lock:
            return list(self._adapters)
