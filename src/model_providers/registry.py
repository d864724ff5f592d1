"""Provider registry — create, cache, and look up provider services."""

from __future__ import annotations

import logging
from typing import Iterable, Optional

from src.model_providers.base import BaseProvider, ProviderService
from src.model_providers.config import ModelRecord, ProviderConfig, ProviderId
from src.model_providers.exceptions import UnknownProviderError

logger = logging.getLogger(__name__)


# ── Factory ───────────────────────────────────────────────────────────


def create_provider(config: ProviderConfig) -> BaseProvider:
    """Instantiate a provider from its config."""
    if config.provider == ProviderId.OPENAI:
        from src.model_providers.openai_provider import OpenAIProvider
        return OpenAIProvider(config)
    elif config.provider == ProviderId.GEMINI:
        from src.model_providers.gemini_provider import GeminiProvider
        return GeminiProvider(config)
    elif config.provider == ProviderId.DEEPSEEK:
        from src.model_providers.deepseek_provider import DeepSeekProvider
        return DeepSeekProvider(config)
    elif config.provider == ProviderId.LLAMA:
        from src.model_providers.llama_provider import LlamaProvider
        return LlamaProvider(config)
    else:
        raise UnknownProviderError(config.provider)


# ── Registry ──────────────────────────────────────────────────────────


class ProviderRegistry:
    """Resolves a provider id to exactly one service.

    Every ``ProviderId`` is configured on construction, so resolution is
    total; asking for anything else is a programming error.

    Usage::

        registry = ProviderRegistry(delay_scale=0.0)
        records = await registry.fetch(ProviderId.GEMINI)
    """

    def __init__(
        self,
        configs: Optional[Iterable[ProviderConfig]] = None,
        delay_scale: float = 1.0,
    ):
        self._configs: dict[ProviderId, ProviderConfig] = {
            pid: ProviderConfig.default_for(pid, delay_scale) for pid in ProviderId
        }
        self._services: dict[ProviderId, ProviderService] = {}
        for config in configs or ():
            self.configure(config)

    def configure(self, config: ProviderConfig) -> None:
        """Register or update a provider config."""
        self._configs[config.provider] = config
        # Invalidate cached instance
        self._services.pop(config.provider, None)

    def register(self, provider: ProviderId, service: ProviderService) -> None:
        """Install a ready-made service, replacing the mock one."""
        if not isinstance(provider, ProviderId):
            raise UnknownProviderError(provider)
        if not isinstance(service, ProviderService):
            raise TypeError(f"{service!r} does not implement fetch_models()")
        self._services[provider] = service

    def get_config(self, provider: ProviderId) -> ProviderConfig:
        """Get stored config for a provider."""
        if provider not in self._configs:
            raise UnknownProviderError(provider)
        return self._configs[provider]

    def get_provider(self, provider: ProviderId) -> ProviderService:
        """Get the cached service for a provider, creating it on first use."""
        if provider not in self._services:
            self._services[provider] = create_provider(self.get_config(provider))
        return self._services[provider]

    async def fetch(self, provider: ProviderId) -> list[ModelRecord]:
        """Fetch the catalog of one provider.

        Raises:
            FetchFailedError: when the service fails.
            UnknownProviderError: when ``provider`` is not a ``ProviderId``.
        """
        service = self.get_provider(provider)
        return await service.fetch_models()

    def list_configured(self) -> list[ProviderId]:
        """Return provider ids in declaration order."""
        return [pid for pid in ProviderId if pid in self._configs]
