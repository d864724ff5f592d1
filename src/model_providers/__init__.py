"""Multi-Provider Model Catalog Sources.

Provides a unified interface to per-vendor model listings (OpenAI,
Gemini, DeepSeek, Llama), normalizing each vendor's record shape into
one ``ModelRecord`` type behind an async fetch contract.
"""

from src.model_providers.config import (
    DEFAULT_LATENCY_SECONDS,
    PROVIDER_STYLES,
    CapabilityTag,
    ModelRecord,
    ProviderConfig,
    ProviderId,
    ProviderStyle,
    parse_capabilities,
    parse_capability_phrase,
)
from src.model_providers.exceptions import (
    CatalogError,
    ErrorCode,
    FetchFailedError,
    FetchFailureReason,
    UnknownProviderError,
)
from src.model_providers.base import BaseProvider, ProviderService
from src.model_providers.registry import ProviderRegistry, create_provider

__all__ = [
    # Config
    "ProviderId",
    "CapabilityTag",
    "ModelRecord",
    "ProviderConfig",
    "ProviderStyle",
    "PROVIDER_STYLES",
    "DEFAULT_LATENCY_SECONDS",
    "parse_capabilities",
    "parse_capability_phrase",
    # Errors
    "CatalogError",
    "ErrorCode",
    "FetchFailedError",
    "FetchFailureReason",
    "UnknownProviderError",
    # Base
    "BaseProvider",
    "ProviderService",
    # Registry
    "ProviderRegistry",
    "create_provider",
]
