"""Abstract base class for all catalog providers."""

from __future__ import annotations

import abc
import asyncio
import logging
import random
from datetime import datetime, timezone
from typing import Any, Optional, Protocol, runtime_checkable

from src.logging_config.performance import log_performance
from src.model_providers.config import ModelRecord, ProviderConfig, ProviderId
from src.model_providers.exceptions import FetchFailedError, FetchFailureReason

logger = logging.getLogger(__name__)


@runtime_checkable
class ProviderService(Protocol):
    """Protocol every catalog source must satisfy.

    Implementations: OpenAIProvider, GeminiProvider, DeepSeekProvider,
    LlamaProvider. A real backend only has to honour the same contract:
    resolve to this provider's records or raise ``FetchFailedError``.
    """

    provider_id: ProviderId

    async def fetch_models(self) -> list[ModelRecord]:
        """Fetch the provider's catalog as normalized records."""
        ...


class BaseProvider(abc.ABC):
    """Mock provider service backed by in-memory vendor-shaped listings.

    Subclasses handle:
    1. Supplying the raw listing in the vendor's own format
    2. Normalizing each raw entry into a ``ModelRecord``
    """

    provider_id: ProviderId

    def __init__(self, config: ProviderConfig):
        self.config = config
        self._rng = random.Random(config.seed)

    # ── Abstract methods ──────────────────────────────────────────────

    @abc.abstractmethod
    def raw_listing(self) -> list[dict]:
        """Return the vendor-native listing this provider serves."""

    @abc.abstractmethod
    def normalize(self, raw: dict) -> ModelRecord:
        """Convert one vendor-native entry into a ``ModelRecord``."""

    # ── Fetch ─────────────────────────────────────────────────────────

    @log_performance(threshold_ms=2000)
    async def fetch_models(self) -> list[ModelRecord]:
        """Simulate a network round trip and return normalized records.

        Raises:
            FetchFailedError: on injected failures or when the listing
                cannot be normalized.
        """
        if self.config.latency_seconds > 0:
            await asyncio.sleep(self.config.latency_seconds)

        if self.config.failure_rate and self._rng.random() < self.config.failure_rate:
            raise FetchFailedError(
                "Network error", provider=self.provider_id,
                reason=FetchFailureReason.NETWORK,
            )

        try:
            records = [self.normalize(raw) for raw in self.raw_listing()]
        except FetchFailedError:
            raise
        except (KeyError, TypeError, ValueError) as exc:
            raise FetchFailedError(
                f"Failed to decode {self.provider_id.value} listing: {exc}",
                provider=self.provider_id,
                reason=FetchFailureReason.DECODE,
            ) from exc
        except Exception as exc:
            raise FetchFailedError(
                f"Unexpected error reading {self.provider_id.value} listing: {exc}",
                provider=self.provider_id,
                reason=FetchFailureReason.UNKNOWN,
            ) from exc

        foreign = [r.id for r in records if r.provider != self.provider_id]
        if foreign:
            raise FetchFailedError(
                f"Listing contains records from another provider: {foreign}",
                provider=self.provider_id,
                reason=FetchFailureReason.DECODE,
            )

        logger.debug(f"{self.provider_id.value}: normalized {len(records)} records")
        return records

    # ── Shared helpers ────────────────────────────────────────────────

    @staticmethod
    def _parse_date(value: Any) -> Optional[datetime]:
        """Parse a Unix timestamp or ISO date. Missing values stay None."""
        if value is None or value == "" or value == 0:
            return None
        if isinstance(value, datetime):
            return value if value.tzinfo else value.replace(tzinfo=timezone.utc)
        if isinstance(value, (int, float)):
            return datetime.fromtimestamp(value, tz=timezone.utc)
        parsed = datetime.fromisoformat(str(value))
        return parsed if parsed.tzinfo else parsed.replace(tzinfo=timezone.utc)

    @staticmethod
    def _stats(raw: dict, keys: tuple) -> dict[str, str]:
        """Collect display stats from the raw entry, skipping missing ones."""
        return {key: str(raw[key]) for key in keys if raw.get(key) not in (None, "")}
