"""Pytest configuration and shared fixtures."""

import sys
from datetime import datetime, timezone
from pathlib import Path

import pytest

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))


@pytest.fixture(autouse=True)
def reset_config():
    """Disable mock latency and failures; restore config after each test."""
    import config

    original_delay = config.MOCK_DELAY_SCALE
    original_failures = config.FAILURE_RATES.copy()
    original_provider = config.DEFAULT_PROVIDER
    original_sort = config.DEFAULT_SORT

    config.MOCK_DELAY_SCALE = 0.0
    config.FAILURE_RATES = {name: 0.0 for name in original_failures}

    yield

    config.MOCK_DELAY_SCALE = original_delay
    config.FAILURE_RATES = original_failures
    config.DEFAULT_PROVIDER = original_provider
    config.DEFAULT_SORT = original_sort


@pytest.fixture
def registry():
    """Provider registry with every mock service at zero latency."""
    from src.model_providers.registry import ProviderRegistry

    return ProviderRegistry(delay_scale=0.0)


@pytest.fixture
def make_record():
    """Factory for ModelRecord instances with sensible defaults."""
    from src.model_providers.config import ModelRecord, ProviderId, parse_capabilities

    def _make(
        record_id="model",
        provider=ProviderId.OPENAI,
        display_name=None,
        inputs=("text",),
        outputs=("text",),
        popularity=None,
        released=None,
        **kwargs,
    ):
        return ModelRecord(
            id=record_id,
            provider=provider,
            display_name=display_name or record_id,
            input_capabilities=parse_capabilities(inputs),
            output_capabilities=parse_capabilities(outputs),
            popularity=popularity,
            release_date=(
                datetime.fromisoformat(released).replace(tzinfo=timezone.utc)
                if released else None
            ),
            **kwargs,
        )

    return _make
