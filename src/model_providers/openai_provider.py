"""OpenAI (GPT) catalog provider."""

from __future__ import annotations

from src.model_providers.base import BaseProvider
from src.model_providers.config import (
    ModelRecord,
    ProviderConfig,
    ProviderId,
    parse_capabilities,
)


# Shaped like ``GET /v1/models`` entries, extended with catalog metadata.
_OPENAI_LISTING: list[dict] = [
    {
        "id": "gpt-4o",
        "object": "model",
        "created": 1715558400,
        "owned_by": "openai",
        "display_name": "GPT-4o",
        "family": "GPT",
        "version": "4o",
        "summary": "Fastest, most capable GPT-4 model",
        "description": "Omni-modal flagship handling text, image and audio with streaming support.",
        "modalities": {"input": ["text", "image", "audio"], "output": ["text", "image", "audio"]},
        "tags": ["multimodal", "fast", "flagship"],
        "lifecycle": {"preview": True, "experimental": False, "live": True},
        "popularity": 0.98,
        "context_window": "128K",
        "likes": "999K",
    },
    {
        "id": "gpt-4.1-nano",
        "object": "model",
        "created": 1744588800,
        "owned_by": "openai",
        "display_name": "GPT-4.1 nano",
        "family": "GPT",
        "version": "4.1",
        "summary": "Fastest, most cost-effective GPT-4.1 model",
        "description": "Small GPT-4.1 variant tuned for classification and autocompletion.",
        "modalities": {"input": ["text", "image"], "output": ["text"]},
        "tags": ["small", "low-latency"],
        "lifecycle": {"preview": False, "experimental": False, "live": False},
        "popularity": 0.74,
        "context_window": "1M",
    },
    {
        "id": "o3-mini",
        "object": "model",
        "created": 1738281600,
        "owned_by": "openai",
        "display_name": "o3-mini",
        "family": "o-series",
        "version": "3",
        "summary": "Fast, flexible reasoning model",
        "description": "Small reasoning model with adjustable reasoning effort.",
        "modalities": {"input": ["text"], "output": ["text"]},
        "tags": ["reasoning", "coding", "stem"],
        "lifecycle": {"preview": False, "experimental": False, "live": False},
        "popularity": 0.86,
        "context_window": "200K",
    },
    {
        "id": "gpt-4o-realtime-preview",
        "object": "model",
        "created": 1727654400,
        "owned_by": "openai",
        "display_name": "GPT-4o Realtime",
        "family": "GPT",
        "version": "4o",
        "summary": "Realtime speech-to-speech model",
        "description": "Low-latency audio in and out over a persistent session.",
        "modalities": {"input": ["text", "audio"], "output": ["text", "speech"]},
        "tags": ["realtime", "voice"],
        "lifecycle": {"preview": True, "experimental": False, "live": True},
        "popularity": 0.81,
    },
    {
        "id": "gpt-4o-mini-tts",
        "object": "model",
        "created": 1742256000,
        "owned_by": "openai",
        "display_name": "GPT-4o mini TTS",
        "family": "GPT",
        "version": "4o-mini",
        "summary": "Text-to-speech model powered by GPT-4o mini",
        "modalities": {"input": ["text"], "output": ["audio"]},
        "tags": ["tts", "voice"],
        "lifecycle": {"preview": False, "experimental": False, "live": False},
        "popularity": None,
    },
    {
        "id": "dall-e-3",
        "object": "model",
        "created": 1698796800,
        "owned_by": "system",
        "display_name": "DALL-E 3",
        "family": "DALL-E",
        "version": "3",
        "summary": "Image generation from natural-language prompts",
        "modalities": {"input": ["text"], "output": ["image"]},
        "tags": ["image-generation"],
        "lifecycle": {"preview": False, "experimental": False, "live": False},
        "popularity": 0.79,
    },
    {
        "id": "text-embedding-3-large",
        "object": "model",
        "created": None,
        "owned_by": "system",
        "display_name": "text-embedding-3-large",
        "family": "Embeddings",
        "version": "3",
        "summary": "Most capable embedding model",
        "modalities": {"input": ["text"], "output": ["embeddings"]},
        "tags": ["embeddings", "search"],
        "lifecycle": {"preview": False, "experimental": False, "live": False},
        "dimensions": "3072",
    },
]

_OWNERS = {"openai": "OpenAI", "system": "OpenAI"}


class OpenAIProvider(BaseProvider):
    """Provider for OpenAI models (GPT-4o, GPT-4.1, o-series, DALL-E).

    Listing entries follow the ``/v1/models`` shape: a Unix ``created``
    timestamp and ``owned_by`` field, plus a ``modalities`` block.
    """

    provider_id = ProviderId.OPENAI

    def __init__(self, config: ProviderConfig):
        super().__init__(config)

    def raw_listing(self) -> list[dict]:
        return list(_OPENAI_LISTING)

    def normalize(self, raw: dict) -> ModelRecord:
        modalities = raw.get("modalities") or {}
        lifecycle = raw.get("lifecycle") or {}
        owned_by = raw.get("owned_by")
        return ModelRecord(
            id=raw["id"],
            provider=self.provider_id,
            display_name=raw.get("display_name") or raw["id"],
            family=raw.get("family"),
            version=raw.get("version"),
            owner=_OWNERS.get(owned_by, owned_by),
            release_date=self._parse_date(raw.get("created")),
            is_preview=bool(lifecycle.get("preview")),
            is_experimental=bool(lifecycle.get("experimental")),
            is_live=bool(lifecycle.get("live")),
            short_description=raw.get("summary"),
            detailed_description=raw.get("description"),
            input_capabilities=parse_capabilities(modalities.get("input", ())),
            output_capabilities=parse_capabilities(modalities.get("output", ())),
            tags=tuple(raw.get("tags", ())),
            popularity=raw.get("popularity"),
            stats=self._stats(raw, ("context_window", "likes", "dimensions")),
        )
