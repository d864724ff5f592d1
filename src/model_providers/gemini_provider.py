"""Google Gemini catalog provider."""

from __future__ import annotations

import re
from typing import Optional

from src.model_providers.base import BaseProvider
from src.model_providers.config import (
    ModelRecord,
    ProviderConfig,
    ProviderId,
    parse_capability_phrase,
)


# Shaped like the Gemini ``models.list`` resource: ``models/<id>`` names and
# free-text input/output phrases as they appear on the model overview page.
_GEMINI_LISTING: list[dict] = [
    {
        "name": "models/gemini-2.5-pro-preview-03-25",
        "displayName": "Gemini 2.5 Pro Preview",
        "description": "Enhanced thinking and reasoning, multimodal understanding, advanced coding",
        "longDescription": "Newest Gemini Pro model for complex reasoning over large inputs.",
        "inputs": "Audio, images, videos, and text",
        "outputs": "Text",
        "stage": "preview",
        "live": False,
        "releaseDate": "2025-03-25",
        "rankScore": 0.95,
        "inputTokenLimit": 1048576,
        "outputTokenLimit": 65536,
        "tags": ["flagship", "reasoning", "multimodal"],
    },
    {
        "name": "models/gemini-2.0-flash",
        "displayName": "Gemini 2.0 Flash",
        "description": "Next generation features, speed, thinking, and realtime streaming",
        "inputs": "Audio, images, videos, and text",
        "outputs": "Text, images (experimental), and audio (coming soon)",
        "stage": "stable",
        "live": True,
        "releaseDate": "2025-02-05",
        "rankScore": 0.91,
        "inputTokenLimit": 1048576,
        "outputTokenLimit": 8192,
        "tags": ["fast", "streaming"],
    },
    {
        "name": "models/gemini-2.0-flash-lite",
        "displayName": "Gemini 2.0 Flash-Lite",
        "description": "Cost efficiency and low latency",
        "inputs": "Audio, images, videos, and text",
        "outputs": "Text",
        "stage": "stable",
        "live": False,
        "releaseDate": "2025-02-25",
        "rankScore": 0.77,
        "inputTokenLimit": 1048576,
        "tags": ["budget"],
    },
    {
        "name": "models/gemini-2.0-flash-exp-image-generation",
        "displayName": "Gemini 2.0 Flash Image Generation",
        "description": "Conversational image generation and editing",
        "inputs": "Images and text",
        "outputs": "Text and images",
        "stage": "experimental",
        "live": False,
        "releaseDate": "2025-03-12",
        "tags": ["image-generation", "editing"],
    },
    {
        "name": "models/gemini-embedding-exp-03-07",
        "displayName": "Gemini Embedding",
        "description": "Measuring the relatedness of text strings",
        "inputs": "Text",
        "outputs": "Text embeddings",
        "stage": "experimental",
        "live": False,
        "rankScore": 0.62,
        "inputTokenLimit": 8192,
        "tags": ["embeddings", "retrieval"],
    },
    {
        "name": "models/gemini-1.5-pro",
        "displayName": "Gemini 1.5 Pro",
        "description": "Complex reasoning tasks requiring more intelligence",
        "inputs": "Audio, images, videos, code, and text",
        "outputs": "Text and code",
        "stage": "stable",
        "live": False,
        "releaseDate": "2024-05-14",
        "rankScore": 0.88,
        "inputTokenLimit": 2097152,
        "outputTokenLimit": 8192,
        "tags": ["long-context"],
    },
    {
        "name": "models/veo-2.0-generate-001",
        "displayName": "Veo 2",
        "description": "High quality video generation",
        "inputs": "Text, images",
        "outputs": "Video",
        "stage": "preview",
        "live": False,
        "tags": ["video-generation"],
    },
]

_VERSION_RE = re.compile(r"\d+(?:\.\d+)?")


class GeminiProvider(BaseProvider):
    """Provider for Google Gemini models (2.5 Pro, 2.0 Flash, embeddings, Veo).

    Input and output modalities arrive as prose ("Audio, images, videos,
    and text"), so they are parsed into capability tags; the release stage
    drives the preview/experimental flags.
    """

    provider_id = ProviderId.GEMINI

    def __init__(self, config: ProviderConfig):
        super().__init__(config)

    def raw_listing(self) -> list[dict]:
        return list(_GEMINI_LISTING)

    def normalize(self, raw: dict) -> ModelRecord:
        model_id = raw["name"].split("/")[-1]
        display_name = raw.get("displayName") or model_id
        stage = (raw.get("stage") or "stable").lower()
        return ModelRecord(
            id=model_id,
            provider=self.provider_id,
            display_name=display_name,
            family=display_name.split(" ")[0],
            version=self._parse_version(display_name),
            owner="Google",
            release_date=self._parse_date(raw.get("releaseDate")),
            is_preview=stage == "preview",
            is_experimental=stage == "experimental",
            is_live=bool(raw.get("live")),
            short_description=raw.get("description"),
            detailed_description=raw.get("longDescription"),
            input_capabilities=parse_capability_phrase(self._strip_notes(raw.get("inputs"))),
            output_capabilities=parse_capability_phrase(self._strip_notes(raw.get("outputs"))),
            tags=tuple(raw.get("tags", ())),
            popularity=raw.get("rankScore"),
            stats=self._stats(raw, ("inputTokenLimit", "outputTokenLimit")),
        )

    @staticmethod
    def _parse_version(display_name: str) -> Optional[str]:
        match = _VERSION_RE.search(display_name)
        return match.group(0) if match else None

    @staticmethod
    def _strip_notes(phrase: Optional[str]) -> Optional[str]:
        """Drop parenthesized notes such as "(experimental)"."""
        if not phrase:
            return phrase
        return re.sub(r"\([^)]*\)", "", phrase)
