"""DeepSeek catalog provider — Hugging Face hub listing format."""

from __future__ import annotations

from typing import Optional

from src.model_providers.base import BaseProvider
from src.model_providers.config import (
    CapabilityTag,
    ModelRecord,
    ProviderConfig,
    ProviderId,
    parse_capabilities,
)


# Hub pipeline tag -> (input capabilities, output capabilities)
PIPELINE_CAPABILITIES: dict[str, tuple[tuple[str, ...], tuple[str, ...]]] = {
    "text-generation": (("text",), ("text",)),
    "image-text-to-text": (("text", "image"), ("text",)),
    "image-to-text": (("image",), ("text",)),
    "text-to-image": (("text",), ("image",)),
    "feature-extraction": (("text",), ("embedding",)),
    "any-to-any": (("multi-modal",), ("multi-modal",)),
    "code-generation": (("text", "code"), ("code",)),
}


# Shaped like ``GET /api/models?author=deepseek-ai`` hub results.
_DEEPSEEK_LISTING: list[dict] = [
    {
        "modelId": "deepseek-ai/DeepSeek-R1",
        "pipeline_tag": "text-generation",
        "tags": ["reasoning", "transformers", "conversational"],
        "likes": "12k",
        "downloads": "1.73M",
        "lastModified": "2025-01-20",
        "trendingScore": 0.97,
        "status": ["live"],
        "cardData": {
            "family": "DeepSeek-R1",
            "version": "R1",
            "summary": "Reasoning model trained with large-scale reinforcement learning",
            "description": "First-generation reasoning model rivaling frontier models on math, code and reasoning.",
        },
    },
    {
        "modelId": "deepseek-ai/DeepSeek-V3",
        "pipeline_tag": "text-generation",
        "tags": ["moe", "transformers", "conversational"],
        "likes": "3.9k",
        "downloads": "423k",
        "lastModified": "2024-12-26",
        "trendingScore": 0.89,
        "cardData": {
            "family": "DeepSeek-V3",
            "version": "V3",
            "summary": "671B-parameter Mixture-of-Experts language model",
        },
    },
    {
        "modelId": "deepseek-ai/DeepSeek-Coder-V2-Instruct",
        "pipeline_tag": "code-generation",
        "tags": ["deepseek-coder", "code", "instruct"],
        "likes": "610",
        "downloads": "98.1k",
        "lastModified": "2024-06-17",
        "trendingScore": 0.82,
        "status": ["preview"],
        "cardData": {
            "family": "DeepSeek-Coder",
            "version": "V2",
            "summary": "Open code model comparable to closed-source models on code tasks",
        },
    },
    {
        "modelId": "deepseek-ai/deepseek-vl2",
        "pipeline_tag": "image-text-to-text",
        "tags": ["vision-language", "moe"],
        "likes": "326",
        "downloads": "17.6k",
        "lastModified": "2024-12-13",
        "cardData": {
            "family": "DeepSeek-VL",
            "version": "2",
            "summary": "Vision and language, high quality",
            "modalities": {"input": ["text", "image", "vision"], "output": ["text"]},
        },
    },
    {
        "modelId": "deepseek-ai/Janus-Pro-7B",
        "pipeline_tag": "any-to-any",
        "tags": ["multimodal", "unified"],
        "likes": "3.3k",
        "downloads": "151k",
        "lastModified": "2025-01-27",
        "trendingScore": 0.85,
        "status": ["experimental"],
        "cardData": {
            "family": "Janus",
            "version": "Pro",
            "summary": "Unified multimodal understanding and generation",
            "modalities": {"input": ["text", "image"], "output": ["text", "image"]},
        },
    },
    {
        "modelId": "deepseek-ai/DeepSeek-Prover-V1.5-RL",
        "pipeline_tag": "theorem-proving",
        "tags": ["lean4", "math"],
        "likes": "59",
        "downloads": "571",
        "lastModified": None,
        "cardData": {
            "family": "DeepSeek-Prover",
            "version": "V1.5",
            "summary": "Formal theorem proving in Lean 4",
        },
    },
]

HUB_ORGANIZATIONS = {
    "deepseek-ai": "DeepSeek",
    "meta-llama": "Meta",
}


class DeepSeekProvider(BaseProvider):
    """Provider for DeepSeek models (R1, V3, Coder, VL, Janus).

    DeepSeek publishes on the Hugging Face hub, so entries carry a
    ``modelId`` path, a ``pipeline_tag`` and string-formatted counters.
    Capabilities come from ``cardData.modalities`` when present and from
    the pipeline tag otherwise.
    """

    provider_id = ProviderId.DEEPSEEK

    def __init__(self, config: ProviderConfig):
        super().__init__(config)

    def raw_listing(self) -> list[dict]:
        return list(_DEEPSEEK_LISTING)

    def normalize(self, raw: dict) -> ModelRecord:
        model_id = raw["modelId"]
        organization, _, name = model_id.rpartition("/")
        card = raw.get("cardData") or {}
        inputs, outputs = self._capabilities(raw.get("pipeline_tag"), card.get("modalities"))
        status = set(raw.get("status") or ())
        return ModelRecord(
            id=model_id,
            provider=self.provider_id,
            display_name=self._display_name(name or model_id),
            family=card.get("family"),
            version=card.get("version"),
            owner=HUB_ORGANIZATIONS.get(organization, organization or None),
            release_date=self._parse_date(raw.get("lastModified")),
            is_preview="preview" in status,
            is_experimental="experimental" in status,
            is_live="live" in status,
            short_description=card.get("summary"),
            detailed_description=card.get("description"),
            input_capabilities=inputs,
            output_capabilities=outputs,
            tags=tuple(raw.get("tags", ())),
            popularity=raw.get("trendingScore"),
            stats=self._stats(raw, ("likes", "downloads", "pipeline_tag")),
        )

    def _display_name(self, name: str) -> str:
        return name

    @staticmethod
    def _capabilities(
        pipeline_tag: Optional[str], modalities: Optional[dict]
    ) -> tuple[tuple, tuple]:
        if modalities:
            return (
                parse_capabilities(modalities.get("input", ())),
                parse_capabilities(modalities.get("output", ())),
            )
        if pipeline_tag in PIPELINE_CAPABILITIES:
            inputs, outputs = PIPELINE_CAPABILITIES[pipeline_tag]
            return parse_capabilities(inputs), parse_capabilities(outputs)
        return (CapabilityTag.OTHER,), (CapabilityTag.OTHER,)
