"""Llama catalog provider — Meta models on the Hugging Face hub.

Covers Llama 4, Llama 3.x (text and vision) and Code Llama.
"""

from __future__ import annotations

from src.model_providers.config import ProviderConfig, ProviderId
from src.model_providers.deepseek_provider import DeepSeekProvider


_LLAMA_LISTING: list[dict] = [
    {
        "modelId": "meta-llama/Llama-4-Scout-17B-16E-Instruct",
        "pipeline_tag": "image-text-to-text",
        "tags": ["llama4", "moe", "instruct"],
        "likes": "800",
        "downloads": "716k",
        "lastModified": "2025-04-05",
        "trendingScore": 0.93,
        "status": ["preview", "live"],
        "cardData": {
            "family": "Llama 4",
            "version": "4",
            "summary": "Natively multimodal 17B-active MoE with 16 experts",
        },
    },
    {
        "modelId": "meta-llama/Llama-4-Maverick-17B-128E-Instruct",
        "pipeline_tag": "image-text-to-text",
        "tags": ["llama4", "moe", "instruct"],
        "likes": "297",
        "downloads": "53.5k",
        "lastModified": "2025-04-05",
        "trendingScore": 0.84,
        "status": ["preview"],
        "cardData": {
            "family": "Llama 4",
            "version": "4",
            "summary": "17B-active MoE with 128 experts",
        },
    },
    {
        "modelId": "meta-llama/Llama-3.3-70B-Instruct",
        "pipeline_tag": "text-generation",
        "tags": ["llama3", "instruct", "large"],
        "likes": "2.26k",
        "downloads": "1.07M",
        "lastModified": "2024-12-06",
        "trendingScore": 0.9,
        "status": ["live"],
        "cardData": {
            "family": "Llama 3.3",
            "version": "3.3",
            "summary": "Powerful instruction-tuned model",
            "description": "Multilingual 70B model tuned for following instructions.",
        },
    },
    {
        "modelId": "meta-llama/Llama-3.2-11B-Vision-Instruct",
        "pipeline_tag": "image-text-to-text",
        "tags": ["llama3", "vision"],
        "likes": "1.42k",
        "downloads": "1.09M",
        "lastModified": "2024-09-25",
        "trendingScore": 0.8,
        "cardData": {
            "family": "Llama 3.2 Vision",
            "version": "3.2",
            "summary": "Image reasoning at 11B parameters",
            "modalities": {"input": ["text", "image", "vision"], "output": ["text"]},
        },
    },
    {
        "modelId": "meta-llama/Llama-3.2-1B-Instruct",
        "pipeline_tag": "text-generation",
        "tags": ["llama3", "on-device"],
        "likes": "887",
        "downloads": "2.26M",
        "lastModified": "2024-09-25",
        "cardData": {
            "family": "Llama 3.2",
            "version": "3.2",
            "summary": "Lightweight and deployable Llama",
        },
    },
    {
        "modelId": "meta-llama/Llama-3.1-405B-Instruct",
        "pipeline_tag": "text-generation",
        "tags": ["llama3", "instruct", "large"],
        "lastModified": "2024-07-23",
        "trendingScore": 0.91,
        "cardData": {
            "family": "Llama 3.1",
            "version": "3.1",
            "summary": "Meta's most powerful Llama 3.1",
        },
    },
    {
        "modelId": "meta-llama/CodeLlama-34b-Instruct-hf",
        "pipeline_tag": "code-generation",
        "tags": ["code-llama", "coding"],
        "lastModified": "2024-03-14",
        "cardData": {
            "family": "Code Llama",
            "version": "2",
            "summary": "Code synthesis and understanding",
        },
    },
]


class LlamaProvider(DeepSeekProvider):
    """Provider for Meta Llama models.

    Llama checkpoints are published on the same hub as DeepSeek's, so this
    inherits the hub-format normalization and only swaps the listing and
    the display-name cleanup.
    """

    provider_id = ProviderId.LLAMA

    def __init__(self, config: ProviderConfig):
        super().__init__(config)

    def raw_listing(self) -> list[dict]:
        return list(_LLAMA_LISTING)

    def _display_name(self, name: str) -> str:
        # "Llama-3.3-70B-Instruct" -> "Llama 3.3 70B Instruct"
        cleaned = name[:-3] if name.endswith("-hf") else name
        return cleaned.replace("-", " ")
