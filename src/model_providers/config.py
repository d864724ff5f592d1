"""Configuration types for the multi-provider model catalog."""

import enum
import logging
import re
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Iterable, Mapping, Optional

logger = logging.getLogger(__name__)


class ProviderId(enum.Enum):
    """Catalog providers the browser can switch between."""

    OPENAI = "openai"
    GEMINI = "gemini"
    DEEPSEEK = "deepseek"
    LLAMA = "llama"

    @classmethod
    def parse(cls, value: "ProviderId | str") -> "ProviderId":
        """Resolve a provider from an enum member or its string value."""
        if isinstance(value, ProviderId):
            return value
        return cls(str(value).strip().lower())


class CapabilityTag(enum.Enum):
    """Closed set of capability classifiers.

    Anything a provider reports outside this set is folded into ``OTHER``.
    """

    TEXT = "text"
    IMAGE = "image"
    AUDIO = "audio"
    VIDEO = "video"
    CODE = "code"
    EMBEDDING = "embedding"
    MULTI_MODAL = "multi-modal"
    VISION = "vision"
    OTHER = "other"

    @property
    def label(self) -> str:
        return _CAPABILITY_LABELS[self]

    @property
    def icon(self) -> str:
        return _CAPABILITY_ICONS[self]

    @classmethod
    def parse(cls, value: "CapabilityTag | str") -> "CapabilityTag":
        """Normalize a raw capability string. Never raises."""
        if isinstance(value, CapabilityTag):
            return value
        key = re.sub(r"[\s_]+", "-", str(value).strip().lower())
        key = _CAPABILITY_ALIASES.get(key, key)
        try:
            return cls(key)
        except ValueError:
            logger.debug(f"Unrecognized capability {value!r} normalized to 'other'")
            return cls.OTHER


_CAPABILITY_LABELS = {
    CapabilityTag.TEXT: "Text",
    CapabilityTag.IMAGE: "Image",
    CapabilityTag.AUDIO: "Audio",
    CapabilityTag.VIDEO: "Video",
    CapabilityTag.CODE: "Code",
    CapabilityTag.EMBEDDING: "Embedding",
    CapabilityTag.MULTI_MODAL: "Multi-Modal",
    CapabilityTag.VISION: "Vision",
    CapabilityTag.OTHER: "Other",
}

_CAPABILITY_ICONS = {
    CapabilityTag.TEXT: "doc.text.fill",
    CapabilityTag.IMAGE: "photo",
    CapabilityTag.AUDIO: "waveform",
    CapabilityTag.VIDEO: "video",
    CapabilityTag.CODE: "chevron.left.forwardslash.chevron.right",
    CapabilityTag.EMBEDDING: "arrow.down.right.and.arrow.up.left.circle",
    CapabilityTag.MULTI_MODAL: "circle.hexagongrid.fill",
    CapabilityTag.VISION: "eye",
    CapabilityTag.OTHER: "questionmark",
}

# Plural and vendor spellings seen in provider listings
_CAPABILITY_ALIASES = {
    "texts": "text",
    "images": "image",
    "audios": "audio",
    "speech": "audio",
    "videos": "video",
    "embeddings": "embedding",
    "text-embeddings": "embedding",
    "multimodal": "multi-modal",
    "multi-modality": "multi-modal",
}


def parse_capabilities(values: Iterable["CapabilityTag | str"]) -> tuple:
    """Normalize a sequence of capabilities, dropping repeats but keeping order."""
    seen: list[CapabilityTag] = []
    for value in values:
        tag = CapabilityTag.parse(value)
        if tag not in seen:
            seen.append(tag)
    return tuple(seen)


def parse_capability_phrase(phrase: Optional[str]) -> tuple:
    """Parse a free-text phrase such as ``"Audio, images, videos, and text"``."""
    if not phrase:
        return ()
    words = [
        w.strip()
        for w in re.split(r",|\band\b|/|\+", phrase.lower())
        if w.strip()
    ]
    return parse_capabilities(words)


@dataclass(frozen=True)
class ProviderStyle:
    """Presentation metadata for a provider."""

    display_name: str
    icon: str
    color: str


PROVIDER_STYLES: dict[ProviderId, ProviderStyle] = {
    ProviderId.OPENAI: ProviderStyle("OpenAI", "circle.hexagonpath.fill", "indigo"),
    ProviderId.GEMINI: ProviderStyle("Gemini", "diamond.lefthalf.filled", "cyan"),
    ProviderId.DEEPSEEK: ProviderStyle("DeepSeek", "cube.transparent.fill", "purple"),
    ProviderId.LLAMA: ProviderStyle("Llama", "hare.fill", "green"),
}

# Simulated network latency per provider, in seconds
DEFAULT_LATENCY_SECONDS: dict[ProviderId, float] = {
    ProviderId.OPENAI: 0.8,
    ProviderId.GEMINI: 0.5,
    ProviderId.DEEPSEEK: 0.3,
    ProviderId.LLAMA: 0.5,
}


@dataclass(frozen=True)
class ModelRecord:
    """One model listing, normalized across providers.

    Instances are created fresh on every fetch and never mutated; ``id`` is
    the identity key within a provider's catalog.
    """

    id: str
    provider: ProviderId
    display_name: str
    family: Optional[str] = None
    version: Optional[str] = None
    owner: Optional[str] = None
    release_date: Optional[datetime] = None
    is_preview: bool = False
    is_experimental: bool = False
    is_live: bool = False
    short_description: Optional[str] = None
    detailed_description: Optional[str] = None
    input_capabilities: tuple = ()
    output_capabilities: tuple = ()
    tags: tuple = ()
    popularity: Optional[float] = None
    stats: Mapping[str, str] = field(default_factory=dict)

    def __post_init__(self):
        if self.popularity is not None and not 0.0 <= self.popularity <= 1.0:
            raise ValueError(
                f"popularity for {self.id!r} must be within [0, 1], got {self.popularity}"
            )

    def __hash__(self) -> int:
        return hash((self.provider, self.id))

    @property
    def input_capability_set(self) -> frozenset:
        return frozenset(self.input_capabilities)

    @property
    def capability_count(self) -> int:
        return len(self.input_capability_set)

    @property
    def style(self) -> ProviderStyle:
        return PROVIDER_STYLES[self.provider]

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary."""
        return {
            "id": self.id,
            "provider": self.provider.value,
            "display_name": self.display_name,
            "family": self.family,
            "version": self.version,
            "owner": self.owner,
            "release_date": self.release_date.isoformat() if self.release_date else None,
            "is_preview": self.is_preview,
            "is_experimental": self.is_experimental,
            "is_live": self.is_live,
            "short_description": self.short_description,
            "detailed_description": self.detailed_description,
            "input_capabilities": [c.value for c in self.input_capabilities],
            "output_capabilities": [c.value for c in self.output_capabilities],
            "tags": list(self.tags),
            "popularity": self.popularity,
            "stats": dict(self.stats),
        }


@dataclass
class ProviderConfig:
    """Configuration for one mock provider service."""

    provider: ProviderId
    latency_seconds: float = 0.5
    failure_rate: float = 0.0         # chance a fetch raises FetchFailedError
    seed: Optional[int] = None        # seeds failure injection

    def __post_init__(self):
        if self.latency_seconds < 0:
            raise ValueError("latency_seconds must be non-negative")
        if not 0.0 <= self.failure_rate <= 1.0:
            raise ValueError("failure_rate must be within [0, 1]")

    @classmethod
    def default_for(cls, provider: ProviderId, delay_scale: float = 1.0) -> "ProviderConfig":
        """Build the stock config for a provider, scaling its latency."""
        return cls(
            provider=provider,
            latency_seconds=DEFAULT_LATENCY_SECONDS[provider] * max(delay_scale, 0.0),
        )
