"""Detail-screen summary for a single model record."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

from src.model_providers.config import ModelRecord


@dataclass(frozen=True)
class ModelDetail:
    """Display-ready fields for the detail screen."""

    title: str
    subtitle: Optional[str]
    provider_name: str
    flags: tuple = ()
    release_date_text: Optional[str] = None
    popularity_text: Optional[str] = None
    description: Optional[str] = None
    input_labels: tuple = ()
    output_labels: tuple = ()
    tags: tuple = ()
    stats: tuple = field(default_factory=tuple)


def record_flags(record: ModelRecord) -> tuple:
    """Flag badges in display order; flags are independent of each other."""
    flags = []
    if record.is_preview:
        flags.append("Preview")
    if record.is_experimental:
        flags.append("Experimental")
    if record.is_live:
        flags.append("Live")
    return tuple(flags)


def format_popularity(popularity: Optional[float]) -> Optional[str]:
    """Percent badge text. Absent popularity yields no badge rather than 0%."""
    if popularity is None:
        return None
    return f"{round(popularity * 100)}%"


def build_detail(record: ModelRecord) -> ModelDetail:
    subtitle_parts = [p for p in (record.family, record.version, record.owner) if p]
    return ModelDetail(
        title=record.display_name,
        subtitle=" · ".join(subtitle_parts) or None,
        provider_name=record.style.display_name,
        flags=record_flags(record),
        release_date_text=(
            record.release_date.strftime("%b %d, %Y") if record.release_date else None
        ),
        popularity_text=format_popularity(record.popularity),
        description=record.detailed_description or record.short_description,
        input_labels=tuple(c.label for c in record.input_capabilities),
        output_labels=tuple(c.label for c in record.output_capabilities),
        tags=tuple(record.tags),
        stats=tuple(sorted(record.stats.items())),
    )
