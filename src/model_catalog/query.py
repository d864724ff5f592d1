"""Query pipeline — capability filter, then text search, then sort.

Every function here is pure: inputs are never mutated and each call
returns a new list. The order of stages is fixed; each one narrows the
candidates for the next and sorting always runs last.
"""

from __future__ import annotations

from typing import Iterable, Sequence

from src.model_catalog.config import QueryState, SortOption
from src.model_providers.config import CapabilityTag, ModelRecord


def filter_by_capabilities(
    records: Iterable[ModelRecord],
    capabilities: Iterable[CapabilityTag],
) -> list[ModelRecord]:
    """Keep records whose input capabilities cover *every* requested one.

    An empty request keeps everything.
    """
    required = frozenset(capabilities)
    if not required:
        return list(records)
    return [r for r in records if required <= r.input_capability_set]


def search_fields(record: ModelRecord) -> list[str]:
    """Text fields a search query is matched against."""
    fields = [record.display_name]
    if record.family:
        fields.append(record.family)
    fields.extend(record.tags)
    fields.extend(c.label for c in record.input_capabilities)
    fields.extend(c.label for c in record.output_capabilities)
    return fields


def matches_search(record: ModelRecord, needle: str) -> bool:
    """True if any search field contains ``needle`` (already casefolded)."""
    return any(needle in text.casefold() for text in search_fields(record))


def search_records(records: Iterable[ModelRecord], text: str) -> list[ModelRecord]:
    """Case-insensitive substring search. Blank text keeps everything."""
    needle = text.strip().casefold()
    if not needle:
        return list(records)
    return [r for r in records if matches_search(r, needle)]


def _popularity_key(record: ModelRecord) -> float:
    # Absent popularity ranks lowest
    return record.popularity if record.popularity is not None else 0.0


def _release_key(record: ModelRecord) -> tuple:
    # Absent release date ranks as earliest
    if record.release_date is None:
        return (0, 0.0)
    return (1, record.release_date.timestamp())


def sort_records(records: Iterable[ModelRecord], option: SortOption) -> list[ModelRecord]:
    """Stable sort by the chosen option; ties keep their input order."""
    if option == SortOption.POPULARITY:
        return sorted(records, key=_popularity_key, reverse=True)
    elif option == SortOption.NAME:
        return sorted(records, key=lambda r: r.display_name.casefold())
    elif option == SortOption.RELEASE_DATE_DESC:
        return sorted(records, key=_release_key, reverse=True)
    elif option == SortOption.CAPABILITY_COUNT:
        return sorted(records, key=lambda r: r.capability_count, reverse=True)
    else:
        raise ValueError(f"Unknown sort option: {option}")


def derive(records: Sequence[ModelRecord], query: QueryState) -> list[ModelRecord]:
    """Produce the visible list for ``query`` from the raw records."""
    filtered = filter_by_capabilities(records, query.selected_capabilities)
    matched = search_records(filtered, query.search_text)
    return sort_records(matched, query.sort_option)
