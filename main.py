"""CLI entry point: python main.py --provider deepseek --search coder --sort name"""

import argparse
import asyncio
import sys

import config
from src.flow_layout import LayoutConfig, flow_badges
from src.logging_config import LoggingConfig, LogLevel, configure_logging
from src.model_catalog import CatalogConfig, CatalogStore, EmptyState, SortOption
from src.model_catalog.detail import format_popularity
from src.model_providers import (
    DEFAULT_LATENCY_SECONDS,
    CapabilityTag,
    ProviderConfig,
    ProviderId,
    ProviderRegistry,
)

# Badges rendered as "[Label]" in character cells
CLI_BADGE_LAYOUT = LayoutConfig(
    horizontal_spacing=1,
    vertical_spacing=0,
    char_width=1,
    badge_padding=2,
    badge_height=1,
)

EMPTY_MESSAGES = {
    EmptyState.LOADING: "Loading models...",
    EmptyState.ERROR: "Could not load models.",
    EmptyState.NO_DATA: "No models available.",
    EmptyState.NO_MATCHES: "No models match the current search and filters.",
}


def build_registry() -> ProviderRegistry:
    """Provider registry using the mock latency and failure settings in config."""
    return ProviderRegistry(configs=[
        ProviderConfig(
            provider=pid,
            latency_seconds=DEFAULT_LATENCY_SECONDS[pid] * max(config.MOCK_DELAY_SCALE, 0.0),
            failure_rate=config.FAILURE_RATES.get(pid.value, 0.0),
        )
        for pid in ProviderId
    ])


def format_badge_lines(labels, width: int) -> list[str]:
    """Wrap ``[Label]`` badges into lines no wider than ``width`` cells."""
    badges = [f"[{label}]" for label in labels]
    result = flow_badges(labels, width, CLI_BADGE_LAYOUT)
    return [" ".join(badges[i] for i in row) for row in result.rows()]


def format_catalog_table(records, width: int = config.CLI_WIDTH) -> str:
    """Render derived records as a fixed-width table with capability badges."""
    lines = [
        f"{'Model':<34s} {'Popularity':>10s}  {'Released':<10s}",
        "-" * min(width, 58),
    ]
    for record in records:
        popularity = format_popularity(record.popularity) or "-"
        released = record.release_date.strftime("%Y-%m-%d") if record.release_date else "-"
        lines.append(f"{record.display_name[:34]:<34s} {popularity:>10s}  {released:<10s}")
        labels = [c.label for c in record.input_capabilities]
        for line in format_badge_lines(labels, width - 4):
            lines.append(f"    {line}")
    return "\n".join(lines)


async def run(args: argparse.Namespace) -> CatalogStore:
    """Load one provider through the store and apply the query arguments."""
    provider = ProviderId.parse(args.provider)
    store = CatalogStore(
        build_registry(),
        CatalogConfig(default_provider=provider, default_sort=SortOption(args.sort)),
    )
    await store.load()
    if args.refresh:
        await store.refresh()

    if args.search:
        store.set_search_text(args.search)
    for capability in args.capability or ():
        tag = CapabilityTag.parse(capability)
        if tag not in store.query.selected_capabilities:
            store.toggle_capability(tag)
    return store


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(
        description="Browse AI model catalogs from mock provider services"
    )
    parser.add_argument(
        "--provider", default=config.DEFAULT_PROVIDER,
        choices=[p.value for p in ProviderId],
        help="Provider catalog to load (default: openai)"
    )
    parser.add_argument(
        "--search", default="",
        help="Case-insensitive substring search"
    )
    parser.add_argument(
        "--capability", action="append",
        help="Required input capability; repeat to require several"
    )
    parser.add_argument(
        "--sort", default=config.DEFAULT_SORT,
        choices=[s.value for s in SortOption],
        help="Sort order (default: popularity)"
    )
    parser.add_argument(
        "--refresh", action="store_true",
        help="Refresh once after the initial load, keeping the list on failure"
    )
    parser.add_argument(
        "--log-level", default=None,
        choices=[level.value for level in LogLevel],
        help="Logging level (default: INFO, or CATALOG_LOG_LEVEL)"
    )
    args = parser.parse_args(argv)

    if args.log_level:
        configure_logging(LoggingConfig(level=LogLevel(args.log_level)))
    else:
        configure_logging()

    store = asyncio.run(run(args))
    snapshot = store.snapshot()
    style = snapshot.records[0].style if snapshot.records else None

    print("=" * 60)
    print(f"MODEL CATALOG - {style.display_name if style else args.provider}")
    print(f"{len(snapshot.derived_records)} of {len(snapshot.records)} models "
          f"· sorted by {snapshot.query.sort_option.label}")
    print("=" * 60)

    if snapshot.error_message:
        print(f"Error: {snapshot.error_message}", file=sys.stderr)

    if snapshot.empty_state is not None:
        print(EMPTY_MESSAGES[snapshot.empty_state])
    else:
        print(format_catalog_table(snapshot.derived_records))

    return 1 if snapshot.empty_state == EmptyState.ERROR else 0


if __name__ == "__main__":
    sys.exit(main())
