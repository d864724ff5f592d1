"""Flow Layout — Two-pass wrapping layout.

Pass 1 measures every item at its intrinsic size; pass 2 places items
left to right, starting a new row whenever the next item would cross the
bounding width. An item wider than the bound gets a row of its own and
overflows rather than being shrunk.
"""

from __future__ import annotations

import logging
from typing import Callable, Iterable, Optional, Sequence

from src.flow_layout.config import (
    DEFAULT_LAYOUT_CONFIG,
    FlowItem,
    FlowLayoutResult,
    LayoutConfig,
    Placement,
)

logger = logging.getLogger(__name__)


def measure(items: Iterable, measure_fn: Callable[[object], FlowItem]) -> list[FlowItem]:
    """Pass 1: ask the rendering layer for each item's intrinsic size."""
    return [measure_fn(item) for item in items]


def measure_badges(
    labels: Iterable[str],
    config: Optional[LayoutConfig] = None,
) -> list[FlowItem]:
    """Estimate badge sizes from label length."""
    config = config or DEFAULT_LAYOUT_CONFIG
    return measure(
        labels,
        lambda label: FlowItem(
            width=len(label) * config.char_width + config.badge_padding + config.icon_width,
            height=config.badge_height,
        ),
    )


def layout(
    items: Sequence[FlowItem],
    bounding_width: float,
    horizontal_spacing: Optional[float] = None,
    vertical_spacing: Optional[float] = None,
) -> FlowLayoutResult:
    """Pass 2: place measured items in wrapping rows.

    Args:
        items: Measured sizes, in display order.
        bounding_width: Width available to the container.
        horizontal_spacing: Gap between items on a row.
        vertical_spacing: Gap between rows.

    Returns:
        FlowLayoutResult with one placement per item, in input order.
    """
    if bounding_width < 0:
        raise ValueError(f"Bounding width must be non-negative, got {bounding_width}")
    h_gap = DEFAULT_LAYOUT_CONFIG.horizontal_spacing if horizontal_spacing is None else horizontal_spacing
    v_gap = DEFAULT_LAYOUT_CONFIG.vertical_spacing if vertical_spacing is None else vertical_spacing

    if not items:
        return FlowLayoutResult()

    positions: list[Placement] = []
    row_heights: list[float] = []
    cursor_x = 0.0
    cursor_y = 0.0
    row_height = 0.0
    row_index = 0
    row_has_items = False

    for item in items:
        if row_has_items and cursor_x + item.width > bounding_width:
            row_heights.append(row_height)
            cursor_y += row_height + v_gap
            cursor_x = 0.0
            row_height = 0.0
            row_index += 1
            row_has_items = False

        positions.append(Placement(x=cursor_x, y=cursor_y, row=row_index))
        cursor_x += item.width + h_gap
        row_height = max(row_height, item.height)
        row_has_items = True

    row_heights.append(row_height)
    total_height = cursor_y + row_height

    logger.debug(
        f"Laid out {len(items)} items in {len(row_heights)} rows "
        f"(width={bounding_width}, height={total_height})"
    )
    return FlowLayoutResult(
        positions=tuple(positions),
        total_height=total_height,
        row_heights=tuple(row_heights),
    )


def flow_badges(
    labels: Sequence[str],
    bounding_width: float,
    config: Optional[LayoutConfig] = None,
) -> FlowLayoutResult:
    """Measure and lay out a row of capability or tag badges."""
    config = config or DEFAULT_LAYOUT_CONFIG
    return layout(
        measure_badges(labels, config),
        bounding_width,
        horizontal_spacing=config.horizontal_spacing,
        vertical_spacing=config.vertical_spacing,
    )
