"""Flow Layout.

Wrapping placement of variable-width badges inside a bounded width.
"""

from src.flow_layout.config import (
    DEFAULT_LAYOUT_CONFIG,
    FlowItem,
    FlowLayoutResult,
    LayoutConfig,
    Placement,
)
from src.flow_layout.engine import flow_badges, layout, measure, measure_badges

__all__ = [
    # Config
    "DEFAULT_LAYOUT_CONFIG",
    "FlowItem",
    "FlowLayoutResult",
    "LayoutConfig",
    "Placement",
    # Engine
    "flow_badges",
    "layout",
    "measure",
    "measure_badges",
]
