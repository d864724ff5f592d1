"""Flow Layout — Geometry types and configuration."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class FlowItem:
    """Intrinsic size of one item, as measured by the rendering layer."""

    width: float
    height: float

    def __post_init__(self):
        if self.width < 0 or self.height < 0:
            raise ValueError(f"Item size must be non-negative, got {self.width}x{self.height}")


@dataclass(frozen=True)
class Placement:
    """Origin of a placed item and the row it landed on."""

    x: float
    y: float
    row: int


@dataclass(frozen=True)
class FlowLayoutResult:
    """Placements in item order plus the stacked content height."""

    positions: tuple = ()
    total_height: float = 0.0
    row_heights: tuple = ()

    @property
    def row_count(self) -> int:
        return len(self.row_heights)

    def rows(self) -> list[list[int]]:
        """Item indices grouped by row."""
        grouped: list[list[int]] = [[] for _ in self.row_heights]
        for index, placement in enumerate(self.positions):
            grouped[placement.row].append(index)
        return grouped

    def to_dict(self) -> dict:
        return {
            "positions": [{"x": p.x, "y": p.y} for p in self.positions],
            "total_height": self.total_height,
        }


@dataclass
class LayoutConfig:
    """Spacing and badge measurement settings."""

    horizontal_spacing: float = 10.0
    vertical_spacing: float = 7.0
    char_width: float = 7.0       # average glyph advance of the badge font
    badge_padding: float = 20.0   # leading + trailing inset
    badge_height: float = 24.0
    icon_width: float = 0.0       # extra room when badges carry an icon


DEFAULT_LAYOUT_CONFIG = LayoutConfig()
