"""Configuration for the model catalog browser."""

import os


def _env_float(name: str, default: float) -> float:
    raw = os.environ.get(name, "")
    if not raw:
        return default
    try:
        return float(raw)
    except ValueError:
        return default


# Startup selection
DEFAULT_PROVIDER = "openai"
DEFAULT_SORT = "popularity"

# Mock services
MOCK_DELAY_SCALE = _env_float("CATALOG_MOCK_DELAY_SCALE", 1.0)  # 0 disables latency
FAILURE_RATES = {
    "openai": 0.0,
    "gemini": 0.0,
    "deepseek": 0.2,  # one refresh in five fails
    "llama": 0.0,
}

# Badge measurement (points)
BADGE_CHAR_WIDTH = 7.0
BADGE_PADDING = 20.0
BADGE_HEIGHT = 24.0
BADGE_H_SPACING = 10.0
BADGE_V_SPACING = 7.0

# Presentation widths
CARD_WIDTH = 340.0  # points available for badges on a catalog card
CLI_WIDTH = 80      # character cells for the capability line
