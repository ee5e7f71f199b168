"""Classification thresholds and environment-driven settings."""

import logging
import os
from dataclasses import dataclass
from typing import Optional, Tuple

from dotenv import load_dotenv

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ClassificationThresholds:
    """All tunable constants in one place. Shared read-only."""

    # Darkness
    dark_resize_bound: int = 50  # px, longest edge
    luminance_tolerance: int = 120  # pixels below this count as dark
    dark_fraction: float = 0.8

    # Blur
    blur_resize_bound: int = 500
    blur_crop_fraction: float = 0.5
    blur_threshold: int = 110  # max Laplacian response below this = blurry

    # Similarity
    similar_resize_bound: int = 500
    similar_threshold: int = 200
    match_window: int = 11  # number of best matches summed
    orb_features: int = 500

    # Memo board
    memo_threshold_dark_board: float = 0.55
    memo_threshold_white_board: float = 0.68
    histogram_bins: int = 8

    # Screenshot / video / decorated
    screenshot_png_only: bool = True
    short_video_seconds: int = 1
    decorated_apps: Tuple[str, ...] = ("BeautyPlus", "Instagram", "aillis")


DEFAULT_THRESHOLDS = ClassificationThresholds()


def _env_int(name: str) -> Optional[int]:
    value = os.getenv(name, "").strip()
    if not value:
        return None
    try:
        return int(value)
    except ValueError:
        logger.warning(f"Ignoring non-integer {name}={value!r}")
        return None


def load_display_size(dotenv: bool = False) -> Optional[Tuple[int, int]]:
    """Read display geometry from PHOTOCURATE_DISPLAY_WIDTH/HEIGHT.

    Args:
        dotenv: Load a ``.env`` file first (the CLI already does on import)

    Returns:
        (width, height), or None when either variable is missing or invalid
    """
    if dotenv:
        load_dotenv()

    width = _env_int("PHOTOCURATE_DISPLAY_WIDTH")
    height = _env_int("PHOTOCURATE_DISPLAY_HEIGHT")

    if width is None or height is None:
        logger.debug("Display size not configured in environment")
        return None

    return width, height
