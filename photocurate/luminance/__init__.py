"""Luminance analysis for dark photo detection."""

from photocurate.luminance.darkness import (
    DarknessAnalysis,
    analyze_darkness,
    compute_luminance,
    dark_pixel_fraction,
)

__all__ = [
    "DarknessAnalysis",
    "analyze_darkness",
    "compute_luminance",
    "dark_pixel_fraction",
]
