"""Edge-response analysis for blurry photo detection."""

from photocurate.sharpness.blur import (
    BlurAnalysis,
    analyze_blur,
    edge_response,
    max_edge_response,
    prepare_for_blur,
    to_greyscale,
)

__all__ = [
    "BlurAnalysis",
    "analyze_blur",
    "edge_response",
    "max_edge_response",
    "prepare_for_blur",
    "to_greyscale",
]
