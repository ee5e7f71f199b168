"""Darkness detection from the fraction of low-luminance pixels.

Darkness is a coarse global statistic, so the image is shrunk aggressively
before counting. Luminance uses the weights 0.299 R + 0.5876 G + 0.114 B.
"""

import logging
from dataclasses import dataclass

import numpy as np

from photocurate.config import ClassificationThresholds, DEFAULT_THRESHOLDS
from photocurate.preprocessing.geometry import resize_to_bound

logger = logging.getLogger(__name__)

LUMA_WEIGHTS = np.array([0.299, 0.5876, 0.114], dtype=np.float64)


@dataclass
class DarknessAnalysis:
    """Result of darkness analysis on an image."""

    dark_fraction: float  # [0, 1]
    dark_pixels: int
    total_pixels: int
    is_dark: bool


def compute_luminance(image: np.ndarray) -> np.ndarray:
    """Per-pixel perceptual luminance, rounded half up.

    Args:
        image: uint8 RGB or RGBA (H, W, C), or greyscale (H, W)

    Returns:
        float64 array (H, W) with integral values in [0, 255]
    """
    if image.ndim == 2:
        return image.astype(np.float64)

    rgb = image[:, :, :3].astype(np.float64)
    return np.floor(rgb @ LUMA_WEIGHTS + 0.5)


def dark_pixel_fraction(image: np.ndarray, tolerance: int) -> DarknessAnalysis:
    """Count pixels whose luminance is below ``tolerance``."""
    luminance = compute_luminance(image)
    total = int(luminance.size)

    if total == 0:
        raise ValueError("Cannot measure darkness of an empty image")

    dark = int(np.count_nonzero(luminance < tolerance))
    fraction = dark / total

    return DarknessAnalysis(
        dark_fraction=fraction,
        dark_pixels=dark,
        total_pixels=total,
        is_dark=False,
    )


def analyze_darkness(
    image: np.ndarray,
    thresholds: ClassificationThresholds = DEFAULT_THRESHOLDS,
) -> DarknessAnalysis:
    """Decide whether an image is too dark.

    Args:
        image: Decoded uint8 pixel buffer
        thresholds: Classification constants

    Returns:
        DarknessAnalysis; ``is_dark`` when the dark fraction exceeds the limit
    """
    small = resize_to_bound(image, thresholds.dark_resize_bound)
    result = dark_pixel_fraction(small, thresholds.luminance_tolerance)
    result.is_dark = result.dark_fraction > thresholds.dark_fraction

    logger.debug(
        f"Darkness: {result.dark_pixels}/{result.total_pixels} pixels below "
        f"{thresholds.luminance_tolerance} ({result.dark_fraction:.3f}), dark={result.is_dark}"
    )

    return result
