"""Blur detection from the peak Laplacian edge response.

A focused photo has at least one strong edge somewhere in frame. A blurred
one keeps its maximum second-derivative response low everywhere, so the
peak (not the variance) of the Laplacian is compared to a threshold.
"""

import logging
from dataclasses import dataclass

import cv2
import numpy as np

from photocurate.config import ClassificationThresholds, DEFAULT_THRESHOLDS
from photocurate.preprocessing.geometry import resize_to_bound, center_crop_square

logger = logging.getLogger(__name__)


@dataclass
class BlurAnalysis:
    """Result of blur analysis on an image."""

    max_response: int  # [0, 255]
    is_blurry: bool


def to_greyscale(image: np.ndarray) -> np.ndarray:
    """Convert an RGB/RGBA uint8 buffer to single-channel uint8."""
    if image.ndim == 2:
        return image
    if image.shape[2] == 4:
        return cv2.cvtColor(image, cv2.COLOR_RGBA2GRAY)
    return cv2.cvtColor(image, cv2.COLOR_RGB2GRAY)


def edge_response(gray: np.ndarray) -> np.ndarray:
    """Apply the 4-neighbour Laplacian, saturated to uint8.

    Negative responses clip to 0 and responses above 255 clip to 255.
    """
    return cv2.Laplacian(gray, cv2.CV_8U)


def max_edge_response(image: np.ndarray) -> int:
    """Peak Laplacian response of an image, in [0, 255]."""
    response = edge_response(to_greyscale(image))
    if response.size == 0:
        raise ValueError("Cannot measure edge response of an empty image")
    return int(response.max())


def prepare_for_blur(
    image: np.ndarray,
    thresholds: ClassificationThresholds = DEFAULT_THRESHOLDS,
) -> np.ndarray:
    """Shrink and centre-crop an image the way blur analysis sees it."""
    small = resize_to_bound(image, thresholds.blur_resize_bound)
    return center_crop_square(small, thresholds.blur_crop_fraction)


def analyze_blur(
    image: np.ndarray,
    thresholds: ClassificationThresholds = DEFAULT_THRESHOLDS,
) -> BlurAnalysis:
    """Decide whether an image is out of focus.

    Does not check darkness; dark scenes have weak edges and should be
    filtered out by the caller first.

    Args:
        image: Decoded uint8 pixel buffer
        thresholds: Classification constants

    Returns:
        BlurAnalysis; ``is_blurry`` when the peak response is below the threshold
    """
    cropped = prepare_for_blur(image, thresholds)
    peak = max_edge_response(cropped)
    is_blurry = peak < thresholds.blur_threshold

    logger.debug(f"Blur: max Laplacian response={peak}, blurry={is_blurry}")

    return BlurAnalysis(max_response=peak, is_blurry=is_blurry)
