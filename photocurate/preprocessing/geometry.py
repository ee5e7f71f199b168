"""Bounding-box resize and centre square crop for pixel buffers."""

import logging

import cv2
import numpy as np

logger = logging.getLogger(__name__)


def resize_to_bound(image: np.ndarray, max_dimension: int) -> np.ndarray:
    """Downscale an image so its longest edge equals ``max_dimension``.

    Buffers already within the bound are returned as-is (same object).
    Never upscales.

    Args:
        image: uint8 buffer, (H, W), (H, W, 3) or (H, W, 4)
        max_dimension: Maximum allowed width/height in pixels

    Returns:
        The input buffer, or a new resized buffer
    """
    height, width = image.shape[:2]

    if width <= max_dimension and height <= max_dimension:
        return image

    if width < height:
        scale = max_dimension / height
        new_height = max_dimension
        new_width = max(1, int(width * scale))
    else:
        scale = max_dimension / width
        new_width = max_dimension
        new_height = max(1, int(height * scale))

    # INTER_AREA gives the smoothest result when shrinking
    resized = cv2.resize(image, (new_width, new_height), interpolation=cv2.INTER_AREA)

    logger.debug(
        f"Resized {width}x{height} -> {new_width}x{new_height} (scale: {scale:.3f})"
    )

    return resized


def center_crop_square(image: np.ndarray, fraction: float) -> np.ndarray:
    """Crop a centred square whose side is ``fraction`` of the shorter edge.

    Fractions outside [0, 1] (including NaN) leave the image untouched.

    Args:
        image: Pixel buffer
        fraction: Side length as a fraction of min(width, height)

    Returns:
        Square copy of the centre region, or the input when fraction is invalid
    """
    if not 0.0 <= fraction <= 1.0:
        return image

    height, width = image.shape[:2]

    # Round half up, not half to even
    side = int(np.floor(min(width, height) * fraction + 0.5))
    x = (width - side) // 2
    y = (height - side) // 2

    return image[y:y + side, x:x + side].copy()
