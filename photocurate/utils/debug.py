"""Debug image output."""

import logging
from pathlib import Path
from typing import Optional, Union

import cv2
import numpy as np

logger = logging.getLogger(__name__)


def save_debug_image(
    image: np.ndarray,
    output_path: Union[str, Path],
    description: Optional[str] = None,
    quality: int = 95
) -> Path:
    """Save a uint8 RGB or greyscale buffer as JPEG.

    Args:
        image: uint8 (H, W), (H, W, 3) RGB or (H, W, 4) RGBA
        output_path: Destination; the suffix is forced to .jpg
        description: Optional description to log
        quality: JPEG quality (0-100)

    Returns:
        Path actually written
    """
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    if image.ndim == 2:
        img_bgr = cv2.cvtColor(image, cv2.COLOR_GRAY2BGR)
    elif image.shape[2] == 3:
        img_bgr = cv2.cvtColor(image, cv2.COLOR_RGB2BGR)
    elif image.shape[2] == 4:
        img_bgr = cv2.cvtColor(image, cv2.COLOR_RGBA2BGR)
    else:
        raise ValueError(f"Unsupported number of channels: {image.shape[2]}")

    if output_path.suffix.lower() not in ['.jpg', '.jpeg']:
        output_path = output_path.with_suffix('.jpg')

    cv2.imwrite(str(output_path), img_bgr, [cv2.IMWRITE_JPEG_QUALITY, quality])

    if description:
        logger.debug(f"Saved debug image: {output_path} - {description}")
    else:
        logger.debug(f"Saved debug image: {output_path}")

    return output_path
