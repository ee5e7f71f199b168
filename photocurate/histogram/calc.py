"""3-D colour histograms over the RGB cube."""

import logging
from pathlib import Path
from typing import Iterable, List, Union

import cv2
import numpy as np

from photocurate.config import DEFAULT_THRESHOLDS
from photocurate.errors import DecodeFailure
from photocurate.preprocessing.loader import load_image

logger = logging.getLogger(__name__)


def compute_histogram(
    image: np.ndarray,
    bins: int = DEFAULT_THRESHOLDS.histogram_bins,
) -> np.ndarray:
    """Compute an L2-normalised bins x bins x bins colour histogram.

    Uses the full image, with every channel binned over [0, 256).

    Args:
        image: uint8 RGB or RGBA (H, W, C), or greyscale (H, W)
        bins: Bins per channel

    Returns:
        float32 array (bins, bins, bins) with unit L2 norm
    """
    if image.ndim == 2:
        image = np.stack([image, image, image], axis=-1)
    elif image.shape[2] == 4:
        image = np.ascontiguousarray(image[:, :, :3])

    if image.size == 0:
        raise ValueError("Cannot compute histogram of an empty image")

    hist = cv2.calcHist(
        [image],
        [0, 1, 2],
        None,
        [bins, bins, bins],
        [0, 256, 0, 256, 0, 256],
    )
    hist = cv2.normalize(hist, None, alpha=1.0, beta=0.0, norm_type=cv2.NORM_L2)

    return hist


def histogram_from_file(path: Union[str, Path]) -> np.ndarray:
    """Decode an image and compute its normalised histogram."""
    return compute_histogram(load_image(path))


def load_baseline_histograms(paths: Iterable[Union[str, Path]]) -> List[np.ndarray]:
    """Build baseline histograms from reference memo-board photos.

    ``.npy`` files are loaded as precomputed histograms; anything else is
    decoded as an image.
    """
    baselines = []
    for path in paths:
        path = Path(path)
        if path.suffix.lower() == '.npy':
            baselines.append(load_histogram(path))
        else:
            baselines.append(histogram_from_file(path))

    logger.info(f"Loaded {len(baselines)} baseline histogram(s)")

    return baselines


def save_histogram(hist: np.ndarray, path: Union[str, Path]) -> None:
    """Persist a histogram as a ``.npy`` file."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    np.save(path, hist.astype(np.float32))
    logger.debug(f"Saved histogram: {path}")


def load_histogram(path: Union[str, Path]) -> np.ndarray:
    """Load a histogram written by :func:`save_histogram`.

    Raises:
        DecodeFailure: If the file is missing or not a plain numpy array
    """
    try:
        hist = np.load(Path(path))
    except (ValueError, OSError, EOFError) as e:
        raise DecodeFailure(f"Cannot load histogram {path}: {e}") from e

    if not isinstance(hist, np.ndarray):
        raise DecodeFailure(f"Not a single histogram array: {path}")

    return hist.astype(np.float32)
