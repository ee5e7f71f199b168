"""Near-duplicate detection by matching ORB keypoint descriptors.

Each source descriptor is paired with its nearest comparison descriptor under
Hamming distance. The distances of the best few matches are summed; a small
sum means the two photos share many almost identical local features.
"""

import logging
from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple

import cv2
import numpy as np

from photocurate.config import ClassificationThresholds, DEFAULT_THRESHOLDS
from photocurate.preprocessing.geometry import resize_to_bound
from photocurate.sharpness.blur import to_greyscale

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Keypoint:
    """Detected feature location with its scale and orientation."""

    x: float
    y: float
    size: float
    angle: float  # degrees, -1 when not computed


@dataclass(frozen=True)
class Match:
    """Best comparison descriptor for one source descriptor."""

    source_idx: int
    target_idx: int
    distance: float


@dataclass
class SimilarityAnalysis:
    """Result of comparing two images."""

    num_matches: int
    sum_distance: Optional[float]  # None when nothing matched
    is_similar: bool


def detect_and_describe(
    image: np.ndarray,
    n_features: int = DEFAULT_THRESHOLDS.orb_features,
) -> Tuple[List[Keypoint], np.ndarray]:
    """Detect oriented FAST keypoints and compute rBRIEF descriptors.

    Args:
        image: uint8 RGB/RGBA or greyscale buffer
        n_features: Maximum number of keypoints to keep

    Returns:
        (keypoints, descriptors) where descriptors is uint8 (N, 32).
        N is 0 when the image has no usable corners.
    """
    gray = to_greyscale(image)
    orb = cv2.ORB_create(nfeatures=n_features)
    cv_keypoints, descriptors = orb.detectAndCompute(gray, None)

    if descriptors is None:
        descriptors = np.empty((0, 32), dtype=np.uint8)

    keypoints = [
        Keypoint(x=kp.pt[0], y=kp.pt[1], size=kp.size, angle=kp.angle)
        for kp in cv_keypoints
    ]

    logger.debug(f"Detected {len(keypoints)} keypoints")

    return keypoints, descriptors


def hamming_distance(a: np.ndarray, b: np.ndarray) -> int:
    """Number of differing bits between two packed binary descriptors."""
    return int(np.unpackbits(np.bitwise_xor(a, b)).sum())


def match_descriptors(source: np.ndarray, target: np.ndarray) -> List[Match]:
    """Brute-force nearest-neighbour matching under Hamming distance.

    Returns:
        One Match per source descriptor, sorted ascending by distance.
        Empty when either side has no descriptors.
    """
    if len(source) == 0 or len(target) == 0:
        return []

    matcher = cv2.BFMatcher(cv2.NORM_HAMMING)
    dmatches = matcher.match(source, target)

    matches = [
        Match(source_idx=m.queryIdx, target_idx=m.trainIdx, distance=float(m.distance))
        for m in dmatches
    ]
    matches.sort(key=lambda m: m.distance)

    return matches


def sum_best_distances(matches: Sequence[Match], window: int) -> float:
    """Sum the distances of the first ``window`` matches.

    ``matches`` must already be sorted ascending; fewer than ``window``
    entries are summed as they are.
    """
    return float(sum(m.distance for m in matches[:window]))


def analyze_similarity(
    source: np.ndarray,
    comparing: np.ndarray,
    thresholds: ClassificationThresholds = DEFAULT_THRESHOLDS,
) -> SimilarityAnalysis:
    """Decide whether two images are near duplicates.

    Does not check darkness; the caller is expected to skip dark images.

    Args:
        source: Decoded uint8 pixel buffer
        comparing: Decoded uint8 pixel buffer
        thresholds: Classification constants

    Returns:
        SimilarityAnalysis; ``is_similar`` when the summed distance of the
        best matches is below the threshold
    """
    source = resize_to_bound(source, thresholds.similar_resize_bound)
    comparing = resize_to_bound(comparing, thresholds.similar_resize_bound)

    _, source_desc = detect_and_describe(source, thresholds.orb_features)
    _, comparing_desc = detect_and_describe(comparing, thresholds.orb_features)

    matches = match_descriptors(source_desc, comparing_desc)

    if not matches:
        logger.debug("Similarity: no descriptor matches")
        return SimilarityAnalysis(num_matches=0, sum_distance=None, is_similar=False)

    total = sum_best_distances(matches, thresholds.match_window)
    is_similar = total < thresholds.similar_threshold

    logger.debug(
        f"Similarity: {len(matches)} matches, sum of best "
        f"{min(len(matches), thresholds.match_window)}={total:.0f}, similar={is_similar}"
    )

    return SimilarityAnalysis(
        num_matches=len(matches),
        sum_distance=total,
        is_similar=is_similar,
    )
