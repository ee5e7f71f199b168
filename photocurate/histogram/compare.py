"""Histogram comparison metrics and memo-board detection."""

import logging
import math
from dataclasses import dataclass
from enum import Enum
from typing import Sequence, Union

import cv2
import numpy as np

from photocurate.config import ClassificationThresholds, DEFAULT_THRESHOLDS
from photocurate.errors import NumericFault, PreconditionViolation
from photocurate.histogram.calc import compute_histogram

logger = logging.getLogger(__name__)


class CompareMetric(Enum):
    """Histogram comparison metric.

    Correlation and intersection grow with similarity; chi-squared and
    Hellinger are distances and shrink with it.
    """

    CORRELATION = "correlation"
    CHI_SQUARED = "chi-squared"
    INTERSECTION = "intersection"
    HELLINGER = "hellinger"

    @property
    def opencv_method(self) -> int:
        return _OPENCV_METHODS[self]

    @property
    def higher_is_similar(self) -> bool:
        return self in (CompareMetric.CORRELATION, CompareMetric.INTERSECTION)

    def accepts(self, score: float, threshold: float) -> bool:
        """True if ``score`` is on the similar side of ``threshold`` (inclusive)."""
        if self.higher_is_similar:
            return score >= threshold
        return score <= threshold

    @classmethod
    def parse(cls, value: Union[str, "CompareMetric"]) -> "CompareMetric":
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).lower().replace("_", "-"))
        except ValueError:
            raise PreconditionViolation(f"Unknown compare metric: {value!r}") from None


_OPENCV_METHODS = {
    CompareMetric.CORRELATION: cv2.HISTCMP_CORREL,
    CompareMetric.CHI_SQUARED: cv2.HISTCMP_CHISQR,
    CompareMetric.INTERSECTION: cv2.HISTCMP_INTERSECT,
    CompareMetric.HELLINGER: cv2.HISTCMP_BHATTACHARYYA,
}


class BoardType(Enum):
    """Background of the memo board being looked for."""

    DARK = "dark"
    WHITE = "white"

    def threshold(self, thresholds: ClassificationThresholds = DEFAULT_THRESHOLDS) -> float:
        if self is BoardType.DARK:
            return thresholds.memo_threshold_dark_board
        return thresholds.memo_threshold_white_board

    @classmethod
    def parse(cls, value: Union[str, "BoardType"]) -> "BoardType":
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).lower())
        except ValueError:
            raise PreconditionViolation(f"Unknown board type: {value!r}") from None


@dataclass
class MemoAnalysis:
    """Result of memo-board detection on an image."""

    average_score: float
    threshold: float
    metric: CompareMetric
    board_type: BoardType
    is_memo: bool


def compare_histograms(base: np.ndarray, candidate: np.ndarray, metric: CompareMetric) -> float:
    """Score ``candidate`` against ``base`` with the given metric."""
    return float(cv2.compareHist(
        base.astype(np.float32),
        candidate.astype(np.float32),
        metric.opencv_method,
    ))


def average_score(
    baselines: Sequence[np.ndarray],
    candidate: np.ndarray,
    metric: CompareMetric,
) -> float:
    """Mean comparison score of ``candidate`` across all baselines.

    Raises:
        PreconditionViolation: If ``baselines`` is empty
        NumericFault: If the mean is not finite
    """
    if len(baselines) == 0:
        raise PreconditionViolation("At least one baseline histogram is required")

    total = sum(compare_histograms(base, candidate, metric) for base in baselines)
    avg = total / len(baselines)

    if not math.isfinite(avg):
        raise NumericFault(f"Histogram {metric.value} score is not finite: {avg}")

    return avg


def analyze_memo(
    image: np.ndarray,
    metric: Union[str, CompareMetric],
    board_type: Union[str, BoardType],
    baselines: Sequence[np.ndarray],
    thresholds: ClassificationThresholds = DEFAULT_THRESHOLDS,
) -> MemoAnalysis:
    """Decide whether an image is a photographed memo board.

    Args:
        image: Decoded uint8 pixel buffer
        metric: Histogram comparison metric
        board_type: Board background, selects the threshold
        baselines: Histograms of reference memo-board photos (non-empty)
        thresholds: Classification constants

    Returns:
        MemoAnalysis with the averaged score and verdict
    """
    metric = CompareMetric.parse(metric)
    board_type = BoardType.parse(board_type)

    if len(baselines) == 0:
        raise PreconditionViolation("At least one baseline histogram is required")

    candidate = compute_histogram(image, thresholds.histogram_bins)
    avg = average_score(baselines, candidate, metric)
    threshold = board_type.threshold(thresholds)
    is_memo = metric.accepts(avg, threshold)

    logger.debug(
        f"Memo: {metric.value} avg={avg:.4f} over {len(baselines)} baseline(s), "
        f"{board_type.value} board threshold={threshold}, memo={is_memo}"
    )

    return MemoAnalysis(
        average_score=avg,
        threshold=threshold,
        metric=metric,
        board_type=board_type,
        is_memo=is_memo,
    )
