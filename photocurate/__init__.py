"""Heuristic photo classification for automatic photo curation."""

from photocurate.classifier import (
    PhotoClassifier,
    is_blur,
    is_dark,
    is_decorated,
    is_memo,
    is_screenshot,
    is_short_video,
    is_similar,
)
from photocurate.config import ClassificationThresholds, DEFAULT_THRESHOLDS
from photocurate.errors import (
    ClassificationFault,
    DecodeFailure,
    NumericFault,
    PreconditionViolation,
    Verdict,
)
from photocurate.histogram.compare import BoardType, CompareMetric

__version__ = "0.1.0"

__all__ = [
    "PhotoClassifier",
    "is_blur",
    "is_dark",
    "is_decorated",
    "is_memo",
    "is_screenshot",
    "is_short_video",
    "is_similar",
    "ClassificationThresholds",
    "DEFAULT_THRESHOLDS",
    "ClassificationFault",
    "DecodeFailure",
    "NumericFault",
    "PreconditionViolation",
    "Verdict",
    "BoardType",
    "CompareMetric",
]
