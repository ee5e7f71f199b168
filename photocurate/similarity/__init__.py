"""Keypoint matching for near-duplicate photo detection."""

from photocurate.similarity.keypoints import (
    Keypoint,
    Match,
    SimilarityAnalysis,
    analyze_similarity,
    detect_and_describe,
    hamming_distance,
    match_descriptors,
    sum_best_distances,
)

__all__ = [
    "Keypoint",
    "Match",
    "SimilarityAnalysis",
    "analyze_similarity",
    "detect_and_describe",
    "hamming_distance",
    "match_descriptors",
    "sum_best_distances",
]
