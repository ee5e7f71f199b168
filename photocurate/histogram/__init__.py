"""Colour histograms and memo-board detection."""

from photocurate.histogram.calc import (
    compute_histogram,
    histogram_from_file,
    load_baseline_histograms,
    save_histogram,
    load_histogram,
)
from photocurate.histogram.compare import (
    BoardType,
    CompareMetric,
    MemoAnalysis,
    analyze_memo,
    average_score,
    compare_histograms,
)

__all__ = [
    "compute_histogram",
    "histogram_from_file",
    "load_baseline_histograms",
    "save_histogram",
    "load_histogram",
    "BoardType",
    "CompareMetric",
    "MemoAnalysis",
    "analyze_memo",
    "average_score",
    "compare_histograms",
]
