"""Classification facade: boolean photo-curation verdicts for files.

Every ``check_*`` method returns a :class:`Verdict`. Decode failures and
numeric faults are logged and reported as a negative verdict carrying the
fault; precondition violations propagate to the caller. The ``is_*``
methods return only the boolean.

Darkness is evaluated first for blur and similarity, and a dark image is
never reported as blurry or similar.
"""

import logging
from pathlib import Path
from typing import Callable, Optional, Sequence, Union

import cv2
import numpy as np

from photocurate.config import ClassificationThresholds, DEFAULT_THRESHOLDS
from photocurate.errors import (
    ClassificationFault,
    DecodeFailure,
    NumericFault,
    PreconditionViolation,
    Verdict,
)
from photocurate.histogram.compare import BoardType, CompareMetric, analyze_memo
from photocurate.luminance.darkness import analyze_darkness
from photocurate.media.display import DisplayGeometryProvider
from photocurate.media.video import OpenCVVideoMetadata, VideoMetadataProvider
from photocurate.preprocessing.loader import load_image, read_image_size
from photocurate.sharpness.blur import analyze_blur
from photocurate.similarity.keypoints import analyze_similarity

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]
ImageDecoder = Callable[[PathLike], np.ndarray]

_NUMERIC_ERRORS = (cv2.error, ArithmeticError, ValueError)


class PhotoClassifier:
    """Heuristic photo classifier over decoded pixel buffers."""

    def __init__(
        self,
        thresholds: Optional[ClassificationThresholds] = None,
        decoder: Optional[ImageDecoder] = None,
        video_metadata: Optional[VideoMetadataProvider] = None,
    ) -> None:
        """Initialize classifier.

        Args:
            thresholds: Classification constants. If None, uses defaults.
            decoder: path -> uint8 RGB buffer. If None, uses Pillow.
            video_metadata: Default provider for short-video checks.
        """
        self.thresholds = thresholds or DEFAULT_THRESHOLDS
        self.decoder = decoder or load_image
        self.video_metadata = video_metadata or OpenCVVideoMetadata()

    def _decode(self, path: PathLike) -> np.ndarray:
        image = self.decoder(path)
        if image is None:
            raise DecodeFailure(f"Decoder returned no image for {path}")
        return image

    def _evaluate(self, operation: str, target: object, compute: Callable[[], bool]) -> Verdict:
        try:
            return Verdict(detected=bool(compute()))
        except PreconditionViolation:
            raise
        except ClassificationFault as e:
            fault = e
        except OSError as e:
            fault = DecodeFailure(f"{type(e).__name__}: {e}")
            fault.__cause__ = e
        except _NUMERIC_ERRORS as e:
            fault = NumericFault(f"{type(e).__name__}: {e}")
            fault.__cause__ = e

        logger.warning(f"{operation} failed for {target}: {fault}")
        return Verdict(detected=False, fault=fault)

    # --- Darkness / blur / similarity ---

    def check_dark(self, path: PathLike) -> Verdict:
        def compute() -> bool:
            return analyze_darkness(self._decode(path), self.thresholds).is_dark

        return self._evaluate("Dark detection", path, compute)

    def check_blur(self, path: PathLike) -> Verdict:
        def compute() -> bool:
            image = self._decode(path)
            if analyze_darkness(image, self.thresholds).is_dark:
                logger.debug(f"{path} is dark, skipping blur check")
                return False
            return analyze_blur(image, self.thresholds).is_blurry

        return self._evaluate("Blur detection", path, compute)

    def check_similar(self, source: PathLike, comparing: PathLike) -> Verdict:
        def compute() -> bool:
            source_image = self._decode(source)
            if analyze_darkness(source_image, self.thresholds).is_dark:
                logger.debug(f"{source} is dark, skipping similarity check")
                return False

            comparing_image = self._decode(comparing)
            if analyze_darkness(comparing_image, self.thresholds).is_dark:
                logger.debug(f"{comparing} is dark, skipping similarity check")
                return False

            return analyze_similarity(source_image, comparing_image, self.thresholds).is_similar

        return self._evaluate("Similarity detection", f"{source} vs {comparing}", compute)

    # --- Memo board ---

    def check_memo(
        self,
        path: PathLike,
        metric: Union[str, CompareMetric],
        board_type: Union[str, BoardType],
        baselines: Sequence[np.ndarray],
    ) -> Verdict:
        metric = CompareMetric.parse(metric)
        board_type = BoardType.parse(board_type)
        if len(baselines) == 0:
            raise PreconditionViolation("At least one baseline histogram is required")

        def compute() -> bool:
            image = self._decode(path)
            return analyze_memo(image, metric, board_type, baselines, self.thresholds).is_memo

        return self._evaluate("Memo detection", path, compute)

    # --- Naming / geometry / metadata heuristics ---

    def is_decorated(self, path: PathLike) -> bool:
        """True if the path names a known photo-editing app."""
        name = str(path)
        return any(app in name for app in self.thresholds.decorated_apps)

    def check_screenshot(self, path: PathLike, display: DisplayGeometryProvider) -> Verdict:
        def compute() -> bool:
            if self.thresholds.screenshot_png_only and not str(path).lower().endswith('.png'):
                return False

            image_width, image_height = read_image_size(path)
            screen_width, screen_height = display.size()
            logger.debug(
                f"Screenshot check: image {image_width}x{image_height}, "
                f"screen {screen_width}x{screen_height}"
            )
            return image_width == screen_width and image_height == screen_height

        return self._evaluate("Screenshot detection", path, compute)

    def check_short_video(
        self,
        path: PathLike,
        video_metadata: Optional[VideoMetadataProvider] = None,
    ) -> Verdict:
        provider = video_metadata or self.video_metadata

        def compute() -> bool:
            if not Path(path).is_file():
                raise DecodeFailure(f"Video file not found: {path}")

            duration = provider.duration_ms(path)
            if duration is None:
                raise DecodeFailure(f"No duration reported for video: {path}")

            seconds = int(duration) // 1000
            return seconds == self.thresholds.short_video_seconds

        return self._evaluate("Short video detection", path, compute)

    # --- Boolean shortcuts ---

    def is_dark(self, path: PathLike) -> bool:
        return self.check_dark(path).detected

    def is_blur(self, path: PathLike) -> bool:
        return self.check_blur(path).detected

    def is_similar(self, source: PathLike, comparing: PathLike) -> bool:
        return self.check_similar(source, comparing).detected

    def is_memo(
        self,
        path: PathLike,
        metric: Union[str, CompareMetric],
        board_type: Union[str, BoardType],
        baselines: Sequence[np.ndarray],
    ) -> bool:
        return self.check_memo(path, metric, board_type, baselines).detected

    def is_screenshot(self, path: PathLike, display: DisplayGeometryProvider) -> bool:
        return self.check_screenshot(path, display).detected

    def is_short_video(
        self,
        path: PathLike,
        video_metadata: Optional[VideoMetadataProvider] = None,
    ) -> bool:
        return self.check_short_video(path, video_metadata).detected


_default = PhotoClassifier()


def is_dark(path: PathLike) -> bool:
    return _default.is_dark(path)


def is_blur(path: PathLike) -> bool:
    return _default.is_blur(path)


def is_similar(source: PathLike, comparing: PathLike) -> bool:
    return _default.is_similar(source, comparing)


def is_memo(
    path: PathLike,
    metric: Union[str, CompareMetric],
    board_type: Union[str, BoardType],
    baselines: Sequence[np.ndarray],
) -> bool:
    return _default.is_memo(path, metric, board_type, baselines)


def is_decorated(path: PathLike) -> bool:
    return _default.is_decorated(path)


def is_screenshot(path: PathLike, display: DisplayGeometryProvider) -> bool:
    return _default.is_screenshot(path, display)


def is_short_video(path: PathLike, video_metadata: Optional[VideoMetadataProvider] = None) -> bool:
    return _default.is_short_video(path, video_metadata)
