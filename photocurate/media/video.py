"""Video metadata providers and frame extraction."""

import logging
from pathlib import Path
from typing import Protocol, Union

import cv2
import numpy as np

from photocurate.errors import DecodeFailure

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]


class VideoMetadataProvider(Protocol):
    """Anything that can report a video's length."""

    def duration_ms(self, path: PathLike) -> int:
        """Return the duration in milliseconds, raising DecodeFailure on error."""
        ...


class OpenCVVideoMetadata:
    """Duration from frame count and frame rate via OpenCV."""

    def duration_ms(self, path: PathLike) -> int:
        capture = cv2.VideoCapture(str(path))
        try:
            if not capture.isOpened():
                raise DecodeFailure(f"Cannot open video: {path}")

            frames = capture.get(cv2.CAP_PROP_FRAME_COUNT)
            fps = capture.get(cv2.CAP_PROP_FPS)
        finally:
            capture.release()

        if fps <= 0 or frames <= 0:
            raise DecodeFailure(f"Video has no usable duration metadata: {path}")

        duration = int(round(frames / fps * 1000))
        logger.debug(f"Video {Path(path).name}: {frames:.0f} frames @ {fps:.2f} fps = {duration} ms")

        return duration


def video_thumbnail(path: PathLike) -> np.ndarray:
    """Decode the first frame of a video as a uint8 RGB buffer.

    Raises:
        DecodeFailure: If the video cannot be opened or has no frames
    """
    capture = cv2.VideoCapture(str(path))
    try:
        ok, frame = capture.read() if capture.isOpened() else (False, None)
    finally:
        capture.release()

    if not ok or frame is None:
        raise DecodeFailure(f"Cannot read a frame from video: {path}")

    return cv2.cvtColor(frame, cv2.COLOR_BGR2RGB)
