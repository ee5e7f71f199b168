"""Image decoding into uint8 RGB pixel buffers."""

import logging
import mimetypes
from pathlib import Path
from typing import Tuple, Union

import numpy as np
from PIL import Image, ImageOps, UnidentifiedImageError

from photocurate.errors import DecodeFailure

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]

_HEIF_SUFFIXES = ('.heic', '.heif')
_IMAGE_MIME_TYPES = ('image/jpeg', 'image/png')


def _register_heif(path: Path) -> None:
    """Enable HEIC/HEIF decoding in Pillow when the file needs it."""
    if path.suffix.lower() not in _HEIF_SUFFIXES:
        return
    try:
        from pillow_heif import register_heif_opener
    except ImportError as e:
        raise DecodeFailure(
            "pillow-heif is required for HEIC support. "
            "Install with: pip install photocurate[heic]"
        ) from e
    register_heif_opener()


def _to_rgb_array(img: Image.Image) -> np.ndarray:
    if img.mode != 'RGB':
        img = img.convert('RGB')
    return np.asarray(img, dtype=np.uint8).copy()


def load_image(path: PathLike) -> np.ndarray:
    """Decode an image file into an RGB buffer.

    EXIF orientation is applied so the buffer matches what a viewer shows.
    Alpha is dropped and greyscale/palette images are expanded to RGB.

    Args:
        path: Path to a JPEG, PNG (or HEIC, with pillow-heif installed) file

    Returns:
        uint8 array with shape (H, W, 3)

    Raises:
        DecodeFailure: If the file is missing, unreadable or corrupt
    """
    path = Path(path)

    if not path.is_file():
        raise DecodeFailure(f"Image file not found: {path}")

    _register_heif(path)

    try:
        with Image.open(path) as img:
            img.load()
            img = ImageOps.exif_transpose(img)
            arr = _to_rgb_array(img)
    except (UnidentifiedImageError, OSError, SyntaxError) as e:
        raise DecodeFailure(f"Cannot decode image {path}: {e}") from e

    logger.debug(f"Loaded {path.name} ({arr.shape[1]}x{arr.shape[0]})")

    return arr


def read_image_size(path: PathLike) -> Tuple[int, int]:
    """Read (width, height) from the image header without decoding pixels.

    Raises:
        DecodeFailure: If the file is missing or not a recognised image
    """
    path = Path(path)

    if not path.is_file():
        raise DecodeFailure(f"Image file not found: {path}")

    _register_heif(path)

    try:
        with Image.open(path) as img:
            return img.size
    except (UnidentifiedImageError, OSError, SyntaxError) as e:
        raise DecodeFailure(f"Cannot read image header {path}: {e}") from e


def is_image_path(path: PathLike) -> bool:
    """Return True if the extension maps to a JPEG or PNG MIME type."""
    mime, _ = mimetypes.guess_type(str(path).lower())
    return mime in _IMAGE_MIME_TYPES
