"""Image decoding and geometric preprocessing."""

from photocurate.preprocessing.loader import load_image, read_image_size, is_image_path
from photocurate.preprocessing.geometry import resize_to_bound, center_crop_square

__all__ = [
    "load_image",
    "read_image_size",
    "is_image_path",
    "resize_to_bound",
    "center_crop_square",
]
