"""Shared utilities."""

from photocurate.utils.debug import save_debug_image

__all__ = ["save_debug_image"]
