"""Display geometry providers for screenshot detection."""

import logging
from dataclasses import dataclass
from typing import Optional, Protocol, Tuple

from photocurate.config import load_display_size

logger = logging.getLogger(__name__)


class DisplayGeometryProvider(Protocol):
    """Anything that can report the current display size."""

    def size(self) -> Tuple[int, int]:
        """Return (width, height) in pixels."""
        ...


@dataclass(frozen=True)
class StaticDisplayGeometry:
    """Fixed display size, e.g. from configuration."""

    width: int
    height: int

    def size(self) -> Tuple[int, int]:
        return self.width, self.height


def display_from_env() -> Optional[StaticDisplayGeometry]:
    """Build a provider from PHOTOCURATE_DISPLAY_WIDTH/HEIGHT, if set."""
    size = load_display_size()
    if size is None:
        return None
    return StaticDisplayGeometry(*size)
