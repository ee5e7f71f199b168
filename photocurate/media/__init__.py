"""External collaborators: display geometry and video metadata."""

from photocurate.media.display import (
    DisplayGeometryProvider,
    StaticDisplayGeometry,
    display_from_env,
)
from photocurate.media.video import (
    OpenCVVideoMetadata,
    VideoMetadataProvider,
    video_thumbnail,
)

__all__ = [
    "DisplayGeometryProvider",
    "StaticDisplayGeometry",
    "display_from_env",
    "OpenCVVideoMetadata",
    "VideoMetadataProvider",
    "video_thumbnail",
]
