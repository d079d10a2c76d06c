"""Core tracking data types."""

from tryon_app.core.types import (
    AccessoryType,
    FrameLandmarks,
    Point3D,
    RawLandmark,
    TrackingSnapshot,
)

__all__ = [
    "AccessoryType",
    "FrameLandmarks",
    "Point3D",
    "RawLandmark",
    "TrackingSnapshot",
]
