"""
Core data types for the accessory try-on system.
"""

from dataclasses import dataclass, fields
from enum import Enum
from typing import Dict, NamedTuple, Optional, Sequence, Tuple


class RawLandmark(NamedTuple):
    """A single normalized landmark as produced by a landmark model."""
    x: float
    y: float
    z: Optional[float] = None
    visibility: Optional[float] = None


class Point3D(NamedTuple):
    """A smoothed point in normalized frame coordinates."""
    x: float
    y: float
    z: float = 0.0

    def to_pixels(self, width: int, height: int) -> Tuple[int, int]:
        """Denormalize to integer pixel coordinates."""
        return int(round(self.x * width)), int(round(self.y * height))


class AccessoryType(Enum):
    """Accessories the renderer knows how to draw."""
    RING = "ring"
    NECKLACE = "necklace"
    TIARA = "tiara"

    @classmethod
    def parse(cls, value) -> "AccessoryType":
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).lower())
        except ValueError:
            choices = ", ".join(a.value for a in cls)
            raise ValueError(f"Unknown accessory '{value}' (expected one of: {choices})")


@dataclass
class FrameLandmarks:
    """Raw landmark sets for one frame. Either source may be missing."""

    pose: Optional[Sequence[RawLandmark]] = None  # 33 MediaPipe pose points
    face: Optional[Sequence[RawLandmark]] = None  # 468/478 face mesh points


@dataclass
class TrackingSnapshot:
    """
    Smoothed tracking output for a single frame.

    Every field is optional; ``None`` means the measurement was not available
    this frame, which is distinct from a zero value.
    """

    # Pose landmarks
    left_shoulder: Optional[Point3D] = None
    right_shoulder: Optional[Point3D] = None
    left_wrist: Optional[Point3D] = None
    right_wrist: Optional[Point3D] = None
    left_index: Optional[Point3D] = None
    right_index: Optional[Point3D] = None

    # Face landmarks
    forehead: Optional[Point3D] = None
    chin: Optional[Point3D] = None

    # Derived geometry
    neck_center: Optional[Point3D] = None
    shoulder_width: Optional[float] = None
    face_width: Optional[float] = None

    # Confidence scores
    pose_confidence: Optional[float] = None
    face_confidence: Optional[float] = None

    def to_dict(self) -> Dict:
        """Convert present fields to a plain dictionary."""
        result = {}
        for f in fields(self):
            value = getattr(self, f.name)
            if value is None:
                continue
            if isinstance(value, Point3D):
                value = value._asdict()
            result[f.name] = value
        return result
