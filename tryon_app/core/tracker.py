"""
Landmark fusion engine.

Turns per-frame pose and face mesh landmarks into a single smoothed
TrackingSnapshot with the derived geometry accessories are anchored to.
"""

import logging
from typing import Optional, Sequence

from tryon_app.config import TrackerConfig
from tryon_app.core.landmarks import FACE_FIELDS, POSE_FIELDS, FaceKey, PoseKey
from tryon_app.core.types import FrameLandmarks, Point3D, RawLandmark, TrackingSnapshot
from tryon_app.filters.history import LandmarkHistory

logger = logging.getLogger(__name__)


def _landmark_at(landmarks: Sequence[RawLandmark], index: int) -> Optional[RawLandmark]:
    if index < len(landmarks):
        return landmarks[index]
    return None


class SmoothTracker:
    """
    Smooth pose and face landmarks across frames.

    Pose landmarks below the confidence threshold are dropped before they reach
    history. Face mesh landmarks have no per-point visibility and are always
    accepted. One tracker instance tracks one subject; calls must not overlap.
    """

    def __init__(self, config: Optional[TrackerConfig] = None):
        self.config = config or TrackerConfig()

        self.pose_history = LandmarkHistory(PoseKey, self.config.history_size)
        self.face_history = LandmarkHistory(FaceKey, self.config.history_size)

    def process(self, landmarks: FrameLandmarks) -> Optional[TrackingSnapshot]:
        """
        Process one frame of raw landmarks.

        Args:
            landmarks: Pose and face landmark sets; either may be None

        Returns:
            TrackingSnapshot, or None when neither the shoulder pair nor the
            forehead could be tracked this frame
        """
        snapshot = TrackingSnapshot()
        has_valid_data = False

        if landmarks.pose:
            if self._process_pose(landmarks.pose, snapshot):
                has_valid_data = True

        if landmarks.face:
            if self._process_face(landmarks.face, snapshot):
                has_valid_data = True

        if not has_valid_data:
            logger.debug("No usable landmarks this frame")
            return None

        return snapshot

    def _process_pose(self, pose: Sequence[RawLandmark], snapshot: TrackingSnapshot) -> bool:
        smoothed = {}
        for key, name in POSE_FIELDS.items():
            point = self.smooth_pose_landmark(key, _landmark_at(pose, key.value))
            if point is not None:
                smoothed[key] = point
                setattr(snapshot, name, point)

        snapshot.pose_confidence = self.pose_confidence(pose)

        left = smoothed.get(PoseKey.LEFT_SHOULDER)
        right = smoothed.get(PoseKey.RIGHT_SHOULDER)
        if left is None or right is None:
            return False

        snapshot.neck_center = midpoint(left, right)
        snapshot.shoulder_width = abs(right.x - left.x)
        return True

    def _process_face(self, face: Sequence[RawLandmark], snapshot: TrackingSnapshot) -> bool:
        for key, name in FACE_FIELDS.items():
            point = self.smooth_face_landmark(key, _landmark_at(face, key.value))
            if point is not None:
                setattr(snapshot, name, point)

        left = self.smooth_face_landmark(FaceKey.LEFT_FACE, _landmark_at(face, FaceKey.LEFT_FACE.value))
        right = self.smooth_face_landmark(FaceKey.RIGHT_FACE, _landmark_at(face, FaceKey.RIGHT_FACE.value))
        if left is not None and right is not None:
            snapshot.face_width = abs(right.x - left.x)

        snapshot.face_confidence = self.config.face_confidence

        return snapshot.forehead is not None

    def passes_gate(self, landmark: RawLandmark) -> bool:
        """Whether a pose landmark is visible enough to enter history."""
        if landmark.visibility is None:
            return True
        return landmark.visibility >= self.config.confidence_threshold

    def smooth_pose_landmark(self, key: PoseKey, landmark: Optional[RawLandmark]) -> Optional[Point3D]:
        """Gate and smooth a pose landmark. Rejected samples leave history untouched."""
        if landmark is None:
            return None
        if not self.passes_gate(landmark):
            logger.debug(f"Rejected {key.name}: visibility {landmark.visibility:.2f}")
            return None
        return self.pose_history.smooth(key, landmark)

    def smooth_face_landmark(self, key: FaceKey, landmark: Optional[RawLandmark]) -> Optional[Point3D]:
        """Smooth a face mesh landmark."""
        if landmark is None:
            return None
        return self.face_history.smooth(key, landmark)

    def pose_confidence(self, pose: Sequence[RawLandmark]) -> float:
        """Fraction of pose landmarks whose visibility is strictly above the threshold."""
        if not pose:
            return 0.0

        threshold = self.config.confidence_threshold
        visible = sum(
            1 for lm in pose
            if lm.visibility is None or lm.visibility > threshold
        )
        return visible / len(pose)

    def reset(self):
        """Discard all smoothing history."""
        self.pose_history.reset()
        self.face_history.reset()
        logger.debug("Tracker history cleared")


def midpoint(a: Point3D, b: Point3D) -> Point3D:
    """Midpoint of two points."""
    return Point3D((a.x + b.x) / 2, (a.y + b.y) / 2, (a.z + b.z) / 2)
