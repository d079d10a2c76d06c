"""Landmark builders and a replaying source shared by the test modules."""

from typing import Dict, Optional

from tryon_app.core.landmarks import FaceKey, PoseKey
from tryon_app.core.types import FrameLandmarks, RawLandmark

POSE_SIZE = 33
FACE_SIZE = 468


def make_pose(points: Dict[PoseKey, RawLandmark], filler_visibility: float = 0.0):
    """33 pose landmarks; untracked slots get ``filler_visibility``."""
    pose = [RawLandmark(0.5, 0.5, 0.0, filler_visibility) for _ in range(POSE_SIZE)]
    for key, landmark in points.items():
        pose[key.value] = landmark
    return pose


def make_face(points: Dict[FaceKey, RawLandmark]):
    face = [RawLandmark(0.5, 0.5, 0.0) for _ in range(FACE_SIZE)]
    for key, landmark in points.items():
        face[key.value] = landmark
    return face


def shoulders(left_x=0.4, right_x=0.6, y=0.3, visibility=0.9):
    return {
        PoseKey.LEFT_SHOULDER: RawLandmark(left_x, y, None, visibility),
        PoseKey.RIGHT_SHOULDER: RawLandmark(right_x, y, None, visibility),
    }


def face_points(forehead=(0.5, 0.2), left_x=0.42, right_x=0.58):
    return {
        FaceKey.FOREHEAD: RawLandmark(*forehead, 0.0),
        FaceKey.CHIN: RawLandmark(0.5, 0.45, 0.0),
        FaceKey.LEFT_FACE: RawLandmark(left_x, 0.3, 0.0),
        FaceKey.RIGHT_FACE: RawLandmark(right_x, 0.3, 0.0),
    }


class FakeSource:
    """Landmark source that replays fixed results."""

    def __init__(self, *frames: Optional[FrameLandmarks]):
        self.frames = list(frames)
        self.calls = 0
        self.closed = False

    def __call__(self, frame):
        result = self.frames[min(self.calls, len(self.frames) - 1)]
        self.calls += 1
        return result or FrameLandmarks()

    def close(self):
        self.closed = True
