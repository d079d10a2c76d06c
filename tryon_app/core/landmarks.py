"""
Landmark keys tracked by the fusion engine and their MediaPipe indices.
"""

from enum import Enum


class PoseLandmark:
    """Pose landmark indices used by MediaPipe Pose."""
    LEFT_SHOULDER = 11
    RIGHT_SHOULDER = 12
    LEFT_WRIST = 15
    RIGHT_WRIST = 16
    LEFT_INDEX = 19
    RIGHT_INDEX = 20


class FaceMeshLandmark:
    """Face mesh indices used for accessory anchoring."""
    FOREHEAD = 10  # top of forehead
    CHIN = 152
    LEFT_EDGE = 234
    RIGHT_EDGE = 454


class PoseKey(Enum):
    """Pose-derived keys. The value is the source landmark index."""
    LEFT_SHOULDER = PoseLandmark.LEFT_SHOULDER
    RIGHT_SHOULDER = PoseLandmark.RIGHT_SHOULDER
    LEFT_WRIST = PoseLandmark.LEFT_WRIST
    RIGHT_WRIST = PoseLandmark.RIGHT_WRIST
    LEFT_INDEX = PoseLandmark.LEFT_INDEX
    RIGHT_INDEX = PoseLandmark.RIGHT_INDEX


class FaceKey(Enum):
    """Face-mesh-derived keys. The value is the source landmark index."""
    FOREHEAD = FaceMeshLandmark.FOREHEAD
    CHIN = FaceMeshLandmark.CHIN
    LEFT_FACE = FaceMeshLandmark.LEFT_EDGE
    RIGHT_FACE = FaceMeshLandmark.RIGHT_EDGE


# Snapshot attribute for keys that are exposed directly.
# Face edges are geometry-only and feed face_width.
POSE_FIELDS = {
    PoseKey.LEFT_SHOULDER: "left_shoulder",
    PoseKey.RIGHT_SHOULDER: "right_shoulder",
    PoseKey.LEFT_WRIST: "left_wrist",
    PoseKey.RIGHT_WRIST: "right_wrist",
    PoseKey.LEFT_INDEX: "left_index",
    PoseKey.RIGHT_INDEX: "right_index",
}

FACE_FIELDS = {
    FaceKey.FOREHEAD: "forehead",
    FaceKey.CHIN: "chin",
}
