"""
Landmark source backed by MediaPipe Pose and Face Mesh.

Runs both models on each frame and converts their results into plain
RawLandmark sequences for the fusion engine.
"""

import logging
from typing import Optional

import cv2
import numpy as np

try:
    import mediapipe as mp
    from mediapipe.python.solutions import face_mesh as mp_face_mesh
    from mediapipe.python.solutions import pose as mp_pose
    MEDIAPIPE_AVAILABLE = True
except ImportError:
    MEDIAPIPE_AVAILABLE = False
    mp = None
    mp_face_mesh = None
    mp_pose = None

from tryon_app.config import SourceConfig
from tryon_app.core.types import FrameLandmarks, RawLandmark

logger = logging.getLogger(__name__)


def convert_landmarks(landmarks, with_visibility: bool = True) -> Optional[list[RawLandmark]]:
    """
    Convert a MediaPipe NormalizedLandmarkList to RawLandmarks.

    Args:
        landmarks: Object with a ``landmark`` sequence, or None
        with_visibility: Keep the per-point visibility (pose only)

    Returns:
        List of landmarks, or None when nothing was detected
    """
    if landmarks is None:
        return None

    result = []
    for lm in landmarks.landmark:
        result.append(RawLandmark(
            x=float(lm.x),
            y=float(lm.y),
            z=float(lm.z),
            visibility=float(getattr(lm, "visibility", 1.0)) if with_visibility else None,
        ))
    return result


class MediaPipeLandmarkSource:
    """
    MediaPipe Pose + Face Mesh landmark source.

    Attributes:
        config: Model options
    """

    def __init__(self, config: Optional[SourceConfig] = None):
        """Initialize the landmark source."""
        if not MEDIAPIPE_AVAILABLE:
            raise RuntimeError(
                "MediaPipe is not installed. Please install it with: "
                "pip install mediapipe"
            )

        self.config = config or SourceConfig()

        self._pose: Optional[mp_pose.Pose] = None
        self._face_mesh: Optional[mp_face_mesh.FaceMesh] = None

    def __enter__(self):
        """Context manager entry."""
        self.initialize()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        """Context manager exit."""
        self.close()
        return False

    def initialize(self):
        """Create the MediaPipe models."""
        if self._pose is not None:
            self.close()

        self._pose = mp_pose.Pose(
            static_image_mode=False,
            model_complexity=self.config.model_complexity,
            smooth_landmarks=True,
            min_detection_confidence=self.config.min_detection_confidence,
            min_tracking_confidence=self.config.min_tracking_confidence,
        )
        self._face_mesh = mp_face_mesh.FaceMesh(
            static_image_mode=False,
            max_num_faces=1,
            refine_landmarks=self.config.refine_face,
            min_detection_confidence=self.config.min_detection_confidence,
            min_tracking_confidence=self.config.min_tracking_confidence,
        )
        logger.info(f"MediaPipe models ready (complexity={self.config.model_complexity})")

    def close(self):
        """Release resources."""
        if self._pose is not None:
            self._pose.close()
            self._pose = None
        if self._face_mesh is not None:
            self._face_mesh.close()
            self._face_mesh = None

    def __call__(self, frame: np.ndarray) -> FrameLandmarks:
        """
        Detect landmarks in a frame.

        Args:
            frame: BGR image as numpy array (OpenCV format)

        Returns:
            FrameLandmarks with pose and/or face set when detected
        """
        if self._pose is None:
            self.initialize()

        rgb_frame = cv2.cvtColor(frame, cv2.COLOR_BGR2RGB)
        rgb_frame.flags.writeable = False

        pose_results = self._pose.process(rgb_frame)
        face_results = self._face_mesh.process(rgb_frame)

        face = None
        if face_results.multi_face_landmarks:
            face = convert_landmarks(face_results.multi_face_landmarks[0], with_visibility=False)

        return FrameLandmarks(
            pose=convert_landmarks(pose_results.pose_landmarks),
            face=face,
        )
