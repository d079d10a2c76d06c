"""Landmark sources."""

from tryon_app.sources.mediapipe_source import (
    MEDIAPIPE_AVAILABLE,
    MediaPipeLandmarkSource,
    convert_landmarks,
)

__all__ = ["MEDIAPIPE_AVAILABLE", "MediaPipeLandmarkSource", "convert_landmarks"]
