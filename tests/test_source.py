from types import SimpleNamespace

import pytest

from tryon_app.core.types import RawLandmark
from tryon_app.sources import mediapipe_source
from tryon_app.sources.mediapipe_source import MediaPipeLandmarkSource, convert_landmarks


def landmark_list(*points):
    return SimpleNamespace(landmark=[SimpleNamespace(**p) for p in points])


def test_convert_none():
    assert convert_landmarks(None) is None


def test_convert_pose_keeps_visibility():
    result = convert_landmarks(landmark_list(
        {"x": 0.1, "y": 0.2, "z": -0.3, "visibility": 0.7},
        {"x": 0.4, "y": 0.5, "z": 0.0},
    ))

    assert result == [
        RawLandmark(0.1, 0.2, -0.3, 0.7),
        RawLandmark(0.4, 0.5, 0.0, 1.0),
    ]


def test_convert_face_drops_visibility():
    result = convert_landmarks(
        landmark_list({"x": 0.1, "y": 0.2, "z": 0.01, "visibility": 0.0}),
        with_visibility=False,
    )

    assert result == [RawLandmark(0.1, 0.2, 0.01, None)]


def test_source_requires_mediapipe(monkeypatch):
    monkeypatch.setattr(mediapipe_source, "MEDIAPIPE_AVAILABLE", False)

    with pytest.raises(RuntimeError, match="MediaPipe is not installed"):
        MediaPipeLandmarkSource()
