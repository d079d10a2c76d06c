import numpy as np
import pytest

from tryon_app.core.landmarks import FaceKey, PoseKey
from tryon_app.core.types import Point3D, RawLandmark
from tryon_app.filters.history import LandmarkHistory


def expected_mean(points):
    points = np.asarray(points, dtype=float)
    weights = np.arange(1, len(points) + 1)
    return weights @ points / weights.sum()


def test_single_point_is_returned_unchanged():
    history = LandmarkHistory(PoseKey)
    result = history.smooth(PoseKey.LEFT_WRIST, RawLandmark(0.25, 0.75, -0.1))
    assert result == pytest.approx(Point3D(0.25, 0.75, -0.1))


def test_linear_recency_weighting():
    history = LandmarkHistory(PoseKey)
    samples = [(0.1, 0.2, 0.0), (0.3, 0.1, 0.2), (0.6, 0.4, -0.2)]

    for x, y, z in samples:
        result = history.smooth(PoseKey.LEFT_WRIST, RawLandmark(x, y, z))

    np.testing.assert_allclose(result, expected_mean(samples))
    # (0.1*1 + 0.3*2 + 0.6*3) / 6
    assert result.x == pytest.approx(2.5 / 6)


def test_history_is_bounded_and_keeps_latest_samples():
    history = LandmarkHistory(PoseKey, capacity=5)
    samples = [(i / 10, 1 - i / 10, i / 100) for i in range(10)]

    for x, y, z in samples:
        result = history.smooth(PoseKey.RIGHT_INDEX, RawLandmark(x, y, z))
        assert history.length(PoseKey.RIGHT_INDEX) <= 5

    assert history.length(PoseKey.RIGHT_INDEX) == 5
    np.testing.assert_allclose(history.points(PoseKey.RIGHT_INDEX), samples[-5:])
    np.testing.assert_allclose(result, expected_mean(samples[-5:]))


def test_missing_z_counts_as_zero():
    history = LandmarkHistory(FaceKey)
    history.smooth(FaceKey.CHIN, RawLandmark(0.2, 0.2, 0.3))
    result = history.smooth(FaceKey.CHIN, RawLandmark(0.4, 0.4, None))

    assert result.x == pytest.approx((0.2 + 0.4 * 2) / 3)
    assert result.z == pytest.approx(0.3 / 3)


def test_keys_are_independent():
    history = LandmarkHistory(PoseKey)
    history.smooth(PoseKey.LEFT_SHOULDER, RawLandmark(0.1, 0.1))
    result = history.smooth(PoseKey.RIGHT_SHOULDER, RawLandmark(0.9, 0.9))

    assert result == pytest.approx(Point3D(0.9, 0.9, 0.0))
    assert history.length(PoseKey.LEFT_SHOULDER) == 1
    assert len(history) == 2


def test_reset_single_key():
    history = LandmarkHistory(PoseKey)
    history.smooth(PoseKey.LEFT_WRIST, RawLandmark(0.1, 0.1))
    history.smooth(PoseKey.RIGHT_WRIST, RawLandmark(0.2, 0.2))

    history.reset(PoseKey.LEFT_WRIST)

    assert history.length(PoseKey.LEFT_WRIST) == 0
    assert history.length(PoseKey.RIGHT_WRIST) == 1


def test_reset_then_single_sample_has_no_residue():
    history = LandmarkHistory(PoseKey)
    for i in range(7):
        history.smooth(PoseKey.LEFT_INDEX, RawLandmark(0.1 * i, 0.05 * i, 0.01 * i))

    history.reset()
    result = history.smooth(PoseKey.LEFT_INDEX, RawLandmark(0.33, 0.44, 0.05))

    assert len(history) == 1
    assert result == pytest.approx(Point3D(0.33, 0.44, 0.05))


def test_invalid_capacity():
    with pytest.raises(ValueError):
        LandmarkHistory(PoseKey, capacity=0)
