import numpy as np
import pytest

from tryon_app.config import AppConfig, TrackerConfig
from tryon_app.core.tracker import SmoothTracker


@pytest.fixture
def tracker():
    return SmoothTracker(TrackerConfig())


@pytest.fixture
def config():
    return AppConfig()


@pytest.fixture
def blank_frame():
    return np.zeros((480, 640, 3), dtype=np.uint8)
