"""
Bounded-history, recency-weighted smoothing for landmark keys.

Each key owns a fixed-size ring buffer. The smoothed value is the linearly
weighted mean of the buffered points: the i-th point (1 = oldest, L = newest)
carries weight i / L.
"""

from enum import Enum
from typing import Optional, Type

import numpy as np
from numpy.typing import NDArray

from tryon_app.core.types import Point3D, RawLandmark


class LandmarkHistory:
    """
    Fixed arena of ring buffers indexed by an enumerated key set.

    Storage is a single (num_keys, capacity, 3) array. Insertion order, not
    wall-clock time, defines recency.
    """

    def __init__(self, keys: Type[Enum], capacity: int = 5):
        if capacity < 1:
            raise ValueError(f"History capacity must be >= 1, got {capacity}")

        self.keys = keys
        self.capacity = capacity

        self._slots = {key: i for i, key in enumerate(keys)}
        self._points: NDArray[np.float64] = np.zeros((len(self._slots), capacity, 3))
        self._count = np.zeros(len(self._slots), dtype=np.int64)
        self._head = np.zeros(len(self._slots), dtype=np.int64)  # next write slot

    def __len__(self) -> int:
        return int(self._count.sum())

    def length(self, key: Enum) -> int:
        """Number of points currently buffered for a key."""
        return int(self._count[self._slots[key]])

    def points(self, key: Enum) -> NDArray[np.float64]:
        """Buffered points for a key, oldest first, shape (L, 3)."""
        slot = self._slots[key]
        count = self._count[slot]
        order = (self._head[slot] - count + np.arange(count)) % self.capacity
        return self._points[slot, order].copy()

    def smooth(self, key: Enum, landmark: RawLandmark) -> Point3D:
        """
        Push a sample for a key and return the weighted mean.

        Args:
            key: Landmark key
            landmark: Raw sample; a missing z is stored as 0

        Returns:
            Smoothed point over the (at most ``capacity``) most recent samples
        """
        slot = self._slots[key]
        z = landmark.z if landmark.z is not None else 0.0

        # Overwriting the head slot evicts the oldest sample once full
        self._points[slot, self._head[slot]] = (landmark.x, landmark.y, z)
        self._head[slot] = (self._head[slot] + 1) % self.capacity
        self._count[slot] = min(self._count[slot] + 1, self.capacity)

        points = self.points(key)
        length = len(points)
        weights = np.arange(1, length + 1) / length
        x, y, z = weights @ points / weights.sum()

        return Point3D(float(x), float(y), float(z))

    def reset(self, key: Optional[Enum] = None):
        """Drop history for a key, or for all keys."""
        if key is None:
            self._count[:] = 0
            self._head[:] = 0
        else:
            slot = self._slots[key]
            self._count[slot] = 0
            self._head[slot] = 0
