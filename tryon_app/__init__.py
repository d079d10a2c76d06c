"""
Virtual Accessory Try-On

Places procedurally drawn accessories on a person in live video using
temporally smoothed MediaPipe pose and face mesh landmarks.

Features:
- Bounded-history, recency-weighted landmark smoothing
- Confidence gating of pose landmarks
- Derived anchors: neck center, shoulder width, face width
- Ring, necklace and tiara rendering with OpenCV

License: MIT
"""

__version__ = "1.0.0"
__author__ = "Accessory Try-On Contributors"

from pathlib import Path

# Package root
PACKAGE_ROOT = Path(__file__).parent

__all__ = [
    "__version__",
    "PACKAGE_ROOT",
]
