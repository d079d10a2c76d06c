"""
Configuration system for the accessory try-on application.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional, Tuple

import yaml

from tryon_app.core.types import AccessoryType


@dataclass
class SourceConfig:
    """MediaPipe landmark source configuration."""

    model_complexity: int = 1  # 0, 1, or 2
    min_detection_confidence: float = 0.5
    min_tracking_confidence: float = 0.5

    # Use the refined face mesh (478 points, adds irises)
    refine_face: bool = False


@dataclass
class TrackerConfig:
    """Temporal smoothing and confidence gating configuration."""

    history_size: int = 5
    confidence_threshold: float = 0.5

    # Face mesh exposes no per-point visibility
    face_confidence: float = 0.8


@dataclass
class RenderConfig:
    """Accessory rendering configuration."""

    accessory: AccessoryType = AccessoryType.NECKLACE

    # Primary metal color override (BGR); None keeps each accessory's palette
    color: Optional[Tuple[int, int, int]] = None
    size: float = 1.0
    opacity: float = 1.0

    # Draw the tracked anchor points for debugging
    show_landmarks: bool = False

    def __post_init__(self):
        self.accessory = AccessoryType.parse(self.accessory)
        if self.color is not None:
            self.color = tuple(int(c) for c in self.color)


@dataclass
class AppConfig:
    """Main application configuration."""

    camera_index: int = 0
    window_name: str = "Accessory Try-On"

    # Component configs
    source: SourceConfig = field(default_factory=SourceConfig)
    tracker: TrackerConfig = field(default_factory=TrackerConfig)
    render: RenderConfig = field(default_factory=RenderConfig)

    @classmethod
    def from_yaml(cls, path: Path) -> "AppConfig":
        """Load configuration from YAML file."""
        with open(path, "r") as f:
            data = yaml.safe_load(f) or {}

        config = cls()

        if "camera_index" in data:
            config.camera_index = int(data["camera_index"])
        if "window_name" in data:
            config.window_name = str(data["window_name"])

        if "source" in data:
            config.source = SourceConfig(**data["source"])
        if "tracker" in data:
            config.tracker = TrackerConfig(**data["tracker"])
        if "render" in data:
            config.render = RenderConfig(**data["render"])

        return config

    def to_yaml(self, path: Path) -> None:
        """Save configuration to YAML file."""

        def to_dict(obj):
            if hasattr(obj, "__dataclass_fields__"):
                return {k: to_dict(v) for k, v in obj.__dict__.items()}
            elif isinstance(obj, AccessoryType):
                return obj.value
            elif isinstance(obj, tuple):
                return list(obj)
            elif isinstance(obj, Path):
                return str(obj)
            return obj

        data = to_dict(self)

        with open(path, "w") as f:
            yaml.dump(data, f, default_flow_style=False, sort_keys=False)

    def validate(self) -> List[str]:
        """Validate configuration and return list of warnings/errors."""
        issues = []

        if self.tracker.history_size < 1:
            issues.append(f"tracker.history_size must be >= 1, got {self.tracker.history_size}")

        if not 0.0 <= self.tracker.confidence_threshold <= 1.0:
            issues.append(
                f"tracker.confidence_threshold must be in [0, 1], got {self.tracker.confidence_threshold}"
            )

        if not 0.0 <= self.tracker.face_confidence <= 1.0:
            issues.append(f"tracker.face_confidence must be in [0, 1], got {self.tracker.face_confidence}")

        if self.source.model_complexity not in (0, 1, 2):
            issues.append(f"source.model_complexity must be 0, 1 or 2, got {self.source.model_complexity}")

        if self.render.size <= 0:
            issues.append(f"render.size must be positive, got {self.render.size}")

        if not 0.0 <= self.render.opacity <= 1.0:
            issues.append(f"render.opacity must be in [0, 1], got {self.render.opacity}")

        if self.render.color is not None and len(self.render.color) != 3:
            issues.append("render.color must be a BGR triple")

        return issues
