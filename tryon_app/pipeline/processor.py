"""
Try-on processing pipeline.

Orchestrates landmark detection, temporal fusion, and accessory rendering.
"""

import logging
from pathlib import Path
from typing import Callable, List, Optional

import cv2
import numpy as np
from numpy.typing import NDArray
from rich.console import Console
from rich.progress import track

from tryon_app.config import AppConfig
from tryon_app.core.tracker import SmoothTracker
from tryon_app.core.types import AccessoryType, FrameLandmarks, TrackingSnapshot
from tryon_app.render.accessories import AccessoryRenderer

logger = logging.getLogger(__name__)
console = Console()

LandmarkSource = Callable[[NDArray[np.uint8]], FrameLandmarks]


class TryOnProcessor:
    """
    Complete try-on pipeline.

    Pipeline stages:
    1. Landmark detection (MediaPipe Pose + Face Mesh)
    2. Temporal smoothing and confidence gating (SmoothTracker)
    3. Accessory rendering (OpenCV)
    """

    def __init__(self, config: AppConfig, source: Optional[LandmarkSource] = None):
        """
        Initialize the pipeline.

        Args:
            config: Application configuration
            source: Landmark source; a MediaPipe source is created when omitted
        """
        self.config = config

        if source is None:
            from tryon_app.sources.mediapipe_source import MediaPipeLandmarkSource

            source = MediaPipeLandmarkSource(config.source)

        self.source = source
        self.tracker = SmoothTracker(config.tracker)
        self.renderer = AccessoryRenderer(config.render)

        self.frame_count = 0

    @property
    def accessory(self) -> AccessoryType:
        return self.config.render.accessory

    def set_accessory(self, accessory) -> AccessoryType:
        """Switch accessory. History is cleared so the new anchor starts fresh."""
        accessory = AccessoryType.parse(accessory)
        if accessory is not self.config.render.accessory:
            self.config.render.accessory = accessory
            self.tracker.reset()
            logger.info(f"Accessory switched to {accessory.value}")
        return accessory

    def process_frame(self, frame: NDArray[np.uint8]) -> Optional[TrackingSnapshot]:
        """
        Process a single frame and draw the accessory onto it in place.

        Args:
            frame: Input frame (BGR format)

        Returns:
            Tracking snapshot, or None when nothing was trackable
        """
        landmarks = self.source(frame)
        snapshot = self.tracker.process(landmarks)
        self.renderer.render(frame, snapshot, self.accessory)

        self.frame_count += 1
        return snapshot

    def process_video(
        self,
        video_path: Path,
        output_path: Optional[Path] = None,
        show_progress: bool = True,
    ) -> List[Optional[TrackingSnapshot]]:
        """
        Process an entire video.

        Args:
            video_path: Path to input video
            output_path: Optional path to save the rendered video
            show_progress: Whether to show progress bar

        Returns:
            Per-frame snapshots (None for frames with no usable data)
        """
        cap = cv2.VideoCapture(str(video_path))

        if not cap.isOpened():
            raise ValueError(f"Could not open video: {video_path}")

        fps = cap.get(cv2.CAP_PROP_FPS) or 30.0
        width = int(cap.get(cv2.CAP_PROP_FRAME_WIDTH))
        height = int(cap.get(cv2.CAP_PROP_FRAME_HEIGHT))
        total_frames = int(cap.get(cv2.CAP_PROP_FRAME_COUNT))

        console.print(f"[cyan]Processing video:[/cyan] {video_path}")
        console.print(f"  Resolution: {width}x{height}")
        console.print(f"  FPS: {fps}")
        console.print(f"  Frames: {total_frames}")
        console.print(f"  Accessory: {self.accessory.value}")

        writer = None
        if output_path:
            codec = "MJPG" if Path(output_path).suffix.lower() == ".avi" else "mp4v"
            fourcc = cv2.VideoWriter_fourcc(*codec)
            writer = cv2.VideoWriter(str(output_path), fourcc, fps, (width, height))

        self.reset()
        results = []

        iterator = range(total_frames)
        if show_progress:
            iterator = track(iterator, description="Processing frames", total=total_frames)

        try:
            for _ in iterator:
                ret, frame = cap.read()
                if not ret:
                    break

                results.append(self.process_frame(frame))

                if writer:
                    writer.write(frame)
        finally:
            cap.release()
            if writer:
                writer.release()

        if writer:
            console.print(f"[green]✓[/green] Saved video: {output_path}")

        tracked = sum(1 for r in results if r is not None)
        console.print(f"[green]✓[/green] Processed {len(results)} frames ({tracked} tracked)")

        return results

    def reset(self):
        """Reset pipeline state."""
        self.tracker.reset()
        self.frame_count = 0

    def close(self):
        """Release the landmark source if it holds resources."""
        close = getattr(self.source, "close", None)
        if close is not None:
            close()
