"""
Procedural accessory drawing.

Accessories are drawn onto a BGR image with OpenCV. The renderer is the only
place normalized tracking coordinates are converted to pixels.
"""

from typing import Optional, Tuple

import cv2
import numpy as np

from tryon_app.config import RenderConfig
from tryon_app.core.types import AccessoryType, Point3D, TrackingSnapshot

Color = Tuple[int, int, int]

# Palette (BGR)
GOLD: Color = (0, 215, 255)
SILVER: Color = (192, 192, 192)
PINK: Color = (180, 105, 255)
DEEP_PINK: Color = (147, 20, 255)
DARK_MAGENTA: Color = (139, 0, 139)
RED: Color = (0, 0, 255)
BLUE: Color = (255, 0, 0)

NECKLACE_WIDTH_RATIO = 0.6  # of shoulder width
TIARA_WIDTH_RATIO = 0.8  # of face width


class AccessoryRenderer:
    """
    Draw the selected accessory at the tracked anchor points.

    Rendering is a pure function of the frame, the accessory type and the
    snapshot. Missing anchors mean nothing is drawn.
    """

    def __init__(self, config: Optional[RenderConfig] = None):
        self.config = config or RenderConfig()

    @property
    def metal(self) -> Color:
        return self.config.color or GOLD

    def _scale(self, value: float) -> int:
        return max(1, int(round(value * self.config.size)))

    def render(
        self,
        frame: np.ndarray,
        snapshot: Optional[TrackingSnapshot],
        accessory: Optional[AccessoryType] = None,
    ) -> np.ndarray:
        """
        Draw an accessory onto a frame.

        Args:
            frame: BGR image, modified in place
            snapshot: Tracking output for this frame, or None
            accessory: Accessory to draw; defaults to the configured one

        Returns:
            The same frame
        """
        if snapshot is None:
            return frame

        accessory = AccessoryType.parse(accessory or self.config.accessory)
        layer = frame.copy()

        if accessory is AccessoryType.RING:
            self.render_ring(layer, snapshot)
        elif accessory is AccessoryType.NECKLACE:
            self.render_necklace(layer, snapshot)
        elif accessory is AccessoryType.TIARA:
            self.render_tiara(layer, snapshot)

        if self.config.show_landmarks:
            self.draw_landmarks(layer, snapshot)

        opacity = self.config.opacity
        if opacity >= 1.0:
            frame[:] = layer
        else:
            cv2.addWeighted(layer, opacity, frame, 1.0 - opacity, 0, dst=frame)

        return frame

    def render_ring(self, canvas: np.ndarray, snapshot: TrackingSnapshot):
        """Rings on both index fingertips when available."""
        height, width = canvas.shape[:2]
        for tip in (snapshot.left_index, snapshot.right_index):
            if tip is not None:
                self.draw_ring(canvas, tip.to_pixels(width, height))

    def render_necklace(self, canvas: np.ndarray, snapshot: TrackingSnapshot):
        """Necklace hanging below the neck center, sized by shoulder width."""
        if snapshot.neck_center is None or not snapshot.shoulder_width:
            return

        height, width = canvas.shape[:2]
        center = snapshot.neck_center.to_pixels(width, height)
        span = snapshot.shoulder_width * width * NECKLACE_WIDTH_RATIO
        self.draw_necklace(canvas, center, span)

    def render_tiara(self, canvas: np.ndarray, snapshot: TrackingSnapshot):
        """Tiara resting on the forehead, sized by face width."""
        if snapshot.forehead is None or not snapshot.face_width:
            return

        height, width = canvas.shape[:2]
        center = snapshot.forehead.to_pixels(width, height)
        span = snapshot.face_width * width * TIARA_WIDTH_RATIO
        self.draw_tiara(canvas, center, span)

    def draw_ring(self, canvas: np.ndarray, position: Tuple[int, int]):
        x, y = position
        radius = self._scale(12)

        # Band
        cv2.circle(canvas, (x, y), radius, self.metal, self._scale(4), cv2.LINE_AA)

        # Diamond gem sitting on top of the band
        gem = np.array([
            (x, y - radius - self._scale(8)),
            (x - self._scale(6), y - radius - self._scale(2)),
            (x, y - radius + self._scale(4)),
            (x + self._scale(6), y - radius - self._scale(2)),
        ], dtype=np.int32)
        cv2.fillPoly(canvas, [gem], PINK, cv2.LINE_AA)
        cv2.polylines(canvas, [gem], True, DARK_MAGENTA, 1, cv2.LINE_AA)

    def draw_necklace(self, canvas: np.ndarray, center: Tuple[int, int], span: float):
        bead_count = 15
        depth = self._scale(40)
        cx, cy = center

        # Beads on the lower half of an ellipse, left to right
        angles = np.linspace(0.0, np.pi, bead_count)
        xs = cx - np.cos(angles) * (span / 2)
        ys = cy + np.sin(angles) * depth
        beads = np.stack([xs, ys], axis=1).round().astype(np.int32)

        cv2.polylines(canvas, [beads], False, SILVER, self._scale(3), cv2.LINE_AA)
        for bx, by in beads:
            cv2.circle(canvas, (int(bx), int(by)), self._scale(4), self.metal, -1, cv2.LINE_AA)
            cv2.circle(canvas, (int(bx), int(by)), self._scale(4), SILVER, 1, cv2.LINE_AA)

        # Pendant hanging from the lowest bead
        px, py = cx, cy + depth + self._scale(10)
        pendant = np.array([
            (px, py - self._scale(10)),
            (px - self._scale(8), py + self._scale(5)),
            (px, py + self._scale(15)),
            (px + self._scale(8), py + self._scale(5)),
        ], dtype=np.int32)
        cv2.fillPoly(canvas, [pendant], DEEP_PINK, cv2.LINE_AA)
        cv2.polylines(canvas, [pendant], True, DARK_MAGENTA, self._scale(2), cv2.LINE_AA)

    def draw_tiara(self, canvas: np.ndarray, center: Tuple[int, int], span: float):
        peak_count = 5
        height = self._scale(30)
        valley = self._scale(5)
        cx, cy = center
        left = cx - span / 2
        step = span / (peak_count - 1)
        middle = peak_count // 2

        peaks = []
        outline = [(left, cy)]
        for i in range(peak_count):
            x = left + i * step
            peak_height = height if i == middle else height * 0.7
            peaks.append((x, cy - peak_height))
            outline.append((x, cy - peak_height))
            if i < peak_count - 1:
                outline.append((x + step / 2, cy - valley))
        outline.append((cx + span / 2, cy))

        outline = np.array(outline).round().astype(np.int32)
        fill_gradient(canvas, outline, self.metal, top=cy - height, bottom=cy)
        cv2.polylines(canvas, [outline], False, self.metal, self._scale(3), cv2.LINE_AA)

        for i, (x, y) in enumerate(peaks):
            gem = (int(round(x)), int(round(y)))
            cv2.circle(canvas, gem, self._scale(4), RED if i == middle else BLUE, -1, cv2.LINE_AA)
            cv2.circle(canvas, gem, self._scale(4), DARK_MAGENTA, 1, cv2.LINE_AA)

    def draw_landmarks(self, canvas: np.ndarray, snapshot: TrackingSnapshot):
        """Mark every tracked anchor point."""
        height, width = canvas.shape[:2]
        for value in vars(snapshot).values():
            if isinstance(value, Point3D):
                cv2.circle(canvas, value.to_pixels(width, height), 3, (0, 255, 0), -1)


def fill_gradient(
    canvas: np.ndarray,
    polygon: np.ndarray,
    color: Color,
    top: float,
    bottom: float,
    alpha_top: float = 0.8,
    alpha_bottom: float = 0.3,
):
    """Fill a polygon with a vertical alpha gradient of a single color."""
    mask = np.zeros(canvas.shape[:2], dtype=np.uint8)
    cv2.fillPoly(mask, [polygon], 255)

    rows = np.arange(canvas.shape[0], dtype=np.float64)
    alpha = np.interp(rows, [top, bottom], [alpha_top, alpha_bottom])
    alpha = alpha[:, None] * (mask > 0)
    alpha = alpha[..., None]

    blended = canvas * (1.0 - alpha) + np.array(color, dtype=np.float64) * alpha
    canvas[:] = blended.round().astype(canvas.dtype)
