"""
Live webcam preview for the accessory try-on system.
"""

import logging
import sys
from pathlib import Path
from typing import Optional

import cv2

from tryon_app.config import AppConfig
from tryon_app.core.types import AccessoryType
from tryon_app.pipeline.processor import TryOnProcessor

ACCESSORY_KEYS = {
    ord("1"): AccessoryType.RING,
    ord("2"): AccessoryType.NECKLACE,
    ord("3"): AccessoryType.TIARA,
}


_console_handler: Optional[logging.Handler] = None


def setup_logging(level: int = logging.INFO):
    """Configure logging for the application. Repeated calls replace the console handler."""
    global _console_handler

    formatter = logging.Formatter(
        fmt='%(asctime)s [%(levelname)s] %(name)s: %(message)s',
        datefmt='%H:%M:%S'
    )

    # Console handler (for terminal output)
    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(level)
    console_handler.setFormatter(formatter)

    root_logger = logging.getLogger()
    if _console_handler is not None:
        root_logger.removeHandler(_console_handler)
    root_logger.setLevel(level)
    root_logger.addHandler(console_handler)
    _console_handler = console_handler

    logging.getLogger('tryon_app').setLevel(level)


def run_camera(config: AppConfig, processor: Optional[TryOnProcessor] = None) -> int:
    """
    Run the interactive preview until the user quits.

    Keys: 1/2/3 select ring/necklace/tiara, r resets tracking, q or Esc quits.
    """
    logger = logging.getLogger(__name__)

    processor = processor or TryOnProcessor(config)

    cap = cv2.VideoCapture(config.camera_index)
    if not cap.isOpened():
        logger.error(f"Could not open camera {config.camera_index}")
        processor.close()
        return 1

    logger.info(f"Camera {config.camera_index} open, showing {processor.accessory.value}")

    try:
        while True:
            ret, frame = cap.read()
            if not ret:
                logger.warning("Camera stopped delivering frames")
                break

            # Mirror so the preview behaves like a mirror
            frame = cv2.flip(frame, 1)
            processor.process_frame(frame)
            cv2.imshow(config.window_name, frame)

            key = cv2.waitKey(1) & 0xFF
            if key in (ord("q"), 27):
                break
            if key in ACCESSORY_KEYS:
                processor.set_accessory(ACCESSORY_KEYS[key])
            elif key == ord("r"):
                processor.reset()
                logger.info("Tracking reset")
    finally:
        cap.release()
        processor.close()
        cv2.destroyAllWindows()

    return 0


def main():
    """Launch the live preview."""
    setup_logging()
    logger = logging.getLogger(__name__)

    config_path = Path("config.yaml")
    if config_path.exists():
        logger.info(f"Loading configuration from: {config_path}")
        config = AppConfig.from_yaml(config_path)
    else:
        logger.info("Using default configuration")
        config = AppConfig()

    for issue in config.validate():
        logger.warning(f"Config: {issue}")

    try:
        sys.exit(run_camera(config))
    except (RuntimeError, ValueError) as e:
        logger.error(f"Could not start preview: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
