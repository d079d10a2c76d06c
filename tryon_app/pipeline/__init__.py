"""Processing pipeline."""

from tryon_app.pipeline.processor import TryOnProcessor

__all__ = ["TryOnProcessor"]
