"""Temporal filtering modules."""

from tryon_app.filters.history import LandmarkHistory

__all__ = ["LandmarkHistory"]
