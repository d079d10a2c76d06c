"""Accessory rendering."""

from tryon_app.render.accessories import AccessoryRenderer

__all__ = ["AccessoryRenderer"]
