"""Structural diffing of shapes."""

from .engine import diff_shapes
from .models import ShapeChange, ShapeDiff

__all__ = ["diff_shapes", "ShapeChange", "ShapeDiff"]
