"""
Silhouette - bounded structural summaries of Python values

Describes what a value looks like (its kinds, keys, lengths and nesting)
without serializing its content. Useful for logging model outputs, API
payloads or numeric buffers, and for diffing how data changes over time.
"""

__version__ = "0.3.0"

from .analyzer import ShapeResult, coarse_tag
from .api import get_shape
from .config import ShapeOptions, load_options
from .diff import ShapeChange, ShapeDiff, diff_shapes
from .exceptions import InvalidOptionError, SilhouetteError
from .kinds import Kind, classify
from .sentinels import HOLE, UNDEFINED, Sentinel

__all__ = [
    "get_shape",  # Main entry point
    "ShapeResult",
    "ShapeOptions",
    "load_options",
    "coarse_tag",
    "diff_shapes",
    "ShapeDiff",
    "ShapeChange",
    "Kind",
    "classify",
    "UNDEFINED",
    "HOLE",
    "Sentinel",
    "SilhouetteError",
    "InvalidOptionError",
]
