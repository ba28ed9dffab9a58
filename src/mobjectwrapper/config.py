"""
Configuration & Global Constants
================================
This module serves as the central registry for numeric tolerances and
defaults shared by the model, the renderers and the persistence layer.

Why is this file needed?
------------------------
1. Consistency: Kind classification (e.g. "is this rectangle a square?")
   must use the same tolerance everywhere, otherwise a payload could be
   classified differently by the handle and by the renderer.
2. Abstraction: Defaults such as the dot radius or the stroke colour are not
   scattered as magic numbers throughout the code.

Exports:
    GEOMETRY_TOLERANCE (float): Absolute tolerance for geometric comparisons.
    MAX_ARC_SEGMENT_ANGLE (float): Largest angle covered by one cubic bezier.
    OUTLINE_SAMPLES_PER_CURVE (int): Samples per bezier when flattening outlines.
    DEFAULT_DOT_RADIUS (float): Radius of a freshly created Dot.
    DEFAULT_STROKE_COLOR (str): Stroke colour of a fresh Style.
    DEFAULT_STROKE_WIDTH (float): Stroke width of a fresh Style.
    JSON_ATTR_LIMIT (int): Size above which JSON is stored as an HDF5 dataset.
"""
import math

# Geometry
GEOMETRY_TOLERANCE: float = 1e-6
MAX_ARC_SEGMENT_ANGLE: float = math.pi / 2
OUTLINE_SAMPLES_PER_CURVE: int = 16

# Defaults for new mobjects
DEFAULT_DOT_RADIUS: float = 0.08
DEFAULT_STROKE_COLOR: str = "#FFFFFF"
DEFAULT_STROKE_WIDTH: float = 4.0

# HDF5 attributes are limited to 64KB
JSON_ATTR_LIMIT: int = 60000
