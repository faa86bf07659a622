"""
Coordinate space and unit conversions.

Shots live in a fixed 400 x 400 coordinate space mapped onto the smaller
physical side (133 mm) of the target image. Every comparison happens in
this pixel space; mm values are produced only at the reporting edge.
"""
import numpy as np

from .types import Point

COORDINATE_SPACE = 400.0  # SVG viewBox width/height
PHYSICAL_SIZE_MM = 133.0  # 13.3 cm, smaller side of the target image

PIXELS_PER_MM = COORDINATE_SPACE / PHYSICAL_SIZE_MM
MM_PER_PIXEL = PHYSICAL_SIZE_MM / COORDINATE_SPACE

TARGET_CENTER = Point(COORDINATE_SPACE / 2, COORDINATE_SPACE / 2)


def px_to_mm(value: float) -> float:
    """Convert a pixel-space length to millimeters."""
    return value * MM_PER_PIXEL


def mm_to_px(value: float) -> float:
    """Convert millimeters to a pixel-space length."""
    return value * PIXELS_PER_MM


def euclidean(a, b) -> float:
    """
    Distance between two objects exposing ``x`` and ``y``.

    Args:
        a: First point
        b: Second point

    Returns:
        Euclidean distance in the same units as the inputs
    """
    dx = a.x - b.x
    dy = a.y - b.y
    return float(np.sqrt(dx ** 2 + dy ** 2))
