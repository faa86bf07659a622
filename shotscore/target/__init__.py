"""
Target module - templates, ring geometry, zone scoring, and rendering.
"""
from .geometry import (
    BLUE_INNER_CIRCLE,
    ORANGE_ESA_ZONE,
    GREEN_BULLSEYE_ZONE,
    OUTSIDE_TARGET,
    MAX_ZONE_SCORE,
    FALLBACK_GREEN_RADIUS_PX,
    calculate_ring_radii,
    calculate_zone_score,
    esa_ratio,
    visual_ring_radii,
    zone_name,
)
from .templates import (
    TARGET_TEMPLATES,
    get_template,
    find_template,
    diameter_from_distance,
    template_from_distance,
)
from .visualizer import TargetVisualizer

__all__ = [
    "BLUE_INNER_CIRCLE",
    "ORANGE_ESA_ZONE",
    "GREEN_BULLSEYE_ZONE",
    "OUTSIDE_TARGET",
    "MAX_ZONE_SCORE",
    "FALLBACK_GREEN_RADIUS_PX",
    "calculate_ring_radii",
    "calculate_zone_score",
    "esa_ratio",
    "visual_ring_radii",
    "zone_name",
    "TARGET_TEMPLATES",
    "get_template",
    "find_template",
    "diameter_from_distance",
    "template_from_distance",
    "TargetVisualizer",
]
