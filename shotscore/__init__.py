"""
shotscore - zone scoring and group statistics for shooting-range lanes.
"""
from .core import Point, Shot, TargetTemplate, RingRadii, StatsResult
from .target import calculate_ring_radii, calculate_zone_score
from .analysis import compute_stats

__version__ = "0.1.0"

__all__ = [
    "Point",
    "Shot",
    "TargetTemplate",
    "RingRadii",
    "StatsResult",
    "calculate_ring_radii",
    "calculate_zone_score",
    "compute_stats",
]
