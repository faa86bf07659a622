"""
Core module - shared data types, units, and YAML I/O.
"""
from .types import (
    Point,
    Shot,
    TargetTemplate,
    RingRadii,
    StatsResult,
)
from .units import (
    COORDINATE_SPACE,
    PHYSICAL_SIZE_MM,
    PIXELS_PER_MM,
    MM_PER_PIXEL,
    TARGET_CENTER,
    px_to_mm,
    mm_to_px,
    euclidean,
)
from .io_utils import (
    atomic_write_yaml,
    load_yaml,
    load_shots,
)

__all__ = [
    # Types
    "Point",
    "Shot",
    "TargetTemplate",
    "RingRadii",
    "StatsResult",
    # Units
    "COORDINATE_SPACE",
    "PHYSICAL_SIZE_MM",
    "PIXELS_PER_MM",
    "MM_PER_PIXEL",
    "TARGET_CENTER",
    "px_to_mm",
    "mm_to_px",
    "euclidean",
    # I/O
    "atomic_write_yaml",
    "load_yaml",
    "load_shots",
]
