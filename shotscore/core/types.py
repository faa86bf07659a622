"""
Core data types for the scoring engine.
Defines contracts between modules to ensure stable interfaces.
"""
from dataclasses import dataclass, field, asdict
from typing import Any, Dict, Optional, Tuple
import itertools
import time

# Centered display coordinates are relative to the middle of the 400 space
_CENTER = 200.0

_shot_counter = itertools.count(1)


def _next_shot_id() -> str:
    return f"shot-{int(time.time() * 1000)}-{next(_shot_counter)}"


@dataclass(frozen=True)
class Point:
    """
    A position in the 400 x 400 target space.
    Origin is top-left, y grows downward.
    """
    x: float
    y: float

    def to_centered(self) -> "Point":
        """Return display coordinates: x right, y up, (0, 0) at target center."""
        return Point(self.x - _CENTER, _CENTER - self.y)

    @classmethod
    def from_centered(cls, x: float, y: float) -> "Point":
        """Inverse of ``to_centered``."""
        return cls(x + _CENTER, _CENTER - y)

    def as_tuple(self) -> Tuple[float, float]:
        return (self.x, self.y)


@dataclass
class Shot:
    """
    A recorded shot (or the bullseye marker) on the target.
    """
    x: float
    y: float
    id: str = field(default_factory=_next_shot_id)
    timestamp: float = field(default_factory=time.time)
    is_bullseye: bool = False  # Reference marker, never scored
    time_phase: Optional[str] = None  # "WINDOW" or "OUTSIDE" for timed modes
    score: Optional[int] = None  # Zone score 0-3 once classified

    @property
    def point(self) -> Point:
        return Point(self.x, self.y)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Shot":
        """
        Build a Shot from a plain mapping.

        Accepts both snake_case keys and the camelCase keys used by the
        lane API payloads (``isBullseye``, ``timePhase``).
        """
        kwargs: Dict[str, Any] = {
            "x": float(data["x"]),
            "y": float(data["y"]),
            "is_bullseye": bool(data.get("is_bullseye", data.get("isBullseye", False))),
            "time_phase": data.get("time_phase", data.get("timePhase")),
            "score": data.get("score"),
        }
        if data.get("id") is not None:
            kwargs["id"] = str(data["id"])
        if data.get("timestamp") is not None:
            kwargs["timestamp"] = float(data["timestamp"])
        return cls(**kwargs)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class TargetTemplate:
    """
    Printed target template. Only ``diameter`` (mm) drives scoring.
    """
    diameter: Optional[float] = None  # Green ring diameter in mm
    name: str = ""
    distance: str = ""
    id: str = ""
    caliber: str = ""
    description: str = ""
    is_custom: bool = False

    def __post_init__(self):
        if self.diameter is not None and self.diameter <= 0:
            raise ValueError("Template diameter must be positive")


@dataclass(frozen=True)
class RingRadii:
    """
    Scoring ring radii in pixel space (outer to inner: green, orange, blue).
    """
    green_radius: float
    orange_radius: float
    blue_radius: float
    visual_rings: Tuple[float, ...] = ()  # Display-only rings between blue and green

    def as_dict(self) -> Dict[str, float]:
        return {
            "green": self.green_radius,
            "orange": self.orange_radius,
            "blue": self.blue_radius,
        }


@dataclass
class StatsResult:
    """
    Aggregate statistics over the scoring shots of one target.
    Distances are in mm, accuracy in percent.
    """
    mpi: float = 0.0  # MPI distance from reference point
    accuracy: float = 0.0
    avg_distance: float = 0.0
    max_distance: float = 0.0
    group_size: float = 0.0  # Extreme spread
    reference_point: str = "none"  # "center", "custom bullseye" or "none"
    mpi_coords: Optional[Point] = None  # Centered coordinates
    total_score: int = 0
    max_possible_score: int = 0
    shot_count: int = 0
    zone_counts: Dict[int, int] = field(default_factory=lambda: {3: 0, 2: 0, 1: 0, 0: 0})

    @classmethod
    def empty(cls) -> "StatsResult":
        return cls()

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)
