"""
Ring geometry and zone scoring.

Three concentric scoring rings surround the bullseye:

- green: template diameter scaled to pixel space (1 point)
- orange: ESA ring, a fraction of green set by the ESA parameter (2 points)
- blue: innermost circle, 25% of orange (3 points)
"""
from typing import Mapping, Optional, Tuple, Union
import logging

from shotscore.core import RingRadii, TargetTemplate, PIXELS_PER_MM, euclidean

logger = logging.getLogger(__name__)

# Zone scores, innermost to outermost
BLUE_INNER_CIRCLE = 3
ORANGE_ESA_ZONE = 2
GREEN_BULLSEYE_ZONE = 1
OUTSIDE_TARGET = 0

ZONE_NAMES = {
    BLUE_INNER_CIRCLE: "Blue Inner Circle",
    ORANGE_ESA_ZONE: "Orange ESA Zone",
    GREEN_BULLSEYE_ZONE: "Green Bullseye Zone",
    OUTSIDE_TARGET: "Outside Target",
}

MAX_ZONE_SCORE = BLUE_INNER_CIRCLE

# Green radius used when no template (or no diameter) is available
FALLBACK_GREEN_RADIUS_PX = 50.0

# ESA calibration domain and the orange/green ratio range it maps onto
MIN_ESA = 5
MAX_ESA = 96
MIN_ESA_RATIO = 0.15
MAX_ESA_RATIO = 0.85
ESA_RATIO_CAP = 0.9
DEFAULT_ORANGE_RATIO = 0.7
BLUE_TO_ORANGE_RATIO = 0.25

NUM_VISUAL_RINGS = 6


def esa_ratio(esa_parameter: float) -> float:
    """
    Orange/green ratio for an ESA value.

    Linear between MIN_ESA -> 0.15 and MAX_ESA -> 0.85. Values outside the
    domain are extrapolated; the 0.9 cap is applied by the caller.
    """
    span = (esa_parameter - MIN_ESA) / (MAX_ESA - MIN_ESA)
    return MIN_ESA_RATIO + span * (MAX_ESA_RATIO - MIN_ESA_RATIO)


def visual_ring_radii(
        blue_radius: float,
        green_radius: float,
        count: int = NUM_VISUAL_RINGS
) -> Tuple[float, ...]:
    """
    Evenly spaced display rings between blue and green (exclusive).

    Args:
        blue_radius: Inner bound in pixels
        green_radius: Outer bound in pixels
        count: Number of rings

    Returns:
        Ring radii, inner to outer
    """
    available = green_radius - blue_radius
    return tuple(
        blue_radius + available * (k / (count + 1))
        for k in range(1, count + 1)
    )


def calculate_ring_radii(
        template: Union[TargetTemplate, Mapping, None] = None,
        esa_parameter: Optional[float] = None,
        verbose: bool = False
) -> RingRadii:
    """
    Derive scoring ring radii from a template and optional ESA value.

    Args:
        template: Target template or a mapping with a ``diameter`` key
            (None = fallback radius)
        esa_parameter: ESA calibration value, domain [5, 96]
        verbose: Log the derivation

    Returns:
        RingRadii in pixel space
    """
    if isinstance(template, Mapping):
        diameter = template.get("diameter")
    else:
        diameter = getattr(template, "diameter", None)

    if diameter:
        green_radius = (diameter / 2) * PIXELS_PER_MM
    else:
        green_radius = FALLBACK_GREEN_RADIUS_PX
        logger.debug(f"No template diameter, using {FALLBACK_GREEN_RADIUS_PX}px green radius")

    if esa_parameter and esa_parameter > 0:
        orange_radius = min(
            green_radius * esa_ratio(esa_parameter),
            green_radius * ESA_RATIO_CAP
        )
    else:
        orange_radius = green_radius * DEFAULT_ORANGE_RATIO

    blue_radius = orange_radius * BLUE_TO_ORANGE_RATIO

    radii = RingRadii(
        green_radius=green_radius,
        orange_radius=orange_radius,
        blue_radius=blue_radius,
        visual_rings=visual_ring_radii(blue_radius, green_radius),
    )

    if verbose:
        logger.info(
            f"Ring radii: diameter={diameter}, esa={esa_parameter} -> "
            f"green={green_radius:.1f}px, orange={orange_radius:.1f}px, "
            f"blue={blue_radius:.1f}px"
        )

    return radii


def calculate_zone_score(
        shot,
        reference_point,
        ring_radii: Optional[RingRadii],
        verbose: bool = False
) -> int:
    """
    Classify a shot into a scoring zone.

    Ring comparisons are inclusive, so a shot exactly on a boundary scores
    the inner zone. Missing inputs score 0.

    Args:
        shot: Object with ``x`` and ``y`` (Shot or Point)
        reference_point: Bullseye position
        ring_radii: Rings to classify against
        verbose: Log the classification

    Returns:
        Zone score in {0, 1, 2, 3}
    """
    if shot is None or reference_point is None or ring_radii is None:
        return OUTSIDE_TARGET

    distance = euclidean(shot, reference_point)

    if distance <= ring_radii.blue_radius:
        score = BLUE_INNER_CIRCLE
    elif distance <= ring_radii.orange_radius:
        score = ORANGE_ESA_ZONE
    elif distance <= ring_radii.green_radius:
        score = GREEN_BULLSEYE_ZONE
    else:
        score = OUTSIDE_TARGET

    if verbose:
        logger.info(
            f"Zone: ({shot.x:.1f}, {shot.y:.1f}) -> d={distance:.2f}px "
            f"[blue={ring_radii.blue_radius:.2f}, orange={ring_radii.orange_radius:.2f}, "
            f"green={ring_radii.green_radius:.2f}] -> {ZONE_NAMES[score]} ({score})"
        )

    return score


def zone_name(score: int) -> str:
    """Display name for a zone score."""
    return ZONE_NAMES.get(score, "Unknown Zone")
