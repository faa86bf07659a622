"""
Target template catalog and distance-based virtual templates.
"""
from typing import Dict, Optional, Tuple
import logging

from shotscore.core import TargetTemplate

logger = logging.getLogger(__name__)


TARGET_TEMPLATES: Tuple[TargetTemplate, ...] = (
    TargetTemplate(
        id="air-pistol-10m",
        name="10m",
        diameter=130,
        distance="10m",
        caliber="4.5mm air pistol",
        description="Standard 10-ring target for air pistol competition",
    ),
    TargetTemplate(
        id="pistol-25m-precision",
        name="25m",
        diameter=120,
        distance="25m",
        caliber=".22 LR rimfire",
        description="Precision pistol target for 25m competition",
    ),
    TargetTemplate(
        id="pistol-25m-rapid",
        name="50m",
        diameter=110,
        distance="50m",
        caliber=".22 Short",
        description="Rapid fire pistol target",
    ),
    TargetTemplate(
        id="rifle-50m",
        name="100m",
        diameter=100,
        distance="100m",
        caliber=".22 LR",
        description="Small bore rifle target for 50m",
    ),
    TargetTemplate(
        id="air-rifle-10m",
        name="200m",
        diameter=90,
        distance="200m",
        caliber="7.62mm",
        description="Long range rifle target for 200m",
    ),
    TargetTemplate(
        id="custom",
        name="300m",
        diameter=80,
        distance="Variable",
        caliber="Various",
        description="Custom target configuration",
    ),
)

_BY_ID: Dict[str, TargetTemplate] = {t.id: t for t in TARGET_TEMPLATES}

# (distance m, diameter mm) anchors taken from the catalog
DISTANCE_DIAMETER_POINTS = (
    (10.0, 130.0),
    (25.0, 120.0),
    (50.0, 110.0),
    (100.0, 100.0),
    (200.0, 90.0),
    (300.0, 80.0),
)

INVALID_DISTANCE_DIAMETER = 100.0
FAR_SLOPE_MM_PER_M = -0.1  # Continues the 200-300m trend
MIN_DIAMETER_MM = 20.0


def get_template(template_id: str) -> TargetTemplate:
    """
    Look up a catalog template.

    Raises:
        KeyError: If the id is unknown
    """
    try:
        return _BY_ID[template_id]
    except KeyError:
        raise KeyError(f"Unknown target template: {template_id}") from None


def find_template(
        template_id: Optional[str] = None,
        name: Optional[str] = None
) -> Optional[TargetTemplate]:
    """
    Find a template by id, falling back to display name.

    Returns:
        Matching template or None
    """
    if template_id and template_id in _BY_ID:
        return _BY_ID[template_id]

    if name:
        for template in TARGET_TEMPLATES:
            if template.name == name:
                return template

    logger.debug(f"No template for id={template_id!r}, name={name!r}")
    return None


def diameter_from_distance(distance_m) -> float:
    """
    Green ring diameter for an arbitrary shooting distance.

    Piecewise linear through the catalog anchors; 130mm at 10m or less,
    and beyond 300m the 200-300m slope continues down to 20mm.

    Args:
        distance_m: Distance in meters (numbers or numeric strings)

    Returns:
        Diameter in mm (100mm for invalid input)
    """
    try:
        distance = float(distance_m)
    except (TypeError, ValueError):
        return INVALID_DISTANCE_DIAMETER

    if distance != distance or distance <= 0:
        return INVALID_DISTANCE_DIAMETER

    first_distance, first_diameter = DISTANCE_DIAMETER_POINTS[0]
    if distance <= first_distance:
        return first_diameter

    for (d0, dia0), (d1, dia1) in zip(DISTANCE_DIAMETER_POINTS, DISTANCE_DIAMETER_POINTS[1:]):
        if distance <= d1:
            ratio = (distance - d0) / (d1 - d0)
            return dia0 - ratio * (dia0 - dia1)

    last_distance, last_diameter = DISTANCE_DIAMETER_POINTS[-1]
    extra = distance - last_distance
    return max(last_diameter + extra * FAR_SLOPE_MM_PER_M, MIN_DIAMETER_MM)


def template_from_distance(
        distance_m,
        custom_id: Optional[str] = None
) -> Optional[TargetTemplate]:
    """
    Build a virtual template for a user-entered distance.

    Args:
        distance_m: Distance in meters
        custom_id: Optional template id

    Returns:
        Custom TargetTemplate, or None for invalid distance
    """
    try:
        distance = float(distance_m)
    except (TypeError, ValueError):
        return None

    if distance != distance or distance <= 0:
        return None

    diameter = diameter_from_distance(distance)
    label = f"{distance:g}m"

    return TargetTemplate(
        id=custom_id or f"custom-{label}",
        name=label,
        diameter=round(diameter, 1),
        distance=label,
        caliber="Custom",
        description=f"Custom target for {label} distance",
        is_custom=True,
    )
