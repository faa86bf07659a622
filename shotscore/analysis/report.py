"""
Final report assembly and YAML export.
"""
from pathlib import Path
from typing import Any, Dict, Iterable, Optional
import logging
import time

from shotscore.core import Point, RingRadii, Shot, StatsResult, TargetTemplate, atomic_write_yaml
from .remarks import get_performance_remark, should_show_remarks
from .stats import compute_stats, filter_scoring_shots, score_shots

logger = logging.getLogger(__name__)


def _template_dict(template: Optional[TargetTemplate]) -> Optional[Dict[str, Any]]:
    if template is None:
        return None
    return {
        "id": template.id,
        "name": template.name,
        "diameter": template.diameter,
        "distance": template.distance,
        "is_custom": template.is_custom,
    }


def _shot_dict(shot: Shot) -> Dict[str, Any]:
    centered = shot.point.to_centered()
    return {
        "id": shot.id,
        "x": shot.x,
        "y": shot.y,
        "centered": {"x": centered.x, "y": centered.y},
        "score": shot.score,
        "time_phase": shot.time_phase,
        "timestamp": shot.timestamp,
    }


def build_report(
        shots: Iterable[Shot],
        ring_radii: RingRadii,
        bullseye: Optional[Point] = None,
        template: Optional[TargetTemplate] = None,
        esa: Optional[int] = None,
        shooter: Optional[str] = None,
        lane_id: Optional[str] = None,
        session_type: str = "practice",
        stats: Optional[StatsResult] = None
) -> Dict[str, Any]:
    """
    Build a plain-data final report for a target.

    Args:
        shots: All shots (bullseye markers are excluded from the report)
        ring_radii: Rings used for scoring
        bullseye: Custom bullseye (None = target center)
        template: Template the rings were derived from
        esa: ESA parameter the rings were derived from
        shooter: Shooter name
        lane_id: Lane identifier
        session_type: Session type, selects the remark bands
        stats: Precomputed stats (computed here when omitted)

    Returns:
        Report dictionary ready for YAML/JSON serialization
    """
    shots = list(shots)
    if stats is None:
        stats = compute_stats(shots, bullseye, ring_radii)

    counted = score_shots(filter_scoring_shots(shots), bullseye, ring_radii)
    remark = get_performance_remark(stats.accuracy, session_type)

    report = {
        "generated_at": time.time(),
        "shooter": shooter,
        "lane_id": lane_id,
        "session_type": session_type,
        "template": _template_dict(template),
        "esa": esa,
        "bullseye": {"x": bullseye.x, "y": bullseye.y} if bullseye is not None else None,
        "ring_radii": ring_radii.as_dict(),
        "shots": [_shot_dict(s) for s in counted],
        "stats": stats.to_dict(),
        "remark": {
            "rating": remark.rating,
            "description": remark.description,
            "qualification": should_show_remarks(session_type),
        },
    }

    logger.info(
        f"Report built: lane={lane_id}, shooter={shooter}, "
        f"{stats.shot_count} shots, accuracy {stats.accuracy:.1f}% ({remark.rating})"
    )
    return report


def save_report(filepath: Path, report: Dict[str, Any]) -> Path:
    """
    Export a report as YAML.

    Raises:
        IOError: If the write fails
    """
    filepath = Path(filepath)
    atomic_write_yaml(filepath, report)
    logger.info(f"Report saved to {filepath}")
    return filepath
