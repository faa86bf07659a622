"""
Group statistics: MPI, extreme spread, distances, and score-based accuracy.
"""
from dataclasses import replace
from typing import Iterable, List, Optional, Sequence
import logging

import numpy as np

from shotscore.core import Point, RingRadii, Shot, StatsResult, TARGET_CENTER, euclidean, px_to_mm
from shotscore.target.geometry import MAX_ZONE_SCORE, calculate_zone_score

logger = logging.getLogger(__name__)

WINDOW_PHASE = "WINDOW"


def filter_scoring_shots(shots: Iterable[Shot]) -> List[Shot]:
    """
    Select the shots that count toward statistics.

    Bullseye markers are dropped. If timing was used (any shot tagged
    ``WINDOW``), only shots fired inside the window count.

    Args:
        shots: All shots on the target

    Returns:
        Scoring shots in original order
    """
    actual = [s for s in shots if s is not None and not getattr(s, "is_bullseye", False)]
    windowed = [s for s in actual if getattr(s, "time_phase", None) == WINDOW_PHASE]
    return windowed if windowed else actual


def calculate_mpi(points: Sequence) -> Optional[Point]:
    """
    Mean point of impact via the running-average recurrence.

    Each new shot pulls the current MPI toward it by 1/n of the distance
    between them, which equals the arithmetic centroid. A single shot is
    its own MPI.

    Args:
        points: Objects with ``x`` and ``y``

    Returns:
        MPI in the 400 space, or None for no points
    """
    if not points:
        return None

    first = points[0]
    mpi_x, mpi_y = float(first.x), float(first.y)

    for n, point in enumerate(points[1:], start=2):
        mpi_x += (point.x - mpi_x) / n
        mpi_y += (point.y - mpi_y) / n

    return Point(mpi_x, mpi_y)


def group_size(points: Sequence) -> float:
    """
    Extreme spread: largest distance between any two shots.

    Args:
        points: Objects with ``x`` and ``y``

    Returns:
        Spread in pixel space (0 for fewer than two shots)
    """
    if len(points) < 2:
        return 0.0

    coords = np.array([(p.x, p.y) for p in points], dtype=np.float64)
    diffs = coords[:, np.newaxis, :] - coords[np.newaxis, :, :]
    distances = np.sqrt((diffs ** 2).sum(axis=-1))
    return float(distances.max())


def score_shots(
        shots: Iterable[Shot],
        reference_point=None,
        ring_radii: Optional[RingRadii] = None
) -> List[Shot]:
    """
    Return copies of the shots with their zone score filled in.

    Bullseye markers are copied unchanged.
    """
    reference = reference_point if reference_point is not None else TARGET_CENTER
    scored = []
    for shot in shots:
        if shot.is_bullseye:
            scored.append(replace(shot))
        else:
            scored.append(replace(shot, score=calculate_zone_score(shot, reference, ring_radii)))
    return scored


def compute_stats(
        shots: Iterable[Shot],
        reference_point=None,
        ring_radii: Optional[RingRadii] = None,
        verbose: bool = False
) -> StatsResult:
    """
    Aggregate statistics for a target.

    Pixel-space quantities (zone classification, spread) are computed
    first and converted to mm only when stored in the result.

    Args:
        shots: All shots on the target (bullseye markers are filtered out)
        reference_point: Custom bullseye (None = target center)
        ring_radii: Scoring rings (None = every shot scores 0)
        verbose: Log per-shot classification

    Returns:
        StatsResult; zeroed when no shots count
    """
    scoring = filter_scoring_shots(shots)

    if not scoring:
        return StatsResult.empty()

    if reference_point is not None:
        reference = reference_point
        reference_label = "custom bullseye"
    else:
        reference = TARGET_CENTER
        reference_label = "center"

    mpi = calculate_mpi(scoring)

    distances = [euclidean(shot, reference) for shot in scoring]
    avg_distance = sum(distances) / len(distances)
    max_distance = max(distances)

    zone_counts = {3: 0, 2: 0, 1: 0, 0: 0}
    total_score = 0
    for shot in scoring:
        score = calculate_zone_score(shot, reference, ring_radii, verbose=verbose)
        zone_counts[score] += 1
        total_score += score

    max_possible = len(scoring) * MAX_ZONE_SCORE
    accuracy = (total_score / max_possible) * 100 if max_possible > 0 else 0.0

    result = StatsResult(
        mpi=px_to_mm(euclidean(mpi, reference)),
        accuracy=accuracy,
        avg_distance=px_to_mm(avg_distance),
        max_distance=px_to_mm(max_distance),
        group_size=px_to_mm(group_size(scoring)),
        reference_point=reference_label,
        mpi_coords=mpi.to_centered(),
        total_score=total_score,
        max_possible_score=max_possible,
        shot_count=len(scoring),
        zone_counts=zone_counts,
    )

    logger.debug(
        f"Stats: {result.shot_count} shots, score {total_score}/{max_possible} "
        f"({accuracy:.1f}%), MPI {result.mpi:.2f}mm, group {result.group_size:.2f}mm"
    )

    return result
