"""
Lane session: one shooter, one target, one shot list.
"""
from typing import Callable, List, Optional
import logging
import time

from shotscore.core import Point, RingRadii, Shot, StatsResult, TargetTemplate, TARGET_CENTER
from shotscore.target import calculate_ring_radii, calculate_zone_score
from shotscore.analysis import build_report, compute_stats
from .phase import PhaseConfig, PhaseStateMachine, ShootingPhase

logger = logging.getLogger(__name__)

BULLSEYE_ID = "bullseye-center"

StatsCallback = Callable[["Lane", StatsResult], None]


class Lane:
    """
    Owns the shot list for a lane and scores it through the engine.

    Shots are only accepted while the phase machine allows them. Every
    stored shot carries its zone score; changing the template, ESA or
    bullseye rescores the list.
    """

    def __init__(
            self,
            lane_id: str,
            shooter: Optional[str] = None,
            template: Optional[TargetTemplate] = None,
            esa: Optional[int] = None,
            phase_config: Optional[PhaseConfig] = None,
            session_type: str = "practice",
            duplicate_tolerance_px: float = 3.0
    ):
        """
        Initialize lane.

        Args:
            lane_id: Lane identifier
            shooter: Shooter name
            template: Target template (None = fallback rings)
            esa: ESA parameter
            phase_config: Firing mode and timers
            session_type: Session type value
            duplicate_tolerance_px: Shots closer than this on both axes are ignored
        """
        self.lane_id = lane_id
        self.shooter = shooter
        self.session_type = session_type
        self.duplicate_tolerance_px = duplicate_tolerance_px

        self._template = template
        self._esa = esa
        self._ring_radii = calculate_ring_radii(template, esa)

        self.bullseye: Optional[Point] = None  # None = target center
        self.bullseye_ready = False
        self.shots: List[Shot] = []
        self.final_stats: Optional[StatsResult] = None

        self.phase = PhaseStateMachine(phase_config)
        self.phase.on_transition(self._on_phase_transition)

        self._stats_listeners: List[StatsCallback] = []

        logger.info(
            f"Lane {lane_id} ready: shooter={shooter}, "
            f"template={template.name if template else None}, esa={esa}"
        )

    # ------------------------------------------------------------------
    # Configuration

    @property
    def template(self) -> Optional[TargetTemplate]:
        return self._template

    @template.setter
    def template(self, template: Optional[TargetTemplate]) -> None:
        self._template = template
        self._refresh_rings()

    @property
    def esa(self) -> Optional[int]:
        return self._esa

    @esa.setter
    def esa(self, esa: Optional[int]) -> None:
        self._esa = esa
        self._refresh_rings()

    @property
    def ring_radii(self) -> RingRadii:
        return self._ring_radii

    @property
    def reference_point(self) -> Point:
        return self.bullseye if self.bullseye is not None else TARGET_CENTER

    def _refresh_rings(self) -> None:
        self._ring_radii = calculate_ring_radii(self._template, self._esa)
        self._rescore()

    def _rescore(self) -> None:
        for shot in self.shots:
            shot.score = calculate_zone_score(shot, self.reference_point, self._ring_radii)
        if self.final_stats is not None:
            self.final_stats = self.stats()

    def _locked(self, action: str) -> bool:
        """True (and warn) if the lane is done and its shots are final."""
        if self.phase.state == ShootingPhase.DONE:
            logger.warning(f"Lane {self.lane_id}: {action} ignored, lane is done")
            return True
        return False

    def on_stats(self, callback: StatsCallback) -> None:
        """Register a callback invoked with final stats when the lane is done."""
        self._stats_listeners.append(callback)

    # ------------------------------------------------------------------
    # Shooting

    def set_bullseye(self, point: Optional[Point] = None, now: Optional[float] = None) -> Point:
        """
        Set the reference point and start the shooting sequence.

        Args:
            point: Custom bullseye (None = target center)
            now: Current time for the phase machine

        Returns:
            The bullseye in use (unchanged once the lane is done)
        """
        if self._locked("bullseye change"):
            return self.reference_point

        self.bullseye = point
        self.bullseye_ready = True
        self._rescore()
        self.phase.bullseye_set(now)

        reference = self.reference_point
        logger.info(f"Lane {self.lane_id} bullseye at ({reference.x:.1f}, {reference.y:.1f})")
        return reference

    def update(self, now: Optional[float] = None) -> ShootingPhase:
        """Advance phase timers."""
        return self.phase.update(now)

    def _is_duplicate(self, x: float, y: float) -> bool:
        tol = self.duplicate_tolerance_px
        return any(abs(s.x - x) < tol and abs(s.y - y) < tol for s in self.shots)

    def add_shot(self, x: float, y: float, timestamp: Optional[float] = None) -> Optional[Shot]:
        """
        Record a shot.

        Args:
            x: X in the 400 space
            y: Y in the 400 space
            timestamp: Shot time (default: now)

        Returns:
            The stored shot, or None if rejected
        """
        if not self.bullseye_ready:
            logger.warning(f"Lane {self.lane_id}: shot ignored, no bullseye set")
            return None

        if not self.phase.accepts_shots():
            logger.warning(f"Lane {self.lane_id}: shot ignored during {self.phase.state.value}")
            return None

        if self._is_duplicate(x, y):
            logger.debug(f"Lane {self.lane_id}: duplicate shot at ({x:.1f}, {y:.1f}) ignored")
            return None

        shot = Shot(
            x=x,
            y=y,
            timestamp=timestamp if timestamp is not None else time.time(),
            time_phase=self.phase.time_phase(),
        )
        shot.score = calculate_zone_score(shot, self.reference_point, self._ring_radii)
        self.shots.append(shot)

        logger.debug(
            f"Lane {self.lane_id} shot #{len(self.shots)}: ({x:.1f}, {y:.1f}) "
            f"score={shot.score} phase={shot.time_phase}"
        )
        return shot

    def undo_last_shot(self) -> Optional[Shot]:
        """
        Remove the most recent shot.

        Returns:
            The removed shot, or None if there were none or the lane is done
        """
        if self._locked("undo") or not self.shots:
            return None
        shot = self.shots.pop()
        logger.info(f"Lane {self.lane_id}: undone shot {shot.id}")
        return shot

    def clear_shots(self) -> None:
        if self._locked("clear"):
            return
        self.shots.clear()

    def finish(self, now: Optional[float] = None) -> StatsResult:
        """
        End shooting and return the final stats.
        """
        self.phase.finish(now)
        return self.final_stats if self.final_stats is not None else self.stats()

    def reset(self) -> None:
        """Clear shots and bullseye and go back to bullseye selection."""
        self.shots.clear()
        self.final_stats = None
        self.bullseye = None
        self.bullseye_ready = False
        self.phase.reset()
        logger.info(f"Lane {self.lane_id} reset")

    # ------------------------------------------------------------------
    # Results

    def all_shots(self) -> List[Shot]:
        """Shots including the bullseye marker, marker first."""
        if not self.bullseye_ready:
            return list(self.shots)
        reference = self.reference_point
        marker = Shot(x=reference.x, y=reference.y, id=BULLSEYE_ID, is_bullseye=True)
        return [marker] + self.shots

    def stats(self, verbose: bool = False) -> StatsResult:
        """Current statistics for the lane."""
        return compute_stats(self.shots, self.bullseye, self._ring_radii, verbose=verbose)

    def report(self) -> dict:
        """Final report for the lane (final stats if the lane is done)."""
        return build_report(
            self.shots,
            self._ring_radii,
            bullseye=self.bullseye,
            template=self._template,
            esa=self._esa,
            shooter=self.shooter,
            lane_id=self.lane_id,
            session_type=self.session_type,
            stats=self.final_stats,
        )

    def _on_phase_transition(self, old: ShootingPhase, new: ShootingPhase) -> None:
        if new != ShootingPhase.DONE:
            return

        self.final_stats = self.stats()
        logger.info(
            f"Lane {self.lane_id} done: {self.final_stats.shot_count} shots, "
            f"accuracy {self.final_stats.accuracy:.1f}%"
        )
        for callback in self._stats_listeners:
            callback(self, self.final_stats)
