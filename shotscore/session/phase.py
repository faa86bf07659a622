"""
Shooting phase state machine.

State flow:
- SELECT_BULLSEYE: Waiting for the reference point
- COUNTDOWN: Timed/snap modes only, shots fired now fall outside the window
- SHOOTING: Shots accepted (the timed window for timed/snap modes)
- DONE: Window closed or session finished, final stats are taken here
"""
from enum import Enum
from dataclasses import dataclass
from typing import Callable, List, Optional
import time
import logging

from .parameters import FiringMode

logger = logging.getLogger(__name__)

WINDOW = "WINDOW"
OUTSIDE = "OUTSIDE"


class ShootingPhase(Enum):
    """Phases of a lane's shooting sequence."""
    SELECT_BULLSEYE = "select_bullseye"
    COUNTDOWN = "countdown"
    SHOOTING = "shooting"
    DONE = "done"


@dataclass
class PhaseConfig:
    """Configuration for the phase machine."""
    firing_mode: str = FiringMode.UNTIMED.value
    countdown_sec: float = 3.0  # Lead-in before the window opens
    time_limit_sec: Optional[float] = None  # Timed window length (None = no limit)
    snap_display_sec: float = 3.0  # How long a snap target stays up

    def __post_init__(self):
        valid = {mode.value for mode in FiringMode}
        if self.firing_mode not in valid:
            raise ValueError(f"Unknown firing mode: {self.firing_mode}")

    @property
    def is_timed(self) -> bool:
        return self.firing_mode != FiringMode.UNTIMED.value

    @property
    def window_sec(self) -> Optional[float]:
        """Length of the shooting window, None when it never closes."""
        if self.firing_mode == FiringMode.SNAP.value:
            return self.snap_display_sec
        if self.firing_mode == FiringMode.TIMED.value:
            return self.time_limit_sec
        return None


TransitionCallback = Callable[[ShootingPhase, ShootingPhase], None]


class PhaseStateMachine:
    """
    Drives a lane through its shooting phases.

    1. SELECT_BULLSEYE -> SHOOTING (untimed) or COUNTDOWN (timed/snap)
    2. COUNTDOWN -> SHOOTING after the countdown
    3. SHOOTING -> DONE when the window expires or on finish()

    Time only advances through update(); pass ``now`` to drive it
    deterministically.
    """

    def __init__(self, config: Optional[PhaseConfig] = None):
        """
        Initialize state machine.

        Args:
            config: Phase configuration
        """
        self.config = config or PhaseConfig()

        self.state = ShootingPhase.SELECT_BULLSEYE
        self.state_start_time = time.time()
        self.state_transitions = 0

        self._listeners: List[TransitionCallback] = []

        logger.info(
            f"PhaseStateMachine initialized: mode={self.config.firing_mode}, "
            f"countdown={self.config.countdown_sec}s, window={self.config.window_sec}"
        )

    def on_transition(self, callback: TransitionCallback) -> None:
        """Register a callback invoked with (old_state, new_state)."""
        self._listeners.append(callback)

    def bullseye_set(self, now: Optional[float] = None) -> ShootingPhase:
        """
        Reference point chosen; start shooting or the countdown.

        Returns:
            New state
        """
        if self.state != ShootingPhase.SELECT_BULLSEYE:
            logger.debug(f"Bullseye moved during {self.state.value}, phase unchanged")
            return self.state

        if self.config.is_timed:
            self._transition_to(ShootingPhase.COUNTDOWN, now)
        else:
            self._transition_to(ShootingPhase.SHOOTING, now)
        return self.state

    def update(self, now: Optional[float] = None) -> ShootingPhase:
        """
        Advance timers.

        Args:
            now: Current time (default: time.time())

        Returns:
            New state
        """
        current_time = time.time() if now is None else now

        # States start when their timer ran out, not when update() noticed
        if self.state == ShootingPhase.COUNTDOWN:
            countdown_end = self.state_start_time + self.config.countdown_sec
            if current_time >= countdown_end:
                self._transition_to(ShootingPhase.SHOOTING, countdown_end)

        if self.state == ShootingPhase.SHOOTING:
            window = self.config.window_sec
            if window is not None:
                window_end = self.state_start_time + window
                if current_time >= window_end:
                    logger.debug(f"Shooting window closed after {window}s")
                    self._transition_to(ShootingPhase.DONE, window_end)

        return self.state

    def finish(self, now: Optional[float] = None) -> ShootingPhase:
        """End the sequence regardless of timers."""
        if self.state != ShootingPhase.DONE:
            self._transition_to(ShootingPhase.DONE, now)
        return self.state

    def _transition_to(self, new_state: ShootingPhase, now: Optional[float] = None) -> None:
        """Transition to new state."""
        old_state = self.state
        logger.debug(f"Phase transition: {old_state.value} → {new_state.value}")
        self.state = new_state
        self.state_start_time = time.time() if now is None else now
        self.state_transitions += 1

        for callback in self._listeners:
            callback(old_state, new_state)

    def accepts_shots(self) -> bool:
        return self.state in (ShootingPhase.COUNTDOWN, ShootingPhase.SHOOTING)

    def time_phase(self) -> Optional[str]:
        """
        Tag for a shot fired now.

        Returns:
            None for untimed mode, else WINDOW inside the window and
            OUTSIDE otherwise
        """
        if not self.config.is_timed:
            return None
        return WINDOW if self.state == ShootingPhase.SHOOTING else OUTSIDE

    def reset(self) -> None:
        """Reset state machine."""
        self.state = ShootingPhase.SELECT_BULLSEYE
        self.state_start_time = time.time()
        logger.info("Phase machine reset")

    def get_stats(self) -> dict:
        return {
            "current_state": self.state.value,
            "state_transitions": self.state_transitions,
            "time_in_state": time.time() - self.state_start_time,
        }
