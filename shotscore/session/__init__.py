"""
Session module - session parameters, shooting phases, and lanes.
"""
from .parameters import (
    SessionType,
    FiringMode,
    ESA_OPTIONS,
    valid_firing_modes,
    is_firing_mode_valid,
)
from .phase import (
    ShootingPhase,
    PhaseConfig,
    PhaseStateMachine,
)
from .lane import Lane
from .config_loader import (
    LaneDefaults,
    build_lane_defaults,
    build_phase_config,
    configure_logging,
    load_session_settings,
)

__all__ = [
    "SessionType",
    "FiringMode",
    "ESA_OPTIONS",
    "valid_firing_modes",
    "is_firing_mode_valid",
    "ShootingPhase",
    "PhaseConfig",
    "PhaseStateMachine",
    "Lane",
    "LaneDefaults",
    "build_lane_defaults",
    "build_phase_config",
    "configure_logging",
    "load_session_settings",
]
