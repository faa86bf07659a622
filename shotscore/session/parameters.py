"""
Shooting session parameters (session types, firing modes, ESA options).
"""
from enum import Enum
from typing import List, Optional


class SessionType(Enum):
    GROUPING = "grouping"
    ZEROING = "zeroing"
    PRACTICE = "practice"
    TEST = "test"


class FiringMode(Enum):
    UNTIMED = "untimed"
    TIMED = "timed"
    SNAP = "snap"


ESA_OPTIONS = (5, 6, 18, 20, 24, 32, 35, 40, 48, 60, 64, 96)


def valid_firing_modes(session_type: Optional[str]) -> List[FiringMode]:
    """
    Firing modes allowed for a session type.

    Grouping and zeroing are untimed or timed only; other sessions allow
    every mode.
    """
    if session_type in (SessionType.GROUPING.value, SessionType.ZEROING.value):
        return [FiringMode.UNTIMED, FiringMode.TIMED]
    return list(FiringMode)


def is_firing_mode_valid(firing_mode: str, session_type: Optional[str]) -> bool:
    return any(mode.value == firing_mode for mode in valid_firing_modes(session_type))
