"""
Performance remarks derived from accuracy.
"""
from dataclasses import dataclass
from typing import Optional

TEST_SESSION = "test"


@dataclass(frozen=True)
class PerformanceRemark:
    """Rating band for an accuracy value."""
    rating: str
    description: str


def should_show_remarks(session_type: Optional[str]) -> bool:
    """Only test sessions carry classification remarks."""
    return session_type == TEST_SESSION


def get_performance_remark(accuracy: Optional[float], session_type: Optional[str] = None) -> PerformanceRemark:
    """
    Rate an accuracy percentage.

    Test sessions use the qualification bands (MARKSMAN / FIRST CLASS /
    SECOND CLASS / FAILED); every other session type gets the general
    practice bands.

    Args:
        accuracy: Accuracy in percent (None counts as 0)
        session_type: Session type value, e.g. "test" or "practice"

    Returns:
        PerformanceRemark
    """
    acc = accuracy or 0

    if should_show_remarks(session_type):
        if acc > 70:
            return PerformanceRemark("MARKSMAN", ">70%")
        if acc >= 60:
            return PerformanceRemark("FIRST CLASS", "70%-60%")
        if acc >= 40:
            return PerformanceRemark("SECOND CLASS", "60%-40%")
        return PerformanceRemark("FAILED", "<40%")

    if acc >= 90:
        return PerformanceRemark("EXPERT MARKSMAN", ">=90%")
    if acc >= 75:
        return PerformanceRemark("SKILLED SHOOTER", ">=75%")
    if acc >= 50:
        return PerformanceRemark("IMPROVING SHOOTER", ">=50%")
    return PerformanceRemark("BEGINNER LEVEL", "<50%")
