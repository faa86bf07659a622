"""
Analysis module - group statistics, performance remarks, and reports.
"""
from .stats import (
    WINDOW_PHASE,
    filter_scoring_shots,
    calculate_mpi,
    group_size,
    score_shots,
    compute_stats,
)
from .remarks import (
    PerformanceRemark,
    get_performance_remark,
    should_show_remarks,
)
from .report import build_report, save_report

__all__ = [
    "WINDOW_PHASE",
    "filter_scoring_shots",
    "calculate_mpi",
    "group_size",
    "score_shots",
    "compute_stats",
    "PerformanceRemark",
    "get_performance_remark",
    "should_show_remarks",
    "build_report",
    "save_report",
]
