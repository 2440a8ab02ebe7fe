"""
Schemas Module

Report types produced by an analysis run.
"""

from .report import PathReport, rank_longest_paths, render_report, reports_to_dict

__all__ = [
    "PathReport",
    "rank_longest_paths",
    "render_report",
    "reports_to_dict",
]
