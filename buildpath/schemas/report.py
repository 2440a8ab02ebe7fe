"""
Path Report Schemas

Ranked longest-path results and their JSON rendering.
"""

import json
from dataclasses import dataclass, field
from typing import Any, Dict, Hashable, List, Optional

from ..dag.longest_path import LongestPathFinder


@dataclass
class PathReport:
    """
    Longest dependency chain ending at one build unit.

    `longest_path` starts with `node` and ends with the deepest prerequisite.
    """
    node: Hashable
    length: int
    longest_path: List[Any] = field(default_factory=list)

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {
            "len": self.length,
            "longestPath": list(self.longest_path),
        }


def rank_longest_paths(finder: LongestPathFinder, top_n: Optional[int] = 10) -> List[PathReport]:
    """
    Rank nodes by longest path length and reconstruct each path.

    Args:
        finder: Analysed graph
        top_n: Number of nodes to report; None for all

    Returns:
        Reports ordered by length, longest first
    """
    ranked = finder.ranked()
    if top_n is not None:
        ranked = ranked[:top_n]

    return [
        PathReport(
            node=node,
            length=length,
            longest_path=finder.longest_path_ending_with(node),
        )
        for node, length in ranked
    ]


def reports_to_dict(reports: List[PathReport]) -> Dict[str, dict]:
    """Key reports by node, keeping rank order."""
    return {str(report.node): report.to_dict() for report in reports}


def render_report(reports: List[PathReport]) -> str:
    """Render reports as indented JSON."""
    return json.dumps(reports_to_dict(reports), indent=2)
