"""
Build Path Analyzer

Coordinates one analysis run: loads the project list, assembles and
validates the dependency graph, and ranks projects by their deepest chain
of prerequisite builds.
"""

from typing import Any, Dict, List
import logging

from ..config.loader import ProjectLoader
from ..config.settings import AnalysisConfig
from ..dag.errors import CyclicGraphError
from ..dag.graph import DirectedGraph
from ..dag.longest_path import LongestPathFinder
from ..schemas.report import PathReport, rank_longest_paths
from .assembler import assemble_dependency_graph

logger = logging.getLogger(__name__)


class BuildPathAnalyzer:
    """
    Runs the longest dependency chain analysis for a project list.

    The analyzer:
    1. Loads the project list and each project's references
    2. Builds the project -> prerequisites graph and inverts it
    3. Optionally restricts it to one project and everything depending on it
    4. Rejects cyclic graphs
    5. Computes longest path lengths for every project

    Example usage:
        analyzer = BuildPathAnalyzer(AnalysisConfig(
            projects_file=Path("tsconfigs.txt"),
            base_dir=Path("."),
        ))
        for report in analyzer.run():
            print(report.node, report.length, report.longest_path)
    """

    def __init__(self, config: AnalysisConfig):
        """
        Args:
            config: Analysis settings

        Raises:
            ValueError: If the project list or a config cannot be loaded, or
                `config.root` is not a known project
            CyclicGraphError: If the projects reference each other in a cycle
        """
        self.config = config
        loader = ProjectLoader(config.base_dir)

        logger.info("creating graph")
        project_files = loader.load_project_list(config.projects_file)
        dep_graph = assemble_dependency_graph(project_files, loader).invert()

        if config.root is not None:
            dep_graph = self._restrict_to_dependents(dep_graph, config.root)

        if dep_graph.is_cyclic():
            raise CyclicGraphError(
                "cyclic dependency graph: project references form a cycle"
            )
        self.graph: DirectedGraph[str] = dep_graph

        if config.graphviz is not None:
            config.graphviz.write_text(dep_graph.print_as_graphvis(), encoding="utf-8")
            logger.info(f"Wrote graphviz dump to {config.graphviz}")

        logger.info("discovering the longest path")
        self.finder: LongestPathFinder[str] = LongestPathFinder(dep_graph)

    @staticmethod
    def _restrict_to_dependents(dep_graph: DirectedGraph[str], root: str) -> DirectedGraph[str]:
        if root not in dep_graph:
            raise ValueError(f"Unknown root project: {root}")
        reachable = dep_graph.walk(root)
        logger.info(f"Restricting analysis to {len(reachable)} projects depending on {root}")
        return dep_graph.subgraph(reachable)

    def run(self) -> List[PathReport]:
        """Rank projects by longest chain of prerequisites, up to `top_n`."""
        return rank_longest_paths(self.finder, self.config.top_n)

    def summary(self) -> Dict[str, Any]:
        """
        Get graph metrics.

        Returns:
            Dictionary with project/reference counts and the overall longest path
        """
        longest = self.finder.longest_path() if len(self.graph) else []
        return {
            "projects": len(self.graph),
            "references": self.graph.edge_count,
            "longest_path_length": len(longest),
            "longest_path": longest,
        }
