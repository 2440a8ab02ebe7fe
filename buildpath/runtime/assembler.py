"""
Graph Assembler

Builds the project dependency graph from project configs.
"""

import os
from typing import Iterable
import logging

from ..config.loader import ProjectLoader, resolve_reference
from ..dag.graph import DirectedGraph

logger = logging.getLogger(__name__)


def project_id(project_file: str) -> str:
    """Identify a project by the directory holding its config."""
    return os.path.dirname(os.path.normpath(project_file)) or "."


def assemble_dependency_graph(
    project_files: Iterable[str],
    loader: ProjectLoader
) -> DirectedGraph[str]:
    """
    Build a graph with an edge from each project to every project it references.

    Every listed project becomes a node, including projects without
    references.

    Args:
        project_files: Config locations, relative to the loader's base directory
        loader: Loader used to read each config

    Returns:
        Graph of project -> prerequisite projects

    Raises:
        ValueError: If a config cannot be loaded
    """
    graph: DirectedGraph[str] = DirectedGraph()

    for project_file in project_files:
        project = project_id(project_file)
        config = loader.load(project_file)
        graph.add(project)

        if config.references is None:
            logger.warning(f"{project_file} has no references section")
            continue

        prerequisites = []
        for ref in config.references:
            resolved = resolve_reference(project, ref.path)
            if resolved == project:
                logger.warning(f"{project_file} references itself, skipping")
                continue
            prerequisites.append(resolved)

        graph.add(project, *prerequisites)
        logger.debug(f"{project} -> {prerequisites}")

    logger.info(f"Assembled graph: {len(graph)} projects, {graph.edge_count} references")
    return graph
