"""
Runtime Module

Graph assembly, analysis orchestration and the command line entry point.
"""

from .analyzer import BuildPathAnalyzer
from .assembler import assemble_dependency_graph, project_id

__all__ = [
    "BuildPathAnalyzer",
    "assemble_dependency_graph",
    "project_id",
]
