"""
DAG Module

Directed graph primitives and longest-path analysis.
"""

from .errors import CyclicGraphError, GraphInvariantError, MissingNodeError
from .graph import DirectedGraph
from .longest_path import LongestPathFinder

__all__ = [
    "DirectedGraph",
    "LongestPathFinder",
    "CyclicGraphError",
    "GraphInvariantError",
    "MissingNodeError",
]
