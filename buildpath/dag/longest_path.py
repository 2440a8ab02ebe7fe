"""
Longest Path Finder

Longest path in a DAG via dynamic programming over a topological ordering,
with traceback to reconstruct the chain ending at any node.
"""

from typing import Dict, Generic, List, Optional, Tuple
import logging

from .errors import GraphInvariantError, MissingNodeError
from .graph import DirectedGraph, T

logger = logging.getLogger(__name__)


class LongestPathFinder(Generic[T]):
    """
    Computes, for every node, the number of nodes on the longest chain of
    dependees ending at it.

    The dependees of a node are its predecessors in the input graph, i.e.
    its successors in the inverted graph. A node without dependees has a
    length of 1.

    Everything is computed eagerly in the constructor; the finder is
    read-only afterwards.

    Example usage:
        graph = DirectedGraph()
        graph.add("C", "B", "A")
        graph.add("B", "A")

        finder = LongestPathFinder(graph)
        finder.longest_path_lengths    # {"C": 1, "B": 2, "A": 3}
        finder.longest_path()          # ["A", "B", "C"]
    """

    def __init__(self, graph: DirectedGraph[T]):
        """
        Args:
            graph: Acyclic graph to analyse. Not retained.

        Raises:
            CyclicGraphError: If the graph cannot be topologically sorted
        """
        self.inverted_graph: DirectedGraph[T] = graph.invert()
        self.longest_path_lengths: Dict[T, int] = {}

        for node in graph.topo_sort():
            dependees = self.inverted_graph.successors(node)
            if not dependees:
                self.longest_path_lengths[node] = 1
                continue

            longest = 0
            for dependee in dependees:
                dependee_length = self.longest_path_lengths.get(dependee)
                if dependee_length is None:
                    raise GraphInvariantError(
                        f"dependee {dependee!r} of {node!r} visited out of order"
                    )
                longest = max(longest, dependee_length)
            self.longest_path_lengths[node] = longest + 1

        logger.debug(f"Computed longest path lengths for {len(self.longest_path_lengths)} nodes")

    def length_of(self, node: T) -> int:
        """
        Get the recorded longest path length for a node.

        Raises:
            MissingNodeError: If the node was not part of the analysed graph
        """
        try:
            return self.longest_path_lengths[node]
        except KeyError:
            raise MissingNodeError(node, "not tracked by the longest path finder") from None

    def ranked(self) -> List[Tuple[T, int]]:
        """All (node, length) pairs, longest first. Ties keep topological order."""
        return sorted(self.longest_path_lengths.items(), key=lambda item: item[1], reverse=True)

    def longest_path(self) -> List[T]:
        """
        Reconstruct the longest path in the whole graph.

        When several nodes share the maximum length the first one recorded
        wins.

        Raises:
            ValueError: If the graph was empty
        """
        terminal: Optional[T] = None
        terminal_length = 0
        for node, length in self.longest_path_lengths.items():
            if terminal is None or length > terminal_length:
                terminal = node
                terminal_length = length

        if terminal is None:
            raise ValueError("cannot find the longest path of an empty graph")
        return self.longest_path_ending_with(terminal)

    def longest_path_ending_with(self, terminal: T) -> List[T]:
        """
        Reconstruct a longest chain of dependees ending at `terminal`.

        Follows, at each step, the dependee with the greatest recorded length
        (first encountered wins on ties) until a node without dependees.

        Returns:
            Nodes from `terminal` back to the deepest root, both included

        Raises:
            MissingNodeError: If `terminal` was not part of the analysed graph
        """
        self.length_of(terminal)

        path = [terminal]
        current = terminal
        while True:
            dependees = self.inverted_graph.successors(current)
            if not dependees:
                return path

            best: Optional[T] = None
            best_length = 0
            for dependee in dependees:
                length = self.length_of(dependee)
                if best is None or length > best_length:
                    best = dependee
                    best_length = length

            path.append(best)
            current = best
