"""
Directed Graph

Adjacency-set graph over arbitrary hashable node identifiers.
Supports inversion, in-degree computation, cycle detection, topological
ordering (Kahn's algorithm), reachability walks and subgraph extraction.
"""

from collections import deque
from typing import Dict, Generic, Hashable, Iterable, Iterator, List, Set, TypeVar
import logging

from .errors import CyclicGraphError, MissingNodeError

logger = logging.getLogger(__name__)

T = TypeVar("T", bound=Hashable)


class DirectedGraph(Generic[T]):
    """
    Directed graph stored as a mapping of node -> set of successor nodes.

    Every node that appears anywhere in the graph, as a source or as the
    target of an edge, has its own entry in `edges` (possibly with an empty
    successor set). Operations rely on this and raise MissingNodeError when
    it does not hold.

    Example usage:
        graph = DirectedGraph()
        graph.add("app", "lib", "utils")
        graph.add("lib", "utils")

        graph.topo_sort()       # ["app", "lib", "utils"]
        graph.invert().edges    # {"app": set(), "lib": {"app"}, "utils": {"app", "lib"}}
    """

    def __init__(self):
        self.edges: Dict[T, Set[T]] = {}

    def add(self, source: T, *targets: T) -> None:
        """
        Add edges from `source` to each of `targets`.

        Both ends are registered as nodes. Repeated calls merge into the
        existing successor set, so adding the same edge twice is a no-op.
        """
        successors = self.edges.get(source)
        if successors is None:
            successors = set()
            self.edges[source] = successors
        successors.update(targets)
        for target in targets:
            if target not in self.edges:
                self.edges[target] = set()

    def successors(self, node: T) -> Set[T]:
        """
        Get the direct successors of a node.

        Raises:
            MissingNodeError: If the node is not part of the graph
        """
        try:
            return self.edges[node]
        except KeyError:
            raise MissingNodeError(node) from None

    @property
    def nodes(self) -> List[T]:
        return list(self.edges)

    @property
    def edge_count(self) -> int:
        return sum(len(successors) for successors in self.edges.values())

    def invert(self) -> "DirectedGraph[T]":
        """
        Return a new graph with every edge reversed.

        Isolated nodes are kept. The receiver is not modified.
        """
        inverted: DirectedGraph[T] = DirectedGraph()
        for node, successors in self.edges.items():
            inverted.add(node)
            for successor in successors:
                inverted.add(successor, node)
        return inverted

    def indegrees(self) -> Dict[T, int]:
        """
        Count incoming edges for every node.

        Nodes without incoming edges are included with a count of 0.
        """
        in_degree = {node: 0 for node in self.edges}
        for node, successors in self.edges.items():
            for successor in successors:
                if successor not in in_degree:
                    raise MissingNodeError(successor, f"edge target of {node!r}")
                in_degree[successor] += 1
        return in_degree

    def is_cyclic(self) -> bool:
        """
        Detect cycles using an iterative depth-first walk.

        A walk is started from every node not yet fully explored by an
        earlier walk. Reaching a node that is still open on the current walk
        means a back edge, i.e. a cycle (self loops included).

        Returns:
            True if the graph contains at least one cycle
        """
        explored: Set[T] = set()

        for start in self.edges:
            if start in explored:
                continue

            on_walk = {start}
            stack = [(start, iter(self.successors(start)))]
            while stack:
                node, children = stack[-1]
                for child in children:
                    if child in on_walk:
                        logger.debug(f"Cycle detected: {node!r} -> {child!r}")
                        return True
                    if child not in explored:
                        on_walk.add(child)
                        stack.append((child, iter(self.successors(child))))
                        break
                else:
                    stack.pop()
                    on_walk.discard(node)
                    explored.add(node)

        return False

    def topo_sort(self) -> List[T]:
        """
        Compute a topological ordering using Kahn's algorithm.

        Algorithm:
        1. Collect nodes with in-degree 0 as sources
        2. Pop a source (most recently added first) and append it
        3. Decrement the in-degree of its successors
        4. Promote successors reaching in-degree 0 to sources

        Among several available sources the pick is unspecified; only the
        edge order is guaranteed.

        Raises:
            CyclicGraphError: If the graph has no source, or not every node
                could be ordered
        """
        in_degree = self.indegrees()
        if not in_degree:
            return []

        sources = [node for node, count in in_degree.items() if count == 0]
        if not sources:
            raise CyclicGraphError(
                "a DAG must have at least one source (a node with an in-degree of 0)",
                remaining=in_degree,
            )

        ordering: List[T] = []
        while sources:
            node = sources.pop()
            ordering.append(node)
            for successor in self.successors(node):
                in_degree[successor] -= 1
                if in_degree[successor] == 0:
                    sources.append(successor)

        if len(ordering) != len(self.edges):
            remaining = [node for node, count in in_degree.items() if count > 0]
            raise CyclicGraphError(
                f"Graph has a cycle! No topological ordering exists. "
                f"Unordered nodes: {remaining}",
                remaining=remaining,
            )

        return ordering

    def walk(self, start: T) -> Set[T]:
        """
        Breadth-first reachability closure following outgoing edges.

        Returns:
            Every node reachable from `start`, `start` included

        Raises:
            MissingNodeError: If `start` is not part of the graph
        """
        if start not in self.edges:
            raise MissingNodeError(start, "walk start")

        seen = {start}
        to_visit = deque([start])
        while to_visit:
            node = to_visit.popleft()
            for successor in self.successors(node):
                if successor not in seen:
                    seen.add(successor)
                    to_visit.append(successor)
        return seen

    def subgraph(self, keep: Iterable[T]) -> "DirectedGraph[T]":
        """Restrict the graph to `keep`, dropping edges to or from other nodes."""
        keep = set(keep)
        subgraph: DirectedGraph[T] = DirectedGraph()
        for node, successors in self.edges.items():
            if node not in keep:
                continue
            subgraph.add(node, *(s for s in successors if s in keep))
        return subgraph

    def print_as_graphvis(self) -> str:
        """Render the graph in Graphviz dot syntax (debugging aid)."""
        lines = ["digraph G {"]
        for node, successors in self.edges.items():
            lines.append(f'  "{node}"')
            for successor in successors:
                lines.append(f'  "{node}" -> "{successor}"')
        lines.append("}")
        return "\n".join(lines) + "\n"

    def __contains__(self, node: object) -> bool:
        return node in self.edges

    def __iter__(self) -> Iterator[T]:
        return iter(self.edges)

    def __len__(self) -> int:
        return len(self.edges)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, DirectedGraph):
            return NotImplemented
        return self.edges == other.edges

    def __repr__(self) -> str:
        return f"DirectedGraph(nodes={len(self)}, edges={self.edge_count})"
