"""
Graph Errors

Two families of failures:
- GraphInvariantError: a defect in the caller or a broken graph invariant.
  Never recovered from; it aborts the computation.
- CyclicGraphError: the input is not a DAG. Callers report it to the user
  instead of printing a partial ranking.
"""

from typing import Any, Iterable, List


class GraphInvariantError(AssertionError):
    """A graph contract was violated"""


class MissingNodeError(GraphInvariantError):
    """
    A node that must exist in the graph is absent.

    Raised instead of treating the node as having no successors, since every
    node referenced by an edge is guaranteed to have its own entry.
    """

    def __init__(self, node: Any, context: str = ""):
        self.node = node
        message = f"missing node: {node!r}"
        if context:
            message = f"{message} ({context})"
        super().__init__(message)


class CyclicGraphError(ValueError):
    """
    The graph contains a cycle, so no topological ordering exists.

    Attributes:
        remaining: Nodes that could not be placed in the ordering
    """

    def __init__(self, message: str, remaining: Iterable[Any] = ()):
        self.remaining: List[Any] = list(remaining)
        super().__init__(message)
