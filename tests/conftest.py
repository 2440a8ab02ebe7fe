"""Shared fixtures for graph and project tree tests."""

import json
from pathlib import Path

import pytest

from buildpath.dag.graph import DirectedGraph


def make_graph(*edges, isolated=()):
    """Build a graph from (source, target) pairs plus isolated nodes."""
    graph = DirectedGraph()
    for source, target in edges:
        graph.add(source, target)
    for node in isolated:
        graph.add(node)
    return graph


@pytest.fixture
def abc_graph():
    """A depends on B and C, B depends on C."""
    return make_graph(("A", "B"), ("B", "C"), ("A", "C"))


@pytest.fixture
def diamond_graph():
    return make_graph(("top", "left"), ("top", "right"), ("left", "bottom"), ("right", "bottom"))


@pytest.fixture
def write_project(tmp_path):
    """Write a tsconfig-style project config under tmp_path."""

    def _write(project_dir, references=None, name="tsconfig.json"):
        directory = tmp_path / project_dir
        directory.mkdir(parents=True, exist_ok=True)
        config = {"compilerOptions": {"composite": True}}
        if references is not None:
            config["references"] = [{"path": ref} for ref in references]
        path = directory / name
        path.write_text(json.dumps(config, indent=2))
        return str(Path(project_dir) / name)

    return _write


@pytest.fixture
def write_project_list(tmp_path):
    def _write(entries, name="tsconfigs.txt"):
        path = tmp_path / name
        path.write_text("\n".join(entries) + "\n")
        return path

    return _write
