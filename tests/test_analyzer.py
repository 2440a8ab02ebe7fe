"""Tests for graph assembly, analysis and reporting over real project trees."""

import json
import logging
import os

import pytest

from buildpath.config.loader import ProjectLoader
from buildpath.config.settings import AnalysisConfig
from buildpath.dag.errors import CyclicGraphError
from buildpath.dag.longest_path import LongestPathFinder
from buildpath.runtime.analyzer import BuildPathAnalyzer
from buildpath.runtime.assembler import assemble_dependency_graph, project_id
from buildpath.schemas.report import PathReport, rank_longest_paths, render_report
from conftest import make_graph

P = os.path.normpath


@pytest.fixture
def monorepo(write_project, write_project_list):
    """
    types <- util <- core <- api <- web
    core <- cli, docs standalone
    """
    files = [
        write_project("packages/types", references=[]),
        write_project("packages/util", references=["../types"]),
        write_project("packages/core", references=["../util", "../types/tsconfig.json"]),
        write_project("packages/api", references=["../core", "../util"]),
        write_project("apps/web", references=["../../packages/api"]),
        write_project("apps/cli", references=["../../packages/core"]),
        write_project("docs"),
    ]
    return write_project_list(files)


class TestAssembler:

    def test_project_id(self):
        assert project_id("packages/app/tsconfig.json") == P("packages/app")
        assert project_id("tsconfig.json") == "."

    def test_edges_point_to_prerequisites(self, tmp_path, monorepo):
        loader = ProjectLoader(tmp_path)
        graph = assemble_dependency_graph(loader.load_project_list(monorepo), loader)

        assert graph.successors(P("packages/core")) == {P("packages/util"), P("packages/types")}
        assert graph.successors(P("apps/web")) == {P("packages/api")}
        assert graph.successors(P("packages/types")) == set()
        assert len(graph) == 7
        assert graph.edge_count == 7

    def test_project_without_references_section(self, tmp_path, write_project, caplog):
        loader = ProjectLoader(tmp_path)
        with caplog.at_level(logging.WARNING):
            graph = assemble_dependency_graph([write_project("docs")], loader)

        assert graph.edges == {"docs": set()}
        assert "no references section" in caplog.text

    def test_self_reference_is_skipped(self, tmp_path, write_project):
        loader = ProjectLoader(tmp_path)
        graph = assemble_dependency_graph([write_project("lib", references=["."])], loader)

        assert graph.edges == {"lib": set()}

    def test_config_error_propagates(self, tmp_path):
        with pytest.raises(ValueError, match="Failed to load"):
            assemble_dependency_graph(["missing/tsconfig.json"], ProjectLoader(tmp_path))


class TestReport:

    def test_rank_and_render(self, abc_graph):
        finder = LongestPathFinder(abc_graph.invert())
        reports = rank_longest_paths(finder, top_n=2)

        assert reports == [
            PathReport(node="A", length=3, longest_path=["A", "B", "C"]),
            PathReport(node="B", length=2, longest_path=["B", "C"]),
        ]
        assert json.loads(render_report(reports)) == {
            "A": {"len": 3, "longestPath": ["A", "B", "C"]},
            "B": {"len": 2, "longestPath": ["B", "C"]},
        }

    def test_no_limit(self):
        finder = LongestPathFinder(make_graph(("X", "Y"), isolated=["Z"]).invert())

        assert len(rank_longest_paths(finder, top_n=None)) == 3

    def test_render_keeps_rank_order(self, abc_graph):
        reports = rank_longest_paths(LongestPathFinder(abc_graph.invert()))

        assert list(json.loads(render_report(reports))) == ["A", "B", "C"]


class TestBuildPathAnalyzer:

    def test_ranks_deepest_project_first(self, tmp_path, monorepo):
        analyzer = BuildPathAnalyzer(AnalysisConfig(projects_file=monorepo, base_dir=tmp_path))
        reports = analyzer.run()

        assert reports[0].node == P("apps/web")
        assert reports[0].length == 5
        assert reports[0].longest_path == [
            P("apps/web"), P("packages/api"), P("packages/core"), P("packages/util"), P("packages/types"),
        ]
        lengths = {report.node: report.length for report in reports}
        assert lengths[P("apps/cli")] == 4
        assert lengths["docs"] == 1
        assert lengths[P("packages/types")] == 1

    def test_top_n(self, tmp_path, monorepo):
        config = AnalysisConfig(projects_file=monorepo, base_dir=tmp_path, top_n=2)

        assert [report.length for report in BuildPathAnalyzer(config).run()] == [5, 4]

    def test_summary(self, tmp_path, monorepo):
        summary = BuildPathAnalyzer(AnalysisConfig(projects_file=monorepo, base_dir=tmp_path)).summary()

        assert summary["projects"] == 7
        assert summary["references"] == 7
        assert summary["longest_path_length"] == 5
        assert summary["longest_path"][0] == P("apps/web")

    def test_root_restricts_to_dependents(self, tmp_path, monorepo):
        config = AnalysisConfig(projects_file=monorepo, base_dir=tmp_path, root=P("packages/core"))
        reports = BuildPathAnalyzer(config).run()

        assert {report.node for report in reports} == {
            P("packages/core"), P("packages/api"), P("apps/web"), P("apps/cli"),
        }
        assert reports[0].longest_path == [P("apps/web"), P("packages/api"), P("packages/core")]

    def test_unknown_root(self, tmp_path, monorepo):
        config = AnalysisConfig(projects_file=monorepo, base_dir=tmp_path, root="nowhere")

        with pytest.raises(ValueError, match="Unknown root project"):
            BuildPathAnalyzer(config)

    def test_graphviz_dump(self, tmp_path, monorepo):
        dump = tmp_path / "graph.dot"
        BuildPathAnalyzer(AnalysisConfig(projects_file=monorepo, base_dir=tmp_path, graphviz=dump))

        text = dump.read_text()
        assert text.startswith("digraph G {")
        assert f'"{P("packages/types")}" -> "{P("packages/util")}"' in text

    def test_cycle_is_reported(self, tmp_path, write_project, write_project_list):
        projects = write_project_list([
            write_project("a", references=["../b"]),
            write_project("b", references=["../a"]),
        ])

        with pytest.raises(CyclicGraphError, match="cyclic dependency graph"):
            BuildPathAnalyzer(AnalysisConfig(projects_file=projects, base_dir=tmp_path))

    def test_empty_project_list(self, tmp_path, write_project_list):
        analyzer = BuildPathAnalyzer(AnalysisConfig(projects_file=write_project_list([]), base_dir=tmp_path))

        assert analyzer.run() == []
        assert analyzer.summary()["longest_path"] == []
