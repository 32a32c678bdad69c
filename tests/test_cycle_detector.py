"""Tests for cycle detection."""

import networkx as nx
import pytest

from module_deps.cycle_detector import CycleDetector
from module_deps.errors import CycleFoundError

from conftest import build_graph


def _assert_closed_chain(graph, chain):
    assert len(chain) >= 2
    assert chain[0] == chain[-1]
    for source, target in zip(chain, chain[1:]):
        assert graph.has_edge(source, target)


class TestOverallOrder:
    def test_dependencies_precede_dependents(self):
        graph = build_graph({"a": ["b", "c"], "b": ["c", "d"], "c": ["d"], "d": []}).graph
        order = CycleDetector(graph).overall_order()
        position = {name: i for i, name in enumerate(order)}
        assert set(order) == set(graph.nodes)
        for module, dependency in graph.edges:
            assert position[dependency] < position[module]

    def test_isolated_modules_included(self):
        graph = build_graph({"a": [], "b": []}).graph
        assert sorted(CycleDetector(graph).overall_order()) == ["a", "b"]

    def test_cycle_raises_with_chain(self):
        graph = build_graph({"a": ["b"], "b": ["a"]}).graph
        with pytest.raises(CycleFoundError) as exc:
            CycleDetector(graph).overall_order()
        _assert_closed_chain(graph, exc.value.chain)
        assert set(exc.value.chain) == {"a", "b"}


class TestCheck:
    def test_acyclic(self):
        graph = build_graph({"a": ["b", "c"], "b": ["c"], "c": []}).graph
        assert CycleDetector(graph).check() is None

    def test_two_module_cycle(self):
        graph = build_graph({"a": ["b"], "b": ["a"]}).graph
        chain = CycleDetector(graph).check()
        assert chain in (["a", "b", "a"], ["b", "a", "b"])

    def test_self_dependency(self):
        graph = build_graph({"a": ["a"], "b": []}).graph
        assert CycleDetector(graph).check() == ["a", "a"]

    def test_long_cycle(self):
        graph = build_graph({"a": ["b"], "b": ["c"], "c": ["d"], "d": ["a"], "e": ["a"]}).graph
        chain = CycleDetector(graph).check()
        _assert_closed_chain(graph, chain)
        assert len(chain) == 5

    def test_shortcut_gives_shorter_chain(self):
        # a -> b -> c -> d -> a with a chord d -> b
        graph = nx.DiGraph([("a", "b"), ("b", "c"), ("c", "d"), ("d", "a"), ("d", "b")])
        chain = CycleDetector(graph).check()
        _assert_closed_chain(graph, chain)
        assert len(chain) == 4
        assert set(chain) == {"b", "c", "d"}

    def test_cycle_logged(self, caplog):
        graph = build_graph({"a": ["b"], "b": ["a"]}).graph
        CycleDetector(graph).check()
        assert "cyclical dependency" in caplog.text

    def test_other_errors_propagate(self, monkeypatch):
        graph = build_graph({"a": []}).graph

        def broken(_graph):
            raise nx.NetworkXError("boom")

        monkeypatch.setattr(nx, "topological_sort", broken)
        with pytest.raises(nx.NetworkXError):
            CycleDetector(graph).check()


class TestStronglyConnectedComponents:
    def test_components(self):
        graph = build_graph({"a": ["b"], "b": ["a"], "c": ["c"], "d": ["a"]}).graph
        sccs = CycleDetector(graph).find_strongly_connected_components()
        assert sccs == [["a", "b"], ["c"]]

    def test_dag_has_none(self):
        graph = build_graph({"a": ["b"], "b": []}).graph
        assert CycleDetector(graph).find_strongly_connected_components() == []
