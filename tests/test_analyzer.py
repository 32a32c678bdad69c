"""End-to-end tests for one analysis run."""

import pytest

from module_deps.analyzer import DependencyAnalyzer
from module_deps.config import AnalyzerConfig
from module_deps.errors import DescriptorLoadError, DuplicateModuleError
from module_deps.models import DuplicateFinding

from conftest import descriptors_for, write_module


class TestAnalyze:
    def test_redundant_dependency(self):
        result = DependencyAnalyzer().analyze(descriptors_for({
            "a": ["b", "c"], "b": ["c"], "c": [],
        }))
        assert result.cycles_found is False
        assert result.chain == []
        assert result.duplicates == {
            "a": [DuplicateFinding(module="a", owner="b", duplicate="c")]
        }
        assert result.to_dict() == {
            "cycles_found": False,
            "duplicates": {"a": [{"owner": "b", "duplicate": "c"}]},
        }

    def test_cycle_skips_duplicate_analysis(self):
        result = DependencyAnalyzer().analyze(descriptors_for({
            "a": ["b"], "b": ["a"], "c": ["d", "e"], "d": ["e"], "e": [],
        }))
        assert result.cycles_found is True
        assert result.chain in (["a", "b", "a"], ["b", "a", "b"])
        assert result.duplicates == {}
        assert result.to_dict() == {"cycles_found": True, "chain": result.chain}

    def test_undiscovered_dependency(self):
        result = DependencyAnalyzer().analyze(descriptors_for({"a": ["x"]}))
        assert result.cycles_found is False
        assert result.duplicates == {}
        assert result.missing_dependencies == {"a": ["x"]}
        assert result.module_count == 1
        assert result.edge_count == 0

    def test_namespaced_dependencies(self):
        result = DependencyAnalyzer().analyze([
            ("m/a.info.yml", {"dependencies": ["drupal:b", "drupal:c (>=2.0)"]}),
            ("m/b.info.yml", {"dependencies": ["drupal:c"]}),
            ("m/c.info.yml", {}),
        ])
        assert result.duplicates["a"][0].owner == "b"
        assert result.duplicates["a"][0].duplicate == "c"

    def test_idempotent(self):
        descriptors = descriptors_for({
            "a": ["b", "c", "d"], "b": ["c"], "c": ["d"], "d": [], "e": ["a", "d"],
        })
        analyzer = DependencyAnalyzer()
        assert analyzer.analyze(descriptors) == analyzer.analyze(descriptors)

    def test_input_order_does_not_matter(self):
        modules = {"a": ["b", "c"], "b": ["c"], "c": [], "d": ["a", "c"]}
        forward = DependencyAnalyzer().analyze(descriptors_for(modules))
        backward = DependencyAnalyzer().analyze(list(reversed(descriptors_for(modules))))
        assert forward == backward

    def test_duplicate_module_names_are_fatal(self):
        with pytest.raises(DuplicateModuleError):
            DependencyAnalyzer().analyze([
                ("one/a.info.yml", {}),
                ("two/a.info.yml", {}),
            ])

    def test_empty_input(self):
        result = DependencyAnalyzer().analyze([])
        assert result.cycles_found is False
        assert result.duplicates == {}
        assert result.module_count == 0


class TestAnalyzeDirectory:
    def test_tree(self, module_tree):
        root = module_tree({"a": ["project:b", "project:c"], "b": ["project:c"], "c": None})
        analyzer = DependencyAnalyzer()
        result = analyzer.analyze_directory(root)
        assert result.module_count == 3
        assert result.duplicates["a"] == [DuplicateFinding(module="a", owner="b", duplicate="c")]
        assert analyzer.builder.graph.nodes["a"]["path"].endswith("a.info.yml")

    def test_custom_suffix(self, tmp_path):
        (tmp_path / "a.deps.yml").write_text("dependencies:\n  - b\n", encoding="utf-8")
        (tmp_path / "b.deps.yml").write_text("dependencies:\n  - a\n", encoding="utf-8")
        result = DependencyAnalyzer().analyze_directory(tmp_path, AnalyzerConfig(suffix=".deps.yml"))
        assert result.cycles_found is True

    def test_broken_descriptor_aborts(self, tmp_path):
        write_module(tmp_path, "a", ["b"])
        (tmp_path / "b.info.yml").write_text("dependencies: [unclosed\n", encoding="utf-8")
        with pytest.raises(DescriptorLoadError):
            DependencyAnalyzer().analyze_directory(tmp_path)
