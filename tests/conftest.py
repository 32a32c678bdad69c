"""Shared fixtures: descriptor trees written into tmp_path."""

from pathlib import Path

import pytest
import yaml

from module_deps.normalizer import normalize_descriptor
from module_deps.graph_builder import ModuleGraphBuilder


def write_module(root: Path, name: str, dependencies=None, subdir: str = "", **extra) -> Path:
    """Write <root>/<subdir>/<name>/<name>.info.yml and return its path."""
    directory = root / subdir / name if subdir else root / name
    directory.mkdir(parents=True, exist_ok=True)
    document = {"name": name.title(), "type": "module", **extra}
    if dependencies is not None:
        document["dependencies"] = list(dependencies)
    path = directory / f"{name}.info.yml"
    path.write_text(yaml.safe_dump(document), encoding="utf-8")
    return path


def descriptors_for(modules: dict) -> list:
    """(source, raw) pairs for a {name: [deps]} mapping."""
    return [
        (f"modules/{name}/{name}.info.yml", {"name": name, "dependencies": deps})
        for name, deps in modules.items()
    ]


def build_graph(modules: dict):
    builder = ModuleGraphBuilder()
    normalized = [normalize_descriptor(source, raw) for source, raw in descriptors_for(modules)]
    builder.build(normalized)
    return builder


@pytest.fixture
def module_tree(tmp_path):
    """Factory writing a {name: [deps]} mapping as a descriptor tree."""
    def _make(modules: dict) -> Path:
        for name, deps in modules.items():
            write_module(tmp_path, name, deps)
        return tmp_path
    return _make
