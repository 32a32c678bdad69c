"""
Module Graph Builder
Accumulates normalized module descriptors into a networkx dependency graph
"""

import networkx as nx
from typing import Dict, Iterable, List
import logging

from .errors import DuplicateModuleError, MissingNodeError
from .models import NormalizedModule

logger = logging.getLogger(__name__)

class ModuleGraphBuilder:
    """Builds a module -> dependency graph from normalized descriptors"""

    def __init__(self):
        self.graph = nx.DiGraph()
        self.modules: Dict[str, NormalizedModule] = {}
        self.missing_dependencies: Dict[str, List[str]] = {}

    def add_module(self, module: NormalizedModule):
        """Add a module as a node of the graph"""
        if self.graph.has_node(module.name):
            existing = self.modules.get(module.name)
            raise DuplicateModuleError(
                module.name,
                [existing.path if existing else None, module.path]
            )

        self.graph.add_node(module.name, path=module.path, label=module.label)
        self.modules[module.name] = module

    def add_dependency(self, module_name: str, dependency: str):
        """Add a module -> dependency edge between two existing nodes"""
        # networkx would create missing nodes on add_edge
        for node in (module_name, dependency):
            if not self.graph.has_node(node):
                raise MissingNodeError(node)

        self.graph.add_edge(module_name, dependency)

    def build(self, modules: Iterable[NormalizedModule]) -> nx.DiGraph:
        """Add every module, then every dependency edge"""
        # Edge validity depends on node existence, so all nodes go in first
        for module in sorted(modules, key=lambda m: m.name):
            self.add_module(module)

        for name, module in self.modules.items():
            for dependency in module.dependencies:
                try:
                    self.add_dependency(name, dependency)
                except MissingNodeError as e:
                    # Dependencies outside the discovered set are expected
                    if e.node != dependency:
                        raise
                    logger.debug(f"Skipping dependency {name} -> {dependency}: not discovered")
                    self.missing_dependencies.setdefault(name, []).append(dependency)

        logger.info(f"Built dependency graph with {self.graph.number_of_nodes()} modules "
                    f"and {self.graph.number_of_edges()} dependencies")
        return self.graph

    def get_graph_stats(self) -> Dict:
        """Get statistics about the dependency graph"""
        node_count = self.graph.number_of_nodes()
        return {
            'total_modules': node_count,
            'total_dependencies': self.graph.number_of_edges(),
            'missing_dependencies': sum(len(deps) for deps in self.missing_dependencies.values()),
            'is_connected': nx.is_weakly_connected(self.graph) if node_count > 0 else False,
            'density': nx.density(self.graph),
            'average_degree': sum(dict(self.graph.degree()).values()) / node_count if node_count > 0 else 0
        }

    def get_module_dependencies(self, module_name: str) -> List[str]:
        """Get direct dependencies of a module that are part of the graph"""
        if module_name in self.graph:
            return list(self.graph.successors(module_name))
        return []

    def get_module_dependents(self, module_name: str) -> List[str]:
        """Get modules that depend on this module"""
        if module_name in self.graph:
            return list(self.graph.predecessors(module_name))
        return []
