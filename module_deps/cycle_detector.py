"""
Cycle Detector
Proves a module graph acyclic through a global topological order, or reports
the offending dependency chain
"""

import networkx as nx
from typing import List, Optional
import logging

from .errors import CycleFoundError

logger = logging.getLogger(__name__)

class CycleDetector:
    """Detects dependency cycles in a module graph"""

    def __init__(self, graph: nx.DiGraph):
        self.graph = graph

    def overall_order(self) -> List[str]:
        """Order modules so that every dependency precedes its dependents

        Raises CycleFoundError carrying a closed chain when no order exists.
        """
        try:
            # Edges point from module to dependency, so sort the reverse view
            return list(nx.topological_sort(self.graph.reverse(copy=False)))
        except nx.NetworkXUnfeasible:
            raise CycleFoundError(self._find_cycle_chain()) from None

    def check(self) -> Optional[List[str]]:
        """Return None for an acyclic graph, otherwise one cycle chain"""
        try:
            self.overall_order()
        except CycleFoundError as e:
            logger.warning(f"Found cyclical dependency: {' -> '.join(e.chain)}")
            return e.chain
        return None

    def _find_cycle_chain(self) -> List[str]:
        """Find a cycle and shorten it to the tightest loop through its members"""
        edges = nx.find_cycle(self.graph)
        members = [edge[0] for edge in edges]

        best = members + [members[0]]
        for node in members:
            if self.graph.has_edge(node, node):
                return [node, node]
            for successor in self.graph.successors(node):
                try:
                    path = nx.shortest_path(self.graph, successor, node)
                except nx.NetworkXNoPath:
                    continue
                if len(path) + 1 < len(best):
                    best = [node] + path

        return best

    def find_strongly_connected_components(self) -> List[List[str]]:
        """Find groups of modules that depend on each other"""
        significant_sccs = []
        for scc in nx.strongly_connected_components(self.graph):
            if len(scc) > 1:
                significant_sccs.append(sorted(scc))
            elif len(scc) == 1:
                # Check for self-loops
                node = next(iter(scc))
                if self.graph.has_edge(node, node):
                    significant_sccs.append([node])

        logger.info(f"Found {len(significant_sccs)} strongly connected components")
        return sorted(significant_sccs, key=lambda scc: (-len(scc), scc))
