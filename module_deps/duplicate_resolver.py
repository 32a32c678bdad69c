"""
Duplicate Resolver
Finds direct dependencies that another direct dependency of the same module
already provides transitively. Only meaningful on an acyclic graph.
"""

import networkx as nx
from typing import Dict, Iterable, List, Optional, Sequence, Set, Tuple
import logging

from .models import DuplicateFinding, NormalizedModule

logger = logging.getLogger(__name__)

class DuplicateResolver:
    """Detects redundant direct dependencies"""

    def __init__(self, graph: nx.DiGraph):
        self.graph = graph

    def find_duplicate_owner(self, dependency: str,
                             candidates: Sequence[Optional[str]]) -> Optional[str]:
        """Return the candidate whose dependency closure contains `dependency`

        Candidates are searched in order, each one depth-first through its own
        dependencies. A candidate equal to `dependency` is a repeated
        declaration and is its own owner. Returns None when no candidate
        reaches `dependency` or when `dependency` is not part of the graph.
        """
        if dependency not in self.graph:
            return None

        visited: Set[str] = {dependency}

        for candidate in candidates:
            if candidate is None:
                continue
            if candidate == dependency:
                return candidate
            if candidate in visited or candidate not in self.graph:
                continue

            visited.add(candidate)
            stack = list(reversed(list(self.graph.successors(candidate))))
            while stack:
                node = stack.pop()
                if node == dependency:
                    return candidate
                if node in visited:
                    continue
                visited.add(node)
                stack.extend(reversed(list(self.graph.successors(node))))

        return None

    def resolve_module(self, module_name: str,
                       dependencies: Sequence[str]) -> List[DuplicateFinding]:
        """Find redundant dependencies declared by one module"""
        if len(dependencies) < 2:
            return []

        findings: List[DuplicateFinding] = []
        seen: Set[Tuple[str, str]] = set()

        for index, dependency in enumerate(dependencies):
            # Only this position is excluded; a repeated entry stays a sibling
            siblings = list(dependencies[:index]) + list(dependencies[index + 1:])
            owner = self.find_duplicate_owner(dependency, siblings)
            if owner is None or (owner, dependency) in seen:
                continue

            seen.add((owner, dependency))
            findings.append(DuplicateFinding(module=module_name, owner=owner, duplicate=dependency))

        return findings

    def resolve_all(self, modules: Iterable[NormalizedModule]) -> Dict[str, List[DuplicateFinding]]:
        """Resolve every module, keeping only those with findings"""
        duplicates: Dict[str, List[DuplicateFinding]] = {}

        for module in sorted(modules, key=lambda m: m.name):
            findings = self.resolve_module(module.name, module.dependencies)
            if findings:
                duplicates[module.name] = findings
                logger.debug(f"{module.name}: {len(findings)} redundant dependencies")

        logger.info(f"Found redundant dependencies in {len(duplicates)} modules")
        return duplicates
