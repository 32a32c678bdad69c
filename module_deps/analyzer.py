"""
Dependency Analyzer
Runs one analysis: normalize -> build graph -> detect cycles -> resolve duplicates
"""

import logging
from typing import Any, Dict, Iterable, Optional, Tuple

from .config import AnalyzerConfig
from .cycle_detector import CycleDetector
from .duplicate_resolver import DuplicateResolver
from .graph_builder import ModuleGraphBuilder
from .loader import find_descriptor_files, load_descriptors
from .models import AnalysisResult
from .normalizer import DESCRIPTOR_SUFFIX, normalize_descriptor

logger = logging.getLogger(__name__)

class DependencyAnalyzer:
    """Analyzes a set of module descriptors for cycles and redundant dependencies"""

    def __init__(self, suffix: str = DESCRIPTOR_SUFFIX):
        self.suffix = suffix
        self.builder: Optional[ModuleGraphBuilder] = None

    def analyze(self, descriptors: Iterable[Tuple[str, Optional[Dict[str, Any]]]],
                suffix: Optional[str] = None) -> AnalysisResult:
        """Analyze (source, parsed descriptor) pairs"""
        suffix = suffix or self.suffix
        modules = [normalize_descriptor(source, raw, suffix) for source, raw in descriptors]

        self.builder = ModuleGraphBuilder()
        graph = self.builder.build(modules)

        result = AnalysisResult(
            cycles_found=False,
            module_count=graph.number_of_nodes(),
            edge_count=graph.number_of_edges(),
            missing_dependencies={
                name: list(deps) for name, deps in self.builder.missing_dependencies.items()
            }
        )

        chain = CycleDetector(graph).check()
        if chain is not None:
            # Transitive closure is ill-defined on a cyclic graph
            result.cycles_found = True
            result.chain = chain
            return result

        resolver = DuplicateResolver(graph)
        result.duplicates = resolver.resolve_all(self.builder.modules.values())
        logger.info(f"Analysis complete: {result.finding_count} redundant dependencies "
                    f"in {len(result.duplicates)} modules")
        return result

    def analyze_directory(self, base_dir, config: Optional[AnalyzerConfig] = None) -> AnalysisResult:
        """Discover, load and analyze every descriptor below base_dir"""
        config = config or AnalyzerConfig(suffix=self.suffix)
        paths = find_descriptor_files(base_dir, config.suffix)
        logger.info(f"Found {len(paths)} modules in {base_dir}")

        descriptors = load_descriptors(paths, max_workers=config.load_workers,
                                       timeout=config.load_timeout)
        return self.analyze(descriptors, config.suffix)
