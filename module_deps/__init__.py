"""
module_deps - circular and redundant dependency analysis for *.info.yml module trees
"""

from .analyzer import DependencyAnalyzer
from .cycle_detector import CycleDetector
from .duplicate_resolver import DuplicateResolver
from .graph_builder import ModuleGraphBuilder
from .models import AnalysisResult, DuplicateFinding, ModuleDescriptor, NormalizedModule

__version__ = '0.1.0'

__all__ = [
    'DependencyAnalyzer', 'CycleDetector', 'DuplicateResolver', 'ModuleGraphBuilder',
    'AnalysisResult', 'DuplicateFinding', 'ModuleDescriptor', 'NormalizedModule'
]
