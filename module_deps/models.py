"""
Data models shared by the normalizer, graph builder, resolver and reports
"""

from dataclasses import dataclass, field
from typing import Dict, List, Optional


@dataclass
class ModuleDescriptor:
    """One module as declared by its descriptor file"""
    name: str
    source_path: str
    dependencies: List[str] = field(default_factory=list)
    label: Optional[str] = None


@dataclass
class NormalizedModule(ModuleDescriptor):
    """Descriptor whose dependencies are bare module names"""

    @property
    def path(self) -> str:
        return self.source_path


@dataclass
class DuplicateFinding:
    """`module` declares `duplicate` although `owner` already brings it in"""
    module: str
    owner: str
    duplicate: str

    def to_dict(self) -> Dict[str, str]:
        return {'owner': self.owner, 'duplicate': self.duplicate}


@dataclass
class AnalysisResult:
    """Outcome of one analysis run"""
    cycles_found: bool
    chain: List[str] = field(default_factory=list)
    duplicates: Dict[str, List[DuplicateFinding]] = field(default_factory=dict)
    module_count: int = 0
    edge_count: int = 0
    missing_dependencies: Dict[str, List[str]] = field(default_factory=dict)

    @property
    def finding_count(self) -> int:
        return sum(len(findings) for findings in self.duplicates.values())

    def to_dict(self) -> Dict:
        """Render the result in its external output shape"""
        if self.cycles_found:
            return {'cycles_found': True, 'chain': list(self.chain)}

        return {
            'cycles_found': False,
            'duplicates': {
                module: [finding.to_dict() for finding in findings]
                for module, findings in self.duplicates.items()
            }
        }
