"""
Error taxonomy for module dependency analysis
Callers dispatch on the exception type, never on the message text
"""

from typing import List, Optional, Sequence


class ModuleDepsError(Exception):
    """Base class for every error raised by module_deps"""


class GraphError(ModuleDepsError):
    """Misuse of the dependency graph API"""


class MissingNodeError(GraphError):
    """An edge refers to a module that is not a node of the graph"""

    def __init__(self, node: str):
        super().__init__(f"Node does not exist: {node}")
        self.node = node


class DuplicateModuleError(GraphError):
    """Two descriptors resolve to the same module name"""

    def __init__(self, name: str, paths: Sequence[Optional[str]] = ()):
        locations = ", ".join(p for p in paths if p)
        message = f"Module '{name}' is declared more than once"
        if locations:
            message += f" ({locations})"
        super().__init__(message)
        self.name = name
        self.paths = list(paths)


class CycleFoundError(ModuleDepsError):
    """The graph has no topological order"""

    def __init__(self, chain: List[str]):
        super().__init__(f"Dependency Cycle Found: {' -> '.join(chain)}")
        self.chain = chain


class DescriptorLoadError(ModuleDepsError):
    """A descriptor file could not be found, read or parsed"""

    def __init__(self, message: str, path: Optional[str] = None):
        super().__init__(message)
        self.path = path


class ConfigError(ModuleDepsError):
    """Invalid configuration value"""
