"""
Descriptor Normalizer
Turns a parsed descriptor document into a NormalizedModule
"""

import os
import logging
from typing import Any, Dict, List, Optional

from .models import NormalizedModule

logger = logging.getLogger(__name__)

DESCRIPTOR_SUFFIX = '.info.yml'


def module_name_from_source(source: str, suffix: str = DESCRIPTOR_SUFFIX) -> str:
    """Derive the module name from a descriptor path"""
    basename = os.path.basename(source)
    if suffix and basename.endswith(suffix):
        return basename[:-len(suffix)]
    return basename


def normalize_dependency_name(raw: Any) -> str:
    """Reduce 'project:module (>=2.0)' to 'module'"""
    # A name without ':' splits into itself
    bare = str(raw).split(':')[-1].strip()
    return bare.split(' ')[0]


def normalize_descriptor(source: str, raw: Optional[Dict[str, Any]],
                         suffix: str = DESCRIPTOR_SUFFIX) -> NormalizedModule:
    """Build the normalized module for one parsed descriptor"""
    data = raw or {}
    declared = data.get('dependencies') or []

    if not isinstance(declared, (list, tuple)):
        logger.warning(f"Ignoring non-list dependencies in {source}: {declared!r}")
        declared = []

    # A bare "- ~" entry names nothing
    dependencies: List[str] = [normalize_dependency_name(dep) for dep in declared if dep is not None]
    label = data.get('name')

    return NormalizedModule(
        name=module_name_from_source(source, suffix),
        source_path=source,
        dependencies=dependencies,
        label=str(label) if label is not None else None
    )
