"""
Descriptor loading
Finds descriptor files below a directory and parses them concurrently
"""

import os
import logging
from concurrent.futures import ThreadPoolExecutor, TimeoutError as FutureTimeoutError
from pathlib import Path
from typing import Dict, List, Optional, Sequence, Tuple, Union

import yaml

from .errors import DescriptorLoadError
from .normalizer import DESCRIPTOR_SUFFIX

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]


def find_descriptor_files(base_dir: PathLike, suffix: str = DESCRIPTOR_SUFFIX) -> List[Path]:
    """Recursively collect descriptor files below base_dir"""
    root = Path(base_dir)
    if not root.is_dir():
        raise DescriptorLoadError(f"No such directory: {root}", str(root))

    found = []
    # Symlinked directories are not followed
    for dirpath, _dirnames, filenames in os.walk(root):
        for filename in filenames:
            if filename.endswith(suffix):
                found.append(Path(dirpath) / filename)

    return sorted(found)


def load_descriptor(path: PathLike) -> Tuple[str, Dict]:
    """Parse one descriptor file into (source, document)"""
    source = str(path)
    try:
        # Binary mode lets PyYAML report undecodable bytes as a YAMLError
        with open(path, 'rb') as f:
            data = yaml.safe_load(f)
    except OSError as e:
        raise DescriptorLoadError(f"Failed to read {source}: {e}", source) from e
    except yaml.YAMLError as e:
        raise DescriptorLoadError(f"Failed to parse {source}: {e}", source) from e

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise DescriptorLoadError(
            f"Descriptor {source} must be a mapping, got {type(data).__name__}", source
        )

    return source, data


def load_descriptors(paths: Sequence[PathLike], max_workers: int = 8,
                     timeout: Optional[float] = None) -> List[Tuple[str, Dict]]:
    """Load every descriptor, in input order; any failure aborts the load"""
    if not paths:
        return []

    # A timeout must not wait on reads that are still hung
    executor = ThreadPoolExecutor(max_workers=max_workers)
    try:
        results = list(executor.map(load_descriptor, paths, timeout=timeout))
    except FutureTimeoutError:
        executor.shutdown(wait=False, cancel_futures=True)
        raise DescriptorLoadError(f"Loading {len(paths)} descriptors timed out after {timeout}s") from None
    except Exception:
        executor.shutdown(wait=False, cancel_futures=True)
        raise
    executor.shutdown()

    logger.info(f"Loaded {len(results)} descriptors")
    return results
