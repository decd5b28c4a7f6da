"""
Registry type inference from file paths.

A path relative to the scan root is split into segments which are searched
from the filename towards the root; the deepest segment that names a known
directory kind wins, so ``blocks/forms/ui/input.vue`` is a UI file even though
it lives under a block directory.
"""

import logging
import os
import threading
from typing import Dict, List, Mapping, Optional

from .types import RegistryTag, RegistryType

logger = logging.getLogger(__name__)


# Directory name -> registry type, singular and plural forms
TYPE_MAP: Dict[str, RegistryType] = {
    # Library/Utility types
    'lib': RegistryType.LIB,

    # Block/Component types
    'block': RegistryType.BLOCK,
    'blocks': RegistryType.BLOCK,
    'component': RegistryType.COMPONENT,
    'components': RegistryType.COMPONENT,

    # UI components
    'ui': RegistryType.UI,

    # Vue composition
    'hook': RegistryType.HOOK,
    'composable': RegistryType.COMPOSABLE,
    'composables': RegistryType.COMPOSABLE,

    # Page/Route types
    'page': RegistryType.PAGE,
    'pages': RegistryType.PAGE,

    # File/Asset types
    'file': RegistryType.FILE,
    'files': RegistryType.FILE,

    # Styling/Theme types
    'theme': RegistryType.THEME,
    'style': RegistryType.STYLE,

    # Generic item type
    'item': RegistryType.ITEM,
}


def split_path(path: str) -> List[str]:
    """Split a relative path on both '/' and the platform separator."""
    return path.replace(os.sep, '/').split('/')


class PathClassifier:
    """
    Maps relative paths to registry tags.

    Lookups are memoised in a cache owned by the instance, so two classifiers
    never share state. The cache is guarded by a lock because the registry
    builder shares one classifier between worker threads.
    """

    def __init__(self, type_map: Optional[Mapping[str, RegistryType]] = None):
        self._type_map: Dict[str, RegistryType] = dict(type_map if type_map is not None else TYPE_MAP)
        self._cache: Dict[str, RegistryTag] = {}
        self._lock = threading.Lock()

    def classify(self, relative_path: str) -> RegistryTag:
        """
        Determine the registry tag for a path relative to the scan root.

        Args:
            relative_path: Path such as 'ui/button/index.vue'

        Returns:
            Tag of the right-most mapped segment, otherwise one derived from the
            first segment ('registry:<segment>' when that is unmapped too)
        """
        with self._lock:
            cached = self._cache.get(relative_path)
        if cached is not None:
            return cached

        tag = self._classify_impl(relative_path)

        with self._lock:
            self._cache[relative_path] = tag
        return tag

    def _classify_impl(self, relative_path: str) -> RegistryTag:
        segments = split_path(relative_path)

        for segment in reversed(segments):
            registry_type = self._type_map.get(segment)
            if registry_type is not None:
                return RegistryTag.known(registry_type)

        fallback = segments[0]
        logger.debug(f"No registry type for {relative_path!r}, falling back to {fallback!r}")
        return RegistryTag.unrecognized(fallback)

    def cache_size(self) -> int:
        with self._lock:
            return len(self._cache)

    def clear_cache(self) -> None:
        """Clear memoised results."""
        with self._lock:
            self._cache.clear()
