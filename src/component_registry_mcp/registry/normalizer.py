"""
Import path normalization utilities.

This module provides the string-level helpers the dependency classifier
applies to every import literal: extraction from source text, Unicode
normalization, the shared-utils ignore rule, npm package name derivation and
the local UI component convention.
"""

import logging
import re
import unicodedata
from typing import Iterator, Optional

logger = logging.getLogger(__name__)

# Matches the module literal after `import` or `from`. Also matches
# `export ... from '...'` re-exports and ignores comments; both are accepted.
IMPORT_PATTERN = re.compile(r'''(?:import|from)\s+['"]([^'"]+)['"]''')

# shadcn-vue style UI components: '@/components/ui/button' -> 'button'
UI_COMPONENT_PATTERN = re.compile(r'(?:^|/)components/ui/([^/]+)')

# Shared utility module, e.g. '@/lib/utils'
IGNORE_UTILS_PATTERN = re.compile(r'(?:^|/)lib/utils$')


class ImportNormalizer:
    """Import literal helpers for the JavaScript/Vue ecosystem."""

    def extract_imports(self, content: str) -> Iterator[str]:
        """Yield every import-like module literal found in source text."""
        for match in IMPORT_PATTERN.finditer(content):
            yield match.group(1)

    def normalize(self, import_path: str) -> str:
        """Apply NFKC normalization so equivalent encodings compare equal."""
        return unicodedata.normalize('NFKC', import_path)

    def is_relative(self, import_path: str) -> bool:
        return import_path.startswith('.')

    def is_ignored(self, import_path: str) -> bool:
        """Check for the shared utils module, which is never tracked."""
        return IGNORE_UTILS_PATTERN.search(import_path) is not None

    def get_package_name(self, import_path: str) -> str:
        """
        Extract the npm package name from an import path.

        Args:
            import_path: Full import path, e.g. '@vue/runtime-core/dist' or 'lodash/es'

        Returns:
            '@scope/name' for scoped packages, otherwise the first path segment
        """
        if import_path.startswith('@'):
            parts = import_path.split('/')
            if len(parts) >= 2 and parts[0] and parts[1]:
                return f"{parts[0]}/{parts[1]}"
            return import_path

        return import_path.split('/')[0]

    def get_ui_component_name(self, import_path: str) -> Optional[str]:
        """Return the component segment of a 'components/ui/<name>' import, if any."""
        match = UI_COMPONENT_PATTERN.search(import_path)
        if match and match.group(1):
            return match.group(1)
        return None
