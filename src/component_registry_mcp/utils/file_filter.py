"""
Centralized file filtering logic for the Component Registry MCP server.

This module provides the filesystem listing capability used by discovery and
by the registry builder: glob matching restricted to the valid source
extensions, with dependency and build directories excluded through
gitignore-style patterns.
"""

import glob
import os
from pathlib import Path
from typing import Iterable, List, Optional

import pathspec

from ..constants import FILTER_CONFIG


class FileFilter:
    """Centralized file filtering logic."""

    def __init__(self, additional_excludes: Optional[Iterable[str]] = None,
                 extensions: Optional[Iterable[str]] = None):
        """
        Initialize the file filter.

        Args:
            additional_excludes: Additional directory names to exclude
            extensions: Valid source extensions (without the dot); defaults to
                the configured set
        """
        self.exclude_dirs = set(FILTER_CONFIG["exclude_directories"])
        if additional_excludes:
            self.exclude_dirs.update(additional_excludes)

        self.extensions = [ext.lstrip('.') for ext in (extensions or FILTER_CONFIG["valid_extensions"])]

        # "node_modules/" matches the directory and everything below it, at any depth
        self._exclude_spec = pathspec.PathSpec.from_lines(
            'gitignore', [f"{name}/" for name in sorted(self.exclude_dirs)]
        )

    def is_valid_source_file(self, file_path: str) -> bool:
        """Check whether the file has one of the valid source extensions."""
        suffix = Path(file_path).suffix.lower().lstrip('.')
        return suffix in self.extensions

    def is_excluded(self, relative_path: str) -> bool:
        """Check a path relative to the listing base against the excluded directories."""
        return self._exclude_spec.match_file(relative_path.replace('\\', '/'))

    def list_files(self, base_path: str, pattern: str) -> List[str]:
        """
        List absolute paths under base_path matching '<pattern>.<ext>'.

        Args:
            base_path: Directory to search
            pattern: Glob pattern without extension, e.g. '*/*/*' or '**/*'

        Returns:
            Sorted, deduplicated absolute file paths
        """
        base = os.path.abspath(base_path)
        matches = set()

        for ext in self.extensions:
            for rel_path in glob.glob(f"{pattern}.{ext}", root_dir=base, recursive=True):
                if self.is_excluded(rel_path):
                    continue
                full_path = os.path.join(base, rel_path)
                if os.path.isfile(full_path):
                    matches.add(os.path.normpath(full_path))

        return sorted(matches)
