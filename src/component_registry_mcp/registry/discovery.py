"""
Component discovery.

Lists the source files matched by the component pattern and groups them into
component units: one unit per directory that has an ``index.*`` entry file,
one unit per file for directories of loose files (hooks, utilities).
"""

import logging
import os
from typing import Dict, List, Optional

from ..constants import DEFAULT_COMPONENT_PATTERN
from ..utils.file_filter import FileFilter
from .types import ComponentUnit

logger = logging.getLogger(__name__)


class ComponentDiscoverer:
    """Groups a file listing into ComponentUnits."""

    def __init__(self, file_filter: Optional[FileFilter] = None):
        self.file_filter = file_filter or FileFilter()

    def discover(self, root_path: str, component_pattern: Optional[str] = None) -> List[ComponentUnit]:
        """
        Discover components under root_path.

        Args:
            root_path: Directory to scan
            component_pattern: Glob pattern (without extension) locating
                component files; defaults to three directory levels

        Returns:
            Component units in listing order (files are listed sorted by path)
        """
        pattern = component_pattern or DEFAULT_COMPONENT_PATTERN
        files = self.file_filter.list_files(root_path, pattern)
        logger.debug(f"Pattern {pattern!r} matched {len(files)} files under {root_path}")

        return self.group_files(files)

    def group_files(self, files: List[str]) -> List[ComponentUnit]:
        """
        Group absolute file paths into component units.

        Args:
            files: Absolute file paths

        Returns:
            Units in first-seen directory order
        """
        dir_to_files: Dict[str, List[str]] = {}
        for file_path in files:
            files_in_dir = dir_to_files.setdefault(os.path.dirname(file_path), [])
            if file_path not in files_in_dir:
                files_in_dir.append(file_path)

        units: List[ComponentUnit] = []
        for directory, files_in_dir in dir_to_files.items():
            has_index = any(os.path.basename(f).startswith('index.') for f in files_in_dir)

            if has_index:
                units.append(ComponentUnit(directory=directory, files=tuple(files_in_dir)))
            else:
                # Loose files register individually
                for file_path in files_in_dir:
                    units.append(ComponentUnit(directory=directory, files=(file_path,), is_file_based=True))

        return units
